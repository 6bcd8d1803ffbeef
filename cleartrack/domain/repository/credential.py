"""Credential repository interface."""

from abc import ABC, abstractmethod

from cleartrack.domain.model.credential import Credential


class CredentialRepository(ABC):
    """Repository for identity provider credentials."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Credential | None:
        """Find the credential for a lower-cased email."""
        pass

    @abstractmethod
    async def save(self, credential: Credential) -> Credential:
        """Create a credential.

        Raises:
            AlreadyExistsError: If a credential exists for the email
        """
        pass
