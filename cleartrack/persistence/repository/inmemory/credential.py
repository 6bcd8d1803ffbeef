"""In-memory credential repository for testing."""

from cleartrack.domain.error import AlreadyExistsError
from cleartrack.domain.model import Credential
from cleartrack.domain.repository.credential import CredentialRepository


class InMemoryCredentialRepository(CredentialRepository):
    """In-memory implementation of CredentialRepository for testing."""

    def __init__(self) -> None:
        self._credentials: dict[str, Credential] = {}

    async def find_by_email(self, email: str) -> Credential | None:
        return self._credentials.get(email)

    async def save(self, credential: Credential) -> Credential:
        if credential.email in self._credentials:
            raise AlreadyExistsError("An account with this email already exists")
        self._credentials[credential.email] = credential
        return credential
