"""Email/password identity domain service."""

from uuid import uuid4

import logfire

from cleartrack.domain.error import (
    AlreadyExistsError,
    UnauthenticatedError,
    ValidationError,
)
from cleartrack.domain.model import Credential
from cleartrack.domain.repository import CredentialRepository
from cleartrack.domain.value import EmailAddress, UserId
from cleartrack.util.password import hash_password, verify_password

from .base import Service


class IdentityService(Service):
    """Domain service for account creation and password login."""

    def __init__(self, credential_repository: CredentialRepository) -> None:
        """Initialize identity service.

        Args:
            credential_repository: Credential repository
        """
        self.credential_repository = credential_repository

    async def exists(self, email: str) -> bool:
        """Whether an account is registered for ``email``."""
        credential = await self.credential_repository.find_by_email(
            email.strip().lower()
        )
        return credential is not None

    async def create_account(self, email: str, password: str) -> UserId:
        """Create an account and return its new user ID.

        Args:
            email: Login email
            password: Plain-text password, hashed before storage

        Returns:
            New user ID

        Raises:
            ValidationError: If the email is malformed
            AlreadyExistsError: If an account exists for the email
        """
        try:
            normalized = EmailAddress(email).root
        except ValueError:
            raise ValidationError("Invalid email address")

        with logfire.span("identity_service.create_account"):
            if await self.credential_repository.find_by_email(normalized):
                logfire.warn("Account already exists")
                raise AlreadyExistsError("An account with this email already exists")

            user_id = UserId(uuid4())
            await self.credential_repository.save(
                Credential(
                    user_id=user_id,
                    email=normalized,
                    password_hash=hash_password(password),
                )
            )
            logfire.info("Account created", user_id=str(user_id))
            return user_id

    async def authenticate(self, email: str, password: str) -> UserId:
        """Check an email/password pair.

        Returns:
            The account's user ID

        Raises:
            UnauthenticatedError: If the email is unknown or the password wrong
        """
        with logfire.span("identity_service.authenticate"):
            credential = await self.credential_repository.find_by_email(
                email.strip().lower()
            )
            if credential is None or not verify_password(
                password, credential.password_hash
            ):
                logfire.warn("Login failed")
                raise UnauthenticatedError("Invalid email or password")

            logfire.info("Login succeeded", user_id=str(credential.user_id))
            return credential.user_id
