"""Session token domain service."""

from uuid import UUID

import logfire

from cleartrack.config import AuthSettings
from cleartrack.domain.value import Caller, UserId
from cleartrack.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and checks the session token stored in the auth cookie."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId, email: str | None) -> str:
        """Create a session token for a user."""
        with logfire.span("jwt_service.create_token", user_id=str(user_id)):
            token = create_token(str(user_id), email, self.auth_settings)
            logfire.info("JWT token created", user_id=str(user_id))
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and return its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            logfire.info("JWT token verified", user_id=payload.user_id)
            return payload

    def get_caller(self, token: str | None) -> Caller | None:
        """Resolve the caller behind a token, None if missing or invalid.

        Routes call this to authenticate optionally; the use cases decide
        whether an anonymous caller is acceptable.
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return Caller(user_id=UserId(UUID(payload.user_id)), email=payload.email)
        except (JWTError, ValueError) as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
