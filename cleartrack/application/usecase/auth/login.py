"""Login use case."""

import logfire
from pydantic import BaseModel

from cleartrack.domain.service import IdentityService, JWTService, UserService
from cleartrack.domain.value import UserRole


class LoginRequest(BaseModel):
    """Email and password submitted by the login form."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    user_id: str
    role: UserRole


class LoginUseCase:
    """Use case for email/password login."""

    def __init__(
        self,
        identity_service: IdentityService,
        jwt_service: JWTService,
        user_service: UserService,
    ) -> None:
        """Initialize login use case.

        Args:
            identity_service: Identity domain service
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.identity_service = identity_service
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Check the credentials and issue a session token.

        Accounts without a profile yet (e.g. created out of band) get a
        client profile on first login.

        Raises:
            UnauthenticatedError: If the email or password is wrong
        """
        with logfire.span("login"):
            user_id = await self.identity_service.authenticate(
                request.email, request.password
            )
            user = await self.user_service.ensure_client(user_id)
            token = self.jwt_service.create_token(user.id, user.email)
            return LoginResponse(token=token, user_id=str(user.id), role=user.role)
