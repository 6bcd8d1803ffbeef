"""Client signup use case."""

import logfire
from pydantic import BaseModel

from cleartrack.config import Settings
from cleartrack.domain.error import ValidationError
from cleartrack.domain.model import User
from cleartrack.domain.service import IdentityService, JWTService, UserService
from cleartrack.domain.value import UserRole


class SignupRequest(BaseModel):
    """New client account details."""

    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None


class SignupResponse(BaseModel):
    """Signup response."""

    token: str
    user_id: str


class SignupUseCase:
    """Use case for a client creating an account.

    Practitioners do not sign up here; their accounts come from an approved
    application's registration link.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        jwt_service: JWTService,
        user_service: UserService,
        settings: Settings,
    ) -> None:
        self.identity_service = identity_service
        self.jwt_service = jwt_service
        self.user_service = user_service
        self.settings = settings

    async def execute(self, request: SignupRequest) -> SignupResponse:
        """Create the account and client profile, then log the user in.

        Raises:
            ValidationError: If the email is malformed or the password short
            AlreadyExistsError: If the email is already registered
        """
        min_length = self.settings.auth.min_password_length
        if len(request.password) < min_length:
            raise ValidationError(
                f"Password must be at least {min_length} characters"
            )

        with logfire.span("signup"):
            user_id = await self.identity_service.create_account(
                request.email, request.password
            )
            user = await self.user_service.save(
                User(
                    id=user_id,
                    role=UserRole.CLIENT,
                    email=request.email.strip().lower(),
                    first_name=request.first_name or None,
                    last_name=request.last_name or None,
                )
            )
            token = self.jwt_service.create_token(user.id, user.email)
            return SignupResponse(token=token, user_id=str(user.id))
