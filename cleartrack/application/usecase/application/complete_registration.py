"""Complete practitioner registration use case."""

import logfire
from pydantic import BaseModel

from cleartrack.application.usecase.application.verify_practitioner_invite import (
    parse_registration_token,
    practitioner_payload,
)
from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.config import Settings
from cleartrack.domain.error import (
    AlreadyExistsError,
    AlreadyUsedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cleartrack.domain.model import PractitionerProfile, User
from cleartrack.domain.service import (
    ApplicationService,
    IdentityService,
    InviteService,
    UserService,
)
from cleartrack.domain.value import UserRole
from cleartrack.util.code import generate_code

PRACTITIONER_CODE_PREFIX = "PRAC"


class CompleteRegistrationRequest(BaseModel):
    """Registration link plus the chosen password."""

    token: str
    code: str
    password: str


class CompleteRegistrationResponse(BaseModel):
    """The new practitioner account."""

    user_id: str
    email: str
    practitioner_code: str


class CompleteRegistrationUseCase(BaseUseCase):
    """Use case for an approved applicant creating their account.

    All writes happen in the request transaction: if any step fails, the
    invite claim, credential and profile are rolled back together.
    """

    def __init__(
        self,
        invite_service: InviteService,
        identity_service: IdentityService,
        user_service: UserService,
        application_service: ApplicationService,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
            identity_service: Identity domain service
            user_service: User domain service
            application_service: Application domain service
            settings: Application settings
        """
        self.invite_service = invite_service
        self.identity_service = identity_service
        self.user_service = user_service
        self.application_service = application_service
        self.settings = settings

    async def execute(
        self, request: CompleteRegistrationRequest
    ) -> CompleteRegistrationResponse:
        """Consume the invite and provision the practitioner.

        Raises:
            ValidationError: If an input is missing or the password is short
            NotFoundError: If the token is unknown
            PermissionDeniedError: If the code is wrong or the link was used
            ExpiredError: If the invite has expired
            AlreadyExistsError: If an account exists for the applicant's email
        """
        if not request.password:
            raise ValidationError("Token, code, and password are required")
        token = parse_registration_token(request.token, request.code)
        min_length = self.settings.auth.min_password_length
        if len(request.password) < min_length:
            raise ValidationError(
                f"Password must be at least {min_length} characters"
            )

        with logfire.span("complete_registration", token=str(token)[:8] + "..."):
            try:
                invite = await self.invite_service.verify_practitioner_invite(
                    token, request.code
                )
            except (AlreadyUsedError, PermissionDeniedError):
                raise PermissionDeniedError("Invalid or used registration link")

            payload = practitioner_payload(invite)
            email = payload.email

            if await self.user_service.find_by_email(
                email
            ) or await self.identity_service.exists(email):
                logfire.warn("Registration for existing account", invite_id=str(token))
                raise AlreadyExistsError("An account with this email already exists")

            user_id = await self.identity_service.create_account(
                email, request.password
            )

            try:
                await self.invite_service.claim_invite(invite, user_id)
            except AlreadyUsedError:
                raise PermissionDeniedError("Invalid or used registration link")

            try:
                application = await self.application_service.get_by_id(
                    payload.application_id
                )
            except NotFoundError:
                application = None

            profile = PractitionerProfile(
                practitioner_code=PRACTITIONER_CODE_PREFIX + generate_code(6),
                practice_name=payload.practice_name,
                practice_number=application.practice_number if application else None,
                sars_number=application.sars_number if application else None,
                years_experience=application.years_experience if application else 0,
                qualifications=application.qualifications if application else "",
                specializations=(
                    application.specializations if application else frozenset()
                ),
                bio=(application.bio or "") if application else "",
                phone=application.phone if application else "",
                is_publicly_visible=False,
                rotation_index=0,
            )
            await self.user_service.save(
                User(
                    id=user_id,
                    role=UserRole.PRACTITIONER,
                    email=email,
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                    practitioner=profile,
                )
            )

            logfire.info(
                "Practitioner registered",
                user_id=str(user_id),
                practitioner_code=profile.practitioner_code,
            )
            return CompleteRegistrationResponse(
                user_id=str(user_id),
                email=email,
                practitioner_code=profile.practitioner_code,
            )
