"""Verify practitioner invite use case."""

from uuid import UUID

from pydantic import BaseModel

from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.domain.error import NotFoundError, ValidationError
from cleartrack.domain.model import Invite, PractitionerInvitePayload
from cleartrack.domain.service import InviteService
from cleartrack.domain.value import InviteId


class VerifyPractitionerInviteRequest(BaseModel):
    """Token and code from the registration link."""

    token: str
    code: str


class VerifyPractitionerInviteResponse(BaseModel):
    """Applicant details for the registration form."""

    valid: bool
    email: str
    first_name: str
    last_name: str
    practice_name: str


def parse_registration_token(token: str, code: str) -> InviteId:
    """Check a token/code pair is present and turn the token into an ID.

    Raises:
        ValidationError: If either value is empty
        NotFoundError: If the token is not an invite ID
    """
    if not token.strip() or not code.strip():
        raise ValidationError("Token and code are required")
    try:
        return InviteId(UUID(token.strip()))
    except ValueError:
        raise NotFoundError("Invite", token, "Invalid registration link")


def practitioner_payload(invite: Invite) -> PractitionerInvitePayload:
    if not isinstance(invite.payload, PractitionerInvitePayload):
        raise NotFoundError("Invite", str(invite.id), "Invalid registration link")
    return invite.payload


class VerifyPractitionerInviteUseCase(BaseUseCase):
    """Use case for checking a registration link before showing the form."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(
        self, request: VerifyPractitionerInviteRequest
    ) -> VerifyPractitionerInviteResponse:
        """Verify the invite without consuming it.

        Raises:
            ValidationError: If token or code is missing
            NotFoundError: If the token is unknown
            PermissionDeniedError: If the code is wrong
            ExpiredError: If the invite has expired
            AlreadyUsedError: If registration was already completed
        """
        token = parse_registration_token(request.token, request.code)
        invite = await self.invite_service.verify_practitioner_invite(
            token, request.code
        )
        payload = practitioner_payload(invite)
        return VerifyPractitionerInviteResponse(
            valid=True,
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            practice_name=payload.practice_name,
        )
