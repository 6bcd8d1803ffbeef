"""Verify client invite use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.domain.error import (
    FailedPreconditionError,
    UnauthenticatedError,
    ValidationError,
)
from cleartrack.domain.service import InviteService, UserService
from cleartrack.domain.value import Caller, InviteId


class VerifyClientInviteRequest(BaseModel):
    """Request to redeem a client invite.

    Either ``mobile`` (code entry) or ``invite_id`` (invite link) identifies
    the invite.
    """

    caller: Caller | None = None
    code: str
    mobile: str | None = None
    invite_id: str | None = None


class VerifyClientInviteResponse(BaseModel):
    """Response after linking the client to the practitioner."""

    practitioner_id: str
    invite_id: str


class VerifyClientInviteUseCase(BaseUseCase):
    """Use case for a client redeeming an invite code."""

    def __init__(
        self, invite_service: InviteService, user_service: UserService
    ) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
            user_service: User domain service
        """
        self.invite_service = invite_service
        self.user_service = user_service

    async def execute(
        self, request: VerifyClientInviteRequest
    ) -> VerifyClientInviteResponse:
        """Verify and claim the invite, then link the caller to its issuer.

        Raises:
            UnauthenticatedError: If there is no caller
            ValidationError: If the input is missing or malformed
            NotFoundError: If no invite matches
            ExpiredError: If the invite has expired
            AlreadyUsedError: If the invite was already redeemed
        """
        if request.caller is None:
            raise UnauthenticatedError()
        if not request.code.strip():
            raise ValidationError("Mobile and code are required")

        client_id = request.caller.user_id
        with logfire.span("verify_client_invite", client_id=str(client_id)):
            if request.invite_id:
                try:
                    invite_id = InviteId(UUID(request.invite_id))
                except ValueError:
                    raise ValidationError("Invalid invite link")
                invite = await self.invite_service.verify_client_invite_by_id(
                    invite_id, request.code
                )
            elif request.mobile:
                invite = await self.invite_service.verify_client_invite(
                    request.mobile, request.code
                )
            else:
                raise ValidationError("Mobile and code are required")

            if invite.issuer_id is None:
                raise FailedPreconditionError("Invite has no issuing practitioner")

            await self.invite_service.claim_invite(invite, client_id)
            await self.user_service.link_client_to_practitioner(
                client_id, invite.issuer_id
            )

            logfire.info(
                "Client linked by invite",
                client_id=str(client_id),
                invite_id=str(invite.id),
            )
            return VerifyClientInviteResponse(
                practitioner_id=str(invite.issuer_id),
                invite_id=str(invite.id),
            )
