"""Create client invite use case."""

from datetime import datetime, timedelta

import logfire
from pydantic import BaseModel

from cleartrack.application.message import client_invite_link, client_invite_sms
from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.config import Settings
from cleartrack.domain.model import ClientInvitePayload
from cleartrack.domain.service import InviteService, NotificationService, UserService
from cleartrack.domain.value import Caller, InviteKind, UserRole


class CreateClientInviteRequest(BaseModel):
    """Request to invite a client."""

    caller: Caller | None = None
    mobile: str | None = None
    client_name: str | None = None
    note: str | None = None


class CreateClientInviteResponse(BaseModel):
    """Response after creating a client invite."""

    invite_id: str
    code: str
    invite_link: str
    expires_at: datetime
    sms_sent: bool


class CreateClientInviteUseCase(BaseUseCase):
    """Use case for a practitioner inviting a client by code."""

    def __init__(
        self,
        invite_service: InviteService,
        user_service: UserService,
        notification_service: NotificationService,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
            user_service: User domain service
            notification_service: Notification domain service
            settings: Application settings
        """
        self.invite_service = invite_service
        self.user_service = user_service
        self.notification_service = notification_service
        self.settings = settings

    async def execute(
        self, request: CreateClientInviteRequest
    ) -> CreateClientInviteResponse:
        """Create the invite and text the code to the client's mobile.

        Raises:
            UnauthenticatedError: If there is no caller
            PermissionDeniedError: If the caller is not a practitioner
            ValidationError: If the mobile number is malformed
        """
        practitioner = await self.user_service.require_role(
            request.caller, UserRole.PRACTITIONER
        )

        with logfire.span("create_client_invite", practitioner_id=str(practitioner.id)):
            invitations = self.settings.invitations
            invite = await self.invite_service.create_invite(
                kind=InviteKind.CLIENT,
                match_key=request.mobile,
                issuer_id=practitioner.id,
                payload=ClientInvitePayload(
                    client_name=request.client_name or None,
                    note=request.note or None,
                ),
                ttl=timedelta(hours=invitations.client_ttl_hours),
                code_length=invitations.client_code_length,
            )

            link = client_invite_link(
                self.settings.api.frontend_url, str(invite.id), invite.code
            )

            sms_sent = False
            if invite.match_key:
                sms_sent = await self.notification_service.send_sms(
                    invite.match_key, client_invite_sms(invite.code, link)
                )

            return CreateClientInviteResponse(
                invite_id=str(invite.id),
                code=invite.code,
                invite_link=link,
                expires_at=invite.expires_at,
                sms_sent=sms_sent,
            )
