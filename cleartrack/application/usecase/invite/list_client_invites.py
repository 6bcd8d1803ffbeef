"""List client invites use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.domain.service import InviteService, UserService
from cleartrack.domain.value import Caller, InviteKind, InviteStatus, UserRole


class ListClientInvitesRequest(BaseModel):
    """Request to list the caller's client invites."""

    caller: Caller | None = None
    status: InviteStatus | None = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ClientInviteItem(BaseModel):
    """Client invite in a listing (the code is not repeated)."""

    invite_id: str
    mobile: str | None
    client_name: str | None
    status: InviteStatus
    created_at: datetime
    expires_at: datetime
    client_id: str | None


class ListClientInvitesResponse(BaseModel):
    """Response with issued invites, newest first."""

    invites: list[ClientInviteItem]


class ListClientInvitesUseCase(BaseUseCase):
    """Use case for a practitioner reviewing the invites they issued."""

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
        self, request: ListClientInvitesRequest
    ) -> ListClientInvitesResponse:
        practitioner = await self.user_service.require_role(
            request.caller, UserRole.PRACTITIONER
        )
        invites = await self.invite_service.list_issued_invites(
            practitioner.id,
            InviteKind.CLIENT,
            status=request.status,
            limit=request.limit,
            offset=request.offset,
        )
        return ListClientInvitesResponse(
            invites=[
                ClientInviteItem(
                    invite_id=str(invite.id),
                    mobile=invite.match_key,
                    client_name=getattr(invite.payload, "client_name", None),
                    status=invite.status,
                    created_at=invite.created_at,
                    expires_at=invite.expires_at,
                    client_id=str(invite.subject_id) if invite.subject_id else None,
                )
                for invite in invites
            ]
        )
