"""Client invite use cases."""

from cleartrack.application.usecase.invite.create_client_invite import (
    CreateClientInviteRequest,
    CreateClientInviteResponse,
    CreateClientInviteUseCase,
)
from cleartrack.application.usecase.invite.list_client_invites import (
    ClientInviteItem,
    ListClientInvitesRequest,
    ListClientInvitesResponse,
    ListClientInvitesUseCase,
)
from cleartrack.application.usecase.invite.verify_client_invite import (
    VerifyClientInviteRequest,
    VerifyClientInviteResponse,
    VerifyClientInviteUseCase,
)

__all__ = [
    "ClientInviteItem",
    "CreateClientInviteRequest",
    "CreateClientInviteResponse",
    "CreateClientInviteUseCase",
    "ListClientInvitesRequest",
    "ListClientInvitesResponse",
    "ListClientInvitesUseCase",
    "VerifyClientInviteRequest",
    "VerifyClientInviteResponse",
    "VerifyClientInviteUseCase",
]
