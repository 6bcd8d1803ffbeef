"""Domain model entities for ClearTrack."""

from cleartrack.domain.model.application import PractitionerApplication
from cleartrack.domain.model.client_request import ClientRequest
from cleartrack.domain.model.credential import Credential
from cleartrack.domain.model.invite import (
    ClientInvitePayload,
    Invite,
    InvitePayload,
    PractitionerInvitePayload,
)
from cleartrack.domain.model.user import PractitionerProfile, User

__all__ = [
    "ClientInvitePayload",
    "ClientRequest",
    "Credential",
    "Invite",
    "InvitePayload",
    "PractitionerApplication",
    "PractitionerInvitePayload",
    "PractitionerProfile",
    "User",
]
