"""Domain value objects for ClearTrack."""

from cleartrack.domain.value.identifiers import (
    ApplicationId,
    InviteId,
    RequestId,
    UserId,
)
from cleartrack.domain.value.types import (
    ApplicationStatus,
    Caller,
    EmailAddress,
    InviteKind,
    InviteStatus,
    MobileNumber,
    RequestStatus,
    RespondAction,
    RespondOutcome,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "InviteId",
    "RequestId",
    "ApplicationId",
    # Types
    "ApplicationStatus",
    "Caller",
    "EmailAddress",
    "InviteKind",
    "InviteStatus",
    "MobileNumber",
    "RequestStatus",
    "RespondAction",
    "RespondOutcome",
    "UserRole",
]
