"""Invite entity.

Invites are single-use, time-bounded credentials. A client invite links a
client to the practitioner who issued it; a practitioner invite lets an
approved applicant finish registration.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from cleartrack.domain.model.common import DomainModel, utcnow
from cleartrack.domain.value import (
    ApplicationId,
    InviteId,
    InviteKind,
    InviteStatus,
    UserId,
)


class ClientInvitePayload(DomainModel):
    """Fields carried only by client invites."""

    client_name: Optional[str] = None
    note: Optional[str] = None


class PractitionerInvitePayload(DomainModel):
    """Applicant identity carried by a practitioner registration invite."""

    application_id: ApplicationId
    email: str
    first_name: str
    last_name: str
    practice_name: str


InvitePayload = Union[ClientInvitePayload, PractitionerInvitePayload]


class Invite(DomainModel):
    """Invite entity shared by both invite kinds.

    Business rules:
    - Created ``pending`` with ``expires_at = created_at + ttl``
    - Becomes ``expired`` lazily, the first time it is read after expiry
    - Claimed exactly once: ``accepted`` (client) or ``completed`` (practitioner)
    - ``expired``, ``accepted`` and ``completed`` are terminal
    """

    id: InviteId
    kind: InviteKind
    code: str
    match_key: Optional[str] = None  # Mobile (client) or email (practitioner)
    issuer_id: Optional[UserId] = None
    subject_id: Optional[UserId] = None
    status: InviteStatus = InviteStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    claimed_at: Optional[datetime] = None
    payload: InvitePayload

    def is_expired(self, now: datetime) -> bool:
        """Whether the invite is past its expiry at ``now``."""
        return now > self.expires_at

    def effective_status(self, now: datetime) -> InviteStatus:
        """Stored status, with a pending invite past expiry read as expired."""
        if self.status == InviteStatus.PENDING and self.is_expired(now):
            return InviteStatus.EXPIRED
        return self.status

    @property
    def claimed_status(self) -> InviteStatus:
        """Terminal status this invite moves to when claimed."""
        if self.kind == InviteKind.CLIENT:
            return InviteStatus.ACCEPTED
        return InviteStatus.COMPLETED
