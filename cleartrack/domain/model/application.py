"""Practitioner application entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from cleartrack.domain.model.common import DomainModel, utcnow
from cleartrack.domain.value import ApplicationId, ApplicationStatus, InviteId


class PractitionerApplication(DomainModel):
    """Application to join as a practitioner.

    Business rules:
    - Anyone may submit; the application starts ``pending``
    - Moves ``pending -> approved`` exactly once, by an administrator
    - Approval stores the registration invite's token
    - ``approval_email_sent`` guards the one-off welcome email
    """

    id: ApplicationId
    first_name: str
    last_name: str
    email: str
    phone: str
    practice_name: str
    practice_number: Optional[str] = None
    sars_number: Optional[str] = None
    years_experience: float = Field(ge=0)
    qualifications: str
    specializations: frozenset[str] = Field(min_length=1)
    bio: Optional[str] = None
    message: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    invite_token: Optional[InviteId] = None
    approval_email_sent: bool = False
    approved_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
