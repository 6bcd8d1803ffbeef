"""User profile aggregate.

Profiles are keyed by the identity provider's user id. Clients carry a link
to their practitioner; practitioners carry a PractitionerProfile with the
rotation counter used for round-robin assignment.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from cleartrack.domain.model.common import DomainModel, utcnow
from cleartrack.domain.value import UserId, UserRole


class PractitionerProfile(DomainModel):
    """Practitioner-only profile fields."""

    practitioner_code: str = ""
    practice_name: str = ""
    practice_number: Optional[str] = None
    sars_number: Optional[str] = None
    years_experience: float = Field(default=0, ge=0)
    qualifications: str = ""
    specializations: frozenset[str] = frozenset()
    bio: str = ""
    phone: str = ""
    is_publicly_visible: bool = False
    rotation_index: int = Field(default=0, ge=0)


class User(DomainModel):
    """User profile - client, practitioner or admin."""

    id: UserId
    role: UserRole
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    practitioner_id: Optional[UserId] = None  # Linked practitioner (clients)
    practitioner: Optional[PractitionerProfile] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def rotation_index(self) -> int:
        """Rotation counter, 0 for profiles without practitioner data."""
        return self.practitioner.rotation_index if self.practitioner else 0

    @property
    def specializations(self) -> frozenset[str]:
        return self.practitioner.specializations if self.practitioner else frozenset()
