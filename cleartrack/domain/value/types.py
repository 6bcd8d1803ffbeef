"""Domain value objects for ClearTrack.

Value objects are immutable and defined by their values, not identity.
They encapsulate the format rules for phone numbers, emails and codes, and
the enumerations that drive the invite, request and application state
machines.
"""

import re
from enum import Enum

from pydantic import field_validator

from cleartrack.domain.value.common import RootValueObject, ValueObject
from cleartrack.domain.value.identifiers import UserId


class UserRole(str, Enum):
    """Role stored on a user profile."""

    CLIENT = "client"
    PRACTITIONER = "practitioner"
    ADMIN = "admin"


class InviteKind(str, Enum):
    """Kind of invite held in the ledger."""

    CLIENT = "client"
    PRACTITIONER = "practitioner"


class InviteStatus(str, Enum):
    """Status of an invite.

    ``pending`` is the only non-terminal state. Client invites are claimed
    into ``accepted``, practitioner invites into ``completed``.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    COMPLETED = "completed"


class RequestStatus(str, Enum):
    """Status of a client request."""

    UNASSIGNED = "unassigned"
    PENDING = "pending"
    ACCEPTED = "accepted"


class RespondAction(str, Enum):
    """Practitioner response to an assigned request."""

    ACCEPT = "accept"
    DECLINE = "decline"


class RespondOutcome(str, Enum):
    """Result of responding to a request."""

    ACCEPTED = "accepted"
    REASSIGNED = "reassigned"
    UNASSIGNED = "unassigned"


class ApplicationStatus(str, Enum):
    """Status of a practitioner application."""

    PENDING = "pending"
    APPROVED = "approved"


class MobileNumber(RootValueObject[str]):
    """Mobile number with whitespace and separators removed.

    ``082-123-4567`` and ``(082) 123 4567`` both become ``0821234567``.
    Must hold at least 10 digits; a leading ``+`` is kept for E.164 numbers.
    """

    @field_validator("root")
    @classmethod
    def normalize_mobile(cls, v: str) -> str:
        """Strip whitespace, dashes, dots and brackets, then check the digits."""
        cleaned = re.sub(r"[\s().-]+", "", v)
        if not re.fullmatch(r"\+?[0-9]+", cleaned):
            raise ValueError("Mobile number may only contain digits")
        if len(cleaned.lstrip("+")) < 10:
            raise ValueError("Invalid mobile number format")
        return cleaned


class EmailAddress(RootValueObject[str]):
    """Lower-cased email address."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        cleaned = v.strip().lower()
        if not re.fullmatch(r"[^@\s]+@[^@\s]+\.[^@\s]+", cleaned):
            raise ValueError("Invalid email address")
        if len(cleaned) > 255:
            raise ValueError("Email must be at most 255 characters")
        return cleaned


class Caller(ValueObject):
    """Verified caller identity taken from the auth token."""

    user_id: UserId
    email: str | None = None
