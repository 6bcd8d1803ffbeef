"""Credential entity held by the identity provider."""

from datetime import datetime

from pydantic import Field

from cleartrack.domain.model.common import DomainModel, utcnow
from cleartrack.domain.value import UserId


class Credential(DomainModel):
    """Email/password login for one user. ``email`` is stored lower-cased."""

    user_id: UserId
    email: str
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow)
