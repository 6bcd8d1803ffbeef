"""Test configuration and shared helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from cleartrack.domain.model import PractitionerProfile, User
from cleartrack.domain.service import UserService
from cleartrack.domain.value import Caller, UserId, UserRole

EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)


def caller_for(user: User) -> Caller:
    """Caller identity as the routes would build it from the auth cookie."""
    return Caller(user_id=user.id, email=user.email)


async def make_practitioner(
    user_service: UserService,
    *,
    first_name: str = "Pat",
    specializations: tuple[str, ...] = (),
    registered_minutes_ago: int = 0,
    rotation_index: int = 0,
) -> User:
    """Save a practitioner profile.

    ``registered_minutes_ago`` sets ``created_at`` relative to a fixed epoch
    so that tie-break order is explicit in tests.
    """
    created_at = EPOCH - timedelta(minutes=registered_minutes_ago)
    user = User(
        id=UserId(uuid4()),
        role=UserRole.PRACTITIONER,
        email=f"{first_name.lower()}-{uuid4().hex[:6]}@example.com",
        first_name=first_name,
        last_name="Practitioner",
        practitioner=PractitionerProfile(
            practitioner_code="PRAC000001",
            practice_name=f"{first_name} & Co",
            specializations=frozenset(specializations),
            rotation_index=rotation_index,
        ),
        created_at=created_at,
        updated_at=created_at,
    )
    return await user_service.save(user)


async def make_user(user_service: UserService, role: UserRole) -> User:
    """Save a plain client or admin profile."""
    user = User(
        id=UserId(uuid4()),
        role=role,
        email=f"{role.value}-{uuid4().hex[:6]}@example.com",
        first_name=role.value.title(),
        last_name="User",
    )
    return await user_service.save(user)
