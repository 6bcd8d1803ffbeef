"""In-memory user repository for testing."""

from typing import Optional

from cleartrack.domain.model import PractitionerProfile, User
from cleartrack.domain.repository.user import UserRepository
from cleartrack.domain.value import UserId, UserRole


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_role(self, role: UserRole) -> list[User]:
        """Find all users holding a role."""
        return [user for user in self._users.values() if user.role == role]

    async def save(self, user: User) -> User:
        """Save a user, keeping the stored rotation counter on update."""
        existing = self._users.get(user.id)
        if existing is not None and user.practitioner is not None:
            user = user.model_copy(
                update={
                    "practitioner": user.practitioner.model_copy(
                        update={"rotation_index": existing.rotation_index}
                    )
                }
            )
        self._users[user.id] = user
        return user

    async def compare_and_set_rotation_index(
        self, user_id: UserId, expected: int, new: int
    ) -> bool:
        """Set the rotation index if it still equals ``expected``."""
        user = self._users.get(user_id)
        if user is None or user.rotation_index != expected:
            return False

        profile = user.practitioner or PractitionerProfile()
        self._users[user_id] = user.model_copy(
            update={"practitioner": profile.model_copy(update={"rotation_index": new})}
        )
        return True
