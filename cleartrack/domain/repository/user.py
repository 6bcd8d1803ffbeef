"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from cleartrack.domain.model.user import User
from cleartrack.domain.value import UserId, UserRole


class UserRepository(ABC):
    """Repository for User profiles.

    Defines the contract for profile persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their (lower-cased) email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_role(self, role: UserRole) -> list[User]:
        """Find all users holding a role.

        Args:
            role: Role to match

        Returns:
            Matching users in no particular order
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def compare_and_set_rotation_index(
        self, user_id: UserId, expected: int, new: int
    ) -> bool:
        """Set a practitioner's rotation index if it still equals ``expected``.

        Args:
            user_id: Practitioner ID
            expected: Value read before selection
            new: Value to store

        Returns:
            True if the stored value matched and was replaced
        """
        pass
