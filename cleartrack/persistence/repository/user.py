"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from cleartrack.domain.model import User
from cleartrack.domain.repository import UserRepository
from cleartrack.domain.value import UserId, UserRole
from cleartrack.persistence.mappers import row_to_user, user_to_dict
from cleartrack.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Lower-cased email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_role(self, role: UserRole) -> list[User]:
        """Find all users holding a role.

        Args:
            role: Role to match

        Returns:
            Matching users
        """
        stmt = select(users_table).where(users_table.c.role == role.value)
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            # The counter is only moved by compare_and_set_rotation_index
            user_dict.pop("rotation_index")
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return user

    async def compare_and_set_rotation_index(
        self, user_id: UserId, expected: int, new: int
    ) -> bool:
        """Set a practitioner's rotation index if it still equals ``expected``.

        Args:
            user_id: Practitioner ID
            expected: Value read before selection
            new: Value to store

        Returns:
            True if exactly one row was updated
        """
        stmt = (
            users_table.update()
            .where(
                and_(
                    users_table.c.id == user_id,
                    users_table.c.rotation_index == expected,
                )
            )
            .values(rotation_index=new)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
