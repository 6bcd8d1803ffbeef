"""PostgreSQL implementation of Credential repository."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from cleartrack.domain.error import AlreadyExistsError
from cleartrack.domain.model import Credential
from cleartrack.domain.repository import CredentialRepository
from cleartrack.persistence.mappers import credential_to_dict, row_to_credential
from cleartrack.persistence.tables import credentials_table


class PostgresCredentialRepository(CredentialRepository):
    """PostgreSQL implementation of CredentialRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_email(self, email: str) -> Credential | None:
        stmt = select(credentials_table).where(credentials_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_credential(dict(row)) if row else None

    async def save(self, credential: Credential) -> Credential:
        """Insert a credential, failing on a duplicate email.

        Raises:
            AlreadyExistsError: If the email is already registered
        """
        stmt = (
            insert(credentials_table)
            .values(**credential_to_dict(credential))
            .on_conflict_do_nothing(index_elements=["email"])
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise AlreadyExistsError("An account with this email already exists")

        await self.session.flush()
        return credential
