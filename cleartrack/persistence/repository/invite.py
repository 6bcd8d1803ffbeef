"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cleartrack.domain.model import Invite
from cleartrack.domain.model.common import utcnow
from cleartrack.domain.repository import InviteRepository
from cleartrack.domain.value import InviteId, InviteKind, InviteStatus, UserId
from cleartrack.persistence.mappers import invite_to_dict, row_to_invite
from cleartrack.persistence.tables import invites_table


def _effective_status_is(status: InviteStatus, now: datetime):
    """Match rows by status, reading pending rows past expiry as expired."""
    stored = invites_table.c.status
    if status == InviteStatus.PENDING:
        return and_(
            stored == InviteStatus.PENDING.value, invites_table.c.expires_at >= now
        )
    if status == InviteStatus.EXPIRED:
        return or_(
            stored == InviteStatus.EXPIRED.value,
            and_(
                stored == InviteStatus.PENDING.value,
                invites_table.c.expires_at < now,
            ),
        )
    return stored == status.value


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository.

    Status transitions are ``UPDATE ... WHERE status = 'pending'`` so that
    concurrent claimers race on the row, not on a prior read.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID.

        Args:
            invite_id: Invite ID to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(invites_table).where(invites_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_latest_by_match(
        self,
        kind: InviteKind,
        match_key: str,
        code: str,
        status: Optional[InviteStatus] = None,
    ) -> Optional[Invite]:
        """Find the newest invite matching key and code.

        Args:
            kind: Invite kind
            match_key: Normalised mobile number or email
            code: Invite code
            status: Optional filter by status

        Returns:
            Newest matching invite, None if there is none
        """
        stmt = (
            select(invites_table)
            .where(
                and_(
                    invites_table.c.kind == kind.value,
                    invites_table.c.match_key == match_key,
                    invites_table.c.code == code,
                )
            )
            .order_by(invites_table.c.created_at.desc())
            .limit(1)
        )

        if status:
            stmt = stmt.where(invites_table.c.status == status.value)

        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_issuer(
        self,
        issuer_id: UserId,
        kind: InviteKind,
        limit: int = 50,
        offset: int = 0,
        status: Optional[InviteStatus] = None,
        now: Optional[datetime] = None,
    ) -> list[Invite]:
        """Find invites by issuer with pagination.

        Args:
            issuer_id: Issuer user ID
            kind: Invite kind
            limit: Maximum number of results
            offset: Number of results to skip
            status: Optional effective status, filtered before pagination
            now: Reference time for expiry

        Returns:
            List of invites, newest first
        """
        conditions = [
            invites_table.c.issuer_id == issuer_id,
            invites_table.c.kind == kind.value,
        ]
        if status is not None:
            conditions.append(_effective_status_is(status, now or utcnow()))

        stmt = (
            select(invites_table)
            .where(and_(*conditions))
            .order_by(invites_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_invite(dict(row)) for row in rows]

    async def save(self, invite: Invite) -> Invite:
        """Save an invite (create or update).

        Args:
            invite: Invite to save

        Returns:
            Saved invite
        """
        invite_dict = invite_to_dict(invite)

        existing = await self.find_by_id(invite.id)

        if existing:
            stmt = (
                update(invites_table)
                .where(invites_table.c.id == invite.id)
                .values(**invite_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = insert(invites_table).values(**invite_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return invite

    async def claim_if_pending(
        self,
        invite_id: InviteId,
        status: InviteStatus,
        subject_id: UserId,
        claimed_at: datetime,
    ) -> Optional[Invite]:
        """Claim a pending invite in a single conditional update.

        Returns:
            The claimed invite, None if the row was not pending
        """
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.id == invite_id,
                    invites_table.c.status == InviteStatus.PENDING.value,
                )
            )
            .values(status=status.value, subject_id=subject_id, claimed_at=claimed_at)
            .returning(*invites_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_invite(dict(row)) if row else None

    async def expire_if_pending(self, invite_id: InviteId) -> bool:
        """Mark a pending invite expired.

        Returns:
            True if this call changed the row
        """
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.id == invite_id,
                    invites_table.c.status == InviteStatus.PENDING.value,
                )
            )
            .values(status=InviteStatus.EXPIRED.value)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
