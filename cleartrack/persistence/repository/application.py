"""PostgreSQL implementation of PractitionerApplication repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cleartrack.domain.model import PractitionerApplication
from cleartrack.domain.repository import ApplicationRepository
from cleartrack.domain.value import ApplicationId, ApplicationStatus, InviteId
from cleartrack.persistence.mappers import application_to_dict, row_to_application
from cleartrack.persistence.tables import practitioner_applications_table

applications = practitioner_applications_table


class PostgresApplicationRepository(ApplicationRepository):
    """PostgreSQL implementation of ApplicationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, application_id: ApplicationId
    ) -> Optional[PractitionerApplication]:
        stmt = select(applications).where(applications.c.id == application_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_application(dict(row)) if row else None

    async def find_by_status(
        self, status: ApplicationStatus, limit: int = 50, offset: int = 0
    ) -> list[PractitionerApplication]:
        stmt = (
            select(applications)
            .where(applications.c.status == status.value)
            .order_by(applications.c.created_at.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_application(dict(row)) for row in result.mappings().all()]

    async def save(
        self, application: PractitionerApplication
    ) -> PractitionerApplication:
        """Save an application (create or update).

        Args:
            application: Application to save

        Returns:
            Saved application
        """
        application_dict = application_to_dict(application)

        existing = await self.find_by_id(application.id)

        if existing:
            stmt = (
                update(applications)
                .where(applications.c.id == application.id)
                .values(**application_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = insert(applications).values(**application_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return application

    async def approve_if_pending(
        self,
        application_id: ApplicationId,
        invite_token: InviteId,
        approved_at: datetime,
    ) -> Optional[PractitionerApplication]:
        """Approve a pending application in a single conditional update.

        Returns:
            The approved application, None if it was not pending
        """
        stmt = (
            update(applications)
            .where(
                and_(
                    applications.c.id == application_id,
                    applications.c.status == ApplicationStatus.PENDING.value,
                )
            )
            .values(
                status=ApplicationStatus.APPROVED.value,
                invite_token=invite_token,
                approved_at=approved_at,
                updated_at=approved_at,
            )
            .returning(*applications.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_application(dict(row)) if row else None

    async def mark_approval_email_sent_if_unsent(
        self, application_id: ApplicationId
    ) -> bool:
        """Flip ``approval_email_sent`` from false to true.

        Returns:
            True if this call flipped the flag
        """
        stmt = (
            update(applications)
            .where(
                and_(
                    applications.c.id == application_id,
                    applications.c.approval_email_sent.is_(False),
                )
            )
            .values(approval_email_sent=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
