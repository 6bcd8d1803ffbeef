"""PostgreSQL implementation of ClientRequest repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cleartrack.domain.model import ClientRequest
from cleartrack.domain.repository import ClientRequestRepository
from cleartrack.domain.value import RequestId, RequestStatus, UserId
from cleartrack.persistence.mappers import (
    client_request_to_dict,
    row_to_client_request,
)
from cleartrack.persistence.tables import client_requests_table


class PostgresClientRequestRepository(ClientRequestRepository):
    """PostgreSQL implementation of ClientRequestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, request_id: RequestId) -> Optional[ClientRequest]:
        stmt = select(client_requests_table).where(
            client_requests_table.c.id == request_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_client_request(dict(row)) if row else None

    async def find_by_assigned_practitioner(
        self, practitioner_id: UserId, status: Optional[RequestStatus] = None
    ) -> list[ClientRequest]:
        """Find requests assigned to a practitioner, newest first.

        Args:
            practitioner_id: Assigned practitioner
            status: Optional filter by status

        Returns:
            List of requests
        """
        stmt = (
            select(client_requests_table)
            .where(client_requests_table.c.assigned_practitioner_id == practitioner_id)
            .order_by(client_requests_table.c.created_at.desc())
        )

        if status:
            stmt = stmt.where(client_requests_table.c.status == status.value)

        result = await self.session.execute(stmt)
        return [row_to_client_request(dict(row)) for row in result.mappings().all()]

    async def find_by_client(self, client_id: UserId) -> list[ClientRequest]:
        stmt = (
            select(client_requests_table)
            .where(client_requests_table.c.client_id == client_id)
            .order_by(client_requests_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_client_request(dict(row)) for row in result.mappings().all()]

    async def save(self, request: ClientRequest) -> ClientRequest:
        """Save a request (create or update).

        Args:
            request: Request to save

        Returns:
            Saved request
        """
        request_dict = client_request_to_dict(request)

        existing = await self.find_by_id(request.id)

        if existing:
            stmt = (
                update(client_requests_table)
                .where(client_requests_table.c.id == request.id)
                .values(**request_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = insert(client_requests_table).values(**request_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return request
