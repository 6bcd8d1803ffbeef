"""Client request repository interface."""

from abc import ABC, abstractmethod

from cleartrack.domain.model.client_request import ClientRequest
from cleartrack.domain.value import RequestId, RequestStatus, UserId


class ClientRequestRepository(ABC):
    """Repository for ClientRequest aggregate."""

    @abstractmethod
    async def find_by_id(self, request_id: RequestId) -> ClientRequest | None:
        """Find a request by ID."""
        pass

    @abstractmethod
    async def find_by_assigned_practitioner(
        self, practitioner_id: UserId, status: RequestStatus | None = None
    ) -> list[ClientRequest]:
        """Find requests currently assigned to a practitioner, newest first."""
        pass

    @abstractmethod
    async def find_by_client(self, client_id: UserId) -> list[ClientRequest]:
        """Find requests made by a client, newest first."""
        pass

    @abstractmethod
    async def save(self, request: ClientRequest) -> ClientRequest:
        """Save a request (create or update)."""
        pass
