"""In-memory client request repository for testing."""

from typing import Optional

from cleartrack.domain.model import ClientRequest
from cleartrack.domain.repository.client_request import ClientRequestRepository
from cleartrack.domain.value import RequestId, RequestStatus, UserId


class InMemoryClientRequestRepository(ClientRequestRepository):
    """In-memory implementation of ClientRequestRepository for testing."""

    def __init__(self) -> None:
        self._requests: dict[RequestId, ClientRequest] = {}

    async def find_by_id(self, request_id: RequestId) -> Optional[ClientRequest]:
        return self._requests.get(request_id)

    async def find_by_assigned_practitioner(
        self, practitioner_id: UserId, status: Optional[RequestStatus] = None
    ) -> list[ClientRequest]:
        matches = [
            request
            for request in self._requests.values()
            if request.assigned_practitioner_id == practitioner_id
            and (status is None or request.status == status)
        ]
        return sorted(matches, key=lambda r: r.created_at, reverse=True)

    async def find_by_client(self, client_id: UserId) -> list[ClientRequest]:
        matches = [r for r in self._requests.values() if r.client_id == client_id]
        return sorted(matches, key=lambda r: r.created_at, reverse=True)

    async def save(self, request: ClientRequest) -> ClientRequest:
        self._requests[request.id] = request
        return request
