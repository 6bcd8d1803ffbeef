"""List the caller's own client requests."""

from datetime import datetime

from pydantic import BaseModel

from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.domain.error import UnauthenticatedError
from cleartrack.domain.service import ClientRequestService
from cleartrack.domain.value import Caller, RequestStatus


class ListMyRequestsRequest(BaseModel):
    caller: Caller | None = None


class MyRequestItem(BaseModel):
    """A request as its client sees it."""

    request_id: str
    needs: list[str]
    status: RequestStatus
    assigned_practitioner_id: str | None
    created_at: datetime


class ListMyRequestsResponse(BaseModel):
    requests: list[MyRequestItem]


class ListMyRequestsUseCase(BaseUseCase):
    """Use case for a client following up on the requests they raised.

    Decline history is not shown to the client.
    """

    def __init__(self, client_request_service: ClientRequestService) -> None:
        self.client_request_service = client_request_service

    async def execute(self, request: ListMyRequestsRequest) -> ListMyRequestsResponse:
        if request.caller is None:
            raise UnauthenticatedError()

        raised = await self.client_request_service.list_for_client(
            request.caller.user_id
        )
        return ListMyRequestsResponse(
            requests=[
                MyRequestItem(
                    request_id=str(r.id),
                    needs=sorted(r.needs),
                    status=r.status,
                    assigned_practitioner_id=(
                        str(r.assigned_practitioner_id)
                        if r.assigned_practitioner_id
                        else None
                    ),
                    created_at=r.created_at,
                )
                for r in raised
            ]
        )
