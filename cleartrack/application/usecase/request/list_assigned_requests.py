"""List assigned requests use case."""

from datetime import datetime

from pydantic import BaseModel

from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.domain.service import ClientRequestService, UserService
from cleartrack.domain.value import Caller, RequestStatus, UserRole


class ListAssignedRequestsRequest(BaseModel):
    """Request for the caller's assigned requests."""

    caller: Caller | None = None
    status: RequestStatus | None = None


class AssignedRequestItem(BaseModel):
    """Assigned request in a listing."""

    request_id: str
    client_id: str
    needs: list[str]
    message: str | None
    status: RequestStatus
    created_at: datetime


class ListAssignedRequestsResponse(BaseModel):
    """Assigned requests, newest first."""

    requests: list[AssignedRequestItem]


class ListAssignedRequestsUseCase(BaseUseCase):
    """Use case for a practitioner's request inbox."""

    def __init__(
        self, client_request_service: ClientRequestService, user_service: UserService
    ) -> None:
        self.client_request_service = client_request_service
        self.user_service = user_service

    async def execute(
        self, request: ListAssignedRequestsRequest
    ) -> ListAssignedRequestsResponse:
        practitioner = await self.user_service.require_role(
            request.caller, UserRole.PRACTITIONER
        )
        assigned = await self.client_request_service.list_assigned(
            practitioner.id, request.status
        )
        return ListAssignedRequestsResponse(
            requests=[
                AssignedRequestItem(
                    request_id=str(r.id),
                    client_id=str(r.client_id),
                    needs=sorted(r.needs),
                    message=r.message,
                    status=r.status,
                    created_at=r.created_at,
                )
                for r in assigned
            ]
        )
