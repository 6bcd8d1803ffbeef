"""Create client request use case."""

import logfire
from pydantic import BaseModel

from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.domain.error import UnauthenticatedError
from cleartrack.domain.service import ClientRequestService, UserService
from cleartrack.domain.value import Caller, RequestStatus


class CreateClientRequestRequest(BaseModel):
    """Request to raise a client request."""

    caller: Caller | None = None
    needs: list[str]
    message: str | None = None


class CreateClientRequestResponse(BaseModel):
    """Response with the new request and its assignee, if any."""

    request_id: str
    status: RequestStatus
    assigned_practitioner_id: str | None


class CreateClientRequestUseCase(BaseUseCase):
    """Use case for a client asking to be taken on by a practitioner."""

    def __init__(
        self, client_request_service: ClientRequestService, user_service: UserService
    ) -> None:
        """Initialize use case.

        Args:
            client_request_service: Client request domain service
            user_service: User domain service
        """
        self.client_request_service = client_request_service
        self.user_service = user_service

    async def execute(
        self, request: CreateClientRequestRequest
    ) -> CreateClientRequestResponse:
        """Create the request and assign it round-robin.

        Raises:
            UnauthenticatedError: If there is no caller
            ValidationError: If needs is empty
        """
        if request.caller is None:
            raise UnauthenticatedError()

        with logfire.span(
            "create_client_request", client_id=str(request.caller.user_id)
        ):
            await self.user_service.ensure_client(request.caller.user_id)
            created = await self.client_request_service.create_request(
                request.caller.user_id, request.needs, request.message
            )
            assigned = created.assigned_practitioner_id
            return CreateClientRequestResponse(
                request_id=str(created.id),
                status=created.status,
                assigned_practitioner_id=str(assigned) if assigned else None,
            )
