"""Respond to client request use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.domain.error import ValidationError
from cleartrack.domain.service import ClientRequestService, UserService
from cleartrack.domain.value import (
    Caller,
    RequestId,
    RequestStatus,
    RespondAction,
    RespondOutcome,
    UserRole,
)


class RespondToClientRequestRequest(BaseModel):
    """Request to accept or decline an assigned client request."""

    caller: Caller | None = None
    request_id: str
    action: str


class RespondToClientRequestResponse(BaseModel):
    """Response with the request's new state."""

    outcome: RespondOutcome
    status: RequestStatus
    assigned_practitioner_id: str | None


class RespondToClientRequestUseCase(BaseUseCase):
    """Use case for the assigned practitioner answering a request."""

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
        self, request: RespondToClientRequestRequest
    ) -> RespondToClientRequestResponse:
        """Accept, or decline and reassign, the request.

        Raises:
            UnauthenticatedError: If there is no caller
            PermissionDeniedError: If the caller is not the assigned practitioner
            ValidationError: If the request ID or action is invalid
            NotFoundError: If the request does not exist
            FailedPreconditionError: If the request is not pending
        """
        practitioner = await self.user_service.require_role(
            request.caller, UserRole.PRACTITIONER
        )

        try:
            request_id = RequestId(UUID(request.request_id))
        except ValueError:
            raise ValidationError("Request ID is required")

        try:
            action = RespondAction(request.action)
        except ValueError:
            raise ValidationError('Action must be "accept" or "decline"')

        with logfire.span(
            "respond_to_client_request",
            request_id=str(request_id),
            action=action.value,
        ):
            updated, outcome = await self.client_request_service.respond(
                request_id, practitioner.id, action
            )
            assigned = updated.assigned_practitioner_id
            return RespondToClientRequestResponse(
                outcome=outcome,
                status=updated.status,
                assigned_practitioner_id=str(assigned) if assigned else None,
            )
