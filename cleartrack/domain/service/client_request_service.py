"""Client request assignment domain service."""

from uuid import uuid4

import logfire

from cleartrack.domain.error import (
    FailedPreconditionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cleartrack.domain.model import ClientRequest
from cleartrack.domain.model.common import utcnow
from cleartrack.domain.repository import ClientRequestRepository
from cleartrack.domain.value import (
    RequestId,
    RequestStatus,
    RespondAction,
    RespondOutcome,
    UserId,
)

from .base import Service
from .rotation_service import RotationService
from .user_service import UserService


class ClientRequestService(Service):
    """Drives a request through unassigned -> pending -> accepted.

    A decline moves the request to the next practitioner in rotation,
    skipping everyone who already declined it; when nobody is left the
    request drops back to unassigned.
    """

    def __init__(
        self,
        client_request_repository: ClientRequestRepository,
        rotation_service: RotationService,
        user_service: UserService,
        reapply_needs_on_decline: bool = False,
    ) -> None:
        """Initialize client request service.

        Args:
            client_request_repository: Client request repository
            rotation_service: Practitioner selector
            user_service: User service, used to link clients on accept
            reapply_needs_on_decline: Prefer specialization matches when
                reassigning after a decline
        """
        self.client_request_repository = client_request_repository
        self.rotation_service = rotation_service
        self.user_service = user_service
        self.reapply_needs_on_decline = reapply_needs_on_decline

    async def create_request(
        self, client_id: UserId, needs: list[str], message: str | None = None
    ) -> ClientRequest:
        """Create a request and assign it to the next practitioner.

        Args:
            client_id: Requesting client
            needs: Needs the client wants help with (non-empty)
            message: Optional message for the practitioner

        Returns:
            Saved request, pending if a practitioner was found

        Raises:
            ValidationError: If needs is empty
        """
        cleaned_needs = frozenset(n.strip() for n in needs if n and n.strip())
        if not cleaned_needs:
            raise ValidationError("Needs array is required")

        with logfire.span(
            "client_request_service.create_request",
            client_id=str(client_id),
            needs=sorted(cleaned_needs),
        ):
            practitioner_id = await self.rotation_service.select_next(cleaned_needs)
            now = utcnow()
            request = ClientRequest(
                id=RequestId(uuid4()),
                client_id=client_id,
                needs=cleaned_needs,
                message=message or None,
                assigned_practitioner_id=practitioner_id,
                declined_by=(),
                status=(
                    RequestStatus.PENDING
                    if practitioner_id
                    else RequestStatus.UNASSIGNED
                ),
                created_at=now,
                updated_at=now,
            )

            saved = await self.client_request_repository.save(request)
            logfire.info(
                "Client request created",
                request_id=str(saved.id),
                status=saved.status.value,
                assigned_practitioner_id=(
                    str(practitioner_id) if practitioner_id else None
                ),
            )
            return saved

    async def respond(
        self, request_id: RequestId, practitioner_id: UserId, action: RespondAction
    ) -> tuple[ClientRequest, RespondOutcome]:
        """Accept or decline a request on behalf of its assignee.

        Args:
            request_id: Request to respond to
            practitioner_id: Responding practitioner
            action: accept or decline

        Returns:
            Updated request and the outcome

        Raises:
            NotFoundError: If the request does not exist
            PermissionDeniedError: If the request is assigned to someone else
            FailedPreconditionError: If the request is no longer pending
        """
        with logfire.span(
            "client_request_service.respond",
            request_id=str(request_id),
            practitioner_id=str(practitioner_id),
            action=action.value,
        ):
            request = await self.client_request_repository.find_by_id(request_id)
            if request is None:
                raise NotFoundError("Request", str(request_id), "Request not found")

            if request.assigned_practitioner_id != practitioner_id:
                logfire.warn(
                    "Response from non-assignee",
                    request_id=str(request_id),
                    practitioner_id=str(practitioner_id),
                )
                raise PermissionDeniedError("This request is not assigned to you")

            if request.status != RequestStatus.PENDING:
                raise FailedPreconditionError(
                    f"Request is {request.status.value}, not pending"
                )

            if action == RespondAction.ACCEPT:
                return await self._accept(request, practitioner_id)
            return await self._decline(request, practitioner_id)

    async def list_assigned(
        self, practitioner_id: UserId, status: RequestStatus | None = None
    ) -> list[ClientRequest]:
        """Requests currently assigned to a practitioner."""
        return await self.client_request_repository.find_by_assigned_practitioner(
            practitioner_id, status
        )

    async def list_for_client(self, client_id: UserId) -> list[ClientRequest]:
        """Requests raised by a client."""
        return await self.client_request_repository.find_by_client(client_id)

    async def _accept(
        self, request: ClientRequest, practitioner_id: UserId
    ) -> tuple[ClientRequest, RespondOutcome]:
        accepted = await self.client_request_repository.save(
            request.model_copy(
                update={"status": RequestStatus.ACCEPTED, "updated_at": utcnow()}
            )
        )
        await self.user_service.link_client_to_practitioner(
            request.client_id, practitioner_id
        )
        logfire.info(
            "Client request accepted",
            request_id=str(request.id),
            practitioner_id=str(practitioner_id),
        )
        return accepted, RespondOutcome.ACCEPTED

    async def _decline(
        self, request: ClientRequest, practitioner_id: UserId
    ) -> tuple[ClientRequest, RespondOutcome]:
        declined_by = request.declined_by
        if practitioner_id not in declined_by:
            declined_by = (*declined_by, practitioner_id)

        needs = request.needs if self.reapply_needs_on_decline else None
        next_id = await self.rotation_service.select_next(needs, excluded=declined_by)

        if next_id is not None:
            status, outcome = RequestStatus.PENDING, RespondOutcome.REASSIGNED
        else:
            status, outcome = RequestStatus.UNASSIGNED, RespondOutcome.UNASSIGNED

        updated = await self.client_request_repository.save(
            request.model_copy(
                update={
                    "assigned_practitioner_id": next_id,
                    "declined_by": declined_by,
                    "status": status,
                    "updated_at": utcnow(),
                }
            )
        )
        logfire.info(
            "Client request declined",
            request_id=str(request.id),
            declined_by=str(practitioner_id),
            outcome=outcome.value,
            next_practitioner_id=str(next_id) if next_id else None,
        )
        return updated, outcome
