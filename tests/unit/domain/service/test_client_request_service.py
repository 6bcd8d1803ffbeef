"""Unit tests for ClientRequestService."""

from uuid import uuid4

import pytest

from cleartrack.domain.error import (
    FailedPreconditionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cleartrack.domain.repository import ClientRequestRepository, UserRepository
from cleartrack.domain.service import (
    ClientRequestService,
    RotationService,
    UserService,
)
from cleartrack.domain.value import (
    RequestId,
    RequestStatus,
    RespondAction,
    RespondOutcome,
    UserId,
    UserRole,
)
from tests.conftest import make_practitioner, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateRequest:
    """Tests for create_request."""

    @pytest.mark.asyncio
    async def test_assigns_pending_to_next_practitioner(self, unit_env):
        # Arrange
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        practitioner = await make_practitioner(user_service)
        client = await make_user(user_service, UserRole.CLIENT)

        # Act
        request = await service.create_request(
            client.id, [" tax ", "bookkeeping", ""], "Year-end help"
        )

        # Assert
        assert request.status == RequestStatus.PENDING
        assert request.assigned_practitioner_id == practitioner.id
        assert request.needs == frozenset({"tax", "bookkeeping"})
        assert request.declined_by == ()
        assert request.message == "Year-end help"

    @pytest.mark.asyncio
    async def test_specialist_preferred_over_less_busy_generalist(self, unit_env):
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        await make_practitioner(user_service, registered_minutes_ago=60)
        specialist = await make_practitioner(
            user_service, specializations=("tax",), rotation_index=4
        )

        request = await service.create_request(UserId(uuid4()), ["tax"])

        assert request.assigned_practitioner_id == specialist.id

    @pytest.mark.asyncio
    async def test_no_practitioners_leaves_request_unassigned(self, unit_env):
        service = await unit_env.get(ClientRequestService)

        request = await service.create_request(UserId(uuid4()), ["tax"])

        assert request.status == RequestStatus.UNASSIGNED
        assert request.assigned_practitioner_id is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("needs", [[], ["", "  "]])
    async def test_empty_needs_rejected(self, unit_env, needs):
        service = await unit_env.get(ClientRequestService)

        with pytest.raises(ValidationError, match="Needs array is required"):
            await service.create_request(UserId(uuid4()), needs)


class TestRespond:
    """Tests for respond."""

    @pytest.mark.asyncio
    async def test_accept_links_client_to_practitioner(self, unit_env):
        # Arrange
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        practitioner = await make_practitioner(user_service)
        client = await make_user(user_service, UserRole.CLIENT)
        request = await service.create_request(client.id, ["tax"])

        # Act
        updated, outcome = await service.respond(
            request.id, practitioner.id, RespondAction.ACCEPT
        )

        # Assert
        assert outcome == RespondOutcome.ACCEPTED
        assert updated.status == RequestStatus.ACCEPTED
        linked = await user_service.get_by_id(client.id)
        assert linked.practitioner_id == practitioner.id
        assert linked.role == UserRole.CLIENT

    @pytest.mark.asyncio
    async def test_accept_creates_missing_client_profile(self, unit_env):
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        practitioner = await make_practitioner(user_service)
        client_id = UserId(uuid4())
        request = await service.create_request(client_id, ["tax"])

        await service.respond(request.id, practitioner.id, RespondAction.ACCEPT)

        client = await user_service.get_by_id(client_id)
        assert client.role == UserRole.CLIENT
        assert client.practitioner_id == practitioner.id

    @pytest.mark.asyncio
    async def test_decline_reassigns_to_next_practitioner(self, unit_env):
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        first = await make_practitioner(user_service, registered_minutes_ago=10)
        second = await make_practitioner(user_service)
        request = await service.create_request(UserId(uuid4()), ["tax"])
        assert request.assigned_practitioner_id == first.id

        updated, outcome = await service.respond(
            request.id, first.id, RespondAction.DECLINE
        )

        assert outcome == RespondOutcome.REASSIGNED
        assert updated.status == RequestStatus.PENDING
        assert updated.assigned_practitioner_id == second.id
        assert updated.declined_by == (first.id,)

    @pytest.mark.asyncio
    async def test_decline_by_everyone_ends_unassigned(self, unit_env):
        """Repeated declines exclude each decliner until nobody is left."""
        # Arrange
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        practitioners = [
            await make_practitioner(user_service, registered_minutes_ago=10 - i)
            for i in range(3)
        ]
        request = await service.create_request(UserId(uuid4()), ["tax"])

        # Act
        outcomes = []
        while request.status == RequestStatus.PENDING:
            assert request.assigned_practitioner_id not in request.declined_by
            request, outcome = await service.respond(
                request.id, request.assigned_practitioner_id, RespondAction.DECLINE
            )
            outcomes.append(outcome)

        # Assert
        assert outcomes == [
            RespondOutcome.REASSIGNED,
            RespondOutcome.REASSIGNED,
            RespondOutcome.UNASSIGNED,
        ]
        assert request.status == RequestStatus.UNASSIGNED
        assert request.assigned_practitioner_id is None
        assert set(request.declined_by) == {p.id for p in practitioners}
        assert len(request.declined_by) == 3

    @pytest.mark.asyncio
    async def test_decline_widens_pool_beyond_specialists(self, unit_env):
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        specialist = await make_practitioner(user_service, specializations=("tax",))
        generalist = await make_practitioner(user_service, rotation_index=9)
        request = await service.create_request(UserId(uuid4()), ["tax"])

        updated, _ = await service.respond(
            request.id, specialist.id, RespondAction.DECLINE
        )

        assert updated.assigned_practitioner_id == generalist.id

    @pytest.mark.asyncio
    async def test_decline_can_keep_preferring_specialists(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        user_service = await unit_env.get(UserService)
        service = ClientRequestService(
            client_request_repository=await unit_env.get(ClientRequestRepository),
            rotation_service=RotationService(user_repo),
            user_service=user_service,
            reapply_needs_on_decline=True,
        )
        first = await make_practitioner(
            user_service, specializations=("tax",), registered_minutes_ago=10
        )
        await make_practitioner(user_service)
        second = await make_practitioner(
            user_service, specializations=("tax",), rotation_index=7
        )
        request = await service.create_request(UserId(uuid4()), ["tax"])
        assert request.assigned_practitioner_id == first.id

        updated, _ = await service.respond(request.id, first.id, RespondAction.DECLINE)

        assert updated.assigned_practitioner_id == second.id

    @pytest.mark.asyncio
    async def test_non_assignee_is_denied(self, unit_env):
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        await make_practitioner(user_service)
        request = await service.create_request(UserId(uuid4()), ["tax"])

        with pytest.raises(
            PermissionDeniedError, match="This request is not assigned to you"
        ):
            await service.respond(request.id, UserId(uuid4()), RespondAction.ACCEPT)

    @pytest.mark.asyncio
    async def test_unknown_request(self, unit_env):
        service = await unit_env.get(ClientRequestService)

        with pytest.raises(NotFoundError):
            await service.respond(
                RequestId(uuid4()), UserId(uuid4()), RespondAction.ACCEPT
            )

    @pytest.mark.asyncio
    async def test_accepted_request_cannot_be_answered_again(self, unit_env):
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        practitioner = await make_practitioner(user_service)
        request = await service.create_request(UserId(uuid4()), ["tax"])
        await service.respond(request.id, practitioner.id, RespondAction.ACCEPT)

        with pytest.raises(FailedPreconditionError):
            await service.respond(request.id, practitioner.id, RespondAction.DECLINE)


class TestListAssigned:
    @pytest.mark.asyncio
    async def test_lists_only_own_requests_with_status_filter(self, unit_env):
        service = await unit_env.get(ClientRequestService)
        user_service = await unit_env.get(UserService)
        a = await make_practitioner(user_service, registered_minutes_ago=10)
        b = await make_practitioner(user_service)
        first = await service.create_request(UserId(uuid4()), ["tax"])
        await service.create_request(UserId(uuid4()), ["tax"])
        await service.respond(first.id, a.id, RespondAction.ACCEPT)

        assigned_to_a = await service.list_assigned(a.id)
        pending_for_a = await service.list_assigned(a.id, RequestStatus.PENDING)

        assert [r.id for r in assigned_to_a] == [first.id]
        assert pending_for_a == []
        assert len(await service.list_assigned(b.id)) == 1
