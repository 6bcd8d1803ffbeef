"""Unit tests for the client request use cases."""

from uuid import uuid4

import pytest

from cleartrack.application.usecase.request import (
    CreateClientRequestRequest,
    CreateClientRequestUseCase,
    ListAssignedRequestsRequest,
    ListAssignedRequestsUseCase,
    ListMyRequestsRequest,
    ListMyRequestsUseCase,
    RespondToClientRequestRequest,
    RespondToClientRequestUseCase,
)
from cleartrack.domain.error import (
    PermissionDeniedError,
    UnauthenticatedError,
    ValidationError,
)
from cleartrack.domain.service import UserService
from cleartrack.domain.value import (
    Caller,
    RequestStatus,
    RespondOutcome,
    UserId,
    UserRole,
)
from tests.conftest import caller_for, make_practitioner, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateClientRequest:
    @pytest.mark.asyncio
    async def test_new_caller_gets_client_profile(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        practitioner = await make_practitioner(user_service)
        use_case = await unit_env.get(CreateClientRequestUseCase)
        client_id = UserId(uuid4())

        # Act
        response = await use_case.execute(
            CreateClientRequestRequest(
                caller=Caller(user_id=client_id), needs=["tax"], message="Hi"
            )
        )

        # Assert
        assert response.status == RequestStatus.PENDING
        assert response.assigned_practitioner_id == str(practitioner.id)
        client = await user_service.get_by_id(client_id)
        assert client.role == UserRole.CLIENT

    @pytest.mark.asyncio
    async def test_no_practitioners(self, unit_env):
        use_case = await unit_env.get(CreateClientRequestUseCase)

        response = await use_case.execute(
            CreateClientRequestRequest(
                caller=Caller(user_id=UserId(uuid4())), needs=["tax"]
            )
        )

        assert response.status == RequestStatus.UNASSIGNED
        assert response.assigned_practitioner_id is None

    @pytest.mark.asyncio
    async def test_anonymous_caller(self, unit_env):
        use_case = await unit_env.get(CreateClientRequestUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(CreateClientRequestRequest(needs=["tax"]))

    @pytest.mark.asyncio
    async def test_empty_needs(self, unit_env):
        use_case = await unit_env.get(CreateClientRequestUseCase)

        with pytest.raises(ValidationError, match="Needs array is required"):
            await use_case.execute(
                CreateClientRequestRequest(
                    caller=Caller(user_id=UserId(uuid4())), needs=[]
                )
            )


class TestRespondToClientRequest:
    """Tests for RespondToClientRequestUseCase."""

    async def _assigned_request(self, unit_env):
        user_service = await unit_env.get(UserService)
        first = await make_practitioner(user_service, registered_minutes_ago=5)
        second = await make_practitioner(user_service, first_name="Sam")
        create = await unit_env.get(CreateClientRequestUseCase)
        created = await create.execute(
            CreateClientRequestRequest(
                caller=Caller(user_id=UserId(uuid4())), needs=["tax"]
            )
        )
        return first, second, created

    @pytest.mark.asyncio
    async def test_decline_reassigns(self, unit_env):
        # Arrange
        first, second, created = await self._assigned_request(unit_env)
        use_case = await unit_env.get(RespondToClientRequestUseCase)

        # Act
        response = await use_case.execute(
            RespondToClientRequestRequest(
                caller=caller_for(first),
                request_id=created.request_id,
                action="decline",
            )
        )

        # Assert
        assert response.outcome == RespondOutcome.REASSIGNED
        assert response.status == RequestStatus.PENDING
        assert response.assigned_practitioner_id == str(second.id)

    @pytest.mark.asyncio
    async def test_accept(self, unit_env):
        first, _, created = await self._assigned_request(unit_env)
        use_case = await unit_env.get(RespondToClientRequestUseCase)

        response = await use_case.execute(
            RespondToClientRequestRequest(
                caller=caller_for(first),
                request_id=created.request_id,
                action="accept",
            )
        )

        assert response.outcome == RespondOutcome.ACCEPTED
        assert response.status == RequestStatus.ACCEPTED
        assert response.assigned_practitioner_id == str(first.id)

    @pytest.mark.asyncio
    async def test_other_practitioner_denied(self, unit_env):
        _, second, created = await self._assigned_request(unit_env)
        use_case = await unit_env.get(RespondToClientRequestUseCase)

        with pytest.raises(PermissionDeniedError, match="not assigned to you"):
            await use_case.execute(
                RespondToClientRequestRequest(
                    caller=caller_for(second),
                    request_id=created.request_id,
                    action="accept",
                )
            )

    @pytest.mark.asyncio
    async def test_client_denied(self, unit_env):
        _, _, created = await self._assigned_request(unit_env)
        user_service = await unit_env.get(UserService)
        client = await make_user(user_service, UserRole.CLIENT)
        use_case = await unit_env.get(RespondToClientRequestUseCase)

        with pytest.raises(PermissionDeniedError, match="Only practitioners"):
            await use_case.execute(
                RespondToClientRequestRequest(
                    caller=caller_for(client),
                    request_id=created.request_id,
                    action="accept",
                )
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "request_id, action, message",
        [
            ("not-a-uuid", "accept", "Request ID is required"),
            (None, "maybe", "Action must be"),
        ],
    )
    async def test_invalid_input(self, unit_env, request_id, action, message):
        first, _, created = await self._assigned_request(unit_env)
        use_case = await unit_env.get(RespondToClientRequestUseCase)

        with pytest.raises(ValidationError, match=message):
            await use_case.execute(
                RespondToClientRequestRequest(
                    caller=caller_for(first),
                    request_id=request_id or created.request_id,
                    action=action,
                )
            )


class TestListAssignedRequests:
    @pytest.mark.asyncio
    async def test_inbox_follows_reassignment(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        first = await make_practitioner(user_service, registered_minutes_ago=5)
        second = await make_practitioner(user_service, first_name="Sam")
        create = await unit_env.get(CreateClientRequestUseCase)
        respond = await unit_env.get(RespondToClientRequestUseCase)
        created = await create.execute(
            CreateClientRequestRequest(
                caller=Caller(user_id=UserId(uuid4())),
                needs=["payroll", "tax"],
                message="Help",
            )
        )
        await respond.execute(
            RespondToClientRequestRequest(
                caller=caller_for(first),
                request_id=created.request_id,
                action="decline",
            )
        )
        use_case = await unit_env.get(ListAssignedRequestsUseCase)

        # Act
        first_inbox = await use_case.execute(
            ListAssignedRequestsRequest(caller=caller_for(first))
        )
        second_inbox = await use_case.execute(
            ListAssignedRequestsRequest(
                caller=caller_for(second), status=RequestStatus.PENDING
            )
        )

        # Assert
        assert first_inbox.requests == []
        assert len(second_inbox.requests) == 1
        item = second_inbox.requests[0]
        assert item.request_id == created.request_id
        assert item.needs == ["payroll", "tax"]
        assert item.message == "Help"


class TestListMyRequests:
    @pytest.mark.asyncio
    async def test_client_sees_own_requests(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        practitioner = await make_practitioner(user_service)
        create = await unit_env.get(CreateClientRequestUseCase)
        mine = Caller(user_id=UserId(uuid4()))
        created = await create.execute(
            CreateClientRequestRequest(caller=mine, needs=["tax"])
        )
        await create.execute(
            CreateClientRequestRequest(
                caller=Caller(user_id=UserId(uuid4())), needs=["audit"]
            )
        )
        use_case = await unit_env.get(ListMyRequestsUseCase)

        # Act
        response = await use_case.execute(ListMyRequestsRequest(caller=mine))

        # Assert
        assert [r.request_id for r in response.requests] == [created.request_id]
        assert response.requests[0].assigned_practitioner_id == str(practitioner.id)

    @pytest.mark.asyncio
    async def test_anonymous_caller(self, unit_env):
        use_case = await unit_env.get(ListMyRequestsUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(ListMyRequestsRequest())
