"""Unit tests for RotationService and candidate ordering."""

from collections import Counter
from uuid import uuid4

import pytest

from cleartrack.domain.error import ConcurrencyConflictError
from cleartrack.domain.repository import UserRepository
from cleartrack.domain.service import RotationService, UserService, order_candidates
from cleartrack.domain.value import UserId
from cleartrack.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import make_practitioner
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class RacingUserRepository(InMemoryUserRepository):
    """Loses every compare-and-swap, as if another selector always wins."""

    async def compare_and_set_rotation_index(
        self, user_id: UserId, expected: int, new: int
    ) -> bool:
        return False


class TestOrderCandidates:
    @pytest.mark.asyncio
    async def test_lowest_index_then_longest_registered(self, unit_env):
        user_service = await unit_env.get(UserService)
        newest = await make_practitioner(user_service, registered_minutes_ago=1)
        oldest = await make_practitioner(user_service, registered_minutes_ago=30)
        busy = await make_practitioner(
            user_service, registered_minutes_ago=60, rotation_index=3
        )

        ordered = order_candidates([newest, busy, oldest])

        assert [p.id for p in ordered] == [oldest.id, newest.id, busy.id]

    @pytest.mark.asyncio
    async def test_needs_prefer_matching_specializations(self, unit_env):
        user_service = await unit_env.get(UserService)
        generalist = await make_practitioner(user_service, registered_minutes_ago=10)
        tax = await make_practitioner(
            user_service, specializations=("tax",), rotation_index=5
        )

        ordered = order_candidates([generalist, tax], needs={"tax", "payroll"})

        assert [p.id for p in ordered] == [tax.id]

    @pytest.mark.asyncio
    async def test_no_match_falls_back_to_everyone(self, unit_env):
        user_service = await unit_env.get(UserService)
        a = await make_practitioner(user_service, specializations=("audit",))
        b = await make_practitioner(user_service, specializations=("payroll",))

        ordered = order_candidates([a, b], needs={"tax"})

        assert {p.id for p in ordered} == {a.id, b.id}

    @pytest.mark.asyncio
    async def test_excluded_are_dropped(self, unit_env):
        user_service = await unit_env.get(UserService)
        a = await make_practitioner(user_service, registered_minutes_ago=5)
        b = await make_practitioner(user_service)

        ordered = order_candidates([a, b], excluded=[a.id])

        assert [p.id for p in ordered] == [b.id]


class TestSelectNext:
    """Tests for select_next."""

    @pytest.mark.asyncio
    async def test_round_robin_over_equal_practitioners(self, unit_env):
        """N equal practitioners and k*N selections: each picked k times,
        in registration order."""
        # Arrange
        rotation_service = await unit_env.get(RotationService)
        user_service = await unit_env.get(UserService)
        practitioners = [
            await make_practitioner(user_service, registered_minutes_ago=30 - i)
            for i in range(3)
        ]

        # Act
        picks = [await rotation_service.select_next() for _ in range(6)]

        # Assert
        expected_cycle = [p.id for p in practitioners]
        assert picks == expected_cycle * 2
        assert Counter(picks) == {p.id: 2 for p in practitioners}

    @pytest.mark.asyncio
    async def test_selection_increments_rotation_index(self, unit_env):
        rotation_service = await unit_env.get(RotationService)
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        practitioner = await make_practitioner(user_service)

        await rotation_service.select_next()
        await rotation_service.select_next()

        stored = await user_repo.find_by_id(practitioner.id)
        assert stored is not None
        assert stored.rotation_index == 2

    @pytest.mark.asyncio
    async def test_profile_save_does_not_reset_counter(self, unit_env):
        rotation_service = await unit_env.get(RotationService)
        user_service = await unit_env.get(UserService)
        practitioner = await make_practitioner(user_service)
        await rotation_service.select_next()

        await user_service.save(practitioner.model_copy(update={"first_name": "Sam"}))

        stored = await user_service.get_by_id(practitioner.id)
        assert stored.first_name == "Sam"
        assert stored.rotation_index == 1

    @pytest.mark.asyncio
    async def test_empty_pool_returns_none(self, unit_env):
        rotation_service = await unit_env.get(RotationService)

        assert await rotation_service.select_next({"tax"}) is None

    @pytest.mark.asyncio
    async def test_all_excluded_returns_none(self, unit_env):
        rotation_service = await unit_env.get(RotationService)
        user_service = await unit_env.get(UserService)
        practitioner = await make_practitioner(user_service)

        assert await rotation_service.select_next(excluded=[practitioner.id]) is None

    @pytest.mark.asyncio
    async def test_gives_up_after_bounded_retries(self):
        user_repo = RacingUserRepository()
        await make_practitioner(UserService(user_repo))
        rotation_service = RotationService(user_repo, max_attempts=3)

        with pytest.raises(ConcurrencyConflictError, match="after 3 attempts"):
            await rotation_service.select_next()

    @pytest.mark.asyncio
    async def test_unknown_excluded_ids_are_ignored(self, unit_env):
        rotation_service = await unit_env.get(RotationService)
        user_service = await unit_env.get(UserService)
        practitioner = await make_practitioner(user_service)

        selected = await rotation_service.select_next(excluded=[UserId(uuid4())])

        assert selected == practitioner.id
