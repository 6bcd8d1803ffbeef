"""Round-robin practitioner selection."""

from collections.abc import Collection, Iterable

import logfire

from cleartrack.domain.error import ConcurrencyConflictError
from cleartrack.domain.model import User
from cleartrack.domain.repository import UserRepository
from cleartrack.domain.value import UserId, UserRole

from .base import Service


def order_candidates(
    practitioners: Iterable[User],
    needs: Collection[str] | None = None,
    excluded: Collection[UserId] = (),
) -> list[User]:
    """Order the candidate pool for one selection.

    Decliners are dropped first. When ``needs`` is given and at least one
    remaining practitioner shares a specialization with it, only those
    practitioners stay in the pool; otherwise the whole remaining pool does.
    The pool is sorted by (rotation_index, created_at), so the practitioner
    with the fewest assignments wins and the longest-registered breaks ties.

    Args:
        practitioners: All practitioner profiles
        needs: Request needs, None or empty to skip the specialization filter
        excluded: Practitioner IDs to leave out

    Returns:
        Candidates, best first
    """
    excluded_ids = set(excluded)
    pool = [p for p in practitioners if p.id not in excluded_ids]

    if needs:
        wanted = set(needs)
        matching = [p for p in pool if p.specializations & wanted]
        if matching:
            pool = matching

    return sorted(pool, key=lambda p: (p.rotation_index, p.created_at))


class RotationService(Service):
    """Selects the next practitioner for a request and advances their counter.

    The counter is advanced with compare-and-swap; when another selector
    advanced it first the pool is reloaded and selection runs again, so
    concurrent selections never under-count.
    """

    def __init__(self, user_repository: UserRepository, max_attempts: int = 5) -> None:
        """Initialize rotation service.

        Args:
            user_repository: User repository
            max_attempts: Compare-and-swap attempts before giving up
        """
        self.user_repository = user_repository
        self.max_attempts = max_attempts

    async def select_next(
        self,
        needs: Collection[str] | None = None,
        excluded: Collection[UserId] = (),
    ) -> UserId | None:
        """Select a practitioner and increment their rotation index.

        Args:
            needs: Request needs used for specialization preference
            excluded: Practitioners who declined this request

        Returns:
            Selected practitioner ID, or None if the pool is empty

        Raises:
            ConcurrencyConflictError: If every attempt lost the race
        """
        with logfire.span(
            "rotation_service.select_next",
            needs=sorted(needs) if needs else [],
            excluded_count=len(excluded),
        ):
            for attempt in range(1, self.max_attempts + 1):
                practitioners = await self.user_repository.find_by_role(
                    UserRole.PRACTITIONER
                )
                candidates = order_candidates(practitioners, needs, excluded)
                if not candidates:
                    logfire.info(
                        "No practitioner available",
                        pool_size=len(practitioners),
                        excluded_count=len(excluded),
                    )
                    return None

                chosen = candidates[0]
                current = chosen.rotation_index
                if await self.user_repository.compare_and_set_rotation_index(
                    chosen.id, current, current + 1
                ):
                    logfire.info(
                        "Practitioner selected",
                        practitioner_id=str(chosen.id),
                        rotation_index=current + 1,
                        attempt=attempt,
                    )
                    return chosen.id

                logfire.warn(
                    "Rotation index changed concurrently, retrying",
                    practitioner_id=str(chosen.id),
                    attempt=attempt,
                )

            raise ConcurrencyConflictError(
                f"Could not select a practitioner after {self.max_attempts} attempts"
            )
