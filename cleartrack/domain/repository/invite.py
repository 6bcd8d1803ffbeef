"""Invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from cleartrack.domain.model.invite import Invite
from cleartrack.domain.value import InviteId, InviteKind, InviteStatus, UserId


class InviteRepository(ABC):
    """Repository for Invite entity.

    Status transitions go through the conditional ``*_if_pending`` methods,
    which only touch the row while it is still pending and report whether
    they did.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier (the registration token
                for practitioner invites)

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_latest_by_match(
        self,
        kind: InviteKind,
        match_key: str,
        code: str,
        status: InviteStatus | None = None,
    ) -> Invite | None:
        """Find the most recently created invite matching key and code.

        Args:
            kind: Invite kind
            match_key: Normalised mobile number or email
            code: Invite code
            status: Optional status filter

        Returns:
            Newest matching invite by created_at, None if there is none
        """
        pass

    @abstractmethod
    async def find_by_issuer(
        self,
        issuer_id: UserId,
        kind: InviteKind,
        limit: int = 50,
        offset: int = 0,
        status: InviteStatus | None = None,
        now: datetime | None = None,
    ) -> list[Invite]:
        """Find invites issued by a user, newest first.

        The status filter applies before pagination and matches the
        effective status at ``now``: a pending row past its expiry counts
        as expired, not pending.

        Args:
            issuer_id: Issuing user
            kind: Invite kind
            limit: Maximum number of results
            offset: Number of results to skip
            status: Optional effective status to match
            now: Reference time for expiry, defaults to the current time

        Returns:
            List of invites
        """
        pass

    @abstractmethod
    async def save(self, invite: Invite) -> Invite:
        """Save an invite (create or update).

        Args:
            invite: The invite to save

        Returns:
            The saved invite
        """
        pass

    @abstractmethod
    async def claim_if_pending(
        self,
        invite_id: InviteId,
        status: InviteStatus,
        subject_id: UserId,
        claimed_at: datetime,
    ) -> Invite | None:
        """Atomically move a pending invite to a claimed status.

        Args:
            invite_id: Invite to claim
            status: Claimed status (accepted or completed)
            subject_id: User claiming the invite
            claimed_at: Claim timestamp

        Returns:
            The updated invite, or None if it was no longer pending
        """
        pass

    @abstractmethod
    async def expire_if_pending(self, invite_id: InviteId) -> bool:
        """Atomically mark a pending invite as expired.

        Returns:
            True if this call performed the transition
        """
        pass
