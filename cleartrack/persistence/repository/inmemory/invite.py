"""In-memory invite repository for testing."""

from datetime import datetime
from typing import Optional

from cleartrack.domain.model.common import utcnow
from cleartrack.domain.model.invite import Invite
from cleartrack.domain.repository.invite import InviteRepository
from cleartrack.domain.value import InviteId, InviteKind, InviteStatus, UserId


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self) -> None:
        self._invites: dict[InviteId, Invite] = {}

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        return self._invites.get(invite_id)

    async def find_latest_by_match(
        self,
        kind: InviteKind,
        match_key: str,
        code: str,
        status: Optional[InviteStatus] = None,
    ) -> Optional[Invite]:
        """Find the newest invite matching key and code."""
        matches = [
            invite
            for invite in self._invites.values()
            if invite.kind == kind
            and invite.match_key == match_key
            and invite.code == code
            and (status is None or invite.status == status)
        ]
        if not matches:
            return None
        return max(matches, key=lambda invite: invite.created_at)

    async def find_by_issuer(
        self,
        issuer_id: UserId,
        kind: InviteKind,
        limit: int = 50,
        offset: int = 0,
        status: Optional[InviteStatus] = None,
        now: Optional[datetime] = None,
    ) -> list[Invite]:
        """Find invites by issuer and effective status, newest first."""
        now = now or utcnow()
        matches = [
            invite
            for invite in self._invites.values()
            if invite.issuer_id == issuer_id
            and invite.kind == kind
            and (status is None or invite.effective_status(now) == status)
        ]
        matches.sort(key=lambda invite: invite.created_at, reverse=True)
        return matches[offset : offset + limit]

    async def save(self, invite: Invite) -> Invite:
        """Save an invite (create or update)."""
        self._invites[invite.id] = invite
        return invite

    async def claim_if_pending(
        self,
        invite_id: InviteId,
        status: InviteStatus,
        subject_id: UserId,
        claimed_at: datetime,
    ) -> Optional[Invite]:
        """Claim the invite if it is still pending."""
        invite = self._invites.get(invite_id)
        if invite is None or invite.status != InviteStatus.PENDING:
            return None

        claimed = invite.model_copy(
            update={
                "status": status,
                "subject_id": subject_id,
                "claimed_at": claimed_at,
            }
        )
        self._invites[invite_id] = claimed
        return claimed

    async def expire_if_pending(self, invite_id: InviteId) -> bool:
        """Expire the invite if it is still pending."""
        invite = self._invites.get(invite_id)
        if invite is None or invite.status != InviteStatus.PENDING:
            return False

        self._invites[invite_id] = invite.model_copy(
            update={"status": InviteStatus.EXPIRED}
        )
        return True
