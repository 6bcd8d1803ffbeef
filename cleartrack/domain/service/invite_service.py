"""Invite ledger domain service."""

from datetime import timedelta
from uuid import uuid4

import logfire

from cleartrack.domain.error import (
    AlreadyUsedError,
    ExpiredError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cleartrack.domain.model.common import utcnow
from cleartrack.domain.model.invite import Invite, InvitePayload
from cleartrack.domain.repository import InviteRepository
from cleartrack.domain.value import (
    EmailAddress,
    InviteId,
    InviteKind,
    InviteStatus,
    MobileNumber,
    UserId,
)
from cleartrack.util.code import generate_code

from .base import Service


def normalize_mobile(mobile: str) -> str:
    """Normalise a mobile number or raise ValidationError."""
    try:
        return MobileNumber(mobile).root
    except ValueError:
        raise ValidationError("Invalid mobile number format")


class InviteService(Service):
    """Domain service for creating, verifying and claiming invites.

    Expiry is checked lazily: an invite read after its ``expires_at`` is
    marked expired at that moment, there is no background sweep.
    """

    def __init__(self, invite_repository: InviteRepository) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
        """
        self.invite_repository = invite_repository

    async def create_invite(
        self,
        kind: InviteKind,
        match_key: str | None,
        issuer_id: UserId | None,
        payload: InvitePayload,
        ttl: timedelta,
        code_length: int,
        invite_id: InviteId | None = None,
    ) -> Invite:
        """Create a pending invite with a fresh code.

        Args:
            kind: Invite kind
            match_key: Mobile number (client, optional) or email (practitioner)
            issuer_id: User issuing the invite
            payload: Kind-specific payload
            ttl: Time until expiry
            code_length: Number of digits in the code
            invite_id: Pre-allocated ID, generated when omitted

        Returns:
            Created invite

        Raises:
            ValidationError: If the match key is malformed or missing
        """
        with logfire.span(
            "invite_service.create_invite",
            kind=kind.value,
            issuer_id=str(issuer_id) if issuer_id else None,
        ):
            normalized_key = self._normalize_match_key(kind, match_key)
            now = utcnow()
            invite = Invite(
                id=invite_id or InviteId(uuid4()),
                kind=kind,
                code=generate_code(code_length),
                match_key=normalized_key,
                issuer_id=issuer_id,
                status=InviteStatus.PENDING,
                created_at=now,
                expires_at=now + ttl,
                payload=payload,
            )

            saved = await self.invite_repository.save(invite)
            logfire.info(
                "Invite created",
                invite_id=str(saved.id),
                kind=kind.value,
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def verify_client_invite(self, mobile: str, code: str) -> Invite:
        """Verify a client invite by mobile number and code.

        Picks the newest pending match. When nothing is pending, the newest
        match in any status explains the failure.

        Args:
            mobile: Mobile number as entered
            code: Invite code as entered

        Returns:
            The verified pending invite

        Raises:
            ValidationError: If the mobile number is malformed
            NotFoundError: If no invite matches
            ExpiredError: If the invite has expired
            AlreadyUsedError: If the invite was already claimed
        """
        match_key = normalize_mobile(mobile)
        with logfire.span("invite_service.verify_client_invite"):
            invite = await self.invite_repository.find_latest_by_match(
                InviteKind.CLIENT, match_key, code.strip(), InviteStatus.PENDING
            )
            if invite is None:
                invite = await self.invite_repository.find_latest_by_match(
                    InviteKind.CLIENT, match_key, code.strip()
                )
            if invite is None:
                logfire.warn("Client invite not found")
                raise NotFoundError(
                    "Invite", match_key, "Invalid invite code or mobile number"
                )
            return await self._check_state(invite, "Invite code has expired")

    async def verify_client_invite_by_id(
        self, invite_id: InviteId, code: str
    ) -> Invite:
        """Verify a client invite from an invite link (ID and code).

        Raises:
            NotFoundError: If the invite is absent or the code does not match
            ExpiredError: If the invite has expired
            AlreadyUsedError: If the invite was already claimed
        """
        with logfire.span(
            "invite_service.verify_client_invite_by_id", invite_id=str(invite_id)
        ):
            invite = await self.invite_repository.find_by_id(invite_id)
            if (
                invite is None
                or invite.kind != InviteKind.CLIENT
                or invite.code != code.strip()
            ):
                logfire.warn("Client invite link invalid", invite_id=str(invite_id))
                raise NotFoundError(
                    "Invite", str(invite_id), "Invalid invite code or link"
                )
            return await self._check_state(invite, "Invite code has expired")

    async def verify_practitioner_invite(self, token: InviteId, code: str) -> Invite:
        """Verify a practitioner registration invite.

        Args:
            token: Invite ID from the registration link
            code: Registration code

        Returns:
            The verified pending invite

        Raises:
            NotFoundError: If the token is unknown
            PermissionDeniedError: If the code is wrong
            ExpiredError: If the invite has expired
            AlreadyUsedError: If the invite was already used
        """
        with logfire.span(
            "invite_service.verify_practitioner_invite", token=str(token)[:8] + "..."
        ):
            invite = await self.invite_repository.find_by_id(token)
            if invite is None or invite.kind != InviteKind.PRACTITIONER:
                logfire.warn("Registration invite not found")
                raise NotFoundError("Invite", str(token), "Invalid registration link")

            if invite.code != code.strip():
                logfire.warn("Registration code mismatch", invite_id=str(invite.id))
                raise PermissionDeniedError("Invalid registration code")

            return await self._check_state(invite, "Registration link has expired")

    async def claim_invite(self, invite: Invite, subject_id: UserId) -> Invite:
        """Consume a verified invite on behalf of a user.

        The transition is a single conditional update, so of two concurrent
        claims on the same invite only one succeeds.

        Args:
            invite: Invite returned by a verify call
            subject_id: User claiming the invite

        Returns:
            The claimed invite

        Raises:
            AlreadyUsedError: If the invite is no longer pending
        """
        with logfire.span(
            "invite_service.claim_invite",
            invite_id=str(invite.id),
            subject_id=str(subject_id),
        ):
            claimed = await self.invite_repository.claim_if_pending(
                invite.id, invite.claimed_status, subject_id, utcnow()
            )
            if claimed is None:
                logfire.warn("Invite claim lost", invite_id=str(invite.id))
                raise AlreadyUsedError("This invite has already been used")

            logfire.info(
                "Invite claimed",
                invite_id=str(invite.id),
                status=claimed.status.value,
            )
            return claimed

    async def list_issued_invites(
        self,
        issuer_id: UserId,
        kind: InviteKind = InviteKind.CLIENT,
        status: InviteStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invite]:
        """List invites issued by a user, newest first.

        Pending invites already past expiry are reported as expired.

        Args:
            issuer_id: Issuing user
            kind: Invite kind
            status: Optional effective status filter, applied before pagination
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invites
        """
        with logfire.span(
            "invite_service.list_issued_invites",
            issuer_id=str(issuer_id),
            status=status.value if status else None,
        ):
            now = utcnow()
            issued = await self.invite_repository.find_by_issuer(
                issuer_id, kind, limit, offset, status=status, now=now
            )
            invites = [
                invite.model_copy(update={"status": invite.effective_status(now)})
                for invite in issued
            ]

            logfire.info(
                "Invites listed", issuer_id=str(issuer_id), count=len(invites)
            )
            return invites

    async def _check_state(self, invite: Invite, expired_message: str) -> Invite:
        """Apply the expiry and single-use rules to a looked-up invite."""
        if invite.status == InviteStatus.EXPIRED:
            raise ExpiredError(expired_message)

        if invite.status != InviteStatus.PENDING:
            logfire.warn(
                "Invite already used",
                invite_id=str(invite.id),
                status=invite.status.value,
            )
            raise AlreadyUsedError("This invite has already been used")

        if invite.is_expired(utcnow()):
            await self.invite_repository.expire_if_pending(invite.id)
            logfire.info("Invite expired on read", invite_id=str(invite.id))
            raise ExpiredError(expired_message)

        return invite

    @staticmethod
    def _normalize_match_key(kind: InviteKind, match_key: str | None) -> str | None:
        if kind == InviteKind.CLIENT:
            if match_key is None or not match_key.strip():
                return None
            return normalize_mobile(match_key)

        if not match_key:
            raise ValidationError("Practitioner invites require an email")
        try:
            return EmailAddress(match_key).root
        except ValueError:
            raise ValidationError("Invalid email address")
