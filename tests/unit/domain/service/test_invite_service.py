"""Unit tests for InviteService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from cleartrack.domain.error import (
    AlreadyUsedError,
    ExpiredError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cleartrack.domain.model import (
    ClientInvitePayload,
    Invite,
    PractitionerInvitePayload,
)
from cleartrack.domain.model.common import utcnow
from cleartrack.domain.repository import InviteRepository
from cleartrack.domain.service import InviteService
from cleartrack.domain.value import (
    ApplicationId,
    InviteId,
    InviteKind,
    InviteStatus,
    UserId,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

MOBILE = "+27 82 123 4567"
NORMALIZED_MOBILE = "+27821234567"


async def create_client_invite(
    invite_service: InviteService,
    issuer_id: UserId,
    mobile: str | None = MOBILE,
    ttl: timedelta = timedelta(hours=24),
) -> Invite:
    return await invite_service.create_invite(
        kind=InviteKind.CLIENT,
        match_key=mobile,
        issuer_id=issuer_id,
        payload=ClientInvitePayload(client_name="Thabo"),
        ttl=ttl,
        code_length=6,
    )


async def create_practitioner_invite(
    invite_service: InviteService, ttl: timedelta = timedelta(days=7)
) -> Invite:
    return await invite_service.create_invite(
        kind=InviteKind.PRACTITIONER,
        match_key="Jane@Example.com",
        issuer_id=UserId(uuid4()),
        payload=PractitionerInvitePayload(
            application_id=ApplicationId(uuid4()),
            email="jane@example.com",
            first_name="Jane",
            last_name="Doe",
            practice_name="Doe Accounting",
        ),
        ttl=ttl,
        code_length=8,
    )


class TestCreateInvite:
    """Tests for create_invite."""

    @pytest.mark.asyncio
    async def test_client_invite_is_pending_with_normalized_mobile(self, unit_env):
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        issuer_id = UserId(uuid4())

        # Act
        invite = await create_client_invite(invite_service, issuer_id)

        # Assert
        assert invite.status == InviteStatus.PENDING
        assert invite.match_key == NORMALIZED_MOBILE
        assert invite.issuer_id == issuer_id
        assert len(invite.code) == 6 and invite.code.isdigit()
        assert invite.expires_at - invite.created_at == timedelta(hours=24)
        assert await invite_repo.find_by_id(invite.id) == invite

    @pytest.mark.asyncio
    async def test_client_invite_without_mobile(self, unit_env):
        """A client invite may be shared by link only."""
        invite_service = await unit_env.get(InviteService)

        invite = await create_client_invite(
            invite_service, UserId(uuid4()), mobile=None
        )

        assert invite.match_key is None

    @pytest.mark.asyncio
    async def test_malformed_mobile_raises_validation_error(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        with pytest.raises(ValidationError, match="Invalid mobile number format"):
            await create_client_invite(invite_service, UserId(uuid4()), mobile="12345")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "mobile", ["082-123-4567", "(082) 123 4567", "082.123.4567", " 0821234567 "]
    )
    async def test_separators_are_stripped_from_mobile(self, unit_env, mobile):
        invite_service = await unit_env.get(InviteService)

        invite = await create_client_invite(
            invite_service, UserId(uuid4()), mobile=mobile
        )
        verified = await invite_service.verify_client_invite(
            "082 123 4567", invite.code
        )

        assert invite.match_key == "0821234567"
        assert verified.id == invite.id

    @pytest.mark.asyncio
    async def test_letters_in_mobile_are_rejected(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        with pytest.raises(ValidationError):
            await create_client_invite(
                invite_service, UserId(uuid4()), mobile="082-CALL-NOW1"
            )

    @pytest.mark.asyncio
    async def test_practitioner_invite_uses_reserved_id_and_lowercased_email(
        self, unit_env
    ):
        invite_service = await unit_env.get(InviteService)
        reserved = InviteId(uuid4())

        invite = await invite_service.create_invite(
            kind=InviteKind.PRACTITIONER,
            match_key="Jane@Example.com",
            issuer_id=None,
            payload=PractitionerInvitePayload(
                application_id=ApplicationId(uuid4()),
                email="jane@example.com",
                first_name="Jane",
                last_name="Doe",
                practice_name="Doe Accounting",
            ),
            ttl=timedelta(days=7),
            code_length=8,
            invite_id=reserved,
        )

        assert invite.id == reserved
        assert invite.match_key == "jane@example.com"
        assert len(invite.code) == 8

    @pytest.mark.asyncio
    async def test_practitioner_invite_requires_email(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        with pytest.raises(ValidationError):
            await invite_service.create_invite(
                kind=InviteKind.PRACTITIONER,
                match_key=None,
                issuer_id=None,
                payload=PractitionerInvitePayload(
                    application_id=ApplicationId(uuid4()),
                    email="",
                    first_name="Jane",
                    last_name="Doe",
                    practice_name="Doe Accounting",
                ),
                ttl=timedelta(days=7),
                code_length=8,
            )


class TestVerifyClientInvite:
    """Tests for verify_client_invite and verify_client_invite_by_id."""

    @pytest.mark.asyncio
    async def test_verify_by_mobile_and_code(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await create_client_invite(invite_service, UserId(uuid4()))

        verified = await invite_service.verify_client_invite(
            "+27821234567", f" {invite.code} "
        )

        assert verified.id == invite.id

    @pytest.mark.asyncio
    async def test_wrong_code_is_not_found(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await create_client_invite(invite_service, UserId(uuid4()))
        wrong = "0" * 6 if invite.code != "0" * 6 else "1" * 6

        with pytest.raises(NotFoundError, match="Invalid invite code or mobile number"):
            await invite_service.verify_client_invite(MOBILE, wrong)

    @pytest.mark.asyncio
    async def test_newest_pending_match_wins(self, unit_env):
        """Two pending invites with the same mobile and code: newest is used."""
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        now = utcnow()
        older, newer = (
            Invite(
                id=InviteId(uuid4()),
                kind=InviteKind.CLIENT,
                code="424242",
                match_key=NORMALIZED_MOBILE,
                issuer_id=UserId(uuid4()),
                created_at=now - timedelta(minutes=minutes),
                expires_at=now + timedelta(hours=1),
                payload=ClientInvitePayload(),
            )
            for minutes in (10, 1)
        )
        await invite_repo.save(older)
        await invite_repo.save(newer)

        verified = await invite_service.verify_client_invite(MOBILE, "424242")

        assert verified.id == newer.id

    @pytest.mark.asyncio
    async def test_expired_invite_is_marked_expired(self, unit_env):
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        invite = await create_client_invite(
            invite_service, UserId(uuid4()), ttl=timedelta(seconds=-1)
        )

        # Act & Assert
        with pytest.raises(ExpiredError, match="Invite code has expired"):
            await invite_service.verify_client_invite(MOBILE, invite.code)

        stored = await invite_repo.find_by_id(invite.id)
        assert stored is not None
        assert stored.status == InviteStatus.EXPIRED

        # Subsequent reads keep reporting expiry
        with pytest.raises(ExpiredError):
            await invite_service.verify_client_invite(MOBILE, invite.code)

    @pytest.mark.asyncio
    async def test_claimed_invite_reports_already_used(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await create_client_invite(invite_service, UserId(uuid4()))
        await invite_service.claim_invite(invite, UserId(uuid4()))

        with pytest.raises(AlreadyUsedError):
            await invite_service.verify_client_invite(MOBILE, invite.code)

    @pytest.mark.asyncio
    async def test_verify_by_id_requires_matching_code(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await create_client_invite(invite_service, UserId(uuid4()))
        wrong = "0" * 6 if invite.code != "0" * 6 else "1" * 6

        verified = await invite_service.verify_client_invite_by_id(
            invite.id, invite.code
        )
        assert verified.id == invite.id

        with pytest.raises(NotFoundError):
            await invite_service.verify_client_invite_by_id(invite.id, wrong)


class TestClaimInvite:
    """Tests for claim_invite."""

    @pytest.mark.asyncio
    async def test_only_one_of_two_verified_claims_succeeds(self, unit_env):
        """Both callers verify before either claims; only one claim wins."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite = await create_client_invite(invite_service, UserId(uuid4()))
        first = await invite_service.verify_client_invite(MOBILE, invite.code)
        second = await invite_service.verify_client_invite(MOBILE, invite.code)
        winner_id = UserId(uuid4())

        # Act
        claimed = await invite_service.claim_invite(first, winner_id)

        # Assert
        assert claimed.status == InviteStatus.ACCEPTED
        assert claimed.subject_id == winner_id
        assert claimed.claimed_at is not None
        with pytest.raises(AlreadyUsedError):
            await invite_service.claim_invite(second, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_practitioner_invite_claims_to_completed(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await create_practitioner_invite(invite_service)

        claimed = await invite_service.claim_invite(invite, UserId(uuid4()))

        assert claimed.status == InviteStatus.COMPLETED


class TestVerifyPractitionerInvite:
    """Tests for verify_practitioner_invite."""

    @pytest.mark.asyncio
    async def test_valid_token_and_code(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await create_practitioner_invite(invite_service)

        verified = await invite_service.verify_practitioner_invite(
            invite.id, invite.code
        )

        assert verified.id == invite.id

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        with pytest.raises(NotFoundError, match="Invalid registration link"):
            await invite_service.verify_practitioner_invite(
                InviteId(uuid4()), "12345678"
            )

    @pytest.mark.asyncio
    async def test_client_invite_id_is_not_a_registration_link(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        client_invite = await create_client_invite(invite_service, UserId(uuid4()))

        with pytest.raises(NotFoundError):
            await invite_service.verify_practitioner_invite(
                client_invite.id, client_invite.code
            )

    @pytest.mark.asyncio
    async def test_wrong_code_is_permission_denied(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await create_practitioner_invite(invite_service)
        wrong = "0" * 8 if invite.code != "0" * 8 else "1" * 8

        with pytest.raises(PermissionDeniedError, match="Invalid registration code"):
            await invite_service.verify_practitioner_invite(invite.id, wrong)

    @pytest.mark.asyncio
    async def test_expired_registration_link(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await create_practitioner_invite(
            invite_service, ttl=timedelta(seconds=-1)
        )

        with pytest.raises(ExpiredError, match="Registration link has expired"):
            await invite_service.verify_practitioner_invite(invite.id, invite.code)


class TestListIssuedInvites:
    """Tests for list_issued_invites."""

    @pytest.mark.asyncio
    async def test_newest_first_with_lapsed_pending_reported_expired(self, unit_env):
        # Arrange
        invite_service = await unit_env.get(InviteService)
        issuer_id = UserId(uuid4())
        lapsed = await create_client_invite(
            invite_service, issuer_id, ttl=timedelta(seconds=-1)
        )
        live = await create_client_invite(invite_service, issuer_id)
        await create_client_invite(invite_service, UserId(uuid4()))

        # Act
        invites = await invite_service.list_issued_invites(issuer_id)

        # Assert
        assert [i.id for i in invites] == [live.id, lapsed.id]
        assert invites[0].status == InviteStatus.PENDING
        assert invites[1].status == InviteStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_status_filter_applies_after_expiry(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        issuer_id = UserId(uuid4())
        lapsed = await create_client_invite(
            invite_service, issuer_id, ttl=timedelta(seconds=-1)
        )
        await create_client_invite(invite_service, issuer_id)

        expired = await invite_service.list_issued_invites(
            issuer_id, status=InviteStatus.EXPIRED
        )

        assert [i.id for i in expired] == [lapsed.id]

    @pytest.mark.asyncio
    async def test_status_filter_applies_before_pagination(self, unit_env):
        # Arrange: one pending invite, then two newer claimed ones
        invite_service = await unit_env.get(InviteService)
        issuer_id = UserId(uuid4())
        pending = await create_client_invite(invite_service, issuer_id)
        for _ in range(2):
            newer = await create_client_invite(invite_service, issuer_id)
            await invite_service.claim_invite(newer, UserId(uuid4()))

        # Act
        page = await invite_service.list_issued_invites(
            issuer_id, status=InviteStatus.PENDING, limit=2
        )

        # Assert
        assert [i.id for i in page] == [pending.id]
        assert page[0].status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_lapsed_invites_page_as_expired(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        issuer_id = UserId(uuid4())
        lapsed = await create_client_invite(
            invite_service, issuer_id, ttl=timedelta(seconds=-1)
        )
        live = [await create_client_invite(invite_service, issuer_id) for _ in "ab"]

        expired = await invite_service.list_issued_invites(
            issuer_id, status=InviteStatus.EXPIRED, limit=1
        )
        pending = await invite_service.list_issued_invites(
            issuer_id, status=InviteStatus.PENDING, offset=1
        )

        assert [(i.id, i.status) for i in expired] == [
            (lapsed.id, InviteStatus.EXPIRED)
        ]
        assert [i.id for i in pending] == [live[0].id]
