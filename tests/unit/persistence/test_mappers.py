"""Tests for row <-> domain model mappers."""

from datetime import timedelta
from uuid import uuid4

from cleartrack.domain.model import (
    ClientInvitePayload,
    ClientRequest,
    Invite,
    PractitionerInvitePayload,
    PractitionerProfile,
    User,
)
from cleartrack.domain.model.common import utcnow
from cleartrack.domain.value import (
    ApplicationId,
    InviteId,
    InviteKind,
    RequestId,
    RequestStatus,
    UserId,
    UserRole,
)
from cleartrack.persistence.mappers import (
    client_request_to_dict,
    invite_to_dict,
    row_to_client_request,
    row_to_invite,
    row_to_user,
    user_to_dict,
)


class TestUserMapper:
    def test_rotation_index_lives_in_its_own_column(self):
        user = User(
            id=UserId(uuid4()),
            role=UserRole.PRACTITIONER,
            email="pat@example.com",
            practitioner=PractitionerProfile(
                practitioner_code="PRAC123456",
                specializations=frozenset({"tax"}),
                rotation_index=3,
            ),
        )

        row = user_to_dict(user)

        assert row["rotation_index"] == 3
        assert "rotation_index" not in row["practitioner"]
        assert sorted(row["practitioner"]["specializations"]) == ["tax"]
        assert row_to_user(row) == user

    def test_practitioner_row_without_profile_gets_one(self):
        now = utcnow()
        row = {
            "id": str(uuid4()),
            "role": "practitioner",
            "practitioner": None,
            "rotation_index": 2,
            "created_at": now,
            "updated_at": now,
        }

        user = row_to_user(row)

        assert user.practitioner is not None
        assert user.rotation_index == 2

    def test_client_row_has_no_profile(self):
        now = utcnow()
        practitioner_id = uuid4()
        row = {
            "id": uuid4(),
            "role": "client",
            "practitioner_id": str(practitioner_id),
            "practitioner": None,
            "rotation_index": 0,
            "created_at": now,
            "updated_at": now,
        }

        user = row_to_user(row)

        assert user.practitioner is None
        assert user.practitioner_id == practitioner_id


class TestInviteMapper:
    def test_payload_follows_kind(self):
        now = utcnow()
        application_id = ApplicationId(uuid4())
        invite = Invite(
            id=InviteId(uuid4()),
            kind=InviteKind.PRACTITIONER,
            code="12345678",
            match_key="thandi@example.com",
            created_at=now,
            expires_at=now + timedelta(days=7),
            payload=PractitionerInvitePayload(
                application_id=application_id,
                email="thandi@example.com",
                first_name="Thandi",
                last_name="Mokoena",
                practice_name="Mokoena Tax",
            ),
        )

        row = invite_to_dict(invite)
        mapped = row_to_invite(row)

        assert row["kind"] == "practitioner"
        assert row["payload"]["application_id"] == str(application_id)
        assert isinstance(mapped.payload, PractitionerInvitePayload)
        assert mapped == invite

    def test_client_row_with_empty_payload(self):
        now = utcnow()
        row = {
            "id": str(uuid4()),
            "kind": "client",
            "code": "123456",
            "status": "pending",
            "payload": None,
            "created_at": now,
            "expires_at": now + timedelta(hours=24),
        }

        invite = row_to_invite(row)

        assert invite.payload == ClientInvitePayload()
        assert invite.match_key is None
        assert invite.issuer_id is None


class TestClientRequestMapper:
    def test_decline_order_is_kept(self):
        decliners = tuple(UserId(uuid4()) for _ in range(3))
        request = ClientRequest(
            id=RequestId(uuid4()),
            client_id=UserId(uuid4()),
            needs=frozenset({"tax", "audit"}),
            declined_by=decliners,
            status=RequestStatus.UNASSIGNED,
        )

        row = client_request_to_dict(request)

        assert row["needs"] == ["audit", "tax"]
        assert row["declined_by"] == list(decliners)
        assert row_to_client_request(row) == request
