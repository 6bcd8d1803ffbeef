"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM. JSONB columns (invite payloads,
practitioner profiles) are dumped with ``mode="json"``.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from cleartrack.domain.model import (
    ClientInvitePayload,
    ClientRequest,
    Credential,
    Invite,
    PractitionerApplication,
    PractitionerInvitePayload,
    PractitionerProfile,
    User,
)
from cleartrack.domain.value import (
    ApplicationId,
    ApplicationStatus,
    InviteId,
    InviteKind,
    InviteStatus,
    RequestId,
    RequestStatus,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Practitioners always get a profile; the rotation counter lives in its
    own column and is merged into it here.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    role = UserRole(row["role"])
    profile_data = row.get("practitioner")
    practitioner = None
    if profile_data is not None or role == UserRole.PRACTITIONER:
        practitioner = PractitionerProfile(
            **(profile_data or {}), rotation_index=row.get("rotation_index") or 0
        )

    practitioner_id = _optional_uuid(row.get("practitioner_id"))
    return User(
        id=UserId(_uuid(row["id"])),
        role=role,
        email=row.get("email"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        practitioner_id=UserId(practitioner_id) if practitioner_id else None,
        practitioner=practitioner,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "role": user.role.value,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "practitioner_id": user.practitioner_id,
        "practitioner": (
            user.practitioner.model_dump(mode="json", exclude={"rotation_index"})
            if user.practitioner
            else None
        ),
        "rotation_index": user.rotation_index,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_credential(row: Dict[str, Any]) -> Credential:
    """Convert database row to Credential domain model."""
    return Credential(
        user_id=UserId(_uuid(row["user_id"])),
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
    )


def credential_to_dict(credential: Credential) -> Dict[str, Any]:
    """Convert Credential domain model to database dict."""
    return credential.model_dump()


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    The payload struct is chosen by the row's kind.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    kind = InviteKind(row["kind"])
    payload_data = row.get("payload") or {}
    if kind == InviteKind.PRACTITIONER:
        payload = PractitionerInvitePayload.model_validate(payload_data)
    else:
        payload = ClientInvitePayload.model_validate(payload_data)

    issuer_id = _optional_uuid(row.get("issuer_id"))
    subject_id = _optional_uuid(row.get("subject_id"))
    return Invite(
        id=InviteId(_uuid(row["id"])),
        kind=kind,
        code=row["code"],
        match_key=row.get("match_key"),
        issuer_id=UserId(issuer_id) if issuer_id else None,
        subject_id=UserId(subject_id) if subject_id else None,
        status=InviteStatus(row["status"]),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        claimed_at=row.get("claimed_at"),
        payload=payload,
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = invite.model_dump(exclude={"payload"})
    data["kind"] = invite.kind.value
    data["status"] = invite.status.value
    data["payload"] = invite.payload.model_dump(mode="json")
    return data


def row_to_client_request(row: Dict[str, Any]) -> ClientRequest:
    """Convert database row to ClientRequest domain model.

    Args:
        row: Database row as dict

    Returns:
        ClientRequest domain model
    """
    assigned = _optional_uuid(row.get("assigned_practitioner_id"))
    return ClientRequest(
        id=RequestId(_uuid(row["id"])),
        client_id=UserId(_uuid(row["client_id"])),
        needs=frozenset(row["needs"]),
        message=row.get("message"),
        assigned_practitioner_id=UserId(assigned) if assigned else None,
        declined_by=tuple(UserId(_uuid(p)) for p in row.get("declined_by") or ()),
        status=RequestStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def client_request_to_dict(request: ClientRequest) -> Dict[str, Any]:
    """Convert ClientRequest domain model to database dict."""
    data = request.model_dump()
    data["needs"] = sorted(request.needs)
    data["declined_by"] = list(request.declined_by)
    data["status"] = request.status.value
    return data


def row_to_application(row: Dict[str, Any]) -> PractitionerApplication:
    """Convert database row to PractitionerApplication domain model.

    Args:
        row: Database row as dict

    Returns:
        PractitionerApplication domain model
    """
    invite_token = _optional_uuid(row.get("invite_token"))
    return PractitionerApplication(
        id=ApplicationId(_uuid(row["id"])),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        phone=row["phone"],
        practice_name=row["practice_name"],
        practice_number=row.get("practice_number"),
        sars_number=row.get("sars_number"),
        years_experience=row["years_experience"],
        qualifications=row["qualifications"],
        specializations=frozenset(row["specializations"]),
        bio=row.get("bio"),
        message=row.get("message"),
        status=ApplicationStatus(row["status"]),
        invite_token=InviteId(invite_token) if invite_token else None,
        approval_email_sent=row.get("approval_email_sent", False),
        approved_at=row.get("approved_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def application_to_dict(application: PractitionerApplication) -> Dict[str, Any]:
    """Convert PractitionerApplication domain model to database dict."""
    data = application.model_dump()
    data["specializations"] = sorted(application.specializations)
    data["status"] = application.status.value
    return data
