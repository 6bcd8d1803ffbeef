"""SQLAlchemy table definitions for ClearTrack.

These table definitions are used with SQLAlchemy Core and manual mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (profiles keyed by identity provider user id)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "role",
        Enum("client", "practitioner", "admin", name="user_role", create_type=False),
        nullable=False,
    ),
    Column("email", String(255), nullable=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column(
        "practitioner_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),  # Linked practitioner (clients)
    Column("practitioner", JSONB, nullable=True),  # PractitionerProfile
    # Kept out of the JSONB profile so compare-and-swap is a single UPDATE
    Column("rotation_index", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("rotation_index >= 0", name="check_rotation_index"),
)

Index("idx_users_role", users_table.c.role)
Index("idx_users_email", users_table.c.email)

# ============================================================================
# CREDENTIALS TABLE (email/password identity provider)
# ============================================================================
credentials_table = Table(
    "credentials",
    metadata,
    Column("user_id", UUID, primary_key=True),
    Column("email", String(255), nullable=False, unique=True),  # Lower-cased
    Column("password_hash", String(255), nullable=False),  # bcrypt
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# INVITES TABLE (client and practitioner invites)
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "kind",
        Enum("client", "practitioner", name="invite_kind", create_type=False),
        nullable=False,
    ),
    Column("code", String(16), nullable=False),
    Column("match_key", String(255), nullable=True),  # Mobile or email
    Column(
        "issuer_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("subject_id", UUID, nullable=True),
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "expired",
            "completed",
            name="invite_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("claimed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("payload", JSONB, nullable=False, server_default="{}"),
)

# Verification lookup: newest match for (kind, match_key, code)
Index(
    "idx_invites_match",
    invites_table.c.kind,
    invites_table.c.match_key,
    invites_table.c.code,
    invites_table.c.created_at.desc(),
)
Index(
    "idx_invites_issuer",
    invites_table.c.issuer_id,
    invites_table.c.kind,
    invites_table.c.created_at.desc(),
)

# ============================================================================
# CLIENT REQUESTS TABLE
# ============================================================================
client_requests_table = Table(
    "client_requests",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "client_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("needs", ARRAY(Text), nullable=False),
    Column("message", Text, nullable=True),
    Column(
        "assigned_practitioner_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("declined_by", ARRAY(UUID), nullable=False, server_default="{}"),
    Column(
        "status",
        Enum(
            "unassigned",
            "pending",
            "accepted",
            name="request_status",
            create_type=False,
        ),
        nullable=False,
        server_default="unassigned",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("cardinality(needs) > 0", name="check_needs_not_empty"),
)

Index(
    "idx_client_requests_assigned",
    client_requests_table.c.assigned_practitioner_id,
    client_requests_table.c.status,
)
Index("idx_client_requests_client", client_requests_table.c.client_id)

# ============================================================================
# PRACTITIONER APPLICATIONS TABLE
# ============================================================================
practitioner_applications_table = Table(
    "practitioner_applications",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("first_name", String(255), nullable=False),
    Column("last_name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(50), nullable=False),
    Column("practice_name", String(255), nullable=False),
    Column("practice_number", String(100), nullable=True),
    Column("sars_number", String(100), nullable=True),
    Column("years_experience", Float, nullable=False),
    Column("qualifications", Text, nullable=False),
    Column("specializations", ARRAY(Text), nullable=False),
    Column("bio", Text, nullable=True),
    Column("message", Text, nullable=True),
    Column(
        "status",
        Enum("pending", "approved", name="application_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column("invite_token", UUID, nullable=True),
    Column("approval_email_sent", Boolean, nullable=False, server_default="false"),
    Column("approved_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("years_experience >= 0", name="check_years_experience"),
)

Index(
    "idx_applications_status",
    practitioner_applications_table.c.status,
    practitioner_applications_table.c.created_at,
)
