"""initial_schema

Create the ClearTrack schema:
- Users (client, practitioner and admin profiles)
- Credentials (email/password identities)
- Invites (client and practitioner invite ledger)
- Client requests (round-robin assignment)
- Practitioner applications (approval workflow)

Revision ID: 3c1f2a9d7e40
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f2a9d7e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    "user_role": ("client", "practitioner", "admin"),
    "invite_kind": ("client", "practitioner"),
    "invite_status": ("pending", "accepted", "expired", "completed"),
    "request_status": ("unassigned", "pending", "accepted"),
    "application_status": ("pending", "approved"),
}


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    for name, values in ENUMS.items():
        labels = ", ".join(f"'{v}'" for v in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(name="user_role", create_type=False),
            nullable=False,
        ),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("practitioner_id", sa.UUID(), nullable=True),
        sa.Column(
            "practitioner", postgresql.JSONB(astext_type=sa.Text()), nullable=True
        ),
        sa.Column(
            "rotation_index",
            sa.Integer(),
            server_default=sa.text("0"),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["practitioner_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("rotation_index >= 0", name="check_rotation_index"),
    )
    op.create_index("idx_users_role", "users", ["role"])
    op.create_index("idx_users_email", "users", ["email"])

    # ========================================================================
    # CREDENTIALS table
    # ========================================================================
    op.create_table(
        "credentials",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("email", name="uq_credentials_email"),
    )

    # ========================================================================
    # INVITES table
    # ========================================================================
    op.create_table(
        "invites",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "kind",
            postgresql.ENUM(name="invite_kind", create_type=False),
            nullable=False,
        ),
        sa.Column("code", sa.String(length=16), nullable=False),
        sa.Column("match_key", sa.String(length=255), nullable=True),
        sa.Column("issuer_id", sa.UUID(), nullable=True),
        sa.Column("subject_id", sa.UUID(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(name="invite_status", create_type=False),
            server_default="pending",
            nullable=False,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("claimed_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "payload",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["issuer_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.execute(
        "CREATE INDEX idx_invites_match "
        "ON invites (kind, match_key, code, created_at DESC)"
    )
    op.execute(
        "CREATE INDEX idx_invites_issuer ON invites (issuer_id, kind, created_at DESC)"
    )

    # ========================================================================
    # CLIENT_REQUESTS table
    # ========================================================================
    op.create_table(
        "client_requests",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("client_id", sa.UUID(), nullable=False),
        sa.Column("needs", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("assigned_practitioner_id", sa.UUID(), nullable=True),
        sa.Column(
            "declined_by",
            postgresql.ARRAY(sa.UUID()),
            server_default=sa.text("'{}'"),
            nullable=False,
        ),
        sa.Column(
            "status",
            postgresql.ENUM(name="request_status", create_type=False),
            server_default="unassigned",
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["client_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["assigned_practitioner_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("cardinality(needs) > 0", name="check_needs_not_empty"),
    )
    op.create_index(
        "idx_client_requests_assigned",
        "client_requests",
        ["assigned_practitioner_id", "status"],
    )
    op.create_index("idx_client_requests_client", "client_requests", ["client_id"])

    # ========================================================================
    # PRACTITIONER_APPLICATIONS table
    # ========================================================================
    op.create_table(
        "practitioner_applications",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column("practice_name", sa.String(length=255), nullable=False),
        sa.Column("practice_number", sa.String(length=100), nullable=True),
        sa.Column("sars_number", sa.String(length=100), nullable=True),
        sa.Column("years_experience", sa.Float(), nullable=False),
        sa.Column("qualifications", sa.Text(), nullable=False),
        sa.Column("specializations", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(name="application_status", create_type=False),
            server_default="pending",
            nullable=False,
        ),
        sa.Column("invite_token", sa.UUID(), nullable=True),
        sa.Column(
            "approval_email_sent",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("approved_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("years_experience >= 0", name="check_years_experience"),
    )
    op.create_index(
        "idx_applications_status",
        "practitioner_applications",
        ["status", "created_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("practitioner_applications")
    op.drop_table("client_requests")
    op.drop_table("invites")
    op.drop_table("credentials")
    op.drop_table("users")

    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
