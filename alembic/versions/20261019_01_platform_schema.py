"""Create the platform schema tables

Revision ID: 20261019_01
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

from saas_console.core.config import settings


# revision identifiers, used by Alembic.
revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None

SCHEMA = settings.PLATFORM_SCHEMA


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.execute(sa.schema.CreateSchema(SCHEMA, if_not_exists=True))

    op.create_table(
        "companies",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("schema_name", sa.String(length=63), nullable=False, unique=True),
        sa.Column("admin_email", sa.String(length=255), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
        schema=SCHEMA,
    )
    op.create_index("ix_companies_slug", "companies", ["slug"], unique=True, schema=SCHEMA)

    op.create_table(
        "packages",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="12"),
        sa.Column("options_json", sa.JSON(), nullable=False),
        *_timestamps(),
        schema=SCHEMA,
    )

    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "company_id",
            sa.Uuid(),
            sa.ForeignKey(f"{SCHEMA}.companies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "package_id",
            sa.Uuid(),
            sa.ForeignKey(f"{SCHEMA}.packages.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        *_timestamps(),
        schema=SCHEMA,
    )
    op.create_index("ix_subscriptions_company_id", "subscriptions", ["company_id"], schema=SCHEMA)
    op.create_index("ix_subscriptions_package_id", "subscriptions", ["package_id"], schema=SCHEMA)

    op.create_table(
        "superadmins",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        schema=SCHEMA,
    )
    op.create_index("ix_superadmins_email", "superadmins", ["email"], unique=True, schema=SCHEMA)

    op.create_table(
        "all_users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("user_type", sa.String(length=50), nullable=False),
        sa.Column(
            "company_id",
            sa.Uuid(),
            sa.ForeignKey(f"{SCHEMA}.companies.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        schema=SCHEMA,
    )

    op.create_index("ix_all_users_email", "all_users", ["email"], unique=True, schema=SCHEMA)
    op.create_index("ix_all_users_company_id", "all_users", ["company_id"], schema=SCHEMA)

    op.create_table(
        "auth_accounts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        schema=SCHEMA,
    )

    op.create_index("ix_auth_accounts_email", "auth_accounts", ["email"], unique=True, schema=SCHEMA)

    op.create_table(
        "auth_sessions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "account_id",
            sa.Uuid(),
            sa.ForeignKey(f"{SCHEMA}.auth_accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_type", sa.String(length=50), nullable=False),
        sa.Column(
            "company_id",
            sa.Uuid(),
            sa.ForeignKey(f"{SCHEMA}.companies.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("refresh_token", sa.String(length=1000), nullable=True),
        sa.Column("access_token", sa.String(length=1000), nullable=True),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("revoked_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        schema=SCHEMA,
    )
    op.create_index("ix_auth_sessions_account_id", "auth_sessions", ["account_id"], schema=SCHEMA)
    op.create_index(
        "ix_auth_sessions_refresh_token", "auth_sessions", ["refresh_token"], unique=True, schema=SCHEMA
    )

    op.create_table(
        "system_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("otp_enabled", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("otp_method", sa.String(length=10), nullable=False, server_default="email"),
        sa.Column("session_timeout", sa.Integer(), nullable=False, server_default="24"),
        sa.Column("max_login_attempts", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("require_password_change", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("password_expiry_days", sa.Integer(), nullable=False, server_default="90"),
        *_timestamps(),
        schema=SCHEMA,
    )


def downgrade() -> None:
    op.drop_table("system_settings", schema=SCHEMA)
    op.drop_index("ix_auth_sessions_refresh_token", table_name="auth_sessions", schema=SCHEMA)
    op.drop_index("ix_auth_sessions_account_id", table_name="auth_sessions", schema=SCHEMA)
    op.drop_table("auth_sessions", schema=SCHEMA)
    op.drop_index("ix_auth_accounts_email", table_name="auth_accounts", schema=SCHEMA)
    op.drop_table("auth_accounts", schema=SCHEMA)
    op.drop_index("ix_all_users_company_id", table_name="all_users", schema=SCHEMA)
    op.drop_index("ix_all_users_email", table_name="all_users", schema=SCHEMA)
    op.drop_table("all_users", schema=SCHEMA)
    op.drop_index("ix_superadmins_email", table_name="superadmins", schema=SCHEMA)
    op.drop_table("superadmins", schema=SCHEMA)
    op.drop_index("ix_subscriptions_package_id", table_name="subscriptions", schema=SCHEMA)
    op.drop_index("ix_subscriptions_company_id", table_name="subscriptions", schema=SCHEMA)
    op.drop_table("subscriptions", schema=SCHEMA)
    op.drop_table("packages", schema=SCHEMA)
    op.drop_index("ix_companies_slug", table_name="companies", schema=SCHEMA)
    op.drop_table("companies", schema=SCHEMA)
