from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _has_table(table_name: str) -> bool:
    inspector = sa.inspect(op.get_bind())
    return inspector.has_table(table_name)


def _uuid_pk() -> sa.Column:
    return sa.Column("id", sa.String(36), primary_key=True)


def _company_fk() -> sa.Column:
    return sa.Column(
        "company_id",
        sa.String(36),
        sa.ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(10, 2), nullable=False, server_default="0")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    if not _has_table("users"):
        op.create_table(
            "users",
            _uuid_pk(),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("password_hash", sa.String(), nullable=False),
            sa.Column("first_name", sa.String(), nullable=False),
            sa.Column("last_name", sa.String(), nullable=False),
            sa.Column("profile_image_url", sa.String(), nullable=True),
            sa.Column("role", sa.String(32), nullable=False, server_default="technician"),
            *_timestamps(),
        )
        op.create_index("ix_users_email", "users", ["email"], unique=True)

    if not _has_table("companies"):
        op.create_table(
            "companies",
            _uuid_pk(),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("plan", sa.String(32), nullable=False, server_default="pyme"),
            sa.Column("max_users", sa.Integer(), nullable=False, server_default="10"),
            sa.Column("max_assets", sa.Integer(), nullable=False, server_default="500"),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column("ruc", sa.String(32), nullable=True, unique=True),
            sa.Column("cedula", sa.String(32), nullable=True, unique=True),
            sa.Column("address", sa.Text(), nullable=True),
            sa.Column("phone", sa.String(64), nullable=True),
            sa.Column("email", sa.String(), nullable=True),
            *_timestamps(),
        )

    if not _has_table("user_companies"):
        op.create_table(
            "user_companies",
            _uuid_pk(),
            sa.Column(
                "user_id",
                sa.String(36),
                sa.ForeignKey("users.id", ondelete="CASCADE"),
                nullable=False,
                index=True,
            ),
            _company_fk(),
            sa.Column("role", sa.String(32), nullable=False, server_default="technician"),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.UniqueConstraint("user_id", "company_id", name="uq_user_companies_user_company"),
        )

    if not _has_table("assets"):
        op.create_table(
            "assets",
            _uuid_pk(),
            _company_fk(),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("type", sa.String(32), nullable=False, server_default="physical"),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("serial_number", sa.String(), nullable=True),
            sa.Column("model", sa.String(), nullable=True),
            sa.Column("manufacturer", sa.String(), nullable=True),
            sa.Column("purchase_date", sa.DateTime(), nullable=True),
            sa.Column("warranty_expiry", sa.DateTime(), nullable=True),
            _money("monthly_cost"),
            _money("annual_cost"),
            sa.Column("status", sa.String(32), nullable=False, server_default="active"),
            sa.Column("location", sa.String(), nullable=True),
            sa.Column("assigned_to", sa.String(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("application_type", sa.String(32), nullable=True),
            sa.Column("url", sa.String(), nullable=True),
            sa.Column("version", sa.String(), nullable=True),
            _money("domain_cost"),
            _money("ssl_cost"),
            _money("hosting_cost"),
            _money("server_cost"),
            sa.Column("domain_expiry", sa.DateTime(), nullable=True),
            sa.Column("ssl_expiry", sa.DateTime(), nullable=True),
            sa.Column("hosting_expiry", sa.DateTime(), nullable=True),
            sa.Column("server_expiry", sa.DateTime(), nullable=True),
            sa.Column(
                "assigned_technician_id",
                sa.String(36),
                sa.ForeignKey("users.id", ondelete="SET NULL"),
                nullable=True,
            ),
            *_timestamps(),
        )

    if not _has_table("contracts"):
        op.create_table(
            "contracts",
            _uuid_pk(),
            _company_fk(),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("vendor", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("contract_type", sa.String(), nullable=False),
            sa.Column("start_date", sa.DateTime(), nullable=False),
            sa.Column("end_date", sa.DateTime(), nullable=False),
            sa.Column("renewal_date", sa.DateTime(), nullable=True),
            _money("monthly_cost"),
            _money("annual_cost"),
            sa.Column("status", sa.String(32), nullable=False, server_default="active"),
            sa.Column("auto_renewal", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("notes", sa.Text(), nullable=True),
            *_timestamps(),
        )

    if not _has_table("licenses"):
        op.create_table(
            "licenses",
            _uuid_pk(),
            _company_fk(),
            sa.Column(
                "asset_id",
                sa.String(36),
                sa.ForeignKey("assets.id", ondelete="SET NULL"),
                nullable=True,
                index=True,
            ),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("vendor", sa.String(), nullable=False),
            sa.Column("license_key", sa.String(), nullable=True),
            sa.Column("license_type", sa.String(), nullable=True),
            sa.Column("max_users", sa.Integer(), nullable=True),
            sa.Column("current_users", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("purchase_date", sa.DateTime(), nullable=True),
            sa.Column("expiry_date", sa.DateTime(), nullable=True),
            _money("monthly_cost"),
            _money("annual_cost"),
            sa.Column("status", sa.String(32), nullable=False, server_default="active"),
            sa.Column("notes", sa.Text(), nullable=True),
            *_timestamps(),
        )

    if not _has_table("maintenance_records"):
        op.create_table(
            "maintenance_records",
            _uuid_pk(),
            sa.Column(
                "asset_id",
                sa.String(36),
                sa.ForeignKey("assets.id", ondelete="CASCADE"),
                nullable=False,
                index=True,
            ),
            _company_fk(),
            sa.Column("maintenance_type", sa.String(32), nullable=False),
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=False),
            sa.Column("vendor", sa.String(), nullable=True),
            _money("cost"),
            sa.Column("scheduled_date", sa.DateTime(), nullable=True),
            sa.Column("completed_date", sa.DateTime(), nullable=True),
            sa.Column("next_maintenance_date", sa.DateTime(), nullable=True),
            sa.Column("status", sa.String(32), nullable=False, server_default="scheduled"),
            sa.Column("priority", sa.String(16), nullable=False, server_default="medium"),
            sa.Column("technician", sa.String(), nullable=True),
            sa.Column("parts_replaced", sa.Text(), nullable=True),
            sa.Column("time_spent", sa.Integer(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            *_timestamps(),
        )

    if not _has_table("activity_logs"):
        op.create_table(
            "activity_logs",
            _uuid_pk(),
            _company_fk(),
            sa.Column(
                "user_id",
                sa.String(36),
                sa.ForeignKey("users.id", ondelete="CASCADE"),
                nullable=False,
                index=True,
            ),
            sa.Column("action", sa.String(32), nullable=False),
            sa.Column("entity_type", sa.String(32), nullable=False),
            sa.Column("entity_id", sa.String(36), nullable=True),
            sa.Column("entity_name", sa.String(), nullable=True),
            sa.Column("details", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now(), index=True),
        )

    if not _has_table("notifications"):
        op.create_table(
            "notifications",
            _uuid_pk(),
            _company_fk(),
            sa.Column(
                "user_id",
                sa.String(36),
                sa.ForeignKey("users.id", ondelete="CASCADE"),
                nullable=False,
                index=True,
            ),
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("message", sa.Text(), nullable=False),
            sa.Column("type", sa.String(32), nullable=False, server_default="expiry_alert"),
            sa.Column("entity_type", sa.String(32), nullable=True),
            sa.Column("entity_id", sa.String(36), nullable=True),
            sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now(), index=True),
        )


def downgrade() -> None:
    for table_name in (
        "notifications",
        "activity_logs",
        "maintenance_records",
        "licenses",
        "contracts",
        "assets",
        "user_companies",
        "companies",
        "users",
    ):
        if _has_table(table_name):
            op.drop_table(table_name)
