"""initial showroom schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

VEHICLE_TABLES = ("bikes", "cars", "rickshaws", "loaders", "electric_bikes")
MONEY = sa.Numeric(14, 2)


class GUID(sa.TypeDecorator):
    impl = sa.CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import UUID

            return dialect.type_descriptor(UUID(as_uuid=True))
        return dialect.type_descriptor(sa.CHAR(36))


def _create_vehicle_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("brand", sa.String(length=120), nullable=False),
        sa.Column("model", sa.String(length=120), nullable=False),
        sa.Column("price", MONEY, nullable=False),
        sa.Column("color", sa.String(length=60), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("engine_number", sa.String(length=120), nullable=False, unique=True),
        sa.Column("chassis_number", sa.String(length=120), nullable=False, unique=True),
        sa.Column("partner", sa.String(length=255), nullable=True),
        sa.Column("partner_cnic", sa.String(length=15), nullable=True),
        sa.Column("showroom_id", GUID(), nullable=False),
        sa.Column("showroom_name", sa.String(length=255), nullable=False),
        sa.Column("date_added", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index(f"ix_{name}_status", name, ["status"], unique=False)
    op.create_index(f"ix_{name}_showroom_id", name, ["showroom_id"], unique=False)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="showroom"),
        sa.Column("showroom_name", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    for name in VEHICLE_TABLES:
        _create_vehicle_table(name)

    op.create_table(
        "sales",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("vehicle_id", GUID(), nullable=False),
        sa.Column("vehicle_type", sa.String(length=30), nullable=False),
        sa.Column("brand", sa.String(length=120), nullable=False),
        sa.Column("model", sa.String(length=120), nullable=False),
        sa.Column("color", sa.String(length=60), nullable=True),
        sa.Column("price", MONEY, nullable=False),
        sa.Column("total_amount", MONEY, nullable=False),
        sa.Column("payment_type", sa.String(length=20), nullable=False),
        sa.Column("paid_amount", MONEY, nullable=False),
        sa.Column("due_amount", MONEY, nullable=False),
        sa.Column("months", sa.Integer(), nullable=True),
        sa.Column("monthly_installment", MONEY, nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_cnic", sa.String(length=15), nullable=False),
        sa.Column("engine_number", sa.String(length=120), nullable=False),
        sa.Column("chassis_number", sa.String(length=120), nullable=False),
        sa.Column("showroom_id", GUID(), nullable=False),
        sa.Column("showroom_name", sa.String(length=255), nullable=False),
        sa.Column("sold_by_user_id", GUID(), nullable=False),
        sa.Column("sale_date", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_sales_vehicle_id", "sales", ["vehicle_id"], unique=False)
    op.create_index("ix_sales_showroom_id", "sales", ["showroom_id"], unique=False)
    op.create_index("ix_sales_showroom_sale_date", "sales", ["showroom_id", "sale_date"], unique=False)

    op.create_table(
        "audit_events",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("vehicle_type", sa.String(length=30), nullable=False),
        sa.Column("vehicle_id", GUID(), nullable=True),
        sa.Column("sale_id", GUID(), nullable=True),
        sa.Column("brand", sa.String(length=120), nullable=False),
        sa.Column("model", sa.String(length=120), nullable=False),
        sa.Column("price", MONEY, nullable=False),
        sa.Column("engine_number", sa.String(length=120), nullable=False),
        sa.Column("chassis_number", sa.String(length=120), nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=True),
        sa.Column("customer_cnic", sa.String(length=15), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("showroom_id", GUID(), nullable=False),
        sa.Column("showroom_name", sa.String(length=255), nullable=False),
        sa.Column("payment_type", sa.String(length=20), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("action_by", GUID(), nullable=False),
        sa.Column("partner", sa.String(length=255), nullable=False),
        sa.Column("partner_cnic", sa.String(length=15), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_audit_events_sale_id", "audit_events", ["sale_id"], unique=False)
    op.create_index("ix_audit_events_showroom_id", "audit_events", ["showroom_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_audit_events_showroom_id", table_name="audit_events")
    op.drop_index("ix_audit_events_sale_id", table_name="audit_events")
    op.drop_table("audit_events")
    op.drop_index("ix_sales_showroom_sale_date", table_name="sales")
    op.drop_index("ix_sales_showroom_id", table_name="sales")
    op.drop_index("ix_sales_vehicle_id", table_name="sales")
    op.drop_table("sales")
    for name in reversed(VEHICLE_TABLES):
        op.drop_index(f"ix_{name}_showroom_id", table_name=name)
        op.drop_index(f"ix_{name}_status", table_name=name)
        op.drop_table(name)
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
