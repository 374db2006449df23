"""baseline: users, inventory items, movement requests

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f1c2a9d7b10"
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum("ADMIN", "STAFF", "STOREKEEPER", "BASE_MANAGER", name="userrole")
request_type = sa.Enum("BORROW", "RETURN", name="requesttype")
request_status = sa.Enum(
    "PENDING", "PENDING_MANAGER", "APPROVED", "REJECTED", name="requeststatus"
)


def upgrade():
    op.create_table(
        "user_account",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("base", sa.String(length=80), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("role", user_role, nullable=False),
    )
    op.create_index("ix_user_account_email", "user_account", ["email"], unique=True)
    op.create_index("ix_user_account_base", "user_account", ["base"], unique=False)

    op.create_table(
        "inventory_item",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("no", sa.String(length=40), nullable=True),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("maker", sa.String(length=120), nullable=True),
        sa.Column("range", sa.String(length=120), nullable=True),
        sa.Column("type_model", sa.String(length=120), nullable=True),
        sa.Column("serial_no", sa.String(length=120), nullable=True),
        sa.Column("unit_price", sa.String(length=40), nullable=True),
        sa.Column("date", sa.String(length=40), nullable=True),
        sa.Column("po_no", sa.String(length=60), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("asset_no", sa.String(length=120), nullable=True),
        sa.Column("location", sa.String(length=120), nullable=False),
        sa.Column("equipment_status", sa.String(length=160), nullable=False),
        sa.Column("status", sa.String(length=40), nullable=True),
        sa.Column("sems_category", sa.String(length=120), nullable=True),
        sa.Column("physical_status", sa.String(length=120), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("current_location", sa.String(length=160), nullable=True),
        sa.Column("person_in_charge", sa.String(length=120), nullable=True),
        sa.Column("last_movement_date", sa.String(length=40), nullable=True),
        sa.Column("base", sa.String(length=80), nullable=False),
    )
    op.create_index("ix_inventory_item_serial_no", "inventory_item", ["serial_no"])
    op.create_index("ix_inventory_item_base", "inventory_item", ["base"])

    op.create_table(
        "movement_request",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("type", request_type, nullable=False),
        sa.Column("staff_id", sa.String(length=64), nullable=False),
        sa.Column("staff_name", sa.String(length=120), nullable=False),
        sa.Column("storekeeper_id", sa.String(length=64), nullable=True),
        sa.Column("manager_id", sa.String(length=64), nullable=True),
        sa.Column("admin_id", sa.String(length=64), nullable=True),
        sa.Column("base", sa.String(length=80), nullable=False),
        sa.Column("status", request_status, nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("target_location", sa.String(length=160), nullable=True),
        sa.Column("target_date", sa.String(length=40), nullable=True),
    )
    op.create_index("ix_movement_request_staff_id", "movement_request", ["staff_id"])
    op.create_index("ix_movement_request_base", "movement_request", ["base"])

    op.create_table(
        "request_item",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "request_id",
            sa.String(length=64),
            sa.ForeignKey("movement_request.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("item_id", sa.String(length=64), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("serial_no", sa.String(length=120), nullable=True),
    )
    op.create_index("ix_request_item_item_id", "request_item", ["item_id"])


def downgrade():
    op.drop_index("ix_request_item_item_id", table_name="request_item")
    op.drop_table("request_item")
    op.drop_index("ix_movement_request_base", table_name="movement_request")
    op.drop_index("ix_movement_request_staff_id", table_name="movement_request")
    op.drop_table("movement_request")
    op.drop_index("ix_inventory_item_base", table_name="inventory_item")
    op.drop_index("ix_inventory_item_serial_no", table_name="inventory_item")
    op.drop_table("inventory_item")
    op.drop_index("ix_user_account_base", table_name="user_account")
    op.drop_index("ix_user_account_email", table_name="user_account")
    op.drop_table("user_account")
    request_status.drop(op.get_bind(), checkfirst=True)
    request_type.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
