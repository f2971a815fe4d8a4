"""Initial schema — profiles, claims, payments, withdrawals, settings, incidents, stops, logs.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name, sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("full_name", sa.Text, nullable=False),
        sa.Column("phone", sa.String(32), nullable=False, server_default=""),
        sa.Column("email", sa.Text, nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        _timestamp("created_at"),
    )

    op.create_table(
        "claims",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("bus_company", sa.Text, nullable=False),
        sa.Column("claim_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("incoming_payment_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("incoming_payment_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("incoming_payment_reference", sa.Text, nullable=True),
        sa.Column("cashbus_commission_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("customer_payout_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("customer_payout_completed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("customer_payout_date", sa.DateTime(timezone=True), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "incoming_payments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("claim_id", UUID(as_uuid=True), sa.ForeignKey("claims.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_source", sa.Text, nullable=True),
        sa.Column("payment_method", sa.Text, nullable=True),
        sa.Column("reference_number", sa.Text, nullable=True),
        sa.Column("received_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("recorded_by", UUID(as_uuid=True), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("commission_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("customer_payout", sa.Numeric(10, 2), nullable=True),
        sa.Column("customer_payout_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("customer_payout_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("customer_payout_reference", sa.Text, nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("ix_incoming_payments_claim_id", "incoming_payments", ["claim_id"])
    op.create_index(
        "ix_incoming_payments_customer_payout_status",
        "incoming_payments", ["customer_payout_status"],
    )

    op.create_table(
        "withdrawal_requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("claim_id", UUID(as_uuid=True), sa.ForeignKey("claims.id", ondelete="CASCADE"), nullable=False),
        sa.Column("incoming_payment_id", UUID(as_uuid=True), sa.ForeignKey("incoming_payments.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("bank_name", sa.Text, nullable=True),
        sa.Column("bank_branch", sa.Text, nullable=True),
        sa.Column("bank_account_number", sa.Text, nullable=True),
        sa.Column("bank_account_owner_name", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("user_notes", sa.Text, nullable=True),
        sa.Column("admin_notes", sa.Text, nullable=True),
        _timestamp("requested_at"),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        _timestamp("updated_at"),
    )
    op.create_index("ix_withdrawal_requests_user_id", "withdrawal_requests", ["user_id"])
    op.create_index("ix_withdrawal_requests_claim_id", "withdrawal_requests", ["claim_id"])
    op.create_index("ix_withdrawal_requests_status", "withdrawal_requests", ["status"])

    op.create_table(
        "app_settings",
        sa.Column("key", sa.Text, primary_key=True),
        sa.Column("value", sa.JSON, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        _timestamp("updated_at"),
        sa.Column("updated_by", UUID(as_uuid=True), nullable=True),
    )

    op.create_table(
        "incidents",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("bus_line", sa.Text, nullable=False),
        sa.Column("bus_company", sa.Text, nullable=False),
        sa.Column("station_name", sa.Text, nullable=False, server_default=""),
        sa.Column("user_gps_lat", sa.Float, nullable=False),
        sa.Column("user_gps_lng", sa.Float, nullable=False),
        sa.Column("incident_type", sa.String(20), nullable=False),
        sa.Column("incident_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.Column("verified", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("verification_data", sa.JSON, nullable=True),
        sa.Column("verification_timestamp", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="submitted"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "gtfs_stops",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("stop_id", sa.Text, nullable=False, unique=True),
        sa.Column("stop_code", sa.Text, nullable=True),
        sa.Column("stop_name", sa.Text, nullable=False),
        sa.Column("stop_lat", sa.Float, nullable=False),
        sa.Column("stop_lon", sa.Float, nullable=False),
    )
    op.create_index("ix_gtfs_stops_stop_code", "gtfs_stops", ["stop_code"])
    op.create_index("ix_gtfs_stops_stop_lat", "gtfs_stops", ["stop_lat"])
    op.create_index("ix_gtfs_stops_stop_lon", "gtfs_stops", ["stop_lon"])

    op.create_table(
        "execution_logs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("claim_id", UUID(as_uuid=True), nullable=True),
        sa.Column("performed_by", UUID(as_uuid=True), nullable=True),
        sa.Column("action_type", sa.String(50), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("details", sa.JSON, nullable=False),
        sa.Column("success", sa.Boolean, nullable=False, server_default="true"),
        _timestamp("created_at"),
    )
    op.create_index("ix_execution_logs_claim_id", "execution_logs", ["claim_id"])


def downgrade() -> None:
    op.drop_table("execution_logs")
    op.drop_table("gtfs_stops")
    op.drop_table("incidents")
    op.drop_table("app_settings")
    op.drop_table("withdrawal_requests")
    op.drop_table("incoming_payments")
    op.drop_table("claims")
    op.drop_table("profiles")
