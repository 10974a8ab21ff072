"""Initial schema — users, service groups, business cards, business card entities.

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


def upgrade() -> None:
    op.create_table(
        "smp_users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("login_name", sa.String(200), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "smp_service_groups",
        sa.Column("id", sa.String(100), primary_key=True),
        sa.Column("participant_scheme", sa.String(100), nullable=False),
        sa.Column("participant_value", sa.String(500), nullable=False),
        sa.Column("owner_id", UUID(as_uuid=True), sa.ForeignKey("smp_users.id"), nullable=False),
        sa.Column("extension", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "smp_business_cards",
        sa.Column(
            "id", sa.String(100),
            sa.ForeignKey("smp_service_groups.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("participant_scheme", sa.String(100), nullable=False),
        sa.Column("participant_value", sa.String(500), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "smp_business_card_entities",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "business_card_id", sa.String(100),
            sa.ForeignKey("smp_business_cards.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("names", sa.JSON, nullable=False),
        sa.Column("country_code", sa.String(2), nullable=False),
        sa.Column("geographical_information", sa.Text, nullable=True),
        sa.Column("identifiers", sa.JSON, nullable=False),
        sa.Column("website_uris", sa.JSON, nullable=False),
        sa.Column("contacts", sa.JSON, nullable=False),
        sa.Column("additional_information", sa.Text, nullable=True),
        sa.Column("registration_date", sa.Date, nullable=True),
    )
    op.create_index(
        "ix_smp_business_card_entities_card_position",
        "smp_business_card_entities", ["business_card_id", "position"],
    )


def downgrade() -> None:
    op.drop_index(
        "ix_smp_business_card_entities_card_position",
        table_name="smp_business_card_entities",
    )
    op.drop_table("smp_business_card_entities")
    op.drop_table("smp_business_cards")
    op.drop_table("smp_service_groups")
    op.drop_table("smp_users")
