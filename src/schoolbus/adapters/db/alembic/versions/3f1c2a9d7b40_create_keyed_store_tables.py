"""create keyed store tables

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2025-10-20 09:14:27.518302

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from schoolbus.adapters.db.sa_types import PORTABLE_JSON, UTCDateTime

# deal with alembic stuff
# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "keyed_records",
        sa.Column(
            "map_name",
            sa.String(length=64),
            nullable=False,
            comment="Logical map the record belongs to (e.g., 'drivers').",
        ),
        sa.Column(
            "record_key",
            sa.String(length=512),
            nullable=False,
            comment="Canonical JSON rendering of the composite key fields.",
        ),
        sa.Column(
            "value",
            PORTABLE_JSON,
            nullable=False,
            comment="Record value (JSON object).",
        ),
        sa.Column(
            "updated_at",
            UTCDateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="UTC timestamp of the last write.",
        ),
        sa.PrimaryKeyConstraint(
            "map_name", "record_key", name=op.f("pk_keyed_records")
        ),
        comment="Composite-keyed records. Full replace on every write.",
    )

    op.create_table(
        "counters",
        sa.Column(
            "name",
            sa.String(length=64),
            nullable=False,
            comment="Counter name (e.g., 'next_driver_id').",
        ),
        sa.Column(
            "value",
            sa.BigInteger(),
            nullable=False,
            comment="Next value to hand out.",
        ),
        sa.PrimaryKeyConstraint("name", name=op.f("pk_counters")),
        sa.CheckConstraint("value >= 1", name=op.f("ck_counters_positive_value")),
        comment="Named monotonic counters used to allocate IDs.",
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("counters")
    op.drop_table("keyed_records")
