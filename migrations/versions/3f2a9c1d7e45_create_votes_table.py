"""create votes table

Votes on news posts, comments and issues. Item ids are stored in canonical
string form since items are keyed by UUID or by free-form string.

Revision ID: 3f2a9c1d7e45
Revises:
Create Date: 2026-10-18 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e45"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.create_table(
        "votes",
        sa.Column(
            "id",
            postgresql.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("item", sa.String(length=255), nullable=False),
        sa.Column("voter", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Integer(), server_default="1", nullable=False),
        # NULL marks votes cast before items were typed (counted as news)
        sa.Column("item_type", sa.String(length=50), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("item", "voter", "item_type", name="unique_vote"),
    )
    op.create_index("idx_votes_item_type_item", "votes", ["item_type", "item"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_votes_item_type_item", table_name="votes")
    op.drop_table("votes")
