"""SQLAlchemy table definitions for Tally.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    # Canonical item id: hyphenated UUID or the opaque string as submitted
    Column("item", String(255), nullable=False),
    Column("voter", String(255), nullable=False),
    Column("amount", Integer, nullable=False, server_default="1"),
    # NULL on votes cast before items were typed (counted as news)
    Column("item_type", String(50), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("item", "voter", "item_type", name="unique_vote"),
)

Index("idx_votes_item_type_item", votes_table.c.item_type, votes_table.c.item)
