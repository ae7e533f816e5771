"""SQLAlchemy table definitions for Passage.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Index, MetaData, String, Table, Text, text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column(
        "id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")
    ),
    Column("username", String(255), nullable=False, unique=True),
    Column("display_name", String(255), nullable=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("email", String(255), nullable=True),
    Column("provider", String(50), nullable=False),  # Primary provider
    Column(
        "provider_data", JSONB, nullable=False, server_default=text("'{}'::jsonb")
    ),
    # provider name -> provider data
    Column(
        "additional_providers_data",
        JSONB,
        nullable=False,
        server_default=text("'{}'::jsonb"),
    ),
    Column(
        "roles", ARRAY(String(50)), nullable=False, server_default=text("'{user}'")
    ),
    Column("password_hash", Text, nullable=True),
    Column("salt", Text, nullable=True),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
)

Index("idx_users_email", users_table.c.email)
Index("idx_users_provider", users_table.c.provider)
# GIN indexes serve the JSONB containment lookups of provider identities
Index(
    "idx_users_provider_data",
    users_table.c.provider_data,
    postgresql_using="gin",
)
Index(
    "idx_users_additional_providers_data",
    users_table.c.additional_providers_data,
    postgresql_using="gin",
)
