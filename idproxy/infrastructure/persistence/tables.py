"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Index,
    MetaData,
    SmallInteger,
    String,
    Table,
)

# Metadata object for all tables
metadata = MetaData()

ADDRESS = String(42)  # 0x + 40 hex chars

# ============================================================================
# IDENTITIES TABLE
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("address", ADDRESS, primary_key=True),
    Column("owner", ADDRESS, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


# ============================================================================
# MANAGERS TABLE
# ============================================================================
managers_table = Table(
    "managers",
    metadata,
    Column("address", ADDRESS, primary_key=True),
    Column("identity", ADDRESS, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_managers_identity", managers_table.c.identity)


# ============================================================================
# ROLES TABLE (one row per principal holding a role other than NONE)
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("manager", ADDRESS, primary_key=True),
    Column("principal", ADDRESS, primary_key=True),
    Column("role", SmallInteger, nullable=False),  # Role as int
    Column("updated_at", DateTime(timezone=True), nullable=False),
)


# ============================================================================
# NONCES TABLE (fingerprint -> counter, never reset)
# ============================================================================
nonces_table = Table(
    "nonces",
    metadata,
    Column("manager", ADDRESS, primary_key=True),
    Column("fingerprint", String(64), primary_key=True),  # sha3-256 hex
    Column("nonce", BigInteger, nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)
