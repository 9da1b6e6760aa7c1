"""SQLAlchemy Core table definitions for the cipherpad database.

Identity tokens are opaque text and appear only as key columns; there is
no identities table. An identity "exists" while it owns device rows.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
)

metadata = MetaData()

# DeviceSet: alias -> public_key per identity. Alias is unique per identity;
# public keys may repeat across aliases.
devices = Table(
    "devices",
    metadata,
    Column("identity", Text, nullable=False),
    Column("alias", Text, nullable=False),
    Column("public_key", Text, nullable=False),
    Column("created", Text, nullable=False),
    PrimaryKeyConstraint("identity", "alias"),
)

# SecretRecord: public_key -> ciphertext per identity.
secrets = Table(
    "secrets",
    metadata,
    Column("identity", Text, nullable=False),
    Column("public_key", Text, nullable=False),
    Column("ciphertext", Text, nullable=False),
    Column("updated", Text, nullable=False),
    PrimaryKeyConstraint("identity", "public_key"),
)

note_lists = Table(
    "note_lists",
    metadata,
    Column("identity", Text, primary_key=True),
    Column("created", Text, nullable=False),
)

notes = Table(
    "notes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("identity", Text, ForeignKey("note_lists.identity"), nullable=False),
    Column("encrypted_text", Text, nullable=False),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

id_counters = Table(
    "id_counters",
    metadata,
    Column("name", Text, primary_key=True),
    Column("next_value", Integer, nullable=False, default=1, server_default="1"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_devices_public_key", devices.c.identity, devices.c.public_key)
Index("ix_notes_identity", notes.c.identity)
