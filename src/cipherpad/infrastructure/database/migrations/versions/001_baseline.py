"""Baseline schema — devices, secrets, note lists, notes, id counters.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-10-19

Databases created by ``init_database`` already match this revision and
are stamped rather than migrated.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "devices",
        sa.Column("identity", sa.Text, nullable=False),
        sa.Column("alias", sa.Text, nullable=False),
        sa.Column("public_key", sa.Text, nullable=False),
        sa.Column("created", sa.Text, nullable=False),
        sa.PrimaryKeyConstraint("identity", "alias"),
    )
    op.create_index("ix_devices_public_key", "devices", ["identity", "public_key"])

    op.create_table(
        "secrets",
        sa.Column("identity", sa.Text, nullable=False),
        sa.Column("public_key", sa.Text, nullable=False),
        sa.Column("ciphertext", sa.Text, nullable=False),
        sa.Column("updated", sa.Text, nullable=False),
        sa.PrimaryKeyConstraint("identity", "public_key"),
    )

    op.create_table(
        "note_lists",
        sa.Column("identity", sa.Text, primary_key=True),
        sa.Column("created", sa.Text, nullable=False),
    )

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column(
            "identity", sa.Text, sa.ForeignKey("note_lists.identity"), nullable=False
        ),
        sa.Column("encrypted_text", sa.Text, nullable=False),
        sa.Column("created", sa.Text, nullable=False),
        sa.Column("modified", sa.Text, nullable=False),
    )
    op.create_index("ix_notes_identity", "notes", ["identity"])

    op.create_table(
        "id_counters",
        sa.Column("name", sa.Text, primary_key=True),
        sa.Column("next_value", sa.Integer, nullable=False, server_default="1"),
    )
    op.execute("INSERT INTO id_counters (name, next_value) VALUES ('note', 1)")


def downgrade() -> None:
    op.drop_table("id_counters")
    op.drop_index("ix_notes_identity", table_name="notes")
    op.drop_table("notes")
    op.drop_table("note_lists")
    op.drop_table("secrets")
    op.drop_index("ix_devices_public_key", table_name="devices")
    op.drop_table("devices")
