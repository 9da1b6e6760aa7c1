"""Atomic sequential ID generation for ledger records.

Uses the ``id_counters`` table so ids are global, start at 1, and are
never reused even after deletion.

The caller owns the transaction: pass a ``Connection`` obtained from
``engine.begin()`` so the counter increment participates in the same
atomic transaction as the surrounding writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update

from cipherpad.infrastructure.database.schema import id_counters

if TYPE_CHECKING:
    from sqlalchemy import Connection

_VALID_COUNTERS = frozenset({"note"})


def next_sequential_id(conn: Connection, name: str) -> int:
    """Claim the next id for counter *name*.

    Args:
        conn: Active SQLAlchemy connection (caller owns the transaction).
        name: Counter name; currently only ``"note"``.

    Returns:
        The claimed integer id.

    Raises:
        ValueError: If *name* is not a recognized counter.
    """
    if name not in _VALID_COUNTERS:
        msg = f"Unknown counter: {name!r}. Expected one of {sorted(_VALID_COUNTERS)}"
        raise ValueError(msg)

    row = conn.execute(select(id_counters.c.next_value).where(id_counters.c.name == name)).one()
    current_value: int = row.next_value

    conn.execute(
        update(id_counters).where(id_counters.c.name == name).values(next_value=current_value + 1)
    )
    return current_value
