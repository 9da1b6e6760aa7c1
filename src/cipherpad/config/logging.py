"""structlog setup for the cipherpad CLI.

Everything goes to stderr, leaving stdout for results. ``--log-json``
switches from the console renderer to one JSON object per line. Values of
ciphertext-bearing keys are replaced before rendering, so secrets and
note bodies never reach a log sink even at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

REDACTED_KEYS = frozenset({"ciphertext", "encrypted_text", "secrets"})


def redact_ciphertexts(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Replace ciphertext values with their length."""
    for key in REDACTED_KEYS.intersection(event_dict):
        value = event_dict[key]
        size = len(value) if hasattr(value, "__len__") else "?"
        event_dict[key] = f"<redacted {size}>"
    return event_dict


def bind_identity(identity: str | None) -> None:
    """Attach the caller identity to every log line of this invocation."""
    structlog.contextvars.clear_contextvars()
    if identity:
        structlog.contextvars.bind_contextvars(identity=identity)


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route stdlib and structlog records through one stderr handler.

    Args:
        verbose: ``cipherpad.*`` loggers emit DEBUG; otherwise WARNING.
        log_json: Render JSON lines instead of console output.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_ciphertexts,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("cipherpad").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for noisy in ("alembic", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
