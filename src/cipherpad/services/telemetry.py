"""Per-call service telemetry behind ``--verbose``.

``@traced`` wraps a service method. While telemetry is off it costs one
ContextVar read. While on, the call is timed, logged on
``cipherpad.telemetry``, and the span is attached to the returned
result as ``meta["telemetry"]`` together with the call's outcome.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

import structlog

from cipherpad.services.result import ServiceResult

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)


@dataclass
class Span:
    """Wall-clock span of one service call."""

    name: str
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    outcome: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def record(self, result: ServiceResult) -> None:
        """Note the op and, for failures, the error code and fatality."""
        self.outcome = {"op": result.op, "ok": result.ok}
        if result.error is not None:
            self.outcome["code"] = result.error.code
            self.outcome["fatal"] = result.error.fatal

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "duration_ms": round(self.duration_ms, 2), **self.outcome}


def traced[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Time *func* and attach the span to its ServiceResult when verbose."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        log = structlog.get_logger("cipherpad.telemetry")
        span = Span(name=func.__qualname__)
        try:
            result = func(*args, **kwargs)
        except Exception:
            span.end()
            log.debug("span.failed", span_name=span.name, duration_ms=round(span.duration_ms, 2))
            raise
        span.end()

        if not isinstance(result, ServiceResult):
            log.debug("span.complete", **span.to_dict())
            return result
        span.record(result)
        log.debug("span.complete", **span.to_dict())
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    """Turn on span collection for the current context (``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)
