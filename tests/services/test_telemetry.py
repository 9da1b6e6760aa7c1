"""Tests for telemetry primitives: Span and @traced."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest

from cipherpad.infrastructure.store import Store
from cipherpad.services.registry import RegistryService
from cipherpad.services.result import ServiceResult, failure
from cipherpad.services.telemetry import Span, disable_telemetry, enable_telemetry, traced


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test."""
    yield
    disable_telemetry()


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert set(d) == {"name", "duration_ms"}

    def test_record_failure_outcome(self) -> None:
        span = Span(name="RegistryService.delete_device")
        span.record(failure("delete_device", "LAST_DEVICE", "last one", fatal=True))
        span.end()
        d = span.to_dict()
        assert d["op"] == "delete_device"
        assert d["ok"] is False
        assert d["code"] == "LAST_DEVICE"
        assert d["fatal"] is True


class TestTracedDecorator:
    def test_noop_when_disabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test")

        assert my_func().meta is None

    def test_injects_meta_when_enabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test", meta={"existing": "data"})

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert result.meta["existing"] == "data"
        assert result.meta["telemetry"]["name"].endswith("my_func")
        assert result.meta["telemetry"]["duration_ms"] >= 0

    def test_exception_propagates(self) -> None:
        @traced
        def boom() -> ServiceResult:
            raise RuntimeError("boom")

        enable_telemetry()
        with pytest.raises(RuntimeError, match="boom"):
            boom()

    def test_non_service_result_passthrough(self) -> None:
        @traced
        def my_func() -> str:
            return "hello"

        enable_telemetry()
        assert my_func() == "hello"

    def test_service_method_span_name(self, store: Store) -> None:
        enable_telemetry()
        result = RegistryService(store).get_devices("alice")
        assert result.meta is not None
        assert result.meta["telemetry"]["name"] == "RegistryService.get_devices"
        assert result.meta["telemetry"]["op"] == "get_devices"
        assert result.meta["telemetry"]["ok"] is True
