"""Tests for shared service helpers."""

from __future__ import annotations

from datetime import datetime

from cipherpad.services._helpers import now_iso, short_key


class TestNowIso:
    def test_parses_as_aware_datetime(self) -> None:
        parsed = datetime.fromisoformat(now_iso())
        assert parsed.tzinfo is not None


class TestShortKey:
    def test_short_key_untouched(self) -> None:
        assert short_key("PK1") == "PK1"

    def test_long_key_truncated(self) -> None:
        key = "A" * 40
        assert short_key(key) == "A" * 16 + "…"
        assert short_key(key, width=4) == "AAAA…"
