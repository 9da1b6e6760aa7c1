"""Tests for ServiceResult, ServiceError, and failure()."""

import json

import pytest
from pydantic import ValidationError

from cipherpad.domain.types import FaultCode, SecretErrorCode
from cipherpad.services.result import ServiceError, ServiceResult, failure


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="add_note", data={"id": 1})
        assert result.ok is True
        assert result.op == "add_note"
        assert result.data == {"id": 1}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None
        assert result.fatal is False

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="is_seed", data={"seed": True}, meta={"n": 1})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["seed"] is True
        assert parsed["meta"]["n"] == 1

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestFailure:
    def test_recoverable(self) -> None:
        result = failure("get_encrypted_secrets", SecretErrorCode.NOT_SYNCED, "not yet")
        assert result.ok is False
        assert result.fatal is False
        assert result.error == ServiceError(code="NOT_SYNCED", message="not yet")

    def test_fatal_with_detail(self) -> None:
        result = failure(
            "delete_device",
            FaultCode.LAST_DEVICE,
            "last one",
            fatal=True,
            detail={"alias": "Brave"},
        )
        assert result.fatal is True
        assert result.error is not None
        assert result.error.detail == {"alias": "Brave"}
        parsed = json.loads(result.model_dump_json())
        assert parsed["error"]["code"] == "LAST_DEVICE"
        assert parsed["error"]["fatal"] is True
