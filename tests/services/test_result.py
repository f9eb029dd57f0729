"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from staffboard.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="move_to_coordinate", data={"coordinate": "C3"})
        assert result.ok is True
        assert result.op == "move_to_coordinate"
        assert result.data == {"coordinate": "C3"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="'민수'님을 찾을 수 없습니다")
        result = ServiceResult(ok=False, op="swap_names", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_message_property(self) -> None:
        ok = ServiceResult(ok=True, op="persist", data={"message": "저장되었습니다"})
        assert ok.message == "저장되었습니다"
        failed = ServiceResult(ok=False, op="x", error=ServiceError(code="E", message="실패"))
        assert failed.message == "실패"
        assert ServiceResult(ok=True, op="x").message == ""

    def test_json_serialization_keeps_hangul(self) -> None:
        result = ServiceResult(
            ok=True,
            op="help",
            data={"message": "도움말"},
            meta={"command": {"action": "help"}},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["message"] == "도움말"
        assert parsed["meta"]["command"]["action"] == "help"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(
            code="OCCUPIED",
            message="D5에 이미 김철수이(가) 있습니다",
            detail={"suggestion": "홍길동이랑 김철수 바꿔"},
        )
        assert error.detail["suggestion"] == "홍길동이랑 김철수 바꿔"

    def test_default_detail(self) -> None:
        assert ServiceError(code="E", message="m").detail == {}
