"""Tests for entity ID generation."""

import pytest

from staffboard.domain.ids import generate_id, is_valid_id


class TestGenerateId:
    @pytest.mark.parametrize(
        ("kind", "prefix"),
        [("employee", "emp_"), ("department", "dept_"), ("scenario", "scenario_")],
    )
    def test_prefix(self, kind: str, prefix: str) -> None:
        entity_id = generate_id(kind)
        assert entity_id.startswith(prefix)
        assert len(entity_id) == len(prefix) + 8
        assert is_valid_id(entity_id)

    def test_unique(self) -> None:
        assert len({generate_id("employee") for _ in range(50)}) == 50

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="Unknown entity kind"):
            generate_id("robot")


class TestIsValidId:
    def test_seed_style(self) -> None:
        assert is_valid_id("emp_1a2b3c4d")

    @pytest.mark.parametrize("value", ["", "emp", "_abc", "Emp_1", "emp 1"])
    def test_rejects(self, value: str) -> None:
        assert not is_valid_id(value)
