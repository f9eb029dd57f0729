"""Tests for configuration section models."""

import pytest
from pydantic import ValidationError

from staffboard.config.models import (
    BoardConfig,
    ParentOrgConfig,
    ScenarioConfig,
    StaffboardConfig,
)


class TestBoardConfig:
    def test_defaults(self) -> None:
        config = BoardConfig()
        assert config.max_search_radius == 10
        assert [o.name for o in config.parent_orgs] == ["대학본부", "총장직속기관"]

    @pytest.mark.parametrize("radius", [0, 41])
    def test_radius_bounds(self, radius: int) -> None:
        with pytest.raises(ValidationError):
            BoardConfig(max_search_radius=radius)

    def test_parent_org_coordinate_normalised(self) -> None:
        assert ParentOrgConfig(name="법인", coordinate=" aa3 ").coordinate == "AA3"

    def test_parent_org_invalid_coordinate(self) -> None:
        with pytest.raises(ValidationError, match="invalid coordinate"):
            ParentOrgConfig(name="법인", coordinate="A99")


class TestStaffboardConfig:
    def test_sparse(self) -> None:
        config = StaffboardConfig.model_validate({"scenario": {"default_name_format": "{day}"}})
        assert config.scenario.default_name_format == "{day}"
        assert config.storage.db_name == "staffboard.db"

    def test_default_name_format(self) -> None:
        assert ScenarioConfig().default_name_format == "{month}월{day}일_{hour}시{minute}분"
