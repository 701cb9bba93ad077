"""Tests for YAML plan persistence."""

from datetime import date
from pathlib import Path

import yaml

from plancal.store import YamlPlanStore
from tests.conftest import run

PLAN_YAML = """\
holidays:
  - date: 2025-01-01
    name: New Year's Day
products:
  checkout:
    name: Checkout Redesign
    start_date: 2024-12-30
    end_date: 2025-01-10
    color: '#2563eb'
  hotfix:
    start_date: 2025-01-14
    end_date: 2025-01-14
"""


def write_plan(tmp_path: Path) -> Path:
    path = tmp_path / "plan.yaml"
    path.write_text(PLAN_YAML)
    return path


class TestYamlPlanStore:
    """Tests for YamlPlanStore."""

    def test_commit_rewrites_dates(self, tmp_path: Path) -> None:
        path = write_plan(tmp_path)

        result = run(YamlPlanStore(path)("checkout", date(2024, 12, 30), date(2025, 1, 17)))

        assert result.ok
        data = yaml.safe_load(path.read_text())
        checkout = data["products"]["checkout"]
        assert checkout["start_date"] == date(2024, 12, 30)
        assert checkout["end_date"] == date(2025, 1, 17)
        assert checkout["name"] == "Checkout Redesign"
        assert checkout["color"] == "#2563eb"
        assert data["products"]["hotfix"]["end_date"] == date(2025, 1, 14)
        assert data["holidays"][0]["name"] == "New Year's Day"

    def test_key_order_is_kept(self, tmp_path: Path) -> None:
        path = write_plan(tmp_path)
        YamlPlanStore(path).write_dates("hotfix", date(2025, 1, 15), date(2025, 1, 16))

        data = yaml.safe_load(path.read_text())
        assert list(data) == ["holidays", "products"]
        assert list(data["products"]) == ["checkout", "hotfix"]

    def test_dry_run_leaves_file_untouched(self, tmp_path: Path) -> None:
        path = write_plan(tmp_path)

        result = YamlPlanStore(path, dry_run=True).write_dates(
            "checkout", date(2024, 12, 30), date(2025, 1, 17)
        )

        assert result.ok
        assert result.message == "dry run"
        assert path.read_text() == PLAN_YAML

    def test_unknown_product_fails(self, tmp_path: Path) -> None:
        path = write_plan(tmp_path)

        result = YamlPlanStore(path).write_dates("ghost", date(2025, 1, 6), date(2025, 1, 7))

        assert not result.ok
        assert "ghost" in result.message
        assert path.read_text() == PLAN_YAML

    def test_inverted_range_fails(self, tmp_path: Path) -> None:
        path = write_plan(tmp_path)

        result = YamlPlanStore(path).write_dates("checkout", date(2025, 1, 10), date(2025, 1, 6))

        assert not result.ok
        assert path.read_text() == PLAN_YAML

    def test_missing_file_fails(self, tmp_path: Path) -> None:
        result = YamlPlanStore(tmp_path / "gone.yaml").write_dates(
            "checkout", date(2025, 1, 6), date(2025, 1, 7)
        )
        assert not result.ok
        assert "Could not read" in result.message

    def test_non_mapping_file_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "plan.yaml"
        path.write_text("- a\n- b\n")

        result = YamlPlanStore(path).write_dates("a", date(2025, 1, 6), date(2025, 1, 7))

        assert not result.ok
        assert "Invalid plan file format" in result.message
