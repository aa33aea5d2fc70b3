"""Smoke tests for the click CLI (no network: analyze is not exercised here)."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from reforester.cli import main

PROJECTS = [
    {
        "id": "a",
        "name": "Hillside",
        "status": "active",
        "species": [{"name": "Oak", "quantity": 400, "survivalRate": 80}],
        "budget": {"estimatedCost": 2000},
        "timeline": {"startDate": "2024-04-01"},
    },
    {
        "id": "b",
        "name": "Riverside",
        "species": [{"name": "Willow", "quantity": 50}],
    },
]


@pytest.fixture(autouse=True)
def _no_logging_setup():
    # Keep the root logger untouched by the group callback
    with patch("reforester.cli.setup_logging"):
        yield


class TestCli:
    def test_biomes(self) -> None:
        result = CliRunner().invoke(main, ["biomes"])
        assert result.exit_code == 0
        assert "tropical" in result.output
        assert "boreal" in result.output

    def test_project_growth_section(self, tmp_path) -> None:
        path = tmp_path / "project.json"
        path.write_text(json.dumps(PROJECTS[0]))
        result = CliRunner().invoke(main, ["project", str(path), "--section", "growth"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert list(data) == ["growthProjections"]
        assert data["growthProjections"][0]["date"] == "2024-04-01"

    def test_project_all_sections(self, tmp_path) -> None:
        path = tmp_path / "project.json"
        path.write_text(json.dumps(PROJECTS[0]))
        result = CliRunner().invoke(main, ["project", str(path)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert set(data) == {
            "growthProjections", "carbonTimeline", "environmentalEquivalents",
            "biodiversityImpact", "financialAnalytics",
        }

    def test_compare(self, tmp_path) -> None:
        path = tmp_path / "projects.json"
        path.write_text(json.dumps(PROJECTS))
        result = CliRunner().invoke(main, ["compare", str(path), "--metric", "total_trees"])
        assert result.exit_code == 0
        assert result.output.index("Hillside") < result.output.index("Riverside")
