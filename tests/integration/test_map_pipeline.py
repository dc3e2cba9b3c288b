"""End-to-end tests: JSON map in, processed JSON map out."""

import json
import math
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mapmaker import __version__
from mapmaker.cli.app import app
from mapmaker.config import MapmakerSettings, ProcessingConfig
from mapmaker.core import MapProcessor

runner = CliRunner()


def regular_polygon(cx: float, cy: float, radius: float, sides: int) -> list[list[float]]:
    return [
        [
            cx + radius * math.cos(2 * math.pi * i / sides),
            cy + radius * math.sin(2 * math.pi * i / sides),
        ]
        for i in range(sides)
    ]


@pytest.fixture
def pentagon_map() -> dict:
    """Five territories in a ring with a chord between 0 and 2.

    Territory 3 has a figure-eight boundary.
    """
    territories = [
        {"id": 0, "name": "Arnor", "outer": regular_polygon(0, 0, 10, 6)},
        {"id": 1, "name": "Rhovanion", "outer": [[20, 0], [30, 0], [30, 10], [20, 10]]},
        {
            "id": 2,
            "name": "Gondor",
            "outer": [[40, 0], [60, 0], [60, 20], [40, 20]],
            "inners": [[[48, 8], [52, 8], [52, 12], [48, 12]]],
        },
        {"id": 3, "name": "Mordor", "outer": [[70, 0], [80, 10], [80, 0], [70, 10]]},
        {"id": 4, "name": "Rohan", "outer": [[0, 30], [10, 30], [5, 40]]},
    ]
    return {
        "territories": territories,
        "bonuses": [
            {"id": 0, "name": "North", "children": [0, 1]},
            {"id": 1, "name": "South", "children": [2, 3]},
            {"id": 2, "name": "West", "children": [4]},
        ],
        "super_bonuses": [{"id": 0, "name": "Middle Earth", "children": [0, 1, 2]}],
        "adjacencies": [[0, 1], [1, 2], [2, 3], [3, 4], [4, 0], [0, 2]],
    }


@pytest.fixture
def map_file(tmp_path: Path, pentagon_map: dict) -> Path:
    path = tmp_path / "middle-earth.json"
    path.write_text(json.dumps(pentagon_map), encoding="utf-8")
    return path


class TestPipeline:
    """Full processing through MapProcessor.process_file."""

    def test_processed_map(self, map_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "result.json"
        settings = MapmakerSettings(processing=ProcessingConfig(max_workers=1))

        stats = MapProcessor(settings).process_file(map_file, output)

        document = json.loads(output.read_text(encoding="utf-8"))
        territories = {t["name"]: t for t in document["territories"]}
        bonuses = {b["name"]: b for b in document["bonuses"]}

        assert stats.processed_count == 4
        assert stats.invalid_count == 1
        assert territories["Mordor"]["valid"] is False
        assert territories["Mordor"]["center"] is None
        assert all(
            t["valid"] is True for name, t in territories.items() if name != "Mordor"
        )

        # Hexagon with circumradius 10 has inradius 10 * cos(30 deg)
        assert territories["Arnor"]["distance"] == pytest.approx(5 * math.sqrt(3), abs=1.0)
        assert territories["Rhovanion"]["center"] == [25.0, 5.0]

        gondor_x, gondor_y = territories["Gondor"]["center"]
        assert not (48 <= gondor_x <= 52 and 8 <= gondor_y <= 12)
        assert territories["Gondor"]["distance"] > 0

        # North {0, 1} borders {2, 4}: 0.5 * 2/5 + 0.5 * 0.5 = 0.45
        assert bonuses["North"]["armies"] == 5
        assert all(1 <= b["armies"] <= 10 for b in document["bonuses"])
        assert 1 <= document["super_bonuses"][0]["armies"] <= 10


class TestCli:
    """Tests for the mapmaker command."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_process_writes_default_output(self, map_file: Path) -> None:
        result = runner.invoke(app, [str(map_file), "--workers", "1"])

        assert result.exit_code == 0, result.output
        output = map_file.with_name("middle-earth-processed.json")
        assert output.exists()
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["bonuses"][0]["armies"] == 5

    def test_process_with_output_and_armies(self, map_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "custom.json"
        result = runner.invoke(
            app,
            [
                str(map_file),
                "-o",
                str(output),
                "-j",
                "1",
                "--min-armies",
                "4",
                "--max-armies",
                "6",
                "--verbose",
            ],
        )

        assert result.exit_code == 0, result.output
        document = json.loads(output.read_text(encoding="utf-8"))
        assert all(4 <= b["armies"] <= 6 for b in document["bonuses"])
        assert "North" in result.output

    def test_quiet_mode(self, map_file: Path) -> None:
        result = runner.invoke(app, [str(map_file), "-j", "1", "--quiet"])
        assert result.exit_code == 0
        assert "Complete" not in result.output

    def test_list_invalid(self, map_file: Path) -> None:
        result = runner.invoke(app, [str(map_file), "--list-invalid"])

        assert result.exit_code == 0
        assert "Mordor" in result.output
        assert "Rohan" not in result.output.split("self-intersecting")[-1]
        assert not map_file.with_name("middle-earth-processed.json").exists()

    def test_dry_run(self, map_file: Path) -> None:
        result = runner.invoke(app, [str(map_file), "--dry-run"])

        assert result.exit_code == 0
        assert "Dry run complete" in result.output
        assert not map_file.with_name("middle-earth-processed.json").exists()

    def test_missing_input(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_directory_input(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 1
        assert "not a file" in result.output

    def test_inverted_army_bounds(self, map_file: Path) -> None:
        result = runner.invoke(app, [str(map_file), "--min-armies", "5", "--max-armies", "2"])
        assert result.exit_code == 1
        assert "Invalid options" in result.output

    def test_zero_precision(self, map_file: Path) -> None:
        result = runner.invoke(app, [str(map_file), "--precision", "0"])
        assert result.exit_code == 1

    def test_verbose_and_quiet_conflict(self, map_file: Path) -> None:
        result = runner.invoke(app, [str(map_file), "-v", "-q"])
        assert result.exit_code == 1

    def test_malformed_map(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"territories": [{"id": 0, "outer": [[0, 0]]}]}), encoding="utf-8")

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == 1
        assert "Invalid map description" in result.output
