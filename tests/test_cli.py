"""Tests for the command line entry point."""

from pathlib import Path

import orjson
import pytest

from eso_maped.__main__ import main

SIMPLE_TEXT = "/1000//63400,0,75500,1//1000//63400,0,75500,1/"


@pytest.fixture
def marker_file(tmp_path: Path) -> Path:
    path = tmp_path / "markers.txt"
    path.write_text(SIMPLE_TEXT, encoding="utf-8")
    return path


class TestCommands:
    """Test the normalize, inspect and zones commands."""

    def test_normalize(
        self, settings_file: Path, marker_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test normalize prints the canonical, deduplicated text."""
        code = main(
            ["--settings", str(settings_file), "normalize", str(marker_file), "--timestamp", "0"]
        )
        assert code == 0
        assert capsys.readouterr().out == "/1000//63400,0,75500,1/\n\n\n"

    def test_inspect(
        self, settings_file: Path, marker_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test inspect prints the parsed collection as JSON."""
        code = main(["--settings", str(settings_file), "inspect", str(marker_file)])
        assert code == 0

        data = orjson.loads(capsys.readouterr().out)
        [zone] = data["zones"]
        assert zone["zone_id"] == 1000
        [marker] = zone["markers"]
        assert marker["map_id"] == 1391
        assert marker["icon"] == "1.png"

    def test_zones(self, settings_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test zones lists the built-in catalog."""
        assert main(["--settings", str(settings_file), "zones"]) == 0
        out = capsys.readouterr().out
        assert "1000\tAsylum Sanctorium" in out
        assert "1391" in out

    def test_records_recent_file(self, settings_file: Path, marker_file: Path) -> None:
        """Test opened files are remembered."""
        from eso_maped.settings import AppSettings

        main(["--settings", str(settings_file), "normalize", str(marker_file)])
        assert AppSettings(settings_file=settings_file).recent_files == [str(marker_file.resolve())]


class TestErrors:
    """Test failure exit codes."""

    def test_missing_input(self, settings_file: Path, tmp_path: Path) -> None:
        """Test an unreadable input file fails."""
        args = ["--settings", str(settings_file), "normalize", str(tmp_path / "nope.txt")]
        assert main(args) == 1

    def test_missing_catalog(self, settings_file: Path, tmp_path: Path) -> None:
        """Test a missing catalog file fails."""
        args = ["--settings", str(settings_file), "--catalog", str(tmp_path / "nope.json"), "zones"]
        assert main(args) == 1

    def test_invalid_configured_catalog(self, settings_file: Path, tmp_path: Path) -> None:
        """Test a configured catalog override that does not exist fails validation."""
        from eso_maped.settings import AppSettings

        AppSettings(settings_file=settings_file).catalog_path = tmp_path / "gone.json"
        assert main(["--settings", str(settings_file), "zones"]) == 1

    def test_malformed_catalog(self, settings_file: Path, tmp_path: Path) -> None:
        """Test a catalog with a non-numeric scale bound fails cleanly."""
        catalog_path = tmp_path / "bad.json"
        catalog_path.write_bytes(
            orjson.dumps(
                {
                    "version": "bad",
                    "zones": [
                        {
                            "id": 1,
                            "name": "Zone",
                            "maps": [
                                {
                                    "map_id": 1,
                                    "name": "Map",
                                    "tile_count": 1,
                                    "tile_slug": "map_",
                                    "scale": {"min_x": "0", "max_x": 10, "min_z": 0, "max_z": 10},
                                }
                            ],
                        }
                    ],
                }
            )
        )
        args = ["--settings", str(settings_file), "--catalog", str(catalog_path), "zones"]
        assert main(args) == 1
