"""Basic unit tests for ESO-maped modules."""

import logging
from pathlib import Path


class TestSettingsInitialization:
    """Test settings initialization and basic operations."""

    def test_app_settings_init(self, settings_file: Path) -> None:
        """Test AppSettings can be initialized on an INI file."""
        from eso_maped.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        assert settings_obj is not None
        assert settings_obj.get_settings_file_path() == str(settings_file)

    def test_first_run_stamps_version(self, settings_file: Path) -> None:
        """Test a fresh store gets the current config version."""
        from eso_maped.settings import AppSettings, ConfigVersion

        settings_obj = AppSettings(settings_file=settings_file)
        assert settings_obj.version == ConfigVersion.CURRENT.value
        assert settings_obj.is_first_run is True

        settings_obj.set_first_run_complete()
        assert AppSettings(settings_file=settings_file).is_first_run is False

    def test_app_settings_validation(self, settings_file: Path) -> None:
        """Test settings validation returns result."""
        from eso_maped.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        validation = settings_obj.validate()
        assert validation.is_valid
        assert validation.errors == []

    def test_validation_flags_missing_catalog(self, settings_file: Path, tmp_path: Path) -> None:
        """Test a catalog override that does not exist is an error."""
        from eso_maped.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        settings_obj.catalog_path = tmp_path / "missing.json"

        validation = settings_obj.validate()
        assert not validation.is_valid
        assert "missing.json" in validation.errors[0]

    def test_validation_drops_stale_recent_files(self, settings_file: Path, tmp_path: Path) -> None:
        """Test recent files that no longer exist are warned about and removed."""
        from eso_maped.settings import AppSettings

        existing = tmp_path / "markers.txt"
        existing.write_text("", encoding="utf-8")

        settings_obj = AppSettings(settings_file=settings_file)
        settings_obj.add_recent_file(tmp_path / "gone.txt")
        settings_obj.add_recent_file(existing)

        validation = settings_obj.validate()
        assert validation.is_valid
        assert len(validation.warnings) == 1
        assert settings_obj.recent_files == [str(existing)]

    def test_profiles_are_separate(self, settings_file: Path) -> None:
        """Test two profiles in one store keep their own values."""
        from eso_maped.settings import AppSettings

        AppSettings(profile="a", settings_file=settings_file).remap_on_move = False
        assert AppSettings(profile="a", settings_file=settings_file).remap_on_move is False
        assert AppSettings(profile="b", settings_file=settings_file).remap_on_move is True


class TestEditorSettings:
    """Test editor settings defaults and round trips."""

    def test_defaults(self, settings_file: Path) -> None:
        """Test editor defaults."""
        from eso_maped.markers import WHITE, MarkerIcon
        from eso_maped.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        assert settings_obj.remap_on_move is True
        assert settings_obj.placement_icon is MarkerIcon.MARKER_LIGHTBLUE
        assert settings_obj.line_colour == WHITE

    def test_placement_icon_round_trip(self, settings_file: Path) -> None:
        """Test placement icon is stored by asset path."""
        from eso_maped.markers import MarkerIcon
        from eso_maped.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        settings_obj.placement_icon = MarkerIcon.LETTER_C
        assert AppSettings(settings_file=settings_file).placement_icon is MarkerIcon.LETTER_C

    def test_unknown_placement_icon_rejected(self, settings_file: Path) -> None:
        """Test UNKNOWN cannot become the placement icon."""
        from eso_maped.markers import MarkerIcon
        from eso_maped.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        settings_obj.placement_icon = MarkerIcon.UNKNOWN
        assert settings_obj.placement_icon is MarkerIcon.MARKER_LIGHTBLUE

    def test_line_colour_round_trip(self, settings_file: Path) -> None:
        """Test line colour keeps its alpha."""
        from eso_maped.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        settings_obj.line_colour = (255, 0, 0, 128)
        assert AppSettings(settings_file=settings_file).line_colour == (255, 0, 0, 128)


class TestSettingsMigration:
    """Test migration of older configuration versions."""

    def test_migrate_1_0_catalog_path(self, settings_file: Path) -> None:
        """Test 1.0 catalog path and icon code move to their 1.1 keys."""
        from PySide6.QtCore import QSettings

        from eso_maped.markers import MarkerIcon
        from eso_maped.settings import AppSettings

        raw = QSettings(str(settings_file), QSettings.Format.IniFormat)
        raw.beginGroup("default")
        raw.setValue("app/version", "1.0")
        raw.setValue("catalog/path", "/data/zones.json")
        raw.setValue("editor/placement_icon_code", 45)
        raw.endGroup()
        raw.sync()
        del raw

        settings_obj = AppSettings(settings_file=settings_file)
        assert settings_obj.version == "1.1"
        assert settings_obj.catalog_path == Path("/data/zones.json")
        assert settings_obj.placement_icon is MarkerIcon.LETTER_A
        assert settings_obj.settings.value("catalog/path") is None

    def test_current_version_needs_no_migration(self, settings_file: Path) -> None:
        """Test a store already at the current version is left untouched."""
        from eso_maped.settings import AppSettings
        from eso_maped.settings.types import ConfigVersion

        assert ConfigVersion.CURRENT.value == "1.1"

        first = AppSettings(settings_file=settings_file)
        first.catalog_path = Path("/data/zones.json")
        first.sync()

        again = AppSettings(settings_file=settings_file)
        assert again.version == ConfigVersion.CURRENT.value
        assert again.catalog_path == Path("/data/zones.json")


class TestUtilsLogging:
    """Test logging configuration."""

    def test_logging_setup_with_settings(self, settings_file: Path) -> None:
        """Test logging setup works with settings."""
        from eso_maped.settings import AppSettings
        from eso_maped.utils.logging_config import setup_logging

        settings_obj = AppSettings(settings_file=settings_file)
        setup_logging(settings=settings_obj)

        logger = logging.getLogger("eso_maped")
        assert logger.level == logging.DEBUG

    def test_invalid_console_level_is_ignored(self, settings_file: Path) -> None:
        """Test invalid console levels keep the current level."""
        from eso_maped.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        settings_obj.console_log_level = "debug"
        settings_obj.console_log_level = "chatty"
        assert settings_obj.console_log_level == "DEBUG"

    def test_csv_formatter_quotes_message(self) -> None:
        """Test CSV formatter escapes double quotes."""
        from eso_maped.utils.logging_config import CSVFormatter

        record = logging.LogRecord(
            "eso_maped.test", logging.WARNING, __file__, 12, 'say "hi"', None, None
        )
        line = CSVFormatter(datefmt="%Y-%m-%d").format(record)
        assert line.endswith('"say ""hi"""')
        assert ';"eso_maped.test";"12";' in line

    def test_colored_formatter_colours_level(self) -> None:
        """Test only the level name gets ANSI colour codes."""
        from eso_maped.utils.logging_config import ColoredFormatter

        record = logging.LogRecord(
            "eso_maped.test", logging.ERROR, __file__, 1, "broken", None, None
        )
        line = ColoredFormatter(fmt="%(levelname)s : %(message)s").format(record)
        assert line == "\033[31mERROR\033[0m : broken"
