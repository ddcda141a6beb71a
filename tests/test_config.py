"""
Tests for configuration module.
"""

import pytest

from irb_facility_report import report
from irb_facility_report.config import REPORT_FILE_NAME, REQUIRED_SETTINGS, Settings, get_settings
from irb_facility_report.utils.errors import ConfigurationError, MissingConfigurationError


class TestSettings:
    """Test the Settings configuration class."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        """Clear variables a local .env may have set."""
        for name in (
            "INPUT_SPREADSHEET_ID",
            "OUTPUT_FOLDER_ID",
            "SAVE_FOLDER_ID",
            "LOG_LEVEL",
            "LOG_FILE_PATH",
            "DEV_MODE",
            "GOOGLE_SERVICE_ACCOUNT_PATH",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_default_settings(self):
        """Test default settings initialization."""
        settings = Settings()

        assert settings.input_spreadsheet_id is None
        assert settings.facility_sheet_name == "施設一覧"
        assert settings.region_sheet_name == "JPLSG_SV2 MST_県"
        assert settings.report_file_name == "CHM14sankasisetu.txt"
        assert settings.log_level == "INFO"
        assert settings.dev_mode is False
        assert settings.google_service_account_path is None

    def test_report_file_name_has_one_source(self):
        """Test that the job defaults and settings share one file name."""
        assert REPORT_FILE_NAME == "CHM14sankasisetu.txt"
        assert Settings.report_file_name is REPORT_FILE_NAME
        assert report.REPORT_FILE_NAME is REPORT_FILE_NAME

    def test_settings_from_env(self, monkeypatch):
        """Test loading settings from environment variables."""
        monkeypatch.setenv("INPUT_SPREADSHEET_ID", "sheet")
        monkeypatch.setenv("OUTPUT_FOLDER_ID", "out")
        monkeypatch.setenv("SAVE_FOLDER_ID", "archive")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DEV_MODE", "true")

        settings = Settings()

        assert settings.input_spreadsheet_id == "sheet"
        assert settings.output_folder_id == "out"
        assert settings.save_folder_id == "archive"
        assert settings.log_level == "DEBUG"
        assert settings.dev_mode is True
        settings.validate()

    def test_overrides(self):
        """Test keyword overrides win over the environment."""
        settings = Settings(output_folder_id="override", report_file_name="x.txt")

        assert settings.output_folder_id == "override"
        assert settings.report_file_name == "x.txt"

    def test_unknown_override(self):
        """Test that typos in setting names are rejected."""
        with pytest.raises(TypeError, match="Unknown setting"):
            Settings(output_folder="out")

    @pytest.mark.parametrize("name", REQUIRED_SETTINGS)
    def test_missing_required_setting(self, name):
        """Test that each missing id is a configuration error."""
        values = {key: "id" for key in REQUIRED_SETTINGS}
        values[name] = ""
        settings = Settings(**values)

        with pytest.raises(MissingConfigurationError) as exc_info:
            settings.validate()

        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.details == {"config_name": name}
        assert str(exc_info.value) == (
            f"Required configuration '{name}' is missing | Details: {{'config_name': '{name}'}}"
        )

    def test_require_strips(self):
        """Test that required values are returned stripped."""
        assert Settings(save_folder_id="  archive ").require("save_folder_id") == "archive"

    def test_log_file_path_creation(self, tmp_path):
        """Test log file path directory creation."""
        log_path = tmp_path / "logs" / "report.log"
        settings = Settings(log_file_path=log_path)

        assert not log_path.parent.exists()

        result = settings.get_log_file_path()

        assert result == log_path
        assert log_path.parent.exists()

    def test_get_settings_singleton(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()
