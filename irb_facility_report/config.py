# Config
"""
Configuration for the IRB facility report job.

Values come from environment variables (a local .env file is loaded first)
and can be overridden with keyword arguments.
"""

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from irb_facility_report.utils.errors import MissingConfigurationError

load_dotenv()

REPORT_FILE_NAME = "CHM14sankasisetu.txt"

REQUIRED_SETTINGS = ("input_spreadsheet_id", "output_folder_id", "save_folder_id")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def _env_path(name: str, default: Optional[str] = None) -> Optional[Path]:
    value = os.getenv(name) or default
    return Path(value) if value else None


class Settings:
    # Logging
    log_level = "INFO"
    dev_mode = False

    # Source sheets inside the input spreadsheet
    facility_sheet_name = "施設一覧"
    region_sheet_name = "JPLSG_SV2 MST_県"

    # Output artifact
    report_file_name = REPORT_FILE_NAME
    report_mime_type = "text/plain"

    def __init__(self, **overrides: Any) -> None:
        # Script properties
        self.input_spreadsheet_id: Optional[str] = os.getenv("INPUT_SPREADSHEET_ID")
        self.output_folder_id: Optional[str] = os.getenv("OUTPUT_FOLDER_ID")
        self.save_folder_id: Optional[str] = os.getenv("SAVE_FOLDER_ID")

        # Google credentials
        self.google_credentials_path = _env_path("GOOGLE_CREDENTIALS_PATH", "credentials.json")
        self.google_token_path = _env_path("GOOGLE_TOKEN_PATH", "token.json")
        self.google_service_account_path = _env_path("GOOGLE_SERVICE_ACCOUNT_PATH")

        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()
        self.log_file_path = _env_path("LOG_FILE_PATH")
        self.dev_mode = _env_flag("DEV_MODE")

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    def require(self, name: str) -> str:
        """
        Return a required string setting.

        Raises:
            MissingConfigurationError: If the value is unset or blank
        """
        value = getattr(self, name, None)
        if value is None or not str(value).strip():
            raise MissingConfigurationError(name)
        return str(value).strip()

    def validate(self) -> None:
        """Check that every required setting is present."""
        for name in REQUIRED_SETTINGS:
            self.require(name)

    def get_log_file_path(self) -> Optional[Path]:
        if self.log_file_path:
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        return self.log_file_path


# Singleton instance
_settings = None

def get_settings():
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
