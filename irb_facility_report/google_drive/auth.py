"""
Google API authentication module.

This module handles the OAuth2 installed-app flow and service account
credentials for the Sheets and Drive APIs, including token management
and refresh.
"""

from pathlib import Path
from typing import List, Optional, Union

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from irb_facility_report.config import Settings, get_settings
from irb_facility_report.utils.errors import DriveAuthenticationError
from irb_facility_report.utils.logging import get_logger

logger = get_logger(__name__)

# Sheets is read, Drive is written (archive move and report upload)
SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive",
]


class GoogleDriveAuth:
    """Handle OAuth2 authentication for Google APIs."""

    def __init__(
        self,
        credentials_path: Optional[Path] = None,
        token_path: Optional[Path] = None,
        scopes: Optional[List[str]] = None,
    ) -> None:
        """
        Initialize authentication.

        Args:
            credentials_path: Path to OAuth2 client secrets JSON file
            token_path: Path to store/load token
            scopes: OAuth2 scopes (defaults to SCOPES)
        """
        self.settings = get_settings()
        self.credentials_path = Path(credentials_path or self.settings.google_credentials_path)
        self.token_path = Path(token_path or self.settings.google_token_path)
        self.scopes = scopes or SCOPES

        self._credentials: Optional[Credentials] = None

    @property
    def credentials(self) -> Optional[Credentials]:
        """Get current credentials."""
        return self._credentials

    @property
    def is_authenticated(self) -> bool:
        """Check if authenticated with valid credentials."""
        return self._credentials is not None and self._credentials.valid

    def authenticate(self, force_reauth: bool = False) -> Credentials:
        """
        Authenticate with Google.

        Args:
            force_reauth: Force re-authentication even if token exists

        Returns:
            Valid credentials

        Raises:
            DriveAuthenticationError: If authentication fails
        """
        try:
            if not force_reauth and self.token_path.exists():
                self._credentials = self._load_token()

                if self._credentials and self._credentials.expired and self._credentials.refresh_token:
                    logger.info("Refreshing expired token")
                    self._credentials.refresh(Request())
                    self._save_token()

            if not self._credentials or not self._credentials.valid or force_reauth:
                logger.info("Running OAuth2 flow")
                self._credentials = self._run_oauth_flow()
                self._save_token()

            logger.info("Successfully authenticated with Google")
            return self._credentials

        except DriveAuthenticationError:
            raise
        except Exception as e:
            logger.error(f"Authentication failed: {str(e)}")
            raise DriveAuthenticationError(f"Failed to authenticate: {str(e)}")

    def _run_oauth_flow(self) -> Credentials:
        """
        Run OAuth2 flow to get credentials.

        Raises:
            DriveAuthenticationError: If the client secrets file is missing or the flow fails
        """
        if not self.credentials_path.exists():
            raise DriveAuthenticationError(
                f"Credentials file not found: {self.credentials_path}. "
                "Please download OAuth2 credentials from Google Cloud Console."
            )

        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                str(self.credentials_path),
                self.scopes,
            )
            return flow.run_local_server(
                port=0,
                authorization_prompt_message="Opening browser for Google authentication...",
                success_message="Authentication successful! You can close this window.",
                open_browser=True,
            )
        except Exception as e:
            raise DriveAuthenticationError(f"OAuth flow failed: {str(e)}")

    def _load_token(self) -> Optional[Credentials]:
        """Load token from file, or None if it cannot be read."""
        try:
            logger.debug(f"Loading token from {self.token_path}")
            return Credentials.from_authorized_user_file(str(self.token_path), self.scopes)
        except Exception as e:
            logger.warning(f"Failed to load token: {e}")
        return None

    def _save_token(self) -> None:
        """Save current credentials to token file."""
        if self._credentials:
            logger.debug(f"Saving token to {self.token_path}")
            self.token_path.parent.mkdir(parents=True, exist_ok=True)
            self.token_path.write_text(self._credentials.to_json(), encoding="utf-8")


class ServiceAccountAuth:
    """
    Handle service account authentication.

    Use this for unattended runs (scheduled jobs) without user interaction.
    """

    def __init__(
        self,
        service_account_path: Path,
        scopes: Optional[List[str]] = None,
    ) -> None:
        self.service_account_path = Path(service_account_path)
        self.scopes = scopes or SCOPES
        self._credentials = None

        if not self.service_account_path.exists():
            raise DriveAuthenticationError(
                f"Service account file not found: {service_account_path}"
            )

    @property
    def credentials(self):
        return self._credentials

    @property
    def is_authenticated(self) -> bool:
        return self._credentials is not None

    def authenticate(self, force_reauth: bool = False):
        """
        Load service account credentials.

        Raises:
            DriveAuthenticationError: If the key file cannot be loaded
        """
        try:
            from google.oauth2 import service_account

            self._credentials = service_account.Credentials.from_service_account_file(
                str(self.service_account_path),
                scopes=self.scopes,
            )
            logger.info("Successfully authenticated with service account")
            return self._credentials

        except Exception as e:
            logger.error(f"Service account authentication failed: {e}")
            raise DriveAuthenticationError(
                f"Service account authentication failed: {str(e)}"
            )


AuthManager = Union[GoogleDriveAuth, ServiceAccountAuth]


def create_auth_manager(settings: Optional[Settings] = None) -> AuthManager:
    """
    Create the auth manager configured in settings.

    A configured service account key wins over the OAuth2 token flow.
    """
    settings = settings or get_settings()

    service_account_path = settings.google_service_account_path
    if service_account_path:
        if Path(service_account_path).exists():
            return ServiceAccountAuth(service_account_path)
        logger.warning("Service account configured but file not found, falling back to OAuth")

    return GoogleDriveAuth(
        credentials_path=settings.google_credentials_path,
        token_path=settings.google_token_path,
    )
