"""
OAuth2 credential storage and the interactive authorization flow.

The token file holds a single ``authorized_user`` record:

    {"type": "authorized_user", "client_id": ..., "client_secret": ...,
     "refresh_token": ...}

The client registration file is the ``credentials.json`` downloaded from
the Google Cloud Console. It is only ever read.
"""

import json
import logging
import os
import re
import sys
import webbrowser
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from pydantic import BaseModel, Field, ValidationError

from blogger_client.config import BLOGGER_SCOPES, get_default_paths
from blogger_client.exceptions import AuthFlowError, StorageError

logger = logging.getLogger(__name__)

AUTHORIZED_USER_TYPE = "authorized_user"
MANUAL_REDIRECT_URI = "http://localhost:1/"
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class ClientRegistration(BaseModel):
    """The OAuth client the application is registered as."""

    client_id: str
    client_secret: str
    kind: str = "installed"
    auth_uri: str = GOOGLE_AUTH_URI
    token_uri: str = GOOGLE_TOKEN_URI
    redirect_uris: List[str] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientRegistration":
        for kind in ("installed", "web"):
            if isinstance(data.get(kind), dict):
                return cls(kind=kind, **data[kind])
        raise ValueError("expected an 'installed' or 'web' client section")

    @classmethod
    def from_file(cls, path: Path) -> "ClientRegistration":
        """Read a Google client-secrets file.

        Raises:
            AuthFlowError: If the file is missing or not a valid registration.
        """
        path = Path(path).expanduser()
        try:
            with open(path) as f:
                data = json.load(f)
            return cls.from_dict(data)
        except FileNotFoundError:
            raise AuthFlowError(
                f"Client registration not found at {path}. Download an OAuth "
                "client ID (Desktop app) from Google Cloud Console -> APIs & "
                "Services -> Credentials and save it there."
            ) from None
        except (OSError, json.JSONDecodeError, ValueError, ValidationError) as e:
            raise AuthFlowError(f"Invalid client registration {path}: {e}") from e

    def to_client_config(self) -> Dict[str, Any]:
        """Shape expected by ``InstalledAppFlow.from_client_config``."""
        section = self.model_dump(exclude={"kind"})
        return {self.kind: section}


class StoredCredential(BaseModel):
    """The persisted form of a user credential."""

    type: str = AUTHORIZED_USER_TYPE
    client_id: str
    client_secret: str
    refresh_token: str

    @classmethod
    def from_credentials(
        cls, credentials: Credentials, registration: ClientRegistration
    ) -> "StoredCredential":
        return cls(
            client_id=registration.client_id,
            client_secret=registration.client_secret,
            refresh_token=credentials.refresh_token,
        )

    def to_credentials(self, scopes: Optional[List[str]] = None) -> Credentials:
        return Credentials.from_authorized_user_info(self.model_dump(), scopes)


def is_headless() -> bool:
    """Check if running without a display to open a browser on."""
    if sys.platform in ("darwin", "win32"):
        return False
    return os.environ.get("DISPLAY") is None and os.environ.get(
        "WAYLAND_DISPLAY"
    ) is None


def _extract_code(raw: str) -> str:
    """Accept either the bare code or the whole redirect URL."""
    code = raw.strip()
    if "code=" in code:
        match = re.search(r"code=([^&]+)", code)
        if match:
            code = match.group(1)
    return unquote(code)


def run_oauth_flow_manual(flow: InstalledAppFlow) -> Credentials:
    """Run OAuth flow manually without browser auto-launch.

    This works in headless environments like SSH sessions and containers.
    """
    # Loopback redirect; the page won't load but the code is in the URL
    flow.redirect_uri = MANUAL_REDIRECT_URI

    auth_url, _ = flow.authorization_url(prompt="consent", access_type="offline")

    print()
    print("Please visit this URL to authorize access to your blogs:")
    print()
    print(f"    {auth_url}")
    print()
    print("After authorizing, you'll be redirected to a page that won't load.")
    print("Copy the 'code' parameter from the URL in your browser's address bar.")
    print("The URL will look like: http://localhost:1/?code=XXXXX&scope=...")
    print()

    code = _extract_code(input("Enter the authorization code: "))
    if not code:
        raise AuthFlowError("No authorization code entered")

    flow.fetch_token(code=code)
    return flow.credentials


class CredentialStore:
    """Loads, persists and deletes the credential for one identity.

    ``obtain_interactive`` never touches the token file; ``persist`` is the
    only write. ``ensure_authenticated`` chains the two when nothing usable
    is stored.
    """

    def __init__(
        self,
        token_path: Optional[Path] = None,
        auth_mode: str = "auto",
        strict: bool = False,
    ):
        self.token_path = Path(token_path or get_default_paths().token).expanduser()
        self.auth_mode = auth_mode
        self.strict = strict

    def load(self, scopes: Optional[List[str]] = None) -> Optional[Credentials]:
        """Read the persisted credential.

        Returns None when the token file is absent. An unreadable or
        malformed file also yields None unless the store is strict, in
        which case StorageError is raised.
        """
        try:
            data = json.loads(self.token_path.read_text())
            return StoredCredential.model_validate(data).to_credentials(scopes)
        except FileNotFoundError:
            logger.info(f"No saved credentials at {self.token_path}")
            return None
        except (OSError, ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            if self.strict:
                raise StorageError(self.token_path, "read", str(e)) from e
            logger.warning(
                f"Ignoring unreadable credentials at {self.token_path}: {e}"
            )
            return None

    def obtain_interactive(
        self,
        registration: ClientRegistration,
        scopes: Optional[List[str]] = None,
    ) -> Credentials:
        """Run the authorization-code flow and return fresh credentials.

        Raises:
            AuthFlowError: If consent is denied, the flow fails, or no
                refresh token is returned.
        """
        scopes = scopes or BLOGGER_SCOPES
        try:
            flow = InstalledAppFlow.from_client_config(
                registration.to_client_config(), scopes
            )
            if self.auth_mode == "manual" or (
                self.auth_mode == "auto" and is_headless()
            ):
                credentials = run_oauth_flow_manual(flow)
            else:
                credentials = self._run_local_server(flow)
        except AuthFlowError:
            raise
        except Exception as e:
            raise AuthFlowError(f"OAuth authorization failed: {e}") from e

        if credentials is None or not credentials.refresh_token:
            raise AuthFlowError(
                "OAuth authorization returned no refresh token; revoke the "
                "app's access in your Google account and try again"
            )
        logger.info("OAuth authorization completed")
        return credentials

    def _run_local_server(self, flow: InstalledAppFlow) -> Credentials:
        try:
            return flow.run_local_server(
                port=0, prompt="consent", access_type="offline"
            )
        except (OSError, webbrowser.Error) as e:
            if self.auth_mode == "local_server":
                raise
            logger.warning(f"Local server failed ({e}), using manual flow...")
            return run_oauth_flow_manual(flow)

    def persist(
        self, credentials: Credentials, registration: ClientRegistration
    ) -> Path:
        """Write the credential record, replacing any previous one.

        Raises:
            StorageError: If the token file cannot be written.
        """
        record = StoredCredential.from_credentials(credentials, registration)
        try:
            self.token_path.parent.mkdir(parents=True, exist_ok=True)
            self.token_path.write_text(record.model_dump_json(indent=2))
            self.token_path.chmod(0o600)
        except OSError as e:
            raise StorageError(self.token_path, "write", str(e)) from e
        logger.info(f"Credentials saved to {self.token_path}")
        return self.token_path

    def ensure_authenticated(
        self,
        registration_path: Path,
        scopes: Optional[List[str]] = None,
    ) -> Credentials:
        """Return stored credentials, authorizing interactively if needed."""
        credentials = self.load(scopes)
        if credentials is not None:
            return credentials

        registration = ClientRegistration.from_file(registration_path)
        credentials = self.obtain_interactive(registration, scopes)
        self.persist(credentials, registration)
        return credentials

    def revoke(self) -> bool:
        """Delete the token file.

        Returns True if a file was removed. Failures are logged, not raised.
        """
        try:
            self.token_path.unlink()
        except FileNotFoundError:
            logger.warning(f"No credentials to delete at {self.token_path}")
            return False
        except OSError as e:
            logger.warning(f"Error during logout: {e}")
            return False
        logger.info("Logged out successfully. Credentials have been deleted.")
        return True
