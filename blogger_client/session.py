"""The authenticated identity threaded through every API call."""

from pathlib import Path
from typing import List, Optional

from google.oauth2.credentials import Credentials

from blogger_client.auth import CredentialStore
from blogger_client.config import (
    BLOGGER_SCOPES,
    GOOGLE_API_TIMEOUT,
    BloggerConfig,
    get_default_paths,
)


class Session:
    """One user's credential store, client registration and scopes.

    Sessions hold no process-wide state, so several can coexist.
    """

    def __init__(
        self,
        credentials_path: Optional[Path] = None,
        token_path: Optional[Path] = None,
        scopes: Optional[List[str]] = None,
        timeout: int = GOOGLE_API_TIMEOUT,
        auth_mode: str = "auto",
        strict: bool = False,
        store: Optional[CredentialStore] = None,
    ):
        paths = get_default_paths()
        self.credentials_path = Path(
            credentials_path or paths.credentials
        ).expanduser()
        self.scopes = list(scopes or BLOGGER_SCOPES)
        self.timeout = timeout
        self.store = store or CredentialStore(
            token_path=token_path, auth_mode=auth_mode, strict=strict
        )

    @classmethod
    def from_config(cls, config: BloggerConfig, strict: bool = False) -> "Session":
        return cls(
            credentials_path=config.resolved_credentials_path(),
            token_path=config.resolved_token_path(),
            scopes=config.scopes,
            timeout=config.timeout,
            auth_mode=config.auth_mode,
            strict=strict,
        )

    @property
    def token_path(self) -> Path:
        return self.store.token_path

    def ensure_authenticated(self) -> Credentials:
        return self.store.ensure_authenticated(self.credentials_path, self.scopes)

    def revoke(self) -> bool:
        return self.store.revoke()

    def __repr__(self) -> str:
        return f"Session(token_path={str(self.token_path)!r})"
