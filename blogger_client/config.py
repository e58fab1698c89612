"""Configuration and default paths."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

CREDS_DIR_NAME = "blogger-client"
BLOGGER_SCOPES = ["https://www.googleapis.com/auth/blogger"]
GOOGLE_API_TIMEOUT = 120  # seconds
AUTH_MODES = ("auto", "local_server", "manual")


def get_creds_dir() -> Path:
    """Get the directory holding credentials, token and config."""
    return Path.home() / f".{CREDS_DIR_NAME}"


@dataclass
class DefaultPaths:
    """Default file locations."""

    config: Path
    credentials: Path
    token: Path


def get_default_paths() -> DefaultPaths:
    creds = get_creds_dir()
    return DefaultPaths(
        config=creds / "config.yaml",
        credentials=creds / "credentials.json",
        token=creds / "token.json",
    )


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML config file."""
    if not path.exists():
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def save_yaml(path: Path, data: dict[str, Any]) -> None:
    """Save data to YAML config file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value).expanduser() if value else None


@dataclass
class BloggerConfig:
    """Settings for a Blogger session.

    Values come from ``config.yaml`` and may be overridden with the
    ``BLOGGER_BLOG_ID``, ``BLOGGER_CREDENTIALS_PATH`` and
    ``BLOGGER_TOKEN_PATH`` environment variables.
    """

    blog_id: Optional[str] = None
    credentials_path: Optional[Path] = None
    token_path: Optional[Path] = None
    scopes: list[str] = field(default_factory=lambda: list(BLOGGER_SCOPES))
    timeout: int = GOOGLE_API_TIMEOUT
    auth_mode: str = "auto"

    def __post_init__(self):
        if isinstance(self.scopes, str):
            self.scopes = [self.scopes]
        if not isinstance(self.scopes, list) or not all(
            isinstance(scope, str) and scope for scope in self.scopes
        ):
            raise ValueError(
                f"Invalid scopes {self.scopes!r}, expected a list of scope URLs"
            )
        if self.auth_mode not in AUTH_MODES:
            raise ValueError(
                f"Invalid auth_mode {self.auth_mode!r}, expected one of {AUTH_MODES}"
            )

    def resolved_credentials_path(self) -> Path:
        return self.credentials_path or get_default_paths().credentials

    def resolved_token_path(self) -> Path:
        return self.token_path or get_default_paths().token

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "BloggerConfig":
        """Load config from YAML file, then apply environment overrides."""
        if config_path is None:
            config_path = get_default_paths().config

        data = load_yaml(Path(config_path))

        config = cls(
            blog_id=data.get("blog_id"),
            credentials_path=_optional_path(data.get("credentials_path")),
            token_path=_optional_path(data.get("token_path")),
            scopes=data.get("scopes") or list(BLOGGER_SCOPES),
            timeout=data.get("timeout", GOOGLE_API_TIMEOUT),
            auth_mode=data.get("auth_mode", "auto"),
        )
        config.apply_env()
        return config

    def apply_env(self) -> None:
        if os.environ.get("BLOGGER_BLOG_ID"):
            self.blog_id = os.environ["BLOGGER_BLOG_ID"]
        if os.environ.get("BLOGGER_CREDENTIALS_PATH"):
            self.credentials_path = _optional_path(
                os.environ["BLOGGER_CREDENTIALS_PATH"]
            )
        if os.environ.get("BLOGGER_TOKEN_PATH"):
            self.token_path = _optional_path(os.environ["BLOGGER_TOKEN_PATH"])

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "blog_id": self.blog_id,
            "scopes": self.scopes,
            "timeout": self.timeout,
            "auth_mode": self.auth_mode,
        }
        if self.credentials_path:
            data["credentials_path"] = str(self.credentials_path)
        if self.token_path:
            data["token_path"] = str(self.token_path)
        return data

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save config to YAML file."""
        if config_path is None:
            config_path = get_default_paths().config
        save_yaml(Path(config_path), self.to_dict())
