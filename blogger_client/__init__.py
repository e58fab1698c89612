"""
blogger_client - A thin OAuth2 client for the Blogger v3 API
"""

__version__ = "0.1.0"

from pathlib import Path
from typing import Optional

from blogger_client.auth import ClientRegistration, CredentialStore
from blogger_client.client import BloggerClient
from blogger_client.config import BloggerConfig
from blogger_client.dispatcher import RequestDispatcher
from blogger_client.endpoints import Endpoint
from blogger_client.exceptions import (
    AuthFlowError,
    BloggerError,
    MalformedEndpointError,
    MissingParameterError,
    NotFoundError,
    RequestError,
    StorageError,
)
from blogger_client.session import Session


def login(
    blog_id: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> BloggerClient:
    """Authenticate (prompting on first use) and return a ready client."""
    config = BloggerConfig.load(config_path)
    session = Session.from_config(config)
    session.ensure_authenticated()
    return BloggerClient(session, blog_id=blog_id or config.blog_id)


__all__ = [
    "AuthFlowError",
    "BloggerClient",
    "BloggerConfig",
    "BloggerError",
    "ClientRegistration",
    "CredentialStore",
    "Endpoint",
    "MalformedEndpointError",
    "MissingParameterError",
    "NotFoundError",
    "RequestDispatcher",
    "RequestError",
    "Session",
    "StorageError",
    "login",
]
