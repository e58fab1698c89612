"""Shared test fixtures for blogger-client unit tests."""

import json
import tempfile
from pathlib import Path

import pytest

from blogger_client.auth import CredentialStore
from blogger_client.client import BloggerClient
from blogger_client.mock_blogger_service import (
    MockBlog,
    MockBloggerBackingStore,
    MockBloggerService,
)
from blogger_client.session import Session
from tests.unit.utils import CLIENT_ID, CLIENT_SECRET, REFRESH_TOKEN


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def registration_file(temp_dir):
    """A Google client-secrets file for a desktop app."""
    path = temp_dir / "credentials.json"
    path.write_text(
        json.dumps(
            {
                "installed": {
                    "client_id": CLIENT_ID,
                    "project_id": "blogger-test",
                    "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                    "token_uri": "https://oauth2.googleapis.com/token",
                    "client_secret": CLIENT_SECRET,
                    "redirect_uris": ["http://localhost"],
                }
            }
        )
    )
    return path


@pytest.fixture
def token_path(temp_dir):
    return temp_dir / "token.json"


@pytest.fixture
def saved_token(token_path):
    """A persisted authorized_user record."""
    token_path.write_text(
        json.dumps(
            {
                "type": "authorized_user",
                "client_id": CLIENT_ID,
                "client_secret": CLIENT_SECRET,
                "refresh_token": REFRESH_TOKEN,
            }
        )
    )
    return token_path


@pytest.fixture
def store(token_path):
    return CredentialStore(token_path=token_path, auth_mode="local_server")


@pytest.fixture
def session(registration_file, store):
    return Session(credentials_path=registration_file, store=store)


@pytest.fixture
def backing_store():
    return MockBloggerBackingStore()


@pytest.fixture
def blog(backing_store):
    return backing_store.add_blog(
        MockBlog(id="B", name="Field Notes", url="http://WWW.Example.com/")
    )


@pytest.fixture
def mock_service(backing_store):
    return MockBloggerService(backing_store)


@pytest.fixture
def client(session, saved_token, mock_service, blog):
    """Client with a stored token, talking to the mock service."""
    return BloggerClient(
        session, blog_id=blog.id, service_builder=mock_service.builder()
    )


