"""
Pytest configuration for all tests.

Keeps tests away from the real ~/.blogger-client directory.
"""

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at a temp dir and clear BLOGGER_* overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("BLOGGER_BLOG_ID", "BLOGGER_CREDENTIALS_PATH", "BLOGGER_TOKEN_PATH"):
        monkeypatch.delenv(var, raising=False)
    yield home
