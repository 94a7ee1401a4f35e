"""Root conftest — shared test configuration."""

import os

import pytest

from feudclient.config import Settings

# Ensure tests never pick up a developer's FEUD_* overrides
for _key in [k for k in os.environ if k.upper().startswith("FEUD_")]:
    del os.environ[_key]


@pytest.fixture
def settings():
    """Default settings, isolated from any .env file."""
    return Settings(_env_file=None)
