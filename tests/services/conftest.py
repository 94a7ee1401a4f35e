"""Service test fixtures — FeudClient wired to a scripted FakeTransport.

Invariants:
    - Every test builds its own client and transport (no shared cache state)
    - Settings isolated from the environment and .env files
"""

import pytest

from feudclient.services.feud_client import FeudClient
from feudclient.services.request_pipeline import RequestPipeline

from tests.services.fake_transport import FakeTransport


@pytest.fixture
def make_client(settings):
    """Build (FeudClient, FakeTransport) from a list of scripted replies."""
    def _make(*replies, **kwargs):
        transport = FakeTransport(replies)
        kwargs.setdefault("settings", settings)
        client = FeudClient(transport=transport, **kwargs)
        return client, transport
    return _make


@pytest.fixture
def make_pipeline(settings):
    """Build (RequestPipeline, FakeTransport) from a list of scripted replies."""
    def _make(*replies):
        transport = FakeTransport(replies)
        return RequestPipeline(transport, settings), transport
    return _make
