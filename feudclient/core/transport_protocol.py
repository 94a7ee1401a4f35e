"""Boundary Protocol — the contract between the request pipeline and the wire.

Invariants:
    - send() raises TransportFailure when no HTTP response was received
    - A received non-200 status is returned, not raised (classifier's concern)
    - Implementations are swappable: httpx in production, fakes in tests
"""

from typing import Protocol

from feudclient.core.domain_types import PreparedRequest, RawResponse


class Transport(Protocol):
    """Performs one HTTP POST and returns the raw reply."""
    async def send(self, request: PreparedRequest) -> RawResponse: ...
