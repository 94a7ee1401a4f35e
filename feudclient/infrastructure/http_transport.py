"""HTTP Transport — httpx.AsyncClient adapter implementing core.transport_protocol.Transport.

Invariants:
    - Exactly one POST per send(); no retries, no redirects followed
    - Prepared headers go out unchanged (including the computed Content-Length)
    - Any httpx.RequestError (connect, read, timeout, bad Content-Encoding,
      redirect loops) → TransportFailure; no raw httpx exception escapes
    - Non-200 replies are returned as RawResponse, never raised
    - Repeated response headers preserved (multi_items)

Design Decisions:
    - Injectable httpx.AsyncClient: tests plug in httpx.MockTransport,
      applications may share a pooled client
    - Transport only closes a client it created itself
"""

import logging

import httpx

from feudclient.config import Settings
from feudclient.core.domain_types import PreparedRequest, RawResponse
from feudclient.core.errors import ErrorContext, TransportFailure

logger = logging.getLogger(__name__)


class HttpTransport:
    """Sends prepared requests to the game host over httpx."""

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = f"{settings.scheme}://{settings.host}"
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.timeout_seconds),
            follow_redirects=False,
        )

    async def send(self, request: PreparedRequest) -> RawResponse:
        url = self.base_url + request.path
        try:
            response = await self.client.request(
                request.method, url,
                headers=request.headers, content=request.content,
            )
        except httpx.RequestError as e:
            logger.warning(
                f"Transport error on {request.path}: {e!r}",
                extra={"path": request.path},
            )
            raise TransportFailure(
                str(e) or type(e).__name__,
                context=ErrorContext(path=request.path),
            ) from e

        return RawResponse(
            status_code=response.status_code,
            body_text=response.content.decode("utf-8", errors="replace"),
            headers=list(response.headers.multi_items()),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
