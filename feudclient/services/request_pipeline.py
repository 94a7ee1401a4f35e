"""Request Pipeline — encode → send → classify for a single round trip.

Invariants:
    - One PreparedRequest per execute(); built fresh, never retained
    - The first error met is raised unchanged (no wrapping, no downgrading)
    - No retries: a TransportFailure reaches the caller on the first occurrence
    - Session tokens and bodies are never logged; only paths, statuses and error codes
"""

import logging
from typing import Any

from feudclient.config import Settings
from feudclient.core.domain_types import RawResponse, RequestDescriptor, Success
from feudclient.core.envelope import classify_response, prepare_request
from feudclient.core.errors import (
    ErrorContext, FeudClientError, MalformedResponse,
)
from feudclient.core.transport_protocol import Transport

logger = logging.getLogger(__name__)


class RequestPipeline:
    """Drives RequestDescriptors through the codec, transport and classifier."""

    def __init__(self, transport: Transport, settings: Settings):
        self.transport = transport
        self.settings = settings

    async def execute(
        self, path: str, body: Any = None, session: str | None = None,
    ) -> tuple[Success, RawResponse]:
        """Run one request; returns the success envelope and the raw reply."""
        request = prepare_request(
            RequestDescriptor(path=path, body=body, session=session),
            path_root=self.settings.path_root,
            user_agent=self.settings.user_agent,
            cookie_name=self.settings.session_cookie,
        )
        logger.debug(
            f"POST {request.path}",
            extra={
                "path": request.path,
                "content_length": request.headers["Content-Length"],
            },
        )

        response = await self.transport.send(request)
        outcome = classify_response(
            response.status_code, response.body_text, path=request.path,
        )
        if isinstance(outcome, FeudClientError):
            logger.warning(
                f"{request.path} failed: {outcome.message}",
                extra={
                    "path": request.path,
                    "status_code": response.status_code,
                    "error_code": outcome.code,
                    "error_type": getattr(outcome, "error_type", None),
                },
            )
            raise outcome
        return outcome, response

    async def fetch(
        self,
        path: str,
        body: Any = None,
        session: str | None = None,
        property_path: str | None = None,
    ) -> Any:
        """Run one request and project `content[property_path]` (or all of content)."""
        success, _ = await self.execute(path, body, session)
        if property_path is None:
            return success.content
        if not isinstance(success.content, dict):
            raise MalformedResponse(
                f"Expected object content with '{property_path}'",
                raw=success.envelope,
                context=ErrorContext(path=path),
            )
        return success.content.get(property_path)
