"""Envelope Codec — request encoding and response classification.

Invariants:
    - Content-Length is the UTF-8 byte length of the body text, never its character count
    - An absent body encodes to ("", 0)
    - Unserializable bodies (cycles, NaN, foreign objects) raise EncodingError
    - classify_response is total: returns exactly one of Success, ProtocolFailure,
      MalformedResponse, DomainError; it never raises

Design Decisions:
    - Classifier returns the error instead of raising it: pure and exhaustively testable,
      the pipeline decides when to raise
    - Compact JSON with ensure_ascii=False: non-ASCII characters go on the wire unescaped
"""

import json
from typing import Any

from feudclient.core.domain_types import (
    EnvelopeStatus, PreparedRequest, RequestDescriptor, Success,
)
from feudclient.core.errors import (
    DomainError, EncodingError, ErrorContext, MalformedResponse,
    ProtocolFailure, ValidationError, FeudClientError,
)

JSON_CONTENT_TYPE = "application/json"


# ─── Request Side ────────────────────────────────────────────────

def utf8_length(text: str) -> int:
    """Number of bytes `text` occupies on the wire."""
    return len(text.encode("utf-8"))


def encode_body(body: Any) -> tuple[str, int]:
    """Serialize a request body, returning (text, transmitted byte length)."""
    if body is None:
        return "", 0
    try:
        text = json.dumps(
            body, separators=(",", ":"), ensure_ascii=False, allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingError(str(e)) from e
    return text, utf8_length(text)


def prepare_request(
    descriptor: RequestDescriptor,
    *,
    path_root: str,
    user_agent: str,
    cookie_name: str,
) -> PreparedRequest:
    """Build the POST the transport will send for `descriptor`."""
    if not descriptor.path:
        raise ValidationError("You must specify a path", "path")

    ctx = ErrorContext(path=descriptor.path)
    try:
        text, length = encode_body(descriptor.body)
    except EncodingError as e:
        e.context = ctx
        raise

    path = path_root + descriptor.path
    if not path.endswith("/"):
        path += "/"

    headers = {
        "Accept": JSON_CONTENT_TYPE,
        "User-Agent": user_agent,
        "Content-Type": JSON_CONTENT_TYPE,
        "Content-Length": str(length),
    }
    if descriptor.session:
        headers["Cookie"] = f"{cookie_name}={descriptor.session}"

    return PreparedRequest(
        method="POST", path=path, headers=headers,
        content=text.encode("utf-8"),
    )


# ─── Response Side ───────────────────────────────────────────────

def classify_response(
    status_code: int, body_text: str, path: str | None = None,
) -> Success | FeudClientError:
    """Map one HTTP reply onto the envelope outcomes."""
    ctx = ErrorContext(path=path, status_code=status_code)

    if status_code != 200:
        return ProtocolFailure(status_code, context=ctx)

    try:
        envelope = json.loads(body_text)
    except (TypeError, ValueError, RecursionError) as e:
        return MalformedResponse(
            f"Invalid response: {e}", raw=body_text, context=ctx,
        )

    if not isinstance(envelope, dict) or not envelope.get("status"):
        return MalformedResponse(
            f"Invalid response: {body_text}", raw=envelope, context=ctx,
        )

    status = envelope["status"]
    content = envelope.get("content")

    if status == EnvelopeStatus.SUCCESS:
        return Success(content=content, envelope=envelope)

    if status == EnvelopeStatus.ERROR:
        if not isinstance(content, dict) or content.get("type") is None:
            return MalformedResponse(
                f"Error reply without a type: {body_text}",
                raw=envelope, context=ctx,
            )
        return DomainError(str(content["type"]), context=ctx)

    return MalformedResponse(
        f"No success in response: {body_text}", raw=envelope, context=ctx,
    )
