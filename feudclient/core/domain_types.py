"""Domain Types — identity types and wire records shared by every layer.

Invariants:
    - Entity ids are opaque: str or int, rendered into paths with str()
    - RawResponse.headers keeps repeated header names (several Set-Cookie lines)
    - All records are frozen: built once per call, never mutated

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - str Enum for envelope status: compares equal to the raw wire string
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

SessionToken = NewType("SessionToken", str)
EntityId = Union[str, int]          # game, board, ruleset, invite, user ids


# ─── Enums ───────────────────────────────────────────────────────

class EnvelopeStatus(str, Enum):
    """Recognized values of the envelope `status` field."""
    SUCCESS = "success"
    ERROR = "error"


# ─── Wire Records ────────────────────────────────────────────────

@dataclass(frozen=True)
class RequestDescriptor:
    """One logical call: verb path, optional JSON body, optional session."""
    path: str
    body: Any = None
    session: SessionToken | None = None


@dataclass(frozen=True)
class PreparedRequest:
    """Encoded request handed to the transport."""
    method: str
    path: str
    headers: dict[str, str]
    content: bytes = b""


@dataclass(frozen=True)
class RawResponse:
    """What came back over the wire, before any interpretation."""
    status_code: int
    body_text: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class Success:
    """Classifier output for a `status: "success"` envelope."""
    content: Any
    envelope: dict[str, Any]
