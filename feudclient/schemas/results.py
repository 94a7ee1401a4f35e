"""Result Schemas — Pydantic models for the verbs that reshape server content.

Invariants:
    - Only fields a verb projects out of `content` are modelled; game payloads stay opaque
    - Projected server fields are typed Any: whatever the server sent passes through,
      so a reply the server accepted never fails client-side validation
    - Missing server fields become None; unknown server fields are ignored
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from feudclient.core.domain_types import SessionToken


class UserProfile(BaseModel):
    """Identity returned by the id-based login."""
    model_config = ConfigDict(extra="ignore")

    id: Any = None
    username: Any = None
    email: Any = None


class LoginResult(BaseModel):
    """Session token plus the logged-in user."""
    session_id: SessionToken
    user: UserProfile


class MoveResult(BaseModel):
    """Outcome of a placed word, with the game state fetched afterwards."""
    new_tiles: Any = None
    points: Any = None
    main_word: Any = None
    game: Any = None


class SwapResult(BaseModel):
    """Outcome of a tile swap, with the game state fetched afterwards."""
    updated: Any = None
    new_tiles: Any = None
    game: Any = None
