"""Feud Client — public verbs composed over the request pipeline.

Invariants:
    - Guard clauses raise ValidationError inside the coroutine, before any request:
      callers see them on await, exactly like network-derived errors
    - Chained verbs (move, swap, pass_turn, resign) re-fetch the game only after the
      mutation succeeded; the first failure ends the chain and is raised as-is
    - get_board / get_ruleset hit the network at most once per id per client
    - login = credential login (yields the session cookie) + id login with that cookie

Design Decisions:
    - Explicit verb methods over a generic dispatcher: every path and projection visible
    - Client owns the transport it creates; an injected transport stays the caller's
"""

import logging
from collections.abc import Mapping
from typing import Any

from feudclient.config import Settings, get_settings
from feudclient.core.credentials import extract_session_id, hash_password, is_email
from feudclient.core.domain_types import EntityId
from feudclient.core.errors import ValidationError
from feudclient.core.transport_protocol import Transport
from feudclient.infrastructure.http_transport import HttpTransport
from feudclient.infrastructure.reference_cache import ReferenceCache
from feudclient.schemas.results import (
    LoginResult, MoveResult, SwapResult, UserProfile,
)
from feudclient.services.request_pipeline import RequestPipeline

logger = logging.getLogger(__name__)


def _require(value: Any, field: str, label: str) -> None:
    if value is None or value == "":
        raise ValidationError(f"No {label} given", field)


class FeudClient:
    """Async client for the word-game service."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: Transport | None = None,
        boards: Mapping[EntityId, Any] | None = None,
        rulesets: Mapping[EntityId, Any] | None = None,
    ):
        self.settings = settings or get_settings()
        self._owned_transport: HttpTransport | None = None
        if transport is None:
            transport = self._owned_transport = HttpTransport(self.settings)
        self.pipeline = RequestPipeline(transport, self.settings)
        self.boards = ReferenceCache("board", boards)
        self.rulesets = ReferenceCache("ruleset", rulesets)

    async def __aenter__(self) -> "FeudClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owned_transport is not None:
            await self._owned_transport.aclose()

    def _hash(self, password: str) -> str:
        return hash_password(password, self.settings.password_salt)

    # ─── Authentication ──────────────────────────────────────────

    async def login(self, user: str, password: str) -> LoginResult:
        """Log in by username or email; returns the session and user profile."""
        _require(user, "user", "username/email")
        _require(password, "password", "password")

        body = {"password": self._hash(password)}
        path = "user/login/"
        if is_email(user):
            path += "email/"
            body["email"] = user
        else:
            body["username"] = user

        success, response = await self.pipeline.execute(path, body)
        session = extract_session_id(
            response.headers, self.settings.session_cookie,
        )
        if not session:
            logger.warning("Login reply carried no session cookie")
        user_id = success.content.get("id") if isinstance(success.content, dict) else None
        return await self.login_with_id(user_id, password, session or None)

    async def login_with_id(
        self, user_id: EntityId, password: str, session: str | None = None,
    ) -> LoginResult:
        """Log in by numeric user id; keeps `session` or adopts the reply's cookie."""
        _require(user_id, "user_id", "id")
        _require(password, "password", "password")

        body = {"id": user_id, "password": self._hash(password)}
        success, response = await self.pipeline.execute(
            "user/login/id/", body, session,
        )
        content = success.content if isinstance(success.content, dict) else {}
        return LoginResult(
            session_id=session or extract_session_id(
                response.headers, self.settings.session_cookie,
            ),
            user=UserProfile.model_validate(content),
        )

    # ─── Reads ───────────────────────────────────────────────────

    async def get_games(self, session: str) -> Any:
        return await self.pipeline.fetch("user/games/", None, session, "games")

    async def get_game(self, game_id: EntityId, session: str) -> Any:
        _require(game_id, "game_id", "game id")
        return await self.pipeline.fetch(f"game/{game_id}/", None, session, "game")

    async def get_chat(self, game_id: EntityId, session: str) -> Any:
        _require(game_id, "game_id", "game id")
        return await self.pipeline.fetch(
            f"game/{game_id}/chat/", None, session, "messages",
        )

    async def get_relationships(self, session: str) -> Any:
        return await self.pipeline.fetch(
            "user/relationships/", None, session, "relationships",
        )

    async def get_notifications(self, session: str) -> Any:
        return await self.pipeline.fetch(
            "user/notifications/", None, session, "entries",
        )

    async def get_status(self, session: str) -> Any:
        """Whole account status content (pending invites, turn counts, ...)."""
        return await self.pipeline.fetch("user/status/", None, session)

    async def get_board(self, board_id: EntityId, session: str) -> Any:
        """Board layout; cached for the life of the client."""
        _require(board_id, "board_id", "board id")
        return await self.boards.get_or_fetch(
            board_id,
            lambda: self.pipeline.fetch(f"board/{board_id}/", None, session, "board"),
        )

    async def get_ruleset(self, ruleset_id: EntityId, session: str) -> Any:
        """Tile points of a ruleset; cached for the life of the client."""
        _require(ruleset_id, "ruleset_id", "ruleset id")
        return await self.rulesets.get_or_fetch(
            ruleset_id,
            lambda: self.pipeline.fetch(
                f"tile_points/{ruleset_id}/", None, session, "tile_points",
            ),
        )

    # ─── Game Mutations (chained with a game re-fetch) ───────────

    async def move(
        self,
        game_id: EntityId,
        ruleset_id: EntityId,
        move: Any,
        words: Any,
        session: str,
    ) -> MoveResult:
        """Place tiles; returns points, new tiles and the updated game."""
        _require(game_id, "game_id", "game id")
        body = {"move": move, "ruleset": ruleset_id, "words": words}
        success, _ = await self.pipeline.execute(f"game/{game_id}/move/", body, session)
        content = success.content if isinstance(success.content, dict) else {}

        game = await self.get_game(game_id, session)
        return MoveResult(
            new_tiles=content.get("new_tiles"),
            points=content.get("points"),
            main_word=content.get("main_word"),
            game=game,
        )

    async def swap(self, game_id: EntityId, tiles: Any, session: str) -> SwapResult:
        """Swap rack tiles; returns the new tiles and the updated game."""
        _require(game_id, "game_id", "game id")
        success, _ = await self.pipeline.execute(
            f"game/{game_id}/swap/", {"tiles": tiles}, session,
        )
        content = success.content if isinstance(success.content, dict) else {}

        game = await self.get_game(game_id, session)
        return SwapResult(
            updated=content.get("updated"),
            new_tiles=content.get("new_tiles"),
            game=game,
        )

    async def pass_turn(self, game_id: EntityId, session: str) -> Any:
        """Pass this turn; returns the updated game."""
        _require(game_id, "game_id", "game id")
        await self.pipeline.execute(f"game/{game_id}/pass/", None, session)
        return await self.get_game(game_id, session)

    async def resign(self, game_id: EntityId, session: str) -> Any:
        """Resign the game; returns the final game state."""
        _require(game_id, "game_id", "game id")
        await self.pipeline.execute(f"game/{game_id}/resign/", None, session)
        return await self.get_game(game_id, session)

    async def chat(self, game_id: EntityId, message: str, session: str) -> Any:
        _require(game_id, "game_id", "game id")
        return await self.pipeline.fetch(
            f"game/{game_id}/chat/send/", {"message": message}, session, "sent",
        )

    # ─── Invitations ─────────────────────────────────────────────

    async def invite_user(
        self, user: str, ruleset_id: EntityId, board_type: str, session: str,
    ) -> Any:
        _require(user, "user", "invitee")
        body = {"invitee": user, "ruleset": ruleset_id, "board_type": board_type}
        return await self.pipeline.fetch("invite/new/", body, session, "invitation")

    async def invite_random(
        self, ruleset_id: EntityId, board_type: str, session: str,
    ) -> Any:
        body = {"ruleset": ruleset_id, "board_type": board_type}
        return await self.pipeline.fetch(
            "random_request/create/", body, session, "request",
        )

    async def accept_invite(self, invite_id: EntityId, session: str) -> Any:
        """Accept an invitation; returns the id of the game it created."""
        _require(invite_id, "invite_id", "invite id")
        return await self.pipeline.fetch(
            f"invite/{invite_id}/accept/", None, session, "id",
        )

    async def reject_invite(self, invite_id: EntityId, session: str) -> None:
        _require(invite_id, "invite_id", "invite id")
        await self.pipeline.execute(f"invite/{invite_id}/reject/", None, session)
