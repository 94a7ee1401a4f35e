"""Client Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - path_root always starts and ends with "/"
    - get_settings() is cached (lru_cache): single instance per process
    - timeout_seconds=None means no timeout; a hung server hangs the call

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults reproduce the official mobile client so the library works out of the box
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from feudclient.core.credentials import DEFAULT_PASSWORD_SALT, DEFAULT_SESSION_COOKIE


class Settings(BaseSettings):
    """Client settings from FEUD_* environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="FEUD_", case_sensitive=False, extra="ignore",
    )

    # Endpoint
    scheme: str = "http"
    host: str = "game02.wordfeud.com"
    path_root: str = "/wf/"

    @field_validator("path_root", mode="before")
    @classmethod
    def normalize_path_root(cls, v: str) -> str:
        """Accept "wf" or "/wf" and store "/wf/"."""
        if isinstance(v, str):
            v = "/" + v.strip("/") + "/"
            return v.replace("//", "/")
        return v

    timeout_seconds: float | None = None

    # Protocol identity
    user_agent: str = "WebFeudClient/2.0.3 (iOS; 5.0.1; iPhone4S)"
    password_salt: str = DEFAULT_PASSWORD_SALT
    session_cookie: str = DEFAULT_SESSION_COOKIE

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
