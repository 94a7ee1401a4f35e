"""Credentials — password digest, email detection, session cookie extraction.

Invariants:
    - hash_password is deterministic across platforms (UTF-8 input, hex output)
    - Plaintext passwords never leave this module; only the digest goes on the wire
    - extract_session_id never raises; a missing cookie yields ""
    - Cookie names match case-sensitively; header names case-insensitively
"""

import hashlib
import re
from collections.abc import Iterable

DEFAULT_PASSWORD_SALT = "JarJarBinks9"
DEFAULT_SESSION_COOKIE = "sessionid"

# Dotted-atom local part; hostname labels (max 63 chars) or a bracketed IPv4 literal.
_EMAIL_RE = re.compile(
    r"^(?:[\w!#$%&'*+\-/=?^`{|}~]+\.)*[\w!#$%&'*+\-/=?^`{|}~]+"
    r"@(?:(?:(?:[a-zA-Z0-9](?:[a-zA-Z0-9\-](?!\.)){0,61}[a-zA-Z0-9]?\.)+"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9\-](?!$)){0,61}[a-zA-Z0-9]?)"
    r"|(?:\[(?:(?:[01]?\d{1,2}|2[0-4]\d|25[0-5])\.){3}"
    r"(?:[01]?\d{1,2}|2[0-4]\d|25[0-5])\]))$",
    re.ASCII,
)


def hash_password(password: str, salt: str = DEFAULT_PASSWORD_SALT) -> str:
    """SHA-1 hex digest of password + shared salt."""
    return hashlib.sha1((password + salt).encode("utf-8")).hexdigest()  # nosec B324


def is_email(value: str) -> bool:
    return _EMAIL_RE.fullmatch(value) is not None


def extract_session_id(
    headers: Iterable[tuple[str, str]],
    cookie_name: str = DEFAULT_SESSION_COOKIE,
) -> str:
    """Return the session token from Set-Cookie headers, or "" if absent."""
    for name, value in headers:
        if name.lower() != "set-cookie":
            continue
        for directive in value.split(";"):
            key, _, token = directive.partition("=")
            if key.strip() == cookie_name:
                return token.strip()
    return ""
