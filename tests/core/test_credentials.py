"""Credentials — password digest, email detection, session cookie extraction.

Tests cover:
    - hash_password is SHA-1 hex of password + salt, UTF-8 encoded
    - is_email accepts dotted-atom addresses and IPv4 literals, rejects the rest
    - extract_session_id scans Set-Cookie directives and never raises
"""

import hashlib

import pytest

from feudclient.core.credentials import (
    DEFAULT_PASSWORD_SALT, extract_session_id, hash_password, is_email,
)


# ─── hash_password ───────────────────────────────────────────────

def test_hash_password_is_salted_sha1_hex():
    expected = hashlib.sha1(b"secretJarJarBinks9").hexdigest()
    assert hash_password("secret") == expected
    assert len(hash_password("secret")) == 40


def test_hash_password_is_deterministic():
    assert hash_password("hunter2") == hash_password("hunter2")


def test_hash_password_encodes_utf8():
    expected = hashlib.sha1(("pässwörd" + DEFAULT_PASSWORD_SALT).encode("utf-8"))
    assert hash_password("pässwörd") == expected.hexdigest()


def test_hash_password_depends_on_salt():
    assert hash_password("secret", "other-salt") != hash_password("secret")


def test_hash_password_never_returns_plaintext():
    assert "secret" not in hash_password("secret")


# ─── is_email ────────────────────────────────────────────────────

@pytest.mark.parametrize("value", [
    "user@example.com",
    "first.last@mail.example.co.uk",
    "user+tag@example.com",
    "o'brien@example.ie",
    "user@[192.168.0.1]",
])
def test_is_email_accepts(value):
    assert is_email(value)


@pytest.mark.parametrize("value", [
    "not-an-email",
    "user@",
    "@example.com",
    "user@example",
    ".user@example.com",
    "user name@example.com",
    "user@example.com\n",
    "user@[300.1.1.1]",
    "",
])
def test_is_email_rejects(value):
    assert not is_email(value)


# ─── extract_session_id ──────────────────────────────────────────

def test_extract_session_from_set_cookie():
    headers = [
        ("Content-Type", "application/json"),
        ("Set-Cookie", "sessionid=abc123; expires=Thu, 01-Jan-2026 00:00:00 GMT; Path=/"),
    ]
    assert extract_session_id(headers) == "abc123"


def test_extract_session_header_name_case_insensitive():
    assert extract_session_id([("set-cookie", "sessionid=abc123")]) == "abc123"


def test_extract_session_scans_every_set_cookie():
    headers = [
        ("Set-Cookie", "csrftoken=zzz; Path=/"),
        ("Set-Cookie", "sessionid=second; Path=/"),
    ]
    assert extract_session_id(headers) == "second"


def test_extract_session_first_match_wins():
    headers = [
        ("Set-Cookie", "sessionid=first"),
        ("Set-Cookie", "sessionid=second"),
    ]
    assert extract_session_id(headers) == "first"


def test_extract_session_strips_whitespace():
    assert extract_session_id([("Set-Cookie", "a=b;  sessionid = tok ; Path=/")]) == "tok"


def test_extract_session_cookie_name_case_sensitive():
    assert extract_session_id([("Set-Cookie", "SessionId=abc")]) == ""


def test_extract_session_custom_cookie_name():
    assert extract_session_id([("Set-Cookie", "sid=abc")], cookie_name="sid") == "abc"


@pytest.mark.parametrize("headers", [
    [],
    [("Content-Type", "application/json")],
    [("Set-Cookie", "")],
    [("Set-Cookie", "sessionid")],
    [("Set-Cookie", ";;;")],
])
def test_extract_session_absent_is_empty(headers):
    assert extract_session_id(headers) == ""
