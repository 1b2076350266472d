from __future__ import annotations

import os
import secrets
import time
from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}
_tokens: dict[str, dict[str, Any]] = {}
_TOKEN_TTL = int(os.environ.get("TOKEN_TTL_SECONDS", "28800"))  # 8 hours


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _seed_users() -> None:
    """Seed the dealer staff accounts that may read wizard analytics."""
    _users["staff"] = {
        "password_hash": _hash_password(os.environ.get("STAFF_PASSWORD", "staff123")),
        "role": "staff",
    }
    _users["admin"] = {
        "password_hash": _hash_password(os.environ.get("ADMIN_PASSWORD", "admin123")),
        "role": "admin",
    }


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{username, role}`` or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return {"username": username, "role": record["role"]}
    return None


def _purge_expired() -> None:
    now = time.time()
    for token in [t for t, e in list(_tokens.items()) if now - e["created_at"] >= _TOKEN_TTL]:
        _tokens.pop(token, None)


def issue_token(username: str) -> str:
    """Create a bearer token for an authenticated user.

    Tokens expire ``TOKEN_TTL_SECONDS`` after issue; expired ones are
    dropped on lookup and whenever a new token is issued.
    """
    _purge_expired()
    token = secrets.token_urlsafe(32)
    _tokens[token] = {"username": username, "created_at": time.time()}
    return token


def revoke_token(token: str) -> None:
    _tokens.pop(token, None)


def resolve_identity(token: str | None) -> dict[str, Any] | None:
    """Map a bearer token back to ``{username, role}``, or ``None``."""
    if not token:
        return None
    entry = _tokens.get(token)
    if entry and time.time() - entry["created_at"] >= _TOKEN_TTL:
        _tokens.pop(token, None)
        entry = None
    username = entry["username"] if entry else None
    record = _users.get(username) if username else None
    if record is None:
        return None
    return {"username": username, "role": record["role"]}


_seed_users()
