from __future__ import annotations

from fastapi import HTTPException, Request

from .users import resolve_identity


def bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(request: Request) -> dict | None:
    """Return the caller from a bearer token or the cookie session, or ``None``."""
    user = resolve_identity(bearer_token(request))
    if user:
        return user
    return request.session.get("user")


def require_user(request: Request) -> dict:
    """Raise 401 if the caller is anonymous."""
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(request: Request) -> dict:
    """Raise 401 if anonymous, 403 if not admin."""
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
