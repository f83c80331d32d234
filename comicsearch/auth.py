"""JSON Web Token issue and validation, and the admin-role check."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any

import jwt
from werkzeug.exceptions import Unauthorized

_ALGORITHM = "HS256"
_SIGNING_KEY = os.environ.get("COMICSEARCH_JWT_KEY", "secret").encode("utf-8")

TOKEN_COOKIE = "token"
ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Claims:
    """The claims carried by an access token."""

    username: str = ""
    role: str = ""
    expires_at: int = 0


def generate_jwt(username: str, role: str, expiry_minutes: int) -> str:
    """Issue a signed token for a user that expires after the given minutes."""
    payload = {
        "username": username,
        "role": role,
        "exp": int(time.time()) + expiry_minutes * 60,
    }
    return jwt.encode(payload, _SIGNING_KEY, algorithm=_ALGORITHM)


def validate_jwt(token: str) -> Claims:
    """Check a token's signature and expiry and return its claims.

    Raises jwt.InvalidTokenError (or a subclass) when the token is not valid.
    """
    payload: dict[str, Any] = jwt.decode(token, _SIGNING_KEY, algorithms=[_ALGORITHM])
    return Claims(
        username=str(payload.get("username", "")),
        role=str(payload.get("role", "")),
        expires_at=int(payload.get("exp", 0)),
    )


def is_admin(request: Any) -> bool:
    """Whether the request carries a valid token with the admin role.

    Raises Unauthorized when the token cookie is missing or invalid.
    """
    token = request.cookies.get(TOKEN_COOKIE)
    if token is None:
        raise Unauthorized("no token provided")
    try:
        claims = validate_jwt(token)
    except jwt.InvalidTokenError as exc:
        raise Unauthorized("invalid token") from exc
    return claims.role == ADMIN_ROLE