"""
Password hashing, JWT issue/verify and the bearer-token route guard.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Any, Optional

from flask import current_app, g, request
from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from resume_builder.core.config import Settings
from resume_builder.core.errors import AuthenticationError

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class TokenIdentity:
    user_id: int
    email: str
    role: str

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "email": self.email, "role": self.role}


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


def create_access_token(claims: dict[str, Any], settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Optional[TokenIdentity]:
    """Verified identity from ``token``, or None if it is invalid, expired or incomplete."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    user_id = payload.get("userId")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        return None
    return TokenIdentity(user_id=user_id, email=payload.get("email", ""), role=payload.get("role", ""))


def extract_bearer_token(header: Optional[str]) -> Optional[str]:
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None


def require_auth(view):
    """Reject the request with 401 unless it carries a valid bearer token; sets ``g.current_user``."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        token = extract_bearer_token(request.headers.get("Authorization"))
        if not token:
            raise AuthenticationError("Unauthorized: No token provided")
        identity = decode_access_token(token, current_app.config["SETTINGS"])
        if identity is None:
            raise AuthenticationError("Unauthorized: Invalid token")
        g.current_user = identity
        return view(*args, **kwargs)

    return wrapped
