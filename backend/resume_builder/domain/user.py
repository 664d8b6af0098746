from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


class UserRole(str, enum.Enum):
    admin = "Admin"
    user = "User"


class AuthProvider(str, enum.Enum):
    local = "Local"
    google = "Google"
    github = "GitHub"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    email: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.user
    auth_provider: AuthProvider = AuthProvider.local
    password_hash: Optional[str] = None
    auth_provider_user_id: Optional[str] = None
    is_verified: bool = False
    id: Optional[int] = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def create_local_user(
        cls,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.user,
    ) -> "User":
        return cls(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
            auth_provider=AuthProvider.local,
            is_verified=False,
        )
