"""
Authentication Service
"""
from __future__ import annotations

import logging
from typing import Optional

from resume_builder.core import security
from resume_builder.core.config import Settings
from resume_builder.core.errors import AuthenticationError, ConflictError
from resume_builder.domain.user import AuthProvider, User, UserRole
from resume_builder.repositories.user_repository import UserRepository
from resume_builder.schemas.auth import SigninRequest, SignupRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Signup, signin and token issuance for local (email + password) users"""

    def __init__(self, repository: UserRepository, settings: Settings):
        self.repository = repository
        self.settings = settings

    def generate_token(self, user: User) -> str:
        return security.create_access_token(
            {
                "userId": user.id,
                "email": user.email,
                "role": user.role.value,
                "firstName": user.first_name,
                "lastName": user.last_name,
            },
            self.settings,
        )

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """The matching local user, or None for unknown email, OAuth user or wrong password."""
        user = self.repository.find_by_email(email)
        if user is None or user.auth_provider != AuthProvider.local or not user.password_hash:
            return None
        if not security.verify_password(password, user.password_hash):
            return None
        return user

    def signup(self, request: SignupRequest) -> dict:
        if self.repository.find_by_email(request.email):
            raise ConflictError("User with this email already exists")

        user = User.create_local_user(
            email=request.email,
            password_hash=security.hash_password(request.password),
            first_name=request.first_name,
            last_name=request.last_name,
            role=UserRole.user,
        )
        saved = self.repository.save(user)
        return self._auth_response(saved)

    def signin(self, request: SigninRequest) -> dict:
        user = self.authenticate(request.email, request.password)
        if user is None:
            logger.info("Rejected signin attempt")
            raise AuthenticationError("Invalid email or password")
        return self._auth_response(user)

    def _auth_response(self, user: User) -> dict:
        return {
            "userId": user.id,
            "email": user.email,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "role": user.role.value,
            "token": self.generate_token(user),
            "isVerified": user.is_verified,
            "authProvider": user.auth_provider.value,
        }
