"""
User Repository
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from resume_builder.core.database import Database, as_utc
from resume_builder.core.errors import ConflictError, InternalError
from resume_builder.domain.user import User
from resume_builder.models.user import UserRecord

logger = logging.getLogger(__name__)


def _to_domain(record: UserRecord) -> User:
    return User(
        id=record.id,
        email=record.email,
        password_hash=record.password_hash,
        first_name=record.first_name,
        last_name=record.last_name,
        role=record.role,
        auth_provider=record.auth_provider,
        auth_provider_user_id=record.auth_provider_user_id,
        is_verified=record.is_verified,
        created_at=as_utc(record.created_at),
        updated_at=as_utc(record.updated_at),
    )


class UserRepository:
    """User data access layer"""

    def __init__(self, database: Database):
        self.database = database

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self.database.session() as db:
            record = db.get(UserRecord, user_id)
            return _to_domain(record) if record else None

    def find_by_email(self, email: str) -> Optional[User]:
        with self.database.session() as db:
            record = db.scalars(select(UserRecord).where(UserRecord.email == email)).first()
            return _to_domain(record) if record else None

    def save(self, user: User) -> User:
        """Insert a new user or overwrite an existing one; returns the stored state."""
        with self.database.session() as db:
            record = db.get(UserRecord, user.id) if user.id is not None else None
            if record is None:
                record = UserRecord(created_at=user.created_at)
                db.add(record)
            record.email = user.email
            record.password_hash = user.password_hash
            record.first_name = user.first_name
            record.last_name = user.last_name
            record.role = user.role
            record.auth_provider = user.auth_provider
            record.auth_provider_user_id = user.auth_provider_user_id
            record.is_verified = user.is_verified
            record.updated_at = user.updated_at
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise ConflictError("User with this email already exists") from exc
            except SQLAlchemyError as exc:
                db.rollback()
                logger.error("Failed to save user %s: %s", user.email, exc)
                raise InternalError("Failed to save user") from exc
            db.refresh(record)
            if user.id is None:
                logger.info("Created user %s", record.id)
            return _to_domain(record)
