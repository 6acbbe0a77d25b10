"""
User Repository - Data access layer for accounts and refresh tokens
"""

from typing import Optional
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import AppUser, RefreshToken, utcnow
from domain.enums import UserRole
from app.exceptions import ConflictError


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by email (emails are stored lower case)"""
        return (
            self.db.query(AppUser)
            .filter(AppUser.email == email.strip().lower())
            .first()
        )

    def create_user(
        self,
        email: str,
        full_name: str,
        password_hash: str,
        role: UserRole = UserRole.USER,
    ) -> AppUser:
        """Create a new user"""
        user = AppUser(
            email=email.strip().lower(),
            full_name=full_name,
            password_hash=password_hash,
            role=role,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email is already registered.") from e


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Repository for hashed refresh tokens"""

    def __init__(self, db: Session):
        super().__init__(db, RefreshToken)

    def get_by_hash(self, token_hash: str) -> Optional[RefreshToken]:
        return (
            self.db.query(RefreshToken)
            .filter(RefreshToken.token_hash == token_hash)
            .first()
        )

    def add_token(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> RefreshToken:
        """Stage a new token; the caller commits"""
        token = RefreshToken(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
        self.db.add(token)
        self.db.flush()
        return token

    def revoke(self, token: RefreshToken) -> None:
        if token.revoked_at is None:
            token.revoked_at = utcnow()

    def revoke_all_for_user(self, user_id: UUID) -> int:
        """Revoke every live token of a user, returning how many were revoked"""
        return (
            self.db.query(RefreshToken)
            .filter(RefreshToken.user_id == user_id, RefreshToken.revoked_at.is_(None))
            .update({RefreshToken.revoked_at: utcnow()}, synchronize_session=False)
        )
