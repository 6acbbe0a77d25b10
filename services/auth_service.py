from typing import Optional
from sqlalchemy.orm import Session
from datetime import timedelta
import logging
import uuid

from app import security
from app.config import settings
from app.exceptions import (
    ConflictError,
    ForbiddenError,
    UnauthorizedError,
    ServiceValidationError,
)
from domain.models import AppUser, utcnow
from domain.enums import UserRole
from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    LogoutRequest,
    UserResponse,
    TokenPairResponse,
    AuthResponse,
)
from repositories import UserRepository, RefreshTokenRepository

logger = logging.getLogger("appsuite.auth")


class AuthService:
    @staticmethod
    def _issue_token_pair(db: Session, user: AppUser) -> TokenPairResponse:
        """Build an access token and persist the hash of a fresh refresh token"""
        access_token = security.build_access_token(
            user_id=user.user_id, email=user.email, role=user.role.value
        )
        raw_refresh_token = security.build_refresh_token()
        RefreshTokenRepository(db).add_token(
            user_id=user.user_id,
            token_hash=security.hash_refresh_token(raw_refresh_token),
            expires_at=utcnow() + timedelta(days=settings.refresh_token_expire_days),
        )
        db.commit()
        return TokenPairResponse(access_token=access_token, refresh_token=raw_refresh_token)

    @staticmethod
    def register(
        db: Session, payload: RegisterRequest, role: UserRole = UserRole.USER
    ) -> AuthResponse:
        """
        Create an account and sign it in.

        Raises:
            ConflictError: If the email is already registered
        """
        repo = UserRepository(db)
        if repo.get_by_email(payload.email) is not None:
            logger.info("register rejected: duplicate email")
            raise ConflictError("Email is already registered.")

        user = repo.create_user(
            email=payload.email,
            full_name=payload.full_name.strip(),
            password_hash=security.hash_password(payload.password),
            role=role,
        )
        logger.info(f"User registered: user_id={user.user_id}")
        tokens = AuthService._issue_token_pair(db, user)
        return AuthResponse(user=UserResponse.model_validate(user), tokens=tokens)

    @staticmethod
    def login(db: Session, payload: LoginRequest) -> AuthResponse:
        """
        Verify credentials and issue a token pair.

        Raises:
            UnauthorizedError: Unknown email or wrong password
            ForbiddenError: Account is deactivated
        """
        user = UserRepository(db).get_by_email(payload.email)
        if user is None or not security.verify_password(
            payload.password, user.password_hash
        ):
            raise UnauthorizedError("Invalid email or password.")
        if not user.is_active:
            raise ForbiddenError("User is inactive.")

        tokens = AuthService._issue_token_pair(db, user)
        return AuthResponse(user=UserResponse.model_validate(user), tokens=tokens)

    @staticmethod
    def refresh(db: Session, payload: RefreshRequest) -> TokenPairResponse:
        """
        Rotate a refresh token: the presented token is revoked and linked to its replacement.

        Raises:
            UnauthorizedError: Unknown, revoked or expired token, or inactive owner
        """
        incoming = (payload.refresh_token or "").strip()
        if not incoming:
            raise ServiceValidationError("refresh_token is required.")

        repo = RefreshTokenRepository(db)
        old_token = repo.get_by_hash(security.hash_refresh_token(incoming))
        if old_token is None:
            raise UnauthorizedError("Invalid refresh token.")
        if old_token.revoked_at is not None:
            logger.warning(f"Revoked refresh token presented for user {old_token.user_id}")
            raise UnauthorizedError("Refresh token is revoked.")
        if old_token.expires_at <= utcnow():
            repo.revoke(old_token)
            db.commit()
            raise UnauthorizedError("Refresh token is expired.")

        user = UserRepository(db).get_by_id(old_token.user_id)
        if user is None or not user.is_active:
            repo.revoke(old_token)
            db.commit()
            raise UnauthorizedError("Invalid refresh token owner.")

        repo.revoke(old_token)
        tokens = AuthService._issue_token_pair(db, user)
        new_token = repo.get_by_hash(security.hash_refresh_token(tokens.refresh_token))
        old_token.replaced_by_token_id = new_token.token_id
        db.commit()
        return tokens

    @staticmethod
    def logout(
        db: Session, payload: LogoutRequest, current_user: Optional[AppUser] = None
    ) -> dict:
        """Revoke one refresh token, or every session of the authenticated caller"""
        repo = RefreshTokenRepository(db)
        refresh_token = (payload.refresh_token or "").strip()
        if refresh_token:
            token = repo.get_by_hash(security.hash_refresh_token(refresh_token))
            if token is not None:
                repo.revoke(token)
                db.commit()
            return {"ok": True}

        if current_user is not None:
            revoked = repo.revoke_all_for_user(current_user.user_id)
            db.commit()
            logger.info(f"Revoked {revoked} sessions for user {current_user.user_id}")
            return {"ok": True}

        raise ServiceValidationError("Provide refresh_token or authenticated user.")

    @staticmethod
    def get_user_from_access_token(db: Session, access_token: str) -> AppUser:
        """
        Resolve the user behind an access token.

        Raises:
            UnauthorizedError: Invalid token, unknown or inactive user
        """
        payload = security.decode_access_token(access_token)
        try:
            user_id = uuid.UUID(str(payload.get("sub")))
        except ValueError as e:
            raise UnauthorizedError("Invalid token subject.") from e

        user = UserRepository(db).get_by_id(user_id)
        if user is None:
            raise UnauthorizedError("User not found.")
        if not user.is_active:
            raise UnauthorizedError("User is inactive.")
        return user
