"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.exceptions import ForbiddenError, UnauthorizedError
from domain.enums import UserRole
from domain.models import AppUser, get_db_session
from services.auth_service import AuthService


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def parse_bearer(authorization: Optional[str]) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header value"""
    if authorization is None:
        raise UnauthorizedError("Missing Authorization header.")
    parts = authorization.strip().split()
    if len(parts) != 2:
        raise UnauthorizedError("Malformed Authorization header.")
    scheme, token = parts
    if scheme.lower() != "bearer":
        raise UnauthorizedError("Authorization scheme must be Bearer.")
    return token


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    return parse_bearer(authorization)


def get_current_user(
    token: str = Depends(get_bearer_token), db: Session = Depends(get_db)
) -> AppUser:
    """Authenticated, active user behind the bearer token"""
    return AuthService.get_user_from_access_token(db, token)


def get_optional_user(
    authorization: Optional[str] = Header(default=None), db: Session = Depends(get_db)
) -> Optional[AppUser]:
    """Like get_current_user, but anonymous callers get None"""
    if authorization is None:
        return None
    return AuthService.get_user_from_access_token(db, parse_bearer(authorization))


def require_admin(user: AppUser = Depends(get_current_user)) -> AppUser:
    if user.role != UserRole.ADMIN:
        raise ForbiddenError("Admin role required.")
    return user
