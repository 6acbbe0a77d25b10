"""Account registration, login and token rotation routes"""

from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_current_user, get_optional_user
from domain.models import AppUser
from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    LogoutRequest,
    UserResponse,
    TokenPairResponse,
    AuthResponse,
)
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("appsuite.api.auth")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and return its first token pair"""
    return AuthService.register(db, payload)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return AuthService.login(db, payload)


@router.post("/refresh", response_model=TokenPairResponse)
def refresh(payload: RefreshRequest, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new pair; the old token is revoked"""
    return AuthService.refresh(db, payload)


@router.post("/logout")
def logout(
    payload: LogoutRequest,
    db: Session = Depends(get_db),
    user: Optional[AppUser] = Depends(get_optional_user),
):
    return AuthService.logout(db, payload, current_user=user)


@router.get("/me", response_model=UserResponse)
def me(user: AppUser = Depends(get_current_user)):
    return UserResponse.model_validate(user)
