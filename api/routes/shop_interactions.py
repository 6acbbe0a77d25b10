"""Shopping assistant interaction, preference and recommendation routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from api.dependencies import get_db, get_current_user
from domain.models import AppUser
from domain.enums import InteractionType, RecommendationStrategy
from domain.schemas.shopping_schemas import (
    InteractionCreate,
    InteractionResponse,
    InteractionStats,
    PreferencesUpdate,
    PreferencesResponse,
    RecommendationResponse,
)
from services.interaction_service import InteractionService, PreferenceService
from services.recommendation_service import RecommendationService

router = APIRouter(prefix="/shop", tags=["Shopping"])
logger = logging.getLogger("appsuite.api.shopping")


# ============================================================================
# Interactions
# ============================================================================


@router.post(
    "/interactions",
    response_model=InteractionResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_interaction(
    payload: InteractionCreate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return InteractionResponse.model_validate(InteractionService.record(db, user, payload))


@router.get("/interactions", response_model=List[InteractionResponse])
def list_interactions(
    type: Optional[InteractionType] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return [
        InteractionResponse.model_validate(i)
        for i in InteractionService.list_for_user(db, user, type, limit)
    ]


@router.get("/interactions/stats", response_model=InteractionStats)
def interaction_stats(
    db: Session = Depends(get_db), user: AppUser = Depends(get_current_user)
):
    return InteractionService.stats(db, user)


@router.get("/interactions/recent", response_model=List[InteractionResponse])
def recent_interactions(
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return [
        InteractionResponse.model_validate(i)
        for i in InteractionService.list_for_user(db, user, limit=limit)
    ]


# ============================================================================
# Preferences
# ============================================================================


@router.get("/preferences", response_model=PreferencesResponse)
def get_preferences(
    db: Session = Depends(get_db), user: AppUser = Depends(get_current_user)
):
    """Saved preferences, or the defaults when none were saved yet"""
    return PreferenceService.get(db, user)


@router.put("/preferences", response_model=PreferencesResponse)
def update_preferences(
    payload: PreferencesUpdate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return PreferenceService.update(db, user, payload)


# ============================================================================
# Recommendations
# ============================================================================


@router.get("/recommendations", response_model=RecommendationResponse)
def get_recommendations(
    strategy: RecommendationStrategy = Query(RecommendationStrategy.HYBRID),
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return RecommendationService.recommend(db, user, strategy, limit)
