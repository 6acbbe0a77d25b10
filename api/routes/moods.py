"""Mood journal routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID
import logging

from api.dependencies import get_db, get_current_user
from domain.models import AppUser
from domain.enums import MoodEntryStatus, TrendPeriod
from domain.schemas.journal_schemas import (
    MoodEntryCreate,
    MoodEntryUpdate,
    MoodEntryResponse,
    MoodTrendResponse,
)
from services.mood_service import MoodService

router = APIRouter(prefix="/moods", tags=["Journal"])
logger = logging.getLogger("appsuite.api.moods")


@router.get("/trends", response_model=MoodTrendResponse)
def mood_trends(
    period: TrendPeriod = Query(TrendPeriod.MONTH),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    """
    Statistics, chart data and insights over the chosen lookback window.

    Only active entries are considered.
    """
    return MoodService.get_trends(db, user, period)


@router.post("", response_model=MoodEntryResponse, status_code=status.HTTP_201_CREATED)
def create_mood_entry(
    payload: MoodEntryCreate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return MoodEntryResponse.model_validate(MoodService.create_entry(db, user, payload))


@router.get("")
def list_mood_entries(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    status: Optional[MoodEntryStatus] = Query(MoodEntryStatus.ACTIVE),
    limit: int = Query(30, ge=1, le=365),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    items, total = MoodService.list_entries(
        db,
        user,
        start_date=start_date,
        end_date=end_date,
        status=status,
        limit=limit,
        offset=offset,
    )
    return {
        "items": [MoodEntryResponse.model_validate(e).model_dump(mode="json") for e in items],
        "total": total,
        "limit": limit,
        "offset": offset,
    }


@router.get("/{entry_id}", response_model=MoodEntryResponse)
def get_mood_entry(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return MoodEntryResponse.model_validate(MoodService.get_entry(db, user, entry_id))


@router.put("/{entry_id}", response_model=MoodEntryResponse)
def update_mood_entry(
    entry_id: UUID,
    payload: MoodEntryUpdate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return MoodEntryResponse.model_validate(
        MoodService.update_entry(db, user, entry_id, payload)
    )


@router.delete("/{entry_id}", response_model=MoodEntryResponse)
def delete_mood_entry(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    """Soft delete; the entry is kept with status deleted"""
    return MoodEntryResponse.model_validate(MoodService.delete_entry(db, user, entry_id))
