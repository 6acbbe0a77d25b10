from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import date
import logging
import uuid

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.models import AppUser, MoodEntry, utcnow
from domain.enums import MoodEntryStatus, TrendPeriod
from domain.schemas.journal_schemas import (
    MoodEntryCreate,
    MoodEntryUpdate,
    MoodDataPoint,
    MoodTrendResponse,
)
from repositories import MoodRepository
from services import trend_service

logger = logging.getLogger("appsuite.journal")


class MoodService:
    @staticmethod
    def create_entry(db: Session, user: AppUser, data: MoodEntryCreate) -> MoodEntry:
        """
        Log the mood of a day. Only one entry per user per date exists; a
        soft-deleted entry for that date is overwritten.

        Raises:
            ServiceValidationError: entry_date in the future
            ConflictError: The date already has an active or archived entry
        """
        if data.entry_date > utcnow().date():
            raise ServiceValidationError("entry_date must not be in the future")

        repo = MoodRepository(db)
        existing = repo.get_by_date(user.user_id, data.entry_date)
        if existing and existing.status != MoodEntryStatus.DELETED:
            raise ConflictError(
                f"A mood entry for {data.entry_date.isoformat()} already exists",
                details={"entry_id": str(existing.entry_id)},
            )

        if existing:
            existing.rating = data.rating
            existing.notes = data.notes
            existing.tags = data.tags
            existing.entry_metadata = data.metadata
            existing.status = MoodEntryStatus.ACTIVE
            logger.info(f"Replacing deleted mood entry {existing.entry_id}")
            return repo.update(existing)

        entry = MoodEntry(
            user_id=user.user_id,
            rating=data.rating,
            notes=data.notes,
            entry_date=data.entry_date,
            status=MoodEntryStatus.ACTIVE,
            tags=data.tags,
            entry_metadata=data.metadata,
        )
        try:
            return repo.create(entry)
        except IntegrityError as e:
            db.rollback()
            raise ConflictError(
                f"A mood entry for {data.entry_date.isoformat()} already exists"
            ) from e

    @staticmethod
    def get_entry(db: Session, user: AppUser, entry_id: uuid.UUID) -> MoodEntry:
        entry = MoodRepository(db).get_for_user(user.user_id, entry_id)
        if not entry:
            raise NotFoundError(f"Mood entry {entry_id} not found")
        return entry

    @staticmethod
    def list_entries(
        db: Session,
        user: AppUser,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[MoodEntryStatus] = MoodEntryStatus.ACTIVE,
        limit: int = 30,
        offset: int = 0,
    ):
        if start_date and end_date and start_date > end_date:
            raise ServiceValidationError("start_date must not be after end_date")
        return MoodRepository(db).list_entries(
            user.user_id,
            start_date=start_date,
            end_date=end_date,
            status=status,
            limit=limit,
            offset=offset,
        )

    @staticmethod
    def update_entry(
        db: Session, user: AppUser, entry_id: uuid.UUID, data: MoodEntryUpdate
    ) -> MoodEntry:
        entry = MoodService.get_entry(db, user, entry_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "metadata" in changes:
            entry.entry_metadata = changes.pop("metadata")
        for field, value in changes.items():
            setattr(entry, field, value)
        return MoodRepository(db).update(entry)

    @staticmethod
    def delete_entry(db: Session, user: AppUser, entry_id: uuid.UUID) -> MoodEntry:
        """Soft delete: the entry stays stored with status deleted"""
        entry = MoodService.get_entry(db, user, entry_id)
        entry.status = MoodEntryStatus.DELETED
        logger.info(f"Mood entry soft-deleted: {entry_id}")
        return MoodRepository(db).update(entry)

    @staticmethod
    def get_trends(
        db: Session,
        user: AppUser,
        period: TrendPeriod = TrendPeriod.MONTH,
        today: Optional[date] = None,
    ) -> MoodTrendResponse:
        start_date, end_date, days = trend_service.window(period, today or utcnow().date())
        entries = MoodRepository(db).active_between(user.user_id, start_date, end_date)
        stats = trend_service.calculate_statistics([e.rating for e in entries], days)
        return MoodTrendResponse(
            period=period,
            start_date=start_date,
            end_date=end_date,
            statistics=stats,
            data_points=[
                MoodDataPoint(date=e.entry_date, value=e.rating, entry_id=e.entry_id)
                for e in entries
            ],
            insights=trend_service.generate_insights(stats),
        )
