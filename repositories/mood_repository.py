"""
Mood Repository - Data access layer for journal entries
"""

from typing import List, Optional, Tuple
from uuid import UUID
from datetime import date
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import MoodEntry
from domain.enums import MoodEntryStatus


class MoodRepository(BaseRepository[MoodEntry]):
    """Repository for mood entries"""

    def __init__(self, db: Session):
        super().__init__(db, MoodEntry)

    def get_for_user(self, user_id: UUID, entry_id: UUID) -> Optional[MoodEntry]:
        return (
            self.db.query(MoodEntry)
            .filter(MoodEntry.entry_id == entry_id, MoodEntry.user_id == user_id)
            .first()
        )

    def get_by_date(self, user_id: UUID, entry_date: date) -> Optional[MoodEntry]:
        """Entry of a given day in any status"""
        return (
            self.db.query(MoodEntry)
            .filter(MoodEntry.user_id == user_id, MoodEntry.entry_date == entry_date)
            .first()
        )

    def list_entries(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[MoodEntryStatus] = MoodEntryStatus.ACTIVE,
        limit: int = 30,
        offset: int = 0,
    ) -> Tuple[List[MoodEntry], int]:
        """Newest-first page of entries plus the total count"""
        query = self.db.query(MoodEntry).filter(MoodEntry.user_id == user_id)
        if start_date:
            query = query.filter(MoodEntry.entry_date >= start_date)
        if end_date:
            query = query.filter(MoodEntry.entry_date <= end_date)
        if status is not None:
            query = query.filter(MoodEntry.status == status)
        total = self.count(query)
        items = (
            query.order_by(MoodEntry.entry_date.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total

    def active_between(
        self, user_id: UUID, start_date: date, end_date: date
    ) -> List[MoodEntry]:
        """Active entries in [start_date, end_date] ordered by date"""
        return (
            self.db.query(MoodEntry)
            .filter(
                MoodEntry.user_id == user_id,
                MoodEntry.status == MoodEntryStatus.ACTIVE,
                MoodEntry.entry_date >= start_date,
                MoodEntry.entry_date <= end_date,
            )
            .order_by(MoodEntry.entry_date)
            .all()
        )
