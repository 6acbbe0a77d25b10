"""
Mood journal models.
"""

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
    Enum as SQLEnum,
)
import uuid

from domain.models.database import Base, utcnow
from domain.enums import MoodEntryStatus


class MoodEntry(Base):
    """Daily mood rating with optional notes and tags"""

    __tablename__ = "mood_entry"

    entry_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rating = Column(Integer, nullable=False)
    notes = Column(String(500))
    entry_date = Column(Date, nullable=False)
    status = Column(
        SQLEnum(MoodEntryStatus), nullable=False, default=MoodEntryStatus.ACTIVE
    )
    tags = Column(JSON, nullable=False, default=list)
    # "metadata" is reserved on declarative classes
    entry_metadata = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "entry_date", name="uq_mood_entry_user_date"),
        CheckConstraint("rating >= 1 AND rating <= 10", name="check_mood_rating"),
    )
