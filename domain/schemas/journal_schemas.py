from pydantic import AliasChoices, BaseModel, Field, field_serializer, field_validator
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from uuid import UUID

from domain.enums import MoodEntryStatus, TrendPeriod, TrendDirection
from domain.schemas.common import clean_strings


class MoodEntryCreate(BaseModel):
    """Schema for logging the mood of a day"""

    rating: int = Field(..., ge=1, le=10, strict=True)
    notes: Optional[str] = Field(None, max_length=500)
    entry_date: date
    tags: List[str] = Field(default_factory=list, max_length=10)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        tags = clean_strings(v)
        for tag in tags:
            if len(tag) > 30:
                raise ValueError("tags must be at most 30 characters")
        return tags


class MoodEntryUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=10, strict=True)
    notes: Optional[str] = Field(None, max_length=500)
    status: Optional[MoodEntryStatus] = None
    tags: Optional[List[str]] = Field(None, max_length=10)
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        if v is None:
            return v
        return MoodEntryCreate.validate_tags(v)


class MoodEntryResponse(BaseModel):
    entry_id: UUID
    rating: int
    notes: Optional[str]
    entry_date: date
    status: MoodEntryStatus
    tags: List[str]
    metadata: Dict[str, Any] = Field(
        validation_alias=AliasChoices("entry_metadata", "metadata")
    )
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MoodStatistics(BaseModel):
    average_mood: float
    lowest_mood: int
    highest_mood: int
    mood_variance: float
    total_entries: int
    completion_rate: float
    trend_direction: TrendDirection
    mood_distribution: Dict[str, int]

    @field_serializer("average_mood", "mood_variance", "completion_rate")
    def serialize_ratio(self, value: float) -> float:
        """Round ratios to two places on output; insights read the raw values."""
        return round(value, 2)


class MoodDataPoint(BaseModel):
    date: date
    value: int
    entry_id: UUID


class MoodTrendResponse(BaseModel):
    """Statistics, chart points and insights for one lookback window"""

    period: TrendPeriod
    start_date: date
    end_date: date
    statistics: MoodStatistics
    data_points: List[MoodDataPoint]
    insights: List[str]
