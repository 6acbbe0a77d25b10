from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from domain.enums import Difficulty

RECIPE_ID_PATTERN = r"^[a-zA-Z0-9_-]+$"


class RecipeCreate(BaseModel):
    """Schema for adding a recipe to the finder"""

    recipe_id: str = Field(..., min_length=1, max_length=100, pattern=RECIPE_ID_PATTERN)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    image: Optional[str] = Field(None, max_length=500)
    cooking_time: int = Field(..., gt=0, le=1440, description="Minutes")
    difficulty: Difficulty = Difficulty.MEDIUM
    ingredients: List[str] = Field(..., min_length=1)
    instructions: List[str] = Field(..., min_length=1)

    @field_validator("ingredients", "instructions")
    @classmethod
    def drop_blank_entries(cls, v: List[str]) -> List[str]:
        cleaned = [entry.strip() for entry in v if entry.strip()]
        if not cleaned:
            raise ValueError("at least one non-empty entry is required")
        return cleaned


class RecipeResponse(BaseModel):
    recipe_id: str
    title: str
    description: Optional[str]
    image: Optional[str]
    cooking_time: int
    difficulty: Difficulty
    ingredients: List[str]
    instructions: List[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class RecipeMatch(BaseModel):
    """Recipe scored against the searched ingredients"""

    recipe: RecipeResponse
    match_score: float
    matched_ingredients: List[str]
    missing_ingredients: List[str]


class RecipeSearchResponse(BaseModel):
    ingredients: List[str]
    results: List[RecipeMatch]
    total: int
    limit: int
    offset: int
