from pydantic import BaseModel, Field, model_validator, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import InteractionType, RecommendationStrategy, Confidence
from domain.schemas.common import clean_strings


class CatalogProductCreate(BaseModel):
    """Schema for adding a product to the shopping catalog"""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    price: Decimal = Field(..., ge=0, le=Decimal("999999.99"), decimal_places=2)
    category: str = Field(..., min_length=1, max_length=100)
    brand: str = Field(..., min_length=1, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    availability: bool = True
    style: Optional[str] = Field(None, max_length=50)


class CatalogProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    price: Optional[Decimal] = Field(
        None, ge=0, le=Decimal("999999.99"), decimal_places=2
    )
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    brand: Optional[str] = Field(None, min_length=1, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    availability: Optional[bool] = None
    style: Optional[str] = Field(None, max_length=50)


class CatalogProductResponse(BaseModel):
    product_id: UUID
    name: str
    description: Optional[str]
    price: float
    category: str
    brand: str
    image_url: Optional[str]
    availability: bool
    style: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class PopularProduct(BaseModel):
    product: CatalogProductResponse
    interaction_count: int


class CatalogStats(BaseModel):
    total_products: int
    available_products: int
    categories: int
    brands: int
    average_price: float
    min_price: float
    max_price: float


class InteractionCreate(BaseModel):
    """A shopper event; rating interactions carry a 1-5 rating"""

    product_id: UUID
    interaction_type: InteractionType
    rating: Optional[int] = Field(None, ge=1, le=5)

    @model_validator(mode="after")
    def check_rating(self):
        if self.interaction_type == InteractionType.RATING and self.rating is None:
            raise ValueError("rating is required for rating interactions")
        if self.interaction_type != InteractionType.RATING and self.rating is not None:
            raise ValueError("rating is only allowed for rating interactions")
        return self


class InteractionResponse(BaseModel):
    interaction_id: UUID
    product_id: UUID
    interaction_type: InteractionType
    rating: Optional[int]
    created_at: datetime

    model_config = {"from_attributes": True}


class InteractionStats(BaseModel):
    total: int
    by_type: Dict[str, int]


class PreferencesUpdate(BaseModel):
    """Explicit preferences used by content-based recommendations"""

    categories: List[str] = Field(default_factory=list, max_length=50)
    brands: List[str] = Field(default_factory=list, max_length=50)
    style_preferences: List[str] = Field(default_factory=list, max_length=20)
    price_min: Decimal = Field(default=Decimal("0"), ge=0)
    price_max: Decimal = Field(default=Decimal("1000"), ge=0)

    @field_validator("categories", "brands", "style_preferences")
    @classmethod
    def normalize_lists(cls, v: List[str]) -> List[str]:
        return clean_strings(v)

    @model_validator(mode="after")
    def check_price_range(self):
        if self.price_min > self.price_max:
            raise ValueError("price_min must not exceed price_max")
        return self


class PreferencesResponse(BaseModel):
    categories: List[str]
    brands: List[str]
    style_preferences: List[str]
    price_min: float
    price_max: float

    model_config = {"from_attributes": True}


class RecommendationItem(BaseModel):
    product: CatalogProductResponse
    score: float
    algorithm: RecommendationStrategy
    confidence: Confidence
    reason: str


class RecommendationResponse(BaseModel):
    strategy: RecommendationStrategy
    items: List[RecommendationItem]
    generated_at: datetime
