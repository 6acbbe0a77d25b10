"""
Standardized API response models and utilities.
Provides consistent response formatting across list endpoints.
"""

from typing import Generic, TypeVar, Optional, List
from pydantic import BaseModel, Field

T = TypeVar("T")


class Pagination(BaseModel):
    """Page metadata of a paginated listing"""

    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Number of items per page")
    total: int = Field(..., description="Total number of items")
    total_pages: int = Field(..., description="Number of pages")
    has_next: bool = Field(..., description="Whether there are more pages")
    has_prev: bool = Field(..., description="Whether there are previous pages")


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated API response"""

    items: List[T] = Field(..., description="List of items")
    pagination: Pagination


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")


def paginated_response(items: List, total: int, page: int, limit: int) -> dict:
    """Create a standardized paginated response"""
    total_pages = (total + limit - 1) // limit if limit else 0
    return {
        "items": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": total_pages,
            "has_next": page < total_pages,
            "has_prev": page > 1,
        },
    }
