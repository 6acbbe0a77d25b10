"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Any, Generic, TypeVar, Optional, List, Type
from sqlalchemy.orm import Session, Query
from abc import ABC

ModelType = TypeVar("ModelType")

LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """Case-folded LIKE pattern matching text anywhere, with wildcards escaped"""
    text = text.strip().lower()
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return f"%{text}%"


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: Any) -> Optional[ModelType]:
        """
        Get entity by primary key.

        Args:
            entity_id: Primary key value (UUID for most tables, slug for recipes)

        Returns:
            Entity or None if not found
        """
        return self.db.get(self.model, entity_id)

    def get_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """Get all entities with pagination"""
        return self.db.query(self.model).offset(skip).limit(limit).all()

    def count(self, query: Optional[Query] = None) -> int:
        """Count rows of a query (or of the whole table) ignoring ordering"""
        query = query if query is not None else self.db.query(self.model)
        return query.order_by(None).count()

    def create(self, entity: ModelType) -> ModelType:
        """Create new entity"""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType) -> ModelType:
        """Update existing entity"""
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: Any) -> bool:
        """Delete entity by ID"""
        entity = self.get_by_id(entity_id)
        if entity:
            self.db.delete(entity)
            self.db.commit()
            return True
        return False

    def exists(self, entity_id: Any) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None
