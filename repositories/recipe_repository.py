"""
Recipe Repository - Data access layer for the recipe finder
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Recipe
from domain.enums import Difficulty


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipes"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def list_recipes(self, difficulty: Optional[Difficulty] = None) -> List[Recipe]:
        query = self.db.query(Recipe)
        if difficulty is not None:
            query = query.filter(Recipe.difficulty == difficulty)
        return query.order_by(Recipe.title).all()
