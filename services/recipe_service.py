from typing import List, Optional
from sqlalchemy.orm import Session
import logging
import re

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.models import Recipe
from domain.enums import Difficulty
from domain.schemas.recipe_schemas import (
    RECIPE_ID_PATTERN,
    RecipeCreate,
    RecipeResponse,
    RecipeMatch,
    RecipeSearchResponse,
)
from repositories import RecipeRepository
from services import recipe_scorer

logger = logging.getLogger("appsuite.recipes")

RECIPE_ID_RE = re.compile(RECIPE_ID_PATTERN)


def parse_ingredients(values: Optional[List[str]]) -> List[str]:
    """
    Flatten repeated and comma-separated ingredient params into one list.

    Raises:
        ServiceValidationError: No ingredient left after trimming
    """
    ingredients = []
    for value in values or []:
        for part in value.split(","):
            part = part.strip()
            if part and part.lower() not in (i.lower() for i in ingredients):
                ingredients.append(part)
    if not ingredients:
        raise ServiceValidationError(
            "At least one non-empty ingredient is required",
            details={"parameter": "ingredients"},
        )
    return ingredients


class RecipeService:
    @staticmethod
    def get_recipe(db: Session, recipe_id: str) -> Recipe:
        """
        Raises:
            ServiceValidationError: Malformed recipe id
            NotFoundError: Unknown recipe
        """
        if not RECIPE_ID_RE.match(recipe_id or ""):
            raise ServiceValidationError(f"Invalid recipe id: {recipe_id!r}")
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    @staticmethod
    def list_recipes(db: Session, difficulty: Optional[Difficulty] = None) -> List[Recipe]:
        return RecipeRepository(db).list_recipes(difficulty)

    @staticmethod
    def create_recipe(db: Session, data: RecipeCreate) -> Recipe:
        repo = RecipeRepository(db)
        if repo.exists(data.recipe_id):
            raise ConflictError(f"Recipe {data.recipe_id} already exists")
        recipe = repo.create(Recipe(**data.model_dump()))
        logger.info(f"Recipe added: {recipe.recipe_id}")
        return recipe

    @staticmethod
    def search(
        db: Session, raw_ingredients: Optional[List[str]], limit: int = 10, offset: int = 0
    ) -> RecipeSearchResponse:
        """Recipes matching any searched ingredient, best match first"""
        ingredients = parse_ingredients(raw_ingredients)
        matches = []
        for recipe in RecipeRepository(db).list_recipes():
            scored = recipe_scorer.score_recipe(
                recipe.ingredients, recipe.cooking_time, recipe.difficulty, ingredients
            )
            if scored.score <= 0:
                continue
            matches.append(
                RecipeMatch(
                    recipe=RecipeResponse.model_validate(recipe),
                    match_score=scored.score,
                    matched_ingredients=scored.matched,
                    missing_ingredients=scored.missing,
                )
            )
        matches.sort(key=lambda m: (-m.match_score, m.recipe.title))
        logger.debug(f"Recipe search {ingredients}: {len(matches)} matches")
        return RecipeSearchResponse(
            ingredients=ingredients,
            results=matches[offset:offset + limit],
            total=len(matches),
            limit=limit,
            offset=offset,
        )
