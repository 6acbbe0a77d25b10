"""Recipe finder routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from api.dependencies import get_db, require_admin
from domain.models import AppUser
from domain.enums import Difficulty
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeResponse,
    RecipeSearchResponse,
)
from services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("appsuite.api.recipes")


@router.get("/search", response_model=RecipeSearchResponse)
def search_recipes(
    ingredients: Optional[List[str]] = Query(
        None, description="Comma-separated or repeated ingredient names"
    ),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """
    Find recipes that use the given ingredients.

    Examples:
    - GET /recipes/search?ingredients=tomato,basil
    - GET /recipes/search?ingredients=tomato&ingredients=basil
    """
    return RecipeService.search(db, ingredients, limit=limit, offset=offset)


@router.get("", response_model=List[RecipeResponse])
def list_recipes(
    difficulty: Optional[Difficulty] = Query(None), db: Session = Depends(get_db)
):
    return [
        RecipeResponse.model_validate(r)
        for r in RecipeService.list_recipes(db, difficulty)
    ]


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(recipe_id: str, db: Session = Depends(get_db)):
    return RecipeResponse.model_validate(RecipeService.get_recipe(db, recipe_id))


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreate,
    db: Session = Depends(get_db),
    admin: AppUser = Depends(require_admin),
):
    return RecipeResponse.model_validate(RecipeService.create_recipe(db, payload))
