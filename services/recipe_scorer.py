"""
Ingredient matching and recipe ranking for the recipe finder.

A recipe's score is the share of searched ingredients it matches, adjusted
by cooking time, difficulty and ingredient count, and capped at 1.0.
"""

import re
from dataclasses import dataclass
from typing import List, Sequence

from domain.enums import Difficulty

EXACT = 1.0
RAW_SUBSTRING = 0.9
NORMALIZED_SUBSTRING = 0.8
WORD = 0.7
VEGETABLE = 0.6

PLURALS = {
    "vegetable": "vegetables",
    "tomato": "tomatoes",
    "potato": "potatoes",
    "onion": "onions",
    "pepper": "peppers",
    "lettuce": "lettuces",
    "carrot": "carrots",
    "celery": "celeries",
}

VEGETABLE_WORDS = {
    "lettuce", "tomatoes", "tomato", "carrots", "carrot", "celery",
    "onion", "onions", "potatoes", "peppers", "pepper",
}

VEGETABLES = VEGETABLE_WORDS | {
    "potato", "bell peppers", "bell pepper", "broccoli", "spinach", "cabbage",
    "cauliflower", "zucchini", "eggplant", "cucumber", "radish",
}

DIFFICULTY_FACTORS = {
    Difficulty.EASY: 1.1,
    Difficulty.MEDIUM: 1.0,
    Difficulty.HARD: 0.9,
}


@dataclass
class ScoredRecipe:
    score: float
    matched: List[str]
    missing: List[str]


def normalize(ingredient: str) -> str:
    text = re.sub(r"[,&]", " ", ingredient.lower().strip())
    return re.sub(r"\s+", " ", text).strip()


def _plural_match(words: Sequence[str], term: str) -> bool:
    for singular, plural in PLURALS.items():
        if term == plural:
            return any(word.startswith(singular) for word in words)
        if term == singular:
            return any(word.startswith(plural) for word in words)
    if term == "vegetables":
        return any(word in VEGETABLE_WORDS for word in words)
    return False


def _word_match(recipe_ingredient: str, search: str) -> bool:
    recipe_lower = recipe_ingredient.lower()
    search_lower = search.lower()
    if re.search(rf"\b{re.escape(search_lower)}\b", recipe_lower):
        return True
    words = recipe_lower.split(" ")
    if any(word.startswith(search_lower) for word in words):
        return True
    return _plural_match(words, search_lower)


def ingredient_match(search: str, recipe_ingredient: str) -> float:
    """Strength of the match between one searched and one recipe ingredient (0 if none)"""
    search_norm = normalize(search)
    recipe_norm = normalize(recipe_ingredient)
    if not search_norm or not recipe_norm:
        return 0.0
    if recipe_norm == search_norm:
        return EXACT
    if search_norm in recipe_norm or recipe_norm in search_norm:
        return NORMALIZED_SUBSTRING
    raw_search, raw_recipe = search.lower(), recipe_ingredient.lower()
    if raw_search in raw_recipe or raw_recipe in raw_search:
        return RAW_SUBSTRING
    if _word_match(recipe_ingredient, search):
        return WORD
    if search.lower() == "vegetables" and recipe_ingredient.lower() in VEGETABLES:
        return VEGETABLE
    return 0.0


def cooking_time_factor(minutes: int) -> float:
    if minutes <= 15:
        return 1.1
    if minutes <= 30:
        return 1.0
    if minutes <= 60:
        return 0.9
    return 0.8


def ingredient_count_factor(count: int) -> float:
    if count <= 5:
        return 1.05
    if count <= 10:
        return 1.0
    return 0.95


def score_recipe(
    ingredients: Sequence[str],
    cooking_time: int,
    difficulty: Difficulty,
    search: Sequence[str],
) -> ScoredRecipe:
    """
    Score a recipe against the searched ingredients.

    matched lists the searched ingredients found in the recipe; missing lists
    the recipe ingredients none of the searched ones covered.
    """
    if not search or not ingredients:
        return ScoredRecipe(score=0.0, matched=[], missing=list(ingredients))

    matched = []
    covered = set()
    for term in search:
        hit = False
        for index, recipe_ingredient in enumerate(ingredients):
            if ingredient_match(term, recipe_ingredient) > 0:
                hit = True
                covered.add(index)
        if hit:
            matched.append(term)

    missing = [ing for i, ing in enumerate(ingredients) if i not in covered]
    if not matched:
        return ScoredRecipe(score=0.0, matched=[], missing=missing)

    score = len(matched) / len(search)
    score *= cooking_time_factor(cooking_time)
    score *= DIFFICULTY_FACTORS.get(difficulty, 1.0)
    score *= ingredient_count_factor(len(ingredients))
    return ScoredRecipe(score=round(min(score, 1.0), 4), matched=matched, missing=missing)
