"""
Product recommendations for the shopping assistant.

Four strategies are available:
- collaborative: products liked by users whose interactions overlap yours
- content-based: products matching your explicit preferences
- popularity: most interacted-with products you have not seen
- hybrid: weighted merge of the three
"""

from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Sequence
from sqlalchemy.orm import Session
import logging

from domain.models import AppUser, CatalogProduct, utcnow
from domain.enums import Confidence, InteractionType, RecommendationStrategy
from domain.schemas.shopping_schemas import (
    CatalogProductResponse,
    RecommendationItem,
    RecommendationResponse,
)
from repositories import CatalogRepository, InteractionRepository
from services.interaction_service import (
    PreferenceService,
    DEFAULT_PRICE_MIN,
    DEFAULT_PRICE_MAX,
)

logger = logging.getLogger("appsuite.recommendations")

INTERACTION_WEIGHTS = {
    InteractionType.PURCHASE: 1.0,
    InteractionType.FAVORITE: 0.9,
    InteractionType.LIKE: 0.8,
    InteractionType.RATING: 0.8,
    InteractionType.VIEW: 0.3,
    InteractionType.DISLIKE: -0.5,
}

HYBRID_WEIGHTS = {
    RecommendationStrategy.COLLABORATIVE: 0.4,
    RecommendationStrategy.CONTENT_BASED: 0.4,
    RecommendationStrategy.POPULARITY: 0.2,
}

HYBRID_REASON_PARTS = {
    RecommendationStrategy.COLLABORATIVE: "similar users",
    RecommendationStrategy.CONTENT_BASED: "your preferences",
    RecommendationStrategy.POPULARITY: "popularity",
}

# Content-based component weights
CATEGORY_WEIGHT = 0.4
BRAND_WEIGHT = 0.3
PRICE_WEIGHT = 0.2
STYLE_WEIGHT = 0.1
STYLE_SCORE = 0.5
REASON_THRESHOLD = 0.5

MIN_SHARED_PRODUCTS = 2
MIN_SIMILARITY_WEIGHT = 0.2
MAX_SIMILAR_USERS = 10
POPULARITY_SATURATION = 10


@dataclass
class Preferences:
    categories: List[str] = field(default_factory=list)
    brands: List[str] = field(default_factory=list)
    style_preferences: List[str] = field(default_factory=list)
    price_min: Decimal = DEFAULT_PRICE_MIN
    price_max: Decimal = DEFAULT_PRICE_MAX


@dataclass
class Candidate:
    product: CatalogProduct
    score: float
    algorithm: RecommendationStrategy
    reason: str


def confidence_for(score: float) -> Confidence:
    if score >= 0.8:
        return Confidence.HIGH
    if score >= 0.5:
        return Confidence.MEDIUM
    return Confidence.LOW


def match_score(value: Optional[str], preferred: Sequence[str]) -> float:
    """1.0 on exact (case-insensitive) match, 0.5 on substring match either way"""
    if not value:
        return 0.0
    value = value.strip().lower()
    best = 0.0
    for pref in preferred:
        pref = pref.strip().lower()
        if not pref:
            continue
        if pref == value:
            return 1.0
        if pref in value or value in pref:
            best = 0.5
    return best


def price_score(price, price_min, price_max) -> float:
    price, low, high = float(price), float(price_min), float(price_max)
    if price < low or price > high:
        return 0.0
    half_range = (high - low) / 2
    if half_range == 0:
        return 1.0
    middle = (low + high) / 2
    return max(0.0, 1 - abs(price - middle) / half_range)


def content_score(product: CatalogProduct, prefs: Preferences) -> Candidate:
    category = match_score(product.category, prefs.categories)
    brand = match_score(product.brand, prefs.brands)
    price = price_score(product.price, prefs.price_min, prefs.price_max)
    score = (
        CATEGORY_WEIGHT * category
        + BRAND_WEIGHT * brand
        + PRICE_WEIGHT * price
        + STYLE_WEIGHT * STYLE_SCORE
    )

    reasons = []
    if category > REASON_THRESHOLD:
        reasons.append(f"matches your {product.category} preferences")
    if brand > REASON_THRESHOLD:
        reasons.append(f"from your preferred brand {product.brand}")
    if price > REASON_THRESHOLD:
        reasons.append("within your price range")
    if reasons:
        reason = "Recommended because it " + " and ".join(reasons)
    else:
        reason = f"Recommended based on your preferences ({round(score * 100)}% match)"

    return Candidate(
        product=product,
        score=round(score, 4),
        algorithm=RecommendationStrategy.CONTENT_BASED,
        reason=reason,
    )


def shared_interaction_weight(interaction) -> float:
    """How strongly another user's interaction on a shared product signals similar taste"""
    if interaction.interaction_type == InteractionType.LIKE:
        return 1.0
    if interaction.interaction_type == InteractionType.FAVORITE:
        return 1.2
    if interaction.interaction_type == InteractionType.RATING and interaction.rating:
        if interaction.rating >= 4:
            return 1.0
        if interaction.rating >= 3:
            return 0.5
    return 0.1


def similar_users(own_product_ids, other_interactions) -> Dict:
    """
    Map of user_id -> similarity for users sharing enough products.

    similarity = min(1, weighted / common), kept when weighted exceeds the
    minimum, best MAX_SIMILAR_USERS users only.
    """
    shared_products = defaultdict(set)
    weighted = defaultdict(float)
    for interaction in other_interactions:
        if interaction.product_id not in own_product_ids:
            continue
        shared_products[interaction.user_id].add(interaction.product_id)
        weighted[interaction.user_id] += shared_interaction_weight(interaction)

    scored = []
    for user_id, products in shared_products.items():
        common = len(products)
        if common < MIN_SHARED_PRODUCTS or weighted[user_id] <= MIN_SIMILARITY_WEIGHT:
            continue
        scored.append((user_id, min(1.0, weighted[user_id] / common)))
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return dict(scored[:MAX_SIMILAR_USERS])


def combine(results: Dict[RecommendationStrategy, List[Candidate]]) -> List[Candidate]:
    """Weighted merge of per-strategy candidates into hybrid candidates"""
    merged: Dict = {}
    sources = defaultdict(list)
    for strategy, candidates in results.items():
        weight = HYBRID_WEIGHTS[strategy]
        for candidate in candidates:
            key = candidate.product.product_id
            sources[key].append(strategy)
            if key not in merged:
                merged[key] = Candidate(
                    product=candidate.product,
                    score=candidate.score * weight,
                    algorithm=candidate.algorithm,
                    reason=candidate.reason,
                )
                continue
            existing = merged[key]
            existing.score += candidate.score * weight
            existing.algorithm = RecommendationStrategy.HYBRID
            existing.reason = hybrid_reason(sources[key])

    for candidate in merged.values():
        candidate.score = round(candidate.score, 4)
    return sorted(merged.values(), key=lambda c: c.score, reverse=True)


def hybrid_reason(strategies: Sequence[RecommendationStrategy]) -> str:
    parts = [HYBRID_REASON_PARTS[s] for s in strategies]
    if len(parts) > 2:
        joined = ", ".join(parts[:-1]) + ", and " + parts[-1]
    else:
        joined = " and ".join(parts)
    return f"Combined recommendation based on {joined}"


class RecommendationService:
    @staticmethod
    def _preferences(db: Session, user: AppUser) -> Preferences:
        stored = PreferenceService.get_model(db, user)
        if stored is None:
            return Preferences()
        return Preferences(
            categories=list(stored.categories or []),
            brands=list(stored.brands or []),
            style_preferences=list(stored.style_preferences or []),
            price_min=stored.price_min,
            price_max=stored.price_max,
        )

    @staticmethod
    def content_based(db: Session, user: AppUser, limit: int) -> List[Candidate]:
        prefs = RecommendationService._preferences(db, user)
        disliked = {
            i.product_id
            for i in InteractionRepository(db).list_for_user(
                user.user_id, InteractionType.DISLIKE
            )
        }
        candidates = [
            content_score(product, prefs)
            for product in CatalogRepository(db).available_products()
            if product.product_id not in disliked
        ]
        candidates.sort(key=lambda c: (-c.score, c.product.name))
        return candidates[:limit]

    @staticmethod
    def popularity(db: Session, user: AppUser, limit: int) -> List[Candidate]:
        seen = {
            i.product_id for i in InteractionRepository(db).list_for_user(user.user_id)
        }
        return [
            Candidate(
                product=product,
                score=min(count / POPULARITY_SATURATION, 1.0),
                algorithm=RecommendationStrategy.POPULARITY,
                reason="Popular among other users",
            )
            for product, count in CatalogRepository(db).popular(limit, exclude_ids=seen)
        ]

    @staticmethod
    def collaborative(db: Session, user: AppUser, limit: int) -> List[Candidate]:
        interactions = InteractionRepository(db)
        own = interactions.list_for_user(user.user_id)
        own_ids = {i.product_id for i in own}
        if not own_ids:
            return []

        similarity = similar_users(
            own_ids, interactions.others_on_products(user.user_id, own_ids)
        )
        if not similarity:
            return []

        scores = defaultdict(float)
        for interaction in interactions.for_users(similarity.keys()):
            if interaction.product_id in own_ids:
                continue
            weight = INTERACTION_WEIGHTS.get(interaction.interaction_type, 0.0)
            scores[interaction.product_id] += weight * similarity[interaction.user_id]

        products = CatalogRepository(db).get_many(
            [pid for pid, score in scores.items() if score > 0]
        )
        candidates = [
            Candidate(
                product=product,
                score=round(min(scores[pid], 1.0), 4),
                algorithm=RecommendationStrategy.COLLABORATIVE,
                reason="Recommended by users with similar preferences",
            )
            for pid, product in products.items()
            if product.availability
        ]
        candidates.sort(key=lambda c: (-c.score, c.product.name))
        return candidates[:limit]

    @staticmethod
    def hybrid(db: Session, user: AppUser, limit: int) -> List[Candidate]:
        pool = limit * 2
        results = {
            RecommendationStrategy.COLLABORATIVE: RecommendationService.collaborative(
                db, user, pool
            ),
            RecommendationStrategy.CONTENT_BASED: RecommendationService.content_based(
                db, user, pool
            ),
            RecommendationStrategy.POPULARITY: RecommendationService.popularity(
                db, user, pool
            ),
        }
        return combine(results)[:limit]

    @staticmethod
    def recommend(
        db: Session,
        user: AppUser,
        strategy: RecommendationStrategy = RecommendationStrategy.HYBRID,
        limit: int = 10,
    ) -> RecommendationResponse:
        """Recommendations for a user with the chosen strategy, best first"""
        handlers = {
            RecommendationStrategy.HYBRID: RecommendationService.hybrid,
            RecommendationStrategy.COLLABORATIVE: RecommendationService.collaborative,
            RecommendationStrategy.CONTENT_BASED: RecommendationService.content_based,
            RecommendationStrategy.POPULARITY: RecommendationService.popularity,
        }
        candidates = handlers[strategy](db, user, limit)
        logger.info(
            f"Generated {len(candidates)} {strategy.value} recommendations for user {user.user_id}"
        )
        return RecommendationResponse(
            strategy=strategy,
            items=[
                RecommendationItem(
                    product=CatalogProductResponse.model_validate(c.product),
                    score=c.score,
                    algorithm=c.algorithm,
                    confidence=confidence_for(c.score),
                    reason=c.reason,
                )
                for c in candidates
            ],
            generated_at=utcnow(),
        )
