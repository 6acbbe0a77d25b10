from typing import List, Optional
from sqlalchemy.orm import Session
from decimal import Decimal
import logging

from domain.models import AppUser, UserInteraction, ShoppingPreference
from domain.enums import InteractionType
from domain.schemas.shopping_schemas import (
    InteractionCreate,
    InteractionStats,
    PreferencesUpdate,
    PreferencesResponse,
)
from repositories import InteractionRepository, PreferenceRepository
from services.catalog_service import CatalogService

logger = logging.getLogger("appsuite.shopping")

DEFAULT_PRICE_MIN = Decimal("0")
DEFAULT_PRICE_MAX = Decimal("1000")


class InteractionService:
    @staticmethod
    def record(db: Session, user: AppUser, data: InteractionCreate) -> UserInteraction:
        """
        Store a shopper event.

        Raises:
            NotFoundError: Unknown catalog product
        """
        CatalogService.get_product(db, data.product_id)
        interaction = InteractionRepository(db).create(
            UserInteraction(
                user_id=user.user_id,
                product_id=data.product_id,
                interaction_type=data.interaction_type,
                rating=data.rating,
            )
        )
        logger.debug(
            f"Interaction {data.interaction_type.value} by {user.user_id} on {data.product_id}"
        )
        return interaction

    @staticmethod
    def list_for_user(
        db: Session,
        user: AppUser,
        interaction_type: Optional[InteractionType] = None,
        limit: Optional[int] = None,
    ) -> List[UserInteraction]:
        return InteractionRepository(db).list_for_user(
            user.user_id, interaction_type, limit
        )

    @staticmethod
    def stats(db: Session, user: AppUser) -> InteractionStats:
        counts = InteractionRepository(db).counts_by_type(user.user_id)
        by_type = {itype.value: counts.get(itype, 0) for itype in InteractionType}
        return InteractionStats(total=sum(by_type.values()), by_type=by_type)


class PreferenceService:
    @staticmethod
    def defaults() -> PreferencesResponse:
        return PreferencesResponse(
            categories=[],
            brands=[],
            style_preferences=[],
            price_min=float(DEFAULT_PRICE_MIN),
            price_max=float(DEFAULT_PRICE_MAX),
        )

    @staticmethod
    def get_model(db: Session, user: AppUser) -> Optional[ShoppingPreference]:
        return PreferenceRepository(db).get_by_id(user.user_id)

    @staticmethod
    def get(db: Session, user: AppUser) -> PreferencesResponse:
        """Stored preferences, or the defaults when none were saved"""
        preference = PreferenceService.get_model(db, user)
        if preference is None:
            return PreferenceService.defaults()
        return PreferencesResponse.model_validate(preference)

    @staticmethod
    def update(db: Session, user: AppUser, data: PreferencesUpdate) -> PreferencesResponse:
        preference = PreferenceRepository(db).upsert(user.user_id, **data.model_dump())
        logger.info(f"Shopping preferences updated for user {user.user_id}")
        return PreferencesResponse.model_validate(preference)
