"""
Shopping Repository - Data access layer for the catalog, interactions and preferences
"""

from typing import Dict, List, Optional, Tuple
from uuid import UUID
from decimal import Decimal
from sqlalchemy.orm import Session
from sqlalchemy import func, or_

from repositories.base import BaseRepository, LIKE_ESCAPE, contains_pattern
from domain.models import CatalogProduct, UserInteraction, ShoppingPreference
from domain.enums import InteractionType


class CatalogRepository(BaseRepository[CatalogProduct]):
    """Repository for catalog products"""

    def __init__(self, db: Session):
        super().__init__(db, CatalogProduct)

    def search(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        brand: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        available: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[CatalogProduct], int]:
        query = self.db.query(CatalogProduct)
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    func.lower(CatalogProduct.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(CatalogProduct.description).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(CatalogProduct.brand).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        if category:
            query = query.filter(
                func.lower(CatalogProduct.category) == category.strip().lower()
            )
        if brand:
            query = query.filter(func.lower(CatalogProduct.brand) == brand.strip().lower())
        if min_price is not None:
            query = query.filter(CatalogProduct.price >= min_price)
        if max_price is not None:
            query = query.filter(CatalogProduct.price <= max_price)
        if available is not None:
            query = query.filter(CatalogProduct.availability == available)

        total = self.count(query)
        items = (
            query.order_by(CatalogProduct.name)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return items, total

    def distinct_values(self, column) -> List[str]:
        rows = self.db.query(column).distinct().order_by(column).all()
        return [row[0] for row in rows if row[0]]

    def available_products(self) -> List[CatalogProduct]:
        return (
            self.db.query(CatalogProduct)
            .filter(CatalogProduct.availability.is_(True))
            .all()
        )

    def get_many(self, product_ids) -> Dict[UUID, CatalogProduct]:
        if not product_ids:
            return {}
        rows = (
            self.db.query(CatalogProduct)
            .filter(CatalogProduct.product_id.in_(list(product_ids)))
            .all()
        )
        return {row.product_id: row for row in rows}

    def popular(
        self, limit: int, exclude_ids=None, available_only: bool = True
    ) -> List[Tuple[CatalogProduct, int]]:
        """Products ordered by interaction count, most popular first"""
        count = func.count(UserInteraction.interaction_id)
        query = (
            self.db.query(CatalogProduct, count)
            .outerjoin(
                UserInteraction,
                UserInteraction.product_id == CatalogProduct.product_id,
            )
            .group_by(CatalogProduct.product_id)
        )
        if available_only:
            query = query.filter(CatalogProduct.availability.is_(True))
        if exclude_ids:
            query = query.filter(CatalogProduct.product_id.notin_(list(exclude_ids)))
        return query.order_by(count.desc(), CatalogProduct.name).limit(limit).all()

    def stats(self):
        return self.db.query(
            func.count(CatalogProduct.product_id),
            func.count(func.distinct(CatalogProduct.category)),
            func.count(func.distinct(CatalogProduct.brand)),
            func.avg(CatalogProduct.price),
            func.min(CatalogProduct.price),
            func.max(CatalogProduct.price),
        ).one()

    def count_available(self) -> int:
        return self.count(
            self.db.query(CatalogProduct).filter(CatalogProduct.availability.is_(True))
        )


class InteractionRepository(BaseRepository[UserInteraction]):
    """Repository for shopper interactions"""

    def __init__(self, db: Session):
        super().__init__(db, UserInteraction)

    def list_for_user(
        self,
        user_id: UUID,
        interaction_type: Optional[InteractionType] = None,
        limit: Optional[int] = None,
    ) -> List[UserInteraction]:
        query = self.db.query(UserInteraction).filter(UserInteraction.user_id == user_id)
        if interaction_type is not None:
            query = query.filter(UserInteraction.interaction_type == interaction_type)
        query = query.order_by(UserInteraction.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def counts_by_type(self, user_id: UUID) -> Dict[InteractionType, int]:
        rows = (
            self.db.query(
                UserInteraction.interaction_type,
                func.count(UserInteraction.interaction_id),
            )
            .filter(UserInteraction.user_id == user_id)
            .group_by(UserInteraction.interaction_type)
            .all()
        )
        return {itype: count for itype, count in rows}

    def others_on_products(self, user_id: UUID, product_ids) -> List[UserInteraction]:
        """Interactions of other users on the given products"""
        if not product_ids:
            return []
        return (
            self.db.query(UserInteraction)
            .filter(
                UserInteraction.user_id != user_id,
                UserInteraction.product_id.in_(list(product_ids)),
            )
            .all()
        )

    def for_users(self, user_ids) -> List[UserInteraction]:
        if not user_ids:
            return []
        return (
            self.db.query(UserInteraction)
            .filter(UserInteraction.user_id.in_(list(user_ids)))
            .all()
        )


class PreferenceRepository(BaseRepository[ShoppingPreference]):
    """Repository for shopper preferences"""

    def __init__(self, db: Session):
        super().__init__(db, ShoppingPreference)

    def upsert(self, user_id: UUID, **kwargs) -> ShoppingPreference:
        """Create or update preferences"""
        preference = self.get_by_id(user_id)
        if preference:
            for key, value in kwargs.items():
                setattr(preference, key, value)
        else:
            preference = ShoppingPreference(user_id=user_id, **kwargs)
            self.db.add(preference)
        self.db.commit()
        self.db.refresh(preference)
        return preference
