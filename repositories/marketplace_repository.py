"""
Marketplace Repository - Data access layer for listings, orders and payment intents
"""

from typing import List, Optional, Tuple
from uuid import UUID
from decimal import Decimal
from sqlalchemy.orm import Session
from sqlalchemy import func, or_

from repositories.base import BaseRepository, LIKE_ESCAPE, contains_pattern
from domain.models import Product, Order, PaymentIntent
from domain.enums import SortOrder

PRODUCT_SORT_COLUMNS = {
    "created_at": Product.created_at,
    "price": Product.price,
    "title": Product.title,
}


class ProductRepository(BaseRepository[Product]):
    """Repository for marketplace listings"""

    def __init__(self, db: Session):
        super().__init__(db, Product)

    def search(
        self,
        page: int = 1,
        limit: int = 20,
        category: Optional[str] = None,
        search: Optional[str] = None,
        seller_id: Optional[UUID] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> Tuple[List[Product], int]:
        query = self.db.query(Product)
        if category:
            query = query.filter(func.lower(Product.category) == category.strip().lower())
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    func.lower(Product.title).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(Product.description).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        if seller_id is not None:
            query = query.filter(Product.seller_id == seller_id)
        if min_price is not None:
            query = query.filter(Product.price >= min_price)
        if max_price is not None:
            query = query.filter(Product.price <= max_price)

        total = self.count(query)
        column = PRODUCT_SORT_COLUMNS.get(sort_by, Product.created_at)
        ordering = column.asc() if sort_order == SortOrder.ASC else column.desc()
        items = query.order_by(ordering).offset((page - 1) * limit).limit(limit).all()
        return items, total


class OrderRepository(BaseRepository[Order]):
    """Repository for marketplace orders"""

    def __init__(self, db: Session):
        super().__init__(db, Order)

    def list_for_user(self, user_id: UUID, as_seller: bool = False) -> List[Order]:
        column = Order.seller_id if as_seller else Order.buyer_id
        return (
            self.db.query(Order)
            .filter(column == user_id)
            .order_by(Order.created_at.desc())
            .all()
        )

    def list_for_product(self, product_id: UUID) -> List[Order]:
        return self.db.query(Order).filter(Order.product_id == product_id).all()


class PaymentIntentRepository(BaseRepository[PaymentIntent]):
    """Repository for payment intents"""

    def __init__(self, db: Session):
        super().__init__(db, PaymentIntent)

    def get_by_order(self, order_id: UUID) -> Optional[PaymentIntent]:
        return (
            self.db.query(PaymentIntent)
            .filter(PaymentIntent.order_id == order_id)
            .first()
        )
