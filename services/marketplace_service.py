from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from decimal import Decimal
import logging
import uuid

from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError
from domain.models import AppUser, Product, Order
from domain.enums import OrderStatus, SortOrder
from domain.schemas.marketplace_schemas import ProductCreate, ProductUpdate
from repositories import ProductRepository, OrderRepository

logger = logging.getLogger("appsuite.marketplace")


class MarketplaceService:
    @staticmethod
    def create_product(db: Session, seller: AppUser, data: ProductCreate) -> Product:
        """List a product for sale on behalf of the authenticated seller"""
        product = Product(
            seller_id=seller.user_id,
            title=data.title,
            description=data.description,
            price=data.price,
            category=data.category,
            images=[str(url) for url in data.images],
            is_available=data.is_available,
        )
        product = ProductRepository(db).create(product)
        logger.info(f"Product listed: {product.product_id} by seller {seller.user_id}")
        return product

    @staticmethod
    def get_product(db: Session, product_id: uuid.UUID) -> Product:
        product = ProductRepository(db).get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    @staticmethod
    def list_products(
        db: Session,
        page: int = 1,
        limit: int = 20,
        category: Optional[str] = None,
        search: Optional[str] = None,
        seller_id: Optional[uuid.UUID] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> Tuple[List[Product], int]:
        """
        Filtered, sorted page of listings.

        Raises:
            ServiceValidationError: min_price greater than max_price
        """
        if min_price is not None and max_price is not None and min_price > max_price:
            raise ServiceValidationError("min_price must not exceed max_price")
        return ProductRepository(db).search(
            page=page,
            limit=limit,
            category=category,
            search=search,
            seller_id=seller_id,
            min_price=min_price,
            max_price=max_price,
            sort_by=sort_by,
            sort_order=sort_order,
        )

    @staticmethod
    def _owned_product(db: Session, user: AppUser, product_id: uuid.UUID) -> Product:
        product = MarketplaceService.get_product(db, product_id)
        if product.seller_id != user.user_id:
            logger.warning(
                f"User {user.user_id} tried to modify product {product_id} of another seller"
            )
            raise ForbiddenError("You can only modify your own products")
        return product

    @staticmethod
    def update_product(
        db: Session, user: AppUser, product_id: uuid.UUID, data: ProductUpdate
    ) -> Product:
        product = MarketplaceService._owned_product(db, user, product_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "images" in changes:
            changes["images"] = [str(url) for url in data.images]
        for field, value in changes.items():
            setattr(product, field, value)
        return ProductRepository(db).update(product)

    @staticmethod
    def delete_product(db: Session, user: AppUser, product_id: uuid.UUID) -> None:
        """
        Remove a listing together with its unpaid orders and their payment intents.

        Raises:
            NotFoundError: Unknown product
            ForbiddenError: Caller is not the seller
            ServiceValidationError: The product has paid orders
        """
        product = MarketplaceService._owned_product(db, user, product_id)
        orders = OrderRepository(db).list_for_product(product_id)
        if any(order.status == OrderStatus.PAID for order in orders):
            raise ServiceValidationError(
                "Sold products cannot be deleted; mark them unavailable instead",
                details={"product_id": str(product_id)},
            )
        try:
            for order in orders:
                db.delete(order)
            db.flush()
            db.delete(product)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to delete product {product_id}")
            raise
        logger.info(f"Product removed: {product_id}")

    @staticmethod
    def list_orders(db: Session, user: AppUser, as_seller: bool = False) -> List[Order]:
        return OrderRepository(db).list_for_user(user.user_id, as_seller=as_seller)

    @staticmethod
    def get_order(db: Session, user: AppUser, order_id: uuid.UUID) -> Order:
        order = OrderRepository(db).get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order {order_id} not found")
        if user.user_id not in (order.buyer_id, order.seller_id):
            raise ForbiddenError("You are not a party to this order")
        return order
