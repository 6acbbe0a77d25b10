from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from decimal import Decimal
import logging
import uuid

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import CatalogProduct
from domain.schemas.shopping_schemas import (
    CatalogProductCreate,
    CatalogProductUpdate,
    CatalogProductResponse,
    CatalogStats,
    PopularProduct,
)
from repositories import CatalogRepository

logger = logging.getLogger("appsuite.shopping")


class CatalogService:
    @staticmethod
    def get_product(db: Session, product_id: uuid.UUID) -> CatalogProduct:
        product = CatalogRepository(db).get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Catalog product {product_id} not found")
        return product

    @staticmethod
    def list_products(
        db: Session,
        search: Optional[str] = None,
        category: Optional[str] = None,
        brand: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        available: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[CatalogProduct], int]:
        if min_price is not None and max_price is not None and min_price > max_price:
            raise ServiceValidationError("min_price must not exceed max_price")
        return CatalogRepository(db).search(
            search=search,
            category=category,
            brand=brand,
            min_price=min_price,
            max_price=max_price,
            available=available,
            page=page,
            limit=limit,
        )

    @staticmethod
    def categories(db: Session) -> List[str]:
        return CatalogRepository(db).distinct_values(CatalogProduct.category)

    @staticmethod
    def brands(db: Session) -> List[str]:
        return CatalogRepository(db).distinct_values(CatalogProduct.brand)

    @staticmethod
    def popular(db: Session, limit: int = 10) -> List[PopularProduct]:
        return [
            PopularProduct(
                product=CatalogProductResponse.model_validate(product),
                interaction_count=count,
            )
            for product, count in CatalogRepository(db).popular(limit)
        ]

    @staticmethod
    def stats(db: Session) -> CatalogStats:
        repo = CatalogRepository(db)
        total, categories, brands, avg_price, min_price, max_price = repo.stats()
        return CatalogStats(
            total_products=total,
            available_products=repo.count_available(),
            categories=categories,
            brands=brands,
            average_price=round(float(avg_price or 0), 2),
            min_price=float(min_price or 0),
            max_price=float(max_price or 0),
        )

    @staticmethod
    def create_product(db: Session, data: CatalogProductCreate) -> CatalogProduct:
        product = CatalogRepository(db).create(CatalogProduct(**data.model_dump()))
        logger.info(f"Catalog product added: {product.product_id} ({product.name})")
        return product

    @staticmethod
    def update_product(
        db: Session, product_id: uuid.UUID, data: CatalogProductUpdate
    ) -> CatalogProduct:
        product = CatalogService.get_product(db, product_id)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(product, field, value)
        return CatalogRepository(db).update(product)

    @staticmethod
    def delete_product(db: Session, product_id: uuid.UUID) -> None:
        product = CatalogService.get_product(db, product_id)
        db.delete(product)
        db.commit()
        logger.info(f"Catalog product removed: {product_id}")
