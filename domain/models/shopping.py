"""
Shopping assistant catalog, interaction and preference models.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow
from domain.enums import InteractionType


class CatalogProduct(Base):
    """Product the shopping assistant can recommend"""

    __tablename__ = "catalog_product"

    product_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    brand = Column(String(100), nullable=False, index=True)
    image_url = Column(String(500))
    availability = Column(Boolean, nullable=False, default=True)
    style = Column(String(50))
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    interactions = relationship(
        "UserInteraction", back_populates="product", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("price >= 0 AND price <= 999999.99", name="check_catalog_price"),
    )


class UserInteraction(Base):
    """Shopper event on a catalog product"""

    __tablename__ = "user_interaction"

    interaction_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = Column(
        Uuid,
        ForeignKey("catalog_product.product_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    interaction_type = Column(SQLEnum(InteractionType), nullable=False)
    rating = Column(Integer)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    product = relationship("CatalogProduct", back_populates="interactions")

    __table_args__ = (
        CheckConstraint(
            "rating IS NULL OR (rating >= 1 AND rating <= 5)",
            name="check_interaction_rating",
        ),
    )


class ShoppingPreference(Base):
    """Explicit shopper preferences used for content-based scoring"""

    __tablename__ = "shopping_preference"

    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    categories = Column(JSON, nullable=False, default=list)
    brands = Column(JSON, nullable=False, default=list)
    style_preferences = Column(JSON, nullable=False, default=list)
    price_min = Column(Numeric(10, 2), nullable=False, default=0)
    price_max = Column(Numeric(10, 2), nullable=False, default=1000)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("AppUser", back_populates="shopping_preference")
