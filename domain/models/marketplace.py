"""
Marketplace listing, order and payment models.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow
from domain.enums import OrderStatus, PaymentIntentStatus


class Product(Base):
    """Item a seller lists for sale"""

    __tablename__ = "product"

    product_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    seller_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    images = Column(JSON, nullable=False, default=list)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    seller = relationship("AppUser")
    orders = relationship("Order", back_populates="product")

    __table_args__ = (CheckConstraint("price > 0", name="check_product_price"),)


class Order(Base):
    """Purchase of one product by one buyer"""

    __tablename__ = "market_order"

    order_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    buyer_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seller_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = Column(
        Uuid, ForeignKey("product.product_id", ondelete="RESTRICT"), nullable=False
    )
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(SQLEnum(OrderStatus), nullable=False, default=OrderStatus.PENDING)
    payment_intent_id = Column(Uuid)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    product = relationship("Product", back_populates="orders")
    payment_intent = relationship(
        "PaymentIntent",
        back_populates="order",
        uselist=False,
        cascade="all, delete-orphan",
    )


class PaymentIntent(Base):
    """Pending charge for an order, confirmed or cancelled by the buyer"""

    __tablename__ = "payment_intent"

    intent_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(
        Uuid,
        ForeignKey("market_order.order_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    buyer_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(
        SQLEnum(PaymentIntentStatus),
        nullable=False,
        default=PaymentIntentStatus.REQUIRES_CONFIRMATION,
    )
    client_secret = Column(String(128), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    order = relationship("Order", back_populates="payment_intent")
