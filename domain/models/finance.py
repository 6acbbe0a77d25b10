"""
Personal finance models.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow
from domain.enums import TransactionType


class Category(Base):
    """User-defined income or expense bucket"""

    __tablename__ = "finance_category"

    category_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(100), nullable=False)
    type = Column(SQLEnum(TransactionType), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_category_user_name"),
    )


class Transaction(Base):
    """Single income or expense record"""

    __tablename__ = "finance_transaction"

    transaction_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id = Column(
        Uuid,
        ForeignKey("finance_category.category_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(SQLEnum(TransactionType), nullable=False)
    description = Column(String(255))
    date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    category = relationship("Category", back_populates="transactions")

    __table_args__ = (CheckConstraint("amount > 0", name="check_transaction_amount"),)
