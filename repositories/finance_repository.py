"""
Finance Repository - Data access layer for categories, transactions and dashboard aggregates
"""

from typing import List, Optional, Tuple
from uuid import UUID
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import func, case

from repositories.base import BaseRepository
from domain.models import Category, Transaction
from domain.enums import TransactionType


class CategoryRepository(BaseRepository[Category]):
    """Repository for user categories"""

    def __init__(self, db: Session):
        super().__init__(db, Category)

    def get_for_user(self, user_id: UUID, category_id: UUID) -> Optional[Category]:
        return (
            self.db.query(Category)
            .filter(Category.category_id == category_id, Category.user_id == user_id)
            .first()
        )

    def get_by_name(self, user_id: UUID, name: str) -> Optional[Category]:
        return (
            self.db.query(Category)
            .filter(
                Category.user_id == user_id,
                func.lower(Category.name) == name.strip().lower(),
            )
            .first()
        )

    def list_for_user(
        self, user_id: UUID, type: Optional[TransactionType] = None
    ) -> List[Category]:
        query = self.db.query(Category).filter(Category.user_id == user_id)
        if type is not None:
            query = query.filter(Category.type == type)
        return query.order_by(Category.name).all()

    def transaction_count(self, category_id: UUID) -> int:
        return self.count(
            self.db.query(Transaction).filter(Transaction.category_id == category_id)
        )

    def counts_for_user(self, user_id: UUID) -> list:
        """(category, transaction_count, total_amount) rows ordered by name"""
        return (
            self.db.query(
                Category,
                func.count(Transaction.transaction_id),
                func.coalesce(func.sum(Transaction.amount), 0),
            )
            .outerjoin(Transaction, Transaction.category_id == Category.category_id)
            .filter(Category.user_id == user_id)
            .group_by(Category.category_id)
            .order_by(Category.name)
            .all()
        )


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for income and expense records"""

    def __init__(self, db: Session):
        super().__init__(db, Transaction)

    def get_for_user(self, user_id: UUID, transaction_id: UUID) -> Optional[Transaction]:
        return (
            self.db.query(Transaction)
            .filter(
                Transaction.transaction_id == transaction_id,
                Transaction.user_id == user_id,
            )
            .first()
        )

    def _filtered(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[UUID] = None,
        type: Optional[TransactionType] = None,
    ):
        query = self.db.query(Transaction).filter(Transaction.user_id == user_id)
        if start_date:
            query = query.filter(Transaction.date >= start_date)
        if end_date:
            query = query.filter(Transaction.date <= end_date)
        if category_id:
            query = query.filter(Transaction.category_id == category_id)
        if type is not None:
            query = query.filter(Transaction.type == type)
        return query

    def list_with_category(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[UUID] = None,
        type: Optional[TransactionType] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Tuple[Transaction, str]], int]:
        """Newest-first page of (transaction, category_name) rows plus the total count"""
        query = self._filtered(user_id, start_date, end_date, category_id, type)
        total = self.count(query)
        rows = (
            query.join(Category, Category.category_id == Transaction.category_id)
            .add_columns(Category.name)
            .order_by(Transaction.date.desc(), Transaction.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [(row[0], row[1]) for row in rows], total

    def totals(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ):
        """(income, expense, count) for a user within an optional date range"""
        query = self._filtered(user_id, start_date, end_date)
        return query.with_entities(
            func.coalesce(
                func.sum(
                    case((Transaction.type == TransactionType.INCOME, Transaction.amount), else_=0)
                ),
                0,
            ),
            func.coalesce(
                func.sum(
                    case((Transaction.type == TransactionType.EXPENSE, Transaction.amount), else_=0)
                ),
                0,
            ),
            func.count(Transaction.transaction_id),
        ).one()

    def between(self, user_id: UUID, start_date: date, end_date: date) -> List[Transaction]:
        return (
            self._filtered(user_id, start_date, end_date)
            .order_by(Transaction.date)
            .all()
        )

    def spending_by_category(self, user_id: UUID, start_date: date, end_date: date) -> list:
        """(category, expense_total) rows within a date range, largest total first"""
        total = func.sum(Transaction.amount)
        return (
            self._filtered(user_id, start_date, end_date, type=TransactionType.EXPENSE)
            .join(Category, Category.category_id == Transaction.category_id)
            .with_entities(Category, total)
            .group_by(Category.category_id)
            .order_by(total.desc(), Category.name)
            .all()
        )
