from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from datetime import date
from decimal import Decimal
import logging
import uuid

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.models import AppUser, Category, Transaction, utcnow
from domain.enums import TransactionType
from domain.schemas.common import to_cents
from domain.schemas.finance_schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryCount,
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
    DashboardSummary,
    MonthlySummary,
    CategorySpending,
)
from repositories import CategoryRepository, TransactionRepository

logger = logging.getLogger("appsuite.finance")


def _money(value) -> float:
    return float(to_cents(Decimal(str(value))))


def _month_start(day: date, months_back: int) -> date:
    index = day.year * 12 + (day.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


class CategoryService:
    @staticmethod
    def get_category(db: Session, user: AppUser, category_id: uuid.UUID) -> Category:
        category = CategoryRepository(db).get_for_user(user.user_id, category_id)
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        return category

    @staticmethod
    def list_categories(
        db: Session, user: AppUser, type: Optional[TransactionType] = None
    ) -> List[Category]:
        return CategoryRepository(db).list_for_user(user.user_id, type)

    @staticmethod
    def create_category(db: Session, user: AppUser, data: CategoryCreate) -> Category:
        """
        Raises:
            ConflictError: The user already has a category with this name
        """
        repo = CategoryRepository(db)
        if repo.get_by_name(user.user_id, data.name):
            raise ConflictError(f"Category '{data.name}' already exists")
        try:
            category = repo.create(
                Category(user_id=user.user_id, name=data.name, type=data.type)
            )
        except IntegrityError as e:
            db.rollback()
            raise ConflictError(f"Category '{data.name}' already exists") from e
        logger.info(f"Category created: {category.name} for user {user.user_id}")
        return category

    @staticmethod
    def update_category(
        db: Session, user: AppUser, category_id: uuid.UUID, data: CategoryUpdate
    ) -> Category:
        repo = CategoryRepository(db)
        category = CategoryService.get_category(db, user, category_id)
        if data.name is not None:
            name = data.name.strip()
            if not name:
                raise ServiceValidationError("Category name must not be blank")
            existing = repo.get_by_name(user.user_id, name)
            if existing and existing.category_id != category.category_id:
                raise ConflictError(f"Category '{name}' already exists")
            category.name = name
        if data.type is not None:
            category.type = data.type
        return repo.update(category)

    @staticmethod
    def delete_category(db: Session, user: AppUser, category_id: uuid.UUID) -> None:
        """
        Raises:
            NotFoundError: Unknown category
            ServiceValidationError: Transactions still reference the category
        """
        repo = CategoryRepository(db)
        category = CategoryService.get_category(db, user, category_id)
        in_use = repo.transaction_count(category.category_id)
        if in_use:
            raise ServiceValidationError(
                f"Category is used by {in_use} transaction(s) and cannot be deleted"
            )
        db.delete(category)
        db.commit()
        logger.info(f"Category deleted: {category_id}")

    @staticmethod
    def category_counts(db: Session, user: AppUser) -> List[CategoryCount]:
        return [
            CategoryCount(
                category_id=category.category_id,
                name=category.name,
                type=category.type,
                transaction_count=count,
                total_amount=_money(total),
            )
            for category, count, total in CategoryRepository(db).counts_for_user(
                user.user_id
            )
        ]


class TransactionService:
    @staticmethod
    def to_response(txn: Transaction, category_name: Optional[str] = None) -> TransactionResponse:
        response = TransactionResponse.model_validate(txn)
        response.category_name = category_name or (
            txn.category.name if txn.category else None
        )
        return response

    @staticmethod
    def get_transaction(db: Session, user: AppUser, transaction_id: uuid.UUID) -> Transaction:
        txn = TransactionRepository(db).get_for_user(user.user_id, transaction_id)
        if not txn:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        return txn

    @staticmethod
    def list_transactions(
        db: Session,
        user: AppUser,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[uuid.UUID] = None,
        type: Optional[TransactionType] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> TransactionListResponse:
        if start_date and end_date and start_date > end_date:
            raise ServiceValidationError("start_date must not be after end_date")
        rows, total = TransactionRepository(db).list_with_category(
            user.user_id,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            type=type,
            limit=limit,
            offset=offset,
        )
        return TransactionListResponse(
            items=[TransactionService.to_response(txn, name) for txn, name in rows],
            total=total,
            limit=limit,
            offset=offset,
        )

    @staticmethod
    def create_transaction(
        db: Session, user: AppUser, data: TransactionCreate
    ) -> Transaction:
        """
        Record income or an expense in one of the user's categories.

        Raises:
            NotFoundError: Category missing or owned by another user
        """
        CategoryService.get_category(db, user, data.category_id)
        txn = Transaction(
            user_id=user.user_id,
            category_id=data.category_id,
            amount=data.amount,
            type=data.type,
            description=data.description,
            date=data.date,
        )
        try:
            txn = TransactionRepository(db).create(txn)
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create transaction")
            raise
        logger.info(f"Transaction recorded: {txn.transaction_id} {txn.type.value} {txn.amount}")
        return txn

    @staticmethod
    def update_transaction(
        db: Session, user: AppUser, transaction_id: uuid.UUID, data: TransactionUpdate
    ) -> Transaction:
        txn = TransactionService.get_transaction(db, user, transaction_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "category_id" in changes:
            CategoryService.get_category(db, user, changes["category_id"])
        for field, value in changes.items():
            setattr(txn, field, value)
        return TransactionRepository(db).update(txn)

    @staticmethod
    def delete_transaction(db: Session, user: AppUser, transaction_id: uuid.UUID) -> None:
        txn = TransactionService.get_transaction(db, user, transaction_id)
        db.delete(txn)
        db.commit()


class DashboardService:
    @staticmethod
    def summary(
        db: Session,
        user: AppUser,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> DashboardSummary:
        if start_date and end_date and start_date > end_date:
            raise ServiceValidationError("start_date must not be after end_date")
        income, expense, count = TransactionRepository(db).totals(
            user.user_id, start_date, end_date
        )
        income = to_cents(Decimal(str(income)))
        expense = to_cents(Decimal(str(expense)))
        return DashboardSummary(
            total_income=float(income),
            total_expense=float(expense),
            balance=float(income - expense),
            transaction_count=count,
        )

    @staticmethod
    def monthly(
        db: Session, user: AppUser, months: int = 6, today: Optional[date] = None
    ) -> List[MonthlySummary]:
        """Income, expense and balance for each of the last `months` months, oldest first"""
        today = today or utcnow().date()
        first = _month_start(today, months - 1)
        buckets = {}
        for offset in range(months - 1, -1, -1):
            start = _month_start(today, offset)
            buckets[f"{start.year:04d}-{start.month:02d}"] = [Decimal("0"), Decimal("0")]

        for txn in TransactionRepository(db).between(user.user_id, first, today):
            key = f"{txn.date.year:04d}-{txn.date.month:02d}"
            if key not in buckets:
                continue
            slot = 0 if txn.type == TransactionType.INCOME else 1
            buckets[key][slot] += Decimal(str(txn.amount))

        return [
            MonthlySummary(
                month=month,
                income=float(to_cents(income)),
                expense=float(to_cents(expense)),
                balance=float(to_cents(income - expense)),
            )
            for month, (income, expense) in buckets.items()
        ]

    @staticmethod
    def spending_by_category(
        db: Session, user: AppUser, start_date: date, end_date: date
    ) -> List[CategorySpending]:
        """
        Expense totals per category between two dates (inclusive), largest first.

        Raises:
            ServiceValidationError: start_date after end_date
        """
        if start_date > end_date:
            raise ServiceValidationError("start_date must not be after end_date")
        rows = TransactionRepository(db).spending_by_category(
            user.user_id, start_date, end_date
        )
        return [
            CategorySpending(
                category_id=category.category_id,
                category_name=category.name,
                category_type=category.type,
                total_amount=_money(total),
            )
            for category, total in rows
        ]
