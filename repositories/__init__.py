"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository, RefreshTokenRepository
from repositories.appointment_repository import AppointmentRepository
from repositories.invoice_repository import InvoiceRepository
from repositories.marketplace_repository import (
    ProductRepository,
    OrderRepository,
    PaymentIntentRepository,
)
from repositories.finance_repository import CategoryRepository, TransactionRepository
from repositories.mood_repository import MoodRepository
from repositories.shopping_repository import (
    CatalogRepository,
    InteractionRepository,
    PreferenceRepository,
)
from repositories.recipe_repository import RecipeRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RefreshTokenRepository",
    "AppointmentRepository",
    "InvoiceRepository",
    "ProductRepository",
    "OrderRepository",
    "PaymentIntentRepository",
    "CategoryRepository",
    "TransactionRepository",
    "MoodRepository",
    "CatalogRepository",
    "InteractionRepository",
    "PreferenceRepository",
    "RecipeRepository",
]
