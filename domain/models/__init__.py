"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
    utcnow,
)
from domain.models.user import AppUser, RefreshToken
from domain.models.appointment import Appointment
from domain.models.invoice import Invoice, InvoiceItem
from domain.models.marketplace import Product, Order, PaymentIntent
from domain.models.finance import Category, Transaction
from domain.models.journal import MoodEntry
from domain.models.shopping import CatalogProduct, UserInteraction, ShoppingPreference
from domain.models.recipe import Recipe

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    "utcnow",
    # User models
    "AppUser",
    "RefreshToken",
    # Scheduling
    "Appointment",
    # Invoicing
    "Invoice",
    "InvoiceItem",
    # Marketplace
    "Product",
    "Order",
    "PaymentIntent",
    # Finance
    "Category",
    "Transaction",
    # Journal
    "MoodEntry",
    # Shopping assistant
    "CatalogProduct",
    "UserInteraction",
    "ShoppingPreference",
    # Recipes
    "Recipe",
]
