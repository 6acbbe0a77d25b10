"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.appointment_service import AppointmentService
from services.calendar_service import CalendarService
from services.invoice_service import InvoiceService
from services.marketplace_service import MarketplaceService
from services.payment_service import PaymentService
from services.finance_service import CategoryService, TransactionService, DashboardService
from services.mood_service import MoodService
from services.catalog_service import CatalogService
from services.interaction_service import InteractionService, PreferenceService
from services.recommendation_service import RecommendationService
from services.recipe_service import RecipeService

# Note: time_slot_service, invoice_calculator, trend_service and recipe_scorer
# contain pure functions, not classes

__all__ = [
    "AuthService",
    "AppointmentService",
    "CalendarService",
    "InvoiceService",
    "MarketplaceService",
    "PaymentService",
    "CategoryService",
    "TransactionService",
    "DashboardService",
    "MoodService",
    "CatalogService",
    "InteractionService",
    "PreferenceService",
    "RecommendationService",
    "RecipeService",
]
