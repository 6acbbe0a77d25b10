"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    LogoutRequest,
    UserResponse,
    TokenPairResponse,
    AuthResponse,
)
from domain.schemas.appointment_schemas import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentResponse,
    AppointmentListResponse,
    AvailabilityResponse,
    AppointmentStats,
    TimeSlot,
    CalendarDay,
    CalendarMonth,
    CalendarSummary,
)
from domain.schemas.invoice_schemas import (
    ClientInfo,
    InvoiceItemCreate,
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceStatusUpdate,
    InvoiceResponse,
    BulkDeleteRequest,
    BulkDeleteResponse,
    InvoiceStats,
    InvoiceAlert,
)
from domain.schemas.marketplace_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    OrderResponse,
    PaymentIntentCreate,
    PaymentConfirmRequest,
    PaymentIntentResponse,
    PaymentConfirmResponse,
)
from domain.schemas.finance_schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryCount,
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
    DashboardSummary,
    MonthlySummary,
)
from domain.schemas.journal_schemas import (
    MoodEntryCreate,
    MoodEntryUpdate,
    MoodEntryResponse,
    MoodStatistics,
    MoodTrendResponse,
)
from domain.schemas.shopping_schemas import (
    CatalogProductCreate,
    CatalogProductUpdate,
    CatalogProductResponse,
    InteractionCreate,
    InteractionResponse,
    PreferencesUpdate,
    PreferencesResponse,
    RecommendationItem,
    RecommendationResponse,
)
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeResponse,
    RecipeMatch,
    RecipeSearchResponse,
)

__all__ = [
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "RefreshRequest",
    "LogoutRequest",
    "UserResponse",
    "TokenPairResponse",
    "AuthResponse",
    # Appointments
    "AppointmentCreate",
    "AppointmentUpdate",
    "AppointmentResponse",
    "AppointmentListResponse",
    "AvailabilityResponse",
    "AppointmentStats",
    "TimeSlot",
    "CalendarDay",
    "CalendarMonth",
    "CalendarSummary",
    # Invoices
    "ClientInfo",
    "InvoiceItemCreate",
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceStatusUpdate",
    "InvoiceResponse",
    "BulkDeleteRequest",
    "BulkDeleteResponse",
    "InvoiceStats",
    "InvoiceAlert",
    # Marketplace
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "OrderResponse",
    "PaymentIntentCreate",
    "PaymentConfirmRequest",
    "PaymentIntentResponse",
    "PaymentConfirmResponse",
    # Finance
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryCount",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "DashboardSummary",
    "MonthlySummary",
    # Journal
    "MoodEntryCreate",
    "MoodEntryUpdate",
    "MoodEntryResponse",
    "MoodStatistics",
    "MoodTrendResponse",
    # Shopping assistant
    "CatalogProductCreate",
    "CatalogProductUpdate",
    "CatalogProductResponse",
    "InteractionCreate",
    "InteractionResponse",
    "PreferencesUpdate",
    "PreferencesResponse",
    "RecommendationItem",
    "RecommendationResponse",
    # Recipes
    "RecipeCreate",
    "RecipeResponse",
    "RecipeMatch",
    "RecipeSearchResponse",
]
