"""
Domain enums for AppSuite.
Contains all enumeration types used across the domain models.
"""

import enum


class UserRole(str, enum.Enum):
    """Account roles"""

    USER = "user"
    ADMIN = "admin"


class AppointmentStatus(str, enum.Enum):
    """Appointment lifecycle states"""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


# Statuses that block a time range for other bookings
ACTIVE_APPOINTMENT_STATUSES = (
    AppointmentStatus.PENDING,
    AppointmentStatus.CONFIRMED,
    AppointmentStatus.RESCHEDULED,
)


class InvoiceStatus(str, enum.Enum):
    """Invoice payment states"""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class OrderStatus(str, enum.Enum):
    """Marketplace order states"""

    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class PaymentIntentStatus(str, enum.Enum):
    """Payment intent states"""

    REQUIRES_CONFIRMATION = "requires_confirmation"
    SUCCEEDED = "succeeded"
    CANCELED = "canceled"


class TransactionType(str, enum.Enum):
    """Money flow direction for categories and transactions"""

    INCOME = "income"
    EXPENSE = "expense"


class MoodEntryStatus(str, enum.Enum):
    """Journal entry visibility"""

    ACTIVE = "active"
    DELETED = "deleted"
    ARCHIVED = "archived"


class TrendPeriod(str, enum.Enum):
    """Lookback windows for mood trends"""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class TrendDirection(str, enum.Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class InteractionType(str, enum.Enum):
    """Ways a shopper can interact with a catalog product"""

    VIEW = "view"
    LIKE = "like"
    DISLIKE = "dislike"
    FAVORITE = "favorite"
    PURCHASE = "purchase"
    RATING = "rating"


class RecommendationStrategy(str, enum.Enum):
    HYBRID = "hybrid"
    COLLABORATIVE = "collaborative"
    CONTENT_BASED = "content-based"
    POPULARITY = "popularity"


class Confidence(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Difficulty(str, enum.Enum):
    """Recipe difficulty levels"""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"
