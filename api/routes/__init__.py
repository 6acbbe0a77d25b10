"""API routes package"""

from . import (
    health,
    auth,
    appointments,
    appointment_calendar,
    invoices,
    products,
    orders,
    payments,
    categories,
    transactions,
    dashboard,
    moods,
    shop_products,
    shop_interactions,
    recipes,
)

__all__ = [
    "health",
    "auth",
    "appointments",
    "appointment_calendar",
    "invoices",
    "products",
    "orders",
    "payments",
    "categories",
    "transactions",
    "dashboard",
    "moods",
    "shop_products",
    "shop_interactions",
    "recipes",
]
