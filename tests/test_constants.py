"""
Realistic test constants for the AppSuite test suite.

Values mirror what real users of each module would enter so that tests read
like actual usage.
"""

from decimal import Decimal

# =============================================================================
# USERS
# =============================================================================

REALISTIC_USERS = {
    "sarah": {"full_name": "Sarah Martinez", "email_prefix": "sarah.martinez"},
    "michael": {"full_name": "Michael Chen", "email_prefix": "michael.chen"},
    "emma": {"full_name": "Emma Johnson", "email_prefix": "emma.johnson"},
    "raj": {"full_name": "Raj Patel", "email_prefix": "raj.patel"},
}

DEFAULT_PASSWORD = "correct-horse-battery"

# =============================================================================
# INVOICES
# =============================================================================

CLIENT = {
    "name": "Acme Corporation",
    "email": "billing@acme.example.com",
    "address": "42 Industrial Way, Springfield",
    "phone": "+1 555 0100",
}

WEB_DESIGN_ITEMS = [
    {"description": "Website redesign", "quantity": "1", "unit_price": "1200.00"},
    {"description": "Hosting (months)", "quantity": "3", "unit_price": "19.99"},
]

# 1200.00 + 3 * 19.99 = 1259.97; 8.25% tax = 103.947525 -> 103.95
WEB_DESIGN_SUBTOTAL = Decimal("1259.97")
WEB_DESIGN_TAX = Decimal("103.95")
WEB_DESIGN_TOTAL = Decimal("1363.92")

# =============================================================================
# MARKETPLACE
# =============================================================================

BIKE_LISTING = {
    "title": "Vintage road bike",
    "description": "Steel frame, 56cm, recently serviced",
    "price": "349.99",
    "category": "Sports",
    "images": ["https://images.example.com/bike-1.jpg"],
}

# =============================================================================
# SHOPPING CATALOG
# =============================================================================

CATALOG = [
    {"name": "Trail Runner 2", "category": "Shoes", "brand": "Stride", "price": "120.00"},
    {"name": "City Sneaker", "category": "Shoes", "brand": "Urbano", "price": "80.00"},
    {"name": "Rain Jacket", "category": "Outerwear", "brand": "Stride", "price": "150.00"},
    {"name": "Wool Beanie", "category": "Accessories", "brand": "Knitwell", "price": "25.00"},
    {"name": "Leather Belt", "category": "Accessories", "brand": "Urbano", "price": "45.00"},
]

# =============================================================================
# RECIPES
# =============================================================================

RECIPES = [
    {
        "recipe_id": "tomato-basil-pasta",
        "title": "Tomato Basil Pasta",
        "description": "Weeknight pasta",
        "cooking_time": 20,
        "difficulty": "easy",
        "ingredients": ["pasta", "tomatoes", "basil", "garlic", "olive oil"],
        "instructions": ["Boil pasta", "Make sauce", "Combine"],
    },
    {
        "recipe_id": "garden-salad",
        "title": "Garden Salad",
        "description": "Crisp and quick",
        "cooking_time": 10,
        "difficulty": "easy",
        "ingredients": ["lettuce", "cucumber", "carrot", "olive oil"],
        "instructions": ["Chop", "Toss"],
    },
    {
        "recipe_id": "beef-stew",
        "title": "Beef Stew",
        "description": "Slow cooked",
        "cooking_time": 150,
        "difficulty": "hard",
        "ingredients": ["beef", "potatoes", "carrots", "onion", "stock", "thyme"],
        "instructions": ["Brown beef", "Simmer for two hours"],
    },
]
