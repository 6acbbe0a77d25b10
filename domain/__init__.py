"""
Domain layer - ORM models, request/response schemas and enums for every AppSuite app.
"""

from domain import enums, models, schemas

__all__ = ["enums", "models", "schemas"]
