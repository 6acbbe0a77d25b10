"""
Error handling and edge case tests.

This test suite covers how failures surface across the API:
- Validation errors (request bodies, query parameters)
- The shared error envelope for service, HTTP and unexpected errors
- Database constraint enforcement and rollbacks
- Request tracing headers and the health check
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from main import app
from api.middleware import error_body, make_serializable
from app.config import Environment, Settings
from app.exceptions import AppError, ConflictError, NotFoundError
from domain.models import Invoice, InvoiceItem
from domain.enums import InvoiceStatus
from repositories import AppointmentRepository
from services.invoice_service import InvoiceService
from test_fixtures import client, db_session
from test_helpers import business_time, iso, unique_email


# =============================================================================
# VALIDATION ERROR TESTS
# =============================================================================


def test_request_validation_envelope():
    """
    Test that malformed bodies return the shared validation envelope.

    Verifies:
    - Status is 400, not FastAPI's default 422
    - success is false and the code is VALIDATION_ERROR
    - details lists the offending fields
    """
    r = client.post("/api/v1/appointments", json={"user_name": "Sarah"})
    assert r.status_code == 400

    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["message"] == "Request validation failed"
    fields = {tuple(d["loc"])[-1] for d in body["error"]["details"]}
    assert {"user_email", "start_time"} <= fields
    assert "timestamp" in body


def test_query_parameter_validation():
    """
    Test that bad query parameters are rejected the same way.

    Verifies:
    - Out-of-range limit is a validation error
    - Malformed UUID path parameter is a validation error
    """
    r = client.get("/api/v1/appointments", params={"limit": 0})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"

    r = client.get("/api/invoices/not-a-uuid")
    assert r.status_code == 400


# =============================================================================
# HTTP AND SERVICE ERROR TESTS
# =============================================================================


def test_unknown_route_uses_http_code():
    """
    Test routing errors.

    Verifies:
    - Unknown paths answer 404 with code HTTP_404
    - Unsupported methods answer 405 with code HTTP_405
    """
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "HTTP_404"

    r = client.patch("/api/health-check")
    assert r.status_code == 405
    assert r.json()["error"]["code"] == "HTTP_405"


def test_service_error_envelope():
    """
    Test that errors raised by services keep their code and details.

    Verifies:
    - NotFoundError maps to 404 NOT_FOUND
    - details is an empty object when the error carries none
    """
    r = client.get(f"/api/invoices/{uuid.uuid4()}")
    assert r.status_code == 404
    error = r.json()["error"]
    assert error["code"] == "NOT_FOUND"
    assert error["details"] == {}


def test_unauthenticated_request():
    """
    Test protected routes without valid credentials.

    Verifies:
    - Missing, malformed and garbage tokens all answer 401 UNAUTHORIZED
    """
    assert client.get("/api/auth/me").json()["error"]["code"] == "UNAUTHORIZED"

    r = client.get("/api/auth/me", headers={"Authorization": "Bearer"})
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Malformed Authorization header."

    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert r.status_code == 401


def test_unexpected_error_returns_500():
    """
    Test that an unhandled exception is hidden behind a generic 500.

    Verifies:
    - Status 500 with code INTERNAL_SERVER_ERROR
    - The original exception text is not leaked
    """
    failing_client = TestClient(app, raise_server_exceptions=False)
    with patch.object(InvoiceService, "get_stats", side_effect=RuntimeError("boom")):
        r = failing_client.get("/api/invoices/stats")

    assert r.status_code == 500
    body = r.json()
    assert body["error"]["code"] == "INTERNAL_SERVER_ERROR"
    assert "boom" not in body["error"]["message"]


# =============================================================================
# DATABASE AND ROLLBACK TESTS
# =============================================================================


def test_invoice_item_check_constraint(db_session: Session):
    """
    Test that the database rejects invalid invoice lines.

    Verifies:
    - quantity > 0 is enforced by a check constraint
    """
    invoice = Invoice(
        invoice_number="INV-2026-9999",
        client_name="Acme Corporation",
        client_email="billing@acme.example.com",
        client_address="42 Industrial Way",
        issue_date=date(2026, 1, 1),
        due_date=date(2026, 1, 31),
        status=InvoiceStatus.DRAFT,
    )
    invoice.items = [
        InvoiceItem(
            description="Negative work",
            quantity=Decimal("-1"),
            unit_price=Decimal("10"),
            line_total=Decimal("-10"),
        )
    ]
    db_session.add(invoice)
    with pytest.raises(IntegrityError):
        db_session.commit()


def test_failed_write_is_rolled_back():
    """
    Test that a failing repository write surfaces as a 500 and leaves no data.

    Verifies:
    - The service re-raises the database error after rolling back
    - The appointment list stays empty
    """
    failing_client = TestClient(app, raise_server_exceptions=False)
    payload = {
        "user_name": "Michael Chen",
        "user_email": unique_email("michael.chen"),
        "start_time": iso(business_time(days_ahead=2, hour=11)),
    }
    with patch.object(
        AppointmentRepository, "create", side_effect=SQLAlchemyError("disk full")
    ):
        r = failing_client.post("/api/v1/appointments", json=payload)

    assert r.status_code == 500
    assert client.get("/api/v1/appointments").json()["total"] == 0


# =============================================================================
# ERROR TYPES AND SERIALIZATION
# =============================================================================


def test_app_error_defaults_and_to_dict():
    """
    Test the service error hierarchy.

    Verifies:
    - Subclasses carry their HTTP status and default code
    - to_dict always carries details, empty when none were given
    """
    error = ConflictError("Slot taken", details={"conflicting_ids": ["a"]})
    assert error.http_status == 409
    assert error.to_dict() == {
        "code": "CONFLICT",
        "message": "Slot taken",
        "details": {"conflicting_ids": ["a"]},
    }
    assert NotFoundError().to_dict() == {
        "code": "NOT_FOUND",
        "message": "Not found",
        "details": {},
    }
    assert str(AppError()) == "Application error"


def test_error_details_are_json_safe():
    """
    Test serialization of error details.

    Verifies:
    - Decimal, UUID, date and datetime values become JSON types
    """
    ident = uuid.uuid4()
    details = {
        "amount": Decimal("12.50"),
        "ids": [ident],
        "day": date(2026, 2, 1),
        "at": datetime(2026, 2, 1, 9, 30),
    }
    assert make_serializable(details) == {
        "amount": 12.5,
        "ids": [str(ident)],
        "day": "2026-02-01",
        "at": "2026-02-01T09:30:00",
    }
    body = error_body("CONFLICT", "Slot taken", details)
    assert body["success"] is False
    assert body["error"]["details"]["ids"] == [str(ident)]


# =============================================================================
# TRACING, HEALTH AND CONFIGURATION
# =============================================================================


def test_request_id_and_timing_headers():
    """
    Test the request logging middleware.

    Verifies:
    - Every response carries X-Request-ID and X-Process-Time
    - Request ids differ between requests
    """
    first = client.get("/api/health-check")
    second = client.get("/api/health-check")
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]
    assert float(first.headers["X-Process-Time"]) >= 0


def test_health_check():
    r = client.get("/api/health-check")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "AppSuite", "version": "1.0.0"}


def test_settings_normalize_environment():
    """
    Test settings parsing.

    Verifies:
    - Environment names are case-insensitive
    - Helper predicates follow the environment
    """
    settings = Settings(environment="PRODUCTION", database_url="sqlite://")
    assert settings.environment == Environment.PRODUCTION
    assert settings.is_production()
    assert not settings.is_development()
