"""
Consolidated middleware for the AppSuite API
"""

import time
import logging
from datetime import date, datetime, timezone
from uuid import UUID, uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import AppError

logger = logging.getLogger("appsuite.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, (datetime, date)):
        return obj.isoformat()
    elif isinstance(obj, UUID):
        return str(obj)
    elif isinstance(obj, bytes):
        return obj.decode("utf-8", errors="replace")
    elif isinstance(obj, Exception):
        return str(obj)
    elif isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    return obj


def _timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat()


def error_body(code: str, message: str, details=None) -> dict:
    error = {
        "code": code,
        "message": message,
        "details": make_serializable(details) if details else {},
    }
    return {"success": False, "error": error, "timestamp": _timestamp()}


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        # Generate unique request ID
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else None,
            },
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "status_code": response.status_code,
                    "process_time": f"{process_time:.4f}s",
                },
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "error": str(exc),
                    "process_time": f"{process_time:.4f}s",
                },
                exc_info=True,
            )
            raise


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            "VALIDATION_ERROR", "Request validation failed", list(exc.errors())
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(f"HTTP_{exc.status_code}", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def app_exception_handler(request: Request, exc: AppError):
    """Handle errors raised on purpose by the services"""
    if exc.http_status >= 500:
        logger.error(f"{exc.code} on {request.url}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.url}: {exc.message}")

    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(exc.code, exc.message, exc.details),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_SERVER_ERROR", "An unexpected error occurred"),
    )
