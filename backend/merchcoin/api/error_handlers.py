"""Error Handlers — global exception handlers and Failure → HTTP mapping.

Invariants:
    - LedgerError → structured JSON with error code, message, severity, its http_status
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → opaque 500, never leaks internal details
    - Every FailureKind has an explicit HTTP status in FAILURE_HTTP_STATUS
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from merchcoin.core.domain_types import FailureKind
from merchcoin.core.errors import LedgerError, ErrorSeverity
from merchcoin.core.outcomes import Failure

logger = logging.getLogger(__name__)

FAILURE_HTTP_STATUS: dict[FailureKind, int] = {
    FailureKind.ITEM_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    FailureKind.INSUFFICIENT_BALANCE: status.HTTP_400_BAD_REQUEST,
    FailureKind.RECIPIENT_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    FailureKind.SELF_TRANSFER: status.HTTP_400_BAD_REQUEST,
}


def failure_response(failure: Failure) -> JSONResponse:
    """Render a workflow Failure with the standard error envelope."""
    return JSONResponse(
        status_code=FAILURE_HTTP_STATUS[failure.kind],
        content={
            "error": {
                "code": failure.kind.name,
                "message": failure.message,
                "category": "business_rule",
                "severity": ErrorSeverity.WARNING.value,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_ledger_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_ledger_error_handler(app: FastAPI) -> None:

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        """Handle all ledger domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"LedgerError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
