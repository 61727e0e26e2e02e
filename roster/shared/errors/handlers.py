"""
Centralized error handlers for FastAPI.

Maps membership domain errors and request validation failures to
error-code responses. The body is always a JSON array of
{"code": ...} objects; the status follows the response class picked
by the translator. No stack traces or internal details are exposed.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from roster.domain.membership.errors import (
    FieldViolation,
    InputValidationError,
    MembershipDomainError,
)
from roster.shared.errors.translator import (
    INTERNAL_SERVER_ERROR,
    ErrorResponse,
    ResponseClass,
    codes_for_reason,
    to_error_response,
)

logger = logging.getLogger(__name__)

# Request parts FastAPI prefixes to error locations.
_LOCATION_ROOTS = ("body", "query", "path", "header", "cookie")


def _error_response(error_response: ErrorResponse) -> JSONResponse:
    """Build a consistent JSON error-code response."""
    return JSONResponse(
        status_code=error_response.status_code,
        content=error_response.body(),
    )


def violations_from_errors(errors: list[dict]) -> list[FieldViolation]:
    """Turn pydantic error dicts into field violations, one per failed rule.

    Nested and list-item failures are kept; their field is the dotted
    location (e.g. "2.email" for the third item of a bulk request).
    """
    violations = []
    for error in errors:
        location = list(error.get("loc", ()))
        if location and location[0] in _LOCATION_ROOTS:
            location = location[1:]
        field = ".".join(str(part) for part in location) or "body"
        violations.append(FieldViolation(field=field, code=error["type"]))
    return violations


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report every violated field rule as a BadRequest error code."""
        error = InputValidationError(violations_from_errors(list(exc.errors())))
        logger.warning("Rejected request: %s", error.message)
        return _error_response(to_error_response(error))

    @app.exception_handler(MembershipDomainError)
    async def handle_membership_domain(
        _request: Request, exc: MembershipDomainError
    ) -> JSONResponse:
        """Translate any membership domain error into its codes."""
        error_response = to_error_response(exc)
        if error_response.response_class is ResponseClass.INTERNAL_SERVER_ERROR:
            logger.error("Membership operation failed: %s", exc.message, exc_info=exc)
        else:
            logger.warning("Membership request refused: %s", exc.message)
        return _error_response(error_response)

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(
            ErrorResponse(
                response_class=ResponseClass.INTERNAL_SERVER_ERROR,
                codes=codes_for_reason(INTERNAL_SERVER_ERROR),
            )
        )
