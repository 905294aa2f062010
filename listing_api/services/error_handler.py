"""
Error handling service for consistent error response formatting and logging.
Converts every exception reaching the request boundary into a JSON error body.
"""

from typing import Dict, Any, List, Optional
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from listing_api.utils.exceptions import APIException, ValidationError
import logging
import uuid

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.

    Single-message failures render as {"error": message}; validation failures
    render as {"errors": [...]} plus one key per failing field. Internal
    exception detail is logged and never returned.
    """

    @staticmethod
    def format_error_response(message: str) -> Dict[str, Any]:
        return {"error": message}

    @staticmethod
    def format_validation_response(errors: List[str], field_errors: Optional[Dict[str, List[str]]] = None) -> Dict[str, Any]:
        """
        Format validation failures.

        Args:
            errors: Full human-readable messages
            field_errors: Messages keyed by field name

        Returns:
            Dictionary with an "errors" list and field keys alongside
        """
        response: Dict[str, Any] = dict(field_errors or {})
        response["errors"] = list(errors)
        return response

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle custom API exceptions with structured response.

        Args:
            exception: API exception instance
            request: Optional FastAPI request object

        Returns:
            JSON response with formatted error
        """
        request_id = ErrorHandlerService._get_request_id(request)

        logger.warning(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        if isinstance(exception, ValidationError):
            content = ErrorHandlerService.format_validation_response(exception.errors, exception.field_errors)
        else:
            content = ErrorHandlerService.format_error_response(exception.detail)

        return JSONResponse(
            status_code=exception.status_code,
            content=content,
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: RequestValidationError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle FastAPI request validation errors.

        Malformed JSON bodies are a 400, unparseable path ids a 404, and
        anything else a 422 listing the failures.

        Args:
            exception: Request validation error
            request: Optional FastAPI request object

        Returns:
            JSON response with validation error details
        """
        request_id = ErrorHandlerService._get_request_id(request)
        errors = exception.errors()

        logger.warning(
            f"Validation Error [{request_id}]: {len(errors)} request errors",
            extra={
                "error_count": len(errors),
                "request_id": request_id,
                "path": request.url.path if request else None,
            }
        )

        if any(error.get("type") == "json_invalid" for error in errors):
            return JSONResponse(
                status_code=400,
                content=ErrorHandlerService.format_error_response("Malformed JSON request body")
            )

        if errors and all(error.get("loc", ("",))[0] == "path" for error in errors):
            return JSONResponse(
                status_code=404,
                content=ErrorHandlerService.format_error_response("Resource not found")
            )

        messages = []
        for error in errors:
            location = " ".join(str(loc) for loc in error.get("loc", ()) if loc not in ("body", "query"))
            messages.append(f"{location} {error['msg']}".strip())

        return JSONResponse(
            status_code=422,
            content=ErrorHandlerService.format_validation_response(messages)
        )

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle database errors that escaped the service layer.

        Args:
            exception: SQLAlchemy error
            request: Optional FastAPI request object

        Returns:
            JSON response with database error information
        """
        request_id = ErrorHandlerService._get_request_id(request)

        if isinstance(exception, IntegrityError):
            error_code = "INTEGRITY_ERROR"
            message = "Record violates a uniqueness or reference constraint"
            status_code = 422
        else:
            error_code = "DATABASE_ERROR"
            message = "Database operation failed"
            status_code = 500

        logger.error(
            f"Database Error [{request_id}]: {error_code} - {str(exception)}",
            extra={
                "error_code": error_code,
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=True
        )

        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(message)
        )

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle framework HTTP exceptions such as unknown routes.

        Args:
            exception: HTTP exception
            request: Optional FastAPI request object

        Returns:
            JSON response with HTTP error information
        """
        request_id = ErrorHandlerService._get_request_id(request)

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(str(exception.detail)),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle unexpected errors with secure error responses.

        Args:
            exception: Unexpected exception
            request: Optional FastAPI request object

        Returns:
            JSON response with generic error message
        """
        request_id = ErrorHandlerService._get_request_id(request)

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {str(exception)}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__,
            },
            exc_info=True
        )

        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response(
                "An unexpected error occurred. Please try again later."
            )
        )

    @staticmethod
    def _get_request_id(request: Optional[Request]) -> str:
        """Request ID assigned by the request context middleware, or a fresh one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return str(uuid.uuid4())[:8]
