"""
Error Handling Module for the Nigeria Tax Engine

This module provides centralized error handling with:
- Custom exception hierarchy
- Standardized error responses
- Error logging
- Boundary validation for monetary amounts
- Loud failures for misconfigured reference data (permission and rule tables)
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, Request, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Configure logging
logger = logging.getLogger("taxengine.errors")


class ErrorCode(str, Enum):
    """Standardized error codes for the application"""

    # Validation Errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_ENTITY_TYPE = "INVALID_ENTITY_TYPE"
    INVALID_WHT_TYPE = "INVALID_WHT_TYPE"

    # Authorization Errors (403)
    FORBIDDEN = "FORBIDDEN"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Resource Errors (404)
    NOT_FOUND = "NOT_FOUND"

    # Internal Errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UNKNOWN_PERMISSION_NAME = "UNKNOWN_PERMISSION_NAME"
    INVALID_RULE_SET = "INVALID_RULE_SET"


class AppException(Exception):
    """Base exception for all application exceptions"""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        field: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.field = field
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response"""
        result = {
            "code": self.code.value,
            "message": self.message,
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
        }
        if self.field:
            result["field"] = self.field
        if self.details:
            result["details"] = self.details
        return result


# ============================================================================
# Validation Exceptions
# ============================================================================

class ValidationException(AppException):
    """Base validation exception"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            field=field,
        )


class InvalidAmountException(ValidationException):
    """Invalid monetary amount"""

    def __init__(self, amount: Any, field: str = "amount", message: Optional[str] = None):
        super().__init__(
            message=message or f"Invalid amount: {amount}. Amount must be a non-negative number.",
            field=field,
            code=ErrorCode.INVALID_AMOUNT,
            details={"provided_amount": str(amount)},
        )


class InvalidEntityTypeException(ValidationException):
    """Unknown taxpayer entity type"""

    def __init__(self, entity_type: Any):
        super().__init__(
            message=f"Invalid entity type: {entity_type}. Expected 'individual' or 'company'.",
            field="entity_type",
            code=ErrorCode.INVALID_ENTITY_TYPE,
            details={"provided": str(entity_type)},
        )


class InvalidWHTTypeException(ValidationException):
    """Unknown withholding tax payment type"""

    def __init__(self, wht_type: Any, allowed: list):
        super().__init__(
            message=f"Invalid WHT type: {wht_type}.",
            field="wht_type",
            code=ErrorCode.INVALID_WHT_TYPE,
            details={"provided": str(wht_type), "allowed": allowed},
        )


# ============================================================================
# Authorization Exceptions
# ============================================================================

class AuthorizationException(AppException):
    """Authorization denied exception"""

    def __init__(
        self,
        message: str = "Permission denied",
        required_permission: Optional[str] = None,
        code: ErrorCode = ErrorCode.FORBIDDEN,
        details: Optional[Dict[str, Any]] = None,
    ):
        _details = details or {}
        if required_permission:
            _details["required_permission"] = required_permission
        super().__init__(
            code=code,
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=_details,
        )


class InsufficientPermissionsException(AuthorizationException):
    """Insufficient permissions"""

    def __init__(self, required_permission: str, user_role: Optional[str] = None):
        details = {}
        if user_role:
            details["current_role"] = user_role
        super().__init__(
            message=f"Insufficient permissions. Required: {required_permission}",
            required_permission=required_permission,
            code=ErrorCode.INSUFFICIENT_PERMISSIONS,
            details=details,
        )


# ============================================================================
# Configuration Exceptions
# ============================================================================

class ConfigurationException(AppException):
    """Reference data or settings are inconsistent"""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )


class PermissionConfigurationException(ConfigurationException):
    """Raised in strict mode when a permission check names something unknown"""

    def __init__(self, kind: str, value: Any, taxonomy: str):
        super().__init__(
            message=f"Unknown {kind} '{value}' for {taxonomy} permissions",
            code=ErrorCode.UNKNOWN_PERMISSION_NAME,
            details={"kind": kind, "value": str(value), "taxonomy": taxonomy},
        )


class RuleSetConfigurationException(ConfigurationException):
    """Category rule table is malformed"""

    def __init__(self, category: str, reason: str):
        super().__init__(
            message=f"Invalid category rule '{category}': {reason}",
            code=ErrorCode.INVALID_RULE_SET,
            details={"category": category, "reason": reason},
        )


# ============================================================================
# Exception Handlers
# ============================================================================

def create_error_response(
    code: ErrorCode,
    message: str,
    status_code: int,
    details: Optional[Dict[str, Any]] = None,
    field: Optional[str] = None,
) -> JSONResponse:
    """Create a standardized error response"""
    content = {
        "detail": {
            "code": code.value,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
    }
    if field:
        content["detail"]["field"] = field
    if details:
        content["detail"]["details"] = details

    return JSONResponse(status_code=status_code, content=content)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle AppException"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"AppException: {exc.code.value} - {exc.message}",
        extra={
            "code": exc.code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
        },
        exc_info=exc.original_error,
    )

    return create_error_response(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        field=exc.field,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTPException"""
    code_map = {
        400: ErrorCode.INVALID_INPUT,
        403: ErrorCode.FORBIDDEN,
        404: ErrorCode.NOT_FOUND,
        422: ErrorCode.VALIDATION_ERROR,
        500: ErrorCode.INTERNAL_ERROR,
    }

    error_code = code_map.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    logger.warning(
        f"HTTPException: {exc.status_code} - {message}",
        extra={"path": request.url.path, "method": request.method},
    )

    return create_error_response(
        code=error_code,
        message=message,
        status_code=exc.status_code,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors"""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    logger.warning(
        f"ValidationError: {len(errors)} validation errors",
        extra={"path": request.url.path, "method": request.method, "errors": errors},
    )

    return create_error_response(
        code=ErrorCode.VALIDATION_ERROR,
        message="Request validation failed",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions"""
    logger.critical(
        f"UnhandledException: {type(exc).__name__} - {str(exc)}",
        extra={"path": request.url.path, "method": request.method},
        exc_info=True,
    )

    return create_error_response(
        code=ErrorCode.INTERNAL_ERROR,
        message="An unexpected error occurred. Please try again later.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application"""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================================================
# Utility Functions
# ============================================================================

def validate_amount(amount: Any, field: str = "amount", allow_zero: bool = True) -> Decimal:
    """Validate a monetary amount and return it as Decimal"""
    try:
        value = Decimal(str(amount))
    except (TypeError, ValueError, InvalidOperation):
        raise InvalidAmountException(amount, field)
    if not value.is_finite() or value < 0 or (not allow_zero and value == 0):
        raise InvalidAmountException(amount, field)
    return value


__all__ = [
    # Base
    "AppException",
    "ErrorCode",

    # Validation
    "ValidationException",
    "InvalidAmountException",
    "InvalidEntityTypeException",
    "InvalidWHTTypeException",

    # Authorization
    "AuthorizationException",
    "InsufficientPermissionsException",

    # Configuration
    "ConfigurationException",
    "PermissionConfigurationException",
    "RuleSetConfigurationException",

    # Handlers
    "setup_exception_handlers",
    "create_error_response",

    # Utilities
    "validate_amount",
]
