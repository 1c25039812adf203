"""
API error kinds.

Every failure the controller layer knows how to name derives from ApiError.
The centralized error handlers in services/system/error_handlers.py map each
kind to an HTTP status; anything else is rendered as a 500.
"""
from typing import Any, Dict, List, Optional


class ApiError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            'success': False,
            'error': self.message,
            'code': self.code,
        }
        if self.details:
            body['details'] = self.details
        return body


class Unauthenticated(ApiError):
    """No caller identity is attached to a request that needs one."""

    status_code = 401
    code = "UNAUTHENTICATED"


class Forbidden(ApiError):
    """The caller is known but holds none of the required roles."""

    status_code = 403
    code = "FORBIDDEN"


class ValidationFailed(ApiError):
    status_code = 400
    code = "VALIDATION_FAILED"

    def __init__(self, violations: List[Dict[str, Any]], message: str = "Request validation failed"):
        super().__init__(message)
        self.violations = violations

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body['violations'] = self.violations
        return body


class NotFound(ApiError):
    status_code = 404
    code = "NOT_FOUND"


class DomainError(ApiError):
    """Business rule violation raised by a service."""

    status_code = 400
    code = "DOMAIN_ERROR"


class Conflict(DomainError):
    status_code = 409
    code = "CONFLICT"
