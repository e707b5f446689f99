"""Custom exception classes for the brand kit API.

Each exception carries the HTTP status and the short category code the
API surfaces to callers. ``details`` is for the server-side log only and
is never serialized into a response body.
"""

from typing import Dict, Any, Optional, Tuple


class BrandKitBaseException(Exception):
    """Base exception for all brand kit API errors."""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BrandKitBaseException):
    """Raised when the request is missing required input or is malformed."""

    status_code = 400
    code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        details = {"field": field} if field else {}
        super().__init__(message, details)


class UpstreamWriteError(BrandKitBaseException):
    """Raised when a datastore insert fails."""

    code = "upstream_write_error"

    def __init__(self,
                 message: str,
                 operation: str,
                 details: Optional[Dict[str, Any]] = None):
        self.operation = operation
        write_details = details or {}
        write_details["operation"] = operation
        super().__init__(message, write_details)


class UpstreamReadError(BrandKitBaseException):
    """Raised when a datastore query fails."""

    code = "upstream_read_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class GenerationCallError(BrandKitBaseException):
    """Raised when the completion call itself fails (network, auth, quota)."""

    code = "generation_call_error"

    def __init__(self,
                 message: str = "AI generation failed",
                 upstream_status: Optional[int] = None,
                 model: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.upstream_status = upstream_status
        self.model = model
        call_details = details or {}
        if upstream_status is not None:
            call_details["upstream_status"] = upstream_status
        if model:
            call_details["model"] = model
        super().__init__(message, call_details)


class GenerationParseError(BrandKitBaseException):
    """Raised when the completion succeeded but its text is not valid JSON."""

    code = "generation_parse_error"

    def __init__(self, message: str = "AI JSON parse failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class GenerationShapeError(GenerationParseError):
    """Raised when parsed output violates the profile's contract (strict mode only)."""

    code = "generation_shape_error"

    def __init__(self, contract_name: str, errors: list):
        self.contract_name = contract_name
        self.validation_errors = errors
        super().__init__(
            "AI output failed validation",
            {"contract": contract_name, "validation_errors": errors},
        )


class ConfigurationError(BrandKitBaseException):
    """Raised at startup when required configuration is missing or invalid."""

    code = "configuration_error"

    def __init__(self, variable: str, reason: str):
        self.variable = variable
        super().__init__(f"Invalid configuration for {variable}: {reason}", {"variable": variable})


INTERNAL_ERROR_BODY = {"error": "Internal server error", "code": "internal_error"}


def to_error_response(exc: BrandKitBaseException) -> Tuple[int, Dict[str, str]]:
    """Map an exception to its status code and public body."""
    return exc.status_code, {"error": exc.message, "code": exc.code}
