"""
Custom exception classes for the application.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the application.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when validation fails"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        self.invalid_fields = invalid_fields or {}
        details = {"invalid_fields": self.invalid_fields} if invalid_fields else {}
        super().__init__(message, details)

    @classmethod
    def from_errors(cls, message: str, errors: list[dict], skip: tuple = ()) -> "ValidationError":
        """
        Build from a pydantic-style error list (dicts with "loc" and "msg").

        Args:
            message: Top-level error message
            errors: Error dicts as returned by ``exc.errors()``
            skip: Leading location parts to drop, e.g. ("body",)
        """
        invalid_fields = {}
        for error in errors:
            loc = [str(part) for part in error.get("loc", ()) if part not in skip]
            field = ".".join(loc) or "__root__"
            invalid_fields.setdefault(field, error.get("msg", "invalid value"))
        return cls(message, invalid_fields)


class NotFoundError(ApplicationError):
    """Raised when a resource with the given id does not exist"""

    def __init__(self, resource: str, resource_id: int | str):
        details = {"resource": resource, "id": resource_id}
        super().__init__(f"{resource} '{resource_id}' not found", details)


class ConflictError(ApplicationError):
    """Raised when a request conflicts with the current resource state.

    Reserved: no current operation raises it.
    """


class InternalError(ApplicationError):
    """Raised when the backend fails in a way the client cannot fix"""


class DatabaseError(InternalError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
