"""
Shared exception classes for the health item data model.

This module provides:
- A base exception carrying a detail message and structured context
- The four failure kinds raised while validating, parsing and writing items

Usage:
    from health_items.core.exceptions import SerializationError

    # In a write path - refuse to emit an item with unset mandatory fields
    raise SerializationError(field="address")
"""
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION CLASS
# =============================================================================

class HealthItemError(Exception):
    """
    Base exception for all health item errors.

    All custom exceptions inherit from this class.
    Provides a consistent error structure with a detail message and context.
    """

    detail: str = "An unexpected error occurred"

    def __init__(self, detail: Optional[str] = None, **kwargs: Any):
        """
        Initialize the exception.

        Args:
            detail: Human-readable error message. Uses class default if not provided.
            **kwargs: Additional context (field, element, value, ...).
        """
        self.detail = detail or self.__class__.detail
        self.context = {key: value for key, value in kwargs.items() if value is not None}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary, e.g. for structured logging."""
        result: Dict[str, Any] = {"error": self.__class__.__name__, "detail": self.detail}
        if self.context:
            result["context"] = self.context
        return result


# =============================================================================
# INPUT EXCEPTIONS
# =============================================================================

class ArgumentError(HealthItemError, ValueError):
    """Raised when a caller passes None, empty or blank input to a setter or parse call."""

    detail = "Invalid argument"

    def __init__(self, field: Optional[str] = None, reason: Optional[str] = None, **kwargs: Any):
        if field and reason:
            detail = f"'{field}' {reason}"
        elif field:
            detail = f"Invalid value for '{field}'"
        else:
            detail = reason
        super().__init__(detail=detail, field=field, **kwargs)


class ValidationError(HealthItemError, ValueError):
    """Raised when a value violates a domain constraint (negative measurement, bad date part)."""

    detail = "Value violates a domain constraint"

    def __init__(self, field: Optional[str] = None, reason: Optional[str] = None, **kwargs: Any):
        if field and reason:
            detail = f"'{field}' {reason}"
        else:
            detail = reason
        super().__init__(detail=detail, field=field, **kwargs)


# =============================================================================
# XML EXCEPTIONS
# =============================================================================

class StructureError(HealthItemError):
    """Raised when an expected XML element is missing or its text is malformed."""

    detail = "Unexpected XML structure"

    def __init__(self, element: Optional[str] = None, reason: Optional[str] = None, **kwargs: Any):
        if element and reason:
            detail = f"Element '{element}' {reason}"
        elif element:
            detail = f"Expected element '{element}' not found"
        else:
            detail = reason
        super().__init__(detail=detail, element=element, **kwargs)


class SerializationError(HealthItemError):
    """Raised when a mandatory field is unset at write time."""

    detail = "Mandatory field not set"

    def __init__(self, field: Optional[str] = None, **kwargs: Any):
        detail = f"Mandatory field '{field}' is not set" if field else None
        super().__init__(detail=detail, field=field, **kwargs)
