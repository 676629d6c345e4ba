"""
Setter-time validation helpers.

Property setters call these before assigning, so a rejected value leaves the
previous one in place. Naming follows what is checked:

- check_not_blank: value must be a non-empty, non-whitespace string
- check_not_whitespace: None and "" pass, whitespace-only strings fail
- check_xml_text: string must only hold characters XML 1.0 can carry
- check_not_none: value must be present
- check_non_negative / check_in_range: numeric domain checks

Every string check also applies check_xml_text, and every numeric check
rejects NaN and infinities, so an accepted value can always be written.

Input problems raise ArgumentError; domain violations raise ValidationError.
"""
import math
import re
from typing import Any, Optional, Union

from health_items.core.exceptions import ArgumentError, ValidationError

Number = Union[int, float]

# Complement of the XML 1.0 Char production
_ILLEGAL_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


# =============================================================================
# STRING CHECKS
# =============================================================================

def check_xml_text(value: Optional[str], field: str) -> Optional[str]:
    """Reject non-strings and strings with characters XML 1.0 cannot represent."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ArgumentError(field=field, reason="must be a string")
    match = _ILLEGAL_XML_CHARS.search(value)
    if match:
        raise ArgumentError(
            field=field,
            reason=f"contains a character not allowed in XML: U+{ord(match.group()):04X}",
        )
    return value


def check_not_blank(value: Optional[str], field: str) -> str:
    """Reject None, empty and whitespace-only strings."""
    if value is None:
        raise ArgumentError(field=field, reason="must not be None")
    check_xml_text(value, field)
    if not value.strip():
        raise ArgumentError(field=field, reason="must not be empty or whitespace")
    return value


def check_not_whitespace(value: Optional[str], field: str) -> Optional[str]:
    """Reject whitespace-only strings; None and empty strings are allowed."""
    if value is None:
        return None
    check_xml_text(value, field)
    if value and not value.strip():
        raise ArgumentError(field=field, reason="must not be whitespace only")
    return value


def check_optional_not_blank(value: Optional[str], field: str) -> Optional[str]:
    """None is allowed; anything else must be a non-blank string."""
    if value is None:
        return None
    return check_not_blank(value, field)


# =============================================================================
# PRESENCE AND TYPE CHECKS
# =============================================================================

def check_not_none(value: Any, field: str) -> Any:
    """Reject None."""
    if value is None:
        raise ArgumentError(field=field, reason="must not be None")
    return value


def check_instance(value: Any, expected: type, field: str, optional: bool = True) -> Any:
    """Reject values of the wrong type (None passes when optional)."""
    if value is None:
        if optional:
            return None
        raise ArgumentError(field=field, reason="must not be None")
    if not isinstance(value, expected):
        raise ArgumentError(
            field=field,
            reason=f"must be a {expected.__name__}, got {type(value).__name__}",
        )
    return value


# =============================================================================
# NUMERIC CHECKS
# =============================================================================

def check_number(value: Any, field: str, integer: bool = False) -> Number:
    """Reject anything that is not a finite int or float (only int when ``integer``)."""
    # bool is an int subclass but never a meaningful measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ArgumentError(field=field, reason="must be a number")
    if integer and not isinstance(value, int):
        raise ArgumentError(field=field, reason="must be an integer")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(field=field, reason="must be a finite number", value=value)
    return value


def check_non_negative(
    value: Optional[Number],
    field: str,
    optional: bool = False,
    integer: bool = False,
) -> Optional[Number]:
    """Reject negative numbers."""
    if value is None:
        if optional:
            return None
        raise ArgumentError(field=field, reason="must not be None")
    check_number(value, field, integer)
    if value < 0:
        raise ValidationError(field=field, reason="must not be negative", value=value)
    return value


def check_in_range(
    value: Optional[Number],
    low: Number,
    high: Number,
    field: str,
    optional: bool = False,
    integer: bool = False,
) -> Optional[Number]:
    """Reject numbers outside [low, high]."""
    if value is None:
        if optional:
            return None
        raise ArgumentError(field=field, reason="must not be None")
    check_number(value, field, integer)
    if not (low <= value <= high):
        raise ValidationError(
            field=field,
            reason=f"must be between {low} and {high}",
            value=value,
        )
    return value
