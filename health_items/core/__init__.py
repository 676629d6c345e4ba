"""
Core module for configuration, logging, errors and XML mapping.

This module provides:
- Settings: Library configuration via pydantic-settings
- Exceptions: The four failure kinds raised by every item type
- setup_logging: Opt-in structured logging for applications
- Type registry: Thing type catalog and deserialize_thing
"""
from health_items.core.config import settings, Settings

# Exception classes for consistent error handling
from health_items.core.exceptions import (
    HealthItemError,
    ArgumentError,
    ValidationError,
    StructureError,
    SerializationError,
)

from health_items.core.logging_config import setup_logging, JSONFormatter

# Thing type registry exports
from health_items.core.type_registry import (
    ThingTypeDefinition,
    register_thing_type,
    get_thing_type,
    get_type_definition,
    list_thing_types,
    registered_types,
    deserialize_thing,
)

__all__ = [
    # Settings
    "settings",
    "Settings",
    # Exceptions
    "HealthItemError",
    "ArgumentError",
    "ValidationError",
    "StructureError",
    "SerializationError",
    # Logging
    "setup_logging",
    "JSONFormatter",
    # Type registry
    "ThingTypeDefinition",
    "register_thing_type",
    "get_thing_type",
    "get_type_definition",
    "list_thing_types",
    "registered_types",
    "deserialize_thing",
]
