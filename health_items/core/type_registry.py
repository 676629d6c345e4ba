"""
Thing type registry - maps service type ids to item classes.

This module provides:
- YAML-based catalog loading and validation (thing_types.yaml)
- ThingTypeDefinition dataclass for catalog entries
- The register_thing_type class decorator used by every item type
- Lookup by type id or canonical name
- deserialize_thing: build the right item class from a <thing> element

The catalog is the only place type ids, root elements and display names are
declared. Item classes repeat TYPE_ID and ROOT_ELEMENT as class attributes;
registration fails when they disagree with the catalog.

Usage:
    from health_items.core.type_registry import deserialize_thing, get_type_definition

    item = deserialize_thing(thing_xml)      # Height, BloodPressure, ... or GenericThing
    definition = get_type_definition("height")
"""

import logging
import uuid
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple, Type, Union

import yaml

from health_items.core import xml_mapping as xm
from health_items.core.config import settings

logger = logging.getLogger(__name__)

TypeKey = Union[uuid.UUID, str]


# =============================================================================
# THING TYPE DEFINITION DATACLASS
# =============================================================================

@dataclass(frozen=True)
class ThingTypeDefinition:
    """
    Immutable catalog entry for an item type.

    Attributes:
        name: Canonical lookup name (e.g. "blood-pressure")
        type_id: Fixed UUID used in <type-id>
        root_element: Element inside <data-xml> holding the type-specific data
        display_name: Human-readable name, written as the type-id name attribute
        description: Short summary of the type
    """
    name: str
    type_id: uuid.UUID
    root_element: str
    display_name: str
    description: str


# =============================================================================
# YAML CATALOG LOADING & VALIDATION
# =============================================================================

def _get_catalog_path() -> Path:
    """Get the path to the thing type catalog."""
    return settings.resolved_catalog_path


def _load_yaml_catalog() -> Dict[str, Any]:
    """
    Load and parse the YAML catalog file.

    Raises:
        FileNotFoundError: If the catalog is not found
        yaml.YAMLError: If YAML parsing fails
    """
    catalog_path = _get_catalog_path()
    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error("Thing type catalog not found", extra={"path": str(catalog_path)})
        raise
    except yaml.YAMLError as e:
        logger.error("Failed to parse thing type catalog", extra={"path": str(catalog_path), "error": str(e)})
        raise


def _validate_entry(raw: Dict[str, Any], index: int) -> None:
    """
    Validate a single catalog entry.

    Raises:
        ValueError: If required fields are missing or the type id is not a UUID
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Thing type at index {index} must be a mapping")

    for field in ("name", "type_id", "root_element"):
        if not raw.get(field):
            raise ValueError(f"Thing type at index {index} is missing required field: '{field}'")

    try:
        uuid.UUID(str(raw["type_id"]))
    except ValueError as e:
        raise ValueError(f"Thing type '{raw['name']}' has invalid type_id: '{raw['type_id']}'") from e


def _parse_entry(raw: Dict[str, Any]) -> ThingTypeDefinition:
    """Parse a single catalog entry into a ThingTypeDefinition."""
    name = str(raw["name"]).strip().lower()
    return ThingTypeDefinition(
        name=name,
        type_id=uuid.UUID(str(raw["type_id"])),
        root_element=str(raw["root_element"]),
        display_name=raw.get("display_name") or name.replace("-", " ").title(),
        description=raw.get("description", ""),
    )


@lru_cache(maxsize=1)
def _load_catalog() -> Tuple[ThingTypeDefinition, ...]:
    """
    Load and cache every catalog entry.

    This function is cached so the YAML file is read once per process.

    Raises:
        ValueError: If an entry is invalid or an id/name is declared twice
    """
    catalog = _load_yaml_catalog()

    definitions: List[ThingTypeDefinition] = []
    seen_ids: Dict[uuid.UUID, str] = {}
    seen_names: set = set()

    for i, raw in enumerate(catalog.get("thing_types") or []):
        _validate_entry(raw, i)
        definition = _parse_entry(raw)

        if definition.type_id in seen_ids:
            raise ValueError(
                f"Thing type '{definition.name}' reuses type_id {definition.type_id} "
                f"of '{seen_ids[definition.type_id]}'"
            )
        if definition.name in seen_names:
            raise ValueError(f"Thing type name declared twice: '{definition.name}'")

        seen_ids[definition.type_id] = definition.name
        seen_names.add(definition.name)
        definitions.append(definition)

    logger.debug("Loaded thing type catalog", extra={"count": len(definitions)})
    return tuple(definitions)


@lru_cache(maxsize=1)
def _build_lookup() -> Tuple[Dict[uuid.UUID, ThingTypeDefinition], Dict[str, ThingTypeDefinition]]:
    """Index the catalog by type id and by canonical name."""
    definitions = _load_catalog()
    by_id = {definition.type_id: definition for definition in definitions}
    by_name = {definition.name: definition for definition in definitions}
    return by_id, by_name


# =============================================================================
# CLASS REGISTRATION
# =============================================================================

# Populated at import time by @register_thing_type; read-only afterwards
_REGISTERED: Dict[uuid.UUID, type] = {}


def _to_uuid(type_id: TypeKey) -> uuid.UUID:
    if isinstance(type_id, uuid.UUID):
        return type_id
    try:
        return uuid.UUID(str(type_id))
    except ValueError as e:
        raise KeyError(f"Not a thing type id: '{type_id}'") from e


def register_thing_type(cls: Type) -> Type:
    """
    Class decorator binding an item class to its catalog entry.

    Sets cls.TYPE_NAME to the catalog display name.

    Raises:
        ValueError: If the class's TYPE_ID is missing from the catalog, its
            ROOT_ELEMENT disagrees with the catalog, or the id is already
            registered to another class.
    """
    type_id = getattr(cls, "TYPE_ID", None)
    if type_id is None:
        raise ValueError(f"{cls.__name__} has no TYPE_ID")

    by_id, _ = _build_lookup()
    definition = by_id.get(type_id)
    if definition is None:
        raise ValueError(f"{cls.__name__} TYPE_ID {type_id} is not in the thing type catalog")
    if cls.ROOT_ELEMENT != definition.root_element:
        raise ValueError(
            f"{cls.__name__} ROOT_ELEMENT '{cls.ROOT_ELEMENT}' does not match "
            f"catalog root element '{definition.root_element}'"
        )

    existing = _REGISTERED.get(type_id)
    if existing is not None and existing is not cls:
        raise ValueError(f"Type id {type_id} is already registered to {existing.__name__}")

    cls.TYPE_NAME = definition.display_name
    _REGISTERED[type_id] = cls
    logger.debug("Registered thing type", extra={"type_name": definition.name, "cls": cls.__name__})
    return cls


# =============================================================================
# PUBLIC API - LOOKUP
# =============================================================================

def get_thing_type(type_id: TypeKey) -> type:
    """
    Get the item class registered for a type id.

    Args:
        type_id: UUID or its string form

    Returns:
        The registered item class

    Raises:
        KeyError: If no class is registered for the id
    """
    key = _to_uuid(type_id)
    _ensure_items_loaded()
    if key not in _REGISTERED:
        raise KeyError(f"No item class registered for type id {key}")
    return _REGISTERED[key]


def get_type_definition(name_or_id: TypeKey) -> ThingTypeDefinition:
    """
    Get a catalog entry by canonical name or type id.

    Names are matched case-insensitively.

    Raises:
        KeyError: If the name or id is not in the catalog
    """
    by_id, by_name = _build_lookup()
    if isinstance(name_or_id, uuid.UUID):
        definition = by_id.get(name_or_id)
    else:
        text = str(name_or_id).strip()
        definition = by_name.get(text.lower())
        if definition is None:
            try:
                definition = by_id.get(uuid.UUID(text))
            except ValueError:
                definition = None

    if definition is None:
        raise KeyError(f"Unknown thing type: '{name_or_id}'")
    return definition


def list_thing_types() -> Dict[str, ThingTypeDefinition]:
    """
    List every catalog entry.

    Returns:
        Dictionary mapping canonical names to their definitions
    """
    return {definition.name: definition for definition in _load_catalog()}


def registered_types() -> Dict[uuid.UUID, type]:
    """Snapshot of the registered item classes keyed by type id."""
    _ensure_items_loaded()
    return dict(_REGISTERED)


# =============================================================================
# PUBLIC API - DESERIALIZATION
# =============================================================================

def _ensure_items_loaded() -> None:
    # Item modules register themselves on import
    import health_items.items  # noqa: F401


def deserialize_thing(node_or_text: Any) -> Any:
    """
    Build the item a <thing> element describes.

    Reads <type-id> and dispatches to the registered class. Unknown type ids
    produce a GenericThing that keeps the raw <data-xml> payload, so the item
    still round-trips.

    Args:
        node_or_text: A <thing> element, a node containing one, or XML text

    Returns:
        A populated item instance

    Raises:
        ArgumentError: If node_or_text is None
        StructureError: If the envelope is malformed
    """
    from health_items.items.generic import GenericThing

    node = xm.coerce_node(node_or_text)
    thing = xm.require_element(node, "thing")
    type_id = xm.read_mandatory_uuid(thing, "type-id")

    _ensure_items_loaded()
    cls = _REGISTERED.get(type_id)
    if cls is None:
        logger.warning(
            "Unknown thing type, keeping raw data-xml",
            extra={"type_id": str(type_id), "type_name": thing.find("type-id").get("name")},
        )
        cls = GenericThing

    return cls.from_thing(thing)
