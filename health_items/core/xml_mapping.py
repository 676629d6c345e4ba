"""
Optional-field XML mapping helpers shared by every value and item type.

This module provides:
- Readers for optional/mandatory child elements and attributes
- Typed readers (bool, int, float, UUID, nested value types)
- Writers that emit an element only when the value is present
- require_non_null / require_element checks used at the parse and write seams
- A hardened fragment parser and string serialization

Absence is distinct from an empty value: a missing child reads as None, while
<description/> reads as "". Writers emit every value that is not None.

Usage:
    from health_items.core import xml_mapping as xm

    description = xm.read_optional(node, "description")
    is_primary = xm.read_optional_bool(node, "is-primary")

    xm.write_optional(element, "description", self.description)
    xm.require_non_null(self.address, "address")
"""
import logging
import math
import re
import uuid
from typing import Any, Callable, List, Optional, Type, TypeVar, Union

from lxml import etree

from health_items.core.config import settings
from health_items.core.exceptions import ArgumentError, SerializationError, StructureError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE_VALUES = {"true", "1"}
_FALSE_VALUES = {"false", "0"}

# xs:int and the finite part of xs:double
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DOUBLE_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


# =============================================================================
# NODE CHECKS
# =============================================================================

def check_node(node: Any, field: str = "node") -> Any:
    """Reject a missing node handed to a parse call."""
    if node is None:
        raise ArgumentError(field=field, reason="must not be None")
    return node


def require_element(node: Any, name: str) -> Any:
    """
    Locate an entity root element.

    Returns the node itself when its tag matches, otherwise its first child
    named ``name``.

    Raises:
        StructureError: If no such element exists.
    """
    check_node(node)
    if node.tag == name:
        return node
    child = node.find(name)
    if child is None:
        raise StructureError(element=name)
    return child


def require_non_null(value: Any, field_label: str) -> Any:
    """
    Enforce a mandatory field just before serialization.

    Raises:
        SerializationError: Naming ``field_label`` when value is None.
    """
    if value is None:
        raise SerializationError(field=field_label)
    return value


# =============================================================================
# READERS
# =============================================================================

def read_optional(node: Any, name: str) -> Optional[str]:
    """Text of the first child element ``name``, "" when empty, None when absent."""
    child = node.find(name)
    if child is None:
        return None
    return child.text or ""


def read_optional_attribute(node: Any, name: str) -> Optional[str]:
    """Attribute value, or None when the attribute is absent."""
    return node.get(name)


def read_optional_attribute_as(node: Any, name: str, converter: Callable[[str], T]) -> Optional[T]:
    """Typed attribute value; malformed text raises StructureError."""
    return _convert(read_optional_attribute(node, name), name, converter)


def read_mandatory(node: Any, name: str) -> str:
    """Text of child element ``name``; raises StructureError when absent."""
    value = read_optional(node, name)
    if value is None:
        raise StructureError(element=name)
    return value


def read_all(node: Any, name: str) -> List[str]:
    """Texts of every child element ``name`` in document order."""
    return [child.text or "" for child in node.findall(name)]


def _convert(text: Optional[str], name: str, converter: Callable[[str], T]) -> Optional[T]:
    if text is None:
        return None
    try:
        return converter(text.strip())
    except (TypeError, ValueError) as e:
        raise StructureError(element=name, reason=f"has malformed value '{text}'") from e


def parse_bool(text: str) -> bool:
    """Parse an xs:boolean lexical value."""
    value = text.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"not an xs:boolean: '{text}'")


def parse_int(text: str) -> int:
    """Parse an xs:int lexical value (no underscores, no non-ASCII digits)."""
    value = text.strip()
    if not _INTEGER_PATTERN.fullmatch(value):
        raise ValueError(f"not an xs:int: '{text}'")
    return int(value)


def parse_float(text: str) -> float:
    """
    Parse a finite xs:double lexical value.

    INF and NaN are refused: no value type accepts a non-finite number.
    """
    value = text.strip()
    if not _DOUBLE_PATTERN.fullmatch(value):
        raise ValueError(f"not a finite xs:double: '{text}'")
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"out of range for xs:double: '{text}'")
    return result


def read_optional_bool(node: Any, name: str) -> Optional[bool]:
    return _convert(read_optional(node, name), name, parse_bool)


def read_optional_int(node: Any, name: str) -> Optional[int]:
    return _convert(read_optional(node, name), name, parse_int)


def read_optional_float(node: Any, name: str) -> Optional[float]:
    return _convert(read_optional(node, name), name, parse_float)


def read_optional_uuid(node: Any, name: str) -> Optional[uuid.UUID]:
    return _convert(read_optional(node, name), name, uuid.UUID)


def read_mandatory_int(node: Any, name: str) -> int:
    return _convert(read_mandatory(node, name), name, parse_int)


def read_mandatory_float(node: Any, name: str) -> float:
    return _convert(read_mandatory(node, name), name, parse_float)


def read_mandatory_uuid(node: Any, name: str) -> uuid.UUID:
    return _convert(read_mandatory(node, name), name, uuid.UUID)


def read_text_as(node: Any, converter: Callable[[str], T]) -> T:
    """Convert the text of ``node`` itself (e.g. a DisplayValue element)."""
    result = _convert(node.text or "", node.tag, converter)
    return result


def read_optional_typed(node: Any, name: str, cls: Type[T]) -> Optional[T]:
    """
    Parse child element ``name`` with ``cls.from_xml`` when present.

    Returns:
        A new ``cls`` instance, or None when the child is absent.
    """
    child = node.find(name)
    if child is None:
        return None
    return cls.from_xml(child)


def read_mandatory_typed(node: Any, name: str, cls: Type[T]) -> T:
    """As read_optional_typed, but the child must exist."""
    result = read_optional_typed(node, name, cls)
    if result is None:
        raise StructureError(element=name)
    return result


def read_all_typed(node: Any, name: str, cls: Type[T]) -> List[T]:
    """Parse every child element ``name`` in document order."""
    return [cls.from_xml(child) for child in node.findall(name)]


# =============================================================================
# WRITERS
# =============================================================================

def format_value(value: Any) -> str:
    """Render a scalar in XML Schema lexical form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "INF" if value > 0 else "-INF"
        return repr(value)
    return str(value)


def write_element(parent: Any, name: str, value: Any) -> Any:
    """
    Unconditionally write ``value`` as child element ``name``.

    Value types delegate to their own ``write_xml``; scalars become element text.
    """
    if hasattr(value, "write_xml"):
        return value.write_xml(name, parent)
    child = etree.SubElement(parent, name)
    child.text = format_value(value)
    return child


def write_optional(parent: Any, name: str, value: Any) -> Optional[Any]:
    """Write child element ``name`` only when ``value`` is not None."""
    if value is None:
        return None
    return write_element(parent, name, value)


def write_all(parent: Any, name: str, values: List[Any]) -> None:
    """Write one child element per value, in order."""
    for value in values:
        if value is not None:
            write_element(parent, name, value)


def write_optional_attribute(element: Any, name: str, value: Any) -> None:
    """Set attribute ``name`` only when ``value`` is not None."""
    if value is not None:
        element.set(name, format_value(value))


def new_element(name: str) -> Any:
    """Create a detached element, validating the element name."""
    if not isinstance(name, str) or not name.strip():
        raise ArgumentError(field="element_name", reason="must not be empty or whitespace")
    try:
        return etree.Element(name)
    except ValueError as e:
        raise ArgumentError(field="element_name", reason=f"is not a valid XML name: '{name}'") from e


def attach(element: Any, parent: Optional[Any]) -> Any:
    """Append a fully built element to ``parent`` (if any) and return it."""
    if parent is not None:
        parent.append(element)
    return element


# =============================================================================
# FRAGMENT PARSING / SERIALIZATION
# =============================================================================

def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        dtd_validation=False,
        huge_tree=False,
        remove_comments=True,
        remove_pis=True,
    )


def parse_fragment(text: Union[str, bytes]) -> Any:
    """
    Parse an XML fragment into an element.

    Entities are not resolved, no network access happens and documents with a
    DOCTYPE are rejected.

    Raises:
        ArgumentError: If text is None or larger than settings.max_fragment_bytes.
        StructureError: If text is empty or not well-formed XML.
    """
    if text is None:
        raise ArgumentError(field="text", reason="must not be None")
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    if len(data) > settings.max_fragment_bytes:
        raise ArgumentError(
            field="text",
            reason=f"exceeds {settings.max_fragment_bytes} bytes",
        )
    if not data.strip():
        raise StructureError(reason="XML fragment is empty")

    try:
        root = etree.fromstring(data, parser=_make_parser())
    except etree.XMLSyntaxError as e:
        logger.debug("Rejected malformed XML fragment", extra={"error": str(e)})
        raise StructureError(reason=f"Malformed XML: {e}") from e

    if root.getroottree().docinfo.doctype:
        raise StructureError(reason="DOCTYPE declarations are not allowed")
    return root


def coerce_node(node_or_text: Any) -> Any:
    """Accept either an element or raw XML text."""
    check_node(node_or_text)
    if isinstance(node_or_text, (str, bytes)):
        return parse_fragment(node_or_text)
    return node_or_text


def to_string(element: Any) -> str:
    """Serialize an element to a str, honoring settings.xml_pretty_print."""
    return etree.tostring(
        element,
        encoding="unicode",
        pretty_print=settings.xml_pretty_print,
    )


def to_bytes(element: Any) -> bytes:
    """Serialize an element with an XML declaration in settings.xml_encoding."""
    return etree.tostring(
        element,
        encoding=settings.xml_encoding,
        xml_declaration=True,
        pretty_print=settings.xml_pretty_print,
    )
