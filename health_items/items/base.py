"""
Base class for top-level item types and the <thing> envelope around them.

An item is written two ways:
- write_xml(): only the type-specific root element, e.g. <height>...</height>
- write_thing(): the full envelope the service exchanges

    <thing>
        <thing-id version-stamp="...">...</thing-id>
        <type-id name="Height Measurement">40750a6a-...</type-id>
        <data-xml>
            <height>...</height>
            <common><note>...</note></common>
        </data-xml>
    </thing>

Usage:
    height = Height.from_thing(xml_text)
    height.common.note = "after breakfast"
    xml = height.to_thing_xml()
"""
import logging
import uuid
from typing import Any, ClassVar, Optional, Union

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.core.exceptions import ArgumentError, StructureError
from health_items.values.base import ItemData

logger = logging.getLogger(__name__)

# Envelope state kept across parse_xml, which only replaces type-specific fields
_ENVELOPE_FIELDS = ("_key", "_common", "_type_id", "_type_name")


# =============================================================================
# ENVELOPE VALUES
# =============================================================================

class ItemKey(ItemData):
    """
    Service-assigned identity of a stored item.

    Wire shape:
        <thing-id version-stamp="9d7b...">1c2f...</thing-id>
    """

    def __init__(
        self,
        item_id: Optional[Union[uuid.UUID, str]] = None,
        version_stamp: Optional[Union[uuid.UUID, str]] = None,
    ):
        self._id: Optional[uuid.UUID] = None
        self._version_stamp: Optional[uuid.UUID] = None

        if item_id is not None:
            self.item_id = item_id
        self.version_stamp = version_stamp

    @staticmethod
    def _to_uuid(value: Union[uuid.UUID, str], field: str) -> uuid.UUID:
        if isinstance(value, uuid.UUID):
            return value
        validators.check_not_blank(value, field)
        try:
            return uuid.UUID(value)
        except ValueError as e:
            raise ArgumentError(field=field, reason=f"is not a valid UUID: '{value}'") from e

    def _parse(self, node: Any) -> None:
        self._id = xm.read_text_as(node, uuid.UUID)
        self._version_stamp = xm.read_optional_attribute_as(node, "version-stamp", uuid.UUID)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._id, "item_id")
        xm.write_optional_attribute(element, "version-stamp", self._version_stamp)
        element.text = xm.format_value(self._id)

    @property
    def item_id(self) -> Optional[uuid.UUID]:
        return self._id

    @item_id.setter
    def item_id(self, value: Union[uuid.UUID, str]) -> None:
        validators.check_not_none(value, "item_id")
        self._id = self._to_uuid(value, "item_id")

    @property
    def version_stamp(self) -> Optional[uuid.UUID]:
        return self._version_stamp

    @version_stamp.setter
    def version_stamp(self, value: Optional[Union[uuid.UUID, str]]) -> None:
        self._version_stamp = None if value is None else self._to_uuid(value, "version_stamp")

    def __str__(self) -> str:
        return "" if self._id is None else str(self._id)


class CommonItemData(ItemData):
    """
    Data every item type may carry: source, note, tags and a client-assigned id.

    Wire shape:
        <common>
            <source>Glucometer X</source>
            <note>after breakfast</note>
            <tags>fasting,home</tags>
            <client-thing-id>abc-123</client-thing-id>
        </common>
    """

    def __init__(
        self,
        source: Optional[str] = None,
        note: Optional[str] = None,
        tags: Optional[str] = None,
        client_id: Optional[str] = None,
    ):
        self._source: Optional[str] = None
        self._note: Optional[str] = None
        self._tags: Optional[str] = None
        self._client_id: Optional[str] = None

        self.source = source
        self.note = note
        self.tags = tags
        self.client_id = client_id

    def _parse(self, node: Any) -> None:
        self._source = xm.read_optional(node, "source")
        self._note = xm.read_optional(node, "note")
        self._tags = xm.read_optional(node, "tags")
        self._client_id = xm.read_optional(node, "client-thing-id")

    def _write(self, element: Any) -> None:
        xm.write_optional(element, "source", self._source)
        xm.write_optional(element, "note", self._note)
        xm.write_optional(element, "tags", self._tags)
        xm.write_optional(element, "client-thing-id", self._client_id)

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in (self._source, self._note, self._tags, self._client_id))

    @property
    def source(self) -> Optional[str]:
        return self._source

    @source.setter
    def source(self, value: Optional[str]) -> None:
        self._source = validators.check_not_whitespace(value, "source")

    @property
    def note(self) -> Optional[str]:
        return self._note

    @note.setter
    def note(self, value: Optional[str]) -> None:
        self._note = validators.check_not_whitespace(value, "note")

    @property
    def tags(self) -> Optional[str]:
        """Comma separated tags."""
        return self._tags

    @tags.setter
    def tags(self, value: Optional[str]) -> None:
        self._tags = validators.check_not_whitespace(value, "tags")

    @property
    def client_id(self) -> Optional[str]:
        return self._client_id

    @client_id.setter
    def client_id(self, value: Optional[str]) -> None:
        self._client_id = validators.check_not_whitespace(value, "client_id")

    def __str__(self) -> str:
        return self._note or ""


# =============================================================================
# ITEM BASE CLASS
# =============================================================================

class HealthRecordItem:
    """
    A top-level item type with a fixed type id and root element.

    Subclasses set TYPE_ID and ROOT_ELEMENT, implement _parse/_write for the
    content of the root element, and are registered with
    @register_thing_type, which also fills in TYPE_NAME from the catalog.
    """

    TYPE_ID: ClassVar[Optional[uuid.UUID]] = None
    ROOT_ELEMENT: ClassVar[str] = ""
    TYPE_NAME: ClassVar[Optional[str]] = None

    def __init__(self):
        self._key: Optional[ItemKey] = None
        self._common = CommonItemData()

    # -------------------------------------------------------------------------
    # Subclass hooks
    # -------------------------------------------------------------------------

    def _parse(self, root: Any) -> None:
        raise NotImplementedError

    def _write(self, element: Any) -> None:
        raise NotImplementedError

    def _parse_data_xml(self, data_xml: Any) -> None:
        self._parse(xm.require_element(data_xml, self.ROOT_ELEMENT))

    def _write_data_xml(self, data_xml: Any) -> None:
        self.write_xml(data_xml)

    def _accept_type_id(self, type_id: uuid.UUID, type_name: Optional[str]) -> None:
        if type_id != self.type_id:
            raise StructureError(
                element="type-id",
                reason=f"is {type_id}, expected {self.type_id} for {type(self).__name__}",
            )

    # -------------------------------------------------------------------------
    # Envelope properties
    # -------------------------------------------------------------------------

    @property
    def type_id(self) -> Optional[uuid.UUID]:
        return self.TYPE_ID

    @property
    def type_name(self) -> Optional[str]:
        return self.TYPE_NAME

    @property
    def key(self) -> Optional[ItemKey]:
        """Identity assigned by the service; None for items not yet stored."""
        return self._key

    @key.setter
    def key(self, value: Optional[ItemKey]) -> None:
        self._key = validators.check_instance(value, ItemKey, "key")

    @property
    def common(self) -> CommonItemData:
        return self._common

    @common.setter
    def common(self, value: CommonItemData) -> None:
        self._common = validators.check_instance(value, CommonItemData, "common", optional=False)

    # -------------------------------------------------------------------------
    # Type-specific XML
    # -------------------------------------------------------------------------

    @classmethod
    def from_xml(cls, node_or_text: Any) -> "HealthRecordItem":
        """Create an item from its root element (or a node containing it)."""
        instance = cls()
        instance.parse_xml(xm.coerce_node(node_or_text))
        return instance

    def parse_xml(self, node: Any) -> None:
        """
        Populate the type-specific fields from ``node``.

        ``node`` is either the item's root element or a node (usually
        <data-xml>) that contains it. The key and common data are kept.

        Raises:
            ArgumentError: If node is None.
            StructureError: If the root element or a mandatory child is missing.
        """
        xm.check_node(node)
        fresh = type(self)()
        fresh._parse_data_xml(node)
        self.__dict__.update(
            {name: value for name, value in vars(fresh).items() if name not in _ENVELOPE_FIELDS}
        )
        logger.debug("Parsed item", extra={"item_type": type(self).__name__})

    def write_xml(self, parent: Optional[Any] = None) -> Any:
        """
        Write the type-specific root element.

        Raises:
            SerializationError: If a mandatory field is not set.
        """
        element = xm.new_element(self.ROOT_ELEMENT)
        self._write(element)
        return xm.attach(element, parent)

    def to_xml(self) -> str:
        return xm.to_string(self.write_xml())

    # -------------------------------------------------------------------------
    # <thing> envelope
    # -------------------------------------------------------------------------

    @classmethod
    def from_thing(cls, node_or_text: Any) -> "HealthRecordItem":
        """Create an item from a <thing> element or XML string."""
        instance = cls()
        instance.parse_thing(xm.coerce_node(node_or_text))
        return instance

    def parse_thing(self, node: Any) -> None:
        """
        Populate the whole item, key and common data included, from <thing>.

        Raises:
            ArgumentError: If node is None.
            StructureError: If the envelope is incomplete or the type id does
                not belong to this item type.
        """
        thing = xm.require_element(node, "thing")
        fresh = type(self)()

        fresh._key = xm.read_optional_typed(thing, "thing-id", ItemKey)
        type_id = xm.read_mandatory_uuid(thing, "type-id")
        fresh._accept_type_id(type_id, thing.find("type-id").get("name"))

        data_xml = thing.find("data-xml")
        if data_xml is None:
            raise StructureError(element="data-xml")
        fresh._parse_data_xml(data_xml)
        fresh._common = xm.read_optional_typed(data_xml, "common", CommonItemData) or CommonItemData()

        self.__dict__.update(fresh.__dict__)
        logger.debug(
            "Parsed thing",
            extra={"item_type": type(self).__name__, "type_id": str(type_id)},
        )

    def write_thing(self, parent: Optional[Any] = None) -> Any:
        """
        Write the full <thing> envelope.

        Raises:
            SerializationError: If a mandatory field is not set.
        """
        xm.require_non_null(self.type_id, "type_id")
        thing = xm.new_element("thing")
        xm.write_optional(thing, "thing-id", self._key)
        type_element = xm.write_element(thing, "type-id", self.type_id)
        xm.write_optional_attribute(type_element, "name", self.type_name)

        data_xml = xm.new_element("data-xml")
        self._write_data_xml(data_xml)
        if not self._common.is_empty:
            xm.write_element(data_xml, "common", self._common)
        thing.append(data_xml)
        return xm.attach(thing, parent)

    def to_thing_xml(self) -> str:
        return xm.to_string(self.write_thing())

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{key.lstrip('_')}={value!r}"
            for key, value in vars(self).items()
            if key not in _ENVELOPE_FIELDS and value is not None
        )
        return f"{type(self).__name__}({fields})"

    def __str__(self) -> str:
        return self.type_name or type(self).__name__
