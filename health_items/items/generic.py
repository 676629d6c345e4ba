"""
GenericThing - fallback for type ids without a registered item class.

The type-specific content of <data-xml> is kept as serialized XML so an
unrecognised item can be read, inspected and written back unchanged.
"""
import logging
import uuid
from typing import Any, List, Optional

from lxml import etree

from health_items.core import xml_mapping as xm
from health_items.core.exceptions import SerializationError
from health_items.items.base import HealthRecordItem

logger = logging.getLogger(__name__)


class GenericThing(HealthRecordItem):
    """An item of any type, holding its <data-xml> payload verbatim."""

    def __init__(
        self,
        type_id: Optional[uuid.UUID] = None,
        type_name: Optional[str] = None,
        payload: Optional[List[str]] = None,
    ):
        super().__init__()
        self._type_id: Optional[uuid.UUID] = type_id
        self._type_name: Optional[str] = type_name
        self._payload: List[str] = list(payload or [])

    @property
    def type_id(self) -> Optional[uuid.UUID]:
        return self._type_id

    @property
    def type_name(self) -> Optional[str]:
        return self._type_name

    @property
    def payload(self) -> List[str]:
        """Serialized type-specific elements in document order."""
        return self._payload

    @property
    def root_element(self) -> Optional[str]:
        elements = self.elements()
        return elements[0].tag if elements else None

    def elements(self) -> List[Any]:
        """Freshly parsed copies of the payload elements."""
        return [xm.parse_fragment(fragment) for fragment in self._payload]

    def _accept_type_id(self, type_id: uuid.UUID, type_name: Optional[str]) -> None:
        self._type_id = type_id
        self._type_name = type_name

    def _parse_data_xml(self, data_xml: Any) -> None:
        if data_xml.tag == "data-xml":
            children = [child for child in data_xml if isinstance(child.tag, str) and child.tag != "common"]
        else:
            children = [data_xml]
        self._payload = [etree.tostring(child, encoding="unicode", with_tail=False) for child in children]
        logger.debug("Kept raw payload", extra={"type_id": str(self._type_id), "elements": len(children)})

    def _write_data_xml(self, data_xml: Any) -> None:
        for element in self.elements():
            data_xml.append(element)

    def write_xml(self, parent: Optional[Any] = None) -> Any:
        """
        Write the first payload element (the type-specific root).

        Raises:
            SerializationError: If there is no payload.
        """
        if not self._payload:
            raise SerializationError(field="payload")
        return xm.attach(self.elements()[0], parent)

    def __str__(self) -> str:
        return self._type_name or (str(self._type_id) if self._type_id else "")
