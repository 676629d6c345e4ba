"""
Base class for value types that map to one XML element shape.

Subclasses implement two hooks:
- _parse(node): read every field from ``node`` into self
- _write(element): check mandatory fields, then append children in declared order

The public contract built on top of them:
- from_xml(node_or_text): build a new instance
- parse_xml(node): populate self atomically (a failed parse leaves self untouched)
- write_xml(element_name, parent=None): build the element, attach it to parent
- to_xml(element_name): the written element as a string
"""
import logging
from typing import Any, Optional

from health_items.core import xml_mapping as xm

logger = logging.getLogger(__name__)


class ItemData:
    """A value object that knows how to read and write its own XML."""

    def _parse(self, node: Any) -> None:
        raise NotImplementedError

    def _write(self, element: Any) -> None:
        raise NotImplementedError

    @classmethod
    def from_xml(cls, node_or_text: Any) -> "ItemData":
        """Create a new instance from an element or an XML string."""
        node = xm.coerce_node(node_or_text)
        instance = cls()
        instance._parse(node)
        return instance

    def parse_xml(self, node: Any) -> None:
        """
        Populate this instance from ``node``.

        Raises:
            ArgumentError: If node is None.
            StructureError: If a mandatory child element is missing or malformed.
        """
        xm.check_node(node)
        fresh = type(self)()
        fresh._parse(node)
        self.__dict__.update(fresh.__dict__)
        logger.debug("Parsed %s", type(self).__name__)

    def write_xml(self, element_name: str, parent: Optional[Any] = None) -> Any:
        """
        Write this value as element ``element_name``.

        The element is only attached to ``parent`` once every field has been
        written, so a failure never leaves a partial element behind.

        Raises:
            ArgumentError: If element_name is empty.
            SerializationError: If a mandatory field is not set.
        """
        element = xm.new_element(element_name)
        self._write(element)
        return xm.attach(element, parent)

    def to_xml(self, element_name: str) -> str:
        return xm.to_string(self.write_xml(element_name))

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{key.lstrip('_')}={value!r}"
            for key, value in vars(self).items()
            if value is not None and value != []
        )
        return f"{type(self).__name__}({fields})"
