"""
Contact item type - a standalone set of contact details.

    <contact>
        <contact>
            <address>...</address>
            <phone>...</phone>
            <email>...</email>
        </contact>
    </contact>
"""
import uuid
from typing import Any, Optional

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.core.type_registry import register_thing_type
from health_items.items.base import HealthRecordItem
from health_items.values.contact import ContactInfo


@register_thing_type
class Contact(HealthRecordItem):
    """Contact details stored as their own item. ``contact_information`` is mandatory."""

    TYPE_ID = uuid.UUID("162dd12d-9859-4a66-b75f-96760d67072b")
    ROOT_ELEMENT = "contact"

    def __init__(self, contact_information: Optional[ContactInfo] = None):
        super().__init__()
        self._contact_information: Optional[ContactInfo] = None
        if contact_information is not None:
            self.contact_information = contact_information

    def _parse(self, root: Any) -> None:
        self._contact_information = xm.read_mandatory_typed(root, "contact", ContactInfo)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._contact_information, "contact_information")
        xm.write_element(element, "contact", self._contact_information)

    @property
    def contact_information(self) -> Optional[ContactInfo]:
        return self._contact_information

    @contact_information.setter
    def contact_information(self, value: ContactInfo) -> None:
        self._contact_information = validators.check_instance(
            value, ContactInfo, "contact_information", optional=False
        )

    def __str__(self) -> str:
        return str(self._contact_information) if self._contact_information is not None else ""
