"""
Procedure item type.

    <procedure>
        <when><descriptive>Spring 2015</descriptive></when>
        <name><text>Appendectomy</text></name>
        <anatomic-location><text>Abdomen</text></anatomic-location>
        <primary-provider>...</primary-provider>
        <secondary-provider>...</secondary-provider>
    </procedure>
"""
import uuid
from typing import Any, Optional

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.core.type_registry import register_thing_type
from health_items.items.base import HealthRecordItem
from health_items.values.coded import CodableValue
from health_items.values.dates import ApproximateDateTime
from health_items.values.person import Person


@register_thing_type
class Procedure(HealthRecordItem):
    """
    A medical procedure.

    Attributes:
        name: What was done (mandatory)
        when: When it was done, possibly approximate
        anatomic_location: Where on the body
        primary_provider: Person who performed the procedure
        secondary_provider: Person who assisted
    """

    TYPE_ID = uuid.UUID("df4db479-a1ba-42a2-8714-2b083b88150f")
    ROOT_ELEMENT = "procedure"

    def __init__(
        self,
        name: Optional[CodableValue] = None,
        when: Optional[ApproximateDateTime] = None,
        anatomic_location: Optional[CodableValue] = None,
        primary_provider: Optional[Person] = None,
        secondary_provider: Optional[Person] = None,
    ):
        super().__init__()
        self._when: Optional[ApproximateDateTime] = None
        self._name: Optional[CodableValue] = None
        self._anatomic_location: Optional[CodableValue] = None
        self._primary_provider: Optional[Person] = None
        self._secondary_provider: Optional[Person] = None

        if name is not None:
            self.name = name
        self.when = when
        self.anatomic_location = anatomic_location
        self.primary_provider = primary_provider
        self.secondary_provider = secondary_provider

    def _parse(self, root: Any) -> None:
        self._when = xm.read_optional_typed(root, "when", ApproximateDateTime)
        self._name = xm.read_mandatory_typed(root, "name", CodableValue)
        self._anatomic_location = xm.read_optional_typed(root, "anatomic-location", CodableValue)
        self._primary_provider = xm.read_optional_typed(root, "primary-provider", Person)
        self._secondary_provider = xm.read_optional_typed(root, "secondary-provider", Person)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._name, "name")
        xm.write_optional(element, "when", self._when)
        xm.write_element(element, "name", self._name)
        xm.write_optional(element, "anatomic-location", self._anatomic_location)
        xm.write_optional(element, "primary-provider", self._primary_provider)
        xm.write_optional(element, "secondary-provider", self._secondary_provider)

    @property
    def when(self) -> Optional[ApproximateDateTime]:
        return self._when

    @when.setter
    def when(self, value: Optional[ApproximateDateTime]) -> None:
        self._when = validators.check_instance(value, ApproximateDateTime, "when")

    @property
    def name(self) -> Optional[CodableValue]:
        return self._name

    @name.setter
    def name(self, value: CodableValue) -> None:
        self._name = validators.check_instance(value, CodableValue, "name", optional=False)

    @property
    def anatomic_location(self) -> Optional[CodableValue]:
        return self._anatomic_location

    @anatomic_location.setter
    def anatomic_location(self, value: Optional[CodableValue]) -> None:
        self._anatomic_location = validators.check_instance(value, CodableValue, "anatomic_location")

    @property
    def primary_provider(self) -> Optional[Person]:
        return self._primary_provider

    @primary_provider.setter
    def primary_provider(self, value: Optional[Person]) -> None:
        self._primary_provider = validators.check_instance(value, Person, "primary_provider")

    @property
    def secondary_provider(self) -> Optional[Person]:
        return self._secondary_provider

    @secondary_provider.setter
    def secondary_provider(self, value: Optional[Person]) -> None:
        self._secondary_provider = validators.check_instance(value, Person, "secondary_provider")

    def __str__(self) -> str:
        return str(self._name) if self._name is not None else ""
