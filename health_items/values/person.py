"""
People and organizations.

Wire shapes:
    <name>
        <full>Dr. Jane Q. Smith</full>
        <title><text>Dr.</text></title>
        <first>Jane</first>
        <middle>Q.</middle>
        <last>Smith</last>
        <suffix>...</suffix>
    </name>

    <person>
        <name>...</name>
        <organization>General Hospital</organization>
        <professional-training>MD</professional-training>
        <id>12345</id>
        <contact>...</contact>
        <type><text>Provider</text></type>
    </person>
"""
from typing import Any, Optional

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.values.base import ItemData
from health_items.values.coded import CodableValue
from health_items.values.contact import ContactInfo


class Name(ItemData):
    """
    A person's name.

    ``full`` is mandatory when written; the structured parts are optional.
    """

    def __init__(
        self,
        full: Optional[str] = None,
        first: Optional[str] = None,
        middle: Optional[str] = None,
        last: Optional[str] = None,
        title: Optional[CodableValue] = None,
        suffix: Optional[CodableValue] = None,
    ):
        self._full: Optional[str] = None
        self._title: Optional[CodableValue] = None
        self._first: Optional[str] = None
        self._middle: Optional[str] = None
        self._last: Optional[str] = None
        self._suffix: Optional[CodableValue] = None

        if full is not None:
            self.full = full
        self.title = title
        self.first = first
        self.middle = middle
        self.last = last
        self.suffix = suffix

    def _parse(self, node: Any) -> None:
        self._full = xm.read_mandatory(node, "full")
        self._title = xm.read_optional_typed(node, "title", CodableValue)
        self._first = xm.read_optional(node, "first")
        self._middle = xm.read_optional(node, "middle")
        self._last = xm.read_optional(node, "last")
        self._suffix = xm.read_optional_typed(node, "suffix", CodableValue)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._full, "full")
        xm.write_element(element, "full", self._full)
        xm.write_optional(element, "title", self._title)
        xm.write_optional(element, "first", self._first)
        xm.write_optional(element, "middle", self._middle)
        xm.write_optional(element, "last", self._last)
        xm.write_optional(element, "suffix", self._suffix)

    @property
    def full(self) -> Optional[str]:
        return self._full

    @full.setter
    def full(self, value: str) -> None:
        self._full = validators.check_not_blank(value, "full")

    @property
    def title(self) -> Optional[CodableValue]:
        return self._title

    @title.setter
    def title(self, value: Optional[CodableValue]) -> None:
        self._title = validators.check_instance(value, CodableValue, "title")

    @property
    def first(self) -> Optional[str]:
        return self._first

    @first.setter
    def first(self, value: Optional[str]) -> None:
        self._first = validators.check_not_whitespace(value, "first")

    @property
    def middle(self) -> Optional[str]:
        return self._middle

    @middle.setter
    def middle(self, value: Optional[str]) -> None:
        self._middle = validators.check_not_whitespace(value, "middle")

    @property
    def last(self) -> Optional[str]:
        return self._last

    @last.setter
    def last(self, value: Optional[str]) -> None:
        self._last = validators.check_not_whitespace(value, "last")

    @property
    def suffix(self) -> Optional[CodableValue]:
        return self._suffix

    @suffix.setter
    def suffix(self, value: Optional[CodableValue]) -> None:
        self._suffix = validators.check_instance(value, CodableValue, "suffix")

    def __str__(self) -> str:
        return self._full or ""


class Organization(ItemData):
    """An organization such as a clinic or insurer. ``name`` is mandatory."""

    def __init__(
        self,
        name: Optional[str] = None,
        contact: Optional[ContactInfo] = None,
        organization_type: Optional[CodableValue] = None,
        website: Optional[str] = None,
    ):
        self._name: Optional[str] = None
        self._contact: Optional[ContactInfo] = None
        self._type: Optional[CodableValue] = None
        self._website: Optional[str] = None

        if name is not None:
            self.name = name
        self.contact = contact
        self.organization_type = organization_type
        self.website = website

    def _parse(self, node: Any) -> None:
        self._name = xm.read_mandatory(node, "name")
        self._contact = xm.read_optional_typed(node, "contact", ContactInfo)
        self._type = xm.read_optional_typed(node, "type", CodableValue)
        self._website = xm.read_optional(node, "website")

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._name, "name")
        xm.write_element(element, "name", self._name)
        xm.write_optional(element, "contact", self._contact)
        xm.write_optional(element, "type", self._type)
        xm.write_optional(element, "website", self._website)

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = validators.check_not_blank(value, "name")

    @property
    def contact(self) -> Optional[ContactInfo]:
        return self._contact

    @contact.setter
    def contact(self, value: Optional[ContactInfo]) -> None:
        self._contact = validators.check_instance(value, ContactInfo, "contact")

    @property
    def organization_type(self) -> Optional[CodableValue]:
        """Kind of organization, written as <type>."""
        return self._type

    @organization_type.setter
    def organization_type(self, value: Optional[CodableValue]) -> None:
        self._type = validators.check_instance(value, CodableValue, "organization_type")

    @property
    def website(self) -> Optional[str]:
        return self._website

    @website.setter
    def website(self, value: Optional[str]) -> None:
        self._website = validators.check_optional_not_blank(value, "website")

    def __str__(self) -> str:
        return self._name or ""


class Person(ItemData):
    """
    A person, typically a provider or an emergency contact.

    Attributes:
        name: The person's Name (mandatory)
        organization: Name of the organization the person belongs to
        professional_training: Free-text training or credentials
        person_id: Identifier assigned by the organization, written as <id>
        contact: ContactInfo for the person
        person_type: Role of the person, written as <type>
    """

    def __init__(
        self,
        name: Optional[Name] = None,
        organization: Optional[str] = None,
        professional_training: Optional[str] = None,
        person_id: Optional[str] = None,
        contact: Optional[ContactInfo] = None,
        person_type: Optional[CodableValue] = None,
    ):
        self._name: Optional[Name] = None
        self._organization: Optional[str] = None
        self._professional_training: Optional[str] = None
        self._id: Optional[str] = None
        self._contact: Optional[ContactInfo] = None
        self._type: Optional[CodableValue] = None

        if name is not None:
            self.name = name
        self.organization = organization
        self.professional_training = professional_training
        self.person_id = person_id
        self.contact = contact
        self.person_type = person_type

    def _parse(self, node: Any) -> None:
        self._name = xm.read_mandatory_typed(node, "name", Name)
        self._organization = xm.read_optional(node, "organization")
        self._professional_training = xm.read_optional(node, "professional-training")
        self._id = xm.read_optional(node, "id")
        self._contact = xm.read_optional_typed(node, "contact", ContactInfo)
        self._type = xm.read_optional_typed(node, "type", CodableValue)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._name, "name")
        xm.write_element(element, "name", self._name)
        xm.write_optional(element, "organization", self._organization)
        xm.write_optional(element, "professional-training", self._professional_training)
        xm.write_optional(element, "id", self._id)
        xm.write_optional(element, "contact", self._contact)
        xm.write_optional(element, "type", self._type)

    @property
    def name(self) -> Optional[Name]:
        return self._name

    @name.setter
    def name(self, value: Name) -> None:
        self._name = validators.check_instance(value, Name, "name", optional=False)

    @property
    def organization(self) -> Optional[str]:
        return self._organization

    @organization.setter
    def organization(self, value: Optional[str]) -> None:
        self._organization = validators.check_not_whitespace(value, "organization")

    @property
    def professional_training(self) -> Optional[str]:
        return self._professional_training

    @professional_training.setter
    def professional_training(self, value: Optional[str]) -> None:
        self._professional_training = validators.check_not_whitespace(value, "professional_training")

    @property
    def person_id(self) -> Optional[str]:
        return self._id

    @person_id.setter
    def person_id(self, value: Optional[str]) -> None:
        self._id = validators.check_not_whitespace(value, "person_id")

    @property
    def contact(self) -> Optional[ContactInfo]:
        return self._contact

    @contact.setter
    def contact(self, value: Optional[ContactInfo]) -> None:
        self._contact = validators.check_instance(value, ContactInfo, "contact")

    @property
    def person_type(self) -> Optional[CodableValue]:
        return self._type

    @person_type.setter
    def person_type(self, value: Optional[CodableValue]) -> None:
        self._type = validators.check_instance(value, CodableValue, "person_type")

    def __str__(self) -> str:
        result = str(self._name) if self._name is not None else ""
        if self._organization:
            result = f"{result} ({self._organization})" if result else self._organization
        return result
