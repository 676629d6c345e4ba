"""
Contact value types: postal addresses, phone numbers, e-mail addresses and the
ContactInfo aggregate holding any number of each.

Wire shapes:
    <email>
        <description>work</description>
        <is-primary>true</is-primary>
        <address>someone@example.com</address>
    </email>

    <contact>
        <address>...</address>*
        <phone>...</phone>*
        <email>...</email>*
    </contact>
"""
from typing import Any, Iterable, List, Optional

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.core.exceptions import SerializationError
from health_items.values.base import ItemData


# =============================================================================
# SHARED FIELDS
# =============================================================================

class _ContactEntry(ItemData):
    """Description and is-primary flag shared by Address, Phone and Email."""

    def __init__(self, description: Optional[str] = None, is_primary: Optional[bool] = None):
        self._description: Optional[str] = None
        self._is_primary: Optional[bool] = None
        self.description = description
        self.is_primary = is_primary

    def _parse_entry(self, node: Any) -> None:
        self._description = xm.read_optional(node, "description")
        self._is_primary = xm.read_optional_bool(node, "is-primary")

    def _write_entry(self, element: Any) -> None:
        xm.write_optional(element, "description", self._description)
        xm.write_optional(element, "is-primary", self._is_primary)

    @property
    def description(self) -> Optional[str]:
        """Free text such as "work" or "home"."""
        return self._description

    @description.setter
    def description(self, value: Optional[str]) -> None:
        self._description = validators.check_not_whitespace(value, "description")

    @property
    def is_primary(self) -> Optional[bool]:
        return self._is_primary

    @is_primary.setter
    def is_primary(self, value: Optional[bool]) -> None:
        self._is_primary = validators.check_instance(value, bool, "is_primary")


# =============================================================================
# EMAIL
# =============================================================================

class Email(_ContactEntry):
    """An e-mail address. ``address`` is mandatory when written."""

    def __init__(
        self,
        address: Optional[str] = None,
        description: Optional[str] = None,
        is_primary: Optional[bool] = None,
    ):
        super().__init__(description=description, is_primary=is_primary)
        self._address: Optional[str] = None
        if address is not None:
            self.address = address

    def _parse(self, node: Any) -> None:
        self._parse_entry(node)
        self._address = xm.read_mandatory(node, "address")

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._address, "address")
        self._write_entry(element)
        xm.write_element(element, "address", self._address)

    @property
    def address(self) -> Optional[str]:
        return self._address

    @address.setter
    def address(self, value: str) -> None:
        self._address = validators.check_not_blank(value, "address")

    def __str__(self) -> str:
        return self._address or ""


# =============================================================================
# PHONE
# =============================================================================

class Phone(_ContactEntry):
    """A phone number. ``number`` is mandatory when written."""

    def __init__(
        self,
        number: Optional[str] = None,
        description: Optional[str] = None,
        is_primary: Optional[bool] = None,
    ):
        super().__init__(description=description, is_primary=is_primary)
        self._number: Optional[str] = None
        if number is not None:
            self.number = number

    def _parse(self, node: Any) -> None:
        self._parse_entry(node)
        self._number = xm.read_mandatory(node, "number")

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._number, "number")
        self._write_entry(element)
        xm.write_element(element, "number", self._number)

    @property
    def number(self) -> Optional[str]:
        return self._number

    @number.setter
    def number(self, value: str) -> None:
        self._number = validators.check_not_blank(value, "number")

    def __str__(self) -> str:
        return self._number or ""


# =============================================================================
# ADDRESS
# =============================================================================

class Address(_ContactEntry):
    """
    A postal address.

    Mandatory when written: at least one street line, city, postal code and
    country.
    """

    def __init__(
        self,
        city: Optional[str] = None,
        country: Optional[str] = None,
        postal_code: Optional[str] = None,
        street: Optional[Iterable[str]] = None,
        state: Optional[str] = None,
        county: Optional[str] = None,
        description: Optional[str] = None,
        is_primary: Optional[bool] = None,
    ):
        super().__init__(description=description, is_primary=is_primary)
        self._street: List[str] = []
        self._city: Optional[str] = None
        self._state: Optional[str] = None
        self._postal_code: Optional[str] = None
        self._country: Optional[str] = None
        self._county: Optional[str] = None

        if city is not None:
            self.city = city
        if country is not None:
            self.country = country
        if postal_code is not None:
            self.postal_code = postal_code
        for line in street or []:
            self.add_street(line)
        self.state = state
        self.county = county

    def _parse(self, node: Any) -> None:
        self._parse_entry(node)
        self._street = xm.read_all(node, "street")
        self._city = xm.read_mandatory(node, "city")
        self._state = xm.read_optional(node, "state")
        self._postal_code = xm.read_mandatory(node, "postcode")
        self._country = xm.read_mandatory(node, "country")
        self._county = xm.read_optional(node, "county")

    def _write(self, element: Any) -> None:
        if not self._street:
            raise SerializationError(field="street")
        xm.require_non_null(self._city, "city")
        xm.require_non_null(self._postal_code, "postal_code")
        xm.require_non_null(self._country, "country")

        self._write_entry(element)
        xm.write_all(element, "street", self._street)
        xm.write_element(element, "city", self._city)
        xm.write_optional(element, "state", self._state)
        xm.write_element(element, "postcode", self._postal_code)
        xm.write_element(element, "country", self._country)
        xm.write_optional(element, "county", self._county)

    @property
    def street(self) -> List[str]:
        """Street lines in order; mutate with add_street or list methods."""
        return self._street

    def add_street(self, line: str) -> None:
        self._street.append(validators.check_not_blank(line, "street"))

    @property
    def city(self) -> Optional[str]:
        return self._city

    @city.setter
    def city(self, value: str) -> None:
        self._city = validators.check_not_blank(value, "city")

    @property
    def state(self) -> Optional[str]:
        return self._state

    @state.setter
    def state(self, value: Optional[str]) -> None:
        self._state = validators.check_not_whitespace(value, "state")

    @property
    def postal_code(self) -> Optional[str]:
        return self._postal_code

    @postal_code.setter
    def postal_code(self, value: str) -> None:
        self._postal_code = validators.check_not_blank(value, "postal_code")

    @property
    def country(self) -> Optional[str]:
        return self._country

    @country.setter
    def country(self, value: str) -> None:
        self._country = validators.check_not_blank(value, "country")

    @property
    def county(self) -> Optional[str]:
        return self._county

    @county.setter
    def county(self, value: Optional[str]) -> None:
        self._county = validators.check_optional_not_blank(value, "county")

    def __str__(self) -> str:
        parts: List[str] = list(self._street)
        for part in (self._city, self._county, self._state, self._postal_code, self._country):
            if part:
                parts.append(part)
        result = ", ".join(parts)
        if self._description:
            result = f"{result} ({self._description})" if result else self._description
        return result


# =============================================================================
# CONTACT INFO
# =============================================================================

def _primary(entries: List[_ContactEntry]) -> Optional[Any]:
    for entry in entries:
        if entry.is_primary:
            return entry
    return None


class ContactInfo(ItemData):
    """Any number of addresses, phone numbers and e-mail addresses."""

    def __init__(
        self,
        addresses: Optional[Iterable[Address]] = None,
        phones: Optional[Iterable[Phone]] = None,
        emails: Optional[Iterable[Email]] = None,
    ):
        self._addresses: List[Address] = []
        self._phones: List[Phone] = []
        self._emails: List[Email] = []

        for address in addresses or []:
            self.add_address(address)
        for phone in phones or []:
            self.add_phone(phone)
        for email in emails or []:
            self.add_email(email)

    def _parse(self, node: Any) -> None:
        self._addresses = xm.read_all_typed(node, "address", Address)
        self._phones = xm.read_all_typed(node, "phone", Phone)
        self._emails = xm.read_all_typed(node, "email", Email)

    def _write(self, element: Any) -> None:
        xm.write_all(element, "address", self._addresses)
        xm.write_all(element, "phone", self._phones)
        xm.write_all(element, "email", self._emails)

    @property
    def addresses(self) -> List[Address]:
        return self._addresses

    @property
    def phones(self) -> List[Phone]:
        return self._phones

    @property
    def emails(self) -> List[Email]:
        return self._emails

    def add_address(self, address: Address) -> None:
        self._addresses.append(validators.check_instance(address, Address, "address", optional=False))

    def add_phone(self, phone: Phone) -> None:
        self._phones.append(validators.check_instance(phone, Phone, "phone", optional=False))

    def add_email(self, email: Email) -> None:
        self._emails.append(validators.check_instance(email, Email, "email", optional=False))

    @property
    def primary_address(self) -> Optional[Address]:
        return _primary(self._addresses)

    @property
    def primary_phone(self) -> Optional[Phone]:
        return _primary(self._phones)

    @property
    def primary_email(self) -> Optional[Email]:
        return _primary(self._emails)

    def __str__(self) -> str:
        if self.primary_phone is not None:
            return f"{self.primary_phone} (primary)"
        if self._phones:
            return str(self._phones[0])
        if self._addresses:
            address = self._addresses[0]
            return ", ".join(part for part in (address.city, address.county, address.state) if part)
        if self.primary_email is not None:
            return f"{self.primary_email} (primary)"
        if self._emails:
            return str(self._emails[0])
        return ""
