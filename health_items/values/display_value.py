"""
DisplayValue - a numeric value as the user entered or sees it.

Wire shape:
    <display units="ft" units-code="ft" text="6 ft">6</display>
"""
from typing import Any, Optional

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.values.base import ItemData


class DisplayValue(ItemData):
    """
    A value with the units it was entered in.

    Attributes:
        value: The number shown to the user
        units: Display units (mandatory when written)
        units_code: Optional code for the units from a units vocabulary
        text: Optional free-form rendering that overrides value + units
    """

    def __init__(
        self,
        value: float = 0.0,
        units: Optional[str] = None,
        units_code: Optional[str] = None,
        text: Optional[str] = None,
    ):
        self._value = 0.0
        self._units: Optional[str] = None
        self._units_code: Optional[str] = None
        self._text: Optional[str] = None

        self.value = value
        if units is not None:
            self.units = units
        self.units_code = units_code
        self.text = text

    def _parse(self, node: Any) -> None:
        self._units = xm.read_optional_attribute(node, "units")
        self._units_code = xm.read_optional_attribute(node, "units-code") or None
        self._text = xm.read_optional_attribute(node, "text") or None
        self._value = xm.read_text_as(node, xm.parse_float)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._units, "units")
        element.set("units", self._units)
        if self._units_code:
            element.set("units-code", self._units_code)
        if self._text:
            element.set("text", self._text)
        element.text = xm.format_value(self._value)

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        validators.check_not_none(value, "value")
        validators.check_number(value, "value")
        self._value = float(value)

    @property
    def units(self) -> Optional[str]:
        return self._units

    @units.setter
    def units(self, value: str) -> None:
        validators.check_not_none(value, "units")
        self._units = validators.check_xml_text(value, "units")

    @property
    def units_code(self) -> Optional[str]:
        return self._units_code

    @units_code.setter
    def units_code(self, value: Optional[str]) -> None:
        self._units_code = validators.check_xml_text(value, "units_code")

    @property
    def text(self) -> Optional[str]:
        return self._text

    @text.setter
    def text(self, value: Optional[str]) -> None:
        self._text = validators.check_optional_not_blank(value, "text")

    def __str__(self) -> str:
        if self._text is not None:
            return self._text
        result = f"{self._value:g}"
        if self._units:
            result = f"{result} {self._units}"
        return result
