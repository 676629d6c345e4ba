"""
Measurement value types - a number in base units plus an optional DisplayValue.

Wire shape (Length shown):
    <value>
        <m>1.85</m>
        <display units="ft">6.07</display>
    </value>

Every concrete measurement is non-negative; setting a negative value raises
ValidationError and keeps the previous value.
"""
from typing import Any, Optional

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.values.base import ItemData
from health_items.values.display_value import DisplayValue


class Measurement(ItemData):
    """
    Base class for single-number measurements.

    Subclasses set VALUE_ELEMENT (the child element holding the value in base
    units) and UNITS (the base unit abbreviation used by __str__).
    """

    VALUE_ELEMENT: str = ""
    UNITS: str = ""

    def __init__(self, value: Optional[float] = None, display_value: Optional[DisplayValue] = None):
        self._value: Optional[float] = None
        self._display_value: Optional[DisplayValue] = None

        if value is not None:
            self.value = value
        self.display_value = display_value

    def _parse(self, node: Any) -> None:
        self._value = xm.read_mandatory_float(node, self.VALUE_ELEMENT)
        self._display_value = xm.read_optional_typed(node, "display", DisplayValue)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._value, "value")
        xm.write_element(element, self.VALUE_ELEMENT, self._value)
        xm.write_optional(element, "display", self._display_value)

    def check_value(self, value: float) -> float:
        """Domain check applied by the value setter."""
        return float(validators.check_non_negative(value, "value"))

    @property
    def value(self) -> Optional[float]:
        """The measurement in base units."""
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        self._value = self.check_value(value)

    @property
    def display_value(self) -> Optional[DisplayValue]:
        return self._display_value

    @display_value.setter
    def display_value(self, value: Optional[DisplayValue]) -> None:
        self._display_value = validators.check_instance(value, DisplayValue, "display_value")

    def __str__(self) -> str:
        if self._display_value is not None:
            return str(self._display_value)
        if self._value is None:
            return ""
        return f"{self._value:g} {self.UNITS}"


class Length(Measurement):
    """A length in metres."""

    VALUE_ELEMENT = "m"
    UNITS = "m"


class Weight(Measurement):
    """A weight in kilograms."""

    VALUE_ELEMENT = "kg"
    UNITS = "kg"


class Pressure(Measurement):
    """A pressure in kilopascals."""

    VALUE_ELEMENT = "kPa"
    UNITS = "kPa"


class BloodGlucoseMeasurement(Measurement):
    """A blood glucose concentration in millimoles per litre."""

    VALUE_ELEMENT = "mmolPerL"
    UNITS = "mmol/L"
