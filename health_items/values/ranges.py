"""
Ranges, free-form measurements, goals and heart rate zones.

Wire shapes:
    <range><minimum-range>60</minimum-range><maximum-range>100</maximum-range></range>

    <minimum>
        <display>70 kg</display>
        <structured><value>70</value><units><text>kg</text></units></structured>
    </minimum>

    <goal-info>
        <target-date>...</target-date>
        <completion-date>...</completion-date>
        <status><text>in progress</text></status>
    </goal-info>

    <zone name="fat burn">
        <lower-bound><absolute-heartrate>110</absolute-heartrate></lower-bound>
        <upper-bound><percent-max-heartrate>0.7</percent-max-heartrate></upper-bound>
    </zone>
"""
from typing import Any, Iterable, List, Optional, Union

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.core.exceptions import SerializationError, ValidationError
from health_items.values.base import ItemData
from health_items.values.coded import CodableValue
from health_items.values.dates import ApproximateDateTime

Number = Union[int, float]


# =============================================================================
# NUMERIC RANGES
# =============================================================================

class _Range(ItemData):
    """
    Inclusive numeric range. Both bounds are mandatory when written and the
    minimum may never exceed the maximum.
    """

    INTEGER: bool = False

    def __init__(self, minimum: Optional[Number] = None, maximum: Optional[Number] = None):
        self._minimum: Optional[Number] = None
        self._maximum: Optional[Number] = None

        if minimum is not None:
            self.minimum = minimum
        if maximum is not None:
            self.maximum = maximum

    def _convert(self, value: Number) -> Number:
        return int(value) if self.INTEGER else float(value)

    def _parse(self, node: Any) -> None:
        reader = xm.read_mandatory_int if self.INTEGER else xm.read_mandatory_float
        self._minimum = reader(node, "minimum-range")
        self._maximum = reader(node, "maximum-range")

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._minimum, "minimum")
        xm.require_non_null(self._maximum, "maximum")
        xm.write_element(element, "minimum-range", self._minimum)
        xm.write_element(element, "maximum-range", self._maximum)

    @property
    def minimum(self) -> Optional[Number]:
        return self._minimum

    @minimum.setter
    def minimum(self, value: Number) -> None:
        validators.check_not_none(value, "minimum")
        validators.check_number(value, "minimum", integer=self.INTEGER)
        if self._maximum is not None and value > self._maximum:
            raise ValidationError(field="minimum", reason="must not exceed maximum", value=value)
        self._minimum = self._convert(value)

    @property
    def maximum(self) -> Optional[Number]:
        return self._maximum

    @maximum.setter
    def maximum(self, value: Number) -> None:
        validators.check_not_none(value, "maximum")
        validators.check_number(value, "maximum", integer=self.INTEGER)
        if self._minimum is not None and value < self._minimum:
            raise ValidationError(field="maximum", reason="must not be less than minimum", value=value)
        self._maximum = self._convert(value)

    def __contains__(self, value: Any) -> bool:
        if self._minimum is None or self._maximum is None:
            return False
        return self._minimum <= value <= self._maximum

    def __str__(self) -> str:
        if self._minimum is None and self._maximum is None:
            return ""
        low = "" if self._minimum is None else f"{self._minimum:g}"
        high = "" if self._maximum is None else f"{self._maximum:g}"
        return f"{low} - {high}"


class DoubleRange(_Range):
    """A range of floating point values."""

    INTEGER = False


class IntRange(_Range):
    """A range of integer values."""

    INTEGER = True


# =============================================================================
# FREE-FORM MEASUREMENTS
# =============================================================================

class StructuredMeasurement(ItemData):
    """A number with coded units; both are mandatory when written."""

    def __init__(self, value: Optional[float] = None, units: Optional[CodableValue] = None):
        self._value: Optional[float] = None
        self._units: Optional[CodableValue] = None

        if value is not None:
            self.value = value
        if units is not None:
            self.units = units

    def _parse(self, node: Any) -> None:
        self._value = xm.read_mandatory_float(node, "value")
        self._units = xm.read_mandatory_typed(node, "units", CodableValue)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._value, "value")
        xm.require_non_null(self._units, "units")
        xm.write_element(element, "value", self._value)
        xm.write_element(element, "units", self._units)

    @property
    def value(self) -> Optional[float]:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        validators.check_not_none(value, "value")
        self._value = float(validators.check_number(value, "value"))

    @property
    def units(self) -> Optional[CodableValue]:
        return self._units

    @units.setter
    def units(self, value: CodableValue) -> None:
        self._units = validators.check_instance(value, CodableValue, "units", optional=False)

    def __str__(self) -> str:
        if self._value is None:
            return ""
        if self._units is None:
            return f"{self._value:g}"
        return f"{self._value:g} {self._units}"


class GeneralMeasurement(ItemData):
    """
    A measurement as displayed (mandatory) plus any number of structured
    renditions of it, e.g. "5 ft 10 in" alongside 1.78 m.
    """

    def __init__(
        self,
        display: Optional[str] = None,
        structured: Optional[Iterable[StructuredMeasurement]] = None,
    ):
        self._display: Optional[str] = None
        self._structured: List[StructuredMeasurement] = []

        if display is not None:
            self.display = display
        for measurement in structured or []:
            self.add_structured(measurement)

    def _parse(self, node: Any) -> None:
        self._display = xm.read_mandatory(node, "display")
        self._structured = xm.read_all_typed(node, "structured", StructuredMeasurement)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._display, "display")
        xm.write_element(element, "display", self._display)
        xm.write_all(element, "structured", self._structured)

    @property
    def display(self) -> Optional[str]:
        return self._display

    @display.setter
    def display(self, value: str) -> None:
        self._display = validators.check_not_blank(value, "display")

    @property
    def structured(self) -> List[StructuredMeasurement]:
        return self._structured

    def add_structured(self, measurement: StructuredMeasurement) -> None:
        self._structured.append(
            validators.check_instance(measurement, StructuredMeasurement, "structured", optional=False)
        )

    def __str__(self) -> str:
        return self._display or ""


# =============================================================================
# GOALS
# =============================================================================

class GoalRange(ItemData):
    """A named target band with optional minimum and maximum."""

    def __init__(
        self,
        name: Optional[CodableValue] = None,
        description: Optional[str] = None,
        minimum: Optional[GeneralMeasurement] = None,
        maximum: Optional[GeneralMeasurement] = None,
    ):
        self._name: Optional[CodableValue] = None
        self._description: Optional[str] = None
        self._minimum: Optional[GeneralMeasurement] = None
        self._maximum: Optional[GeneralMeasurement] = None

        if name is not None:
            self.name = name
        self.description = description
        self.minimum = minimum
        self.maximum = maximum

    def _parse(self, node: Any) -> None:
        self._name = xm.read_mandatory_typed(node, "name", CodableValue)
        self._description = xm.read_optional(node, "description")
        self._minimum = xm.read_optional_typed(node, "minimum", GeneralMeasurement)
        self._maximum = xm.read_optional_typed(node, "maximum", GeneralMeasurement)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._name, "name")
        xm.write_element(element, "name", self._name)
        xm.write_optional(element, "description", self._description)
        xm.write_optional(element, "minimum", self._minimum)
        xm.write_optional(element, "maximum", self._maximum)

    @property
    def name(self) -> Optional[CodableValue]:
        return self._name

    @name.setter
    def name(self, value: CodableValue) -> None:
        self._name = validators.check_instance(value, CodableValue, "name", optional=False)

    @property
    def description(self) -> Optional[str]:
        return self._description

    @description.setter
    def description(self, value: Optional[str]) -> None:
        self._description = validators.check_not_whitespace(value, "description")

    @property
    def minimum(self) -> Optional[GeneralMeasurement]:
        return self._minimum

    @minimum.setter
    def minimum(self, value: Optional[GeneralMeasurement]) -> None:
        self._minimum = validators.check_instance(value, GeneralMeasurement, "minimum")

    @property
    def maximum(self) -> Optional[GeneralMeasurement]:
        return self._maximum

    @maximum.setter
    def maximum(self, value: Optional[GeneralMeasurement]) -> None:
        self._maximum = validators.check_instance(value, GeneralMeasurement, "maximum")

    def __str__(self) -> str:
        return str(self._name) if self._name is not None else ""


class Goal(ItemData):
    """Target and completion dates plus status of a goal. Every field is optional."""

    def __init__(
        self,
        target_date: Optional[ApproximateDateTime] = None,
        completion_date: Optional[ApproximateDateTime] = None,
        status: Optional[CodableValue] = None,
    ):
        self._target_date: Optional[ApproximateDateTime] = None
        self._completion_date: Optional[ApproximateDateTime] = None
        self._status: Optional[CodableValue] = None

        self.target_date = target_date
        self.completion_date = completion_date
        self.status = status

    def _parse(self, node: Any) -> None:
        self._target_date = xm.read_optional_typed(node, "target-date", ApproximateDateTime)
        self._completion_date = xm.read_optional_typed(node, "completion-date", ApproximateDateTime)
        self._status = xm.read_optional_typed(node, "status", CodableValue)

    def _write(self, element: Any) -> None:
        xm.write_optional(element, "target-date", self._target_date)
        xm.write_optional(element, "completion-date", self._completion_date)
        xm.write_optional(element, "status", self._status)

    @property
    def target_date(self) -> Optional[ApproximateDateTime]:
        return self._target_date

    @target_date.setter
    def target_date(self, value: Optional[ApproximateDateTime]) -> None:
        self._target_date = validators.check_instance(value, ApproximateDateTime, "target_date")

    @property
    def completion_date(self) -> Optional[ApproximateDateTime]:
        return self._completion_date

    @completion_date.setter
    def completion_date(self, value: Optional[ApproximateDateTime]) -> None:
        self._completion_date = validators.check_instance(value, ApproximateDateTime, "completion_date")

    @property
    def status(self) -> Optional[CodableValue]:
        return self._status

    @status.setter
    def status(self, value: Optional[CodableValue]) -> None:
        self._status = validators.check_instance(value, CodableValue, "status")

    def __str__(self) -> str:
        parts = []
        if self._target_date is not None:
            parts.append(f"target {self._target_date}")
        if self._status is not None:
            parts.append(str(self._status))
        return ", ".join(parts)


# =============================================================================
# HEART RATE ZONE
# =============================================================================

class HeartRateZone(ItemData):
    """
    A heart rate band for exercise.

    Each bound is either absolute (beats per minute) or relative (fraction of
    the maximum heart rate). Setting one form clears the other. Both bounds
    are mandatory when written.
    """

    def __init__(self, name: Optional[str] = None):
        self._name: Optional[str] = None
        self._lower_absolute: Optional[int] = None
        self._lower_relative: Optional[float] = None
        self._upper_absolute: Optional[int] = None
        self._upper_relative: Optional[float] = None

        self.name = name

    @staticmethod
    def _read_bound(node: Any, name: str):
        bound = node.find(name)
        if bound is None:
            return None, None
        absolute = xm.read_optional_int(bound, "absolute-heartrate")
        if absolute is not None:
            return absolute, None
        return None, xm.read_optional_float(bound, "percent-max-heartrate")

    @staticmethod
    def _write_bound(element: Any, name: str, absolute: Optional[int], relative: Optional[float]) -> None:
        bound = xm.new_element(name)
        if absolute is not None:
            xm.write_element(bound, "absolute-heartrate", absolute)
        else:
            xm.write_element(bound, "percent-max-heartrate", relative)
        element.append(bound)

    def _parse(self, node: Any) -> None:
        self._name = xm.read_optional_attribute(node, "name") or None
        self._lower_absolute, self._lower_relative = self._read_bound(node, "lower-bound")
        self._upper_absolute, self._upper_relative = self._read_bound(node, "upper-bound")

    def _write(self, element: Any) -> None:
        if self._lower_absolute is None and self._lower_relative is None:
            raise SerializationError(field="lower_bound")
        if self._upper_absolute is None and self._upper_relative is None:
            raise SerializationError(field="upper_bound")

        if self._name:
            element.set("name", self._name)
        self._write_bound(element, "lower-bound", self._lower_absolute, self._lower_relative)
        self._write_bound(element, "upper-bound", self._upper_absolute, self._upper_relative)

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = validators.check_not_whitespace(value, "name")

    @property
    def lower_absolute(self) -> Optional[int]:
        return self._lower_absolute

    @lower_absolute.setter
    def lower_absolute(self, value: Optional[int]) -> None:
        self._lower_absolute = validators.check_non_negative(value, "lower_absolute", optional=True, integer=True)
        if value is not None:
            self._lower_relative = None

    @property
    def lower_relative(self) -> Optional[float]:
        return self._lower_relative

    @lower_relative.setter
    def lower_relative(self, value: Optional[float]) -> None:
        checked = validators.check_non_negative(value, "lower_relative", optional=True)
        self._lower_relative = None if checked is None else float(checked)
        if value is not None:
            self._lower_absolute = None

    @property
    def upper_absolute(self) -> Optional[int]:
        return self._upper_absolute

    @upper_absolute.setter
    def upper_absolute(self, value: Optional[int]) -> None:
        self._upper_absolute = validators.check_non_negative(value, "upper_absolute", optional=True, integer=True)
        if value is not None:
            self._upper_relative = None

    @property
    def upper_relative(self) -> Optional[float]:
        return self._upper_relative

    @upper_relative.setter
    def upper_relative(self, value: Optional[float]) -> None:
        checked = validators.check_non_negative(value, "upper_relative", optional=True)
        self._upper_relative = None if checked is None else float(checked)
        if value is not None:
            self._upper_absolute = None

    @staticmethod
    def _format_bound(absolute: Optional[int], relative: Optional[float]) -> str:
        if absolute is not None:
            return str(absolute)
        if relative is not None:
            return f"{relative:.0%}"
        return "?"

    def __str__(self) -> str:
        result = (
            f"{self._format_bound(self._lower_absolute, self._lower_relative)}"
            f" - {self._format_bound(self._upper_absolute, self._upper_relative)}"
        )
        if self._name:
            result = f"{self._name}: {result}"
        return result
