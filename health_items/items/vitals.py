"""
Vital sign item types: height, weight, blood pressure and heart rate.

Each is a single timed reading:
    <blood-pressure>
        <when>...</when>
        <systolic>120</systolic>
        <diastolic>80</diastolic>
        <pulse>62</pulse>
        <irregular-heartbeat>false</irregular-heartbeat>
    </blood-pressure>
"""
import uuid
from typing import Any, Optional

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.core.type_registry import register_thing_type
from health_items.items.base import HealthRecordItem
from health_items.values.coded import CodableValue
from health_items.values.dates import HealthServiceDateTime
from health_items.values.measurement import Length
from health_items.values.measurement import Weight as WeightValue


class _TimedReading(HealthRecordItem):
    """An item with a mandatory <when> as its first child."""

    def __init__(self, when: Optional[HealthServiceDateTime] = None):
        super().__init__()
        self._when: Optional[HealthServiceDateTime] = None
        if when is not None:
            self.when = when

    @property
    def when(self) -> Optional[HealthServiceDateTime]:
        return self._when

    @when.setter
    def when(self, value: HealthServiceDateTime) -> None:
        self._when = validators.check_instance(value, HealthServiceDateTime, "when", optional=False)


# =============================================================================
# BODY MEASUREMENTS
# =============================================================================

@register_thing_type
class Height(_TimedReading):
    """A height measurement. ``when`` and ``value`` are mandatory when written."""

    TYPE_ID = uuid.UUID("40750a6a-89b2-455c-bd8d-b420a4cb500b")
    ROOT_ELEMENT = "height"

    def __init__(self, when: Optional[HealthServiceDateTime] = None, value: Optional[Length] = None):
        super().__init__(when)
        self._value: Optional[Length] = None
        if value is not None:
            self.value = value

    def _parse(self, root: Any) -> None:
        self._when = xm.read_mandatory_typed(root, "when", HealthServiceDateTime)
        self._value = xm.read_mandatory_typed(root, "value", Length)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._when, "when")
        xm.require_non_null(self._value, "value")
        xm.write_element(element, "when", self._when)
        xm.write_element(element, "value", self._value)

    @property
    def value(self) -> Optional[Length]:
        return self._value

    @value.setter
    def value(self, value: Length) -> None:
        self._value = validators.check_instance(value, Length, "value", optional=False)

    def __str__(self) -> str:
        return str(self._value) if self._value is not None else ""


@register_thing_type
class Weight(_TimedReading):
    """A weight measurement. ``when`` and ``value`` are mandatory when written."""

    TYPE_ID = uuid.UUID("3d34d87e-7fc1-4153-800f-f56592cb0d17")
    ROOT_ELEMENT = "weight"

    def __init__(self, when: Optional[HealthServiceDateTime] = None, value: Optional[WeightValue] = None):
        super().__init__(when)
        self._value: Optional[WeightValue] = None
        if value is not None:
            self.value = value

    def _parse(self, root: Any) -> None:
        self._when = xm.read_mandatory_typed(root, "when", HealthServiceDateTime)
        self._value = xm.read_mandatory_typed(root, "value", WeightValue)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._when, "when")
        xm.require_non_null(self._value, "value")
        xm.write_element(element, "when", self._when)
        xm.write_element(element, "value", self._value)

    @property
    def value(self) -> Optional[WeightValue]:
        return self._value

    @value.setter
    def value(self, value: WeightValue) -> None:
        self._value = validators.check_instance(value, WeightValue, "value", optional=False)

    def __str__(self) -> str:
        return str(self._value) if self._value is not None else ""


# =============================================================================
# CARDIOVASCULAR
# =============================================================================

@register_thing_type
class BloodPressure(_TimedReading):
    """
    A blood pressure reading in mmHg.

    Attributes:
        when: Time of the reading (mandatory)
        systolic: Systolic pressure (mandatory, non-negative)
        diastolic: Diastolic pressure (mandatory, non-negative)
        pulse: Optional pulse in beats per minute (non-negative)
        irregular_heartbeat: Optional irregular heartbeat flag
    """

    TYPE_ID = uuid.UUID("ca3c57f4-f4c1-4e15-be67-0a3caf5414ed")
    ROOT_ELEMENT = "blood-pressure"

    def __init__(
        self,
        when: Optional[HealthServiceDateTime] = None,
        systolic: Optional[int] = None,
        diastolic: Optional[int] = None,
        pulse: Optional[int] = None,
        irregular_heartbeat: Optional[bool] = None,
    ):
        super().__init__(when)
        self._systolic: Optional[int] = None
        self._diastolic: Optional[int] = None
        self._pulse: Optional[int] = None
        self._irregular_heartbeat: Optional[bool] = None

        if systolic is not None:
            self.systolic = systolic
        if diastolic is not None:
            self.diastolic = diastolic
        self.pulse = pulse
        self.irregular_heartbeat = irregular_heartbeat

    def _parse(self, root: Any) -> None:
        self._when = xm.read_mandatory_typed(root, "when", HealthServiceDateTime)
        self._systolic = xm.read_mandatory_int(root, "systolic")
        self._diastolic = xm.read_mandatory_int(root, "diastolic")
        self._pulse = xm.read_optional_int(root, "pulse")
        self._irregular_heartbeat = xm.read_optional_bool(root, "irregular-heartbeat")

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._when, "when")
        xm.require_non_null(self._systolic, "systolic")
        xm.require_non_null(self._diastolic, "diastolic")
        xm.write_element(element, "when", self._when)
        xm.write_element(element, "systolic", self._systolic)
        xm.write_element(element, "diastolic", self._diastolic)
        xm.write_optional(element, "pulse", self._pulse)
        xm.write_optional(element, "irregular-heartbeat", self._irregular_heartbeat)

    @property
    def systolic(self) -> Optional[int]:
        return self._systolic

    @systolic.setter
    def systolic(self, value: int) -> None:
        self._systolic = validators.check_non_negative(value, "systolic", integer=True)

    @property
    def diastolic(self) -> Optional[int]:
        return self._diastolic

    @diastolic.setter
    def diastolic(self, value: int) -> None:
        self._diastolic = validators.check_non_negative(value, "diastolic", integer=True)

    @property
    def pulse(self) -> Optional[int]:
        return self._pulse

    @pulse.setter
    def pulse(self, value: Optional[int]) -> None:
        self._pulse = validators.check_non_negative(value, "pulse", optional=True, integer=True)

    @property
    def irregular_heartbeat(self) -> Optional[bool]:
        return self._irregular_heartbeat

    @irregular_heartbeat.setter
    def irregular_heartbeat(self, value: Optional[bool]) -> None:
        self._irregular_heartbeat = validators.check_instance(value, bool, "irregular_heartbeat")

    def __str__(self) -> str:
        if self._systolic is None or self._diastolic is None:
            return ""
        result = f"{self._systolic}/{self._diastolic}"
        if self._pulse is not None:
            result = f"{result}, pulse {self._pulse}"
        return result


@register_thing_type
class HeartRate(_TimedReading):
    """A heart rate reading in beats per minute."""

    TYPE_ID = uuid.UUID("b81eb4a6-6eac-4292-ae93-3872d6870994")
    ROOT_ELEMENT = "heart-rate"

    def __init__(
        self,
        when: Optional[HealthServiceDateTime] = None,
        value: Optional[int] = None,
        measurement_method: Optional[CodableValue] = None,
        measurement_conditions: Optional[CodableValue] = None,
        measurement_flags: Optional[CodableValue] = None,
    ):
        super().__init__(when)
        self._value: Optional[int] = None
        self._measurement_method: Optional[CodableValue] = None
        self._measurement_conditions: Optional[CodableValue] = None
        self._measurement_flags: Optional[CodableValue] = None

        if value is not None:
            self.value = value
        self.measurement_method = measurement_method
        self.measurement_conditions = measurement_conditions
        self.measurement_flags = measurement_flags

    def _parse(self, root: Any) -> None:
        self._when = xm.read_mandatory_typed(root, "when", HealthServiceDateTime)
        self._value = xm.read_mandatory_int(root, "value")
        self._measurement_method = xm.read_optional_typed(root, "measurement-method", CodableValue)
        self._measurement_conditions = xm.read_optional_typed(root, "measurement-conditions", CodableValue)
        self._measurement_flags = xm.read_optional_typed(root, "measurement-flags", CodableValue)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._when, "when")
        xm.require_non_null(self._value, "value")
        xm.write_element(element, "when", self._when)
        xm.write_element(element, "value", self._value)
        xm.write_optional(element, "measurement-method", self._measurement_method)
        xm.write_optional(element, "measurement-conditions", self._measurement_conditions)
        xm.write_optional(element, "measurement-flags", self._measurement_flags)

    @property
    def value(self) -> Optional[int]:
        """Beats per minute."""
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        self._value = validators.check_non_negative(value, "value", integer=True)

    @property
    def measurement_method(self) -> Optional[CodableValue]:
        return self._measurement_method

    @measurement_method.setter
    def measurement_method(self, value: Optional[CodableValue]) -> None:
        self._measurement_method = validators.check_instance(value, CodableValue, "measurement_method")

    @property
    def measurement_conditions(self) -> Optional[CodableValue]:
        return self._measurement_conditions

    @measurement_conditions.setter
    def measurement_conditions(self, value: Optional[CodableValue]) -> None:
        self._measurement_conditions = validators.check_instance(value, CodableValue, "measurement_conditions")

    @property
    def measurement_flags(self) -> Optional[CodableValue]:
        return self._measurement_flags

    @measurement_flags.setter
    def measurement_flags(self, value: Optional[CodableValue]) -> None:
        self._measurement_flags = validators.check_instance(value, CodableValue, "measurement_flags")

    def __str__(self) -> str:
        return "" if self._value is None else f"{self._value} bpm"
