"""
Goal item types.

    <weight-goal>
        <initial><kg>90</kg></initial>
        <minimum><kg>75</kg></minimum>
        <maximum><kg>80</kg></maximum>
        <goal-info>...</goal-info>
    </weight-goal>
"""
import uuid
from typing import Any, Optional

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.core.type_registry import register_thing_type
from health_items.items.base import HealthRecordItem
from health_items.values.measurement import Weight as WeightValue
from health_items.values.ranges import Goal


@register_thing_type
class WeightGoal(HealthRecordItem):
    """A target weight band. Every field is optional."""

    TYPE_ID = uuid.UUID("b7925180-d69e-48fa-ae1d-cb3748ca170e")
    ROOT_ELEMENT = "weight-goal"

    def __init__(
        self,
        initial: Optional[WeightValue] = None,
        minimum: Optional[WeightValue] = None,
        maximum: Optional[WeightValue] = None,
        goal: Optional[Goal] = None,
    ):
        super().__init__()
        self._initial: Optional[WeightValue] = None
        self._minimum: Optional[WeightValue] = None
        self._maximum: Optional[WeightValue] = None
        self._goal: Optional[Goal] = None

        self.initial = initial
        self.minimum = minimum
        self.maximum = maximum
        self.goal = goal

    def _parse(self, root: Any) -> None:
        self._initial = xm.read_optional_typed(root, "initial", WeightValue)
        self._minimum = xm.read_optional_typed(root, "minimum", WeightValue)
        self._maximum = xm.read_optional_typed(root, "maximum", WeightValue)
        self._goal = xm.read_optional_typed(root, "goal-info", Goal)

    def _write(self, element: Any) -> None:
        xm.write_optional(element, "initial", self._initial)
        xm.write_optional(element, "minimum", self._minimum)
        xm.write_optional(element, "maximum", self._maximum)
        xm.write_optional(element, "goal-info", self._goal)

    @property
    def initial(self) -> Optional[WeightValue]:
        """Weight when the goal was set."""
        return self._initial

    @initial.setter
    def initial(self, value: Optional[WeightValue]) -> None:
        self._initial = validators.check_instance(value, WeightValue, "initial")

    @property
    def minimum(self) -> Optional[WeightValue]:
        return self._minimum

    @minimum.setter
    def minimum(self, value: Optional[WeightValue]) -> None:
        self._minimum = validators.check_instance(value, WeightValue, "minimum")

    @property
    def maximum(self) -> Optional[WeightValue]:
        return self._maximum

    @maximum.setter
    def maximum(self, value: Optional[WeightValue]) -> None:
        self._maximum = validators.check_instance(value, WeightValue, "maximum")

    @property
    def goal(self) -> Optional[Goal]:
        """Target date and status, written as <goal-info>."""
        return self._goal

    @goal.setter
    def goal(self, value: Optional[Goal]) -> None:
        self._goal = validators.check_instance(value, Goal, "goal")

    def __str__(self) -> str:
        if self._minimum is None and self._maximum is None:
            return ""
        low = str(self._minimum) if self._minimum is not None else "?"
        high = str(self._maximum) if self._maximum is not None else "?"
        return f"{low} - {high}"
