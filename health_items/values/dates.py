"""
Date and time value types.

Wire shapes:
    <date><y>2024</y><m>3</m><d>15</d></date>
    <time><h>8</h><m>30</m><s>0</s><f>0</f></time>
    <when><date>...</date><time>...</time><tz><text>PST</text></tz></when>

    <when>
        <structured><date><y>2020</y><m>6</m></date><time>...</time></structured>
    </when>
    <when><descriptive>Summer 2019</descriptive></when>

Date parts are plain integers range checked in the setters:
year 1000-9999, month 1-12, day 1-31, hour 0-23, minute and second 0-59,
millisecond 0-999.
"""
import datetime
from functools import total_ordering
from typing import Any, Optional, Tuple

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.core.exceptions import SerializationError
from health_items.values.base import ItemData
from health_items.values.coded import CodableValue

MIN_YEAR = 1000
MAX_YEAR = 9999


def _year(value: Optional[int], optional: bool = False) -> Optional[int]:
    return validators.check_in_range(value, MIN_YEAR, MAX_YEAR, "year", optional=optional, integer=True)


def _month(value: Optional[int], optional: bool = False) -> Optional[int]:
    return validators.check_in_range(value, 1, 12, "month", optional=optional, integer=True)


def _day(value: Optional[int], optional: bool = False) -> Optional[int]:
    return validators.check_in_range(value, 1, 31, "day", optional=optional, integer=True)


# =============================================================================
# PRECISE DATE / TIME
# =============================================================================

@total_ordering
class HealthServiceDate(ItemData):
    """A calendar date; year, month and day are all mandatory when written."""

    def __init__(self, year: Optional[int] = None, month: Optional[int] = None, day: Optional[int] = None):
        self._year: Optional[int] = None
        self._month: Optional[int] = None
        self._day: Optional[int] = None

        if year is not None:
            self.year = year
        if month is not None:
            self.month = month
        if day is not None:
            self.day = day

    @classmethod
    def from_date(cls, value: datetime.date) -> "HealthServiceDate":
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls) -> "HealthServiceDate":
        return cls.from_date(datetime.date.today())

    def to_date(self) -> datetime.date:
        """
        Convert to a datetime.date.

        Raises:
            SerializationError: If any part is unset.
            ValueError: If the parts do not form a real date (e.g. 2023-02-30).
        """
        xm.require_non_null(self._year, "year")
        xm.require_non_null(self._month, "month")
        xm.require_non_null(self._day, "day")
        return datetime.date(self._year, self._month, self._day)

    def _parse(self, node: Any) -> None:
        self._year = xm.read_mandatory_int(node, "y")
        self._month = xm.read_mandatory_int(node, "m")
        self._day = xm.read_mandatory_int(node, "d")

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._year, "year")
        xm.require_non_null(self._month, "month")
        xm.require_non_null(self._day, "day")
        xm.write_element(element, "y", self._year)
        xm.write_element(element, "m", self._month)
        xm.write_element(element, "d", self._day)

    @property
    def year(self) -> Optional[int]:
        return self._year

    @year.setter
    def year(self, value: int) -> None:
        self._year = _year(value)

    @property
    def month(self) -> Optional[int]:
        return self._month

    @month.setter
    def month(self, value: int) -> None:
        self._month = _month(value)

    @property
    def day(self) -> Optional[int]:
        return self._day

    @day.setter
    def day(self, value: int) -> None:
        self._day = _day(value)

    def _sort_key(self) -> Tuple[int, int, int]:
        return (self._year or 0, self._month or 0, self._day or 0)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, HealthServiceDate):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        if None in (self._year, self._month, self._day):
            return ""
        return f"{self._year:04d}-{self._month:02d}-{self._day:02d}"


class ApproximateTime(ItemData):
    """
    A time of day. Hour and minute are mandatory when written; second and
    millisecond are optional.
    """

    def __init__(
        self,
        hour: Optional[int] = None,
        minute: Optional[int] = None,
        second: Optional[int] = None,
        millisecond: Optional[int] = None,
    ):
        self._hour: Optional[int] = None
        self._minute: Optional[int] = None
        self._second: Optional[int] = None
        self._millisecond: Optional[int] = None

        if hour is not None:
            self.hour = hour
        if minute is not None:
            self.minute = minute
        self.second = second
        self.millisecond = millisecond

    @classmethod
    def from_time(cls, value: datetime.time) -> "ApproximateTime":
        return cls(value.hour, value.minute, value.second, value.microsecond // 1000)

    def _parse(self, node: Any) -> None:
        self._hour = xm.read_mandatory_int(node, "h")
        self._minute = xm.read_mandatory_int(node, "m")
        self._second = xm.read_optional_int(node, "s")
        self._millisecond = xm.read_optional_int(node, "f")

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._hour, "hour")
        xm.require_non_null(self._minute, "minute")
        xm.write_element(element, "h", self._hour)
        xm.write_element(element, "m", self._minute)
        xm.write_optional(element, "s", self._second)
        xm.write_optional(element, "f", self._millisecond)

    @property
    def hour(self) -> Optional[int]:
        return self._hour

    @hour.setter
    def hour(self, value: int) -> None:
        self._hour = validators.check_in_range(value, 0, 23, "hour", integer=True)

    @property
    def minute(self) -> Optional[int]:
        return self._minute

    @minute.setter
    def minute(self, value: int) -> None:
        self._minute = validators.check_in_range(value, 0, 59, "minute", integer=True)

    @property
    def second(self) -> Optional[int]:
        return self._second

    @second.setter
    def second(self, value: Optional[int]) -> None:
        self._second = validators.check_in_range(value, 0, 59, "second", optional=True, integer=True)

    @property
    def millisecond(self) -> Optional[int]:
        return self._millisecond

    @millisecond.setter
    def millisecond(self, value: Optional[int]) -> None:
        self._millisecond = validators.check_in_range(
            value, 0, 999, "millisecond", optional=True, integer=True
        )

    def __str__(self) -> str:
        if self._hour is None or self._minute is None:
            return ""
        result = f"{self._hour:02d}:{self._minute:02d}"
        if self._second is not None:
            result = f"{result}:{self._second:02d}"
            if self._millisecond is not None:
                result = f"{result}.{self._millisecond:03d}"
        return result


class HealthServiceDateTime(ItemData):
    """A date (mandatory) with optional time of day and time zone."""

    def __init__(
        self,
        date: Optional[HealthServiceDate] = None,
        time: Optional[ApproximateTime] = None,
        time_zone: Optional[CodableValue] = None,
    ):
        self._date: Optional[HealthServiceDate] = None
        self._time: Optional[ApproximateTime] = None
        self._time_zone: Optional[CodableValue] = None

        if date is not None:
            self.date = date
        self.time = time
        self.time_zone = time_zone

    @classmethod
    def from_datetime(cls, value: datetime.datetime) -> "HealthServiceDateTime":
        return cls(
            date=HealthServiceDate.from_date(value.date()),
            time=ApproximateTime.from_time(value.time()),
        )

    def _parse(self, node: Any) -> None:
        self._date = xm.read_mandatory_typed(node, "date", HealthServiceDate)
        self._time = xm.read_optional_typed(node, "time", ApproximateTime)
        self._time_zone = xm.read_optional_typed(node, "tz", CodableValue)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._date, "date")
        xm.write_element(element, "date", self._date)
        xm.write_optional(element, "time", self._time)
        xm.write_optional(element, "tz", self._time_zone)

    @property
    def date(self) -> Optional[HealthServiceDate]:
        return self._date

    @date.setter
    def date(self, value: HealthServiceDate) -> None:
        self._date = validators.check_instance(value, HealthServiceDate, "date", optional=False)

    @property
    def time(self) -> Optional[ApproximateTime]:
        return self._time

    @time.setter
    def time(self, value: Optional[ApproximateTime]) -> None:
        self._time = validators.check_instance(value, ApproximateTime, "time")

    @property
    def time_zone(self) -> Optional[CodableValue]:
        return self._time_zone

    @time_zone.setter
    def time_zone(self, value: Optional[CodableValue]) -> None:
        self._time_zone = validators.check_instance(value, CodableValue, "time_zone")

    def __str__(self) -> str:
        parts = [str(part) for part in (self._date, self._time, self._time_zone) if part is not None]
        return " ".join(part for part in parts if part)


# =============================================================================
# APPROXIMATE DATE / DATETIME
# =============================================================================

class ApproximateDate(ItemData):
    """A date where only the year is known for certain."""

    def __init__(self, year: Optional[int] = None, month: Optional[int] = None, day: Optional[int] = None):
        self._year: Optional[int] = None
        self._month: Optional[int] = None
        self._day: Optional[int] = None

        if year is not None:
            self.year = year
        self.month = month
        self.day = day

    def _parse(self, node: Any) -> None:
        self._year = xm.read_mandatory_int(node, "y")
        self._month = xm.read_optional_int(node, "m")
        self._day = xm.read_optional_int(node, "d")

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._year, "year")
        xm.write_element(element, "y", self._year)
        xm.write_optional(element, "m", self._month)
        xm.write_optional(element, "d", self._day)

    @property
    def year(self) -> Optional[int]:
        return self._year

    @year.setter
    def year(self, value: int) -> None:
        self._year = _year(value)

    @property
    def month(self) -> Optional[int]:
        return self._month

    @month.setter
    def month(self, value: Optional[int]) -> None:
        self._month = _month(value, optional=True)

    @property
    def day(self) -> Optional[int]:
        return self._day

    @day.setter
    def day(self, value: Optional[int]) -> None:
        self._day = _day(value, optional=True)

    def __str__(self) -> str:
        if self._year is None:
            return ""
        result = f"{self._year:04d}"
        if self._month is not None:
            result = f"{result}-{self._month:02d}"
            if self._day is not None:
                result = f"{result}-{self._day:02d}"
        return result


class ApproximateDateTime(ItemData):
    """
    Either a structured approximate date (with optional time and time zone)
    or a free-text description such as "early 2010".

    Setting a structured date clears the description and vice versa. One of
    the two must be set when written.
    """

    def __init__(
        self,
        date: Optional[ApproximateDate] = None,
        time: Optional[ApproximateTime] = None,
        time_zone: Optional[CodableValue] = None,
        description: Optional[str] = None,
    ):
        self._date: Optional[ApproximateDate] = None
        self._time: Optional[ApproximateTime] = None
        self._time_zone: Optional[CodableValue] = None
        self._description: Optional[str] = None

        if description is not None:
            self.description = description
        if date is not None:
            self.date = date
        self.time = time
        self.time_zone = time_zone

    def _parse(self, node: Any) -> None:
        structured = node.find("structured")
        if structured is not None:
            self._date = xm.read_mandatory_typed(structured, "date", ApproximateDate)
            self._time = xm.read_optional_typed(structured, "time", ApproximateTime)
            self._time_zone = xm.read_optional_typed(structured, "tz", CodableValue)
        else:
            self._description = xm.read_mandatory(node, "descriptive")

    def _write(self, element: Any) -> None:
        if self._date is None and not self._description:
            raise SerializationError(field="date", reason="structured date or description required")

        if self._date is not None:
            structured = xm.new_element("structured")
            xm.write_element(structured, "date", self._date)
            xm.write_optional(structured, "time", self._time)
            xm.write_optional(structured, "tz", self._time_zone)
            element.append(structured)
        else:
            xm.write_element(element, "descriptive", self._description)

    @property
    def date(self) -> Optional[ApproximateDate]:
        return self._date

    @date.setter
    def date(self, value: Optional[ApproximateDate]) -> None:
        self._date = validators.check_instance(value, ApproximateDate, "date")
        if self._date is not None:
            self._description = None

    @property
    def time(self) -> Optional[ApproximateTime]:
        return self._time

    @time.setter
    def time(self, value: Optional[ApproximateTime]) -> None:
        self._time = validators.check_instance(value, ApproximateTime, "time")

    @property
    def time_zone(self) -> Optional[CodableValue]:
        return self._time_zone

    @time_zone.setter
    def time_zone(self, value: Optional[CodableValue]) -> None:
        self._time_zone = validators.check_instance(value, CodableValue, "time_zone")

    @property
    def description(self) -> Optional[str]:
        return self._description

    @description.setter
    def description(self, value: Optional[str]) -> None:
        self._description = validators.check_optional_not_blank(value, "description")
        if self._description is not None:
            self._date = None
            self._time = None
            self._time_zone = None

    def __str__(self) -> str:
        if self._date is None:
            return self._description or ""
        parts = [str(part) for part in (self._date, self._time, self._time_zone) if part is not None]
        return " ".join(part for part in parts if part)
