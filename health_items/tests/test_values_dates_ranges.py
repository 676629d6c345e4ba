"""
Tests for date/time values, ranges, measurements, goals and heart rate zones.
"""
import datetime

import pytest

from health_items.core.exceptions import (
    ArgumentError,
    SerializationError,
    StructureError,
    ValidationError,
)
from health_items.values import (
    ApproximateDate,
    ApproximateDateTime,
    ApproximateTime,
    CodableValue,
    DoubleRange,
    GeneralMeasurement,
    Goal,
    GoalRange,
    HealthServiceDate,
    HealthServiceDateTime,
    HeartRateZone,
    IntRange,
    StructuredMeasurement,
)


# =============================================================================
# TESTS: Precise dates and times
# =============================================================================

class TestHealthServiceDate:
    """Tests for HealthServiceDate."""

    def test_write(self):
        """Should write y, m, d."""
        element = HealthServiceDate(2024, 3, 15).write_xml("date")
        assert [(child.tag, child.text) for child in element] == [("y", "2024"), ("m", "3"), ("d", "15")]

    @pytest.mark.parametrize("field,value", [
        ("year", 999),
        ("year", 10000),
        ("month", 0),
        ("month", 13),
        ("day", 32),
    ])
    def test_out_of_range(self, field, value):
        """Should reject parts outside their range and keep the old value."""
        date = HealthServiceDate(2024, 3, 15)
        with pytest.raises(ValidationError):
            setattr(date, field, value)
        assert str(date) == "2024-03-15"

    def test_float_parts_rejected(self):
        """Should require integer parts."""
        with pytest.raises(ArgumentError):
            HealthServiceDate(2024.0, 3, 15)

    def test_incomplete_date_not_written(self):
        """Should require every part at write time."""
        with pytest.raises(SerializationError) as exc_info:
            HealthServiceDate(2024, 3).write_xml("date")
        assert exc_info.value.context["field"] == "day"

    def test_malformed_part(self):
        """Should raise StructureError for non-numeric parts."""
        with pytest.raises(StructureError):
            HealthServiceDate.from_xml("<date><y>2024</y><m>March</m><d>15</d></date>")

    def test_conversions(self):
        """Should convert to and from datetime.date."""
        value = datetime.date(2024, 2, 29)
        assert HealthServiceDate.from_date(value).to_date() == value
        with pytest.raises(ValueError):
            HealthServiceDate(2023, 2, 30).to_date()

    def test_today(self):
        """Should build today's date."""
        assert HealthServiceDate.today().to_date() == datetime.date.today()

    def test_ordering(self):
        """Should order by year, month, day."""
        assert HealthServiceDate(2024, 1, 31) < HealthServiceDate(2024, 2, 1)
        assert HealthServiceDate(2024, 2, 1) >= HealthServiceDate(2024, 1, 31)
        assert str(HealthServiceDate()) == ""


class TestApproximateTime:
    """Tests for ApproximateTime."""

    def test_optional_parts_omitted(self):
        """Should omit seconds and milliseconds when unset."""
        element = ApproximateTime(8, 30).write_xml("time")
        assert [child.tag for child in element] == ["h", "m"]

    def test_hour_and_minute_mandatory(self):
        """Should refuse to write without hour and minute."""
        with pytest.raises(SerializationError):
            ApproximateTime(hour=8).write_xml("time")

    @pytest.mark.parametrize("kwargs", [
        {"hour": 24},
        {"minute": 60},
        {"second": -1},
        {"millisecond": 1000},
    ])
    def test_ranges(self, kwargs):
        """Should reject out-of-range parts."""
        with pytest.raises(ValidationError):
            ApproximateTime(**kwargs)

    def test_from_time_and_str(self):
        """Should keep millisecond precision."""
        value = ApproximateTime.from_time(datetime.time(8, 30, 0, 5000))
        assert str(value) == "08:30:00.005"
        assert str(ApproximateTime(8, 30)) == "08:30"

    def test_round_trip(self):
        """Should parse what it writes."""
        original = ApproximateTime(23, 59, 59, 999)
        assert ApproximateTime.from_xml(original.to_xml("time")) == original


class TestHealthServiceDateTime:
    """Tests for HealthServiceDateTime."""

    def test_write_order(self, when):
        """Should write date, time, tz."""
        when.time_zone = CodableValue("PST")
        element = when.write_xml("when")
        assert [child.tag for child in element] == ["date", "time", "tz"]

    def test_date_mandatory(self):
        """Should refuse to write without a date."""
        with pytest.raises(SerializationError) as exc_info:
            HealthServiceDateTime(time=ApproximateTime(8, 0)).write_xml("when")
        assert exc_info.value.context["field"] == "date"

    def test_from_datetime(self):
        """Should split a datetime into date and time."""
        value = HealthServiceDateTime.from_datetime(datetime.datetime(2024, 3, 15, 8, 30, 5, 123000))
        assert str(value) == "2024-03-15 08:30:05.123"

    def test_str(self, when):
        """Should join the populated parts."""
        assert str(when) == "2024-03-15 08:30"

    def test_round_trip(self, when):
        """Should parse what it writes."""
        assert HealthServiceDateTime.from_xml(when.to_xml("when")) == when


# =============================================================================
# TESTS: Approximate dates
# =============================================================================

class TestApproximateDateTime:
    """Tests for the structured/descriptive alternatives."""

    def test_structured_shape(self):
        """Should nest date, time and tz under <structured>."""
        value = ApproximateDateTime(ApproximateDate(2020, 6), ApproximateTime(14, 0))
        element = value.write_xml("when")
        structured = element.find("structured")
        assert [child.tag for child in structured] == ["date", "time"]
        assert [child.tag for child in structured.find("date")] == ["y", "m"]

    def test_descriptive_shape(self):
        """Should write only <descriptive> for free-text dates."""
        element = ApproximateDateTime(description="Summer 2019").write_xml("when")
        assert [(child.tag, child.text) for child in element] == [("descriptive", "Summer 2019")]

    def test_neither_set(self):
        """Should refuse to write an empty value."""
        with pytest.raises(SerializationError) as exc_info:
            ApproximateDateTime().write_xml("when")
        assert exc_info.value.context["field"] == "date"

    def test_description_clears_structured(self):
        """Should switch to descriptive mode and drop the date."""
        value = ApproximateDateTime(ApproximateDate(2020), ApproximateTime(8, 0))
        value.description = "early 2020"
        assert value.date is None
        assert value.time is None
        assert str(value) == "early 2020"

    def test_date_clears_description(self):
        """Should switch back to structured mode."""
        value = ApproximateDateTime(description="early 2020")
        value.date = ApproximateDate(2020, 2)
        assert value.description is None
        assert str(value) == "2020-02"

    def test_round_trips(self):
        """Should parse both forms."""
        for value in (
            ApproximateDateTime(ApproximateDate(2020, 6, 1), time_zone=CodableValue("UTC")),
            ApproximateDateTime(description="Summer 2019"),
        ):
            assert ApproximateDateTime.from_xml(value.to_xml("when")) == value

    def test_approximate_date_requires_year(self):
        """Should require a year but allow missing month and day."""
        assert ApproximateDate.from_xml("<date><y>1999</y></date>").month is None
        with pytest.raises(StructureError):
            ApproximateDate.from_xml("<date><m>6</m></date>")
        with pytest.raises(SerializationError):
            ApproximateDate(month=6).write_xml("date")


# =============================================================================
# TESTS: Ranges
# =============================================================================

class TestRanges:
    """Tests for DoubleRange and IntRange."""

    def test_write(self):
        """Should write minimum-range then maximum-range."""
        element = IntRange(60, 100).write_xml("range")
        assert [(child.tag, child.text) for child in element] == [
            ("minimum-range", "60"),
            ("maximum-range", "100"),
        ]

    def test_minimum_above_maximum(self):
        """Should reject crossing bounds and keep the old value."""
        value = DoubleRange(1.0, 2.0)
        with pytest.raises(ValidationError):
            value.minimum = 3.0
        assert value.minimum == 1.0
        with pytest.raises(ValidationError):
            DoubleRange(5, 3)

    def test_int_range_rejects_floats(self):
        """Should require integers."""
        with pytest.raises(ArgumentError):
            IntRange(1.5, 2)

    def test_bounds_mandatory(self):
        """Should require both bounds at write time."""
        with pytest.raises(SerializationError) as exc_info:
            DoubleRange(minimum=1.0).write_xml("range")
        assert exc_info.value.context["field"] == "maximum"

    def test_contains_and_str(self):
        """Should test membership inclusively."""
        value = DoubleRange(60, 100)
        assert 60 in value
        assert 100.5 not in value
        assert str(value) == "60 - 100"
        assert 1 not in DoubleRange()

    def test_round_trip(self):
        """Should parse what it writes."""
        value = DoubleRange(0.5, 1.5)
        assert DoubleRange.from_xml(value.to_xml("range")) == value


# =============================================================================
# TESTS: Measurements and goals
# =============================================================================

class TestGeneralMeasurement:
    """Tests for StructuredMeasurement and GeneralMeasurement."""

    def test_round_trip(self, kg_units):
        """Should keep the display text and structured renditions."""
        value = GeneralMeasurement("70 kg", [StructuredMeasurement(70, kg_units)])
        parsed = GeneralMeasurement.from_xml(value.to_xml("minimum"))
        assert parsed == value
        assert parsed.structured[0].value == 70.0

    def test_display_mandatory(self):
        """Should require display text."""
        with pytest.raises(SerializationError):
            GeneralMeasurement().write_xml("minimum")

    def test_structured_units_mandatory(self):
        """Should require units on structured renditions."""
        with pytest.raises(SerializationError) as exc_info:
            GeneralMeasurement("70", [StructuredMeasurement(70)]).write_xml("minimum")
        assert exc_info.value.context["field"] == "units"

    def test_str(self, kg_units):
        """Should render the display text."""
        assert str(GeneralMeasurement("70 kg")) == "70 kg"
        assert str(StructuredMeasurement(70, kg_units)) == "70 kg"


class TestGoals:
    """Tests for GoalRange and Goal."""

    def test_goal_range_write_order(self):
        """Should write name, description, minimum, maximum."""
        value = GoalRange(
            CodableValue("Healthy"),
            description="BMI 18.5-25",
            minimum=GeneralMeasurement("60 kg"),
            maximum=GeneralMeasurement("75 kg"),
        )
        element = value.write_xml("goal-range")
        assert [child.tag for child in element] == ["name", "description", "minimum", "maximum"]

    def test_goal_range_name_mandatory(self):
        """Should refuse to write without a name."""
        with pytest.raises(SerializationError):
            GoalRange(minimum=GeneralMeasurement("60 kg")).write_xml("goal-range")

    def test_empty_goal(self):
        """Should write an empty element when nothing is set."""
        element = Goal().write_xml("goal-info")
        assert len(element) == 0

    def test_goal_round_trip(self):
        """Should parse what it writes."""
        value = Goal(
            target_date=ApproximateDateTime(description="next summer"),
            status=CodableValue("in progress"),
        )
        parsed = Goal.from_xml(value.to_xml("goal-info"))
        assert parsed == value
        assert str(parsed) == "target next summer, in progress"


# =============================================================================
# TESTS: HeartRateZone
# =============================================================================

class TestHeartRateZone:
    """Tests for HeartRateZone."""

    def _zone(self):
        zone = HeartRateZone("fat burn")
        zone.lower_absolute = 100
        zone.upper_relative = 0.7
        return zone

    def test_write(self):
        """Should write the name attribute and one form per bound."""
        element = self._zone().write_xml("zone")
        assert element.get("name") == "fat burn"
        assert element.find("lower-bound").findtext("absolute-heartrate") == "100"
        assert element.find("upper-bound").findtext("percent-max-heartrate") == "0.7"

    def test_forms_exclusive(self):
        """Should clear the other form of a bound."""
        zone = self._zone()
        zone.lower_relative = 0.5
        assert zone.lower_absolute is None
        zone.upper_absolute = 160
        assert zone.upper_relative is None

    def test_missing_bound(self):
        """Should name the missing bound."""
        zone = HeartRateZone("peak")
        zone.upper_absolute = 180
        with pytest.raises(SerializationError) as exc_info:
            zone.write_xml("zone")
        assert exc_info.value.context["field"] == "lower_bound"

    def test_negative_rejected(self):
        """Should keep the old bound on negative input."""
        zone = self._zone()
        with pytest.raises(ValidationError):
            zone.lower_absolute = -1
        assert zone.lower_absolute == 100

    def test_round_trip_and_str(self):
        """Should parse what it writes."""
        zone = self._zone()
        parsed = HeartRateZone.from_xml(zone.to_xml("zone"))
        assert parsed == zone
        assert str(parsed) == "fat burn: 100 - 70%"
