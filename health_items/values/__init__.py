"""
Value types shared by the item types.

This package contains:
- ItemData: base class with the parse/write contract
- Primitive wrappers: DisplayValue and the Measurement family
- Composites: coded values, contact details, people, dates, ranges and goals

Usage:
    from health_items.values import Email

    email = Email("someone@example.com", description="work", is_primary=True)
    xml = email.to_xml("email")
"""

from health_items.values.base import ItemData
from health_items.values.display_value import DisplayValue
from health_items.values.measurement import (
    Measurement,
    Length,
    Weight,
    Pressure,
    BloodGlucoseMeasurement,
)
from health_items.values.coded import CodedValue, CodableValue
from health_items.values.contact import Address, Phone, Email, ContactInfo
from health_items.values.person import Name, Organization, Person
from health_items.values.dates import (
    HealthServiceDate,
    ApproximateTime,
    HealthServiceDateTime,
    ApproximateDate,
    ApproximateDateTime,
)
from health_items.values.ranges import (
    DoubleRange,
    IntRange,
    StructuredMeasurement,
    GeneralMeasurement,
    GoalRange,
    Goal,
    HeartRateZone,
)

__all__ = [
    "ItemData",
    # Primitive wrappers
    "DisplayValue",
    "Measurement",
    "Length",
    "Weight",
    "Pressure",
    "BloodGlucoseMeasurement",
    # Codes
    "CodedValue",
    "CodableValue",
    # Contact and people
    "Address",
    "Phone",
    "Email",
    "ContactInfo",
    "Name",
    "Organization",
    "Person",
    # Dates and times
    "HealthServiceDate",
    "ApproximateTime",
    "HealthServiceDateTime",
    "ApproximateDate",
    "ApproximateDateTime",
    # Ranges and goals
    "DoubleRange",
    "IntRange",
    "StructuredMeasurement",
    "GeneralMeasurement",
    "GoalRange",
    "Goal",
    "HeartRateZone",
]
