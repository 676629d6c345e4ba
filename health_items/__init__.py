"""
health_items - client-side data model for health record items.

Every value and item type validates its fields in property setters, parses
itself from an XML fragment and writes itself back to XML.

Usage:
    from health_items import deserialize_thing, BloodPressure

    item = deserialize_thing(thing_xml)
    if isinstance(item, BloodPressure):
        print(item.systolic, item.diastolic)
"""

from health_items.core import (
    settings,
    setup_logging,
    HealthItemError,
    ArgumentError,
    ValidationError,
    StructureError,
    SerializationError,
    deserialize_thing,
    get_thing_type,
    get_type_definition,
    list_thing_types,
)
from health_items.items import (
    HealthRecordItem,
    ItemKey,
    CommonItemData,
    Height,
    Weight,
    BloodPressure,
    HeartRate,
    WeightGoal,
    Contact,
    Procedure,
    GenericThing,
)

__version__ = "0.1.0"

__all__ = [
    "settings",
    "setup_logging",
    "HealthItemError",
    "ArgumentError",
    "ValidationError",
    "StructureError",
    "SerializationError",
    "deserialize_thing",
    "get_thing_type",
    "get_type_definition",
    "list_thing_types",
    "HealthRecordItem",
    "ItemKey",
    "CommonItemData",
    "Height",
    "Weight",
    "BloodPressure",
    "HeartRate",
    "WeightGoal",
    "Contact",
    "Procedure",
    "GenericThing",
]
