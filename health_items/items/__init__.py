"""
Top-level item types ("thing types").

Importing this package registers every item class with the type registry.

Usage:
    from health_items.items import BloodPressure
    from health_items.core.type_registry import deserialize_thing

    item = deserialize_thing(thing_xml)
"""

from health_items.items.base import HealthRecordItem, ItemKey, CommonItemData
from health_items.items.vitals import Height, Weight, BloodPressure, HeartRate
from health_items.items.goals import WeightGoal
from health_items.items.contact import Contact
from health_items.items.procedure import Procedure
from health_items.items.generic import GenericThing

__all__ = [
    # Base and envelope
    "HealthRecordItem",
    "ItemKey",
    "CommonItemData",
    # Item types
    "Height",
    "Weight",
    "BloodPressure",
    "HeartRate",
    "WeightGoal",
    "Contact",
    "Procedure",
    # Fallback
    "GenericThing",
]
