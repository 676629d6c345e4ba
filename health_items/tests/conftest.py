"""
Shared pytest fixtures for the health item tests.

Fixtures provide:
1. Representative XML fragments as the service returns them
2. Pre-built value objects used across item tests
3. Logging state isolation for tests that call setup_logging
"""
import logging
import uuid

import pytest

from health_items.values import (
    ApproximateTime,
    CodableValue,
    CodedValue,
    HealthServiceDate,
    HealthServiceDateTime,
)

THING_ID = uuid.UUID("1c2f4a8e-8a57-4b8a-9d8f-2f3c1e6b7a90")
VERSION_STAMP = uuid.UUID("9d7b0c3e-5f1a-4c2b-8e7d-6a5b4c3d2e1f")
UNKNOWN_TYPE_ID = uuid.UUID("00000000-1111-2222-3333-444444444444")


# =============================================================================
# VALUE FIXTURES
# =============================================================================

@pytest.fixture
def thing_id():
    """Item id used in the stored item fragments."""
    return THING_ID


@pytest.fixture
def version_stamp():
    """Version stamp used in the stored item fragments."""
    return VERSION_STAMP


@pytest.fixture
def unknown_type_id():
    """A type id with no catalog entry."""
    return UNKNOWN_TYPE_ID


@pytest.fixture
def when():
    """A complete HealthServiceDateTime: 2024-03-15 08:30."""
    return HealthServiceDateTime(
        date=HealthServiceDate(2024, 3, 15),
        time=ApproximateTime(8, 30),
    )


@pytest.fixture
def kg_units():
    """Coded units for kilograms."""
    return CodableValue("kg", [CodedValue("kg", "weight-units", family="wc", version="1")])


# =============================================================================
# XML FRAGMENTS
# =============================================================================

@pytest.fixture
def blood_pressure_thing_xml():
    """A stored blood pressure item with key and common data."""
    return f"""
    <thing>
        <thing-id version-stamp="{VERSION_STAMP}">{THING_ID}</thing-id>
        <type-id name="Blood Pressure Measurement">ca3c57f4-f4c1-4e15-be67-0a3caf5414ed</type-id>
        <data-xml>
            <blood-pressure>
                <when>
                    <date><y>2024</y><m>3</m><d>15</d></date>
                    <time><h>8</h><m>30</m></time>
                </when>
                <systolic>120</systolic>
                <diastolic>80</diastolic>
                <pulse>62</pulse>
                <irregular-heartbeat>false</irregular-heartbeat>
                <future-element>ignored</future-element>
            </blood-pressure>
            <common>
                <source>Home monitor</source>
                <note>after breakfast</note>
            </common>
        </data-xml>
    </thing>
    """


@pytest.fixture
def unknown_thing_xml():
    """An item whose type id has no registered class."""
    return f"""
    <thing>
        <type-id name="Sleep Session">{UNKNOWN_TYPE_ID}</type-id>
        <data-xml>
            <sleep-session><minutes>420</minutes><awakenings>2</awakenings></sleep-session>
            <common><tags>night</tags></common>
        </data-xml>
    </thing>
    """


@pytest.fixture
def contact_info_xml():
    """Contact details with two phones, one of them primary."""
    return """
    <contact>
        <address>
            <description>home</description>
            <street>1 Main St</street>
            <street>Apt 4</street>
            <city>Springfield</city>
            <state>IL</state>
            <postcode>62701</postcode>
            <country>US</country>
        </address>
        <phone><description>work</description><number>555-0100</number></phone>
        <phone><is-primary>true</is-primary><number>555-0199</number></phone>
        <email><address>jane@example.com</address></email>
    </contact>
    """


# =============================================================================
# LOGGING ISOLATION
# =============================================================================

@pytest.fixture
def restore_logging(monkeypatch):
    """Restore root and package logger state after setup_logging runs."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)

    root_logger = logging.getLogger()
    package_logger = logging.getLogger("health_items")
    saved = (root_logger.level, list(root_logger.handlers), package_logger.level)

    yield

    root_logger.setLevel(saved[0])
    root_logger.handlers = saved[1]
    package_logger.setLevel(saved[2])
