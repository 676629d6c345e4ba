"""
Tests for the optional-field XML mapping helpers.

Tests cover:
- Absence vs. empty for optional readers
- Typed readers and malformed text
- Conditional writers and value formatting
- Hardened fragment parsing
"""
import uuid

import pytest
from lxml import etree

from health_items.core import xml_mapping as xm
from health_items.core.config import settings
from health_items.core.exceptions import ArgumentError, SerializationError, StructureError
from health_items.values import CodableValue


def _node(text):
    return etree.fromstring(text)


# =============================================================================
# TESTS: Readers
# =============================================================================

class TestReadOptional:
    """Tests for read_optional and its typed variants."""

    def test_absent_child_is_none(self):
        """Should return None when the element is missing."""
        assert xm.read_optional(_node("<a><b>x</b></a>"), "c") is None

    def test_empty_child_is_empty_string(self):
        """Should distinguish a present-but-empty element from absence."""
        assert xm.read_optional(_node("<a><b/></a>"), "b") == ""

    def test_first_match_wins(self):
        """Should read the first matching child only."""
        assert xm.read_optional(_node("<a><b>1</b><b>2</b></a>"), "b") == "1"

    def test_bool_lexical_forms(self):
        """Should accept every xs:boolean form."""
        node = _node("<a><t>true</t><f>false</f><one>1</one><zero>0</zero></a>")
        assert xm.read_optional_bool(node, "t") is True
        assert xm.read_optional_bool(node, "f") is False
        assert xm.read_optional_bool(node, "one") is True
        assert xm.read_optional_bool(node, "zero") is False
        assert xm.read_optional_bool(node, "missing") is None

    def test_malformed_bool_raises_structure_error(self):
        """Should name the element holding malformed text."""
        with pytest.raises(StructureError) as exc_info:
            xm.read_optional_bool(_node("<a><flag>yes</flag></a>"), "flag")
        assert exc_info.value.context["element"] == "flag"

    def test_int_float_uuid(self):
        """Should convert numeric and UUID text."""
        type_id = uuid.uuid4()
        node = _node(f"<a><i> 42 </i><f>1.5</f><u>{type_id}</u></a>")
        assert xm.read_optional_int(node, "i") == 42
        assert xm.read_optional_float(node, "f") == 1.5
        assert xm.read_optional_uuid(node, "u") == type_id

    def test_malformed_int_raises_structure_error(self):
        """Should not leak ValueError for bad numbers."""
        with pytest.raises(StructureError):
            xm.read_optional_int(_node("<a><i>4.2</i></a>"), "i")

    @pytest.mark.parametrize("text", ["1_000", "0x10", "", "\u0661\u0662"])
    def test_int_requires_schema_lexical_form(self, text):
        """Should reject forms Python's int() accepts but xs:int does not."""
        with pytest.raises(StructureError) as exc_info:
            xm.read_optional_int(_node(f"<a><i>{text}</i></a>"), "i")
        assert exc_info.value.context["element"] == "i"

    @pytest.mark.parametrize("text", ["1_000.5", "infinity", "inf", "INF", "NaN", "1e999", "1.5f"])
    def test_float_requires_finite_schema_lexical_form(self, text):
        """Should reject non-schema and non-finite doubles."""
        with pytest.raises(StructureError):
            xm.read_optional_float(_node(f"<a><f>{text}</f></a>"), "f")

    def test_schema_numeric_forms_accepted(self):
        """Should accept signs, exponents and bare fractions."""
        node = _node("<a><i>-7</i><j>+3</j><f>1.5E2</f><g>.5</g><h>-2.</h></a>")
        assert xm.read_optional_int(node, "i") == -7
        assert xm.read_optional_int(node, "j") == 3
        assert xm.read_optional_float(node, "f") == 150.0
        assert xm.read_optional_float(node, "g") == 0.5
        assert xm.read_mandatory_float(node, "h") == -2.0

    def test_conversion_error_chained(self):
        """Should keep the underlying error as the cause."""
        with pytest.raises(StructureError) as exc_info:
            xm.read_optional_int(_node("<a><i>x</i></a>"), "i")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_optional_attribute(self):
        """Should return attribute values or None."""
        node = _node('<a units="kg"/>')
        assert xm.read_optional_attribute(node, "units") == "kg"
        assert xm.read_optional_attribute(node, "text") is None


class TestReadMandatory:
    """Tests for read_mandatory and the typed readers."""

    def test_missing_element_raises(self):
        """Should raise StructureError naming the element."""
        with pytest.raises(StructureError) as exc_info:
            xm.read_mandatory(_node("<a/>"), "value")
        assert "value" in str(exc_info.value)

    def test_read_all_in_document_order(self):
        """Should return every match in order, or an empty list."""
        node = _node("<a><s>1</s><x/><s>2</s></a>")
        assert xm.read_all(node, "s") == ["1", "2"]
        assert xm.read_all(node, "missing") == []

    def test_typed_child(self):
        """Should build nested values via from_xml."""
        node = _node("<a><name><text>Flu shot</text></name></a>")
        value = xm.read_optional_typed(node, "name", CodableValue)
        assert value.text == "Flu shot"
        assert xm.read_optional_typed(node, "other", CodableValue) is None

    def test_mandatory_typed_child_missing(self):
        """Should raise StructureError when a mandatory nested value is absent."""
        with pytest.raises(StructureError):
            xm.read_mandatory_typed(_node("<a/>"), "name", CodableValue)


class TestRequireElement:
    """Tests for locating entity roots."""

    def test_node_itself_matches(self):
        """Should return the node when its tag is the expected name."""
        node = _node("<height/>")
        assert xm.require_element(node, "height") is node

    def test_child_matches(self):
        """Should find the root among the node's children."""
        node = _node("<data-xml><height/></data-xml>")
        assert xm.require_element(node, "height").tag == "height"

    def test_missing_root(self):
        """Should raise StructureError when the root is absent."""
        with pytest.raises(StructureError):
            xm.require_element(_node("<data-xml><weight/></data-xml>"), "height")

    def test_none_node(self):
        """Should reject a missing node as an argument problem."""
        with pytest.raises(ArgumentError):
            xm.require_element(None, "height")


# =============================================================================
# TESTS: Writers
# =============================================================================

class TestWriters:
    """Tests for write_optional, write_element and format_value."""

    def test_none_writes_nothing(self):
        """Should never emit an empty marker for absence."""
        parent = etree.Element("a")
        assert xm.write_optional(parent, "description", None) is None
        assert len(parent) == 0

    def test_empty_string_is_written(self):
        """Should write a present-but-empty string."""
        parent = etree.Element("a")
        xm.write_optional(parent, "description", "")
        assert parent.find("description") is not None

    def test_false_is_written(self):
        """Should treat False as present."""
        parent = etree.Element("a")
        xm.write_optional(parent, "is-primary", False)
        assert parent.findtext("is-primary") == "false"

    def test_composite_delegates_to_write_xml(self):
        """Should let value types write themselves."""
        parent = etree.Element("a")
        xm.write_element(parent, "name", CodableValue("Flu shot"))
        assert parent.find("name").findtext("text") == "Flu shot"

    def test_write_all_preserves_order(self):
        """Should write one element per value in order."""
        parent = etree.Element("a")
        xm.write_all(parent, "street", ["1 Main St", "Apt 4"])
        assert [child.text for child in parent] == ["1 Main St", "Apt 4"]

    @pytest.mark.parametrize("value,expected", [
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (1.5, "1.5"),
        (2.0, "2.0"),
        (float("nan"), "NaN"),
        (float("inf"), "INF"),
        (float("-inf"), "-INF"),
        ("text", "text"),
    ])
    def test_format_value(self, value, expected):
        """Should render scalars in XML Schema lexical form."""
        assert xm.format_value(value) == expected

    def test_optional_attribute(self):
        """Should set attributes only for present values."""
        element = etree.Element("a")
        xm.write_optional_attribute(element, "name", None)
        xm.write_optional_attribute(element, "flag", True)
        assert element.get("name") is None
        assert element.get("flag") == "true"

    def test_require_non_null(self):
        """Should name the unset field."""
        assert xm.require_non_null(0, "value") == 0
        with pytest.raises(SerializationError) as exc_info:
            xm.require_non_null(None, "address")
        assert exc_info.value.context["field"] == "address"
        assert "address" in str(exc_info.value)

    def test_new_element_rejects_blank_name(self):
        """Should reject empty or whitespace element names."""
        with pytest.raises(ArgumentError):
            xm.new_element("   ")

    @pytest.mark.parametrize("name", ["bad name", "1st", "a<b"])
    def test_new_element_rejects_invalid_name(self, name):
        """Should raise ArgumentError instead of lxml's ValueError."""
        with pytest.raises(ArgumentError) as exc_info:
            xm.new_element(name)
        assert exc_info.value.context["field"] == "element_name"
        assert isinstance(exc_info.value.__cause__, ValueError)


# =============================================================================
# TESTS: Fragment parsing
# =============================================================================

class TestParseFragment:
    """Tests for the hardened fragment parser."""

    def test_parses_str_and_bytes(self):
        """Should accept both text and bytes."""
        assert xm.parse_fragment("<a/>").tag == "a"
        assert xm.parse_fragment(b"<a/>").tag == "a"

    def test_none_is_argument_error(self):
        """Should reject None input."""
        with pytest.raises(ArgumentError):
            xm.parse_fragment(None)

    @pytest.mark.parametrize("text", ["", "   ", "<a>", "not xml", "<a></b>"])
    def test_empty_or_malformed_is_structure_error(self, text):
        """Should reject empty and malformed XML."""
        with pytest.raises(StructureError):
            xm.parse_fragment(text)

    def test_doctype_rejected(self):
        """Should refuse documents carrying a DOCTYPE."""
        with pytest.raises(StructureError):
            xm.parse_fragment("<!DOCTYPE a><a/>")

    def test_size_limit(self, monkeypatch):
        """Should reject fragments over the configured size."""
        monkeypatch.setattr(settings, "max_fragment_bytes", 10)
        with pytest.raises(ArgumentError):
            xm.parse_fragment("<a>0123456789</a>")

    def test_comments_dropped(self):
        """Should strip comments while parsing."""
        root = xm.parse_fragment("<a><!-- note --><b/></a>")
        assert [child.tag for child in root] == ["b"]

    def test_to_string_round_trip(self):
        """Should serialize without an XML declaration."""
        root = xm.parse_fragment("<a><b>1</b></a>")
        assert xm.to_string(root) == "<a><b>1</b></a>"
        assert xm.to_bytes(root).startswith(b"<?xml")
