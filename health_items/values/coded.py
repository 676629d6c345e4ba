"""
Coded values - vocabulary codes and the text + codes wrapper around them.

Wire shapes:
    <code>
        <value>kg</value>
        <family>wc</family>
        <type>weight-units</type>
        <version>1</version>
    </code>

    <name>
        <text>Appendectomy</text>
        <code>...</code>
    </name>
"""
from typing import Any, Iterator, List, Optional

from health_items.core import validators
from health_items.core import xml_mapping as xm
from health_items.values.base import ItemData


class CodedValue(ItemData):
    """
    One code from a vocabulary.

    Attributes:
        value: The code itself (mandatory)
        vocabulary_name: Vocabulary the code belongs to, written as <type> (mandatory)
        family: Optional vocabulary family (e.g. "wc", "hl7")
        version: Optional vocabulary version
    """

    def __init__(
        self,
        value: Optional[str] = None,
        vocabulary_name: Optional[str] = None,
        family: Optional[str] = None,
        version: Optional[str] = None,
    ):
        self._value: Optional[str] = None
        self._family: Optional[str] = None
        self._vocabulary_name: Optional[str] = None
        self._version: Optional[str] = None

        if value is not None:
            self.value = value
        if vocabulary_name is not None:
            self.vocabulary_name = vocabulary_name
        self.family = family
        self.version = version

    def _parse(self, node: Any) -> None:
        self._value = xm.read_mandatory(node, "value")
        self._family = xm.read_optional(node, "family")
        self._vocabulary_name = xm.read_mandatory(node, "type")
        self._version = xm.read_optional(node, "version")

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._value, "value")
        xm.require_non_null(self._vocabulary_name, "vocabulary_name")
        xm.write_element(element, "value", self._value)
        xm.write_optional(element, "family", self._family)
        xm.write_element(element, "type", self._vocabulary_name)
        xm.write_optional(element, "version", self._version)

    @property
    def value(self) -> Optional[str]:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self._value = validators.check_not_blank(value, "value")

    @property
    def vocabulary_name(self) -> Optional[str]:
        return self._vocabulary_name

    @vocabulary_name.setter
    def vocabulary_name(self, value: str) -> None:
        self._vocabulary_name = validators.check_not_blank(value, "vocabulary_name")

    @property
    def family(self) -> Optional[str]:
        return self._family

    @family.setter
    def family(self, value: Optional[str]) -> None:
        self._family = validators.check_not_whitespace(value, "family")

    @property
    def version(self) -> Optional[str]:
        return self._version

    @version.setter
    def version(self, value: Optional[str]) -> None:
        self._version = validators.check_not_whitespace(value, "version")

    def __str__(self) -> str:
        parts = [self._family, self._vocabulary_name, self._version, self._value]
        return ", ".join(part for part in parts if part is not None)


class CodableValue(ItemData):
    """
    Free text optionally backed by one or more vocabulary codes.

    Behaves as a sequence of CodedValue: len(), iteration, indexing,
    append() and clear() operate on the codes.
    """

    def __init__(self, text: Optional[str] = None, codes: Optional[List[CodedValue]] = None):
        self._text: Optional[str] = None
        self._codes: List[CodedValue] = []

        if text is not None:
            self.text = text
        for code in codes or []:
            self.append(code)

    def _parse(self, node: Any) -> None:
        self._text = xm.read_mandatory(node, "text")
        self._codes = xm.read_all_typed(node, "code", CodedValue)

    def _write(self, element: Any) -> None:
        xm.require_non_null(self._text, "text")
        xm.write_element(element, "text", self._text)
        xm.write_all(element, "code", self._codes)

    @property
    def text(self) -> Optional[str]:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = validators.check_not_blank(value, "text")

    @property
    def codes(self) -> List[CodedValue]:
        return self._codes

    def append(self, code: CodedValue) -> None:
        self._codes.append(validators.check_instance(code, CodedValue, "code", optional=False))

    def clear(self) -> None:
        """Remove the text and every code."""
        self._text = None
        self._codes = []

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[CodedValue]:
        return iter(self._codes)

    def __getitem__(self, index: int) -> CodedValue:
        return self._codes[index]

    def __bool__(self) -> bool:
        # An instance with text but no codes is still a meaningful value
        return True

    def __str__(self) -> str:
        return self._text or ""
