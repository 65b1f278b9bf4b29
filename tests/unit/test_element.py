"""Tests for the element wrapper and comparators."""

from unittest.mock import PropertyMock

import pytest
from selenium.common.exceptions import StaleElementReferenceException
from urllib3.exceptions import ProtocolError

from conftest import Fatal, make_element
from webtester.automation.element import (
    CONTAINS,
    EQUALS,
    HAS_PREFIX,
    HAS_SUFFIX,
    NOT_EQUALS,
    Comparator,
    Element,
    comparator_name,
)


def Equals(actual, expected):
    return actual == expected


class Strings:
    @staticmethod
    def HasPrefix(actual, expected):
        return actual.startswith(expected)


class TestVerifyText:
    """Tests for Element.verify_text()."""

    def test_match_returns_same_element(self, reporter):
        """Test successful comparison chains."""
        element = Element(reporter, make_element("Go"))

        assert element.verify_text(EQUALS, "Go") is element

    def test_mismatch_message_from_function_name(self, reporter):
        """Test bare callable is named from its qualified name."""
        element = Element(reporter, make_element("Rust"))

        with pytest.raises(Fatal):
            element.verify_text(Equals, "Go")

        assert reporter.fatals == ["want equals Go, got Rust"]

    def test_mismatch_message_from_two_segment_name(self, reporter):
        """Test only the trailing segment of `Class.method` is used."""
        element = Element(reporter, make_element("Rust"))

        with pytest.raises(Fatal):
            element.verify_text(Strings.HasPrefix, "Go")

        assert reporter.fatals == ["want hasprefix Go, got Rust"]

    def test_mismatch_message_from_named_comparator(self, reporter):
        """Test explicit comparator names are used as given."""
        element = Element(reporter, make_element("Rust"))

        with pytest.raises(Fatal, match="want contains Go, got Rust"):
            element.verify_text(CONTAINS, "Go")

    def test_chained_verifications(self, reporter):
        """Test several verifications on one element."""
        element = Element(reporter, make_element("Hello, World"))

        (
            element.verify_text(HAS_PREFIX, "Hello")
            .verify_text(HAS_SUFFIX, "World")
            .verify_text(CONTAINS, ", ")
            .verify_text(NOT_EQUALS, "Hello")
        )

    def test_text_error_is_fatal(self, reporter):
        """Test stale element surfaces as a remote error."""
        raw = make_element("")
        type(raw).text = PropertyMock(side_effect=StaleElementReferenceException("stale"))
        element = Element(reporter, raw)

        with pytest.raises(Fatal, match="get element text"):
            element.verify_text(EQUALS, "Go")

    def test_connection_error_is_fatal(self, reporter):
        """Test a dropped driver connection surfaces as a remote error."""
        raw = make_element("")
        type(raw).text = PropertyMock(side_effect=ProtocolError("Connection aborted."))
        element = Element(reporter, raw)

        with pytest.raises(Fatal, match="get element text"):
            element.verify_text(EQUALS, "Go")


class TestComparator:
    """Tests for Comparator and name derivation."""

    def test_of_keeps_comparator(self):
        """Test wrapping a Comparator returns it unchanged."""
        assert Comparator.of(EQUALS) is EQUALS

    def test_of_wraps_callable(self):
        """Test wrapping a bare function."""
        comparator = Comparator.of(Equals)

        assert comparator.name == "equals"
        assert comparator("a", "a") is True

    def test_name_of_nested_function_kept_whole(self):
        """Test names with more than two segments are only lower-cased."""
        def Same(actual, expected):
            return actual == expected

        name = comparator_name(Same)

        assert name == Same.__qualname__.lower()
        assert "<locals>" in name

    def test_name_of_callable_object(self):
        """Test objects without a qualified name use their type name."""
        class IgnoreCase:
            def __call__(self, actual, expected):
                return actual.lower() == expected.lower()

        assert comparator_name(IgnoreCase()) == "ignorecase"
