"""webtester - fluent, fail-fast browser test harness on Selenium WebDriver."""

from webtester.automation.browser import Browser
from webtester.automation.driver import Driver, setup
from webtester.automation.element import (
    CONTAINS,
    EQUALS,
    HAS_PREFIX,
    HAS_SUFFIX,
    NOT_EQUALS,
    Comparator,
    Element,
)
from webtester.automation.locators import FindStrategy, Locator, resolve
from webtester.automation.reporter import PytestReporter, TestReporter
from webtester.automation.wait import PollWait, WaitOutcome

__version__ = "0.1.0"

__all__ = [
    "Browser",
    "Comparator",
    "CONTAINS",
    "Driver",
    "Element",
    "EQUALS",
    "FindStrategy",
    "HAS_PREFIX",
    "HAS_SUFFIX",
    "Locator",
    "NOT_EQUALS",
    "PollWait",
    "PytestReporter",
    "TestReporter",
    "WaitOutcome",
    "resolve",
    "setup",
]
