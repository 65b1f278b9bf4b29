"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from webtester.automation.wait import PollWait  # noqa: E402


class Fatal(Exception):
    """Raised by RecordingReporter.fatal to abort the code under test."""


class RecordingReporter:
    """Reporter that records diagnostics and raises on fatal."""

    def __init__(self) -> None:
        self.logs: list[str] = []
        self.fatals: list[str] = []
        self.helper_calls = 0

    def fatal(self, message: str):
        self.fatals.append(message)
        raise Fatal(message)

    def log(self, message: str) -> None:
        self.logs.append(message)

    def mark_helper(self) -> None:
        self.helper_calls += 1


@pytest.fixture
def reporter():
    """Recording reporter."""
    return RecordingReporter()


@pytest.fixture
def fast_waiter():
    """Poll-wait engine with short deadlines."""
    return PollWait(poll_interval=0.01, timeout=0.1)


@pytest.fixture
def session():
    """Stand-in for a Selenium WebDriver session."""
    return Mock(name="session")


def make_element(text: str) -> Mock:
    """Stand-in for a Selenium WebElement with the given text."""
    elem = Mock(name=f"element<{text}>")
    elem.text = text
    return elem
