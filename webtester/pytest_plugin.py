"""Pytest fixtures providing a started driver and a browser per test."""

from typing import Generator

import pytest

from webtester.automation.browser import Browser
from webtester.automation.driver import Driver, setup
from webtester.automation.reporter import PytestReporter
from webtester.core.config import BrowserType, get_settings
from webtester.monitoring.logger import setup_logging


def pytest_addoption(parser):
    """Register command line options."""
    group = parser.getgroup("webtester")
    group.addoption(
        "--webtester-driver-path",
        default=None,
        help="Path to the browser driver binary (installed on demand if unset)",
    )
    group.addoption(
        "--webtester-browser",
        default=None,
        choices=[b.value for b in BrowserType],
        help="Browser to drive",
    )
    group.addoption(
        "--webtester-log-level",
        default=None,
        help="Configure harness logging at this level",
    )


def pytest_configure(config):
    """Configure harness logging when requested."""
    level = config.getoption("--webtester-log-level", default=None)
    if level:
        settings = get_settings().model_copy(update={"log_level": level.upper()})
        setup_logging(settings)


@pytest.fixture
def webtester_reporter(request) -> PytestReporter:
    """Reporter bound to the running test."""
    return PytestReporter(request.node.nodeid)


@pytest.fixture
def webtester_driver(request, webtester_reporter) -> Generator[Driver, None, None]:
    """Started driver; every session it opened is released after the test."""
    browser_type = request.config.getoption("--webtester-browser")
    with setup(
        webtester_reporter,
        driver_path=request.config.getoption("--webtester-driver-path"),
        browser_type=BrowserType(browser_type) if browser_type else None,
    ) as driver:
        yield driver


@pytest.fixture
def browser(webtester_driver) -> Browser:
    """Browser on a fresh session."""
    return webtester_driver.open()
