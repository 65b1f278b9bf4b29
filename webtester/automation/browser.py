"""Fail-fast browser facade over one WebDriver session."""

from datetime import timedelta
from pathlib import Path
from typing import NoReturn
from urllib.parse import SplitResult, unquote, urlsplit

from selenium.webdriver.remote.command import Command
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from webtester.automation.element import Element
from webtester.automation.locators import Locator, resolve
from webtester.automation.reporter import TestReporter
from webtester.automation.wait import PollWait
from webtester.core.exceptions import (
    REMOTE_ERRORS,
    LocatorError,
    MalformedURL,
    RemoteServiceError,
    WaitTimeout,
)
from webtester.monitoring.logger import get_logger

logger = get_logger(__name__)

SCREENSHOT_MODE = 0o644


def to_milliseconds(duration: float | timedelta) -> int:
    """Convert seconds or a timedelta to whole milliseconds (truncated)."""
    if not isinstance(duration, timedelta):
        duration = timedelta(seconds=duration)
    return duration // timedelta(milliseconds=1)


def parse_url(raw: str) -> SplitResult:
    """Parse a URL, rejecting syntax that a browser would not accept.

    Args:
        raw: URL string

    Returns:
        Split URL

    Raises:
        MalformedURL: If the URL cannot be parsed
    """
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in raw):
        raise MalformedURL(raw, "invalid control character in URL")
    if raw.startswith(":"):
        raise MalformedURL(raw, "missing protocol scheme")
    try:
        parts = urlsplit(raw)
        parts.port  # validates the port number
    except ValueError as e:
        raise MalformedURL(raw, str(e)) from e
    return parts


class Browser:
    """Navigation, lookup and assertions against a single session.

    Every operation aborts the running test through the reporter on the first
    unrecoverable error. State-dependent checks poll through PollWait.
    """

    def __init__(
        self,
        reporter: TestReporter,
        session: WebDriver,
        waiter: PollWait | None = None,
    ) -> None:
        """Initialize browser facade.

        Args:
            reporter: Fail-fast reporter of the running test
            session: Selenium WebDriver session
            waiter: Poll-wait engine (settings defaults if None)
        """
        self._reporter = reporter
        self._session = session
        self._waiter = waiter or PollWait()
        self._element: WebElement | None = None

    @property
    def session(self) -> WebDriver:
        """Underlying WebDriver session."""
        return self._session

    @property
    def element(self) -> WebElement | None:
        """Element located by the last single-element find."""
        return self._element

    @property
    def current_url(self) -> str:
        """Current page URL; fatal on remote error."""
        __tracebackhide__ = True
        self._reporter.mark_helper()
        try:
            return self._session.current_url
        except REMOTE_ERRORS as e:
            self._fail(RemoteServiceError("get current url", e))

    def _fail(self, error: Exception) -> NoReturn:
        __tracebackhide__ = True
        self._reporter.fatal(str(error))

    def _locate(self, descriptor: str) -> Locator:
        __tracebackhide__ = True
        try:
            return resolve(descriptor)
        except LocatorError as e:
            self._fail(e)

    def _set_timeout(self, category: str, duration: float | timedelta) -> "Browser":
        __tracebackhide__ = True
        ms = to_milliseconds(duration)
        try:
            self._session.execute(Command.SET_TIMEOUTS, {category: ms})
        except REMOTE_ERRORS as e:
            self._fail(RemoteServiceError(f"set {category} timeout", e))
        logger.debug(f"Timeout set | {category}={ms}ms")
        return self

    def set_page_load_timeout(self, duration: float | timedelta) -> "Browser":
        """Configure the page load timeout.

        Args:
            duration: Seconds or timedelta

        Returns:
            Same Browser for chaining
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        return self._set_timeout("pageLoad", duration)

    def set_script_timeout(self, duration: float | timedelta) -> "Browser":
        """Configure the asynchronous script timeout."""
        __tracebackhide__ = True
        self._reporter.mark_helper()
        return self._set_timeout("script", duration)

    def set_implicit_wait(self, duration: float | timedelta) -> "Browser":
        """Configure the remote implicit element wait."""
        __tracebackhide__ = True
        self._reporter.mark_helper()
        return self._set_timeout("implicit", duration)

    def visit(self, url: str) -> "Browser":
        """Navigate to URL.

        Args:
            url: Target URL, validated before the command is sent

        Returns:
            Same Browser for chaining
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        try:
            parse_url(url)
        except MalformedURL as e:
            self._fail(e)

        logger.debug(f"Navigating to: {url}")
        try:
            self._session.get(url)
        except REMOTE_ERRORS as e:
            self._fail(RemoteServiceError(f"navigate to {url}", e))
        return self

    def wait_for(self, descriptor: str) -> "Browser":
        """Poll until one element matches the descriptor.

        Args:
            descriptor: Locator descriptor (`using:value`)

        Returns:
            Same Browser for chaining
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        locator = self._locate(descriptor)

        found: WebElement | None = None
        last_error: Exception | None = None

        def located() -> bool:
            nonlocal found, last_error
            try:
                found = self._session.find_element(*locator.as_tuple())
            except REMOTE_ERRORS as e:
                last_error = RemoteServiceError(f"find element {locator}", e)
                return False
            return True

        outcome = self._waiter.wait_until(located, lambda: last_error)
        if not outcome:
            self._fail(outcome.error or WaitTimeout(f"not found: {locator}"))

        logger.debug(f"Element appeared | {locator} | attempts={outcome.attempts}")
        self._element = found
        return self

    def expect_text(self, descriptor: str, text: str) -> "Browser":
        """Poll until any matching element's text contains `text`.

        Args:
            descriptor: Locator descriptor (`using:value`)
            text: Substring to look for

        Returns:
            Same Browser for chaining
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        locator = self._locate(descriptor)

        last_error: Exception | None = None

        def contains_text() -> bool:
            nonlocal last_error
            try:
                elements = self._session.find_elements(*locator.as_tuple())
                for elem in elements:
                    if text in elem.text:
                        return True
            except REMOTE_ERRORS as e:
                last_error = RemoteServiceError(f"find elements {locator}", e)
            return False

        outcome = self._waiter.wait_until(contains_text, lambda: last_error)
        if not outcome:
            if outcome.error is not None:
                self._reporter.log(str(outcome.error))
            self._fail(WaitTimeout(f"not found: {text}"))
        return self

    def find(self, descriptor: str) -> WebElement:
        """Find one element without polling.

        Args:
            descriptor: Locator descriptor (`using:value`)

        Returns:
            Selenium WebElement
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        locator = self._locate(descriptor)
        try:
            elem = self._session.find_element(*locator.as_tuple())
        except REMOTE_ERRORS as e:
            self._fail(RemoteServiceError(f"find element {locator}", e))
        self._element = elem
        return elem

    def must_find(self, descriptor: str) -> Element:
        """Find one element without polling and wrap it.

        Args:
            descriptor: Locator descriptor (`using:value`)

        Returns:
            Element wrapper
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        return Element(self._reporter, self.find(descriptor))

    def find_all(self, descriptor: str) -> list[WebElement]:
        """Find every matching element without polling.

        Does not change `element`.
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        locator = self._locate(descriptor)
        try:
            return self._session.find_elements(*locator.as_tuple())
        except REMOTE_ERRORS as e:
            self._fail(RemoteServiceError(f"find elements {locator}", e))

    def take_screenshot(self, filename: str | Path) -> "Browser":
        """Save a PNG screenshot of the current page.

        Args:
            filename: Destination path, written with mode 0644

        Returns:
            Same Browser for chaining
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        try:
            png = self._session.get_screenshot_as_png()
        except REMOTE_ERRORS as e:
            self._fail(RemoteServiceError("take screenshot", e))

        path = Path(filename)
        try:
            path.write_bytes(png)
            path.chmod(SCREENSHOT_MODE)
        except OSError as e:
            self._fail(e)

        logger.debug(f"Screenshot saved: {path}")
        return self

    def expect_transit_to(self, url: str) -> "Browser":
        """Poll until the current URL path equals the path of `url`.

        Scheme, host, query and fragment are ignored.

        Args:
            url: Expected URL

        Returns:
            Same Browser for chaining
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        try:
            expected_path = unquote(parse_url(url).path)
        except MalformedURL as e:
            self._fail(e)

        last_error: Exception | None = None

        def arrived() -> bool:
            nonlocal last_error
            try:
                current = self._session.current_url
            except REMOTE_ERRORS as e:
                last_error = RemoteServiceError("get current url", e)
                return False
            try:
                return unquote(parse_url(current).path) == expected_path
            except MalformedURL as e:
                last_error = e
                return False

        outcome = self._waiter.wait_until(arrived, lambda: last_error)
        if not outcome:
            if outcome.error is not None:
                self._reporter.log(str(outcome.error))
            self._fail(WaitTimeout(f"not found: {url}"))
        return self
