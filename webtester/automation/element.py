"""Located element wrapper and named text comparators."""

from dataclasses import dataclass
from typing import Callable

from selenium.webdriver.remote.webelement import WebElement

from webtester.automation.reporter import TestReporter
from webtester.core.exceptions import REMOTE_ERRORS, RemoteServiceError, VerificationMismatch
from webtester.monitoring.logger import get_logger

logger = get_logger(__name__)


def comparator_name(func: Callable[..., bool]) -> str:
    """Derive a human-readable name from a callable.

    `Text.equals` becomes `equals`; anything that is not exactly two
    dot-separated segments is kept whole. Always lower-cased.
    """
    name = getattr(func, "__qualname__", None) or type(func).__name__
    parts = name.split(".")
    if len(parts) == 2:
        name = parts[1]
    return name.lower()


@dataclass(frozen=True)
class Comparator:
    """A comparison function paired with the name used in failure messages."""

    name: str
    func: Callable[[str, str], bool]

    def __call__(self, actual: str, expected: str) -> bool:
        return self.func(actual, expected)

    @classmethod
    def of(cls, func: "Comparator | Callable[[str, str], bool]") -> "Comparator":
        """Wrap a bare callable, naming it from its qualified name.

        Args:
            func: Comparator or callable taking (actual, expected)

        Returns:
            Comparator instance
        """
        if isinstance(func, Comparator):
            return func
        return cls(name=comparator_name(func), func=func)


EQUALS = Comparator("equals", lambda actual, expected: actual == expected)
NOT_EQUALS = Comparator("not equals", lambda actual, expected: actual != expected)
CONTAINS = Comparator("contains", lambda actual, expected: expected in actual)
HAS_PREFIX = Comparator("has prefix", lambda actual, expected: actual.startswith(expected))
HAS_SUFFIX = Comparator("has suffix", lambda actual, expected: actual.endswith(expected))


class Element:
    """A single located DOM element."""

    def __init__(self, reporter: TestReporter, raw: WebElement) -> None:
        """Initialize element wrapper.

        Args:
            reporter: Fail-fast reporter of the running test
            raw: Selenium WebElement
        """
        self._reporter = reporter
        self._raw = raw

    @property
    def raw(self) -> WebElement:
        """Underlying Selenium element."""
        return self._raw

    @property
    def text(self) -> str:
        """Current text of the element; fatal on remote error."""
        __tracebackhide__ = True
        self._reporter.mark_helper()
        try:
            return self._raw.text
        except REMOTE_ERRORS as e:
            self._reporter.fatal(str(RemoteServiceError("get element text", e)))

    def verify_text(
        self,
        comparator: Comparator | Callable[[str, str], bool],
        expected: str,
    ) -> "Element":
        """Compare the element text against an expected value.

        Args:
            comparator: Comparator, or callable named from its qualified name
            expected: Expected value passed as the comparator's second argument

        Returns:
            Same Element for chaining
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        comparator = Comparator.of(comparator)
        actual = self.text

        if not comparator(actual, expected):
            self._reporter.fatal(str(VerificationMismatch(comparator.name, expected, actual)))

        logger.debug(f"Verified text | {comparator.name} {expected!r}")
        return self
