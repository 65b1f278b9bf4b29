"""Test-context capability consumed by every harness component."""

from typing import NoReturn, Protocol

import pytest

from webtester.monitoring.logger import get_logger

logger = get_logger(__name__)


class TestReporter(Protocol):
    """Fail-fast reporting surface of the host test framework."""

    __test__ = False

    def fatal(self, message: str) -> NoReturn:
        """Abort the current test immediately."""
        ...

    def log(self, message: str) -> None:
        """Record a non-aborting diagnostic."""
        ...

    def mark_helper(self) -> None:
        """Exclude the caller's frames from failure location reporting."""
        ...


class PytestReporter:
    """Reporter backed by pytest's failure machinery and Loguru."""

    def __init__(self, nodeid: str | None = None) -> None:
        """Initialize reporter.

        Args:
            nodeid: Test node id bound to every log record
        """
        self.nodeid = nodeid
        self._logger = logger.bind(test=nodeid)

    def fatal(self, message: str) -> NoReturn:
        __tracebackhide__ = True
        self._logger.error(f"Fatal | {message}")
        pytest.fail(message)

    def log(self, message: str) -> None:
        self._logger.warning(message)

    def mark_helper(self) -> None:
        """No-op: harness frames carry a local `__tracebackhide__` marker."""
