"""Fixed-interval polling of page state."""

import time
from dataclasses import dataclass
from typing import Callable

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.support.ui import WebDriverWait

from webtester.core.config import Settings, get_settings
from webtester.monitoring.logger import get_logger

logger = get_logger(__name__)


@dataclass
class WaitOutcome:
    """Result of a poll-wait."""

    success: bool
    error: Exception | None = None
    attempts: int = 0
    elapsed: float = 0.0

    def __bool__(self) -> bool:
        return self.success


class PollWait:
    """Evaluates a predicate at a fixed interval until it holds or time runs out."""

    def __init__(
        self,
        poll_interval: float | None = None,
        timeout: float | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize poll-wait engine.

        Args:
            poll_interval: Seconds between predicate evaluations
            timeout: Total deadline in seconds
            settings: Source of defaults for unset options

        Raises:
            ValueError: If poll_interval is not positive or timeout is negative
        """
        settings = settings or get_settings()
        self.poll_interval = poll_interval if poll_interval is not None else settings.poll_interval
        self.timeout = timeout if timeout is not None else settings.wait_timeout

        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be > 0")
        if self.timeout < 0:
            raise ValueError("timeout must be >= 0")

    def wait_until(
        self,
        predicate: Callable[[], bool],
        last_error: Callable[[], Exception | None] | None = None,
    ) -> WaitOutcome:
        """Block until predicate returns True or the deadline passes.

        The predicate runs on the calling thread. It is responsible for
        capturing its own errors; `last_error` is read once on timeout so the
        outcome can carry the final one.

        Args:
            predicate: Zero-argument callable returning bool
            last_error: Callable returning the last error the predicate saw

        Returns:
            WaitOutcome
        """
        attempts = 0

        def condition(_) -> bool:
            nonlocal attempts
            attempts += 1
            return predicate()

        # No session is needed: the predicate closes over its own
        wait = WebDriverWait(
            None,
            self.timeout,
            poll_frequency=self.poll_interval,
            ignored_exceptions=(),
        )

        start = time.monotonic()
        try:
            wait.until(condition)
        except TimeoutException:
            elapsed = time.monotonic() - start
            error = last_error() if last_error is not None else None
            logger.debug(
                f"Wait timed out | attempts={attempts} | elapsed={elapsed:.2f}s | timeout={self.timeout}s"
            )
            return WaitOutcome(success=False, error=error, attempts=attempts, elapsed=elapsed)

        return WaitOutcome(success=True, attempts=attempts, elapsed=time.monotonic() - start)
