"""Driver service and session lifecycle management."""

from contextlib import contextmanager
from typing import Generator

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.common.service import Service
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.webdriver import WebDriver
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

from webtester.automation.browser import Browser
from webtester.automation.reporter import TestReporter
from webtester.automation.wait import PollWait
from webtester.core.config import BrowserType, Settings, get_settings
from webtester.core.exceptions import RemoteServiceError
from webtester.monitoring.logger import get_logger

logger = get_logger(__name__)


class Driver:
    """Owns the local driver service and every session opened through it.

    One driver process serves many sessions. Sessions are released together
    by `teardown()`, which the owner must call on every exit path.
    """

    def __init__(
        self,
        reporter: TestReporter,
        driver_path: str | None = None,
        browser_type: BrowserType | None = None,
        settings: Settings | None = None,
        service: Service | None = None,
        waiter: PollWait | None = None,
    ) -> None:
        """Initialize driver.

        Args:
            reporter: Fail-fast reporter of the running test
            driver_path: Driver binary path (installed via webdriver-manager if None)
            browser_type: Type of browser to drive
            settings: Harness settings
            service: Pre-built Selenium service to use instead of creating one
            waiter: Poll-wait engine shared by opened browsers
        """
        self._reporter = reporter
        self.settings = settings or get_settings()
        self.browser_type = browser_type or self.settings.browser_type
        self.driver_path = driver_path or self.settings.driver_path
        self._service = service
        self._waiter = waiter or PollWait(settings=self.settings)
        self._sessions: list[WebDriver] = []
        self._started = False

    @property
    def sessions(self) -> tuple[WebDriver, ...]:
        """Sessions opened and not yet released."""
        return tuple(self._sessions)

    def _install_driver(self) -> str:
        managers = {
            BrowserType.CHROME: ChromeDriverManager,
            BrowserType.FIREFOX: GeckoDriverManager,
            BrowserType.EDGE: EdgeChromiumDriverManager,
        }
        path = managers[self.browser_type]().install()
        logger.info(f"Driver binary installed | type={self.browser_type.value} | path={path}")
        return path

    def _create_service(self) -> Service:
        services = {
            BrowserType.CHROME: ChromeService,
            BrowserType.FIREFOX: FirefoxService,
            BrowserType.EDGE: EdgeService,
        }
        path = self.driver_path or self._install_driver()
        return services[self.browser_type](executable_path=path)

    def _options(self) -> ArgOptions:
        """Build the capability request for a new session."""
        if self.browser_type == BrowserType.CHROME:
            options = ChromeOptions()
            if self.settings.headless:
                options.add_argument("--headless=new")
            options.add_argument("--no-sandbox")
            options.add_argument("--disable-dev-shm-usage")

        elif self.browser_type == BrowserType.FIREFOX:
            options = FirefoxOptions()
            if self.settings.headless:
                options.add_argument("--headless")

        elif self.browser_type == BrowserType.EDGE:
            options = EdgeOptions()
            if self.settings.headless:
                options.add_argument("--headless=new")

        else:
            raise ValueError(f"Unsupported browser type: {self.browser_type}")

        options.set_capability("platformName", self.settings.platform_name)
        return options

    def start(self) -> "Driver":
        """Start the local driver service.

        Returns:
            Same Driver
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        try:
            if self._service is None:
                self._service = self._create_service()
            self._service.start()
        except Exception as e:
            self._reporter.fatal(str(RemoteServiceError("start driver", e)))

        self._started = True
        logger.info(
            f"Driver started | type={self.browser_type.value} | url={self._service.service_url}"
        )
        return self

    def open(self) -> Browser:
        """Create a new session and bind a Browser to it.

        Returns:
            Browser for the new session
        """
        __tracebackhide__ = True
        self._reporter.mark_helper()
        if not self._started:
            self._reporter.fatal("driver not started")

        try:
            session = webdriver.Remote(
                command_executor=self._service.service_url,
                options=self._options(),
            )
        except Exception as e:
            self._reporter.fatal(str(RemoteServiceError("new session", e)))

        self._sessions.append(session)
        logger.info(f"Session created | session_id={session.session_id}")

        browser = Browser(self._reporter, session, self._waiter)
        if self.settings.page_load_timeout is not None:
            browser.set_page_load_timeout(self.settings.page_load_timeout)
        return browser

    def teardown(self) -> None:
        """Release every session, then stop the driver service.

        Release is best-effort: a failing session does not keep the rest
        from being released.
        """
        for session in self._sessions:
            session_id = session.session_id
            try:
                session.quit()
                logger.info(f"Session closed | session_id={session_id}")
            except Exception as e:
                logger.error(f"Error closing session {session_id}: {e}")
        self._sessions.clear()

        if self._service is not None and self._started:
            try:
                self._service.stop()
                logger.info("Driver stopped")
            except Exception as e:
                logger.error(f"Error stopping driver: {e}")
            finally:
                self._started = False

    def __enter__(self) -> "Driver":
        """Context manager entry."""
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.teardown()


@contextmanager
def setup(
    reporter: TestReporter,
    driver_path: str | None = None,
    browser_type: BrowserType | None = None,
    settings: Settings | None = None,
) -> Generator[Driver, None, None]:
    """Context manager for a started driver with guaranteed teardown.

    Args:
        reporter: Fail-fast reporter of the running test
        driver_path: Driver binary path
        browser_type: Type of browser to drive
        settings: Harness settings

    Yields:
        Started Driver
    """
    driver = Driver(reporter, driver_path, browser_type, settings)
    try:
        driver.start()
        yield driver
    finally:
        driver.teardown()
