"""Harness error taxonomy."""

from selenium.common.exceptions import WebDriverException
from urllib3.exceptions import HTTPError


class WebTesterError(Exception):
    """Base error for the harness."""


class LocatorError(WebTesterError):
    """A locator descriptor could not be resolved."""


class InvalidDescriptorFormat(LocatorError):
    """Descriptor lacks the `using:value` separator."""

    def __init__(self, descriptor: str) -> None:
        super().__init__(f"expect target format `using:value`, got {descriptor!r}")
        self.descriptor = descriptor


class UnsupportedStrategy(LocatorError):
    """Descriptor names a strategy that is neither canonical nor an alias."""

    def __init__(self, token: str) -> None:
        super().__init__(f"not supported: using={token}")
        self.token = token


class RemoteServiceError(WebTesterError):
    """The remote driver rejected or failed a command."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause


class WaitTimeout(WebTesterError):
    """A polled condition never held before the deadline."""


class MalformedURL(WebTesterError):
    """A URL could not be parsed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"parse {url!r}: {reason}")
        self.url = url
        self.reason = reason


class VerificationMismatch(WebTesterError):
    """An element comparison returned false."""

    def __init__(self, name: str, expected: str, actual: str) -> None:
        super().__init__(f"want {name} {expected}, got {actual}")
        self.name = name
        self.expected = expected
        self.actual = actual


# Failures raised by Selenium's client: command errors, and transport errors
# when the driver service is unreachable.
REMOTE_ERRORS = (WebDriverException, HTTPError)
