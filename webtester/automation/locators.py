"""Locator descriptor resolution."""

from dataclasses import dataclass
from enum import Enum

from webtester.core.exceptions import InvalidDescriptorFormat, UnsupportedStrategy


class FindStrategy(str, Enum):
    """WebDriver element location strategies."""

    ID = "id"
    NAME = "name"
    CLASS_NAME = "class name"
    TAG_NAME = "tag name"
    CSS_SELECTOR = "css selector"
    XPATH = "xpath"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"


ALIASES: dict[str, FindStrategy] = {
    "class": FindStrategy.CLASS_NAME,
    "css": FindStrategy.CSS_SELECTOR,
    "tag": FindStrategy.TAG_NAME,
}


@dataclass(frozen=True)
class Locator:
    """A resolved (strategy, value) pair."""

    strategy: FindStrategy
    value: str

    def as_tuple(self) -> tuple[str, str]:
        """Get the (by, value) pair accepted by Selenium find calls.

        Returns:
            Tuple of strategy identifier and value
        """
        return self.strategy.value, self.value

    def __str__(self) -> str:
        return f"{self.strategy.value}:{self.value}"


def to_strategy(token: str) -> FindStrategy | None:
    """Map a strategy token or alias to a FindStrategy.

    Args:
        token: Token as written in a descriptor, matched case-sensitively

    Returns:
        FindStrategy or None if the token is unknown
    """
    try:
        return FindStrategy(token)
    except ValueError:
        return ALIASES.get(token)


def resolve(descriptor: str) -> Locator:
    """Parse a `using:value` descriptor.

    The descriptor is split on the first colon only, so values such as
    `xpath://a[@href='http://x']` keep their own colons.

    Args:
        descriptor: Descriptor string

    Returns:
        Resolved Locator

    Raises:
        InvalidDescriptorFormat: If the descriptor has no colon
        UnsupportedStrategy: If the strategy token is not recognized
    """
    token, sep, value = descriptor.partition(":")
    if not sep:
        raise InvalidDescriptorFormat(descriptor)

    strategy = to_strategy(token)
    if strategy is None:
        raise UnsupportedStrategy(token)
    return Locator(strategy=strategy, value=value)
