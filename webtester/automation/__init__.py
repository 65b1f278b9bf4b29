"""Automation module - locators, polling, sessions, browser and element wrappers."""

from .browser import Browser
from .driver import Driver, setup
from .element import Comparator, Element
from .locators import FindStrategy, Locator, resolve
from .wait import PollWait, WaitOutcome

__all__ = [
    "Browser",
    "Comparator",
    "Driver",
    "Element",
    "FindStrategy",
    "Locator",
    "PollWait",
    "WaitOutcome",
    "resolve",
    "setup",
]
