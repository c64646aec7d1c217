"""Browser-automation drivers the interpreter talks to."""

from .base import WebDriver, LOCATOR_TYPES
from .remote import RemoteWebDriver

__all__ = ['WebDriver', 'LOCATOR_TYPES', 'RemoteWebDriver']
