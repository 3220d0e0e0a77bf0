# This file makes selenium_extensions.core a Python package and exposes key classes.

from .config_loader import ConfigLoader
from .errors import (
    SeleniumExtensionsError,
    ConfigurationError,
    ElementNotFoundError,
    AmbiguousResultError,
    OutOfRangeError,
    PreconditionViolation,
    WaitTimeoutError,
)
from .browser_manager import Browser

__all__ = [
    "Browser",
    "ConfigLoader",
    "SeleniumExtensionsError",
    "ConfigurationError",
    "ElementNotFoundError",
    "AmbiguousResultError",
    "OutOfRangeError",
    "PreconditionViolation",
    "WaitTimeoutError",
]
