"""
Error taxonomy for selenium-extensions.

- SeleniumExtensionsError: base class of every error raised by this package
- ConfigurationError: a query was built wrongly (no primary selector, duplicate XPath)
- ElementNotFoundError / AmbiguousResultError / OutOfRangeError: resolution did not
  yield exactly one element
- PreconditionViolation: acting on an element in the wrong state (e.g. disabled)
- WaitTimeoutError: a wait budget was exhausted and the caller asked for a failure

Driver errors from `selenium.common.exceptions` are not wrapped.
"""

from typing import Optional


class SeleniumExtensionsError(Exception):
    """Base class for all custom errors in selenium-extensions."""

    def __init__(self, message: str, *, criteria: Optional[str] = None) -> None:
        super().__init__(message)
        self.criteria: Optional[str] = criteria

    def __str__(self) -> str:
        text = super().__str__()
        if self.criteria:
            return f"{text} | criteria: {self.criteria}"
        return text


class ConfigurationError(SeleniumExtensionsError):
    """Raised when search criteria cannot be resolved as configured."""


class ElementNotFoundError(SeleniumExtensionsError):
    """Raised when no element matches where exactly one was expected."""


class AmbiguousResultError(SeleniumExtensionsError):
    """Raised when several elements match and no position was given."""

    def __init__(self, message: str, *, count: int, criteria: Optional[str] = None) -> None:
        super().__init__(message, criteria=criteria)
        self.count: int = count


class OutOfRangeError(SeleniumExtensionsError, IndexError):
    """Raised when a positional index falls outside the matched elements."""

    def __init__(self, message: str, *, index: int, count: int, criteria: Optional[str] = None) -> None:
        super().__init__(message, criteria=criteria)
        self.index: int = index
        self.count: int = count


class PreconditionViolation(SeleniumExtensionsError, AssertionError):
    """Raised when an element is not in the state an action requires."""


class WaitTimeoutError(SeleniumExtensionsError, TimeoutError):
    """Raised when a wait is explicitly required to have succeeded but timed out."""
