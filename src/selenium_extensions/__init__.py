"""
selenium-extensions: fluent element queries, polling waits and a browser
session facade on top of Selenium WebDriver.

    from selenium_extensions import Browser, TagName

    with Browser() as browser:
        browser.navigate("https://example.org")
        browser.wait_ready_state()
        if browser.element().by_tag_name(TagName.LINK).by_text("More", exact_match=False).exists(timeout=5):
            ...
"""

# core must be imported before elements: the browser facade and the queries import each other's modules.
from .core import (
    Browser,
    ConfigLoader,
    SeleniumExtensionsError,
    ConfigurationError,
    ElementNotFoundError,
    AmbiguousResultError,
    OutOfRangeError,
    PreconditionViolation,
    WaitTimeoutError,
)
from .data_models import BrowserSettings, BrowserType, WaitSettings
from .elements import ElementQuery, JavaScriptEvent, TagAttribute, TagName
from .utils import TryResult, WaitHelper, make_try, setup_logger, spin_wait, try_run

__version__ = "1.0.0"

__all__ = [
    "Browser",
    "BrowserSettings",
    "BrowserType",
    "ConfigLoader",
    "ElementQuery",
    "JavaScriptEvent",
    "TagAttribute",
    "TagName",
    "TryResult",
    "WaitHelper",
    "WaitSettings",
    "make_try",
    "setup_logger",
    "spin_wait",
    "try_run",
    "SeleniumExtensionsError",
    "ConfigurationError",
    "ElementNotFoundError",
    "AmbiguousResultError",
    "OutOfRangeError",
    "PreconditionViolation",
    "WaitTimeoutError",
]
