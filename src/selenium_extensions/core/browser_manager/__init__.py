"""
Browser manager package.

Public API:
- Browser: session facade that creates (or wraps), uses and closes a Selenium WebDriver.
"""

from .service import Browser

__all__ = ["Browser"]
