# This file makes selenium_extensions.utils a Python package and exposes key utilities.

from .logger import setup_logger
from .wait_helper import TryResult, WaitHelper, make_try, spin_wait, try_run

__all__ = [
    "setup_logger",
    "TryResult",
    "WaitHelper",
    "make_try",
    "spin_wait",
    "try_run",
]
