import logging
import time
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from ..core.errors import WaitTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 1.0

Predicate = Callable[[], bool]


class TryResult(BaseModel):
    """
    Outcome of try_run():
    - ok: whether the action completed without raising
    - error: the captured exception when it did not

    Truthy on success so it can be used directly as a condition.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    ok: bool = True
    error: Optional[BaseException] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> "TryResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: BaseException) -> "TryResult":
        return cls(ok=False, error=error)


class WaitHelper:
    """
    Polls predicates until they hold or a shared timeout budget runs out.

    The timer starts when the helper is created, so chained wait_for() calls
    share one budget. Once a predicate times out every later wait_for() is
    skipped and is_satisfied stays False.
    """

    def __init__(self, timeout: float, poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS):
        if timeout < 0:
            raise ValueError("Timeout must be non-negative.")
        if poll_interval < 0:
            raise ValueError("Poll interval must be non-negative.")

        self.timeout = float(timeout)
        self.poll_interval = float(poll_interval)
        self._started_at = time.monotonic()
        self._is_satisfied = True

    @classmethod
    def with_timeout(cls, timeout: float, poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS) -> "WaitHelper":
        return cls(timeout, poll_interval)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._started_at

    @property
    def is_satisfied(self) -> bool:
        return self._is_satisfied

    def wait_for(self, condition: Predicate) -> "WaitHelper":
        """
        Blocks until `condition()` returns True or the remaining budget is spent.

        Args:
            condition (Callable[[], bool]): The predicate to poll.

        Returns:
            WaitHelper: self, for chaining.
        """
        if not self._is_satisfied:
            return self

        while not condition():
            remaining = self.timeout - self.elapsed
            if remaining <= 0:
                logger.debug(f"Condition not met within {self.timeout:.2f}s; giving up.")
                self._is_satisfied = False
                break
            time.sleep(min(remaining, self.poll_interval))

        return self

    def ensure_satisfied(self, message: Optional[str] = None) -> None:
        if not self._is_satisfied:
            raise WaitTimeoutError(message or f"Condition was not satisfied within {self.timeout:.2f}s.")


def spin_wait(condition: Predicate, timeout: float, poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS) -> bool:
    """Polls `condition` until it holds or `timeout` seconds pass. Returns whether it held."""
    return WaitHelper.with_timeout(timeout, poll_interval).wait_for(condition).is_satisfied


def try_run(action: Callable[[], object]) -> TryResult:
    """Runs `action`, capturing any raised exception in the returned TryResult."""
    try:
        action()
    except Exception as e:
        logger.debug(f"Suppressed {type(e).__name__}: {e}")
        return TryResult.failure(e)
    return TryResult.success()


def make_try(action: Callable[[], object]) -> Predicate:
    """Wraps `action` as a predicate that is True once the action stops raising."""
    return lambda: try_run(action).ok
