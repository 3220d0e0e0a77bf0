"""Polling helpers: budgets, chaining and failure capture."""

import pytest

from selenium_extensions import TryResult, WaitHelper, WaitTimeoutError, make_try, spin_wait, try_run


def test_spin_wait_already_true_does_not_sleep(fake_time) -> None:
    assert spin_wait(lambda: True, timeout=10) is True
    assert fake_time.sleeps == []


def test_spin_wait_zero_timeout_returns_immediate_value(fake_time) -> None:
    calls = []

    def condition() -> bool:
        calls.append(1)
        return False

    assert spin_wait(condition, timeout=0) is False
    assert len(calls) == 1
    assert fake_time.sleeps == []
    assert spin_wait(lambda: True, timeout=0) is True


def test_spin_wait_polls_until_condition_holds(fake_time) -> None:
    results = iter([False, False, True])

    assert spin_wait(lambda: next(results), timeout=10, poll_interval=1) is True
    assert fake_time.sleeps == [1.0, 1.0]


def test_sleep_is_capped_by_remaining_budget(fake_time) -> None:
    assert spin_wait(lambda: False, timeout=2.5, poll_interval=1) is False
    assert fake_time.sleeps == [1.0, 1.0, 0.5]


def test_chained_waits_share_budget_and_short_circuit(fake_time) -> None:
    later_calls = []

    def later() -> bool:
        later_calls.append(1)
        return True

    helper = WaitHelper.with_timeout(1, poll_interval=0.5).wait_for(lambda: False).wait_for(later)

    assert helper.is_satisfied is False
    assert later_calls == []


def test_chained_waits_all_satisfied(fake_time) -> None:
    flags = iter([False, True])
    helper = WaitHelper(5).wait_for(lambda: True).wait_for(lambda: next(flags))

    assert helper.is_satisfied
    helper.ensure_satisfied()
    assert fake_time.sleeps == [1.0]


def test_ensure_satisfied_raises_with_message(fake_time) -> None:
    helper = WaitHelper(0).wait_for(lambda: False)

    with pytest.raises(WaitTimeoutError, match="menu never opened"):
        helper.ensure_satisfied("menu never opened")
    with pytest.raises(TimeoutError):
        helper.ensure_satisfied()


@pytest.mark.parametrize("timeout, interval", [(-1, 1), (1, -0.5)])
def test_negative_durations_are_rejected(timeout, interval) -> None:
    with pytest.raises(ValueError):
        WaitHelper(timeout, interval)


def test_try_run_success() -> None:
    result = try_run(lambda: None)

    assert isinstance(result, TryResult)
    assert result
    assert result.ok and result.error is None


def test_try_run_captures_failure() -> None:
    def boom() -> None:
        raise KeyError("missing")

    result = try_run(boom)

    assert not result
    assert isinstance(result.error, KeyError)


def test_make_try_retries_until_action_stops_raising(fake_time) -> None:
    attempts = []

    def flaky() -> None:
        attempts.append(1)
        if len(attempts) < 3:
            raise RuntimeError("not yet")

    assert spin_wait(make_try(flaky), timeout=5) is True
    assert len(attempts) == 3
