"""Tests for the poll-wait engine."""

import time

import pytest

from webtester.automation.wait import PollWait, WaitOutcome
from webtester.core.config import Settings


class TestPollWait:
    """Tests for PollWait."""

    def test_immediate_success(self):
        """Test predicate true on first call returns at once."""
        outcome = PollWait(poll_interval=0.01, timeout=1.0).wait_until(lambda: True)

        assert outcome
        assert outcome.attempts == 1
        assert outcome.error is None

    def test_success_after_several_intervals(self):
        """Test predicate that becomes true within the deadline succeeds."""
        calls = 0

        def becomes_true():
            nonlocal calls
            calls += 1
            return calls >= 4

        outcome = PollWait(poll_interval=0.01, timeout=1.0).wait_until(becomes_true)

        assert outcome.success is True
        assert outcome.attempts == 4
        assert calls == 4

    def test_timeout_bounded_by_deadline_plus_interval(self):
        """Test never-true predicate times out near the deadline."""
        waiter = PollWait(poll_interval=0.02, timeout=0.1)

        start = time.monotonic()
        outcome = waiter.wait_until(lambda: False)
        elapsed = time.monotonic() - start

        assert not outcome
        assert outcome.attempts > 1
        assert elapsed >= 0.1
        assert elapsed < 0.1 + 0.02 + 0.1

    def test_timeout_carries_last_error(self):
        """Test last error reported by the caller is attached on timeout."""
        error = RuntimeError("still loading")

        outcome = PollWait(poll_interval=0.01, timeout=0.03).wait_until(
            lambda: False, last_error=lambda: error
        )

        assert outcome.success is False
        assert outcome.error is error

    def test_zero_timeout_evaluates_once(self):
        """Test zero deadline still evaluates the predicate once."""
        outcome = PollWait(poll_interval=0.01, timeout=0).wait_until(lambda: False)

        assert outcome.attempts == 1
        assert not outcome

    def test_predicate_exception_propagates(self):
        """Test errors escaping the predicate are not swallowed."""
        def broken():
            raise KeyError("boom")

        with pytest.raises(KeyError):
            PollWait(poll_interval=0.01, timeout=0.05).wait_until(broken)

    def test_defaults_from_settings(self):
        """Test unset options fall back to settings."""
        waiter = PollWait(settings=Settings(poll_interval=0.25, wait_timeout=3))

        assert waiter.poll_interval == 0.25
        assert waiter.timeout == 3

    @pytest.mark.parametrize("interval,timeout", [(0, 1), (-1, 1), (0.1, -1)])
    def test_invalid_options(self, interval, timeout):
        """Test invalid options are rejected."""
        with pytest.raises(ValueError):
            PollWait(poll_interval=interval, timeout=timeout)


class TestWaitOutcome:
    """Tests for WaitOutcome."""

    def test_truthiness_follows_success(self):
        """Test outcome is truthy only on success."""
        assert WaitOutcome(success=True)
        assert not WaitOutcome(success=False, error=ValueError("x"))
