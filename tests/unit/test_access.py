"""
Unit tests for the demo-mode guard.
"""

import pytest

from quizpulse.access import DemoModeGuard
from quizpulse.exceptions import AccessDeniedError


@pytest.fixture
def guard():
    return DemoModeGuard("1234")


def test_starts_locked(guard):
    assert guard.unlocked is False
    with pytest.raises(AccessDeniedError):
        guard.require()


def test_unlock_with_pin(guard):
    guard.unlock("1234")
    assert guard.unlocked is True
    guard.require()


def test_wrong_pin(guard):
    with pytest.raises(AccessDeniedError):
        guard.unlock("0000")
    assert guard.unlocked is False


def test_missing_pin(guard):
    assert guard.check(None) is False
    with pytest.raises(AccessDeniedError):
        guard.unlock(None)


def test_lock_again(guard):
    guard.unlock("1234")
    guard.lock()
    with pytest.raises(AccessDeniedError):
        guard.require()
