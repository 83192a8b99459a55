"""
Demo-mode guard.

A shared-PIN gate in front of admin operations, as used by the admin
dashboard. It is NOT authentication: there are no users, the PIN is a
plain config value, and unlocking lasts for the life of the guard object
(one CLI invocation, one API request).
"""

from __future__ import annotations

import hmac

from loguru import logger

from .exceptions import AccessDeniedError


class DemoModeGuard:
    """Session-scoped PIN gate."""

    def __init__(self, pin: str):
        self._pin = pin
        self._unlocked = False

    @property
    def unlocked(self) -> bool:
        return self._unlocked

    def check(self, pin: str | None) -> bool:
        """Compare a PIN without changing state."""
        if pin is None:
            return False
        return hmac.compare_digest(pin.encode(), self._pin.encode())

    def unlock(self, pin: str | None) -> None:
        if not self.check(pin):
            logger.warning("Demo guard: invalid PIN")
            raise AccessDeniedError("Invalid PIN")
        self._unlocked = True

    def lock(self) -> None:
        self._unlocked = False

    def require(self) -> None:
        """Raise unless the guard has been unlocked."""
        if not self._unlocked:
            raise AccessDeniedError("Admin PIN required")
