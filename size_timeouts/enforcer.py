"""Timeout enforcement backends.

A ``ClassTestRule`` only chooses the timeout. Enforcing it (interrupting
the test, sampling stuck threads) belongs to an enforcer. The default
enforcer hands both to the pytest-timeout plugin through its ``timeout``
marker.
"""

from __future__ import annotations

import signal
from typing import Any, Literal, Protocol

import pytest

TimeoutMethod = Literal["thread", "signal"]


class TimeoutEnforcer(Protocol):
    def wrap(self, seconds: float, lookup_stuck_thread: bool, body: Any) -> Any:
        """Return ``body`` wrapped so that it fails after ``seconds``."""
        ...


class PytestTimeoutEnforcer:
    """Delegate timeouts to pytest-timeout.

    The ``signal`` method fails only the test that ran out of time, and dumps
    the stacks of any other live threads first, so stuck-thread lookup needs
    no extra setting. Without SIGALRM (Windows) the ``thread`` method is the
    only one available: it dumps every stack and then ends the whole session.
    """

    def method(self) -> TimeoutMethod:
        return "signal" if hasattr(signal, "SIGALRM") else "thread"

    def marker(self, seconds: float, lookup_stuck_thread: bool) -> pytest.MarkDecorator:
        # pytest-timeout reports stuck threads with either method.
        return pytest.mark.timeout(seconds, method=self.method())

    def wrap(self, seconds: float, lookup_stuck_thread: bool, body: Any) -> Any:
        """Attach the timeout marker to a pytest item, test function or class.

        Raises:
            TypeError: If ``body`` is neither an item nor a named callable.
        """
        marker = self.marker(seconds, lookup_stuck_thread)
        if isinstance(body, pytest.Item):
            body.add_marker(marker)
            return body
        # MarkDecorator only decorates named callables; a lambda would be
        # taken as a marker argument instead.
        if not callable(body) or getattr(body, "__name__", "<lambda>") == "<lambda>":
            msg = f"Cannot apply a timeout to {body!r}; expected a test item, function or class"
            raise TypeError(msg)
        return marker(body)
