from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from typing_extensions import Self, override

from .. import config as _config


@runtime_checkable
class Condition(Protocol):
    """A test predicate together with its failure message."""

    def test(self, v: Any) -> bool:
        """Return whether `v` meets the condition."""
        ...

    def message(self, v: Any) -> str:
        """
        Return the failure message.

        Only called after `test` returned False for the same `v`.
        """
        ...


class Cond:
    """
    A condition as accepted by `TB.assert_`.

    The assertion succeeds if the wrapped condition's `test` returns True and
    fails otherwise. A failure is reported as continuing unless `set_fatal` was
    called (or the configured default severity is fatal), in which case it
    aborts the current test.
    """

    __slots__ = ("_condition", "_user_message", "_fatal")

    def __init__(self, condition: Condition, *, fatal: bool | None = None):
        self._condition = condition
        self._user_message: Callable[[], str] | None = None
        self._fatal = _config.default_fatal() if fatal is None else fatal

    @property
    def condition(self) -> Condition:
        return self._condition

    @property
    def fatal(self) -> bool:
        """Whether a failure aborts the current test."""
        return self._fatal

    def set_message(self, msg: str) -> Self:
        """Replace the default failure message, overwriting any function set by `set_message_func`."""
        self._user_message = lambda: msg
        return self

    def set_message_func(self, f: Callable[[], str]) -> Self:
        """
        Set `f` as the failure message generator, overwriting any message set by `set_message`.

        `f` is only called when the assertion fails.
        """
        self._user_message = f
        return self

    def set_fatal(self) -> Self:
        """Report failures of this condition as aborting."""
        self._fatal = True
        return self

    def test(self, v: Any) -> bool:
        return self._condition.test(v)

    def message(self, v: Any) -> str:
        return self._condition.message(v)

    def failure_message(self, v: Any) -> str:
        """The user-defined message if one was set, otherwise the condition's own message."""
        if self._user_message is not None:
            return self._user_message()
        return self._condition.message(v)

    @override
    def __repr__(self) -> str:
        return f"<Cond {self._condition!r} fatal={self._fatal}>"


def new(c: Condition) -> Cond:
    """Wrap `c` in a `Cond`."""
    return Cond(c)


def fatal(c: Cond) -> bool:
    """Return whether `c.set_fatal()` has been called."""
    return c.fatal


def message(c: Cond, v: Any) -> str:
    """
    Return the failure message of `c` for `v`.

    If a user-defined message has been set with `c.set_message(msg)` or
    `c.set_message_func(f)`, returns `msg` or `f()`. Returns `c.message(v)` otherwise.
    """
    return c.failure_message(v)
