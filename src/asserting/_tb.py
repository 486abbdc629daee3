from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from typing_extensions import override

from ._conditions import (
    Equals,
    EqualsSlice,
    Matches,
    NotEquals,
    PanicMatches,
    Panics,
    _Equals,
)
from ._deferred import DeferredError
from ._format import format_value
from .cond import Cond

log = logging.getLogger(__name__)


class Reporter(Protocol):
    """The host's failure sink."""

    def report_continue(self, message: str) -> None:
        """Record a failure; the test keeps running."""
        ...

    def report_abort(self, message: str) -> None:
        """Record a failure and stop the current test."""
        ...


class RecordingReporter:
    """
    Keeps failure messages in memory.

    Once an aborting failure has been recorded, every later report is ignored,
    as none of them could have been made by a test that actually stopped.
    """

    def __init__(self):
        self.errors: list[str] = []
        self.fatals: list[str] = []
        self.aborted = False

    def report_continue(self, message: str) -> None:
        if self.aborted:
            return
        self.errors.append(message)

    def report_abort(self, message: str) -> None:
        if self.aborted:
            return
        self.fatals.append(message)
        self.aborted = True

    @property
    def failed(self) -> bool:
        return bool(self.errors or self.fatals)

    def reset(self) -> None:
        self.errors.clear()
        self.fatals.clear()
        self.aborted = False

    @override
    def __repr__(self) -> str:
        return f"<RecordingReporter errors={len(self.errors)} fatals={len(self.fatals)} aborted={self.aborted}>"


class TB:
    """Evaluates conditions and sends failures to a `Reporter`."""

    def __init__(self, reporter: Reporter):
        self.reporter = reporter

    def assert_(self, v: Any, c: Cond) -> None:
        """
        Assert that `v` meets the condition `c`.

        If it does not, the failure message is reported to the reporter, as an
        aborting failure if `c` is fatal. A `DeferredError` subject always
        fails with its own message, `c` is not evaluated.
        """
        __tracebackhide__ = True

        if isinstance(v, DeferredError):
            log.debug(f"Unwrapping deferred error: {v.message}")
            c = Cond(_Equals(None), fatal=v.fatal).set_message(v.message)
            self.assert_(0, c)
            return

        if c.test(v):
            return

        message = c.failure_message(v)
        if c.fatal:
            log.debug(f"Aborting assertion failure: {message}")
            self.reporter.report_abort(message)
        else:
            log.debug(f"Assertion failure: {message}")
            self.reporter.report_continue(message)

    def assert_true(self, condition: bool) -> None:
        """Assert that `condition` is True."""
        __tracebackhide__ = True
        self.assert_(condition, Equals(True).set_message("unexpected false condition"))

    def assert_no_error(self, err: BaseException | None) -> None:
        """Assert that `err` is None."""
        __tracebackhide__ = True
        self.assert_(
            err,
            Equals(None).set_message_func(
                lambda: f"unexpected error <{format_value(err)}>"
            ),
        )

    def assert_equal(self, v: Any, expected: Any) -> None:
        """Shorthand for `assert_(v, Equals(expected))`."""
        __tracebackhide__ = True
        self.assert_(v, Equals(expected))

    def assert_equal_slice(self, v: Any, expected: Any) -> None:
        """Shorthand for `assert_(v, EqualsSlice(expected))`."""
        __tracebackhide__ = True
        self.assert_(v, EqualsSlice(expected))

    def assert_not_equal(self, v: Any, unexpected: Any) -> None:
        """Shorthand for `assert_(v, NotEquals(unexpected))`."""
        __tracebackhide__ = True
        self.assert_(v, NotEquals(unexpected))

    def assert_match(self, v: Any, f: Callable[[Any], bool]) -> None:
        """Shorthand for `assert_(v, Matches(f))`."""
        __tracebackhide__ = True
        self.assert_(v, Matches(f))

    def assert_panic(self, fn: Callable[[], Any], expected: Any) -> None:
        """Shorthand for `assert_(fn, Panics(expected))`."""
        __tracebackhide__ = True
        self.assert_(fn, Panics(expected))

    def assert_panic_match(
        self, fn: Callable[[], Any], f: Callable[[Any], bool]
    ) -> None:
        """Shorthand for `assert_(fn, PanicMatches(f))`."""
        __tracebackhide__ = True
        self.assert_(fn, PanicMatches(f))
