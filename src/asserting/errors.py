from __future__ import annotations

from typing import Any

from typing_extensions import override


class AssertingError(Exception):
    """Base class for all errors raised by `asserting`."""


class InvalidUsageError(AssertingError, TypeError):
    """
    A defect in the test code itself rather than in the code under test.

    Raised when a condition is applied to a subject it can never meaningfully
    test, e.g. guarding a non-callable with `Panics`, or comparing a non-sequence
    with `EqualsSlice`. It is never routed through a reporter.
    """


class Panic(AssertingError):
    """Carries an arbitrary value thrown with `panic`."""

    def __init__(self, value: Any):
        super().__init__(value)
        self.value = value

    @override
    def __str__(self) -> str:
        return str(self.value)


def panic(value: Any):
    """
    Throw `value` so that `Panics`/`PanicMatches` capture it as-is.

    Examples:
        tb.assert_(lambda: panic(100), Panics(100))
    """
    raise Panic(value)
