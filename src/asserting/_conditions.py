"""The built-in conditions."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from typing_extensions import override

from ._equality import deep_equal, eq
from ._format import format_pair, format_value, type_label
from ._nil import NilKind, TypedNil, is_nil
from .cond import Cond
from .errors import InvalidUsageError, Panic

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class Returned:
    """The guarded call returned normally."""


@dataclass(frozen=True)
class Raised:
    """The guarded call raised; `value` is what was thrown."""

    value: Any


def _invoke(v: Any) -> Returned | Raised:
    """Call `v` exactly once and capture whatever it throws."""
    if not callable(v):
        raise InvalidUsageError(f"<{format_value(v)}> is not callable")
    try:
        inspect.signature(v).bind()
    except TypeError as e:
        raise InvalidUsageError(
            f"<{format_value(v)}> cannot be called without arguments"
        ) from e
    except ValueError:
        # Some builtins expose no signature; calling them is the only check left
        pass
    try:
        v()
    except Panic as e:
        return Raised(e.value)
    except Exception as e:
        return Raised(e)
    return Returned()


def _captured(outcome: Returned | Raised) -> Any:
    match outcome:
        case Raised(value):
            return value
        case Returned():
            return None


def _did_not_panic(got: Any) -> str:
    return " (didn't panic?)" if got is None else ""


class _Equals:
    def __init__(self, expected: Any):
        self.expected = expected

    def test(self, v: Any) -> bool:
        return eq(self.expected, v)

    def message(self, v: Any) -> str:
        expected, was = format_pair(self.expected, v)
        return f"expected <{expected}> but was <{was}>"

    @override
    def __repr__(self) -> str:
        return f"Equals({self.expected!r})"


class _NotEquals(_Equals):
    @override
    def test(self, v: Any) -> bool:
        return not super().test(v)

    @override
    def message(self, v: Any) -> str:
        return f"unexpected <{format_value(v)}>"

    @override
    def __repr__(self) -> str:
        return f"NotEquals({self.expected!r})"


class _Matches:
    def __init__(self, f: Predicate):
        self.f = f

    def test(self, v: Any) -> bool:
        return bool(self.f(v))

    def message(self, v: Any) -> str:
        return f"unexpected <{format_value(v)}>"


class _Panics:
    def __init__(self, expected: Any):
        self.expected = expected
        self.got: Any = None  # The value actually thrown by the last test

    def test(self, v: Any) -> bool:
        self.got = _captured(_invoke(v))
        return eq(self.expected, self.got)

    def message(self, v: Any) -> str:
        expected, got = format_pair(self.expected, self.got)
        return f"expected to panic with <{expected}> but <{got}>" + _did_not_panic(
            self.got
        )


class _PanicMatches:
    def __init__(self, f: Predicate):
        self.f = f
        self.got: Any = None  # The value actually thrown by the last test

    def test(self, v: Any) -> bool:
        self.got = _captured(_invoke(v))
        return bool(self.f(self.got))

    def message(self, v: Any) -> str:
        return f"unexpected panic <{format_value(self.got)}>" + _did_not_panic(
            self.got
        )


def _is_sequence(v: Any) -> bool:
    if isinstance(v, TypedNil):
        return v.kind is NilKind.SEQUENCE
    if isinstance(v, (str, bytes, bytearray)):
        return False
    if isinstance(v, np.ndarray):
        return v.ndim >= 1
    return isinstance(v, Sequence)


def _is_empty(v: Any) -> bool:
    if isinstance(v, np.ndarray):
        return v.size == 0
    return len(v) == 0


def _declared_type(v: Any) -> Any:
    if isinstance(v, np.ndarray):
        return (np.ndarray, v.dtype)
    return type(v)


def _sequence_equal(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray):
        return a.shape == b.shape and bool(np.array_equal(a, b))
    return len(a) == len(b) and all(deep_equal(x, y) for x, y in zip(a, b))


class _EqualsSlice:
    def __init__(self, expected: Any):
        self.expected = expected

    def test(self, v: Any) -> bool:
        for x in (v, self.expected):
            if x is not None and not _is_sequence(x):
                raise InvalidUsageError(
                    f"<{format_value(x)}({type_label(x)})> is not a sequence"
                )

        # nil equals an empty sequence
        v_nil, expected_nil = is_nil(v), is_nil(self.expected)
        if v_nil and expected_nil:
            return True
        if v_nil:
            return _is_empty(self.expected)
        if expected_nil:
            return _is_empty(v)

        if (t1 := _declared_type(v)) != (t2 := _declared_type(self.expected)):
            raise InvalidUsageError(f"type mismatch: <{t1}> and <{t2}>")

        return _sequence_equal(v, self.expected)

    def message(self, v: Any) -> str:
        expected, was = format_pair(self.expected, v)
        return f"expected <{expected}> but was <{was}>"


def Equals(expected: Any) -> Cond:  # pylint: disable=invalid-name
    """
    A condition which is met if a value equals `expected`.

    Values of different types are never equal, except that `None` equals any
    `TypedNil` and untyped constants (`UntypedInt(100)`) equal numbers of any
    width or signedness with the same value.
    """
    return Cond(_Equals(expected))


def NotEquals(unexpected: Any) -> Cond:  # pylint: disable=invalid-name
    """A condition which is met if a value does not equal `unexpected` (see `Equals`)."""
    return Cond(_NotEquals(unexpected))


def Matches(f: Predicate) -> Cond:  # pylint: disable=invalid-name
    """A condition which is met if a value passes the test of `f`."""
    return Cond(_Matches(f))


def Panics(expected: Any) -> Cond:  # pylint: disable=invalid-name
    """
    A condition which is met if calling the tested function raises `expected`.

    A value thrown with `panic(value)` is compared as-is, any other exception
    is compared as the exception object itself. Testing a value that is not
    callable raises `InvalidUsageError`.
    """
    return Cond(_Panics(expected))


def PanicMatches(f: Predicate) -> Cond:  # pylint: disable=invalid-name
    """
    A condition which is met if calling the tested function raises a value that passes `f`.

    `f` receives `None` if the function returned normally. Testing a value that
    is not callable raises `InvalidUsageError`.
    """
    return Cond(_PanicMatches(f))


def EqualsSlice(expected: Any) -> Cond:  # pylint: disable=invalid-name
    """
    A condition which is met if the tested sequence equals `expected`.

    Two rules apply:

    * A nil sequence (`None` or a sequence `TypedNil`) equals an empty sequence.
    * Two non-nil sequences are equal if they have the same length and their
      elements are pairwise equal.

    Raises `InvalidUsageError` if either side is not a sequence, or if the two
    sides are sequences of different types.
    """
    return Cond(_EqualsSlice(expected))

