from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from typing_extensions import ParamSpec, TypeVar

from ._format import format_value

R = TypeVar("R")
P = ParamSpec("P")


@dataclass(frozen=True)
class DeferredError:
    """Stands in for a value whose computation failed; consumed by `TB.assert_`."""

    message: str
    fatal: bool = False


def _error_message(err: BaseException) -> str:
    return f"unexpected error <{format_value(err)}>"


def value_error(v: Any, err: BaseException | None) -> Any:
    """
    Fold a value and an error into a single assertable value.

    If `TB.assert_(value_error(v, err), cond)` is called, one of two things happens:

    1. If `err` is not None, the assertion fails with "unexpected error <err>",
       whatever `cond` is.
    2. If `err` is None, it behaves exactly like `TB.assert_(v, cond)`.
    """
    if err is not None:
        return DeferredError(_error_message(err))
    return v


def value_error_fatal(v: Any, err: BaseException | None) -> Any:
    """Like `value_error`, but a non-None `err` aborts the current test."""
    if err is not None:
        return DeferredError(_error_message(err), fatal=True)
    return v


def capture(fn: Callable[P, R], *args: P.args, **kwargs: P.kwargs) -> R | DeferredError:
    """
    Call `fn` and fold an exception it raises into a `DeferredError`.

    Examples:
        tb.assert_(capture(int, "1"), Equals(1))
    """
    try:
        return fn(*args, **kwargs)
    except Exception as e:
        return value_error(None, e)


def capture_fatal(
    fn: Callable[P, R], *args: P.args, **kwargs: P.kwargs
) -> R | DeferredError:
    """Like `capture`, but an exception aborts the current test."""
    try:
        return fn(*args, **kwargs)
    except Exception as e:
        return value_error_fatal(None, e)
