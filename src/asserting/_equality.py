from __future__ import annotations

import dataclasses
from typing import Any

import numpy as np

from ._nil import is_nil
from ._untyped import Untyped


def deep_equal(a: Any, b: Any) -> bool:
    """
    Structural equality that never mixes types.

    Values of different concrete types are never equal (`1` is not `1.0`).
    Containers and dataclasses are compared element by element, arrays by
    dtype, shape and contents, exceptions by type and arguments. Values whose
    `==` has no truth value are unequal.
    """
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, np.ndarray):
        return (
            a.dtype == b.dtype and a.shape == b.shape and bool(np.array_equal(a, b))
        )
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        if a.keys() != b.keys():
            return False
        # Keys that hash alike (1 and True) must still have the same type
        b_keys = {k: k for k in b}
        return all(
            type(b_keys[k]) is type(k) and deep_equal(a[k], b[k]) for k in a
        )
    if isinstance(a, BaseException):
        return deep_equal(a.args, b.args)
    if (
        dataclasses.is_dataclass(a)
        and not isinstance(a, type)
        and a.__dataclass_params__.eq  # type: ignore[attr-defined]
    ):
        return all(
            deep_equal(getattr(a, f.name), getattr(b, f.name))
            for f in dataclasses.fields(a)
            if f.compare
        )
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        # `==` returned something without a truth value, e.g. an array
        return False


def equals_nil(v: Any) -> bool:
    """Whether `v` counts as nil: `None` itself, or a `TypedNil`."""
    return is_nil(v)


def eq(a: Any, b: Any) -> bool:
    """
    The equality relation used by `Equals`, `NotEquals` and `Panics`.

    1. Identical values (same type, same value) are equal.
    2. `None` equals any nil value.
    3. Untyped constants compare across numeric widths and signedness.
    4. Nothing else is equal.
    """
    if deep_equal(a, b):
        return True

    # A nil operand never satisfies a numeric or string comparison
    if a is None:
        return equals_nil(b)
    if b is None:
        return equals_nil(a)

    a_untyped, b_untyped = isinstance(a, Untyped), isinstance(b, Untyped)
    if a_untyped and b_untyped:
        return a.approximately_equals(b) or b.approximately_equals(a)
    if a_untyped:
        return a.approximately_equals(b)
    if b_untyped:
        return b.approximately_equals(a)

    return False
