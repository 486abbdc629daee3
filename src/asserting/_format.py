from __future__ import annotations

import numbers
from typing import Any

import numpy as np
import wadler_lindig as wl

from . import config as _config
from ._nil import TypedNil
from ._untyped import Untyped

# Values whose plain `str` is already the most readable rendering
_PLAIN_STR_TYPES = (
    str,
    numbers.Number,
    np.generic,
    np.ndarray,
    Untyped,
    TypedNil,
    BaseException,
    type(None),
)


def format_value(v: Any) -> str:
    """Render `v` for a failure message."""
    if isinstance(v, _PLAIN_STR_TYPES):
        return str(v)
    return wl.pformat(v, width=_config.render_width(), short_arrays=False)


def type_label(v: Any) -> str:
    """Name of the concrete type of `v`, used to tell apart identically printed values."""
    if isinstance(v, TypedNil):
        return v.label
    tp = type(v)
    if tp.__module__ == "builtins":
        return tp.__qualname__
    return f"{tp.__module__}.{tp.__qualname__}"


def format_pair(a: Any, b: Any) -> tuple[str, str]:
    """
    Render two values that are shown side by side.

    When both render to the same text (e.g. `1` and `numpy.int8(1)`), each is
    annotated with its type so the message still shows why they differ.
    """
    str_a, str_b = format_value(a), format_value(b)
    if str_a == str_b:
        return f"{str_a}({type_label(a)})", f"{str_b}({type_label(b)})"
    return str_a, str_b
