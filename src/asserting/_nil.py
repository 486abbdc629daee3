from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, get_origin

import numpy as np
from typing_extensions import override


class NilKind(enum.Enum):
    """Kinds of values that have a nil state."""

    REFERENCE = "reference"
    FUNCTION = "function"
    INTERFACE = "interface"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    CHANNEL = "channel"
    RAW_POINTER = "raw_pointer"


@dataclass(frozen=True)
class TypedNil:
    """
    The absent value of a declared type.

    `None` carries no type, so two absent values of different declared types
    would be indistinguishable. A `TypedNil` remembers what it is the absence of:
    it equals `None` but not a `TypedNil` of another type or kind.
    """

    of: Any
    """The declared type: a class, a generic alias such as `list[int]`, or a name."""

    kind: NilKind = NilKind.REFERENCE

    @property
    def type_name(self) -> str:
        if isinstance(self.of, str):
            return self.of
        if get_origin(self.of) is not None:
            return repr(self.of)
        module = self.of.__module__
        if module == "builtins":
            return self.of.__qualname__
        return f"{module}.{self.of.__qualname__}"

    @property
    def label(self) -> str:
        return f"TypedNil[{self.kind.value}:{self.type_name}]"

    @override
    def __str__(self) -> str:
        match self.kind:
            case NilKind.SEQUENCE:
                return "[]"
            case NilKind.MAPPING:
                return "{}"
            case _:
                return "None"


def _infer_kind(tp: Any) -> NilKind:
    # `list[int]` is classified by `list`
    tp = get_origin(tp) or tp
    if not isinstance(tp, type):
        return NilKind.REFERENCE
    if issubclass(tp, (str, bytes, bytearray)):
        return NilKind.REFERENCE
    if issubclass(tp, (Sequence, np.ndarray)):
        return NilKind.SEQUENCE
    if issubclass(tp, Mapping):
        return NilKind.MAPPING
    return NilKind.REFERENCE


def nil_of(tp: Any, kind: NilKind | None = None) -> TypedNil:
    """
    Create the nil value of a declared type.

    Args:
        tp: The declared type, a generic alias such as `list[int]`, or a type name.
        kind: The nil kind. Inferred from `tp` when omitted: sequence types give
            `SEQUENCE`, mappings give `MAPPING`, everything else `REFERENCE`.

    Examples:
        tb.assert_(nil_of(int), Equals(None))
        tb.assert_(nil_of(list), EqualsSlice([]))
    """
    return TypedNil(tp, _infer_kind(tp) if kind is None else kind)


def is_nil(v: Any) -> bool:
    """Whether `v` is `None` or the nil value of some declared type."""
    return v is None or isinstance(v, TypedNil)
