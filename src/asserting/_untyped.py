"""Untyped constants: literals that compare equal across numeric widths and signedness."""

from __future__ import annotations

import enum
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np
from typing_extensions import override

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1


class Kind(enum.Enum):
    """Value category used for cross-kind comparison."""

    SIGNED = "signed"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"
    OTHER = "other"


def kind_of(v: Any) -> Kind:
    """
    Classify `v` for cross-kind comparison.

    Booleans are deliberately not numbers here, even though `bool` subclasses `int`.
    An untyped value classifies as its own kind.
    """
    if isinstance(v, Untyped):
        return v.kind
    if isinstance(v, (bool, np.bool_)):
        return Kind.OTHER
    if isinstance(v, (int, np.signedinteger)):
        return Kind.SIGNED
    if isinstance(v, np.unsignedinteger):
        return Kind.UNSIGNED
    if isinstance(v, (float, np.floating)):
        return Kind.FLOAT
    if isinstance(v, (complex, np.complexfloating)):
        return Kind.COMPLEX
    if isinstance(v, (str, np.str_)):
        return Kind.STRING
    return Kind.OTHER


def _payload(v: Any) -> Any:
    return v.value if isinstance(v, Untyped) else v


def _float_is_int(f: float, i: int) -> bool:
    # Exact: the float must be integral and denote the very same integer.
    return math.isfinite(f) and f.is_integer() and int(f) == i


class Untyped(ABC):
    """Base class of untyped constants."""

    kind: ClassVar[Kind]
    value: Any

    @abstractmethod
    def approximately_equals(self, other: Any) -> bool:
        """Whether `other` is a compatible concrete value with the same value."""
        ...

    @override
    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UntypedInt(Untyped):
    """
    An untyped integer.

    Equals signed integers and floats of the same value, and unsigned integers
    of the same value when it is non-negative.

    Examples:
        tb.assert_(np.uint8(100), Equals(UntypedInt(100)))
    """

    value: int
    kind: ClassVar[Kind] = Kind.SIGNED

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"UntypedInt requires an int, got {self.value!r}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"{self.value} does not fit in a signed 64-bit integer")

    @override
    def approximately_equals(self, other: Any) -> bool:
        match kind_of(other):
            case Kind.SIGNED:
                return self.value == int(_payload(other))
            case Kind.UNSIGNED:
                return self.value >= 0 and self.value == int(_payload(other))
            case Kind.FLOAT:
                return _float_is_int(float(_payload(other)), self.value)
            case _:
                return False


@dataclass(frozen=True)
class UntypedUint(Untyped):
    """
    An untyped unsigned integer.

    Equals unsigned integers and floats of the same value, and signed integers
    of the same value when they are non-negative.
    """

    value: int
    kind: ClassVar[Kind] = Kind.UNSIGNED

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"UntypedUint requires an int, got {self.value!r}")
        if not 0 <= self.value <= UINT64_MAX:
            raise ValueError(f"{self.value} does not fit in an unsigned 64-bit integer")

    @override
    def approximately_equals(self, other: Any) -> bool:
        match kind_of(other):
            case Kind.UNSIGNED:
                return self.value == int(_payload(other))
            case Kind.SIGNED:
                v = int(_payload(other))
                return v >= 0 and self.value == v
            case Kind.FLOAT:
                return _float_is_int(float(_payload(other)), self.value)
            case _:
                return False


@dataclass(frozen=True)
class UntypedFloat(Untyped):
    """An untyped float. Equals floats of exactly the same value, no tolerance."""

    value: float
    kind: ClassVar[Kind] = Kind.FLOAT

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(
            self.value, (int, float, np.integer, np.floating)
        ):
            raise TypeError(f"UntypedFloat requires a real number, got {self.value!r}")
        object.__setattr__(self, "value", float(self.value))

    @override
    def approximately_equals(self, other: Any) -> bool:
        if kind_of(other) is not Kind.FLOAT:
            return False
        return self.value == float(_payload(other))


@dataclass(frozen=True)
class UntypedString(Untyped):
    """An untyped string. Equals `str` and `numpy.str_` values with the same characters."""

    value: str
    kind: ClassVar[Kind] = Kind.STRING

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(f"UntypedString requires a str, got {self.value!r}")
        object.__setattr__(self, "value", str(self.value))

    @override
    def approximately_equals(self, other: Any) -> bool:
        if kind_of(other) is not Kind.STRING:
            return False
        return self.value == str(_payload(other))


@dataclass(frozen=True)
class UntypedComplex(Untyped):
    """An untyped complex number. Equals complex values whose parts match exactly."""

    value: complex
    kind: ClassVar[Kind] = Kind.COMPLEX

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(
            self.value, (int, float, complex, np.number)
        ):
            raise TypeError(f"UntypedComplex requires a number, got {self.value!r}")
        object.__setattr__(self, "value", complex(self.value))

    @override
    def approximately_equals(self, other: Any) -> bool:
        if kind_of(other) is not Kind.COMPLEX:
            return False
        c = complex(_payload(other))
        return self.value.real == c.real and self.value.imag == c.imag
