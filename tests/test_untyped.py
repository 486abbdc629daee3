from __future__ import annotations

import numpy as np
import pytest

from asserting import (
    TB,
    Equals,
    NotEquals,
    RecordingReporter,
    UntypedComplex,
    UntypedFloat,
    UntypedInt,
    UntypedString,
    UntypedUint,
    eq,
)

SIGNED = [int, np.int8, np.int16, np.int32, np.int64]
UNSIGNED = [np.uint8, np.uint16, np.uint32, np.uint64]
FLOATS = [float, np.float16, np.float32, np.float64]


@pytest.mark.parametrize("tp", SIGNED + UNSIGNED + FLOATS)
def test_untyped_int_matches_any_width(tb: TB, reporter: RecordingReporter, tp):
    tb.assert_(tp(100), Equals(UntypedInt(100)))
    tb.assert_(tp(100), Equals(UntypedUint(100)))
    assert not reporter.failed


@pytest.mark.parametrize("tp", SIGNED + [np.float32, float])
def test_negative_untyped_int(tb: TB, reporter: RecordingReporter, tp):
    tb.assert_(tp(-100), Equals(UntypedInt(-100)))
    assert not reporter.failed


@pytest.mark.parametrize(
    "value", [np.uint8(156), np.uint16(65436), np.uint64(2**64 - 100)]
)
def test_negative_untyped_int_never_equals_unsigned(value):
    # Same bit pattern as -100 in two's complement
    assert not eq(UntypedInt(-100), value)
    assert not eq(value, UntypedInt(-100))


def test_untyped_uint_never_equals_negative_signed():
    assert not eq(UntypedUint(100), np.int16(-100))
    assert not eq(UntypedUint(100), -100)
    assert eq(UntypedUint(2**64 - 1), np.uint64(2**64 - 1))


def test_untyped_integers_require_exact_floats():
    assert not eq(UntypedInt(100), 100.5)
    assert not eq(UntypedInt(2**53 + 1), float(2**53))
    assert not eq(UntypedUint(1), float("inf"))
    assert not eq(UntypedInt(0), float("nan"))


def test_untyped_float(tb: TB, reporter: RecordingReporter):
    tb.assert_(np.float32(-100), Equals(UntypedFloat(-100)))
    tb.assert_(-100.0, Equals(UntypedFloat(-100)))
    tb.assert_(UntypedFloat(-100), Equals(np.float32(-100)))
    tb.assert_(UntypedFloat(-100), Equals(np.float64(-100)))
    assert not reporter.failed

    assert not eq(UntypedFloat(0.1), np.float32(0.1))
    assert not eq(UntypedFloat(1), 1)


def test_untyped_string(tb: TB, reporter: RecordingReporter):
    tb.assert_("abc", Equals(UntypedString("abc")))
    tb.assert_(np.str_("abc"), Equals(UntypedString("abc")))
    tb.assert_(UntypedString("abc"), Equals("abc"))
    tb.assert_(UntypedString("abc"), Equals(UntypedString("abc")))
    assert not reporter.failed

    assert not eq(UntypedString("abc"), b"abc")
    assert not eq(UntypedString("1"), 1)


def test_untyped_complex(tb: TB, reporter: RecordingReporter):
    tb.assert_(complex(1, 2), Equals(UntypedComplex(complex(1, 2))))
    tb.assert_(np.complex64(1 + 2j), Equals(UntypedComplex(1 + 2j)))
    tb.assert_(UntypedComplex(complex(1, 2)), Equals(complex(1, 2)))
    tb.assert_(UntypedComplex(1 + 2j), Equals(UntypedComplex(1 + 2j)))
    tb.assert_(UntypedComplex(1 + 2j), NotEquals(UntypedComplex(1 + 3j)))
    assert not reporter.failed

    assert not eq(UntypedComplex(1), 1)


def test_untyped_values_compare_with_each_other(tb: TB, reporter: RecordingReporter):
    tb.assert_(UntypedInt(100), Equals(np.uint16(100)))
    tb.assert_(UntypedInt(100), Equals(UntypedInt(100)))
    tb.assert_(UntypedInt(100), Equals(UntypedUint(100)))
    tb.assert_(UntypedUint(100), Equals(UntypedInt(100)))
    tb.assert_(UntypedInt(100), Equals(UntypedFloat(100)))
    tb.assert_(UntypedFloat(100), Equals(UntypedInt(100)))
    tb.assert_(np.float32(123), Equals(UntypedUint(123)))
    tb.assert_(UntypedInt(-123), Equals(np.float32(-123)))
    assert not reporter.failed


def test_booleans_are_not_numbers():
    assert not eq(UntypedInt(1), True)
    assert not eq(UntypedUint(1), np.bool_(True))
    assert not eq(UntypedFloat(0), False)


def test_untyped_never_equals_none(tb: TB, reporter: RecordingReporter):
    tb.assert_(None, NotEquals(UntypedInt(-123)))
    tb.assert_(UntypedString(""), NotEquals(None))
    assert not reporter.failed


def test_failure_messages(tb: TB, reporter: RecordingReporter):
    tb.assert_(1, Equals(UntypedInt(2)))
    tb.assert_(1, Equals(UntypedFloat(2)))
    tb.assert_("abc", Equals(UntypedString("def")))
    assert reporter.fatals == []
    assert reporter.errors == [
        "expected <2> but was <1>",
        "expected <2.0> but was <1>",
        "expected <def> but was <abc>",
    ]


class TestConstruction:
    def test_ranges(self):
        UntypedInt(2**63 - 1)
        UntypedInt(-(2**63))
        UntypedUint(2**64 - 1)
        with pytest.raises(ValueError):
            UntypedInt(2**63)
        with pytest.raises(ValueError):
            UntypedUint(-1)
        with pytest.raises(ValueError):
            UntypedUint(2**64)

    def test_types(self):
        with pytest.raises(TypeError):
            UntypedInt(True)
        with pytest.raises(TypeError):
            UntypedInt(1.0)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            UntypedString(1)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            UntypedFloat("1")  # type: ignore[arg-type]

    def test_normalizes_payload(self):
        assert UntypedFloat(2).value == 2.0
        assert isinstance(UntypedFloat(2).value, float)
        assert UntypedComplex(1).value == complex(1, 0)

    def test_immutable(self):
        u = UntypedInt(1)
        with pytest.raises(AttributeError):
            u.value = 2  # type: ignore[misc]

    def test_str(self):
        assert str(UntypedInt(-5)) == "-5"
        assert str(UntypedString("abc")) == "abc"
        assert str(UntypedComplex(1 + 2j)) == "(1+2j)"
