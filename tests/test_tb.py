from __future__ import annotations

import pytest

import asserting.config as config
from asserting import TB, Equals, InvalidUsageError, Panics, RecordingReporter, panic


def test_success_is_silent(tb: TB, reporter: RecordingReporter):
    tb.assert_(1, Equals(1))
    assert reporter.errors == []
    assert reporter.fatals == []
    assert not reporter.aborted


def test_fatal(tb: TB, reporter: RecordingReporter):
    tb.assert_(1, Equals(2).set_fatal())
    tb.assert_(1, Equals(3))
    tb.assert_(1, Equals(4).set_fatal())

    assert reporter.errors == []
    assert reporter.fatals == ["expected <2> but was <1>"]
    assert reporter.aborted


def test_reset(reporter: RecordingReporter):
    reporter.report_abort("x")
    reporter.reset()
    reporter.report_continue("y")
    assert reporter.errors == ["y"]
    assert reporter.fatals == []
    assert not reporter.aborted


def test_invalid_usage_is_not_reported(tb: TB, reporter: RecordingReporter):
    with pytest.raises(InvalidUsageError):
        tb.assert_(None, Panics(1).set_fatal())
    assert not reporter.failed


def test_default_severity_from_config(tb: TB, reporter: RecordingReporter):
    with config.override({"fatal": True}):
        tb.assert_(1, Equals(2))
    tb.assert_(1, Equals(3))
    assert reporter.fatals == ["expected <2> but was <1>"]
    assert reporter.errors == []


def test_assert_true(tb: TB, reporter: RecordingReporter):
    tb.assert_true(True)
    assert not reporter.failed

    tb.assert_true(1 == 0)
    assert reporter.fatals == []
    assert reporter.errors == ["unexpected false condition"]


def test_assert_no_error(tb: TB, reporter: RecordingReporter):
    tb.assert_no_error(None)
    assert not reporter.failed

    tb.assert_no_error(ValueError("err"))
    assert reporter.fatals == []
    assert reporter.errors == ["unexpected error <err>"]


def test_shorthands(tb: TB, reporter: RecordingReporter):
    tb.assert_equal(1, 1)
    tb.assert_not_equal(1, 2)
    tb.assert_equal_slice([1, 2], [1, 2])
    tb.assert_match(3, lambda v: v > 2)
    tb.assert_panic(lambda: panic(100), 100)
    tb.assert_panic_match(lambda: panic("boom"), lambda v: isinstance(v, str))
    assert not reporter.failed

    tb.assert_equal(1, 2)
    tb.assert_not_equal(1, 1)
    tb.assert_equal_slice([1], [2])
    tb.assert_match(1, lambda v: v > 2)
    tb.assert_panic(lambda: panic(1), 100)
    tb.assert_panic_match(lambda: None, lambda v: v is not None)
    assert reporter.errors == [
        "expected <2> but was <1>",
        "unexpected <1>",
        "expected <[2]> but was <[1]>",
        "unexpected <1>",
        "expected to panic with <100> but <1>",
        "unexpected panic <None> (didn't panic?)",
    ]
