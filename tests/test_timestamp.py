"""Tests for the timestamp generator."""

import re
import time

import pytest

from conftest import BASE_SECOND, NANOS, FakeClock, seconds_timeline
from syslog_flooder.errors import ClockUnavailable
from syslog_flooder.timestamp import TIMESTAMP_LENGTH, TimestampGenerator

TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}Z$")


class TestFormat:
    def test_shape_and_length(self):
        text, _ = TimestampGenerator().generate()
        assert TIMESTAMP_RE.match(text)
        assert len(text) == TIMESTAMP_LENGTH

    def test_uses_local_wall_clock_fields(self):
        gen = TimestampGenerator(FakeClock([BASE_SECOND * NANOS + 42_987_654]))
        text, _ = gen.generate()
        expected = time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(BASE_SECOND))
        assert text == expected + ".042987Z"

    def test_microseconds_zero_padded(self):
        gen = TimestampGenerator(FakeClock([BASE_SECOND * NANOS + 5_000]))
        text, _ = gen.generate()
        assert text.endswith(".000005Z")

    def test_nanoseconds_truncated(self):
        gen = TimestampGenerator(FakeClock([BASE_SECOND * NANOS + 999_999_999]))
        text, _ = gen.generate()
        assert text.endswith(".999999Z")


class TestBoundaryDetection:
    def test_first_call_never_crosses(self):
        gen = TimestampGenerator(FakeClock([BASE_SECOND * NANOS]))
        _, crossed = gen.generate()
        assert crossed is False

    def test_first_call_with_real_clock(self):
        _, crossed = TimestampGenerator().generate()
        assert crossed is False

    def test_same_second_does_not_cross(self):
        gen = TimestampGenerator(FakeClock(seconds_timeline(3)))
        assert [gen.generate()[1] for _ in range(3)] == [False, False, False]

    def test_crossing_flagged_once_per_new_second(self):
        gen = TimestampGenerator(FakeClock(seconds_timeline(2, 3, 1)))
        flags = [gen.generate()[1] for _ in range(6)]
        assert flags == [False, False, True, False, False, True]

    def test_crossings_equal_distinct_seconds_minus_one(self):
        readings = seconds_timeline(4, 1, 7, 2, 5)
        gen = TimestampGenerator(FakeClock(readings))
        results = [gen.generate() for _ in readings]

        distinct_seconds = {text[:19] for text, _ in results}
        assert sum(crossed for _, crossed in results) == len(distinct_seconds) - 1

    def test_skipped_seconds_still_cross(self):
        gen = TimestampGenerator(FakeClock([BASE_SECOND * NANOS, (BASE_SECOND + 5) * NANOS]))
        gen.generate()
        assert gen.generate()[1] is True

    def test_real_clock_crosses_after_a_second(self):
        gen = TimestampGenerator()
        gen.generate()
        time.sleep(1.05)
        _, crossed = gen.generate()
        assert crossed is True


class TestClockFailure:
    def test_clock_error_raises_clock_unavailable(self):
        gen = TimestampGenerator(FakeClock([]))
        with pytest.raises(ClockUnavailable):
            gen.generate()

    def test_unconvertible_time_raises_clock_unavailable(self):
        gen = TimestampGenerator(lambda: 10 ** 30)
        with pytest.raises(ClockUnavailable):
            gen.generate()

    def test_cause_is_chained(self):
        gen = TimestampGenerator(FakeClock([]))
        with pytest.raises(ClockUnavailable) as exc_info:
            gen.generate()
        assert isinstance(exc_info.value.__cause__, OSError)
