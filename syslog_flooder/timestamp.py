"""RFC3339-style timestamps with second-boundary detection."""

import time
from typing import Callable

from syslog_flooder.errors import ClockUnavailable

# "YYYY-MM-DDTHH:MM:SS.ffffffZ"
TIMESTAMP_LENGTH = 27

_NANOS_PER_SECOND = 1_000_000_000


class TimestampGenerator:
    """Formats the current local wall-clock time with microsecond precision.

    The suffix is a literal ``Z`` even though the fields are local time; the
    receivers this tool was written against expect that shape.

    ``generate()`` also reports whether the seconds field changed since the
    previous call. The first call never reports a crossing. Instances keep
    that state between calls, so one instance must be driven by exactly one
    caller.
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self._clock = clock
        self._last_second: int | None = None

    def generate(self) -> tuple[str, bool]:
        """Return ``(timestamp, crossed_boundary)``.

        Raises:
            ClockUnavailable: the clock could not be read or converted.
        """
        try:
            seconds, nanos = divmod(self._clock(), _NANOS_PER_SECOND)
            fields = time.localtime(seconds)
        except (OSError, OverflowError, ValueError) as exc:
            raise ClockUnavailable(f"Unable to read the wall clock: {exc}") from exc

        text = time.strftime("%Y-%m-%dT%H:%M:%S", fields) + f".{nanos // 1000:06d}Z"

        crossed = self._last_second is not None and self._last_second != fields.tm_sec
        self._last_second = fields.tm_sec
        return text, crossed
