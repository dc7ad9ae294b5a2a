"""Pacing counters and the throughput report line."""

from dataclasses import dataclass


@dataclass
class PacingStats:
    events_sent: int = 0
    # -1 until the first boundary crossing: the partial first second is not measured
    second_changes: int = -1
    send_failures: int = 0
    reports: int = 0

    @property
    def measuring(self) -> bool:
        return self.second_changes >= 0

    @property
    def seconds_observed(self) -> int:
        return max(self.second_changes, 0)

    def average(self) -> int | None:
        """Events per whole second, or None before the first full second."""
        if self.second_changes < 1:
            return None
        return self.events_sent // self.second_changes

    def report_line(self) -> str:
        avg = self.average()
        line = (
            f"{self.reports:4d} {self.seconds_observed:6d}s "
            f"{self.events_sent:10d} events sent, avg: "
            f"{avg if avg is not None else '-'} events/sec"
        )
        if self.send_failures:
            line += f" ({self.send_failures} send failures)"
        return line

    def summary(self) -> dict:
        return {
            "events_sent": self.events_sent,
            "seconds": self.seconds_observed,
            "send_failures": self.send_failures,
            "avg_events_per_sec": self.average(),
            "reports": self.reports,
        }
