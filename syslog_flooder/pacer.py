"""Send loop: paces emission, tracks elapsed seconds, reports throughput."""

import enum
import logging
import sys
import threading
from typing import Protocol, TextIO

from syslog_flooder.errors import ClockUnavailable, FlooderError, TransmitFailure
from syslog_flooder.metrics import PacingStats
from syslog_flooder.synthesizer import EventSynthesizer, LengthMode
from syslog_flooder.timestamp import TimestampGenerator

logger = logging.getLogger(__name__)


class Sender(Protocol):
    def send(self, data: bytes) -> None: ...


class LoopState(enum.Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class EventPacer:
    """Floods a transport with synthesized syslog events.

    Every iteration takes one timestamp, counts second-boundary crossings,
    and, once the first boundary has been seen, sends one event. Each
    ``stats_interval`` crossings a report line is printed. The loop ends on a
    clock failure, on a send failure when ``stop_on_send_error`` is set, or
    when ``shutdown_event`` is set.
    """

    def __init__(
        self,
        transport: Sender,
        synthesizer: EventSynthesizer,
        length_mode: LengthMode,
        timestamps: TimestampGenerator | None = None,
        stats_interval: int = 1,
        stop_on_send_error: bool = False,
        shutdown_event: threading.Event | None = None,
        out: TextIO | None = None,
    ):
        self._transport = transport
        self._synthesizer = synthesizer
        self._length_mode = length_mode
        self._timestamps = timestamps or TimestampGenerator()
        self._stats_interval = stats_interval
        self._stop_on_send_error = stop_on_send_error
        self._shutdown = shutdown_event or threading.Event()
        self._out = out
        self.stats = PacingStats()
        self.state = LoopState.RUNNING
        self.last_error: FlooderError | None = None

    def run(self) -> PacingStats:
        """Loop until stopped or cancelled. Returns the final counters."""
        while self.state is LoopState.RUNNING and not self._shutdown.is_set():
            self.step()
        return self.stats

    def step(self):
        """Run a single iteration of the loop."""
        if self.state is LoopState.STOPPED:
            return

        try:
            timestamp, crossed = self._timestamps.generate()
        except ClockUnavailable as e:
            logger.error("It was not possible to generate a new timestamp: %s", e)
            self._stop(e)
            return

        if crossed:
            self.stats.second_changes += 1

        if self.stats.measuring:
            data = self._synthesizer.synthesize(timestamp, self._length_mode)
            try:
                self._transport.send(data)
                self.stats.events_sent += 1
            except TransmitFailure as e:
                self.stats.send_failures += 1
                if self._stop_on_send_error:
                    logger.error("Send failed, stopping: %s", e)
                    self._stop(e)
                    return
                if self.stats.send_failures == 1:
                    logger.warning("Send failed, continuing: %s", e)
                else:
                    logger.debug("Send failed: %s", e)

        if (
            crossed
            and self.stats.second_changes >= 1
            and self.stats.second_changes % self._stats_interval == 0
        ):
            self.stats.reports += 1
            print(self.stats.report_line(), file=self._out or sys.stdout, flush=True)

    def _stop(self, error: FlooderError):
        self.last_error = error
        self.state = LoopState.STOPPED
