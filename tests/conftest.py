"""Shared pytest fixtures: a scripted clock and a recording transport."""

import socket
import threading
import time

import pytest

from syslog_flooder.errors import TransmitFailure

NANOS = 1_000_000_000
# A whole second, far from any DST transition
BASE_SECOND = int(time.mktime((2024, 1, 15, 12, 0, 0, 0, 0, -1)))


def seconds_timeline(*calls_per_second, start=BASE_SECOND):
    """Nanosecond readings: calls_per_second[i] readings inside second start+i."""
    readings = []
    for offset, calls in enumerate(calls_per_second):
        for n in range(calls):
            readings.append((start + offset) * NANOS + n * 1000 + 123_000)
    return readings


class FakeClock:
    """Returns the scripted readings, then fails like an unreadable clock."""

    def __init__(self, readings):
        self._readings = list(readings)
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        if not self._readings:
            raise OSError("clock_gettime failed")
        return self._readings.pop(0)


class FakeTransport:
    """Records every buffer; ``fail_on`` holds 1-based send attempts that fail."""

    def __init__(self, fail_on=()):
        self.sent: list[bytes] = []
        self.attempts = 0
        self._fail_on = set(fail_on)

    def send(self, data: bytes):
        self.attempts += 1
        if self.attempts in self._fail_on:
            raise TransmitFailure("connection reset")
        self.sent.append(data)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


def start_tcp_sink(shutdown_event, max_bytes=1 << 20):
    """Start a TCP server that keeps the first max_bytes it receives. Returns (port, chunks)."""
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    srv.settimeout(1.0)
    srv.bind(("127.0.0.1", 0))
    srv.listen(5)
    chunks = []
    kept = 0

    def accept_loop():
        nonlocal kept
        while not shutdown_event.is_set():
            try:
                conn, _ = srv.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            conn.settimeout(1.0)
            while not shutdown_event.is_set():
                try:
                    data = conn.recv(65536)
                except socket.timeout:
                    continue
                except OSError:
                    break
                if not data:
                    break
                if kept < max_bytes:
                    chunks.append(data)
                    kept += len(data)
            conn.close()
        srv.close()

    threading.Thread(target=accept_loop, daemon=True).start()
    return srv.getsockname()[1], chunks
