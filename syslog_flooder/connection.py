"""Resolves the target and opens a connected stream or datagram socket."""

import logging
import socket

from syslog_flooder.errors import ConnectFailure, TransmitFailure

logger = logging.getLogger(__name__)

PROTOCOLS = {
    "tcp": socket.SOCK_STREAM,
    "udp": socket.SOCK_DGRAM,
}


class Transport:
    """Connected socket wrapper exposing a single ``send`` primitive."""

    def __init__(self, sock: socket.socket, peer: str):
        self._sock: socket.socket | None = sock
        self.peer = peer
        self._stream = sock.type == socket.SOCK_STREAM

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def send(self, data: bytes):
        """Send one buffer. Raises TransmitFailure if the socket refuses it."""
        if self._sock is None:
            raise TransmitFailure("Transport is closed")
        try:
            if self._stream:
                self._sock.sendall(data)
            else:
                self._sock.send(data)
        except OSError as e:
            raise TransmitFailure(f"Send to {self.peer} failed: {e}") from e

    def close(self):
        if self._sock:
            try:
                self._sock.close()
            except OSError:
                pass
            self._sock = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def connect(host: str, service: str, protocol: str = "tcp",
            timeout: float = 5.0) -> Transport:
    """Connect to the first resolved address of host/service that accepts.

    Args:
        host: Hostname or IP literal (IPv4 or IPv6).
        service: Port number or service name, e.g. "514" or "syslog".
        protocol: "tcp" for a stream socket, "udp" for a datagram socket.
        timeout: Connect timeout in seconds; sends block without a timeout.

    Raises:
        ConnectFailure: resolution failed or no address accepted.
    """
    if protocol not in PROTOCOLS:
        raise ConnectFailure(f"Unsupported protocol: {protocol}")

    try:
        candidates = socket.getaddrinfo(
            host, service, socket.AF_UNSPEC, PROTOCOLS[protocol]
        )
    except (socket.gaierror, UnicodeError) as e:
        raise ConnectFailure(f"Unable to resolve {host}:{service}: {e}") from e

    for family, socktype, proto, _, address in candidates:
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as e:
            logger.warning("Error while creating socket: %s", e)
            continue
        try:
            sock.settimeout(timeout)
            sock.connect(address)
            sock.settimeout(None)
        except OSError as e:
            sock.close()
            logger.warning("Unable to connect to %s: %s", address[0], e)
            continue

        logger.info(
            "Connection with the target (%s) established. Sending events...",
            address[0],
        )
        return Transport(sock, f"{address[0]}:{address[1]}")

    raise ConnectFailure(f"Unable to connect to {host}:{service} over {protocol}")
