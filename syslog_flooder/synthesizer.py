"""Syslog event synthesis: fixed header plus a catalog or length-driven body."""

import random
import string
from dataclasses import dataclass

from syslog_flooder.catalog import EVENT_CATALOG
from syslog_flooder.errors import ConfigError, LengthTooLarge, LengthTooSmall
from syslog_flooder.timestamp import TIMESTAMP_LENGTH

HEADER_PREFIX = "<13>"
HEADER_SUFFIX = " localhost.localdomain my.app: "
HEADER_LENGTH = len(HEADER_PREFIX) + TIMESTAMP_LENGTH + len(HEADER_SUFFIX)

MAX_MESSAGE_LENGTH = 1024
# One body byte plus the trailing newline
MIN_EVENT_LENGTH = HEADER_LENGTH + 2

DEFAULT_RANDOM_MIN = 100
DEFAULT_RANDOM_MAX = 225

FILL_LETTERS = "letters"
FILL_CATALOG = "catalog"
VALID_FILLS = (FILL_LETTERS, FILL_CATALOG)

MODE_CATALOG = "catalog"
MODE_RANDOM = "random"
MODE_FIXED = "fixed"


@dataclass(frozen=True)
class LengthMode:
    kind: str = MODE_CATALOG
    length: int | None = None
    min_length: int = DEFAULT_RANDOM_MIN
    max_length: int = DEFAULT_RANDOM_MAX

    @classmethod
    def catalog(cls) -> "LengthMode":
        return cls(MODE_CATALOG)

    @classmethod
    def random_range(cls, min_length: int = DEFAULT_RANDOM_MIN,
                     max_length: int = DEFAULT_RANDOM_MAX) -> "LengthMode":
        return cls(MODE_RANDOM, min_length=min_length, max_length=max_length)

    @classmethod
    def fixed(cls, length: int) -> "LengthMode":
        return cls(MODE_FIXED, length=length)


def _check_length(length: int, name: str):
    if length < MIN_EVENT_LENGTH:
        raise LengthTooSmall(
            f"{name} {length} is below the minimum of {MIN_EVENT_LENGTH} "
            f"(header is {HEADER_LENGTH} bytes, plus one body byte and a newline)"
        )
    if length > MAX_MESSAGE_LENGTH:
        raise LengthTooLarge(
            f"{name} {length} exceeds the maximum message size of {MAX_MESSAGE_LENGTH}"
        )


def validate_length_mode(mode: LengthMode):
    """Reject lengths that could not be produced exactly.

    Raises:
        LengthTooSmall / LengthTooLarge: a bound lies outside
            [MIN_EVENT_LENGTH, MAX_MESSAGE_LENGTH].
        ConfigError: unknown mode kind or inverted random range.
    """
    if mode.kind == MODE_CATALOG:
        return
    if mode.kind == MODE_FIXED:
        if mode.length is None:
            raise LengthTooSmall("A fixed length mode needs an event length")
        _check_length(mode.length, "Event length")
    elif mode.kind == MODE_RANDOM:
        _check_length(mode.min_length, "Minimum event length")
        _check_length(mode.max_length, "Maximum event length")
        if mode.min_length > mode.max_length:
            raise ConfigError(
                f"Minimum event length {mode.min_length} is greater than "
                f"maximum {mode.max_length}"
            )
    else:
        raise ConfigError(f"Unknown length mode: {mode.kind}")


def build_header(timestamp: str) -> str:
    return f"{HEADER_PREFIX}{timestamp}{HEADER_SUFFIX}"


class EventSynthesizer:
    """Builds one syslog message per call.

    Every event ends with a newline. Catalog mode uses a catalog entry
    verbatim as the body. The length-driven modes size the body so that
    header + body + newline is exactly the requested total; random-range
    bodies are always uppercase letters, ``fill`` only applies to fixed
    lengths. Lengths are expected to have passed ``validate_length_mode``.
    """

    def __init__(self, rng: random.Random | None = None,
                 catalog: tuple[str, ...] = EVENT_CATALOG,
                 fill: str = FILL_LETTERS):
        if fill not in VALID_FILLS:
            raise ConfigError(f"Unknown body fill: {fill}")
        self._rng = rng or random.Random()
        self._catalog = catalog
        self._fill = fill

    def synthesize(self, timestamp: str, mode: LengthMode) -> bytes:
        header = build_header(timestamp)

        if mode.kind == MODE_CATALOG:
            return (header + self._rng.choice(self._catalog) + "\n").encode("ascii")

        if mode.kind == MODE_RANDOM:
            total = self._rng.randint(mode.min_length, mode.max_length)
            body = self._letters(total - len(header) - 1)
        elif self._fill == FILL_LETTERS:
            body = self._letters(mode.length - len(header) - 1)
        else:
            body = self._catalog_text(mode.length - len(header) - 1)
        return (header + body + "\n").encode("ascii")

    def _letters(self, size: int) -> str:
        return self._rng.choice(string.ascii_uppercase) * size

    def _catalog_text(self, size: int) -> str:
        # Concatenate random catalog entries, truncating the last one
        parts = []
        remaining = size
        while remaining > 0:
            part = self._rng.choice(self._catalog)[:remaining]
            parts.append(part)
            remaining -= len(part)
        return "".join(parts)
