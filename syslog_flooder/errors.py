"""Exception hierarchy for the syslog flooder."""


class FlooderError(Exception):
    """Base class for every error raised by the flooder."""


class ClockUnavailable(FlooderError):
    """The wall clock could not be read or converted to local time."""


class ConfigError(FlooderError, ValueError):
    """Invalid configuration, detected before any connection attempt."""


class LengthTooSmall(ConfigError):
    pass


class LengthTooLarge(ConfigError):
    pass


class TransmitFailure(FlooderError):
    """The transport refused to send a buffer."""


class ConnectFailure(FlooderError):
    """None of the resolved addresses accepted a connection."""
