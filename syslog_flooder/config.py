"""Configuration: frozen dataclass from defaults <- YAML file <- env vars <- CLI."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

from syslog_flooder.connection import PROTOCOLS
from syslog_flooder.errors import ConfigError
from syslog_flooder.synthesizer import (
    DEFAULT_RANDOM_MAX,
    DEFAULT_RANDOM_MIN,
    FILL_LETTERS,
    VALID_FILLS,
    LengthMode,
    validate_length_mode,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def _parse_optional_int(value) -> int | None:
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return None
    return int(value)


@dataclass(frozen=True)
class Config:
    host: str = "localhost"
    service: str = "514"
    protocol: str = "tcp"
    event_length: int | None = None
    random_length: bool = False
    random_length_min: int = DEFAULT_RANDOM_MIN
    random_length_max: int = DEFAULT_RANDOM_MAX
    body_fill: str = FILL_LETTERS
    stats_interval: int = 1
    stop_on_send_error: bool = False
    connect_timeout: float = 5.0
    seed: int | None = None
    log_level: str = "INFO"

    def length_mode(self) -> LengthMode:
        if self.event_length is not None:
            return LengthMode.fixed(self.event_length)
        if self.random_length:
            return LengthMode.random_range(self.random_length_min, self.random_length_max)
        return LengthMode.catalog()


_ENV_VARS = {
    "host": "SYSLOG_HOST",
    "service": "SYSLOG_PORT",
    "protocol": "SYSLOG_PROTOCOL",
    "event_length": "EVENT_LENGTH",
    "random_length": "RANDOM_LENGTH",
    "random_length_min": "RANDOM_LENGTH_MIN",
    "random_length_max": "RANDOM_LENGTH_MAX",
    "body_fill": "BODY_FILL",
    "stats_interval": "STATS_INTERVAL",
    "stop_on_send_error": "STOP_ON_SEND_ERROR",
    "connect_timeout": "CONNECT_TIMEOUT",
    "seed": "RANDOM_SEED",
    "log_level": "LOG_LEVEL",
}

_PARSERS = {
    "host": str,
    "service": str,
    "protocol": lambda v: str(v).strip().lower(),
    "event_length": _parse_optional_int,
    "random_length": _parse_bool,
    "random_length_min": int,
    "random_length_max": int,
    "body_fill": lambda v: str(v).strip().lower(),
    "stats_interval": int,
    "stop_on_send_error": _parse_bool,
    "connect_timeout": float,
    "seed": _parse_optional_int,
    "log_level": lambda v: str(v).strip().upper(),
}


def load_yaml_config(path: str | None) -> dict:
    """Load option overrides from a YAML mapping. Returns {} if no path.

    Keys are the Config field names; dashes are accepted in place of
    underscores. Unknown keys are logged and ignored.
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigError(f"Config file {path} not found") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(Config)}
    result = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        if name not in known:
            logger.warning("Ignoring unknown option '%s' in %s", key, path)
            continue
        result[name] = value
    logger.info("Loaded YAML config from %s", path)
    return result


def load_config(cli_overrides: dict | None = None,
                yaml_data: dict | None = None) -> Config:
    """Build Config from defaults <- YAML data <- env vars <- CLI overrides.

    ``cli_overrides`` entries set to None are treated as "not given".
    """
    raw: dict = {}
    raw.update(yaml_data or {})
    for name, env_var in _ENV_VARS.items():
        if env_var in os.environ:
            raw[name] = os.environ[env_var]
    for name, value in (cli_overrides or {}).items():
        if value is not None:
            raw[name] = value

    kwargs = {}
    for name, value in raw.items():
        try:
            kwargs[name] = _PARSERS[name](value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value for {name}: {value!r}") from e
    return Config(**kwargs)


def validate_config(config: Config):
    """Reject configurations the send loop cannot honour.

    Raises:
        ConfigError: or its LengthTooSmall / LengthTooLarge subclasses.
    """
    if config.protocol not in PROTOCOLS:
        raise ConfigError(
            f"Unknown protocol '{config.protocol}', expected one of {sorted(PROTOCOLS)}"
        )
    if config.body_fill not in VALID_FILLS:
        raise ConfigError(
            f"Unknown body fill '{config.body_fill}', expected one of {VALID_FILLS}"
        )
    if config.log_level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level '{config.log_level}'")
    if config.event_length is not None and config.random_length:
        raise ConfigError("An explicit event length cannot be combined with random lengths")
    if config.stats_interval < 1:
        raise ConfigError(f"Statistics interval must be at least 1, got {config.stats_interval}")
    if config.connect_timeout <= 0:
        raise ConfigError(f"Connect timeout must be positive, got {config.connect_timeout}")
    validate_length_mode(config.length_mode())
