"""Entry point for the syslog flooder."""

import argparse
import logging
import random
import signal
import sys
import threading

from syslog_flooder.config import load_config, load_yaml_config, validate_config
from syslog_flooder.connection import connect
from syslog_flooder.errors import ConfigError, ConnectFailure
from syslog_flooder.pacer import EventPacer
from syslog_flooder.synthesizer import MAX_MESSAGE_LENGTH, MIN_EVENT_LENGTH, EventSynthesizer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sends syslog events to a receiver as fast as the connection allows."
    )
    parser.add_argument("host", nargs="?", default=None, help="Target hostname or IP")
    parser.add_argument("port", nargs="?", default=None, help="Target port or service name")
    parser.add_argument(
        "-l", "--length",
        type=int,
        default=None,
        help=f"Exact length (in chars) of each event [{MIN_EVENT_LENGTH}-{MAX_MESSAGE_LENGTH}]",
    )
    parser.add_argument(
        "--random-length",
        action="store_true",
        default=None,
        help="Pick a random event length per message (100-225 by default)",
    )
    parser.add_argument(
        "--udp", action="store_true", default=None, help="Send over UDP instead of TCP"
    )
    parser.add_argument(
        "--fill",
        choices=("letters", "catalog"),
        default=None,
        help="Body content for fixed-length events",
    )
    parser.add_argument(
        "--stats-interval", type=int, default=None, help="Seconds between statistics lines"
    )
    parser.add_argument(
        "--stop-on-send-error",
        action="store_true",
        default=None,
        help="Stop on the first failed send instead of continuing",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for event bodies")
    parser.add_argument("--config", default=None, help="Optional YAML config file")
    parser.add_argument("--log-level", default=None, help="Logging verbosity")
    return parser.parse_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict:
    return {
        "host": args.host,
        "service": args.port,
        "protocol": "udp" if args.udp else None,
        "event_length": args.length,
        "random_length": args.random_length,
        "body_fill": args.fill,
        "stats_interval": args.stats_interval,
        "stop_on_send_error": args.stop_on_send_error,
        "seed": args.seed,
        "log_level": args.log_level,
    }


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(_cli_overrides(args), load_yaml_config(args.config))
        validate_config(config)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return EXIT_CONFIG_ERROR

    logging.getLogger().setLevel(config.log_level)

    shutdown_event = threading.Event()

    def signal_handler(signum, frame):
        logger.info("Received signal %d, shutting down...", signum)
        shutdown_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    length_mode = config.length_mode()
    logger.info(
        "Starting syslog flooder: target=%s:%s/%s, mode=%s",
        config.host, config.service, config.protocol, length_mode.kind,
    )

    try:
        transport = connect(config.host, config.service, config.protocol,
                            timeout=config.connect_timeout)
    except ConnectFailure as e:
        logger.error("%s", e)
        return EXIT_FAILURE

    with transport:
        pacer = EventPacer(
            transport,
            EventSynthesizer(random.Random(config.seed), fill=config.body_fill),
            length_mode,
            stats_interval=config.stats_interval,
            stop_on_send_error=config.stop_on_send_error,
            shutdown_event=shutdown_event,
        )
        stats = pacer.run()

    logger.info("Stopped: %s", stats.summary())
    return EXIT_FAILURE if pacer.last_error is not None else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
