#!/usr/bin/env python3
# acpi-mpd
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
acpi-mpd: drive MPD from the CD transport keys reported by acpid.

    acpi-mpd [-a HOST] [-s PATH] [-p PORT] [-v]

  -a HOST   MPD host or socket path
            (default: $XDG_RUNTIME_DIR/mpd/socket, else localhost)
  -s PATH   acpid event socket (default: /var/run/acpid.socket)
  -p PORT   MPD TCP port (default: 6600, ignored for socket paths)
  -v        debug logging

The MPD password, if any, is read from MPD_PASSWORD or mpd.password in
config.json.
"""

import argparse
import logging
import os
import signal
import sys

# Ensure services/ is on the path when run as a script
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from acpimpd import __version__
from acpimpd.acpi import (
    DEFAULT_SOCKET, MAX_ADDRESS_LEN, MAX_EVENT_SIZE, AcpiSocket, AcpiUnreachable,
)
from acpimpd.bridge import EXIT_FAILURE, EXIT_OK, Bridge
from acpimpd.config import cfg
from acpimpd.player import (
    DEFAULT_PORT, DEFAULT_RETRIES, DEFAULT_TIMEOUT, MPDSession, PlayerError,
)
from acpimpd.watchdog import Heartbeat, sd_notify

logger = logging.getLogger('acpi-mpd')

MPD_SOCKET_SUFFIX = "mpd/socket"
MPD_FALLBACK_HOST = "localhost"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="acpi-mpd",
        description="Send acpid CD transport key events to MPD")
    parser.add_argument("-a", dest="host", metavar="HOST",
                        help="MPD host or socket path")
    parser.add_argument("-s", dest="acpid_socket", metavar="PATH",
                        help="acpid event socket")
    parser.add_argument("-p", dest="port", metavar="PORT", type=int,
                        help="MPD TCP port")
    parser.add_argument("-v", dest="verbose", action="store_true",
                        help="debug logging")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if not verbose:
        level = str(cfg("log_level", default="INFO")).upper()
        logging.getLogger().setLevel(getattr(logging, level, logging.INFO))


def resolve_mpd_host(cli_host: str | None, env=None) -> str:
    """-a flag, then mpd.host, then $XDG_RUNTIME_DIR/mpd/socket."""
    if cli_host:
        return cli_host
    host = cfg("mpd", "host")
    if host:
        return host
    env = os.environ if env is None else env
    run_dir = env.get("XDG_RUNTIME_DIR")
    if not run_dir:
        logger.warning("XDG_RUNTIME_DIR not set, falling back to MPD at %s", MPD_FALLBACK_HOST)
        return MPD_FALLBACK_HOST
    return os.path.join(run_dir, MPD_SOCKET_SUFFIX)


def resolve_acpid_socket(cli_path: str | None) -> str:
    """-s flag, then acpid.socket, then the acpid default."""
    return cli_path or cfg("acpid", "socket", default=DEFAULT_SOCKET)


def signal_handler(signum, frame):
    """Handle shutdown signals."""
    logger.info("Received signal %d, shutting down...", signum)
    sys.exit(EXIT_OK)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    reader = AcpiSocket(
        resolve_acpid_socket(args.acpid_socket),
        max_event_size=int(cfg("acpid", "max_event_size", default=MAX_EVENT_SIZE)),
        max_address_len=int(cfg("acpid", "max_address_len", default=MAX_ADDRESS_LEN)),
    )
    try:
        reader.open()
    except AcpiUnreachable as e:
        logger.error("Can't open acpid socket: %s", e)
        return EXIT_FAILURE

    session = MPDSession(
        resolve_mpd_host(args.host),
        args.port or int(cfg("mpd", "port", default=DEFAULT_PORT)),
        password=os.getenv("MPD_PASSWORD") or cfg("mpd", "password"),
        timeout=cfg("mpd", "timeout", default=DEFAULT_TIMEOUT),
        retries=int(cfg("mpd", "retries", default=DEFAULT_RETRIES)),
    )
    try:
        session.open()
    except PlayerError as e:
        logger.error("Can't connect to MPD: %s", e)
        reader.close()
        return EXIT_FAILURE

    interval = float(cfg("watchdog", "interval", default=20))
    bridge = Bridge(reader, session,
                    heartbeat=Heartbeat(interval), heartbeat_interval=interval)

    sd_notify("READY=1")
    logger.info("acpi-mpd %s running (acpid %s -> MPD %s)",
                __version__, reader.path, session.host)
    try:
        return bridge.run()
    finally:
        sd_notify("STOPPING=1")


if __name__ == "__main__":
    sys.exit(main())
