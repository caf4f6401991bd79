# acpi-mpd
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""Systemd readiness and watchdog notification for the bridge loop.

Sends READY=1 / WATCHDOG=1 / STOPPING=1 to the systemd notify socket.
Silently no-ops when NOTIFY_SOCKET is unset (started by hand / dev mode).

Usage:
    from acpimpd.watchdog import Heartbeat, sd_notify

    heartbeat = Heartbeat(interval=20)
    sd_notify("READY=1")
    ...
    heartbeat()        # from the loop; sends at most once per interval
"""

import logging
import os
import socket
import time

logger = logging.getLogger(__name__)


def sd_notify(msg: str) -> bool:
    """Send a notification message to the systemd notify socket.

    Returns True if a message was sent.
    """
    addr = os.environ.get("NOTIFY_SOCKET")
    if not addr:
        return False
    if addr[0] == "@":
        addr = "\0" + addr[1:]
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
    try:
        sock.sendto(msg.encode(), addr)
    except OSError as e:
        logger.warning("sd_notify(%s) failed: %s", msg, e)
        return False
    finally:
        sock.close()
    return True


class Heartbeat:
    """Rate-limited WATCHDOG=1 sender, called once per loop iteration."""

    def __init__(self, interval: float = 20, clock=time.monotonic):
        self.interval = interval
        self._clock = clock
        self._last: float | None = None

    def __call__(self) -> None:
        now = self._clock()
        if self._last is not None and now - self._last < self.interval:
            return
        self._last = now
        sd_notify("WATCHDOG=1")
