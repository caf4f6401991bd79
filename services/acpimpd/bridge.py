# acpi-mpd
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Bridge: wait for an acpid event, map it, send it to MPD, repeat.

Single-threaded and strictly sequential.  The loop only ends on a fatal
error (acpid gone, MPD unreachable after retries) or when a signal handler
raises SystemExit; either way both connections are released on the way out.
"""

import logging

from .acpi import AcpiIOError
from .commands import map_event

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class Bridge:
    def __init__(self, reader, session, mapper=map_event,
                 heartbeat=None, heartbeat_interval: float | None = None):
        self.reader = reader
        self.session = session
        self.mapper = mapper
        self.heartbeat = heartbeat
        self.heartbeat_interval = heartbeat_interval
        self.events_seen = 0
        self.commands_sent = 0

    def run(self) -> int:
        """Run until a fatal error. Returns the process exit status."""
        try:
            return self._loop()
        finally:
            logger.info("Bridge stopping (%d events, %d commands)",
                        self.events_seen, self.commands_sent)
            self.reader.close()
            self.session.close()

    def _loop(self) -> int:
        while True:
            if self.heartbeat is not None:
                self.heartbeat()

            try:
                payload = self.reader.wait_for_event(self.heartbeat_interval)
            except AcpiIOError as e:
                logger.error("acpid event socket failed: %s", e)
                return EXIT_FAILURE
            if payload is None:
                continue
            self.events_seen += 1

            command = self.mapper(payload)
            if command is None:
                logger.debug("Ignoring event %r", payload)
                continue

            if not self.session.execute(command):
                logger.error("Giving up: could not send %s to MPD", command.value)
                return EXIT_FAILURE
            self.commands_sent += 1
