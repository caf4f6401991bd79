# acpi-mpd
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Reader for the acpid event socket.

acpid serves events to any client that connects to its UNIX stream socket
(/var/run/acpid.socket by default).  The connection is opened once; if it
breaks, acpid itself is gone and there is nothing sensible to reconnect to,
so every error here is fatal to the caller.
"""

import logging
import os
import select
import socket

logger = logging.getLogger(__name__)

DEFAULT_SOCKET = "/var/run/acpid.socket"
MAX_EVENT_SIZE = 128     # bytes per read
MAX_ADDRESS_LEN = 108    # sizeof(sockaddr_un.sun_path) on Linux, incl. NUL

_POLL_ERRORS = select.POLLERR | select.POLLNVAL


class AcpiError(Exception):
    """Base class for acpid socket errors."""


class AcpiUnreachable(AcpiError):
    """The event socket could not be opened."""


class AcpiIOError(AcpiError):
    """The event socket failed after it was opened."""


class AcpiSocket:
    """Single long-lived connection to the acpid event socket."""

    def __init__(self, path: str = DEFAULT_SOCKET,
                 max_event_size: int = MAX_EVENT_SIZE,
                 max_address_len: int = MAX_ADDRESS_LEN):
        self.path = path
        self.max_event_size = max_event_size
        self.max_address_len = max_address_len
        self.sock: socket.socket | None = None
        self._poller = None

    def open(self) -> None:
        """Connect to the event socket (non-blocking, close-on-exec).

        Calling open() on an open reader drops the old connection first.
        """
        if self.sock is not None:
            self.close()
        if len(os.fsencode(self.path)) > self.max_address_len - 1:
            raise AcpiUnreachable(
                f"socket path too long ({len(os.fsencode(self.path))} bytes, "
                f"limit {self.max_address_len - 1}): {self.path}")

        sock = socket.socket(socket.AF_UNIX,
                             socket.SOCK_STREAM | socket.SOCK_NONBLOCK | socket.SOCK_CLOEXEC)
        try:
            sock.connect(self.path)
        except OSError as e:
            sock.close()
            raise AcpiUnreachable(f"can't connect to {self.path}: {e}") from e

        self.sock = sock
        self._poller = select.poll()
        self._poller.register(sock.fileno(), select.POLLIN)
        logger.info("Connected to acpid at %s", self.path)

    def fileno(self) -> int:
        return self.sock.fileno() if self.sock is not None else -1

    def wait_for_event(self, timeout: float | None = None) -> bytes | None:
        """Block until the socket is readable, then read one payload.

        Returns None if *timeout* seconds pass without data, or on a spurious
        wakeup where the recv() would block.  Each readiness notification
        yields exactly one recv(); no line reassembly is done.
        """
        if self.sock is None:
            raise AcpiIOError("event socket is not open")

        timeout_ms = None if timeout is None else max(0, int(timeout * 1000))
        try:
            ready = self._poller.poll(timeout_ms)
        except OSError as e:
            raise AcpiIOError(f"poll failed: {e}") from e
        if not ready:
            return None

        _, revents = ready[0]
        if revents & _POLL_ERRORS:
            raise AcpiIOError(f"poll reported error on event socket (revents=0x{revents:x})")

        try:
            data = self.sock.recv(self.max_event_size)
        except BlockingIOError:
            return None
        except OSError as e:
            raise AcpiIOError(f"read failed: {e}") from e
        if not data:
            raise AcpiIOError("acpid closed the event socket")

        logger.debug("acpid event: %r", data)
        return data

    def close(self) -> None:
        if self.sock is None:
            return
        if self._poller is not None:
            try:
                self._poller.unregister(self.sock.fileno())
            except (KeyError, ValueError):
                pass
            self._poller = None
        self.sock.close()
        self.sock = None
        logger.info("Closed acpid socket")
