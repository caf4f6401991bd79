# acpi-mpd
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
MPDSession: the bridge's connection to MPD.

Owns exactly one python-mpd2 client at a time.  MPD drops idle clients
(connection_timeout) and restarts independently of us, so a failed command
is treated as a broken connection: close, reopen, try again, up to the
retry budget.

    session = MPDSession("/run/user/1000/mpd/socket")
    session.open()                   # raises PlayerError
    session.execute(Command.NEXT)    # -> True / False
    session.close()

State machine:

    DISCONNECTED --open()--> CONNECTING --ok--> CONNECTED
                                        --err--> FAILED
    CONNECTED --close() / failed command--> DISCONNECTED
"""

import logging
import socket
from enum import Enum

import mpd

from .commands import Command

logger = logging.getLogger(__name__)

DEFAULT_PORT = 6600
DEFAULT_TIMEOUT = 10      # seconds per MPD round trip
DEFAULT_RETRIES = 3

# Anything the client or its socket can raise while talking to MPD
COMMAND_ERRORS = (mpd.MPDError, OSError)


class PlayerState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class PlayerError(Exception):
    """MPD could not be connected."""


class MPDSession:
    """Reconnecting command channel to a single MPD instance."""

    def __init__(self, host: str, port: int = DEFAULT_PORT, *,
                 password: str | None = None,
                 timeout: float | None = DEFAULT_TIMEOUT,
                 retries: int = DEFAULT_RETRIES,
                 client_factory=mpd.MPDClient):
        self.host = host
        self.port = port
        self.password = password
        self.timeout = timeout
        self.retries = retries
        self._client_factory = client_factory
        self.client = None
        self._state = PlayerState.DISCONNECTED
        self.reconnects = 0

    @property
    def state(self) -> PlayerState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._state is PlayerState.CONNECTED

    # ── Connection lifecycle ──

    def open(self) -> None:
        """Connect to MPD and enable keepalive (best-effort).

        Any client from an earlier open() is disconnected first.
        """
        if self.client is not None:
            self.close()
        self._state = PlayerState.CONNECTING
        client = self._client_factory()
        client.timeout = self.timeout
        try:
            client.connect(self.host, self.port)
            if self.password:
                client.password(self.password)
        except COMMAND_ERRORS as e:
            self._state = PlayerState.FAILED
            self._drop(client)
            raise PlayerError(f"got error {e} connecting to {self.host}") from e

        self.client = client
        self._enable_keepalive()
        self._state = PlayerState.CONNECTED
        logger.info("Connected to MPD at %s (protocol %s)",
                    self.host, getattr(client, "mpd_version", "?"))

    def _enable_keepalive(self) -> None:
        # python-mpd2 keeps its socket in _sock; there is no public accessor
        sock = getattr(self.client, "_sock", None)
        try:
            if sock is None:
                raise OSError("client has no socket")
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
        except OSError as e:
            logger.warning("KeepAlive not enabled: %s", e)

    def close(self) -> None:
        """Disconnect and drop the client."""
        client, self.client = self.client, None
        if client is not None:
            self._drop(client)
        self._state = PlayerState.DISCONNECTED

    @staticmethod
    def _drop(client) -> None:
        try:
            client.disconnect()
        except COMMAND_ERRORS as e:
            logger.debug("Ignoring error on disconnect: %s", e)

    def reconnect(self) -> bool:
        """Close and reopen the connection. Returns True if connected again."""
        self.reconnects += 1
        self.close()
        try:
            self.open()
        except PlayerError as e:
            logger.warning("Reconnect to MPD failed: %s", e)
            return False
        return True

    # ── Commands ──

    def _dispatch(self, command: Command) -> None:
        if self.client is None:
            raise mpd.ConnectionError("Not connected")
        client = self.client

        if command is Command.PLAY:
            state = client.status().get("state")
            if state == "stop":
                client.play()
            else:
                # playing or paused: plain "pause" toggles
                client.pause()
        elif command is Command.STOP:
            client.stop()
        elif command is Command.PREVIOUS:
            client.previous()
        elif command is Command.NEXT:
            client.next()
        else:
            raise ValueError(f"unknown command {command!r}")

    def execute(self, command: Command) -> bool:
        """Run *command*, reconnecting after each failure.

        Returns True on the first successful attempt, False once the retry
        budget is spent.  The reconnect result is not checked: a failed
        reconnect still uses up its attempt.
        """
        for attempt in range(1, self.retries + 1):
            try:
                self._dispatch(command)
            except COMMAND_ERRORS as e:
                logger.warning("MPD %s failed (attempt %d/%d): %s, reconnecting",
                               command.value, attempt, self.retries, e)
                self.reconnect()
                continue
            logger.info("MPD %s", command.value)
            return True

        logger.error("MPD %s failed after %d attempts", command.value, self.retries)
        return False
