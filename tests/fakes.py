"""Stand-ins for python-mpd2 clients used by the player and service tests."""

import mpd


class FakeSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.options = {}

    def setsockopt(self, level, name, value):
        if self.fail:
            raise OSError(95, "Operation not supported")
        self.options[(level, name)] = value


class FakeMPD:
    """Shared server state behind every FakeClient a session creates.

    ``failures`` is the number of upcoming commands that raise
    mpd.ConnectionError, as a dropped connection would.
    """

    def __init__(self, state="stop", failures=0, refuse_connect=False,
                 keepalive_fails=False):
        self.state = state
        self.failures = failures
        self.refuse_connect = refuse_connect
        self.keepalive_fails = keepalive_fails
        self.calls = []
        self.connects = 0
        self.disconnects = 0
        self.passwords = []
        self.clients = []

    def client(self):
        c = FakeClient(self)
        self.clients.append(c)
        return c


class FakeClient:
    mpd_version = "0.23.5"

    def __init__(self, server):
        self.server = server
        self.timeout = None
        self._sock = None

    def connect(self, host, port):
        if self.server.refuse_connect:
            raise ConnectionRefusedError(111, "Connection refused")
        self.server.connects += 1
        self._sock = FakeSocket(fail=self.server.keepalive_fails)

    def disconnect(self):
        self.server.disconnects += 1
        self._sock = None

    def password(self, password):
        self.server.passwords.append(password)

    def _command(self, name):
        if self._sock is None:
            raise mpd.ConnectionError("Not connected")
        self.server.calls.append(name)
        if self.server.failures > 0:
            self.server.failures -= 1
            raise mpd.ConnectionError("Connection lost while reading line")

    def status(self):
        self._command("status")
        return {"state": self.server.state, "volume": "50"}

    def play(self):
        self._command("play")

    def pause(self):
        self._command("pause")

    def stop(self):
        self._command("stop")

    def previous(self):
        self._command("previous")

    def next(self):
        self._command("next")


