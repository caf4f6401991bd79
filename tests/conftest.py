"""Pytest configuration and shared fixtures."""

import os
import shutil
import socket
import tempfile

import pytest

from acpimpd import config
from fakes import FakeMPD


@pytest.fixture(autouse=True)
def empty_config(monkeypatch):
    """Run every test against built-in defaults, not a config.json on disk."""
    monkeypatch.setattr(config, "_config", {})
    monkeypatch.delenv("NOTIFY_SOCKET", raising=False)
    monkeypatch.delenv("MPD_PASSWORD", raising=False)


@pytest.fixture
def short_tmpdir():
    """A temp dir with a short path; AF_UNIX addresses are capped at 108 bytes."""
    path = tempfile.mkdtemp(prefix="acpimpd-", dir="/tmp")
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def acpid_server(short_tmpdir):
    """A listening UNIX stream socket standing in for acpid."""
    path = os.path.join(short_tmpdir, "acpid.socket")
    srv = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    srv.bind(path)
    srv.listen(1)
    yield srv, path
    srv.close()


@pytest.fixture
def fake_mpd():
    return FakeMPD()
