# acpi-mpd
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Translate raw acpid event lines into playback commands.

acpid writes one text line per event, e.g.

    cd/play CDPLAY 00000080 00000000 K

Only the CD transport keys are recognised, by comparing the first
EVENT_PREFIX_LEN bytes of the payload.  Anything else maps to None.
"""

from enum import Enum


class Command(Enum):
    PLAY = "play"
    STOP = "stop"
    PREVIOUS = "previous"
    NEXT = "next"


EVENT_PREFIX_LEN = 14

EVENT_TABLE = {
    b"cd/play CDPLAY": Command.PLAY,
    b"cd/stop CDSTOP": Command.STOP,
    b"cd/prev CDPREV": Command.PREVIOUS,
    b"cd/next CDNEXT": Command.NEXT,
}


def map_event(payload: bytes | str) -> Command | None:
    """Return the Command for *payload*, or None if it is not a CD key event."""
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return EVENT_TABLE.get(bytes(payload[:EVENT_PREFIX_LEN]))
