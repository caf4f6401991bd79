# acpi-mpd
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Shared plumbing for the acpi-mpd bridge service.

  - ``acpi``      acpid event socket reader
  - ``commands``  event payload -> playback command mapping
  - ``player``    MPD session with reconnect-and-retry
  - ``bridge``    the event loop tying the three together
  - ``config``    optional JSON config
  - ``watchdog``  systemd notify / watchdog heartbeat
"""

__version__ = "0.1.0"
