"""Remote command variants.

Each value is the endpoint suffix the EO API expects, so commands are
dispatched through explicit lookup tables instead of composed names.
"""

from __future__ import annotations

import enum


class ChargerCommand(enum.StrEnum):
    """Charger-level commands (``/api/mini/<value>``)."""

    ENABLE = "enable"
    DISABLE = "disable"


class SessionCommand(enum.StrEnum):
    """Session-level commands (``/api/session/<value>``).

    The pause endpoint is capitalized on the server side.
    """

    PAUSE = "Pause"
    UNPAUSE = "unpause"
