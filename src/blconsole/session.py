"""Wiring helpers — build a ready-to-use console on the real pipe.

This is the only module that connects the core service to the
infrastructure transport.
"""

from __future__ import annotations

from blconsole.config import TransportConfig
from blconsole.core.console import GameConsole
from blconsole.infra.pipe_transport import PipeTransport


def open_console(config: TransportConfig | None = None) -> GameConsole:
    """Return a :class:`GameConsole` talking to the command injector pipe.

    When *config* is ``None`` the settings come from the ``BLCONSOLE_*``
    environment variables, falling back to the defaults.
    """
    if config is None:
        config = TransportConfig.from_env()
    return GameConsole(PipeTransport(config))
