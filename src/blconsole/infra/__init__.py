"""Infrastructure layer — external system integration.

This layer wraps all interaction with the game's command injector pipe
through pywin32.  Every raw third-party exception must be caught here
and re-raised as a :class:`~blconsole.exceptions.BLConsoleError`
subclass.

Rules
-----
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from blconsole.infra.named_pipe import PipeConnection, open_pipe
from blconsole.infra.pipe_transport import PipeTransport

__all__: list[str] = [
    "PipeConnection",
    "PipeTransport",
    "open_pipe",
]
