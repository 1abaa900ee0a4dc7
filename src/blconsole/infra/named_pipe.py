"""pywin32 backed client end of the command injector's named pipe.

This module is the **only** place in the codebase that imports pywin32.
All ``pywintypes.error`` exceptions are caught here and re-raised as
typed :class:`~blconsole.exceptions.ChannelError` subclasses — nothing
raw escapes the infrastructure boundary.

pywin32 is imported lazily so that the rest of the library (parsers,
models, display) keeps working on platforms where it is not installed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from blconsole.config import READ_CHUNK_SIZE, TransportConfig
from blconsole.exceptions import (
    ChannelIOError,
    ChannelUnavailableError,
    EnvironmentError,
    append_injector_hint,
)

logger = logging.getLogger(__name__)

LINE_TERMINATOR: str = "\r\n"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


# ---------------------------------------------------------------------------
# pywin32 loading
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Win32Api:
    """The pywin32 modules used by :class:`PipeConnection`."""

    win32pipe: ModuleType
    win32file: ModuleType
    pywintypes: ModuleType
    winerror: ModuleType


def load_win32_api() -> Win32Api:
    """Import pywin32 or raise :class:`EnvironmentError`."""
    try:
        import pywintypes
        import win32file
        import win32pipe
        import winerror
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "pywin32 is not installed. Install with: pip install pywin32",
            hint="Named pipes to the game are only available on Windows.",
        ) from exc
    return Win32Api(
        win32pipe=win32pipe,
        win32file=win32file,
        pywintypes=pywintypes,
        winerror=winerror,
    )


def split_reply(text: str) -> list[str]:
    """Split reply text into lines on ``\\r\\n``, ``\\r`` or ``\\n``."""
    return _LINE_BREAK.split(text)


# ---------------------------------------------------------------------------
# Connection
# ---------------------------------------------------------------------------

class PipeConnection:
    """One connected client handle on the pipe, in message read mode.

    Usage::

        with open_pipe(TransportConfig()) as connection:
            connection.write_line("getall WillowPlayerPawn Name")
            lines = connection.read_lines()
    """

    def __init__(self, handle: Any, *, api: Win32Api, encoding: str) -> None:
        self._handle: Any = handle
        self._api: Win32Api = api
        self._encoding: str = encoding

    @property
    def closed(self) -> bool:
        return self._handle is None

    def write_line(self, command: str) -> None:
        """Write *command* plus a line terminator and flush it to the game.

        Raises
        ------
        ChannelIOError
            If the pipe breaks while writing.
        """
        data = (command + LINE_TERMINATOR).encode(self._encoding)
        win32file = self._api.win32file
        try:
            win32file.WriteFile(self._handle, data)
            win32file.FlushFileBuffers(self._handle)
        except self._api.pywintypes.error as exc:
            raise ChannelIOError(f"Pipe write failed: {exc.strerror}") from exc

    def read_reply(self) -> str:
        """Read until the game closes its end of the pipe and decode the text.

        ``ERROR_MORE_DATA`` only means the current message continues, so
        reading goes on until the pipe reports ``ERROR_BROKEN_PIPE`` or
        returns no data.

        Raises
        ------
        ChannelIOError
            For any other read failure.
        """
        chunks: list[bytes] = []
        while True:
            try:
                _, data = self._api.win32file.ReadFile(self._handle, READ_CHUNK_SIZE)
            except self._api.pywintypes.error as exc:
                if exc.winerror == self._api.winerror.ERROR_BROKEN_PIPE:
                    break
                raise ChannelIOError(f"Pipe read failed: {exc.strerror}") from exc
            if not data:
                break
            chunks.append(bytes(data))
        return b"".join(chunks).decode(self._encoding, errors="replace")

    def read_lines(self) -> list[str]:
        """Read the whole reply and split it into lines (blank ones included)."""
        return split_reply(self.read_reply())

    def close(self) -> None:
        """Close the handle.  Safe to call more than once."""
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        try:
            handle.Close()
        except self._api.pywintypes.error as exc:
            logger.debug("Ignoring error while closing pipe: %s", exc)

    def __enter__(self) -> PipeConnection:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def open_pipe(config: TransportConfig) -> PipeConnection:
    """Connect to the pipe named in *config*, waiting at most its connect timeout.

    Raises
    ------
    ChannelUnavailableError
        If nothing is listening (the game is not running) or the pipe
        cannot be put into message mode.
    EnvironmentError
        If pywin32 is not installed.
    """
    api = load_win32_api()
    path = config.pipe_path
    win32pipe, win32file = api.win32pipe, api.win32file

    try:
        win32pipe.WaitNamedPipe(path, config.connect_timeout_ms)
        handle = win32file.CreateFile(
            path,
            win32file.GENERIC_READ | win32file.GENERIC_WRITE,
            0,
            None,
            win32file.OPEN_EXISTING,
            0,
            None,
        )
    except api.pywintypes.error as exc:
        raise ChannelUnavailableError(
            f"Cannot connect to {path}: {exc.strerror}",
            hint=append_injector_hint(
                f"Nothing answered within {config.connect_timeout:g}s.",
            ),
        ) from exc

    connection = PipeConnection(handle, api=api, encoding=config.encoding)
    try:
        win32pipe.SetNamedPipeHandleState(
            handle, win32pipe.PIPE_READMODE_MESSAGE, None, None,
        )
    except api.pywintypes.error as exc:
        connection.close()
        raise ChannelUnavailableError(
            f"Cannot switch {path} to message mode: {exc.strerror}",
        ) from exc
    return connection
