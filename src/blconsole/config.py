"""Transport configuration for bl-console.

Defaults are centralised here so that every connection uses well-known,
tested values rather than magic numbers scattered across the codebase.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from blconsole.exceptions import ConfigurationError

DEFAULT_PIPE_NAME: str = "BLCommandInjector"
"""Name of the pipe the command injector listens on."""

DEFAULT_CONNECT_TIMEOUT: float = 1.0
"""Seconds to wait for the pipe before treating the game as not running."""

DEFAULT_ATTEMPTS: int = 3
"""Full connect/write/read cycles attempted before giving up."""

DEFAULT_ENCODING: str = "utf-8"
"""Encoding used for commands and replies on the wire."""

READ_CHUNK_SIZE: int = 4096
"""Bytes requested per pipe read."""

PIPE_PREFIX: str = "\\\\.\\pipe\\"

ENV_PIPE_NAME = "BLCONSOLE_PIPE_NAME"
ENV_CONNECT_TIMEOUT = "BLCONSOLE_CONNECT_TIMEOUT"
ENV_ATTEMPTS = "BLCONSOLE_ATTEMPTS"


@dataclass(frozen=True, slots=True)
class TransportConfig:
    """Connection settings for :class:`~blconsole.infra.pipe_transport.PipeTransport`."""

    pipe_name: str = DEFAULT_PIPE_NAME
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    attempts: int = DEFAULT_ATTEMPTS
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self) -> None:
        if not self.pipe_name or "\\" in self.pipe_name:
            raise ConfigurationError(
                f"Invalid pipe name: {self.pipe_name!r}",
                hint="Use the bare pipe name, e.g. 'BLCommandInjector'.",
            )
        if self.connect_timeout <= 0:
            raise ConfigurationError(
                f"connect_timeout must be positive, got {self.connect_timeout}",
            )
        if self.connect_timeout * 1000 < 1:
            # WaitNamedPipe treats 0 ms as "use the server default".
            raise ConfigurationError(
                f"connect_timeout must be at least 1 ms, got {self.connect_timeout}",
            )
        if self.attempts < 1:
            raise ConfigurationError(
                f"attempts must be at least 1, got {self.attempts}",
            )

    @property
    def pipe_path(self) -> str:
        """Full Win32 path of the pipe (``\\\\.\\pipe\\<name>``)."""
        return PIPE_PREFIX + self.pipe_name

    @property
    def connect_timeout_ms(self) -> int:
        return int(self.connect_timeout * 1000)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TransportConfig:
        """Build a config from ``BLCONSOLE_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        try:
            return cls(
                pipe_name=env.get(ENV_PIPE_NAME, DEFAULT_PIPE_NAME),
                connect_timeout=float(
                    env.get(ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT)
                ),
                attempts=int(env.get(ENV_ATTEMPTS, DEFAULT_ATTEMPTS)),
            )
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid transport setting in environment: {exc}",
                hint=f"Check {ENV_CONNECT_TIMEOUT} and {ENV_ATTEMPTS}.",
            ) from exc
