"""Connection settings for the pigpio daemon.

Defaults match the daemon's standard socket interface. ``PIGPIO_ADDR`` and
``PIGPIO_PORT`` are the same variables the daemon's own tools honour.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8888
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF_S = 2.0
DEFAULT_CONNECT_TIMEOUT_S = 1.0


@dataclass
class Settings:
    """Where the daemon lives and how hard to try reaching it."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    retries: int = DEFAULT_RETRIES
    backoff: float = DEFAULT_BACKOFF_S
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_S
    # None blocks until the daemon answers.
    read_timeout: float | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        read_timeout = env.get("PIGPIO_READ_TIMEOUT")
        return cls(
            host=env.get("PIGPIO_ADDR") or DEFAULT_HOST,
            port=int(env.get("PIGPIO_PORT") or DEFAULT_PORT),
            retries=int(env.get("PIGPIO_RETRIES") or DEFAULT_RETRIES),
            backoff=float(env.get("PIGPIO_BACKOFF") or DEFAULT_BACKOFF_S),
            connect_timeout=float(env.get("PIGPIO_CONNECT_TIMEOUT") or DEFAULT_CONNECT_TIMEOUT_S),
            read_timeout=float(read_timeout) if read_timeout else None,
        )
