"""Client for the pigpio daemon's socket interface, with an MCP tool server."""

from .config import Settings
from .protocol import (
    Command,
    CommandError,
    CommandOk,
    ConnectFailure,
    DaemonError,
    IOFailure,
    PigpioError,
    TimeoutFailure,
)
from .transport import Dispatcher, TCPConnection

__all__ = [
    'Settings', 'Dispatcher', 'TCPConnection', 'Command',
    'CommandOk', 'CommandError',
    'PigpioError', 'ConnectFailure', 'IOFailure', 'TimeoutFailure', 'DaemonError',
]
