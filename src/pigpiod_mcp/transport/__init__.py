"""Transport layer: the daemon socket and the serialized dispatcher."""

from .dispatcher import Dispatcher
from .tcp_connection import TCPConnection
