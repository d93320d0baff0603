"""TCP connection to the pigpio daemon.

The daemon may still be starting when the client starts, so ``open`` dials
with a small, bounded number of retries. Once established, any read or
write failure closes the connection: replies are matched to requests only
by their position in the stream, and a broken stream cannot be resynced.
"""

from __future__ import annotations

import logging
import socket
import time
from typing import Callable

from ..config import DEFAULT_BACKOFF_S, DEFAULT_CONNECT_TIMEOUT_S, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_RETRIES
from ..protocol.errors import ConnectFailure, IOFailure, TimeoutFailure

logger = logging.getLogger(__name__)

Dial = Callable[[tuple, float], socket.socket]


class TCPConnection:
    """Owns the single socket to the daemon.

    Usage::

        conn = TCPConnection()
        conn.open(retries=3)
        conn.send(frame_bytes)
        header = conn.recv_exactly(16)
        conn.close()
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_S,
        read_timeout: float | None = None,
        dial: Dial = socket.create_connection,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._host = host
        self._port = port
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._dial = dial
        self._sleep = sleep
        self._sock: socket.socket | None = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    @property
    def address(self) -> tuple[str, int]:
        return (self._host, self._port)

    def open(self, retries: int = DEFAULT_RETRIES, backoff: float = DEFAULT_BACKOFF_S) -> TCPConnection:
        """Dial the daemon, retrying up to ``retries`` times in total.

        Raises:
            ConnectFailure: If every attempt fails.
        """
        if self._sock is not None:
            return self

        last_error: Exception | None = None
        for attempt in range(1, retries + 1):
            logger.debug("Connecting to pigpiod at %s:%d (attempt %d/%d)",
                         self._host, self._port, attempt, retries)
            try:
                sock = self._dial(self.address, self._connect_timeout)
            except OSError as e:
                last_error = e
                logger.warning("Connection attempt %d to %s:%d failed: %s",
                               attempt, self._host, self._port, e)
                if attempt < retries:
                    self._sleep(backoff)
                continue

            if isinstance(sock, socket.socket) and sock.family in (socket.AF_INET, socket.AF_INET6):
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
            sock.settimeout(self._read_timeout)
            self._sock = sock
            logger.info("Connected to pigpiod at %s:%d", self._host, self._port)
            return self

        raise ConnectFailure(self._host, self._port, retries, last_error)

    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        if self._sock is None:
            return
        try:
            self._sock.close()
        except OSError as e:
            logger.warning("Error closing socket: %s", e)
        finally:
            self._sock = None
            logger.info("Disconnected from pigpiod")

    def shutdown(self) -> None:
        """Shut down both directions without releasing the socket.

        A thread blocked in :meth:`recv_exactly` wakes up with ``IOFailure``.
        """
        sock = self._sock
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            # Already disconnected by the peer.
            logger.debug("Socket shutdown: %s", e)

    def send(self, data: bytes) -> None:
        """Write a complete frame.

        Raises:
            IOFailure: If not connected or the write fails.
        """
        sock = self._require_socket()
        try:
            sock.sendall(data)
        except OSError as e:
            self.close()
            raise IOFailure(f"Write to pigpiod failed: {e}") from e

    def recv_exactly(self, n: int) -> bytes:
        """Read exactly ``n`` bytes, accumulating partial reads.

        Raises:
            TimeoutFailure: If the read timeout expires first.
            IOFailure: If the peer closes mid-frame or the read fails.
        """
        sock = self._require_socket()
        buf = bytearray()
        while len(buf) < n:
            try:
                chunk = sock.recv(n - len(buf))
            except socket.timeout as e:
                self.close()
                raise TimeoutFailure(
                    f"No reply from pigpiod within {self._read_timeout}s "
                    f"({len(buf)}/{n} bytes)"
                ) from e
            except OSError as e:
                self.close()
                raise IOFailure(f"Read from pigpiod failed: {e}") from e
            if not chunk:
                self.close()
                raise IOFailure(
                    f"pigpiod closed the connection ({len(buf)}/{n} bytes received)"
                )
            buf.extend(chunk)
        return bytes(buf)

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise IOFailure("Not connected to pigpiod")
        return self._sock

    def __enter__(self):
        return self.open()

    def __exit__(self, *args):
        self.close()
