"""Serialized command execution over the daemon connection.

The protocol has no request IDs: a reply belongs to whichever request was
sent before it. A single worker thread therefore owns the connection and
runs each command to completion (send, read reply, decode) before taking
the next one off its queue. Callers on any thread submit work and wait on
a future for their own result.
"""

from __future__ import annotations

import logging
import queue
import struct
import threading
from concurrent.futures import Future
from typing import Iterable

from ..config import Settings
from ..protocol.commands import Command, code_of
from ..protocol.errors import IOFailure
from ..protocol.framing import Request
from ..protocol.parser import CommandResult, decode_reply
from .tcp_connection import TCPConnection

logger = logging.getLogger(__name__)

_STOP = object()


class Dispatcher:
    """Single point of access to a ``TCPConnection``.

    Usage::

        with Dispatcher.connect(Settings.from_env()) as pi:
            result = pi.execute("i2c_open", 1, 0x53, [0])
            handle = result.unwrap()
    """

    def __init__(self, connection: TCPConnection) -> None:
        self._conn = connection
        self._jobs: queue.Queue = queue.Queue()
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()
        self._failure: IOFailure | None = None
        self._closed = False

    @classmethod
    def connect(cls, settings: Settings | None = None) -> Dispatcher:
        """Open a connection with bounded retry and start a dispatcher on it."""
        settings = settings or Settings.from_env()
        conn = TCPConnection(
            host=settings.host,
            port=settings.port,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
        )
        conn.open(retries=settings.retries, backoff=settings.backoff)
        return cls(conn).start()

    @property
    def running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    @property
    def failure(self) -> IOFailure | None:
        """The I/O error that stopped the worker, if any."""
        return self._failure

    def start(self) -> Dispatcher:
        with self._lock:
            if self._worker is None:
                self._worker = threading.Thread(
                    target=self._run, name="pigpiod-dispatcher", daemon=True
                )
                self._worker.start()
        return self

    def submit(
        self,
        command: Command | str,
        p1: int = 0,
        p2: int = 0,
        extension: Iterable[int] = (),
    ) -> Future:
        """Queue a command and return a future for its ``CommandResult``.

        Raises:
            ValueError: If ``command`` is not a known command name, or a
                parameter does not fit in an unsigned 32-bit word.
            IOFailure: If the dispatcher has stopped.
        """
        request = Request(code_of(command), p1, p2, tuple(extension))
        try:
            frame = request.to_bytes()
        except struct.error as e:
            raise ValueError(f"Parameter out of range in {request!r}: {e}") from e
        future: Future = Future()
        with self._lock:
            if self._failure is not None:
                raise IOFailure(f"Dispatcher stopped: {self._failure}")
            if self._closed or self._worker is None or not self._worker.is_alive():
                raise IOFailure("Dispatcher is not running")
            self._jobs.put((request, frame, future))
        return future

    def execute(
        self,
        command: Command | str,
        p1: int = 0,
        p2: int = 0,
        extension: Iterable[int] = (),
    ) -> CommandResult:
        """Run one command and block until its result is available.

        Daemon errors come back as ``CommandError`` values; connection
        errors are raised.
        """
        return self.submit(command, p1, p2, extension).result()

    def close(self) -> None:
        """Stop the worker and close the connection.

        A command still waiting on the daemon fails with ``IOFailure``, as
        does anything queued behind it.
        """
        with self._lock:
            self._closed = True
            worker = self._worker
            if worker is not None and worker.is_alive():
                self._jobs.put(_STOP)
        # Wake a worker blocked in recv on a daemon that never answers.
        self._conn.shutdown()
        if worker is not None and worker is not threading.current_thread():
            worker.join()
        self._conn.close()

    def _run(self) -> None:
        while True:
            job = self._jobs.get()
            if job is _STOP:
                break
            request, frame, future = job
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = self._roundtrip(request, frame)
            except IOFailure as e:
                if self._closed:
                    logger.info("Command aborted by close: %s", e)
                else:
                    logger.error("Connection to pigpiod lost: %s", e)
                future.set_exception(e)
                self._fail(e)
                return
            future.set_result(result)
        self._drain(IOFailure("Dispatcher closed"))

    def _roundtrip(self, request: Request, frame: bytes) -> CommandResult:
        logger.debug("Sending %r (%d bytes)", request, len(frame))
        self._conn.send(frame)
        return decode_reply(request.command, self._conn.recv_exactly)

    def _fail(self, error: IOFailure) -> None:
        with self._lock:
            self._failure = error
        self._conn.close()
        self._drain(error)

    def _drain(self, error: IOFailure) -> None:
        while True:
            try:
                job = self._jobs.get_nowait()
            except queue.Empty:
                return
            if job is _STOP:
                continue
            _, _, future = job
            if future.set_running_or_notify_cancel():
                future.set_exception(error)

    def __enter__(self):
        return self.start()

    def __exit__(self, *args):
        self.close()
