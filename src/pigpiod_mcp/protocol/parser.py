"""Reply decoding and result mapping."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Union

from .commands import is_block_command
from .errors import DaemonError, reason_of
from .framing import HEADER_SIZE, parse_reply_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOk:
    """Successful reply: a non-negative integer or a data block."""

    value: int | bytes

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> int | bytes:
        return self.value

    def __repr__(self) -> str:
        if isinstance(self.value, bytes):
            return f"CommandOk(block={self.value.hex(' ') or '(empty)'})"
        return f"CommandOk(value={self.value})"


@dataclass(frozen=True)
class CommandError:
    """Failed reply: the daemon's negative code and its symbolic reason."""

    code: int
    reason: str
    command: int | None = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise DaemonError(self.code, self.reason, self.command)


CommandResult = Union[CommandOk, CommandError]


def handle_result(raw: int, command: int | None = None) -> CommandResult:
    """Map a raw daemon result to success or a named failure."""
    if raw >= 0:
        return CommandOk(raw)
    return CommandError(code=raw, reason=reason_of(raw), command=command)


def decode_reply(command: int, recv_exactly: Callable[[int], bytes]) -> CommandResult:
    """Read and decode the reply to ``command``.

    Block commands are read as a header followed by exactly as many bytes
    as the header declares, using two separate reads. All other commands
    are a single 16-byte header whose 4th word is the signed result.

    Args:
        command: The opcode that was sent.
        recv_exactly: Callable returning exactly ``n`` bytes from the stream.
    """
    header = parse_reply_header(recv_exactly(HEADER_SIZE))

    if not is_block_command(command):
        logger.debug("Command:%d result:%d", command, header.result)
        return handle_result(header.result, command)

    # A negative 4th word on a block command is an error code with no body.
    if header.result < 0:
        logger.debug("Command:%d block error:%d", command, header.result)
        return handle_result(header.result, command)

    length = header.length
    payload = recv_exactly(length) if length else b""
    logger.debug("Command:%d block length:%d", command, length)
    return CommandOk(payload)
