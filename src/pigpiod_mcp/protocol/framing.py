"""Request framing and reply-header parsing for the pigpio socket protocol.

Request layout (native byte order)::

    +---------+---------+---------+-----------+-------------------------+
    | command |   p1    |   p2    | ext bytes |  extension words ...    |
    | u32     |  u32    |  u32    |   u32     |  4 bytes each           |
    +---------+---------+---------+-----------+-------------------------+

Reply header (native byte order)::

    +---------+---------+---------+---------------------------+
    | command |   p1    |   p2    | result (i32) / length     |
    +---------+---------+---------+---------------------------+

For block commands the 4th reply word is the number of data bytes that
follow the header; for every other command it is the signed result.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterable

HEADER = struct.Struct("=IIII")
REPLY_HEADER = struct.Struct("=IIIi")
HEADER_SIZE = HEADER.size  # 16
WORD = struct.Struct("=I")


@dataclass(frozen=True)
class Request:
    """A single command ready to be framed."""

    command: int
    p1: int = 0
    p2: int = 0
    extension: tuple[int, ...] = field(default_factory=tuple)

    def to_bytes(self) -> bytes:
        return build_frame(self.command, self.p1, self.p2, self.extension)

    def __repr__(self) -> str:
        return (
            f"Request(command={int(self.command)}, p1={self.p1}, "
            f"p2={self.p2}, extension={list(self.extension)})"
        )


@dataclass(frozen=True)
class ReplyHeader:
    """The fixed 16-byte header of a daemon reply."""

    command: int
    p1: int
    p2: int
    result: int

    @property
    def length(self) -> int:
        """The 4th word read as an unsigned byte count (block replies)."""
        return self.result & 0xFFFFFFFF


def build_frame(
    command: int,
    p1: int = 0,
    p2: int = 0,
    extension: Iterable[int] = (),
) -> bytes:
    """Build the wire bytes for one command.

    Args:
        command: Daemon opcode.
        p1: First parameter.
        p2: Second parameter.
        extension: Extra values, each packed as one unsigned 32-bit word.

    Returns:
        The 16-byte header followed by ``4 * len(extension)`` bytes.
    """
    words = list(extension)
    ext = b"".join(WORD.pack(w) for w in words)
    return HEADER.pack(command, p1, p2, len(ext)) + ext


def parse_reply_header(data: bytes) -> ReplyHeader:
    """Parse a 16-byte reply header.

    Raises:
        ValueError: If ``data`` is not exactly 16 bytes.
    """
    if len(data) != HEADER_SIZE:
        raise ValueError(
            f"Reply header must be {HEADER_SIZE} bytes, got {len(data)}"
        )
    return ReplyHeader(*REPLY_HEADER.unpack(data))
