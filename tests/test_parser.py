"""Tests for reply decoding and result mapping."""

import struct

import pytest

from pigpiod_mcp.protocol.commands import Command
from pigpiod_mcp.protocol.errors import DaemonError
from pigpiod_mcp.protocol.parser import (
    CommandError,
    CommandOk,
    decode_reply,
    handle_result,
)


class StreamReader:
    """Serves bytes from a buffer and records every requested size."""

    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0
        self.requests: list[int] = []

    def __call__(self, n: int) -> bytes:
        self.requests.append(n)
        chunk = self._data[self._pos:self._pos + n]
        assert len(chunk) == n, "decoder read past the reply"
        self._pos += n
        return chunk

    @property
    def remaining(self) -> bytes:
        return self._data[self._pos:]


def _scalar_reply(command: int, result: int) -> bytes:
    return struct.pack("=IIIi", command, 0, 0, result)


def test_handle_result_success():
    assert handle_result(0) == CommandOk(0)
    assert handle_result(5) == CommandOk(5)


def test_handle_result_failure():
    result = handle_result(-25)
    assert isinstance(result, CommandError)
    assert result.code == -25
    assert result.reason == "bad_handle"
    assert not result.ok


def test_handle_result_unknown_failure():
    result = handle_result(-1000)
    assert result.reason == "unknown_error"


@pytest.mark.parametrize("value", [0, 1, 5, 0x7FFFFFFF])
def test_scalar_decode_success(value):
    reader = StreamReader(_scalar_reply(Command.I2C_READ_BYTE, value))
    assert decode_reply(Command.I2C_READ_BYTE, reader) == CommandOk(value)
    assert reader.requests == [16]


@pytest.mark.parametrize("value", [-1, -83, -2**31])
def test_scalar_decode_failure(value):
    reader = StreamReader(_scalar_reply(Command.I2C_READ_BYTE, value))
    result = decode_reply(Command.I2C_READ_BYTE, reader)
    assert isinstance(result, CommandError)
    assert result.code == value
    assert result.command == Command.I2C_READ_BYTE


def test_scalar_decode_leaves_next_reply_untouched():
    data = _scalar_reply(3, 1) + _scalar_reply(3, 0)
    reader = StreamReader(data)
    assert decode_reply(Command.READ, reader) == CommandOk(1)
    assert reader.remaining == _scalar_reply(3, 0)


def test_block_decode_reads_header_then_body():
    payload = bytes([1, 2, 3, 4, 5, 6])
    data = struct.pack("=IIII", 56, 0, 6, len(payload)) + payload
    reader = StreamReader(data)
    result = decode_reply(Command.I2C_READ_DEVICE, reader)
    assert result == CommandOk(payload)
    assert reader.requests == [16, 6]


def test_block_decode_does_not_consume_following_reply():
    payload = b"\x10\x20"
    following = _scalar_reply(55, 0)
    data = struct.pack("=IIII", 65, 0, 0, 2) + payload + following
    reader = StreamReader(data)
    assert decode_reply(Command.I2C_READ_BLOCK_DATA, reader) == CommandOk(payload)
    assert reader.remaining == following


def test_block_decode_empty_block():
    reader = StreamReader(struct.pack("=IIII", 67, 0, 0, 0))
    assert decode_reply(Command.I2C_READ_I2C_BLOCK_DATA, reader) == CommandOk(b"")
    assert reader.requests == [16]


def test_block_decode_negative_is_error():
    reader = StreamReader(struct.pack("=IIIi", 56, 0, 0, -83))
    result = decode_reply(Command.I2C_READ_DEVICE, reader)
    assert result == CommandError(code=-83, reason="i2c_read_failed", command=56)
    assert reader.requests == [16]


def test_unwrap():
    assert CommandOk(3).unwrap() == 3
    with pytest.raises(DaemonError) as exc:
        CommandError(code=-25, reason="bad_handle").unwrap()
    assert exc.value.code == -25


def test_result_repr():
    assert "block=01 02" in repr(CommandOk(b"\x01\x02"))
    assert "value=7" in repr(CommandOk(7))
