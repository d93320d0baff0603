"""Tests for the command table and error-code mapping."""

import pytest

from pigpiod_mcp.protocol.commands import (
    BLOCK_COMMANDS,
    Command,
    code_of,
    is_block_command,
)
from pigpiod_mcp.protocol.errors import (
    ERROR_REASONS,
    UNKNOWN_ERROR,
    ConnectFailure,
    DaemonError,
    IOFailure,
    TimeoutFailure,
    reason_of,
)


def test_command_enum_values():
    """Key opcodes match the daemon's numbering."""
    assert Command.SET_MODE == 0
    assert Command.READ == 3
    assert Command.WRITE == 4
    assert Command.I2C_OPEN == 54
    assert Command.I2C_CLOSE == 55
    assert Command.I2C_READ_DEVICE == 56
    assert Command.I2C_ZIP == 92
    assert Command.SPI_OPEN == 71
    assert Command.SPI_CLOSE == 72
    assert Command.WAVE_CREATE_PAD == 118


def test_block_commands_are_exactly_the_four_block_reads():
    assert BLOCK_COMMANDS == {56, 65, 67, 70}


def test_is_block_command():
    assert is_block_command(Command.I2C_READ_BLOCK_DATA)
    assert is_block_command(70)
    assert not is_block_command(Command.I2C_READ_BYTE)
    assert not is_block_command(Command.I2C_OPEN)


def test_code_of_name():
    assert code_of("i2c_open") is Command.I2C_OPEN
    assert code_of("I2C_OPEN") is Command.I2C_OPEN
    assert code_of(Command.SPI_CLOSE) is Command.SPI_CLOSE


def test_code_of_unknown_name_raises():
    """Unknown names are programming errors, never a default opcode."""
    with pytest.raises(ValueError):
        code_of("i2c_teleport")
    with pytest.raises(ValueError):
        code_of(54)


def test_reason_of_known_codes():
    assert reason_of(-25) == "bad_handle"
    assert reason_of(-71) == "i2c_open_failed"
    assert reason_of(-83) == "i2c_read_failed"
    assert reason_of(-88) == "unknown_command"


@pytest.mark.parametrize("code", [-1, -146, -147, -500, -2**31, -9999])
def test_reason_of_is_total(code):
    """Every negative code yields some reason, known or not."""
    reason = reason_of(code)
    assert isinstance(reason, str)
    assert reason


def test_reason_of_unknown_code():
    assert reason_of(-147) == UNKNOWN_ERROR
    assert reason_of(-2**31) == UNKNOWN_ERROR


def test_error_table_is_negative_and_contiguous():
    assert min(ERROR_REASONS) == -146
    assert sorted(ERROR_REASONS) == list(range(-146, 0))


def test_daemon_error_message():
    err = DaemonError(-25, command=Command.I2C_CLOSE)
    assert err.reason == "bad_handle"
    assert "bad_handle" in str(err)
    assert "-25" in str(err)


def test_failure_hierarchy():
    assert issubclass(TimeoutFailure, IOFailure)
    assert issubclass(IOFailure, ConnectionError)
    err = ConnectFailure("localhost", 8888, 3, OSError("refused"))
    assert isinstance(err, ConnectionError)
    assert err.attempts == 3
    assert "localhost:8888" in str(err)
