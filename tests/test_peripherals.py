"""Tests for the I2C and SPI command sets."""

from unittest.mock import MagicMock

import pytest

from pigpiod_mcp.peripherals.i2c import (
    I2C,
    zip_add,
    zip_address,
    zip_end,
    zip_read,
    zip_write,
)
from pigpiod_mcp.peripherals.spi import SPI
from pigpiod_mcp.protocol.commands import Command
from pigpiod_mcp.protocol.errors import DaemonError
from pigpiod_mcp.protocol.parser import CommandError, CommandOk


def _dispatcher(result=CommandOk(0)):
    pi = MagicMock()
    pi.execute.return_value = result
    return pi


def test_i2c_open():
    pi = _dispatcher(CommandOk(5))
    assert I2C(pi).open(1, 0x53) == 5
    pi.execute.assert_called_once_with(Command.I2C_OPEN, 1, 0x53, [0])


@pytest.mark.parametrize("bus,address", [(2, 0x53), (-1, 0x10), (1, 0x80)])
def test_i2c_open_rejects_bad_bus_or_address(bus, address):
    pi = _dispatcher()
    with pytest.raises(ValueError):
        I2C(pi).open(bus, address)
    pi.execute.assert_not_called()


def test_i2c_open_daemon_failure():
    pi = _dispatcher(CommandError(code=-71, reason="i2c_open_failed"))
    with pytest.raises(DaemonError) as exc:
        I2C(pi).open(1, 0x53)
    assert exc.value.reason == "i2c_open_failed"


def test_i2c_close():
    pi = _dispatcher()
    assert I2C(pi).close(3) is None
    pi.execute.assert_called_once_with(Command.I2C_CLOSE, 3, 0, ())


def test_i2c_write_quick():
    pi = _dispatcher()
    I2C(pi).write_quick(0, 1)
    pi.execute.assert_called_once_with(Command.I2C_WRITE_QUICK, 0, 1, ())
    with pytest.raises(ValueError):
        I2C(pi).write_quick(0, 2)


def test_i2c_byte_data_shapes():
    pi = _dispatcher(CommandOk(0x42))
    i2c = I2C(pi)
    assert i2c.read_byte_data(1, 0x10) == 0x42
    pi.execute.assert_called_with(Command.I2C_READ_BYTE_DATA, 1, 0x10, ())
    i2c.write_byte_data(1, 0x10, 0xFF)
    pi.execute.assert_called_with(Command.I2C_WRITE_BYTE_DATA, 1, 0x10, [0xFF])
    with pytest.raises(ValueError):
        i2c.write_byte_data(1, 0x10, 256)


def test_i2c_word_data_shapes():
    pi = _dispatcher(CommandOk(0x1234))
    i2c = I2C(pi)
    assert i2c.read_word_data(1, 2) == 0x1234
    i2c.write_word_data(1, 2, 0xBEEF)
    pi.execute.assert_called_with(Command.I2C_WRITE_WORD_DATA, 1, 2, [0xBEEF])
    assert i2c.process_call(1, 2, 7) == 0x1234
    pi.execute.assert_called_with(Command.I2C_PROCESS_CALL, 1, 2, [7])
    with pytest.raises(ValueError):
        i2c.write_word_data(1, 2, 0x10000)


def test_i2c_block_reads_return_bytes():
    pi = _dispatcher(CommandOk(b"\x01\x02\x03"))
    i2c = I2C(pi)
    assert i2c.read_block_data(1, 0x20) == b"\x01\x02\x03"
    assert i2c.read_device(1, 3) == b"\x01\x02\x03"
    pi.execute.assert_called_with(Command.I2C_READ_DEVICE, 1, 3, ())
    assert i2c.read_i2c_block_data(1, 0x20, 3) == b"\x01\x02\x03"
    pi.execute.assert_called_with(Command.I2C_READ_I2C_BLOCK_DATA, 1, 0x20, [3])
    assert i2c.block_process_call(1, 0x20, [9, 8]) == b"\x01\x02\x03"
    pi.execute.assert_called_with(Command.I2C_BLOCK_PROCESS_CALL, 1, 0x20, [9, 8])


@pytest.mark.parametrize("count", [0, 33])
def test_i2c_read_count_bounds(count):
    i2c = I2C(_dispatcher())
    with pytest.raises(ValueError):
        i2c.read_device(1, count)
    with pytest.raises(ValueError):
        i2c.read_i2c_block_data(1, 0, count)


def test_i2c_writes():
    pi = _dispatcher()
    i2c = I2C(pi)
    i2c.write_device(1, [1, 2])
    pi.execute.assert_called_with(Command.I2C_WRITE_DEVICE, 1, 0, [1, 2])
    i2c.write_block_data(1, 5, [3])
    pi.execute.assert_called_with(Command.I2C_WRITE_BLOCK_DATA, 1, 5, [3])
    i2c.write_i2c_block_data(1, 5, [4])
    pi.execute.assert_called_with(Command.I2C_WRITE_I2C_BLOCK_DATA, 1, 5, [4])


def test_zip_builders():
    seq = zip_add(zip_address(0x53), zip_write([0x32]), zip_read(6), zip_end())
    assert seq == [0x04, 0x53, 0x07, 0x01, 0x32, 0x06, 0x06, 0x00]
    with pytest.raises(ValueError):
        zip_address(0)


def test_i2c_zip():
    pi = _dispatcher(CommandOk(6))
    seq = zip_add(zip_address(0x53), zip_read(6), zip_end())
    assert I2C(pi).zip(0, seq) == 6
    pi.execute.assert_called_once_with(Command.I2C_ZIP, 0, 0, seq)


def test_spi_open():
    pi = _dispatcher(CommandOk(1))
    assert SPI(pi).open(0, 500000) == 1
    pi.execute.assert_called_once_with(Command.SPI_OPEN, 0, 500000, [0])
    with pytest.raises(ValueError):
        SPI(pi).open(3, 500000)


def test_spi_close():
    pi = _dispatcher()
    SPI(pi).close(2)
    pi.execute.assert_called_once_with(Command.SPI_CLOSE, 2)
    with pytest.raises(ValueError):
        SPI(pi).close(10)
