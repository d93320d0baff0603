"""I2C access through the pigpio daemon.

Handles returned by :meth:`I2C.open` are daemon-side handles (>= 0). All
methods raise :class:`~pigpiod_mcp.protocol.errors.DaemonError` when the
daemon rejects the request.

For the SMBus commands the low-level transactions are::

    S     (1 bit) : Start bit
    P     (1 bit) : Stop bit
    Rd/Wr (1 bit) : Read/Write bit. Rd equals 1, Wr equals 0.
    A, NA (1 bit) : Accept and not accept bit.
    Addr  (7 bits): I2C 7 bit address.
    reg   (8 bits): Command byte, which often selects a register.
    Data  (8 bits): A data byte.
    Count (8 bits): A byte defining the length of a block operation.
    [..]          : Data sent by the device.
"""

from __future__ import annotations

from typing import Iterable

from ..protocol.commands import Command
from ..transport.dispatcher import Dispatcher

I2C_BUSES = (0, 1)
MAX_ADDRESS = 0x7F
MAX_BLOCK = 32

# Zip command codes
ZIP_END = 0
ZIP_ESCAPE = 1
ZIP_ON = 2
ZIP_OFF = 3
ZIP_ADDRESS = 4
ZIP_FLAGS = 5
ZIP_READ = 6
ZIP_WRITE = 7


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be 0-255, got {value}")


def _check_word(name: str, value: int) -> None:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{name} must be 0-65535, got {value}")


def _check_count(count: int) -> None:
    if not 1 <= count <= MAX_BLOCK:
        raise ValueError(f"Count must be 1-{MAX_BLOCK}, got {count}")


class I2C:
    """I2C command set bound to a dispatcher."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._pi = dispatcher

    def _call(self, command: Command, p1: int = 0, p2: int = 0, extension: Iterable[int] = ()):
        return self._pi.execute(command, p1, p2, extension).unwrap()

    def open(self, bus: int, address: int, flags: int = 0) -> int:
        """Return a handle for the device at ``address`` on ``bus``.

        ``h = i2c.open(1, 0x53)`` opens the device at 0x53 on bus 1.
        No I2C flags are currently defined.
        """
        if bus not in I2C_BUSES:
            raise ValueError(f"I2C bus must be one of {I2C_BUSES}, got {bus}")
        if not 0 <= address <= MAX_ADDRESS:
            raise ValueError(f"I2C address must be 0-0x7F, got {address:#x}")
        return self._call(Command.I2C_OPEN, bus, address, [flags])

    def close(self, handle: int) -> None:
        """Close the device associated with ``handle``."""
        self._call(Command.I2C_CLOSE, handle)

    def write_quick(self, handle: int, bit: int) -> None:
        """SMBus quick command: ``S Addr bit [A] P``."""
        if bit not in (0, 1):
            raise ValueError(f"Bit must be 0 or 1, got {bit}")
        self._call(Command.I2C_WRITE_QUICK, handle, bit)

    def write_byte(self, handle: int, byte_val: int) -> None:
        """SMBus send byte: ``S Addr Wr [A] Data [A] P``."""
        _check_byte("Byte value", byte_val)
        self._call(Command.I2C_WRITE_BYTE, handle, byte_val)

    def read_byte(self, handle: int) -> int:
        """SMBus receive byte: ``S Addr Rd [A] [Data] NA P``."""
        return self._call(Command.I2C_READ_BYTE, handle)

    def write_byte_data(self, handle: int, reg: int, byte_val: int) -> None:
        """SMBus write byte: ``S Addr Wr [A] reg [A] Data [A] P``."""
        _check_byte("Byte value", byte_val)
        self._call(Command.I2C_WRITE_BYTE_DATA, handle, reg, [byte_val])

    def write_word_data(self, handle: int, reg: int, word_val: int) -> None:
        """SMBus write word: ``S Addr Wr [A] reg [A] DataLow [A] DataHigh [A] P``."""
        _check_word("Word value", word_val)
        self._call(Command.I2C_WRITE_WORD_DATA, handle, reg, [word_val])

    def read_byte_data(self, handle: int, reg: int) -> int:
        """SMBus read byte: ``S Addr Wr [A] reg [A] S Addr Rd [A] [Data] NA P``."""
        return self._call(Command.I2C_READ_BYTE_DATA, handle, reg)

    def read_word_data(self, handle: int, reg: int) -> int:
        """SMBus read word."""
        return self._call(Command.I2C_READ_WORD_DATA, handle, reg)

    def process_call(self, handle: int, reg: int, word_val: int) -> int:
        """SMBus process call: write a word to ``reg`` and read one back."""
        _check_word("Word value", word_val)
        return self._call(Command.I2C_PROCESS_CALL, handle, reg, [word_val])

    def write_block_data(self, handle: int, reg: int, data: Iterable[int]) -> None:
        """SMBus block write of up to 32 bytes."""
        self._call(Command.I2C_WRITE_BLOCK_DATA, handle, reg, data)

    def read_block_data(self, handle: int, reg: int) -> bytes:
        """SMBus block read; the device decides how many bytes to return."""
        return self._call(Command.I2C_READ_BLOCK_DATA, handle, reg)

    def block_process_call(self, handle: int, reg: int, data: Iterable[int]) -> bytes:
        """SMBus block process call: write a block to ``reg`` and read one back."""
        return self._call(Command.I2C_BLOCK_PROCESS_CALL, handle, reg, data)

    def read_i2c_block_data(self, handle: int, reg: int, count: int) -> bytes:
        """Read ``count`` (1-32) bytes starting at ``reg``."""
        _check_count(count)
        return self._call(Command.I2C_READ_I2C_BLOCK_DATA, handle, reg, [count])

    def write_i2c_block_data(self, handle: int, reg: int, data: Iterable[int]) -> None:
        """Write up to 32 bytes starting at ``reg``."""
        self._call(Command.I2C_WRITE_I2C_BLOCK_DATA, handle, reg, data)

    def read_device(self, handle: int, count: int) -> bytes:
        """Read ``count`` (1-32) raw bytes from the device."""
        _check_count(count)
        return self._call(Command.I2C_READ_DEVICE, handle, count)

    def write_device(self, handle: int, data: Iterable[int]) -> None:
        """Write raw bytes to the device."""
        self._call(Command.I2C_WRITE_DEVICE, handle, 0, data)

    def zip(self, handle: int, data: Iterable[int]) -> int:
        """Run a sequence of I2C operations built with the ``zip_*`` helpers.

        Example: set address 0x53, write 0x32, read 6 bytes, end::

            i2c.zip(h, zip_add(zip_address(0x53), zip_write([0x32]),
                               zip_read(6), zip_end()))

        Returns the daemon's result (number of bytes read).
        """
        return self._call(Command.I2C_ZIP, handle, 0, data)


def zip_address(address: int) -> list[int]:
    """Set the I2C address for subsequent zip operations."""
    if not 1 <= address <= 0xFF:
        raise ValueError(f"Zip address must be 1-255, got {address}")
    return [ZIP_ADDRESS, address]


def zip_write(data: Iterable[int]) -> list[int]:
    """Write ``data``, prefixed by its length."""
    data = list(data)
    return [ZIP_WRITE, len(data), *data]


def zip_read(count: int) -> list[int]:
    """Read ``count`` bytes."""
    return [ZIP_READ, count]


def zip_end() -> list[int]:
    return [ZIP_END]


def zip_add(*parts: Iterable[int]) -> list[int]:
    """Concatenate zip fragments into one command sequence."""
    return [value for part in parts for value in part]
