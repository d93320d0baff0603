"""Command opcodes understood by the pigpio daemon.

Each command is a small non-negative integer sent as the first word of the
request header. The daemon echoes it back in the first word of the reply.
"""

from __future__ import annotations

from enum import IntEnum


class Command(IntEnum):
    """Daemon command opcodes."""

    SET_MODE = 0
    GET_MODE = 1
    SET_PULL_UP_DOWN = 2
    READ = 3
    WRITE = 4
    SET_PWM_DUTYCYCLE = 5
    SET_PWM_RANGE = 6
    SET_PWM_FREQUENCY = 7
    SET_SERVO_PULSEWIDTH = 8
    SET_WATCHDOG = 9
    READ_BANK_1 = 10
    READ_BANK_2 = 11
    CLEAR_BANK_1 = 12
    CLEAR_BANK_2 = 13
    SET_BANK_1 = 14
    SET_BANK_2 = 15
    GET_CURRENT_TICK = 16
    GET_HARDWARE_REVISION = 17
    NOTIFY_OPEN = 18
    NOTIFY_BEGIN = 19
    NOTIFY_PAUSE = 20
    NOTIFY_CLOSE = 21
    GET_PWM_RANGE = 22
    GET_PWM_FREQUENCY = 23
    GET_PWM_REAL_RANGE = 24
    HELP = 25
    GET_PIGPIO_VERSION = 26
    WAVE_CLEAR = 27
    WAVE_ADD_GENERIC = 28
    WAVE_ADD_SERIAL = 29
    WAVE_TRANSMIT = 30
    WAVE_TRANSMIT_REPEAT = 31
    WAVE_BUSY = 32
    WAVE_HALT = 33
    WAVE_GET_MICROS = 34
    WAVE_GET_PULSES = 35
    WAVE_GET_CBS = 36
    GPIO_TRIGGER = 37
    STORE_SCRIPT = 38
    DELETE_SCRIPT = 39
    RUN_SCRIPT = 40
    STOP_SCRIPT = 41
    BB_SERIAL_READ_OPEN = 42
    BB_SERIAL_READ = 43
    BB_SERIAL_READ_CLOSE = 44
    SCRIPT_STATUS = 45
    DELAY_MICROS = 46
    DELAY_MILLIS = 47
    PARSE_SCRIPT = 48
    WAVE_CREATE = 49
    WAVE_DELETE = 50
    WAVE_SEND_ONCE = 51
    WAVE_SEND_REPEAT = 52
    WAVE_ADD_NEW = 53
    I2C_OPEN = 54
    I2C_CLOSE = 55
    I2C_READ_DEVICE = 56
    I2C_WRITE_DEVICE = 57
    I2C_WRITE_QUICK = 58
    I2C_READ_BYTE = 59
    I2C_WRITE_BYTE = 60
    I2C_READ_BYTE_DATA = 61
    I2C_WRITE_BYTE_DATA = 62
    I2C_READ_WORD_DATA = 63
    I2C_WRITE_WORD_DATA = 64
    I2C_READ_BLOCK_DATA = 65
    I2C_WRITE_BLOCK_DATA = 66
    I2C_READ_I2C_BLOCK_DATA = 67
    I2C_WRITE_I2C_BLOCK_DATA = 68
    I2C_PROCESS_CALL = 69
    I2C_BLOCK_PROCESS_CALL = 70
    SPI_OPEN = 71
    SPI_CLOSE = 72
    SPI_READ = 73
    SPI_WRITE = 74
    SPI_XFER = 75
    SERIAL_OPEN = 76
    SERIAL_CLOSE = 77
    SERIAL_READ_BYTE = 78
    SERIAL_WRITE_BYTE = 79
    SERIAL_READ = 80
    SERIAL_WRITE = 81
    SERIAL_DATA_AVAILABLE = 82
    GET_PWM_DUTYCYCLE = 83
    GET_SERVO_PULSEWIDTH = 84
    HARDWARE_CLOCK = 85
    HARDWARE_PWM = 86
    CUSTOM_1 = 87
    CUSTOM_2 = 88
    BB_I2C_CLOSE = 89
    BB_I2C_OPEN = 90
    BB_I2C_ZIP = 91
    I2C_ZIP = 92
    WAVE_CHAIN = 93
    BB_SERIAL_INVERT = 94
    GET_INTERNALS = 95
    SET_INTERNALS = 96
    SET_GLITCH_FILTER = 97
    SET_NOISE_FILTER = 98
    NOTIFY_OPEN_IN_BAND = 99
    WAVE_SEND_USING_MODE = 100
    WAVE_TX_AT = 101
    SET_PAD_STRENGTH = 102
    GET_PAD_STRENGTH = 103
    FILE_OPEN = 104
    FILE_CLOSE = 105
    FILE_READ = 106
    FILE_WRITE = 107
    FILE_SEEK = 108
    FILE_LIST = 109
    SHELL = 110
    BB_SPI_CLOSE = 111
    BB_SPI_OPEN = 112
    BB_SPI_XFER = 113
    BSC_XFER = 114
    EVENT_MONITOR = 115
    EVENT_TRIGGER = 116
    SCRIPT_UPDATE = 117
    WAVE_CREATE_PAD = 118


# Commands whose reply carries a length-prefixed data block instead of a
# scalar result. Membership is by exact opcode only.
BLOCK_COMMANDS: frozenset[int] = frozenset({
    Command.I2C_READ_DEVICE,
    Command.I2C_READ_BLOCK_DATA,
    Command.I2C_READ_I2C_BLOCK_DATA,
    Command.I2C_BLOCK_PROCESS_CALL,
})


def code_of(command: Command | str) -> Command:
    """Resolve a command name (or member) to its ``Command``.

    Args:
        command: A ``Command`` member or its symbolic name, case-insensitive
            (``"i2c_open"`` and ``"I2C_OPEN"`` are equivalent).

    Raises:
        ValueError: If the name is not a known command.
    """
    if isinstance(command, Command):
        return command
    if isinstance(command, str):
        try:
            return Command[command.upper()]
        except KeyError:
            pass
    raise ValueError(
        f"Unknown command {command!r}. Valid: {[c.name.lower() for c in Command]}"
    )


def is_block_command(code: int) -> bool:
    """Return True if replies to ``code`` carry a data block."""
    return code in BLOCK_COMMANDS
