"""Protocol layer: opcodes, error codes, request framing, and reply decoding."""

from .commands import Command, BLOCK_COMMANDS, code_of, is_block_command
from .errors import (
    ConnectFailure,
    DaemonError,
    IOFailure,
    PigpioError,
    TimeoutFailure,
    reason_of,
)
from .framing import Request, build_frame, parse_reply_header
from .parser import CommandError, CommandOk, CommandResult, decode_reply, handle_result
