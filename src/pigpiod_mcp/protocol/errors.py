"""Daemon error codes and the client's exception hierarchy.

The daemon reports failure by returning a negative result. Known codes map
to a short symbolic reason; the code space is open-ended, so anything not in
the table maps to ``UNKNOWN_ERROR`` rather than raising.
"""

from __future__ import annotations

UNKNOWN_ERROR = "unknown_error"

ERROR_REASONS: dict[int, str] = {
    -1: "init_failed",
    -2: "bad_user_gpio",
    -3: "bad_gpio",
    -4: "bad_mode",
    -5: "bad_level",
    -6: "bad_pud",
    -7: "bad_pulsewidth",
    -8: "bad_dutycycle",
    -9: "bad_timer",
    -10: "bad_ms",
    -11: "bad_timetype",
    -12: "bad_seconds",
    -13: "bad_micros",
    -14: "timer_failed",
    -15: "bad_wdog_timeout",
    -16: "no_alert_func",
    -17: "bad_clk_periph",
    -18: "bad_clk_source",
    -19: "bad_clk_micros",
    -20: "bad_buf_millis",
    -21: "bad_dutyrange",
    -22: "bad_signum",
    -23: "bad_pathname",
    -24: "no_handle",
    -25: "bad_handle",
    -26: "bad_if_flags",
    -27: "bad_channel",
    -28: "bad_socket_port",
    -29: "bad_fifo_command",
    -30: "bad_seco_channel",
    -31: "not_initialised",
    -32: "initialised",
    -33: "bad_wave_mode",
    -34: "bad_cfg_internal",
    -35: "bad_wave_baud",
    -36: "too_many_pulses",
    -37: "too_many_chars",
    -38: "not_serial_gpio",
    -39: "bad_serial_struc",
    -40: "bad_serial_buf",
    -41: "not_permitted",
    -42: "some_permitted",
    -43: "bad_wvsc_commnd",
    -44: "bad_wvsm_commnd",
    -45: "bad_wvsp_commnd",
    -46: "bad_pulselen",
    -47: "bad_script",
    -48: "bad_script_id",
    -49: "bad_ser_offset",
    -50: "gpio_in_use",
    -51: "bad_serial_count",
    -52: "bad_param_num",
    -53: "dup_tag",
    -54: "too_many_tags",
    -55: "bad_script_cmd",
    -56: "bad_var_num",
    -57: "no_script_room",
    -58: "no_memory",
    -59: "sock_read_failed",
    -60: "sock_writ_failed",
    -61: "too_many_param",
    -62: "script_not_ready",
    -63: "bad_tag",
    -64: "bad_mics_delay",
    -65: "bad_mils_delay",
    -66: "bad_wave_id",
    -67: "too_many_cbs",
    -68: "too_many_ool",
    -69: "empty_waveform",
    -70: "no_waveform_id",
    -71: "i2c_open_failed",
    -72: "ser_open_failed",
    -73: "spi_open_failed",
    -74: "bad_i2c_bus",
    -75: "bad_i2c_addr",
    -76: "bad_spi_channel",
    -77: "bad_flags",
    -78: "bad_spi_speed",
    -79: "bad_ser_device",
    -80: "bad_ser_speed",
    -81: "bad_param",
    -82: "i2c_write_failed",
    -83: "i2c_read_failed",
    -84: "bad_spi_count",
    -85: "ser_write_failed",
    -86: "ser_read_failed",
    -87: "ser_read_no_data",
    -88: "unknown_command",
    -89: "spi_xfer_failed",
    -90: "bad_pointer",
    -91: "no_aux_spi",
    -92: "not_pwm_gpio",
    -93: "not_servo_gpio",
    -94: "not_hclk_gpio",
    -95: "not_hpwm_gpio",
    -96: "bad_hpwm_freq",
    -97: "bad_hpwm_duty",
    -98: "bad_hclk_freq",
    -99: "bad_hclk_pass",
    -100: "hpwm_illegal",
    -101: "bad_databits",
    -102: "bad_stopbits",
    -103: "msg_toobig",
    -104: "bad_malloc_mode",
    -105: "too_many_segs",
    -106: "bad_i2c_seg",
    -107: "bad_smbus_cmd",
    -108: "not_i2c_gpio",
    -109: "bad_i2c_wlen",
    -110: "bad_i2c_rlen",
    -111: "bad_i2c_cmd",
    -112: "bad_i2c_baud",
    -113: "chain_loop_cnt",
    -114: "bad_chain_loop",
    -115: "chain_counter",
    -116: "bad_chain_cmd",
    -117: "bad_chain_delay",
    -118: "chain_nesting",
    -119: "chain_too_big",
    -120: "deprecated",
    -121: "bad_ser_invert",
    -122: "bad_edge",
    -123: "bad_isr_init",
    -124: "bad_forever",
    -125: "bad_filter",
    -126: "bad_pad",
    -127: "bad_strength",
    -128: "fil_open_failed",
    -129: "bad_file_mode",
    -130: "bad_file_flag",
    -131: "bad_file_read",
    -132: "bad_file_write",
    -133: "file_not_ropen",
    -134: "file_not_wopen",
    -135: "bad_file_seek",
    -136: "no_file_match",
    -137: "no_file_access",
    -138: "file_is_a_dir",
    -139: "bad_shell_status",
    -140: "bad_script_name",
    -141: "bad_spi_baud",
    -142: "not_spi_gpio",
    -143: "bad_event_id",
    -144: "cmd_interrupted",
    -145: "not_on_bcm2711",
    -146: "only_on_bcm2711",
}


def reason_of(code: int) -> str:
    """Return the symbolic reason for a negative daemon result code."""
    return ERROR_REASONS.get(code, UNKNOWN_ERROR)


class PigpioError(Exception):
    """Base class for every error raised by this package."""


class ConnectFailure(PigpioError, ConnectionError):
    """The daemon could not be reached within the retry budget."""

    def __init__(self, host: str, port: int, attempts: int, last_error: Exception | None = None):
        self.host = host
        self.port = port
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Could not connect to pigpio daemon at {host}:{port} "
            f"after {attempts} attempt(s). Last error: {last_error}"
        )


class IOFailure(PigpioError, ConnectionError):
    """A read or write on an established connection failed.

    The connection is unusable afterwards: the position of the next reply
    in the stream is no longer known.
    """


class TimeoutFailure(IOFailure):
    """No complete reply arrived within the configured read timeout."""


class DaemonError(PigpioError):
    """The daemon answered a command with a negative result code."""

    def __init__(self, code: int, reason: str | None = None, command: int | None = None):
        self.code = code
        self.reason = reason or reason_of(code)
        self.command = command
        where = f" (command {command})" if command is not None else ""
        super().__init__(f"{self.reason} [{code}]{where}")
