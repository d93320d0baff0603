"""MCP server entry point for the pigpio daemon.

Exposes the daemon's command transport and the I2C/SPI command sets as
tools via the Model Context Protocol, using the official Python MCP SDK
with stdio transport.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import Settings
from .peripherals.i2c import I2C
from .peripherals.spi import SPI
from .protocol.errors import ERROR_REASONS, DaemonError, PigpioError
from .protocol.parser import CommandOk
from .transport.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "pigpiod",
    instructions="MCP server for GPIO, I2C and SPI access through a pigpio daemon",
)

# Global connection state
_dispatcher: Dispatcher | None = None


def _get_dispatcher() -> Dispatcher:
    """Get the running dispatcher, raising if not connected."""
    if _dispatcher is None or not _dispatcher.running:
        raise RuntimeError(
            "Not connected to pigpiod. Use the 'connect' tool first."
        )
    return _dispatcher


def _error(e: DaemonError) -> dict[str, Any]:
    return {"error": e.reason, "code": e.code}


def _block(data: bytes) -> dict[str, Any]:
    return {"count": len(data), "data": list(data), "hex": data.hex(" ")}


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(host: str | None = None, port: int | None = None) -> dict[str, Any]:
    """Connect to the pigpio daemon.

    Defaults come from PIGPIO_ADDR / PIGPIO_PORT, falling back to
    localhost:8888. Retries a few times in case the daemon is starting.

    Args:
        host: Daemon host name or address.
        port: Daemon TCP port.
    """
    global _dispatcher
    if _dispatcher is not None and _dispatcher.running:
        return {"connected": True, "message": "Already connected"}

    settings = Settings.from_env()
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port

    try:
        _dispatcher = Dispatcher.connect(settings)
    except PigpioError as e:
        return {"connected": False, "error": str(e)}

    return {"connected": True, "host": settings.host, "port": settings.port}


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the connection to the daemon."""
    global _dispatcher
    if _dispatcher is None:
        return {"disconnected": True}
    _dispatcher.close()
    _dispatcher = None
    return {"disconnected": True}


@mcp.tool()
def command(
    name: str,
    p1: int = 0,
    p2: int = 0,
    extension: list[int] | None = None,
) -> dict[str, Any]:
    """Send a raw daemon command.

    Args:
        name: Command name, e.g. "get_pigpio_version" or "read".
        p1: First parameter.
        p2: Second parameter.
        extension: Extra 32-bit words.
    """
    pi = _get_dispatcher()
    try:
        result = pi.execute(name, p1, p2, extension or [])
    except ValueError as e:
        return {"error": str(e)}

    if isinstance(result, CommandOk):
        if isinstance(result.value, bytes):
            return _block(result.value)
        return {"result": result.value}
    return {"error": result.reason, "code": result.code}


# ─── I2C TOOLS ────────────────────────────────────────────────────────

@mcp.tool()
def i2c_open(bus: int, address: int) -> dict[str, Any]:
    """Open the I2C device at ``address`` (0-0x7F) on ``bus`` (0 or 1).

    Returns the daemon handle used by the other i2c_* tools.
    """
    try:
        return {"handle": I2C(_get_dispatcher()).open(bus, address)}
    except ValueError as e:
        return {"error": str(e)}
    except DaemonError as e:
        return _error(e)


@mcp.tool()
def i2c_close(handle: int) -> dict[str, Any]:
    """Close an I2C handle."""
    try:
        I2C(_get_dispatcher()).close(handle)
    except DaemonError as e:
        return _error(e)
    return {"closed": handle}


@mcp.tool()
def i2c_read_byte(handle: int) -> dict[str, Any]:
    """Read a single byte from the device."""
    try:
        return {"value": I2C(_get_dispatcher()).read_byte(handle)}
    except DaemonError as e:
        return _error(e)


@mcp.tool()
def i2c_write_byte(handle: int, value: int) -> dict[str, Any]:
    """Write a single byte (0-255) to the device."""
    try:
        I2C(_get_dispatcher()).write_byte(handle, value)
    except ValueError as e:
        return {"error": str(e)}
    except DaemonError as e:
        return _error(e)
    return {"written": 1}


@mcp.tool()
def i2c_read_byte_data(handle: int, reg: int) -> dict[str, Any]:
    """Read one byte from register ``reg``."""
    try:
        return {"value": I2C(_get_dispatcher()).read_byte_data(handle, reg)}
    except DaemonError as e:
        return _error(e)


@mcp.tool()
def i2c_write_byte_data(handle: int, reg: int, value: int) -> dict[str, Any]:
    """Write one byte (0-255) to register ``reg``."""
    try:
        I2C(_get_dispatcher()).write_byte_data(handle, reg, value)
    except ValueError as e:
        return {"error": str(e)}
    except DaemonError as e:
        return _error(e)
    return {"written": 1}


@mcp.tool()
def i2c_read_device(handle: int, count: int) -> dict[str, Any]:
    """Read ``count`` (1-32) raw bytes from the device."""
    try:
        return _block(I2C(_get_dispatcher()).read_device(handle, count))
    except ValueError as e:
        return {"error": str(e)}
    except DaemonError as e:
        return _error(e)


@mcp.tool()
def i2c_write_device(handle: int, data: list[int]) -> dict[str, Any]:
    """Write raw bytes to the device."""
    try:
        I2C(_get_dispatcher()).write_device(handle, data)
    except DaemonError as e:
        return _error(e)
    return {"written": len(data)}


# ─── SPI TOOLS ────────────────────────────────────────────────────────

@mcp.tool()
def spi_open(channel: int, baud: int, flags: int = 0) -> dict[str, Any]:
    """Open SPI ``channel`` (0-2) at ``baud`` bits per second.

    Args:
        channel: SPI chip-select channel.
        baud: Clock speed, 32K-125M.
        flags: SPI mode and device flags (see pigpio spi_open).
    """
    try:
        return {"handle": SPI(_get_dispatcher()).open(channel, baud, flags)}
    except ValueError as e:
        return {"error": str(e)}
    except DaemonError as e:
        return _error(e)


@mcp.tool()
def spi_close(handle: int) -> dict[str, Any]:
    """Close an SPI handle."""
    try:
        SPI(_get_dispatcher()).close(handle)
    except ValueError as e:
        return {"error": str(e)}
    except DaemonError as e:
        return _error(e)
    return {"closed": handle}


# ─── RESOURCES ────────────────────────────────────────────────────────

@mcp.resource("pigpio://errors")
def error_codes() -> dict[str, str]:
    """Daemon error codes and their symbolic reasons."""
    return {str(code): reason for code, reason in ERROR_REASONS.items()}


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
