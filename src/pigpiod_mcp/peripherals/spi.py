"""SPI access through the pigpio daemon.

``spi_flags`` consists of the least significant 22 bits::

    21 20 19 18 17 16 15 14 13 12 11 10  9  8  7  6  5  4  3  2  1  0
     b  b  b  b  b  b  R  T  n  n  n  n  W  A u2 u1 u0 p2 p1 p0  m  m

- ``mm`` SPI mode (0-3)
- ``px`` 1 if CEx is active high
- ``ux`` 1 if the CEx GPIO is not reserved for SPI
- ``A`` 1 for the auxiliary SPI device
- ``W`` 1 for 3-wire mode (standard device only)
- ``nnnn`` bytes to write before switching MOSI to MISO in 3-wire mode
- ``T``/``R`` LSB first on MOSI/MISO (auxiliary device only)
- ``bbbbbb`` word size in bits, 0 means 8 (auxiliary device only)
"""

from __future__ import annotations

from ..protocol.commands import Command
from ..transport.dispatcher import Dispatcher

SPI_CHANNELS = (0, 1, 2)
MAX_HANDLE = 9


class SPI:
    """SPI command set bound to a dispatcher."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._pi = dispatcher

    def open(self, channel: int, baud: int, flags: int = 0) -> int:
        """Return a handle for the SPI device on ``channel`` at ``baud`` bits/s.

        Channels 0-1 are on the main device; 2 is only valid on the
        auxiliary device.
        """
        if channel not in SPI_CHANNELS:
            raise ValueError(f"SPI channel must be one of {SPI_CHANNELS}, got {channel}")
        return self._pi.execute(Command.SPI_OPEN, channel, baud, [flags]).unwrap()

    def close(self, handle: int) -> None:
        """Close the SPI device associated with ``handle``."""
        if not 0 <= handle <= MAX_HANDLE:
            raise ValueError(f"SPI handle must be 0-{MAX_HANDLE}, got {handle}")
        self._pi.execute(Command.SPI_CLOSE, handle).unwrap()
