"""Peripheral command sets built on the dispatcher."""

from .i2c import I2C
from .spi import SPI
