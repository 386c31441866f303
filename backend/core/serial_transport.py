"""
Serial Transport - Single responsibility: serial communication

Implements the Transport capability on top of pyserial. Not thread-safe:
a transport belongs to exactly one Rotator.
"""

import time
from dataclasses import dataclass
from typing import Optional

import serial
import serial.tools.list_ports

from .logger import log_critical


BAUD_RATE = 115200
DEFAULT_TIMEOUT = 0.5


@dataclass
class SerialConfig:
    baud_rate: int = BAUD_RATE
    timeout: float = DEFAULT_TIMEOUT
    connect_delay: float = 0.0  # Boards that reset on open need ~2s


class SerialTransport:
    """
    Handles raw serial communication with the rotator.

    read() follows pyserial semantics: it returns whatever arrived before
    the timeout, and b"" when the line stayed idle.
    """

    def __init__(self, config: Optional[SerialConfig] = None):
        self.config = config or SerialConfig()
        self._serial: Optional[serial.Serial] = None
        self._connected = False

    @staticmethod
    def list_ports() -> list[str]:
        """List available serial ports"""
        ports = serial.tools.list_ports.comports()
        return [port.device for port in ports]

    def connect(self, port: str) -> bool:
        """Connect to serial port"""
        try:
            self._serial = serial.Serial(
                port,
                self.config.baud_rate,
                timeout=self.config.timeout,
            )
        except serial.SerialException as e:
            self._connected = False
            log_critical(f"Failed to open {port}", {"error": str(e)})
            raise ConnectionError(f"Failed to connect: {e}") from e

        if self.config.connect_delay:
            time.sleep(self.config.connect_delay)
        self._connected = True
        return True

    def disconnect(self) -> None:
        """Disconnect from serial port"""
        if self._serial:
            self._serial.close()
            self._serial = None
        self._connected = False

    def _port(self) -> serial.Serial:
        if not self._serial or not self._connected:
            raise ConnectionError("Not connected")
        return self._serial

    def write_all(self, data: bytes) -> None:
        """Write every byte and wait until they have left the buffer"""
        port = self._port()
        written = port.write(data)
        if written is not None and written != len(data):
            raise serial.SerialException(
                f"Short write: {written} of {len(data)} bytes"
            )
        port.flush()

    def read(self, size: int) -> bytes:
        """Read up to `size` bytes, b"" on timeout"""
        return self._port().read(size)

    def set_baud_rate(self, baud_rate: int) -> None:
        self._port().baudrate = baud_rate
        self.config.baud_rate = baud_rate

    def set_timeout(self, seconds: float) -> None:
        """Set a finite read timeout. None (block forever) is rejected."""
        if seconds is None or seconds < 0:
            raise ValueError(f"Read timeout must be finite and >= 0, got {seconds!r}")
        self._port().timeout = seconds
        self.config.timeout = seconds

    @property
    def is_connected(self) -> bool:
        return self._connected
