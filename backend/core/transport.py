"""
Transport layer - the byte channel the rotator client talks through.

Provides:
- Transport protocol (interface)
- MockTransport, a simulated rotator for testing without hardware
- (SerialTransport in separate file for production)
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional, Protocol, Tuple

from .tokens import Command, Direction


class Transport(Protocol):
    """Duplex byte channel owned by a single Rotator."""

    def write_all(self, data: bytes) -> None:
        """Write every byte or raise OSError."""
        ...

    def read(self, size: int) -> bytes:
        """
        Read up to `size` bytes.

        Returns b"" when nothing arrived within the read timeout.
        """
        ...

    def set_baud_rate(self, baud_rate: int) -> None:
        ...

    def set_timeout(self, seconds: float) -> None:
        ...

    def disconnect(self) -> None:
        """Release the channel."""
        ...


class MockTransport:
    """
    Mock transport simulating the rotator firmware.

    Every complete line written is echoed back followed by an OK/ERR
    status line, the way the device answers. Tests can override the next
    reply with queue_status() (echo + given status) or queue_raw() (exact
    bytes, no echo).
    """

    VERSION = "0.4.0"
    DEGREES_PER_STEP = 0.05

    def __init__(self, chunk_size: int = 2048):
        self.chunk_size = chunk_size
        self.sent_lines: List[str] = []
        self.baud_rate: Optional[int] = None
        self.timeout: Optional[float] = None
        self.fail_next_write: bool = False
        self.fail_next_read: bool = False

        # Device state. Horizontal is kept in the device's own sign convention.
        self.vertical: float = 0.0
        self.horizontal: float = 0.0
        self.calibrated_vertical: bool = False
        self.calibrated_horizontal: bool = False
        self.motion: Dict[str, Optional[str]] = {"vertical": None, "horizontal": None}

        self._connected: bool = True
        self._pending_write = bytearray()
        self._rx = bytearray()
        self._overrides: Deque[Tuple[str, bytes]] = deque()

    # === Transport capability ===

    def write_all(self, data: bytes) -> None:
        if not self._connected:
            raise ConnectionError("Not connected")
        if self.fail_next_write:
            self.fail_next_write = False
            raise OSError("simulated write failure")

        self._pending_write.extend(data)
        while b"\n" in self._pending_write:
            raw, _, rest = bytes(self._pending_write).partition(b"\n")
            self._pending_write = bytearray(rest)
            self._handle_line(raw.decode("utf-8", errors="replace"))

    def read(self, size: int) -> bytes:
        if not self._connected:
            raise ConnectionError("Not connected")
        if self.fail_next_read:
            self.fail_next_read = False
            raise OSError("simulated read failure")

        count = min(size, self.chunk_size)
        chunk = bytes(self._rx[:count])
        del self._rx[:count]
        return chunk

    def set_baud_rate(self, baud_rate: int) -> None:
        self.baud_rate = baud_rate

    def set_timeout(self, seconds: float) -> None:
        self.timeout = seconds

    # === Test controls ===

    def queue_status(self, status_line: str) -> None:
        """Answer the next request with its echo followed by `status_line`."""
        self._overrides.append(("status", status_line.encode("utf-8")))

    def queue_raw(self, data: bytes) -> None:
        """Answer the next request with exactly `data` (no echo)."""
        self._overrides.append(("raw", data))

    @property
    def is_connected(self) -> bool:
        return self._connected

    def disconnect(self) -> None:
        """Simulate releasing the port."""
        self._connected = False

    def clear_history(self) -> None:
        """Clear sent line history."""
        self.sent_lines.clear()

    # === Firmware simulation ===

    def _handle_line(self, line: str) -> None:
        self.sent_lines.append(line)

        if self._overrides:
            kind, payload = self._overrides.popleft()
            if kind == "raw":
                self._rx.extend(payload)
            else:
                self._rx.extend(line.encode("utf-8") + b"\n" + payload + b"\n")
            return

        status = self._execute(line)
        self._rx.extend(f"{line}\n{status}\n".encode("utf-8"))

    def _execute(self, line: str) -> str:
        parts = line.split()
        if not parts:
            return "ERR unknown command"
        verb, args = parts[0], parts[1:]

        handlers = {
            Command.DEGREES_VERTICAL.value: self._degrees_vertical,
            Command.DEGREES_HORIZONTAL.value: self._degrees_horizontal,
            Command.CALIBRATE_VERTICAL.value: self._calibrate_vertical,
            Command.CALIBRATE_HORIZONTAL.value: self._calibrate_horizontal,
            Command.MOVE_CONTINUOUS.value: self._move_continuous,
            Command.MOVE_VERTICAL_STEPS.value: self._move_vertical_steps,
            Command.MOVE_HORIZONTAL_STEPS.value: self._move_horizontal_steps,
            Command.GET_POSITION.value: self._get_position,
            Command.GET_CALIBRATED.value: self._get_calibrated,
            Command.GET_VERSION.value: self._get_version,
            Command.HALT.value: self._halt,
        }
        handler = handlers.get(verb)
        if handler is None:
            return "ERR unknown command"
        return handler(args)

    @property
    def calibrated(self) -> bool:
        return self.calibrated_vertical and self.calibrated_horizontal

    def _degrees_vertical(self, args: List[str]) -> str:
        if len(args) != 1:
            return "ERR expected 1 argument"
        if not self.calibrated:
            return "ERR not calibrated"
        try:
            self.vertical = float(args[0])
        except ValueError:
            return "ERR invalid number"
        return "OK"

    def _degrees_horizontal(self, args: List[str]) -> str:
        if len(args) != 1:
            return "ERR expected 1 argument"
        if not self.calibrated:
            return "ERR not calibrated"
        try:
            self.horizontal = float(args[0])
        except ValueError:
            return "ERR invalid number"
        return "OK"

    def _calibrate_vertical(self, args: List[str]) -> str:
        if args not in ([], ["SET"]):
            return "ERR invalid argument"
        self.vertical = 0.0
        self.calibrated_vertical = True
        return "OK"

    def _calibrate_horizontal(self, args: List[str]) -> str:
        if args:
            return "ERR invalid argument"
        self.horizontal = 0.0
        self.calibrated_horizontal = True
        return "OK"

    def _move_continuous(self, args: List[str]) -> str:
        if len(args) != 1:
            return "ERR expected 1 argument"
        try:
            direction = Direction(args[0])
        except ValueError:
            return "ERR invalid direction"

        axis = "vertical" if direction.is_vertical else "horizontal"
        stopping = direction in (Direction.STOP_VERTICAL, Direction.STOP_HORIZONTAL)
        self.motion[axis] = None if stopping else direction.value
        return "OK"

    def _step(self, args: List[str]) -> Optional[float]:
        if len(args) != 1:
            return None
        try:
            return int(args[0]) * self.DEGREES_PER_STEP
        except ValueError:
            return None

    def _move_vertical_steps(self, args: List[str]) -> str:
        delta = self._step(args)
        if delta is None:
            return "ERR invalid step count"
        self.vertical += delta
        return "OK"

    def _move_horizontal_steps(self, args: List[str]) -> str:
        delta = self._step(args)
        if delta is None:
            return "ERR invalid step count"
        self.horizontal += delta
        return "OK"

    def _get_position(self, args: List[str]) -> str:
        return f"OK {self.vertical:.3f} {self.horizontal:.3f}"

    def _get_calibrated(self, args: List[str]) -> str:
        return "OK true" if self.calibrated else "OK false"

    def _get_version(self, args: List[str]) -> str:
        return f"OK {self.VERSION}"

    def _halt(self, args: List[str]) -> str:
        self.motion = {"vertical": None, "horizontal": None}
        return "OK"
