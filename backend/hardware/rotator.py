"""
Rotator Client - Single responsibility: typed rotator operations

Each public method is one transaction: build request -> write -> read
until idle -> validate -> decode. Nothing is retried; a failure is raised
once and the caller decides what to do next.

Horizontal sign convention: the firmware counts azimuth the opposite way
to the host. set_position_horizontal() negates before sending and
position() negates the reported value back, so both use host degrees.
"""

import numbers
import re
from typing import Sequence, Tuple

from core.errors import ExpectedValue, InvalidResponse, ParseError, RotatorError
from core.logger import log_calib, log_critical, log_move, log_pos, log_serial, log_warn
from core.protocol import build_request, expect_success, read_response, validate_response
from core.tokens import Command, Direction
from core.transport import Transport
from core.types import Position


# ASCII-only: float() alone would also take Unicode digits, spaces and underscores
_REAL_NUMBER = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)


class Rotator:
    """
    A two-axis rotator driven over a line-oriented serial protocol.

    Owns its transport for its whole lifetime. Not thread-safe: one
    transaction at a time.
    """

    BAUD_RATE = 115200
    READ_TIMEOUT = 0.5  # seconds; an idle read this long ends a response

    def __init__(self, transport: Transport):
        transport.set_baud_rate(self.BAUD_RATE)
        transport.set_timeout(self.READ_TIMEOUT)
        self._transport = transport

    def __enter__(self) -> "Rotator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the transport"""
        self._transport.disconnect()

    # === Transaction ===

    def transact(self, command: Command, args: Sequence[str] = ()) -> Tuple[str, ...]:
        """Send one command and return the OK values, or raise."""
        request = build_request(command, args)
        log_serial(">>>", request.rstrip("\n"))
        self._transport.write_all(request.encode("utf-8"))

        try:
            text = read_response(self._transport)
            for line in text.splitlines():
                log_serial("<<<", line)
            return expect_success(validate_response(text, request))
        except InvalidResponse as e:
            log_warn(f"Invalid response to {command.value}", {"reason": e.reason})
            raise
        except RotatorError as e:
            log_critical(f"{command.value} failed: {e}")
            raise

    # === Positioning ===

    def set_position_vertical(self, degrees: float) -> None:
        """Move the vertical axis to an absolute position in degrees"""
        arg = _format_degrees(_check_degrees(degrees))
        log_move(f"Vertical -> {arg}°")
        self.transact(Command.DEGREES_VERTICAL, [arg])

    def set_position_horizontal(self, degrees: float) -> None:
        """Move the horizontal axis to an absolute position in degrees"""
        arg = _format_degrees(-_check_degrees(degrees))
        log_move(f"Horizontal -> {degrees:.3f}°", {"sent": arg})
        self.transact(Command.DEGREES_HORIZONTAL, [arg])

    # === Calibration ===

    def calibrate_vertical(self, set_current: bool = False) -> None:
        """Calibrate the vertical axis. With set_current=True, send the SET flag."""
        log_calib("Calibrating vertical axis", {"set": set_current})
        self.transact(Command.CALIBRATE_VERTICAL, ["SET"] if set_current else [])

    def calibrate_horizontal(self) -> None:
        """Calibrate the horizontal axis"""
        log_calib("Calibrating horizontal axis")
        self.transact(Command.CALIBRATE_HORIZONTAL)

    # === Movement ===

    def move_direction(self, direction: Direction) -> None:
        """Move indefinitely in a direction, or stop an axis"""
        log_move(f"Continuous move {direction.name}")
        self.transact(Command.MOVE_CONTINUOUS, [direction.value])

    def move_vertical_steps(self, steps: int) -> None:
        """Move the vertical axis by a number of motor steps"""
        arg = _format_steps(steps)
        log_move(f"Vertical {arg} steps")
        self.transact(Command.MOVE_VERTICAL_STEPS, [arg])

    def move_horizontal_steps(self, steps: int) -> None:
        """Move the horizontal axis by a number of motor steps"""
        arg = _format_steps(steps)
        log_move(f"Horizontal {arg} steps")
        self.transact(Command.MOVE_HORIZONTAL_STEPS, [arg])

    def halt(self) -> None:
        """
        Stop both motors.

        This is an ordinary transaction, not an out-of-band interrupt: it
        is only sent once the previous call has returned.
        """
        log_move("HALT")
        self.transact(Command.HALT)

    # === Queries ===

    def position(self) -> Position:
        """Current position of both axes, in host degrees"""
        values = self.transact(Command.GET_POSITION)
        if not values:
            raise ExpectedValue()
        if len(values) != 2:
            raise InvalidResponse(f"expected 2 position values, got {len(values)}")

        vertical = _parse_float(values[0])
        horizontal = 0.0 - _parse_float(values[1])  # never -0.0
        pos = Position(vertical=vertical, horizontal=horizontal)
        log_pos("Position", pos.to_dict())
        return pos

    def calibrated(self) -> bool:
        """Whether the rotator is calibrated; required for absolute positioning"""
        values = self.transact(Command.GET_CALIBRATED)
        if not values:
            raise ExpectedValue()
        if len(values) != 1:
            raise InvalidResponse(f"expected 1 calibration value, got {len(values)}")
        return _parse_bool(values[0])

    def version(self) -> str:
        """Firmware version string, verbatim"""
        values = self.transact(Command.GET_VERSION)
        if not values:
            raise ExpectedValue()
        return values[0]


def _check_degrees(degrees: float) -> float:
    if isinstance(degrees, bool) or not isinstance(degrees, numbers.Real):
        raise TypeError(f"degrees must be a real number, got {degrees!r}")
    return degrees


def _format_degrees(degrees: float) -> str:
    return f"{degrees:.3f}"


def _format_steps(steps: int) -> str:
    if isinstance(steps, bool) or not isinstance(steps, numbers.Integral):
        raise TypeError(f"steps must be an integer, got {steps!r}")
    return str(int(steps))


def _parse_float(token: str) -> float:
    if not _REAL_NUMBER.fullmatch(token):
        raise ParseError(f"invalid float literal: {token!r}")
    return float(token)


def _parse_bool(token: str) -> bool:
    if token == "true":
        return True
    if token == "false":
        return False
    raise ParseError(f"provided string was not `true` or `false`: {token!r}")
