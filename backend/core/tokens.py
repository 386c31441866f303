"""
Wire tokens - the fixed text each command and direction is sent as.
"""

from enum import Enum


class Command(Enum):
    """Protocol verbs. The value is the 4-character wire token."""
    DEGREES_VERTICAL = "DVER"
    DEGREES_HORIZONTAL = "DHOR"
    CALIBRATE_VERTICAL = "CALV"
    CALIBRATE_HORIZONTAL = "CALH"
    MOVE_CONTINUOUS = "MOVC"
    MOVE_VERTICAL_STEPS = "MOVV"
    MOVE_HORIZONTAL_STEPS = "MOVH"
    GET_POSITION = "GETP"
    GET_CALIBRATED = "GETC"
    GET_VERSION = "VERS"
    HALT = "HALT"

    def __str__(self) -> str:
        return self.value


class Direction(Enum):
    """Directions accepted by MOVC. The value is the 2-character wire token."""
    # Vertical
    UP = "UP"
    DOWN = "DN"
    STOP_VERTICAL = "SV"

    # Horizontal
    LEFT = "LT"
    RIGHT = "RT"
    STOP_HORIZONTAL = "SH"

    def __str__(self) -> str:
        return self.value

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN, Direction.STOP_VERTICAL)


def command_token(command: Command) -> str:
    """Wire token for a command"""
    return command.value


def direction_token(direction: Direction) -> str:
    """Wire token for a direction"""
    return direction.value
