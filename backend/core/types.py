"""
Core immutable types for the rotator.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """
    Immutable two-axis position in degrees.

    - vertical: elevation
    - horizontal: azimuth, in the host convention (the device reports
      the opposite sign; Rotator converts in both directions)
    """
    vertical: float
    horizontal: float

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"vertical": self.vertical, "horizontal": self.horizontal}
