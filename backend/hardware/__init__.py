"""Hardware layer - typed rotator client"""

from .rotator import Rotator

__all__ = ['Rotator']
