"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.transport import MockTransport
from hardware.rotator import Rotator


@pytest.fixture
def transport() -> MockTransport:
    """Simulated rotator, not yet calibrated."""
    return MockTransport()


@pytest.fixture
def rotator(transport: MockTransport) -> Rotator:
    """Rotator client wired to the simulated device."""
    return Rotator(transport)


@pytest.fixture
def calibrated_rotator(rotator: Rotator, transport: MockTransport) -> Rotator:
    """Rotator with both axes calibrated and history cleared."""
    rotator.calibrate_vertical()
    rotator.calibrate_horizontal()
    transport.clear_history()
    return rotator
