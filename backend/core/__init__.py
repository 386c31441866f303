"""Core infrastructure layer - wire tokens, protocol engine, transports"""

from .errors import RotatorError, ResponseError, InvalidResponse, ExpectedValue, ParseError
from .tokens import Command, Direction
from .protocol import build_request, read_response, validate_response, Success, Failure
from .transport import Transport, MockTransport
from .serial_transport import SerialTransport, SerialConfig
from .types import Position

__all__ = [
    'RotatorError', 'ResponseError', 'InvalidResponse', 'ExpectedValue', 'ParseError',
    'Command', 'Direction',
    'build_request', 'read_response', 'validate_response', 'Success', 'Failure',
    'Transport', 'MockTransport',
    'SerialTransport', 'SerialConfig',
    'Position',
]
