"""
Rotator error taxonomy.

Every failure is scoped to the single call that produced it. Transport
I/O failures (OSError, serial.SerialException, ConnectionError) are not
wrapped here - they propagate from the transport as-is.
"""


class RotatorError(Exception):
    """Base class for protocol-level rotator failures"""
    pass


class ResponseError(RotatorError):
    """The rotator answered ERR. The message is kept verbatim."""

    def __init__(self, message: str):
        super().__init__(f"the rotator returned an error: {message}")
        self.message = message


class InvalidResponse(RotatorError):
    """
    The response was structurally malformed.

    Too few lines, echo mismatch, unknown status token, non-UTF-8 bytes,
    missing ERR message or wrong value count. Usually means the link is
    out of sync and the caller should consider resetting the transport.
    """

    def __init__(self, reason: str = "the response from the rotator was invalid"):
        super().__init__(reason)
        self.reason = reason


class ExpectedValue(RotatorError):
    """Status was OK but a required value was missing"""

    def __init__(self):
        super().__init__("expected a value from the rotator but none received")


class ParseError(RotatorError):
    """A value token is not valid for the requested type"""

    def __init__(self, detail: str):
        super().__init__(f"failed to parse value: {detail}")
        self.detail = detail
