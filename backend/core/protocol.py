"""
Protocol engine - request framing, response reading and validation.

Wire grammar (ASCII, newline-delimited):

    request     := VERB (" " ARG)* "\\n"
    response    := echo-line "\\n" status-line "\\n" [ignored...]
    status-line := "OK" (" " VALUE)* | "ERR" " " MESSAGE

A response is complete when the transport goes idle for one read timeout.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union, TYPE_CHECKING

from .errors import InvalidResponse, ResponseError
from .tokens import Command

if TYPE_CHECKING:
    from .transport import Transport


READ_CHUNK_SIZE = 2048
MAX_RESPONSE_BYTES = 64 * 1024

STATUS_OK = "OK"
STATUS_ERR = "ERR"

# ASCII whitespace only: no vertical tab, no Unicode spaces
_ASCII_WHITESPACE = re.compile(r"[ \t\n\f\r]+")
_STATUS_LINE = re.compile(r"([^ \t\n\f\r]*)(?:[ \t\n\f\r](.*))?\Z", re.S)


# =============================================================================
# Status Outcomes
# =============================================================================


@dataclass(frozen=True)
class Success:
    """OK status with its value tokens (possibly empty)."""
    values: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Failure:
    """ERR status with the device's message, untokenized."""
    message: str


StatusOutcome = Union[Success, Failure]


# =============================================================================
# Request Builder
# =============================================================================


def build_request(command: Command, args: Iterable[str] = ()) -> str:
    """
    Build a request line: token, then " " + arg for each argument, then "\\n".

    No escaping is done. Arguments containing whitespace would break framing.
    """
    parts = [command.value]
    parts.extend(args)
    return " ".join(parts) + "\n"


# =============================================================================
# Response Reader
# =============================================================================


def read_response(transport: "Transport",
                  chunk_size: int = READ_CHUNK_SIZE,
                  max_bytes: int = MAX_RESPONSE_BYTES) -> str:
    """
    Drain the transport until a read returns no bytes.

    Each chunk must decode as UTF-8 on its own; a multi-byte sequence split
    across two reads is rejected as InvalidResponse. Transport errors
    propagate unchanged.
    """
    pieces: List[str] = []
    total = 0
    while True:
        chunk = transport.read(chunk_size)
        if not chunk:
            break

        try:
            pieces.append(chunk.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise InvalidResponse(f"response is not valid UTF-8: {e}") from e

        total += len(chunk)
        if total > max_bytes:
            raise InvalidResponse(
                f"response exceeded {max_bytes} bytes without going idle"
            )

    return "".join(pieces)


# =============================================================================
# Response Validator
# =============================================================================


def split_lines(text: str) -> List[str]:
    """Split on "\\n" terminators, dropping the empty segment after a final newline."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def split_values(payload: str) -> Tuple[str, ...]:
    """Split a payload on runs of ASCII whitespace."""
    return tuple(token for token in _ASCII_WHITESPACE.split(payload) if token)


def parse_status_line(line: str) -> StatusOutcome:
    """
    Parse an OK/ERR status line into an outcome.

    The status token ends at the first whitespace character; everything
    after that single separator is the payload, untouched.
    """
    match = _STATUS_LINE.match(line)
    status = match.group(1)
    payload = match.group(2) or ""

    if status == STATUS_OK:
        return Success(split_values(payload))

    if status == STATUS_ERR:
        if not payload:
            raise InvalidResponse("ERR status without a message")
        return Failure(payload)

    raise InvalidResponse(f"unrecognized status {status!r}")


def validate_response(text: str, request_line: str) -> StatusOutcome:
    """
    Check the echo line and parse the status line.

    Lines after the status line are not inspected.
    """
    lines = split_lines(text)
    if len(lines) < 2:
        raise InvalidResponse(f"expected echo and status lines, got {len(lines)} line(s)")

    expected_echo = request_line.strip()
    if lines[0] != expected_echo:
        raise InvalidResponse(f"echo mismatch: sent {expected_echo!r}, got {lines[0]!r}")

    return parse_status_line(lines[1])


def expect_success(outcome: StatusOutcome) -> Tuple[str, ...]:
    """Return the values of a Success, raise ResponseError for a Failure."""
    if isinstance(outcome, Failure):
        raise ResponseError(outcome.message)
    return outcome.values
