"""
Property-Based Tests for protocol framing invariants.

These verify request building and response validation for ANY
well-formed input, not just hand-picked examples.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from core.errors import InvalidResponse
from core.protocol import Failure, Success, build_request, validate_response
from core.tokens import Command
from core.transport import MockTransport
from hardware.rotator import Rotator


# =============================================================================
# Hypothesis Strategies
# =============================================================================


commands = st.sampled_from(list(Command))

# Whitespace-free printable ASCII tokens
tokens = st.text(
    alphabet=st.characters(min_codepoint=0x21, max_codepoint=0x7E),
    min_size=1,
    max_size=12,
)

# Free text for ERR messages: may contain spaces, no line breaks
messages = st.text(
    alphabet=st.characters(min_codepoint=0x20, max_codepoint=0x7E),
    min_size=1,
    max_size=40,
)

degrees = st.floats(min_value=-720, max_value=720, allow_nan=False)


# =============================================================================
# Request Builder
# =============================================================================


class TestRequestFraming:

    @given(command=commands, args=st.lists(tokens, max_size=5))
    def test_request_layout(self, command, args):
        """Token, then " " + arg per argument, then exactly one newline."""
        request = build_request(command, args)

        assert request == command.value + "".join(" " + a for a in args) + "\n"
        assert request.count("\n") == 1
        assert request.split() == [command.value, *args]


# =============================================================================
# Response Validator
# =============================================================================


class TestResponseValidation:

    @given(command=commands, args=st.lists(tokens, max_size=3),
           values=st.lists(tokens, max_size=5))
    def test_ok_values_round_trip(self, command, args, values):
        request = build_request(command, args)
        status = " ".join(["OK", *values])
        outcome = validate_response(f"{request.strip()}\n{status}\n", request)
        assert outcome == Success(tuple(values))

    @given(command=commands, message=messages)
    def test_err_message_verbatim(self, command, message):
        request = build_request(command)
        outcome = validate_response(f"{request.strip()}\nERR {message}\n", request)
        assert outcome == Failure(message)

    @given(command=commands, echo=tokens)
    def test_any_other_echo_rejected(self, command, echo):
        request = build_request(command)
        if echo == command.value:
            return
        with pytest.raises(InvalidResponse):
            validate_response(f"{echo}\nOK\n", request)


# =============================================================================
# Client
# =============================================================================


class TestClientInvariants:

    @given(value=degrees)
    def test_vertical_argument_three_decimals(self, value):
        transport = MockTransport()
        transport.queue_status("OK")
        Rotator(transport).set_position_vertical(value)
        assert transport.sent_lines == [f"DVER {value:.3f}"]

    @given(value=degrees)
    def test_horizontal_argument_negated(self, value):
        transport = MockTransport()
        transport.queue_status("OK")
        Rotator(transport).set_position_horizontal(value)
        assert transport.sent_lines == [f"DHOR {-value:.3f}"]

    @given(vertical=degrees, horizontal=degrees)
    def test_horizontal_round_trip(self, vertical, horizontal):
        """Setting then reading back gives the host convention on both axes."""
        transport = MockTransport()
        rotator = Rotator(transport)
        rotator.calibrate_vertical()
        rotator.calibrate_horizontal()

        rotator.set_position_vertical(vertical)
        rotator.set_position_horizontal(horizontal)
        pos = rotator.position()

        assert pos.vertical == pytest.approx(vertical, abs=1e-3)
        assert pos.horizontal == pytest.approx(horizontal, abs=1e-3)
