"""Tests for lifecycle and registration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from teestream.models import (
    VALID_TRANSITIONS,
    DistributorState,
    SinkRegistration,
    allowed_transitions,
)
from teestream.sinks.memory import MemorySink


class TestTransitions:
    def test_unsealed_can_only_seal(self):
        assert VALID_TRANSITIONS[DistributorState.UNSEALED] == {DistributorState.SEALED}

    def test_sealed_can_unseal_or_close(self):
        assert VALID_TRANSITIONS[DistributorState.SEALED] == {
            DistributorState.UNSEALED,
            DistributorState.CLOSED,
        }

    def test_closed_is_terminal(self):
        assert allowed_transitions(DistributorState.CLOSED) == set()

    def test_closed_reopens_without_terminal_close(self):
        allowed = allowed_transitions(DistributorState.CLOSED, terminal_close=False)
        assert allowed == {DistributorState.SEALED, DistributorState.UNSEALED}

    def test_terminal_flag_does_not_change_other_states(self):
        for state in (DistributorState.UNSEALED, DistributorState.SEALED):
            assert allowed_transitions(state, terminal_close=False) == VALID_TRANSITIONS[state]


class TestSinkRegistration:
    def test_holds_sink_by_identity(self):
        sink = MemorySink()
        registration = SinkRegistration(sink=sink, sink_name="memory")
        assert registration.sink is sink
        assert registration.close_with_distributor is True

    def test_frozen(self):
        registration = SinkRegistration(sink=MemorySink(), close_with_distributor=False)
        with pytest.raises(ValidationError):
            registration.close_with_distributor = True
