"""Distributor lifecycle models — state enum, transition table, fan-out policy."""

from __future__ import annotations

from enum import Enum


class DistributorState(str, Enum):
    """Lifecycle state of a distributor."""

    UNSEALED = "unsealed"
    SEALED = "sealed"
    CLOSED = "closed"


class FanoutPolicy(str, Enum):
    """How a distributor reacts when a sink fails mid fan-out."""

    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


# Valid state transitions, enforced by Distributor.
# CLOSED has no outgoing transitions in terminal-close mode.
VALID_TRANSITIONS: dict[DistributorState, set[DistributorState]] = {
    DistributorState.UNSEALED: {DistributorState.SEALED},
    DistributorState.SEALED: {DistributorState.UNSEALED, DistributorState.CLOSED},
    DistributorState.CLOSED: set(),  # terminal
}

# Transitions added when terminal_close is disabled: a closed distributor
# behaves exactly like an unsealed one.
REOPEN_TRANSITIONS: dict[DistributorState, set[DistributorState]] = {
    DistributorState.CLOSED: {DistributorState.SEALED, DistributorState.UNSEALED},
}


def allowed_transitions(
    current: DistributorState, *, terminal_close: bool = True
) -> set[DistributorState]:
    """Return the set of states reachable from *current*."""
    allowed = set(VALID_TRANSITIONS.get(current, set()))
    if not terminal_close:
        allowed |= REOPEN_TRANSITIONS.get(current, set())
    return allowed
