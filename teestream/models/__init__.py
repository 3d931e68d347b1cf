"""teestream data models — Pydantic v2 where they carry data, enums for state."""

from teestream.models.registration import SinkRegistration
from teestream.models.state import (
    VALID_TRANSITIONS,
    DistributorState,
    FanoutPolicy,
    allowed_transitions,
)

__all__ = [
    "VALID_TRANSITIONS",
    "DistributorState",
    "FanoutPolicy",
    "SinkRegistration",
    "allowed_transitions",
]
