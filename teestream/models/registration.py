"""Sink registration model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class SinkRegistration(BaseModel):
    """A sink handle paired with its close policy.

    ``close_with_distributor=False`` marks a survivable sink: the
    distributor forwards writes to it but never closes it.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    sink: Any
    close_with_distributor: bool = True
    sink_name: str = ""
