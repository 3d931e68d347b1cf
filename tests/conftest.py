"""Shared test fixtures for teestream."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from teestream.config import TeeStreamConfig
from teestream.core.distributor import Distributor
from teestream.models.state import FanoutPolicy


class RecordingSink:
    """A sink that records every call into a log shared across sinks.

    ``fail_on`` names the operations (``"write"``, ``"flush"``,
    ``"close"``) that raise ``OSError`` instead of succeeding.
    """

    def __init__(
        self,
        name: str,
        call_log: list[tuple[str, str, bytes | None]],
        fail_on: set[str] | None = None,
    ) -> None:
        self.sink_name = name
        self._log = call_log
        self._fail_on = fail_on or set()
        self.closed = False
        self.calls: list[tuple[str, bytes | None]] = []

    def _record(self, op: str, data: bytes | None = None) -> None:
        if op in self._fail_on:
            raise OSError(f"{self.sink_name}: simulated {op} failure")
        self.calls.append((op, data))
        self._log.append((self.sink_name, op, data))

    def write(self, data: bytes) -> int:
        if self.closed:
            raise ValueError(f"{self.sink_name}: write to closed sink")
        self._record("write", bytes(data))
        return len(data)

    def flush(self) -> None:
        self._record("flush")

    def close(self) -> None:
        self._record("close")
        self.closed = True

    def count(self, op: str) -> int:
        return sum(1 for recorded, _ in self.calls if recorded == op)


@pytest.fixture
def config() -> TeeStreamConfig:
    """Provide a config with defaults, isolated from TEESTREAM_* variables."""
    return TeeStreamConfig(
        _env_file=None,
        terminal_close=True,
        fanout_policy=FanoutPolicy.FAIL_FAST,
    )


@pytest.fixture
def distributor(config: TeeStreamConfig) -> Distributor:
    """Provide a fresh, unsealed Distributor using default behaviour."""
    return Distributor(config=config)


@pytest.fixture
def call_log() -> list[tuple[str, str, bytes | None]]:
    """Provide the call log shared by all sinks built in one test."""
    return []


@pytest.fixture
def make_sink(
    call_log: list[tuple[str, str, bytes | None]],
) -> Callable[..., RecordingSink]:
    """Factory fixture: build a RecordingSink writing to the shared call log."""

    def _factory(name: str = "sink", fail_on: set[str] | None = None) -> RecordingSink:
        return RecordingSink(name, call_log, fail_on=fail_on)

    return _factory
