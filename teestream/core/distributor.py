"""Distributor — fans every write, flush and close out to all registered sinks.

Lifecycle: sinks are registered while the distributor is UNSEALED,
``seal(True)`` opens it for writing and forbids further registration,
``close()`` closes the sinks it owns and ends the write phase.

Sinks are visited in registration order. Under the default fail-fast
policy the first sink error propagates unchanged and the remaining sinks
are skipped for that call; already-applied writes are not rolled back.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from types import TracebackType
from typing import Any

from teestream.config import TeeStreamConfig
from teestream.errors import InvalidStateError, SinkFanoutError
from teestream.models.registration import SinkRegistration
from teestream.models.state import (
    DistributorState,
    FanoutPolicy,
    allowed_transitions,
)
from teestream.sinks import ByteSink, sink_name

logger = logging.getLogger(__name__)


class Distributor:
    """Forwards a byte stream synchronously to every registered sink.

    Parameters
    ----------
    terminal_close:
        When ``True`` (the default) a closed distributor stays closed:
        ``seal()`` is a no-op and ``register()`` fails. When ``False`` a
        closed distributor behaves like an unsealed one, so sinks may be
        registered and the distributor sealed again.
    fanout_policy:
        ``FAIL_FAST`` propagates the first sink error immediately.
        ``BEST_EFFORT`` attempts every sink and raises a single
        ``SinkFanoutError`` listing all failures.
    config:
        Source of defaults for the arguments above. A fresh
        ``TeeStreamConfig`` is read from the environment when omitted.

    Usage
    -----
    >>> distributor = Distributor()
    >>> distributor.register(log_file)
    >>> distributor.register(sys.stdout.buffer, close_with_distributor=False)
    >>> distributor.seal(True)
    >>> distributor.write(b"payload")
    >>> distributor.close()
    """

    def __init__(
        self,
        *,
        terminal_close: bool | None = None,
        fanout_policy: FanoutPolicy | str | None = None,
        config: TeeStreamConfig | None = None,
    ) -> None:
        cfg = config or TeeStreamConfig()
        self._terminal_close = (
            cfg.terminal_close if terminal_close is None else terminal_close
        )
        self._policy = (
            cfg.fanout_policy if fanout_policy is None else FanoutPolicy(fanout_policy)
        )
        self._lock = threading.RLock()
        self._state = DistributorState.UNSEALED
        # Fan-out order, plus id(sink) -> position for identity de-duplication.
        self._registrations: list[SinkRegistration] = []
        self._index: dict[int, int] = {}

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> DistributorState:
        return self._state

    @property
    def writable(self) -> bool:
        """Whether the distributor is sealed for writing."""
        return self._state is DistributorState.SEALED

    @property
    def closed(self) -> bool:
        return self._state is DistributorState.CLOSED

    @property
    def fanout_policy(self) -> FanoutPolicy:
        return self._policy

    @property
    def terminal_close(self) -> bool:
        return self._terminal_close

    @property
    def registrations(self) -> tuple[SinkRegistration, ...]:
        """Return the registrations in fan-out order."""
        with self._lock:
            return tuple(self._registrations)

    def close_policy(self, sink: object) -> bool:
        """Return the ``close_with_distributor`` flag registered for *sink*.

        Raises
        ------
        KeyError
            If *sink* is not registered.
        """
        with self._lock:
            position = self._index.get(id(sink))
            if position is None:
                raise KeyError(f"Sink {sink_name(sink)} is not registered")
            return self._registrations[position].close_with_distributor

    def __contains__(self, sink: object) -> bool:
        return id(sink) in self._index

    def __len__(self) -> int:
        return len(self._registrations)

    def __repr__(self) -> str:
        return (
            f"<Distributor state={self._state.value} sinks={len(self._registrations)} "
            f"policy={self._policy.value}>"
        )

    # ------------------------------------------------------------------
    # Configuration phase
    # ------------------------------------------------------------------

    def register(
        self, sink: ByteSink, close_with_distributor: bool = True
    ) -> SinkRegistration:
        """Register *sink* to receive every forwarded operation.

        Re-registering the same sink object replaces its close policy and
        keeps its position in the fan-out order.

        Raises
        ------
        InvalidStateError
            If the distributor is sealed for writing, or closed in
            terminal-close mode.
        ValueError
            If *sink* is the distributor itself.
        TypeError
            If *sink* lacks ``write``, ``flush`` or ``close``.
        """
        with self._lock:
            if self._state is DistributorState.SEALED:
                raise InvalidStateError(
                    "Distributor cannot register sinks once sealed for writing"
                )
            if self._state is DistributorState.CLOSED and self._terminal_close:
                raise InvalidStateError(
                    "Distributor is closed and cannot register further sinks"
                )
            if sink is self:
                raise ValueError("Distributor cannot be registered as its own sink")
            if not isinstance(sink, ByteSink):
                raise TypeError(
                    f"{type(sink).__name__} is not a sink: write(), flush() and close() are required"
                )

            registration = SinkRegistration(
                sink=sink,
                close_with_distributor=bool(close_with_distributor),
                sink_name=sink_name(sink),
            )
            position = self._index.get(id(sink))
            if position is None:
                self._index[id(sink)] = len(self._registrations)
                self._registrations.append(registration)
                logger.info(
                    "Registered sink: %s (close_with_distributor=%s)",
                    registration.sink_name,
                    registration.close_with_distributor,
                )
            else:
                self._registrations[position] = registration
                logger.debug(
                    "Replaced close policy for sink %s: close_with_distributor=%s",
                    registration.sink_name,
                    registration.close_with_distributor,
                )
            return registration

    def seal(self, writable: bool) -> None:
        """Set the write mode directly.

        ``seal(True)`` opens the distributor for writing and locks the
        registry; ``seal(False)`` returns a sealed distributor to the
        registration phase. Never raises: on a closed distributor in
        terminal-close mode the call is logged and ignored.
        """
        target = DistributorState.SEALED if writable else DistributorState.UNSEALED
        with self._lock:
            current = self._state
            if current is target:
                return
            if target not in allowed_transitions(
                current, terminal_close=self._terminal_close
            ):
                logger.warning(
                    "Ignoring seal(%s): distributor is %s", writable, current.value
                )
                return
            self._state = target
            logger.debug("Distributor %s -> %s", current.value, target.value)

    # ------------------------------------------------------------------
    # Write phase
    # ------------------------------------------------------------------

    def write(
        self,
        data: int | bytes | bytearray | memoryview,
        offset: int | None = None,
        length: int | None = None,
    ) -> int:
        """Forward *data* to every sink, in registration order.

        *data* is either a single byte given as an ``int`` (only its low
        8 bits are used) or a bytes-like object. ``offset`` and ``length``
        select a slice of a bytes-like object.

        Returns the number of bytes forwarded to each sink.

        Raises
        ------
        InvalidStateError
            If the distributor is not sealed for writing. No sink is written.
        TypeError
            If *data* is neither an ``int`` nor bytes-like.
        ValueError
            If ``offset``/``length`` fall outside *data*. No sink is written.
        """
        with self._lock:
            self._require_writable("cannot be written to before being sealed")
            payload, size = _as_payload(data, offset, length)
            self._fanout("write", self._registrations, lambda sink: sink.write(payload))
            return size

    def flush(self) -> None:
        """Flush every sink, in registration order."""
        with self._lock:
            self._require_writable("cannot flush sinks before being sealed")
            self._fanout("flush", self._registrations, lambda sink: sink.flush())

    def close(self) -> None:
        """Close every sink registered with ``close_with_distributor=True``.

        Survivable sinks are left open. The distributor is CLOSED
        afterwards and rejects further writes and closes.

        Under fail-fast, a sink close error propagates before the
        distributor is marked closed; sinks after the failing one are not
        closed. Under best-effort the distributor is marked closed even
        when some sinks fail to close.
        """
        with self._lock:
            self._require_writable("has been closed or was never sealed")
            owned = [r for r in self._registrations if r.close_with_distributor]
            try:
                self._fanout("close", owned, lambda sink: sink.close())
            except SinkFanoutError:
                self._state = DistributorState.CLOSED
                raise
            self._state = DistributorState.CLOSED
            logger.info(
                "Distributor closed: %d sink(s) closed, %d left open",
                len(owned),
                len(self._registrations) - len(owned),
            )

    def __enter__(self) -> Distributor:
        with self._lock:
            if self._state is DistributorState.UNSEALED:
                self.seal(True)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        with self._lock:
            if self._state is DistributorState.SEALED:
                self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_writable(self, reason: str) -> None:
        if self._state is not DistributorState.SEALED:
            raise InvalidStateError(
                f"Distributor {reason} (state: {self._state.value})"
            )

    def _fanout(
        self,
        operation: str,
        registrations: Iterable[SinkRegistration],
        action: Callable[[Any], object],
    ) -> None:
        succeeded: list[str] = []
        failures: list[tuple[str, BaseException]] = []

        for registration in registrations:
            try:
                action(registration.sink)
            except Exception as exc:
                logger.error(
                    "Sink %s failed during %s: %s", registration.sink_name, operation, exc
                )
                if self._policy is FanoutPolicy.FAIL_FAST:
                    raise
                failures.append((registration.sink_name, exc))
            else:
                succeeded.append(registration.sink_name)

        if failures:
            logger.warning(
                "%s: %d/%d sinks succeeded, %d failed",
                operation,
                len(succeeded),
                len(succeeded) + len(failures),
                len(failures),
            )
            raise SinkFanoutError(operation, failures, succeeded)


def _as_payload(
    data: int | bytes | bytearray | memoryview,
    offset: int | None,
    length: int | None,
) -> tuple[bytes | bytearray | memoryview, int]:
    """Normalise the three write forms into ``(payload, byte_count)``."""
    if isinstance(data, int):
        if offset is not None or length is not None:
            raise TypeError("offset and length cannot be combined with a single byte")
        return bytes((data & 0xFF,)), 1

    view = memoryview(data).cast("B")
    size = view.nbytes
    if offset is None and length is None:
        return data, size

    start = 0 if offset is None else offset
    count = size - start if length is None else length
    if start < 0 or count < 0 or start + count > size:
        raise ValueError(
            f"offset={start}, length={count} out of range for {size} byte(s)"
        )
    return view[start : start + count], count
