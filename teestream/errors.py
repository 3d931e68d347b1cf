"""Exception hierarchy for teestream.

``InvalidStateError`` covers lifecycle misuse of a distributor.
``SinkFanoutError`` is only raised in best-effort mode, where every sink
is attempted and the failures of one call are reported together.
Under the default fail-fast policy the sink's own exception propagates
unchanged.
"""

from __future__ import annotations


class TeeStreamError(Exception):
    """Base class for every teestream error."""


class InvalidStateError(TeeStreamError, RuntimeError):
    """Raised when an operation is attempted in the wrong lifecycle state."""


class SinkFanoutError(TeeStreamError, OSError):
    """Raised when one or more sinks fail during a best-effort fan-out.

    Parameters
    ----------
    operation:
        The distributor operation that was being fanned out
        (``"write"``, ``"flush"`` or ``"close"``).
    failures:
        ``(sink_name, exception)`` pairs, in fan-out order.
    succeeded:
        Names of the sinks that completed the operation.
    """

    def __init__(
        self,
        operation: str,
        failures: list[tuple[str, BaseException]],
        succeeded: list[str] | None = None,
    ) -> None:
        self.operation = operation
        self.failures = list(failures)
        self.succeeded = list(succeeded or [])
        detail = "; ".join(f"{name}: {exc}" for name, exc in self.failures)
        super().__init__(
            f"{len(self.failures)} sink(s) failed during {operation} "
            f"({len(self.succeeded)} succeeded): {detail}"
        )
