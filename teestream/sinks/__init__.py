"""Sink protocol for teestream fan-out.

Anything with ``write``, ``flush`` and ``close`` can be registered with a
Distributor: binary file objects, sockets wrapped with ``makefile("wb")``,
``io.BytesIO``, or the sinks in this package.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ByteSink(Protocol):
    """Protocol every distributor sink must satisfy.

    Each method may raise ``OSError`` (or a subclass); the distributor
    applies its fan-out policy to whatever the sink raises.
    """

    def write(self, data: bytes) -> Any:
        """Write *data* to the sink."""
        ...

    def flush(self) -> None:
        """Flush any buffered data."""
        ...

    def close(self) -> None:
        """Release the sink's underlying resource."""
        ...


def sink_name(sink: object) -> str:
    """Return a display name for *sink*, used in logs and error reports.

    Prefers an explicit ``sink_name`` attribute, then the ``name`` that
    file objects carry, then the type name.
    """
    explicit = getattr(sink, "sink_name", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    name = getattr(sink, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(sink).__name__
