"""In-memory sink — keeps everything written to it, even after close.

Useful for capturing a copy of a stream alongside real outputs, and for
inspecting exactly which calls a distributor made.
"""

from __future__ import annotations


class MemorySink:
    """Accumulates written bytes in memory.

    Behaves like a closed file once ``close()`` has been called: writes
    and flushes raise ``ValueError``. ``getvalue()`` keeps working so the
    captured bytes outlive the sink.
    """

    def __init__(self, name: str = "memory") -> None:
        self._name = name
        self._buffer = bytearray()
        self.closed = False
        self.write_calls: list[bytes] = []
        self.flush_count = 0
        self.close_count = 0

    @property
    def sink_name(self) -> str:
        return self._name

    def write(self, data: bytes) -> int:
        if self.closed:
            raise ValueError(f"write to closed sink {self._name!r}")
        chunk = bytes(data)
        self._buffer.extend(chunk)
        self.write_calls.append(chunk)
        return len(chunk)

    def flush(self) -> None:
        if self.closed:
            raise ValueError(f"flush of closed sink {self._name!r}")
        self.flush_count += 1

    def close(self) -> None:
        self.close_count += 1
        self.closed = True

    def getvalue(self) -> bytes:
        """Return every byte written so far."""
        return bytes(self._buffer)
