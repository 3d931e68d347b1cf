"""Local file sink — writes the byte stream to a file on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)


class LocalFileSink:
    """Writes bytes to a local file opened in binary mode.

    Parameters
    ----------
    path:
        Target file. Parent directories are created as needed.
    append:
        Append to an existing file instead of truncating it.
    """

    def __init__(self, path: Path | str, *, append: bool = False) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fh: BinaryIO = open(self._path, "ab" if append else "wb")
        logger.debug("LocalFileSink: opened %s (append=%s)", self._path, append)

    @property
    def sink_name(self) -> str:
        return f"file:{self._path}"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._fh.closed

    def write(self, data: bytes) -> int:
        return self._fh.write(data)

    def flush(self) -> None:
        self._fh.flush()

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()
            logger.debug("LocalFileSink: closed %s", self._path)
