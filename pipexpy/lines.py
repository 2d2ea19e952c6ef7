"""Reading a stream one line at a time through a fixed-size read buffer."""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO, AnyStr, Generic

__all__ = ["DEFAULT_BUFFER_SIZE", "LineReader"]

DEFAULT_BUFFER_SIZE = 5


class LineReader(Generic[AnyStr]):
    """Return lines from ``stream``, each ending with its newline if it had one.

    Data is pulled with ``stream.read(buffer_size)``; whatever was read past
    the end of a line is kept for the next call.
    """

    def __init__(self, stream: IO[AnyStr], buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self._buffer_size = buffer_size
        self._stash: AnyStr | None = None

    def read_line(self) -> AnyStr | None:
        """Return the next line, or ``None`` once the stream is exhausted."""
        stash = self._stash
        while True:
            if stash:
                newline = b"\n" if isinstance(stash, (bytes, bytearray)) else "\n"
                end = stash.find(newline)
                if end >= 0:
                    self._stash = stash[end + 1:]
                    return stash[: end + 1]
            try:
                chunk = self._stream.read(self._buffer_size)
            except OSError:
                self._stash = None
                raise
            if not chunk:
                self._stash = None
                return stash if stash else None
            stash = chunk if stash is None else stash + chunk

    def __iter__(self) -> Iterator[AnyStr]:
        while (line := self.read_line()) is not None:
            yield line