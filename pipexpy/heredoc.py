"""Collecting here-document input up to a limiter line."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from typing import IO

from .lines import DEFAULT_BUFFER_SIZE, LineReader

__all__ = ["PROMPT", "read_heredoc", "write_heredoc"]

PROMPT = "heredoc> "


def _show_prompt(out) -> None:
    try:
        out.write(PROMPT)
    except TypeError:
        out.write(PROMPT.encode())
    out.flush()


def _is_limiter(line, limiter: str) -> bool:
    if isinstance(line, (bytes, bytearray)):
        marker = os.fsencode(limiter) + b"\n"
    else:
        marker = limiter + "\n"
    return line.startswith(marker)


def read_heredoc(limiter: str, stream: IO | None = None, prompt_stream: IO | None = None) -> Iterator:
    """Yield input lines until one that is the limiter followed by a newline.

    A prompt is written before every line is read. The limiter line itself
    is not yielded; end of input also ends the document.
    """
    if stream is None:
        stream = sys.stdin.buffer
    if prompt_stream is None:
        prompt_stream = sys.stdout
    reader = LineReader(stream, DEFAULT_BUFFER_SIZE)
    while True:
        _show_prompt(prompt_stream)
        line = reader.read_line()
        if line is None or _is_limiter(line, limiter):
            return
        yield line


def write_heredoc(
    limiter: str,
    path: str | os.PathLike,
    stream: IO | None = None,
    prompt_stream: IO | None = None,
) -> int:
    """Write the here-document to ``path``, truncating it, and return the bytes written."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    written = 0
    with os.fdopen(fd, "wb") as out:
        for line in read_heredoc(limiter, stream, prompt_stream):
            data = line.encode() if isinstance(line, str) else bytes(line)
            out.write(data)
            written += len(data)
    return written