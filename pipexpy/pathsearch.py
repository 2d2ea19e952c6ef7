"""Splitting command strings and locating executables on the search path."""

from __future__ import annotations

import os
from collections.abc import Mapping

__all__ = ["split_words", "find_path", "resolve_command"]


def split_words(text: str | None, sep: str) -> list[str] | None:
    """Split ``text`` on every ``sep`` and drop the empty pieces.

    Returns ``None`` when there is no text at all (``None`` or empty),
    and an empty list when the text holds only separators.
    """
    if not text:
        return None
    return [word for word in text.split(sep) if word]


def find_path(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the search path taken from the first variable whose name starts with PATH.

    The value is whatever follows the first five characters of the
    ``NAME=value`` entry, so for ``PATH`` it is exactly the value.
    """
    if environ is None:
        environ = os.environ
    for key, value in environ.items():
        entry = f"{key}={value}"
        if entry.startswith("PATH"):
            return entry[5:]
    return None


def resolve_command(name: str | None, environ: Mapping[str, str] | None = None) -> str | None:
    """Return the path of an executable for ``name``, or ``None`` if none is found.

    A name that is itself executable is returned unchanged; otherwise each
    directory of the search path is tried in order.
    """
    if not name:
        return None
    if os.access(name, os.X_OK):
        return name
    search = find_path(environ)
    if search is None:
        return None
    directories = split_words(search, ":")
    if directories is None:
        return None
    for directory in directories:
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None