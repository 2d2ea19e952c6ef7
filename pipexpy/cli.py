"""Command-line entry point: ``infile cmd1 ... cmdN outfile`` or a here-document form."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from .heredoc import write_heredoc
from .pipeline import MAX_COMMANDS, run_pipeline

__all__ = ["HEREDOC_KEYWORD", "HEREDOC_FILE", "UsageError", "Invocation", "parse_arguments", "main"]

HEREDOC_KEYWORD = "here_doc"
HEREDOC_FILE = ".heredoc_tmp"
_WRONG_COUNT = "Wrong number of arguments"


class UsageError(Exception):
    """The command line does not describe a pipeline."""


@dataclass(frozen=True)
class Invocation:
    """What the command line asks for.

    With a ``limiter`` the input is a here-document read from standard input
    and the output file is appended to; otherwise ``infile`` is read and the
    output file is truncated.
    """

    commands: tuple[str, ...]
    outfile: str
    infile: str | None = None
    limiter: str | None = None

    @property
    def heredoc(self) -> bool:
        return self.limiter is not None

    @property
    def append(self) -> bool:
        return self.heredoc


def parse_arguments(argv: Sequence[str]) -> Invocation:
    """Interpret the arguments that follow the program name."""
    args = list(argv)
    if not args:
        raise UsageError(_WRONG_COUNT)
    if args[0].startswith(HEREDOC_KEYWORD):
        if len(args) < 5:
            raise UsageError(_WRONG_COUNT)
        invocation = Invocation(
            commands=tuple(args[2:-1]), outfile=args[-1], limiter=args[1]
        )
    else:
        if len(args) < 4:
            raise UsageError(_WRONG_COUNT)
        invocation = Invocation(
            commands=tuple(args[1:-1]), outfile=args[-1], infile=args[0]
        )
    if len(invocation.commands) > MAX_COMMANDS:
        raise UsageError(f"At most {MAX_COMMANDS} commands are supported")
    return invocation


def _report(message: str) -> None:
    sys.stderr.write(f"{message}\n")
    sys.stderr.flush()


def _run_heredoc(invocation: Invocation) -> int:
    try:
        write_heredoc(invocation.limiter, HEREDOC_FILE)
    except OSError as exc:
        _report(f"HEREDOC OPENING FAILED: {exc.strerror or exc}")
    try:
        return run_pipeline(
            invocation.commands, HEREDOC_FILE, invocation.outfile, append=True
        )
    finally:
        try:
            os.unlink(HEREDOC_FILE)
        except FileNotFoundError:
            pass


def main(argv: Sequence[str] | None = None) -> int:
    """Run the pipeline described by ``argv`` and return its exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        invocation = parse_arguments(argv)
    except UsageError as exc:
        _report(str(exc))
        return 1
    if invocation.heredoc:
        return _run_heredoc(invocation)
    return run_pipeline(
        invocation.commands, invocation.infile, invocation.outfile, append=False
    )


if __name__ == "__main__":
    sys.exit(main())