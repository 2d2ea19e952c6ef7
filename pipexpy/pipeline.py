"""Running a chain of commands connected by pipes, between an input and an output file."""

from __future__ import annotations

import enum
import os
import subprocess
import sys
from collections.abc import Mapping, Sequence

from .pathsearch import resolve_command, split_words

__all__ = [
    "MAX_COMMANDS",
    "PipelineError",
    "CommandNotFoundError",
    "Pipeline",
    "run_pipeline",
]

MAX_COMMANDS = 1024
_OUTFILE_MODE = 0o644


class PipelineError(Exception):
    """A stage could not be started; ``status`` is the exit status it reports."""

    default_status = 1

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = self.default_status if status is None else status


class CommandNotFoundError(PipelineError):
    """No executable was found for a command."""

    default_status = 127


class _Position(enum.Enum):
    FIRST = "first"
    MIDDLE = "inter"
    LAST = "last"


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc)


class Pipeline:
    """Commands run left to right, each reading the previous one's output.

    The first command reads ``infile``; the last writes ``outfile``, which is
    truncated, or appended to when ``append`` is true.
    """

    def __init__(
        self,
        commands: Sequence[str],
        infile: str | os.PathLike,
        outfile: str | os.PathLike,
        append: bool = False,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        commands = list(commands)
        if len(commands) < 2:
            raise ValueError("a pipeline needs at least two commands")
        if len(commands) > MAX_COMMANDS:
            raise ValueError(f"a pipeline holds at most {MAX_COMMANDS} commands")
        self.commands = commands
        self.infile = infile
        self.outfile = outfile
        self.append = append
        self.environ = dict(os.environ if environ is None else environ)
        self.statuses: list[int] = []

    @staticmethod
    def _report(message: str) -> None:
        sys.stderr.write(f"{message}\n")
        sys.stderr.flush()

    def _open_infile(self) -> int | None:
        try:
            return os.open(self.infile, os.O_RDONLY)
        except OSError as exc:
            self._report(f"Infile not opening: {_describe(exc)}")
            return None

    def _open_outfile(self) -> int | None:
        flags = os.O_WRONLY | os.O_CREAT
        flags |= os.O_APPEND if self.append else os.O_TRUNC
        try:
            return os.open(self.outfile, flags, _OUTFILE_MODE)
        except OSError as exc:
            self._report(f"Outfile not opening: {_describe(exc)}")
            return None

    def _spawn(
        self,
        position: _Position,
        command: str,
        stdin: int,
        stdout: int,
    ) -> subprocess.Popen:
        label = position.value
        words = split_words(command, " ")
        if words is None or (position is _Position.FIRST and not words):
            raise PipelineError(f"Split {label} cmd failed")
        name = words[0] if words else None
        path = resolve_command(name, self.environ)
        if path is None:
            raise CommandNotFoundError(f"Not finding {label} cmd: {name or ''}")
        try:
            return subprocess.Popen(
                words,
                executable=path,
                stdin=stdin,
                stdout=stdout,
                env=self.environ,
            )
        except OSError as exc:
            raise PipelineError(f"Execve failed: {_describe(exc)}") from exc

    @staticmethod
    def _exit_status(process: subprocess.Popen) -> int:
        code = process.wait()
        return 128 - code if code < 0 else code

    def run(self) -> int:
        """Run every command and return the exit status of the last one."""
        count = len(self.commands)
        outcomes: list[subprocess.Popen | int] = []
        read_end = self._open_infile()
        out_fd = self._open_outfile()
        pending: list[int] = [fd for fd in (read_end, out_fd) if fd is not None]
        try:
            for index, command in enumerate(self.commands):
                if index == 0:
                    position = _Position.FIRST
                elif index == count - 1:
                    position = _Position.LAST
                else:
                    position = _Position.MIDDLE
                next_read: int | None = None
                if position is _Position.LAST:
                    write_end = out_fd
                else:
                    try:
                        next_read, write_end = os.pipe()
                    except OSError as exc:
                        raise PipelineError(
                            f"Error with pipe: {_describe(exc)}"
                        ) from exc
                    pending.extend((next_read, write_end))
                try:
                    if read_end is None or write_end is None:
                        # The file could not be opened; that was already reported.
                        outcomes.append(PipelineError.default_status)
                    else:
                        outcomes.append(
                            self._spawn(position, command, read_end, write_end)
                        )
                except PipelineError as exc:
                    self._report(str(exc))
                    outcomes.append(exc.status)
                finally:
                    for fd in (read_end, write_end):
                        if fd is not None and fd in pending:
                            pending.remove(fd)
                            os.close(fd)
                read_end = next_read
        finally:
            for fd in pending:
                os.close(fd)
            self.statuses = [
                outcome if isinstance(outcome, int) else self._exit_status(outcome)
                for outcome in outcomes
            ]
        return self.statuses[-1]


def run_pipeline(
    commands: Sequence[str],
    infile: str | os.PathLike,
    outfile: str | os.PathLike,
    append: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Build a :class:`Pipeline` and run it, returning the last command's status."""
    return Pipeline(commands, infile, outfile, append, environ).run()