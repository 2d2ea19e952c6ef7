# pipexpy

`pipexpy` runs a chain of commands the way a shell pipeline does. The first
command reads from a file and the last command writes to another file.

    pipexpy infile "cmd1 args" "cmd2 args" ... outfile

behaves like

    < infile cmd1 args | cmd2 args | ... > outfile

The here-document form

    pipexpy here_doc LIMITER "cmd1 args" "cmd2 args" ... outfile

behaves like

    cmd1 args << LIMITER | cmd2 args | ... >> outfile

In the here-document form, `pipexpy` prints a `heredoc> ` prompt on standard
output before each line. It then reads that line from standard input. Input
stops at a line that is exactly `LIMITER` followed by a newline, or at the end
of input. The text is stored in a file named `.heredoc_tmp` in the current
directory, which is removed when the pipeline has finished. The output file
is appended to instead of truncated. Any first argument that starts with
`here_doc` selects this form.

The same command can also be started as `python -m pipexpy.cli`.

## Installing

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## How commands are run

- At least two commands are needed. At most 1024 are accepted. With too few
  arguments, `pipexpy` prints `Wrong number of arguments` on standard error
  and exits with status 1.
- Each command string is split on spaces. Empty pieces are dropped.
- A command name that is itself an executable path is used as is. Otherwise,
  the first environment variable whose name begins with `PATH` is split on
  `:`, and each directory is tried in order.
- The output file is created with mode `0644` if it does not exist.
- If the input file cannot be opened, the first command is not run. If the
  output file cannot be opened, the last command is not run. In both cases
  the error is reported on standard error, that stage gets status 1, and the
  other stages still run.
- Some stages cannot be started:
  - A command that cannot be found gets status 127.
  - An empty command string, or one that cannot be executed, gets status 1.
  - Each such failure is reported on standard error.
- The exit status of `pipexpy` is that of the last command. A command killed
  by a signal counts as `128 + signal number`.

## Using it from Python

```python
from pipexpy.pipeline import run_pipeline

status = run_pipeline(
    ["grep error", "wc -l"],
    "app.log",
    "count.txt",
    False,
    None,
)
```

`run_pipeline(commands, infile, outfile, append, environ)` returns the exit
status of the last command. Its arguments:

- `append` selects appending to the output file instead of truncating it.
- `environ` is the environment mapping used to search for the executables and
  passed to the commands. The default is the current environment.

`pipexpy.pipeline.Pipeline` takes the same arguments. Its `run()` method
returns the last status and leaves every stage's status in the `statuses`
list. The constructor raises `ValueError` for fewer than two or more than
1024 commands. `run()` raises `PipelineError` if a pipe cannot be created. A
stage that cannot be started is reported and recorded in `statuses` rather
than raised. Each `PipelineError` carries a `status`, which is 127 for its
`CommandNotFoundError` subclass.

The command line is handled by `pipexpy.cli`:

- `parse_arguments(argv)` turns the arguments into an `Invocation`, or raises
  `UsageError`.
- `main(argv=None)` runs the pipeline and returns its status.

Smaller pieces are available on their own:

- `pipexpy.pathsearch.resolve_command(name, environ)` finds the executable
  for a command name. It returns `None` if none is found.
- `pipexpy.pathsearch.find_path(environ)` returns the search path.
- `pipexpy.pathsearch.split_words(text, sep)` splits a string and drops the
  empty pieces.
- `pipexpy.lines.LineReader(stream, buffer_size)` reads a text or binary
  stream line by line, keeping each line's newline. Lines come from
  `read_line()` or by iterating.
- `pipexpy.heredoc.read_heredoc(limiter, stream, prompt_stream)` yields
  here-document lines.
- `pipexpy.heredoc.write_heredoc(limiter, path, stream, prompt_stream)` stores
  the here-document lines in a file and returns the number of bytes written.
- `pipexpy.printf.format_printf(fmt, *args)` formats text with the `%c %s %d
  %i %u %x %X %p %%` conversions:
  - `%d`, `%i`, `%u`, `%x` and `%X` work on 32-bit values.
  - `%s` of `None` gives `(null)`, and `%p` of `None` or 0 gives `(nil)`.
  - An unknown conversion prints its character.
  - `print_formatted(fmt, *args, file=None)` writes the result and returns
    its length.

## What it does not do

`pipexpy` is not a shell. Command strings have no quoting, escaping, globbing,
variable expansion or redirection of their own. Each command is split on
spaces and run directly. Only one input file, one output file and one
here-document are supported per run.