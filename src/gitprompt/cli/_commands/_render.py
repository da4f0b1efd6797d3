# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""Default command: print the prompt line."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from gitprompt.cli._context import CLIContext
from gitprompt.cli._shared import ExitCode, exit_with_error
from gitprompt.exceptions import StateReadError
from gitprompt.render import render
from gitprompt.status import collect_status


def render_prompt(
    path: Annotated[
        Path | None,
        Parameter(help="Directory to describe (default: current directory)"),
    ] = None,
    /,
) -> None:
    """Print the prompt line for the repository enclosing PATH.

    Prints nothing outside a repository. On a read failure nothing is
    written to stdout and the exit status is non-zero.

    Args:
        path: Directory to start the repository search from.
    """
    ctx = CLIContext.get_current()

    try:
        status = collect_status(path, settings=ctx.config.status, logger=ctx.logger)
    except StateReadError as e:
        exit_with_error(str(e), ExitCode.IO_ERROR, console=ctx.error_console)

    line = render(status, ctx.config.render)
    if line:
        print(line)  # noqa: T201
