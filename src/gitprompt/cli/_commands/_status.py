# ruff: noqa: TC003, A002  # Path needed at runtime for cyclopts parameter parsing
"""Status command: print the aggregated repository status."""

from pathlib import Path
from typing import Annotated, Literal

from cyclopts import Parameter
from rich.table import Table

from gitprompt.cli._context import CLIContext
from gitprompt.cli._shared import ExitCode, exit_with_error, format_json
from gitprompt.exceptions import StateReadError
from gitprompt.status import Status, collect_status


def _status_table(status: Status) -> Table:
    data = status.to_dict()
    head = data["head"]
    tracking = data["tracking"]
    changes = data["changes"]

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    if head["state"] == "detached":
        table.add_row("head", f"detached at {head['commit']}")
    else:
        table.add_row("head", f"{head['name']} ({head['state']})")

    if tracking is None:
        table.add_row("upstream", "[dim]none[/dim]")
    else:
        table.add_row(
            "upstream",
            f"{tracking['upstream']} (ahead {tracking['ahead']}, "
            f"behind {tracking['behind']})",
        )

    for name, count in changes.items():
        table.add_row(name, str(count))
    table.add_row("stash", str(data["stash_count"]))
    table.add_row("operation", data["operation"])
    return table


def show_status(
    path: Annotated[
        Path | None,
        Parameter(help="Directory to describe (default: current directory)"),
    ] = None,
    /,
    *,
    format: Annotated[
        Literal["text", "json"],
        Parameter(name=["--format", "-f"], help="Output format (text, json)"),
    ] = "text",
) -> None:
    """Show the aggregated status of the repository enclosing PATH.

    Args:
        path: Directory to start the repository search from.
        format: Output format (text, json).
    """
    ctx = CLIContext.get_current()

    try:
        status = collect_status(path, settings=ctx.config.status, logger=ctx.logger)
    except StateReadError as e:
        exit_with_error(str(e), ExitCode.IO_ERROR, console=ctx.error_console)

    if format == "json":
        print(format_json(status.to_dict() if status is not None else None))  # noqa: T201
        return

    if status is None:
        ctx.console.print("[dim]Not a git repository[/dim]")
        return

    ctx.console.print(_status_table(status))
