# pyright: reportUnusedFunction=false
# ruff: noqa: A002
"""Config commands for inspecting gitprompt configuration."""

from typing import Annotated, Literal

from cyclopts import App, Parameter

from gitprompt.cli._context import CLIContext
from gitprompt.cli._shared import format_json, format_toml

app = App(name="config", help="Inspect gitprompt configuration.")


@app.command(name="show")
def _show(
    *,
    format: Annotated[
        Literal["toml", "json"],
        Parameter(name=["--format", "-f"], help="Output format (toml, json)"),
    ] = "toml",
    no_defaults: Annotated[
        bool,
        Parameter(name="--no-defaults", help="Exclude default values"),
    ] = False,
    show_sources: Annotated[
        bool,
        Parameter(name="--show-sources", help="List the sources that were read"),
    ] = False,
) -> None:
    """Display the effective configuration.

    Shows the configuration merged from CLI flags, environment variables,
    the config file and the built-in defaults.

    Args:
        format: Output format (toml, json).
        no_defaults: Exclude default values from output.
        show_sources: Print each source and whether it exists to stderr.
    """
    ctx = CLIContext.get_current()
    data = ctx.config.to_dict(include_defaults=not no_defaults)

    if show_sources:
        for source in ctx.config.sources:
            location = str(source.path) if source.path else "-"
            state = "found" if source.exists else "missing"
            ctx.error_console.print(
                f"{source.name.value:<8} {state:<8} {location}", highlight=False
            )

    match format:
        case "json":
            output = format_json(data)
        case _:
            output = format_toml(data)

    if output.strip():
        print(output.rstrip())  # noqa: T201
