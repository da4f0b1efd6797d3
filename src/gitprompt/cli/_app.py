"""The command-line interface for gitprompt."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from gitprompt.config import safe_load_config
from gitprompt.enums import ColorMode
from gitprompt.exceptions import ConfigLoadError, ConfigValidationError
from gitprompt.utils import create_logger, create_null_logger

from ._commands import register_commands
from ._context import CLIContext
from ._shared import ExitCode, exit_with_error

_HELP = "Print a one-line git status summary for shell prompts."


def _build_overrides(
    *,
    color: ColorMode | None,
    zsh: bool,
    hide_clean: bool | None,
    separator: str | None,
) -> dict[str, object] | None:
    """Translate launcher flags into a render section override.

    Returns:
        CLI overrides for Config.load(), or None when no flag was given.
    """
    render: dict[str, object] = {}
    if zsh:
        render["color"] = ColorMode.ZSH.value
    if color is not None:
        render["color"] = color.value
    if hide_clean is not None:
        render["hide_clean_counts"] = hide_clean
    if separator is not None:
        render["separator"] = separator
    return {"render": render} if render else None


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="gitprompt",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _launcher(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        color: Annotated[
            ColorMode | None,
            Parameter(name="--color", help="Coloring mode (none, ansi, zsh)"),
        ] = None,
        zsh: Annotated[
            bool, Parameter(name="--zsh", negative=(), help="Shorthand for --color zsh")
        ] = False,
        hide_clean: Annotated[
            bool | None,
            Parameter(
                name="--hide-clean",
                negative="--show-clean",
                help="Omit zero counts (--show-clean prints them)",
            ),
        ] = None,
        separator: Annotated[
            str | None,
            Parameter(
                name="--separator",
                allow_leading_hyphen=True,
                help="Text placed between segments",
            ),
        ] = None,
    ) -> None:
        """Launch gitprompt with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            config: Explicit path to config file.
            color: Coloring mode for the prompt line.
            zsh: Emit zsh prompt escapes.
            hide_clean: Omit or print zero counts.
            separator: Text placed between segments.
        """
        cli_overrides = _build_overrides(
            color=color, zsh=zsh, hide_clean=hide_clean, separator=separator
        )

        try:
            loaded_config, config_error = safe_load_config(
                config_path=config,
                cli_overrides=cli_overrides,
            )
        except ConfigValidationError as e:
            exit_with_error(str(e), ExitCode.VALIDATION_ERROR, console=error_console)
        except ConfigLoadError as e:
            exit_with_error(str(e), ExitCode.LOAD_ERROR, console=error_console)

        logging_config = loaded_config.logging
        try:
            cli_logger = create_logger(
                level=logging_config.level.value,
                log_format=logging_config.format.value,  # type: ignore[arg-type]
                log_file=logging_config.file,
                max_bytes=logging_config.max_bytes,
                backup_count=logging_config.backup_count,
            )
        except OSError as e:
            error_console.print(
                f"[yellow]Warning:[/yellow] logging disabled: {e}",
                markup=True,
                highlight=False,
            )
            cli_logger = create_null_logger()
        if config_error is not None:
            cli_logger.warning("config_fallback", error=config_error)

        ctx = CLIContext(
            config=loaded_config,
            config_error=config_error,
            logger=cli_logger,
            console=console,
            error_console=error_console,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `gitprompt` CLI."""
    app = create_app()
    app.meta()


if __name__ == "__main__":
    main()
