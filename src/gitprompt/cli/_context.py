# pyright: reportUnusedCallResult=false
"""CLI context for global state management.

The CLIContext is set once by the launcher after configuration is loaded and
made available to all commands via contextvars.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.console import Console

from gitprompt.config import Config

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

_current_cli_context: contextvars.ContextVar[CLIContext | None] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and consoles.

    Attributes:
        config: Loaded configuration object.
        config_error: Error message if config loading fell back to defaults.
        logger: Structured logger for CLI commands (writes to file only).
        console: Rich console for command output.
        error_console: Rich console for diagnostics on stderr.
    """

    config: Config = field(repr=False)
    config_error: str | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)
    console: Console = field(default_factory=Console, repr=False)
    error_console: Console = field(
        default_factory=lambda: Console(stderr=True), repr=False
    )

    @classmethod
    def get_current(cls) -> CLIContext:
        """Get current active CLIContext, or create a default if not set.

        Returns:
            The currently active CLIContext, or a default instance if none is set.
        """
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: CLIContext) -> None:
        """Set the current active CLIContext.

        Args:
            ctx: The CLIContext to set as current.
        """
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context.

        This is primarily useful for testing to ensure a clean state between tests.
        """
        _current_cli_context.set(None)
