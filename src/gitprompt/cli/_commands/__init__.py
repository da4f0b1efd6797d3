"""gitprompt CLI commands."""
# pyright: reportUnusedCallResult=false

from __future__ import annotations

from typing import TYPE_CHECKING

from ._config import app as config_app
from ._render import render_prompt
from ._status import show_status

if TYPE_CHECKING:
    from cyclopts import App

__all__ = ["config_app", "register_commands", "render_prompt", "show_status"]


def register_commands(app: App) -> None:
    app.default(render_prompt)
    app.command(show_status, name="status")
    app.command(config_app)
