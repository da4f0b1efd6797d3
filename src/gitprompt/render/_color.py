"""Prompt text coloring.

Supports plain text, ANSI SGR escapes (rendered through rich styles) and
zsh prompt escapes.
"""

from typing import Final

from rich.color import ColorSystem
from rich.style import Style

from gitprompt.enums import ColorMode

_ZSH_PERCENT: Final = "%"


def escape(text: str, mode: ColorMode) -> str:
    """Escape literal text for the target shell.

    zsh expands `%` sequences in prompts, so every literal `%` is doubled.
    Other modes return the text unchanged.

    Args:
        text: Literal text.
        mode: Coloring mode.

    Returns:
        Text safe to embed in the prompt.

    Example:
        >>> escape("100%", ColorMode.ZSH)
        '100%%'
    """
    if mode is ColorMode.ZSH:
        return text.replace(_ZSH_PERCENT, _ZSH_PERCENT * 2)
    return text


def paint(text: str, color: str, mode: ColorMode) -> str:
    """Escape and color one part of the prompt.

    Args:
        text: Literal text. Empty text is returned as-is, without escapes.
        color: Color name understood by both rich and zsh.
        mode: Coloring mode.

    Returns:
        The escaped, colored text.

    Example:
        >>> paint("main", "blue", ColorMode.ZSH)
        '%F{blue}main%f'
        >>> paint("main", "blue", ColorMode.NONE)
        'main'
    """
    if not text:
        return text
    escaped = escape(text, mode)
    match mode:
        case ColorMode.ANSI:
            return Style(color=color).render(
                escaped, color_system=ColorSystem.STANDARD
            )
        case ColorMode.ZSH:
            return f"%F{{{color}}}{escaped}%f"
        case _:
            return escaped
