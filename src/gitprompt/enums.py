"""Enumeration types for gitprompt."""

from enum import StrEnum
from typing import Final


class Operation(StrEnum):
    """Multi-step repository operations that can be paused mid-flight."""

    NONE = "none"
    MERGE = "merge"
    REBASE = "rebase"
    CHERRY_PICK = "cherry_pick"
    BISECT = "bisect"


class ColorMode(StrEnum):
    """How rendered prompt segments are colored."""

    NONE = "none"
    ANSI = "ansi"
    ZSH = "zsh"


# Earlier entries win when several markers are present at once.
DEFAULT_OPERATION_PRECEDENCE: Final[tuple[Operation, ...]] = (
    Operation.REBASE,
    Operation.CHERRY_PICK,
    Operation.BISECT,
    Operation.MERGE,
)
