"""Render configuration models.

This module provides the RenderConfig Pydantic model consumed by the
renderer, plus its color and operation label subsections.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from gitprompt.config._models._common import ColorName
from gitprompt.enums import ColorMode, Operation


class SegmentColors(BaseModel):
    """Color per rendered part, used when coloring is enabled."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    head: ColorName = "blue"
    ahead: ColorName = "green"
    behind: ColorName = "red"
    staged: ColorName = "green"
    unstaged: ColorName = "red"
    untracked: ColorName = "magenta"
    conflicted: ColorName = "red"
    operation: ColorName = "magenta"
    stash: ColorName = "cyan"
    brackets: ColorName = "yellow"


class OperationLabels(BaseModel):
    """Text shown for each in-progress operation."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    merge: str = "MERGING"
    rebase: str = "REBASING"
    cherry_pick: str = "CHERRY-PICKING"
    bisect: str = "BISECTING"

    def label_for(self, operation: Operation) -> str:
        """Get the label for an operation.

        Args:
            operation: Any operation other than Operation.NONE.

        Returns:
            The configured label.
        """
        return str(getattr(self, operation.value))

    @field_validator("*")
    @classmethod
    def _single_line(cls, value: str) -> str:
        if "\n" in value or "\r" in value:
            msg = "labels must not contain line breaks"
            raise ValueError(msg)
        return value


class RenderConfig(BaseModel):
    """Symbols, ordering options and coloring for the prompt line.

    Attributes:
        branch_symbol: Prefix for a branch name (also for unborn branches).
        detached_symbol: Prefix for a detached HEAD's short commit id.
        ahead_symbol: Prefix for the ahead count.
        behind_symbol: Prefix for the behind count.
        staged_symbol: Prefix for the staged count.
        unstaged_symbol: Prefix for the unstaged count.
        untracked_symbol: Prefix for the untracked count.
        conflict_symbol: Prefix for the conflicted count.
        stash_symbol: Prefix for the stash count.
        separator: Text placed between segments.
        hide_clean_counts: Omit counts that are zero.
        prefix: Text before the whole line (not printed outside a repository).
        suffix: Text after the whole line (not printed outside a repository).
        color: Coloring mode.
        colors: Color per rendered part.
        operation_labels: Text per in-progress operation.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    branch_symbol: str = ""
    detached_symbol: str = "@"
    ahead_symbol: str = "↑"
    behind_symbol: str = "↓"
    staged_symbol: str = "+"
    unstaged_symbol: str = "~"
    untracked_symbol: str = "?"
    conflict_symbol: str = "!"
    stash_symbol: str = "≡"
    separator: str = " "
    hide_clean_counts: bool = True
    prefix: str = ""
    suffix: str = ""
    color: ColorMode = ColorMode.NONE
    colors: SegmentColors = SegmentColors()
    operation_labels: OperationLabels = OperationLabels()

    @field_validator(
        "branch_symbol",
        "detached_symbol",
        "ahead_symbol",
        "behind_symbol",
        "staged_symbol",
        "unstaged_symbol",
        "untracked_symbol",
        "conflict_symbol",
        "stash_symbol",
        "separator",
        "prefix",
        "suffix",
    )
    @classmethod
    def _single_line(cls, value: str) -> str:
        if "\n" in value or "\r" in value:
            msg = "prompt text must not contain line breaks"
            raise ValueError(msg)
        return value
