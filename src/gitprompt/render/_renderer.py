"""Prompt line rendering.

Formats a Status into one line of text. Rendering is a pure function of
its inputs and performs no I/O.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from gitprompt.enums import Operation
from gitprompt.render._color import escape, paint
from gitprompt.status import Detached, OnBranch, Status, Tracking, Unborn

if TYPE_CHECKING:
    from gitprompt.config import RenderConfig

# Literal text and the name of the SegmentColors slot used to paint it
Part: TypeAlias = tuple[str, str]


def _count_part(
    symbol: str, count: int, slot: str, *, hide_zero: bool
) -> Part | None:
    if count == 0 and hide_zero:
        return None
    return (f"{symbol}{count}", slot)


def _head_parts(status: Status, config: RenderConfig) -> list[Part]:
    match status.head:
        case OnBranch(name=name) | Unborn(branch_name=name):
            return [(f"{config.branch_symbol}{name}", "head")]
        case Detached(short_commit_id=commit):
            return [(f"{config.detached_symbol}{commit}", "head")]


def _tracking_parts(status: Status, config: RenderConfig) -> list[Part]:
    if not isinstance(status.tracking, Tracking):
        return []
    hide = config.hide_clean_counts
    candidates = (
        _count_part(
            config.ahead_symbol, status.tracking.ahead, "ahead", hide_zero=hide
        ),
        _count_part(
            config.behind_symbol, status.tracking.behind, "behind", hide_zero=hide
        ),
    )
    return [part for part in candidates if part is not None]


def _change_parts(status: Status, config: RenderConfig) -> list[Part]:
    changes = status.changes
    hide = config.hide_clean_counts
    candidates = (
        _count_part(config.staged_symbol, changes.staged, "staged", hide_zero=hide),
        _count_part(
            config.unstaged_symbol, changes.unstaged, "unstaged", hide_zero=hide
        ),
        _count_part(
            config.untracked_symbol, changes.untracked, "untracked", hide_zero=hide
        ),
        _count_part(
            config.conflict_symbol, changes.conflicted, "conflicted", hide_zero=hide
        ),
    )
    return [part for part in candidates if part is not None]


def _operation_parts(status: Status, config: RenderConfig) -> list[Part]:
    if status.in_progress_operation is Operation.NONE:
        return []
    label = config.operation_labels.label_for(status.in_progress_operation)
    return [(label, "operation")] if label else []


def _stash_parts(status: Status, config: RenderConfig) -> list[Part]:
    if status.stash_count <= 0:
        return []
    return [(f"{config.stash_symbol}{status.stash_count}", "stash")]


_SEGMENTS = (
    _head_parts,
    _tracking_parts,
    _change_parts,
    _operation_parts,
    _stash_parts,
)


def render(status: Status | None, config: RenderConfig) -> str:
    """Render a status as a single prompt line.

    Segments appear in a fixed order: head, tracking, changes, in-progress
    operation, stash. Empty segments are dropped and the rest are joined
    with the configured separator. Parts inside a segment are concatenated.

    Args:
        status: The aggregated status, or None outside a repository.
        config: Symbols, layout and coloring options.

    Returns:
        The prompt line without a trailing newline. Empty for None.

    Example:
        >>> from gitprompt.config import RenderConfig
        >>> from gitprompt.status import ChangeCounts, NoUpstream, OnBranch, Status
        >>> status = Status(
        ...     head=OnBranch("main"),
        ...     tracking=NoUpstream(),
        ...     changes=ChangeCounts(staged=2),
        ...     stash_count=0,
        ... )
        >>> render(status, RenderConfig())
        'main +2'
    """
    if status is None:
        return ""

    mode = config.color
    colors = config.colors
    segments: list[str] = []

    for build in _SEGMENTS:
        parts = build(status, config)
        if parts:
            segments.append(
                "".join(
                    paint(text, getattr(colors, slot), mode) for text, slot in parts
                )
            )

    line = escape(config.separator, mode).join(segments)
    prefix = paint(config.prefix, colors.brackets, mode)
    suffix = paint(config.suffix, colors.brackets, mode)
    return f"{prefix}{line}{suffix}"
