"""Status aggregation.

Combines the raw reads into one Status. Every ambiguity (no commits, no
upstream, detached HEAD) is resolved here into an explicit variant, so the
renderer never has to distinguish "absent" from "zero".
"""

from typing import Final

from gitprompt.enums import Operation
from gitprompt.repository import RawDiffCounts, RawRefState, RawStashState
from gitprompt.status._models import (
    ChangeCounts,
    Detached,
    Head,
    NoUpstream,
    OnBranch,
    Status,
    Tracking,
    TrackingState,
    Unborn,
)

DEFAULT_SHORT_ID_LENGTH: Final = 7


def _resolve_head(ref: RawRefState, short_id_length: int) -> Head:
    if ref.commit_id is None:
        # RawRefState guarantees a branch when there is no commit
        return Unborn(branch_name=ref.branch or "")
    if ref.branch is None:
        return Detached(short_commit_id=ref.commit_id[:short_id_length])
    return OnBranch(name=ref.branch)


def _resolve_tracking(ref: RawRefState) -> TrackingState:
    if ref.upstream is None or ref.ahead is None or ref.behind is None:
        return NoUpstream()
    return Tracking(upstream=ref.upstream, ahead=ref.ahead, behind=ref.behind)


def aggregate(
    ref: RawRefState,
    diff: RawDiffCounts,
    stash: RawStashState,
    operation: Operation,
    *,
    short_id_length: int = DEFAULT_SHORT_ID_LENGTH,
) -> Status:
    """Normalize raw repository reads into one Status.

    Pure: performs no I/O and never fails on records that passed their own
    construction checks.

    Args:
        ref: Raw HEAD, branch and upstream snapshot.
        diff: Raw changed path counts.
        stash: Raw stash snapshot.
        operation: In-progress operation marker.
        short_id_length: Number of hex digits shown for a detached HEAD.

    Returns:
        The aggregated Status.

    Example:
        >>> status = aggregate(
        ...     RawRefState(branch="main", commit_id=None),
        ...     RawDiffCounts(),
        ...     RawStashState(),
        ...     Operation.NONE,
        ... )
        >>> status.head
        Unborn(branch_name='main')
    """
    return Status(
        head=_resolve_head(ref, short_id_length),
        tracking=_resolve_tracking(ref),
        changes=ChangeCounts(
            staged=diff.staged,
            unstaged=diff.unstaged,
            untracked=diff.untracked,
            conflicted=diff.conflicted,
        ),
        stash_count=stash.count,
        in_progress_operation=operation,
    )
