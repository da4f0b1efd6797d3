"""Aggregated status models.

This module defines the immutable Status record consumed by rendering and
the small variant types it is built from.
"""

from dataclasses import dataclass
from typing import Any, TypeAlias

from gitprompt.enums import Operation


@dataclass(frozen=True, slots=True)
class OnBranch:
    """HEAD is on a branch with at least one commit."""

    name: str


@dataclass(frozen=True, slots=True)
class Detached:
    """HEAD points directly at a commit."""

    short_commit_id: str


@dataclass(frozen=True, slots=True)
class Unborn:
    """HEAD names a branch that has no commits yet."""

    branch_name: str


Head: TypeAlias = OnBranch | Detached | Unborn


@dataclass(frozen=True, slots=True)
class NoUpstream:
    """The current branch has no usable upstream."""


@dataclass(frozen=True, slots=True)
class Tracking:
    """Distance between HEAD and its upstream.

    Attributes:
        upstream: Short upstream name, e.g. origin/main.
        ahead: Commits on HEAD missing from upstream.
        behind: Commits on upstream missing from HEAD.
    """

    upstream: str
    ahead: int
    behind: int


TrackingState: TypeAlias = NoUpstream | Tracking


@dataclass(frozen=True, slots=True)
class ChangeCounts:
    """Changed path counts per category.

    Attributes:
        staged: Paths whose index entry differs from HEAD.
        unstaged: Paths whose working tree content differs from the index.
        untracked: Files that are neither tracked nor ignored.
        conflicted: Paths with unmerged index entries.
    """

    staged: int = 0
    unstaged: int = 0
    untracked: int = 0
    conflicted: int = 0

    @property
    def is_clean(self) -> bool:
        """True when every count is zero."""
        return not (self.staged or self.unstaged or self.untracked or self.conflicted)


@dataclass(frozen=True, slots=True)
class Status:
    """Point-in-time summary of a working tree.

    A Status is only ever built from a complete set of reads; it is never
    partially populated.

    Attributes:
        head: Exactly one of OnBranch, Detached or Unborn.
        tracking: NoUpstream or Tracking.
        changes: Changed path counts.
        stash_count: Number of stash entries.
        in_progress_operation: Paused multi-step operation, if any.
    """

    head: Head
    tracking: TrackingState
    changes: ChangeCounts
    stash_count: int
    in_progress_operation: Operation = Operation.NONE

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        """Convert the status to plain, JSON-serializable data.

        Returns:
            Dictionary with head, tracking, changes, stash and operation.
        """
        match self.head:
            case OnBranch(name=name):
                head: dict[str, str] = {"state": "branch", "name": name}
            case Detached(short_commit_id=commit):
                head = {"state": "detached", "commit": commit}
            case Unborn(branch_name=name):
                head = {"state": "unborn", "name": name}

        tracking: dict[str, Any] | None = None  # pyright: ignore[reportExplicitAny]
        if isinstance(self.tracking, Tracking):
            tracking = {
                "upstream": self.tracking.upstream,
                "ahead": self.tracking.ahead,
                "behind": self.tracking.behind,
            }

        return {
            "head": head,
            "tracking": tracking,
            "changes": {
                "staged": self.changes.staged,
                "unstaged": self.changes.unstaged,
                "untracked": self.changes.untracked,
                "conflicted": self.changes.conflicted,
            },
            "stash_count": self.stash_count,
            "operation": self.in_progress_operation.value,
        }
