"""Raw repository state models.

This module defines the loosely-typed records returned by the state reader.
Each record validates its own contract on construction, so downstream
aggregation can stay total.
"""

from dataclasses import dataclass


def _require_non_negative(name: str, value: int | None) -> None:
    if value is not None and value < 0:
        msg = f"{name} must not be negative, got {value}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RawRefState:
    """HEAD, branch and upstream snapshot.

    Ahead/behind counts are only meaningful when an upstream exists: with no
    upstream both are None, never zero.

    Attributes:
        branch: Current branch name, or None when HEAD is detached.
        commit_id: Full hex SHA of HEAD, or None on an unborn branch.
        upstream: Short upstream name (e.g. origin/main), or None.
        ahead: Commits on HEAD missing from upstream, None without upstream.
        behind: Commits on upstream missing from HEAD, None without upstream.

    Raises:
        ValueError: If the fields violate the contract above.
    """

    branch: str | None
    commit_id: str | None
    upstream: str | None = None
    ahead: int | None = None
    behind: int | None = None

    def __post_init__(self) -> None:
        if self.branch is None and self.commit_id is None:
            msg = "a detached HEAD must point at a commit"
            raise ValueError(msg)

        if self.upstream is None:
            if self.ahead is not None or self.behind is not None:
                msg = "ahead/behind counts require an upstream"
                raise ValueError(msg)
        elif self.ahead is None or self.behind is None:
            msg = f"upstream {self.upstream} requires ahead and behind counts"
            raise ValueError(msg)

        _require_non_negative("ahead", self.ahead)
        _require_non_negative("behind", self.behind)


@dataclass(frozen=True, slots=True)
class RawDiffCounts:
    """Per-category counts of changed paths.

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

    def __post_init__(self) -> None:
        _require_non_negative("staged", self.staged)
        _require_non_negative("unstaged", self.unstaged)
        _require_non_negative("untracked", self.untracked)
        _require_non_negative("conflicted", self.conflicted)


@dataclass(frozen=True, slots=True)
class RawStashState:
    """Stash snapshot.

    Attributes:
        count: Number of stash entries, 0 if none.
    """

    count: int = 0

    def __post_init__(self) -> None:
        _require_non_negative("count", self.count)
