"""Read-only repository state queries.

This module provides the StateReader, which answers the four independent
questions a prompt needs (refs, changed paths, stash, in-progress
operation) straight from dulwich's plumbing layer. Nothing here writes to
the repository or touches the network, and nothing is retried: every
failure surfaces immediately as a StateReadError subclass.
"""

from __future__ import annotations

import os
import zlib
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Final, TypeAlias

from dulwich.errors import (
    ChecksumMismatch,
    FileFormatException,
    MissingCommitError,
    ObjectMissing,
    WrongObjectException,
)
from dulwich.ignore import IgnoreFilterManager
from dulwich.index import ConflictedIndexEntry, Index, get_unstaged_changes
from dulwich.object_store import iter_tree_contents
from dulwich.objects import S_ISGITLINK, Commit, valid_hexsha
from dulwich.porcelain import get_untracked_paths
from dulwich.refs import SYMREF
from dulwich.stash import Stash

from gitprompt.enums import DEFAULT_OPERATION_PRECEDENCE, Operation
from gitprompt.exceptions import (
    DiffComputationError,
    OperationMarkerReadError,
    RefReadError,
    StashReadError,
)
from gitprompt.repository._models import RawDiffCounts, RawRefState, RawStashState
from gitprompt.utils._git import REFS_HEADS, decode_bytes, encode_str, shorten_ref

if TYPE_CHECKING:
    from dulwich.repo import Repo

    from gitprompt.repository._handle import RepositoryHandle

# Failures dulwich raises for unreadable or corrupt repository data
_READ_ERRORS: Final = (
    OSError,
    KeyError,
    ValueError,
    zlib.error,
    ChecksumMismatch,
    FileFormatException,
    MissingCommitError,
    ObjectMissing,
    WrongObjectException,
)

_HEAD: Final = b"HEAD"

# Markers relative to the per-worktree control directory
_REBASE_MERGE_DIR: Final = "rebase-merge"
_REBASE_APPLY_DIR: Final = "rebase-apply"
_AM_MARKER: Final = "applying"
_CHERRY_PICK_HEAD: Final = "CHERRY_PICK_HEAD"
_BISECT_LOG: Final = "BISECT_LOG"
_MERGE_HEAD: Final = "MERGE_HEAD"

_GIT_MARKER: Final = ".git"

PathEntry: TypeAlias = tuple[bytes, int]


def map_through_refspecs(ref: str, refspecs: Iterable[str]) -> str | None:
    """Map a remote ref to its local tracking ref using fetch refspecs.

    Args:
        ref: Ref name on the remote, e.g. refs/heads/main.
        refspecs: Fetch refspecs such as +refs/heads/*:refs/remotes/origin/*.

    Returns:
        The local tracking ref name, or None if no refspec maps the ref.

    Example:
        >>> map_through_refspecs(
        ...     "refs/heads/main", ["+refs/heads/*:refs/remotes/origin/*"]
        ... )
        'refs/remotes/origin/main'
    """
    for spec in refspecs:
        spec = spec.strip().removeprefix("+")  # noqa: PLW2901
        if spec.startswith("^"):
            continue
        src, sep, dst = spec.partition(":")
        if not sep or not dst:
            continue
        if "*" not in src:
            if src == ref:
                return dst
            continue
        prefix, _, suffix = src.partition("*")
        if (
            len(ref) >= len(prefix) + len(suffix)
            and ref.startswith(prefix)
            and ref.endswith(suffix)
        ):
            middle = ref[len(prefix) : len(ref) - len(suffix)]
            return dst.replace("*", middle, 1)
    return None


class StateReader:
    """Read-only queries against a located repository.

    Each read is independent of the others and may be called in any order.
    "No upstream" and "no commits yet" are valid answers, not errors.

    Example:
        >>> with locate_repository() as handle:
        ...     reader = StateReader(handle)
        ...     refs = reader.read_ref_state()
        ...     print(refs.branch, refs.ahead, refs.behind)
    """

    __slots__: Final = ("_handle",)

    def __init__(self, handle: RepositoryHandle) -> None:
        self._handle = handle

    @property
    def _repo(self) -> Repo:
        return self._handle.repo

    # =========================================================================
    # Refs
    # =========================================================================

    def read_ref_state(self) -> RawRefState:
        """Read HEAD, the current branch and its upstream distance.

        Returns:
            The raw ref snapshot.

        Raises:
            RefReadError: If refs, config or the commit graph cannot be read.
        """
        try:
            return self._read_ref_state()
        except _READ_ERRORS as e:
            msg = f"Failed to read refs: {e}"
            raise RefReadError(msg, path=self._handle.root, cause=e) from e

    def _read_ref_state(self) -> RawRefState:
        raw_head = self._repo.refs.read_ref(_HEAD)
        if raw_head is None:
            msg = "HEAD is missing"
            raise RefReadError(msg, path=self._handle.root)

        if not raw_head.startswith(SYMREF):
            # Detached: HEAD holds the commit id itself
            commit_hex = raw_head.strip()
            if not valid_hexsha(commit_hex):
                msg = f"HEAD holds an invalid object id: {decode_bytes(commit_hex)}"
                raise RefReadError(msg, path=self._handle.root)
            return RawRefState(branch=None, commit_id=decode_bytes(commit_hex))

        target = raw_head[len(SYMREF) :].strip()
        branch = shorten_ref(target)
        commit_id = self._head_commit_id()
        if commit_id is None:
            return RawRefState(branch=branch, commit_id=None)

        upstream_ref = self._upstream_ref(decode_bytes(target))
        if upstream_ref is None:
            return RawRefState(branch=branch, commit_id=decode_bytes(commit_id))

        try:
            upstream_id = self._repo.refs[encode_str(upstream_ref)]
        except KeyError:
            # Configured but never fetched, or deleted on the remote
            return RawRefState(branch=branch, commit_id=decode_bytes(commit_id))

        return RawRefState(
            branch=branch,
            commit_id=decode_bytes(commit_id),
            upstream=shorten_ref(upstream_ref),
            ahead=self._count_exclusive(commit_id, upstream_id),
            behind=self._count_exclusive(upstream_id, commit_id),
        )

    def _head_commit_id(self) -> bytes | None:
        """Resolve HEAD to a commit id, or None on an unborn branch."""
        _, commit_id = self._repo.refs.follow(_HEAD)
        return commit_id

    def _upstream_ref(self, branch_ref: str) -> str | None:
        """Find the local ref tracking the branch's configured upstream.

        Args:
            branch_ref: Full ref name of the current branch.

        Returns:
            Full name of the tracking ref, or None if no upstream is set.
        """
        if not branch_ref.startswith(REFS_HEADS):
            return None
        section = (b"branch", encode_str(branch_ref.removeprefix(REFS_HEADS)))
        config = self._repo.get_config()
        try:
            remote = decode_bytes(config.get(section, b"remote"))
            merge = decode_bytes(config.get(section, b"merge"))
        except KeyError:
            return None

        if remote == ".":
            return merge

        try:
            refspecs = [
                decode_bytes(spec)
                for spec in config.get_multivar(
                    (b"remote", encode_str(remote)), b"fetch"
                )
            ]
        except KeyError:
            refspecs = []

        mapped = map_through_refspecs(merge, refspecs)
        if mapped is not None:
            return mapped
        return f"refs/remotes/{remote}/{merge.removeprefix(REFS_HEADS)}"

    def _count_exclusive(self, include: bytes, exclude: bytes) -> int:
        """Count commits reachable from include but not from exclude."""
        if include == exclude:
            return 0
        walker = self._repo.get_walker(include=[include], exclude=[exclude])
        return sum(1 for _ in walker)

    # =========================================================================
    # Changed paths
    # =========================================================================

    def read_diff_counts(self) -> RawDiffCounts:
        """Count staged, unstaged, untracked and conflicted paths.

        Staged paths come from the HEAD-vs-index comparison, unstaged paths
        from the index-vs-working-tree comparison. A path flagged by both is
        counted in both. Conflicted paths are counted only as conflicted.
        Submodule entries are ignored, and an untracked nested repository
        counts as one untracked path.

        Returns:
            The raw per-category counts.

        Raises:
            DiffComputationError: If the index, HEAD tree or working tree
                cannot be read.
        """
        try:
            return self._read_diff_counts()
        except _READ_ERRORS as e:
            msg = f"Failed to compare HEAD, index and working tree: {e}"
            raise DiffComputationError(msg, path=self._handle.root, cause=e) from e

    def _read_diff_counts(self) -> RawDiffCounts:
        index = self._open_index()

        index_entries: dict[bytes, PathEntry] = {}
        conflicted: set[bytes] = set()
        gitlinks: set[bytes] = set()
        for path, entry in index.items():
            if isinstance(entry, ConflictedIndexEntry):
                conflicted.add(path)
            elif S_ISGITLINK(entry.mode):
                gitlinks.add(path)
            else:
                index_entries[path] = (entry.sha, entry.mode)

        head_entries = self._head_tree_entries()

        staged = sum(
            1
            for path in index_entries.keys() | head_entries.keys()
            if path not in conflicted
            and path not in gitlinks
            and index_entries.get(path) != head_entries.get(path)
        )

        root = os.fsencode(self._handle.root)
        normalizer = self._repo.get_blob_normalizer()
        unstaged = sum(
            1
            for path in get_unstaged_changes(index, root, normalizer.checkin_normalize)
            if path not in conflicted and path not in gitlinks
        )

        nested = self._untracked_repositories(gitlinks)
        skipped = nested + tuple(f"{os.fsdecode(path)}/" for path in gitlinks)
        root_str = str(self._handle.root)
        untracked = len(nested) + sum(
            1
            for path in get_untracked_paths(
                root_str,
                root_str,
                index,
                exclude_ignored=True,
                untracked_files="all",
            )
            if not Path(path).as_posix().startswith(skipped)
        )

        return RawDiffCounts(
            staged=staged,
            unstaged=unstaged,
            untracked=untracked,
            conflicted=len(conflicted),
        )

    def _open_index(self) -> Index:
        """Open the index, or an empty one before the first `git add`."""
        index_path = self._repo.index_path()
        if not Path(decode_bytes(index_path)).exists():
            return Index(index_path, read=False)
        return self._repo.open_index()

    def _untracked_repositories(self, gitlinks: set[bytes]) -> tuple[str, ...]:
        """Find untracked directories holding a repository of their own.

        Each one counts as a single untracked path and is not looked into.
        Registered submodules and ignored directories are skipped.

        Args:
            gitlinks: Index paths of registered submodules.

        Returns:
            Paths relative to the working tree root, each ending in "/".
        """
        root = self._handle.root
        ignore = IgnoreFilterManager.from_repo(self._repo)
        found: list[str] = []

        for dirpath, dirnames, _ in os.walk(root):
            kept: list[str] = []
            for name in dirnames:
                if name == _GIT_MARKER:
                    continue
                directory = Path(dirpath, name)
                rel = directory.relative_to(root).as_posix()
                if os.fsencode(rel) in gitlinks or ignore.is_ignored(f"{rel}/"):
                    continue
                if (directory / _GIT_MARKER).exists():
                    found.append(f"{rel}/")
                    continue
                kept.append(name)
            dirnames[:] = kept

        return tuple(found)

    def _head_tree_entries(self) -> dict[bytes, PathEntry]:
        """Map every blob path in HEAD's tree to its (sha, mode)."""
        commit_id = self._head_commit_id()
        if commit_id is None:
            return {}
        commit = self._repo[commit_id]
        if not isinstance(commit, Commit):
            msg = f"HEAD does not point at a commit: {decode_bytes(commit_id)}"
            raise WrongObjectException(msg)
        return {
            entry.path: (entry.sha, entry.mode)
            for entry in iter_tree_contents(self._repo.object_store, commit.tree)
            if not S_ISGITLINK(entry.mode)
        }

    # =========================================================================
    # Stash
    # =========================================================================

    def read_stash_state(self) -> RawStashState:
        """Count stash entries.

        Returns:
            The raw stash snapshot; count is 0 when nothing is stashed.

        Raises:
            StashReadError: If the stash reflog cannot be read.
        """
        try:
            stash = Stash.from_repo(self._repo)
            return RawStashState(count=len(stash))
        except _READ_ERRORS as e:
            msg = f"Failed to read stash: {e}"
            raise StashReadError(msg, path=self._handle.root, cause=e) from e

    # =========================================================================
    # Operation markers
    # =========================================================================

    def read_operation_marker(
        self, precedence: Sequence[Operation] = DEFAULT_OPERATION_PRECEDENCE
    ) -> Operation:
        """Detect an in-progress merge, rebase, cherry-pick or bisect.

        Args:
            precedence: Operations in priority order. When several markers
                are present, the earliest listed operation wins.

        Returns:
            The winning operation, or Operation.NONE if no marker is present.

        Raises:
            OperationMarkerReadError: If the control directory cannot be
                inspected.
        """
        try:
            present = self._present_operations(self._handle.control_dir)
        except OSError as e:
            msg = f"Failed to inspect operation markers: {e}"
            raise OperationMarkerReadError(
                msg, path=self._handle.root, cause=e
            ) from e

        for operation in precedence:
            if operation in present:
                return operation
        return Operation.NONE

    def _present_operations(self, control_dir: Path) -> frozenset[Operation]:
        present: set[Operation] = set()

        if (control_dir / _REBASE_MERGE_DIR).is_dir():
            present.add(Operation.REBASE)
        rebase_apply = control_dir / _REBASE_APPLY_DIR
        # rebase-apply/applying belongs to `git am`, not to a rebase
        if rebase_apply.is_dir() and not (rebase_apply / _AM_MARKER).exists():
            present.add(Operation.REBASE)
        if (control_dir / _CHERRY_PICK_HEAD).is_file():
            present.add(Operation.CHERRY_PICK)
        if (control_dir / _BISECT_LOG).is_file():
            present.add(Operation.BISECT)
        if (control_dir / _MERGE_HEAD).is_file():
            present.add(Operation.MERGE)

        return frozenset(present)
