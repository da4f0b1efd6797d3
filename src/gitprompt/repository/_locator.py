"""Repository root discovery.

This module locates the nearest enclosing working tree by searching upward
through the directory tree for a `.git` marker. The walk is bounded by a
maximum number of parent steps, the filesystem root, and the directories
listed in GIT_CEILING_DIRECTORIES.
"""

import os
from pathlib import Path
from typing import Final

from gitprompt.exceptions import NotARepositoryError
from gitprompt.repository._handle import RepositoryHandle

DEFAULT_MAX_DEPTH: Final = 64

_GIT_MARKER: Final = ".git"
_GITDIR_PREFIX: Final = b"gitdir:"


def _ceiling_directories() -> frozenset[Path]:
    """Parse GIT_CEILING_DIRECTORIES into resolved paths.

    Returns:
        Directories the search must not move up into.
    """
    raw = os.environ.get("GIT_CEILING_DIRECTORIES", "")
    return frozenset(
        Path(entry).resolve() for entry in raw.split(os.pathsep) if entry.strip()
    )


def _has_marker(directory: Path) -> bool:
    """Check whether a directory holds a repository marker.

    A marker is either a `.git` directory containing HEAD, or a `.git` file
    with a `gitdir:` pointer (linked worktrees and submodules).

    Args:
        directory: Directory to inspect.

    Returns:
        True if the directory is a working tree root.
    """
    marker = directory / _GIT_MARKER
    try:
        if marker.is_dir():
            return (marker / "HEAD").is_file()
        if marker.is_file():
            with marker.open("rb") as f:
                return f.read(len(_GITDIR_PREFIX)) == _GITDIR_PREFIX
    except OSError:
        return False
    return False


def _resolve_start(start: Path | None) -> Path:
    """Resolve the search start to an existing directory.

    Args:
        start: Start path, or None for the current working directory.

    Returns:
        The resolved directory to begin searching from.

    Raises:
        NotARepositoryError: If the start path does not exist.
    """
    try:
        origin = start if start is not None else Path.cwd()
        resolved = origin.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        path = start if start is not None else Path()
        msg = f"Cannot resolve search start {path}: {e}"
        raise NotARepositoryError(msg, path=path) from e

    if not resolved.is_dir():
        return resolved.parent
    return resolved


def find_repository_root(
    start: Path | None = None, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> Path:
    """Find the nearest enclosing working tree root.

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.
        max_depth: Maximum number of parent directories to climb.

    Returns:
        The resolved working tree root (the directory containing `.git`).

    Raises:
        NotARepositoryError: If no repository is found within the bounds,
            or the start lies inside a `.git` control directory.
    """
    current = _resolve_start(start)

    if _GIT_MARKER in current.parts:
        msg = f"{current} is inside a git control directory, not a working tree"
        raise NotARepositoryError(msg, path=current)

    ceilings = _ceiling_directories()
    origin = current

    for _ in range(max_depth + 1):
        if _has_marker(current):
            return current
        parent = current.parent
        if parent == current or parent in ceilings:
            break
        current = parent

    msg = f"Not a git repository (or any parent up to {current}): {origin}"
    raise NotARepositoryError(msg, path=origin)


def locate_repository(
    start: Path | None = None, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> RepositoryHandle:
    """Locate and open the repository enclosing a directory.

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.
        max_depth: Maximum number of parent directories to climb.

    Returns:
        A handle owning the opened repository. Use it as a context manager.

    Raises:
        NotARepositoryError: If no repository encloses the start directory.
        RepositoryUnavailableError: If a marker was found but the repository
            cannot be opened.

    Example:
        >>> with locate_repository(Path("/path/to/repo/src")) as handle:
        ...     print(handle.root)
    """
    root = find_repository_root(start, max_depth=max_depth)
    return RepositoryHandle.open(root)
