# ruff: noqa: TC003  # Path needed at runtime for method bodies
"""Repository handle owning an opened dulwich repository."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final, Self

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo

from gitprompt.exceptions import RepositoryUnavailableError
from gitprompt.utils._git import get_control_dir

if TYPE_CHECKING:
    from types import TracebackType


class RepositoryHandle:
    """Opaque reference to a located repository.

    The handle owns the underlying dulwich Repo for the duration of one
    invocation. It implements the context manager protocol; the Repo is
    closed when the context exits.

    Attributes:
        root: The resolved working tree root of the repository.
        repo: The opened dulwich Repo.
        control_dir: The per-worktree control directory (usually .git/).
    """

    __slots__: Final = ("_repo", "_root")
    _root: Path
    _repo: Repo

    def __init__(self, root: Path, repo: Repo) -> None:
        """Initialize the handle.

        Use open() to create handles from a path.

        Args:
            root: The resolved working tree root.
            repo: An opened dulwich Repo for that root.
        """
        self._root = root
        self._repo = repo

    @classmethod
    def open(cls, root: Path) -> Self:
        """Open the repository rooted at the given directory.

        Args:
            root: Directory containing the repository marker.

        Returns:
            A handle owning the opened repository.

        Raises:
            RepositoryUnavailableError: If the marker exists but dulwich
                cannot open the repository.
        """
        try:
            repo = Repo(str(root))
        except (NotGitRepository, OSError) as e:
            msg = f"Repository at {root} cannot be opened: {e}"
            raise RepositoryUnavailableError(msg, path=root, cause=e) from e
        return cls(root, repo)

    def __enter__(self) -> Self:
        """Enter the context manager.

        Returns:
            The handle instance.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager and close the repository."""
        self.close()

    def close(self) -> None:
        """Close the underlying git repository.

        Releases file handles held by the dulwich Repo.
        """
        self._repo.close()

    @property
    def root(self) -> Path:
        """Get the resolved working tree root."""
        return self._root

    @property
    def repo(self) -> Repo:
        """Get the opened dulwich Repo."""
        return self._repo

    @property
    def control_dir(self) -> Path:
        """Get the per-worktree control directory."""
        return get_control_dir(self._repo)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={self._root!r})"
