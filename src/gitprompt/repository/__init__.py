"""gitprompt repository access.

This package locates a repository and reads its raw state through dulwich.

Classes:
    RepositoryHandle: Owns an opened repository for one invocation.
    StateReader: Read-only ref, diff, stash and marker queries.
    StateReaderProtocol: Runtime-checkable protocol for dependency injection.
    FakeStateReader: In-memory reader for tests.

Models:
    RawRefState: HEAD, branch and upstream snapshot.
    RawDiffCounts: Per-category changed path counts.
    RawStashState: Stash entry count.

Example:
    >>> from gitprompt.repository import StateReader, locate_repository
    >>> with locate_repository() as handle:
    ...     counts = StateReader(handle).read_diff_counts()
"""

from gitprompt.repository._fake import FakeStateReader
from gitprompt.repository._handle import RepositoryHandle
from gitprompt.repository._locator import (
    DEFAULT_MAX_DEPTH,
    find_repository_root,
    locate_repository,
)
from gitprompt.repository._models import RawDiffCounts, RawRefState, RawStashState
from gitprompt.repository._protocol import StateReaderProtocol
from gitprompt.repository._reader import StateReader, map_through_refspecs

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "FakeStateReader",
    "RawDiffCounts",
    "RawRefState",
    "RawStashState",
    "RepositoryHandle",
    "StateReader",
    "StateReaderProtocol",
    "find_repository_root",
    "locate_repository",
    "map_through_refspecs",
]
