"""Common git utility functions.

This module provides shared helpers used by the repository layer for
byte/string conversion, ref name handling and path lookups on dulwich repos.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from dulwich.repo import Repo

REFS_HEADS: Final = "refs/heads/"
REFS_REMOTES: Final = "refs/remotes/"


def decode_bytes(value: bytes | str) -> str:
    """Decode bytes to str if needed.

    Args:
        value: A bytes or str value.

    Returns:
        The value as a string.
    """
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="surrogateescape")
    return value


def encode_str(value: str) -> bytes:
    """Encode a str produced by decode_bytes() back to its original bytes."""
    return value.encode("utf-8", errors="surrogateescape")


def shorten_ref(ref: bytes | str) -> str:
    """Shorten a full ref name the way git displays it.

    Bytes that are not valid UTF-8 become U+FFFD, so the result is always
    printable.

    Args:
        ref: Full ref name such as refs/remotes/origin/main.

    Returns:
        The ref without its refs/heads/ or refs/remotes/ namespace.
    """
    raw = ref if isinstance(ref, bytes) else encode_str(ref)
    ref_str = raw.decode("utf-8", errors="replace")
    for prefix in (REFS_HEADS, REFS_REMOTES):
        if ref_str.startswith(prefix):
            return ref_str[len(prefix) :]
    return ref_str


def get_control_dir(repo: Repo) -> Path:
    """Get the per-worktree control directory (usually .git/).

    Linked worktrees get their own control directory under
    .git/worktrees/<name>/, which is where operation markers live.

    Args:
        repo: The repository instance.

    Returns:
        Path to the control directory.
    """
    return Path(decode_bytes(repo.controldir()))
