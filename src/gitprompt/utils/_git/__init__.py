"""Git utilities for gitprompt.

This package provides small helpers shared by the repository layer.
"""

from gitprompt.utils._git._common import (
    REFS_HEADS,
    REFS_REMOTES,
    decode_bytes,
    encode_str,
    get_control_dir,
    shorten_ref,
)

__all__ = [
    "REFS_HEADS",
    "REFS_REMOTES",
    "decode_bytes",
    "encode_str",
    "get_control_dir",
    "shorten_ref",
]
