"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values. The values mirror the
field defaults of the section models.
"""

from typing import Any

from gitprompt.enums import DEFAULT_OPERATION_PRECEDENCE
from gitprompt.repository import DEFAULT_MAX_DEPTH
from gitprompt.utils import DEFAULT_BACKUP_COUNT, DEFAULT_MAX_BYTES

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "render": {
        "branch_symbol": "",
        "detached_symbol": "@",
        "ahead_symbol": "↑",
        "behind_symbol": "↓",
        "staged_symbol": "+",
        "unstaged_symbol": "~",
        "untracked_symbol": "?",
        "conflict_symbol": "!",
        "stash_symbol": "≡",
        "separator": " ",
        "hide_clean_counts": True,
        "prefix": "",
        "suffix": "",
        "color": "none",
        "colors": {
            "head": "blue",
            "ahead": "green",
            "behind": "red",
            "staged": "green",
            "unstaged": "red",
            "untracked": "magenta",
            "conflicted": "red",
            "operation": "magenta",
            "stash": "cyan",
            "brackets": "yellow",
        },
        "operation_labels": {
            "merge": "MERGING",
            "rebase": "REBASING",
            "cherry_pick": "CHERRY-PICKING",
            "bisect": "BISECTING",
        },
    },
    "status": {
        "operation_precedence": [op.value for op in DEFAULT_OPERATION_PRECEDENCE],
        "short_id_length": 7,
        "max_depth": DEFAULT_MAX_DEPTH,
    },
    "logging": {
        "level": "warning",
        "format": "json",
        "file": "",
        "max_bytes": DEFAULT_MAX_BYTES,
        "backup_count": DEFAULT_BACKUP_COUNT,
    },
}
