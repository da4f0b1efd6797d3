"""gitprompt status aggregation.

This package turns raw repository reads into a single immutable Status.

Models:
    Status: Aggregated working tree summary.
    OnBranch, Detached, Unborn: HEAD variants.
    NoUpstream, Tracking: Upstream variants.
    ChangeCounts: Changed path counts.

Functions:
    aggregate: Pure normalization of raw reads.
    read_status: Issue the four reads through a reader and aggregate.
    collect_status: Locate, read and aggregate for a directory.
"""

from gitprompt.status._aggregate import DEFAULT_SHORT_ID_LENGTH, aggregate
from gitprompt.status._collect import ReaderFactory, collect_status, read_status
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

__all__ = [
    "DEFAULT_SHORT_ID_LENGTH",
    "ChangeCounts",
    "Detached",
    "Head",
    "NoUpstream",
    "OnBranch",
    "ReaderFactory",
    "Status",
    "Tracking",
    "TrackingState",
    "Unborn",
    "aggregate",
    "collect_status",
    "read_status",
]
