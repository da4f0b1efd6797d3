"""State reader protocol for type-safe dependency injection.

This module defines a runtime-checkable Protocol that both StateReader and
FakeStateReader satisfy, so the status pipeline can be exercised without a
real repository.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gitprompt.enums import Operation
    from gitprompt.repository._models import (
        RawDiffCounts,
        RawRefState,
        RawStashState,
    )


@runtime_checkable
class StateReaderProtocol(Protocol):
    """Protocol for the four independent repository state reads.

    Example:
        >>> def branch_of(reader: StateReaderProtocol) -> str | None:
        ...     return reader.read_ref_state().branch
    """

    def read_ref_state(self) -> RawRefState:
        """Read HEAD, the current branch and its upstream distance.

        Raises:
            RefReadError: On I/O failure or corruption.
        """
        ...

    def read_diff_counts(self) -> RawDiffCounts:
        """Count staged, unstaged, untracked and conflicted paths.

        Raises:
            DiffComputationError: If the comparison cannot be computed.
        """
        ...

    def read_stash_state(self) -> RawStashState:
        """Count stash entries.

        Raises:
            StashReadError: If the stash cannot be read.
        """
        ...

    def read_operation_marker(
        self, precedence: Sequence[Operation] = ...
    ) -> Operation:
        """Detect an in-progress multi-step operation.

        Raises:
            OperationMarkerReadError: If markers cannot be inspected.
        """
        ...
