"""Fake state reader for testing.

This module provides a FakeStateReader class that implements
StateReaderProtocol without requiring an actual Git repository.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from gitprompt.enums import DEFAULT_OPERATION_PRECEDENCE, Operation
from gitprompt.exceptions import StateReadError
from gitprompt.repository._models import RawDiffCounts, RawRefState, RawStashState


@dataclass(slots=True)
class FakeStateReader:
    """Fake repository state reader for testing.

    The fake returns whatever raw records it holds. Markers are given as a
    set so precedence resolution behaves like the real reader. Assigning an
    exception to one of the ``*_error`` fields makes the matching read raise
    it, which lets tests exercise the fatal error paths.

    Example:
        >>> reader = FakeStateReader(ref=RawRefState(branch="main", commit_id=None))
        >>> reader.read_ref_state().branch
        'main'
    """

    ref: RawRefState = field(
        default_factory=lambda: RawRefState(branch="main", commit_id="0" * 40)
    )
    diff: RawDiffCounts = field(default_factory=RawDiffCounts)
    stash: RawStashState = field(default_factory=RawStashState)
    markers: set[Operation] = field(default_factory=set)
    ref_error: StateReadError | None = None
    diff_error: StateReadError | None = None
    stash_error: StateReadError | None = None
    marker_error: StateReadError | None = None
    calls: list[str] = field(default_factory=list)

    def read_ref_state(self) -> RawRefState:
        self.calls.append("ref")
        if self.ref_error is not None:
            raise self.ref_error
        return self.ref

    def read_diff_counts(self) -> RawDiffCounts:
        self.calls.append("diff")
        if self.diff_error is not None:
            raise self.diff_error
        return self.diff

    def read_stash_state(self) -> RawStashState:
        self.calls.append("stash")
        if self.stash_error is not None:
            raise self.stash_error
        return self.stash

    def read_operation_marker(
        self, precedence: Sequence[Operation] = DEFAULT_OPERATION_PRECEDENCE
    ) -> Operation:
        self.calls.append("marker")
        if self.marker_error is not None:
            raise self.marker_error
        for operation in precedence:
            if operation in self.markers:
                return operation
        return Operation.NONE
