"""Status collection pipeline.

Runs locate, read and aggregate for one invocation. Reads are issued
sequentially against a single opened repository; the first failing read
aborts the pipeline before aggregation.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, TypeAlias

from gitprompt.config import StatusConfig
from gitprompt.enums import DEFAULT_OPERATION_PRECEDENCE, Operation
from gitprompt.exceptions import NotARepositoryError, StateReadError
from gitprompt.repository import (
    RepositoryHandle,
    StateReader,
    StateReaderProtocol,
    locate_repository,
)
from gitprompt.status._aggregate import DEFAULT_SHORT_ID_LENGTH, aggregate
from gitprompt.status._models import Status
from gitprompt.utils import create_null_logger

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

ReaderFactory: TypeAlias = Callable[[RepositoryHandle], StateReaderProtocol]


def read_status(
    reader: StateReaderProtocol,
    *,
    precedence: Sequence[Operation] = DEFAULT_OPERATION_PRECEDENCE,
    short_id_length: int = DEFAULT_SHORT_ID_LENGTH,
    logger: FilteringBoundLogger | None = None,
) -> Status:
    """Issue the four reads and aggregate them.

    Args:
        reader: Source of raw repository state.
        precedence: Operation priority when several markers are present.
        short_id_length: Hex digits shown for a detached HEAD.
        logger: Logger for per-read debug events.

    Returns:
        The aggregated Status.

    Raises:
        StateReadError: If any read fails. No partial status is produced.
    """
    log = logger if logger is not None else create_null_logger()

    ref = reader.read_ref_state()
    log.debug(
        "ref_state_read",
        branch=ref.branch,
        commit_id=ref.commit_id,
        upstream=ref.upstream,
        ahead=ref.ahead,
        behind=ref.behind,
    )

    diff = reader.read_diff_counts()
    log.debug(
        "diff_counts_read",
        staged=diff.staged,
        unstaged=diff.unstaged,
        untracked=diff.untracked,
        conflicted=diff.conflicted,
    )

    stash = reader.read_stash_state()
    log.debug("stash_state_read", count=stash.count)

    operation = reader.read_operation_marker(precedence)
    log.debug("operation_marker_read", operation=operation.value)

    return aggregate(ref, diff, stash, operation, short_id_length=short_id_length)


def collect_status(
    start: Path | None = None,
    *,
    settings: StatusConfig | None = None,
    logger: FilteringBoundLogger | None = None,
    reader_factory: ReaderFactory = StateReader,
) -> Status | None:
    """Compute the status of the repository enclosing a directory.

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.
        settings: Status collection settings. Defaults to StatusConfig().
        logger: Logger for pipeline events. Defaults to a null logger.
        reader_factory: Builds the state reader for an opened handle.

    Returns:
        The Status, or None when no repository encloses the start directory.

    Raises:
        StateReadError: If the repository cannot be opened or read.
    """
    config = settings if settings is not None else StatusConfig()
    log = logger if logger is not None else create_null_logger()

    try:
        handle = locate_repository(start, max_depth=config.max_depth)
    except NotARepositoryError as e:
        log.debug("repository_not_found", path=str(e.path))
        return None
    except StateReadError as e:
        log.exception("repository_unavailable", path=str(e.path), error=str(e))
        raise

    with handle:
        log.debug("repository_located", root=str(handle.root))
        try:
            status = read_status(
                reader_factory(handle),
                precedence=config.operation_precedence,
                short_id_length=config.short_id_length,
                logger=log,
            )
        except StateReadError as e:
            log.exception(
                "state_read_failed",
                root=str(handle.root),
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

    log.debug("status_collected", **status.to_dict())
    return status
