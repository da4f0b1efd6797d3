"""gitprompt exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class GitPromptError(Exception):
    """Base exception for gitprompt errors."""


# =============================================================================
# Repository Exceptions
# =============================================================================


class NotARepositoryError(GitPromptError):
    """Raised when no repository encloses the start directory.

    This is the single recoverable error: callers render an empty status.

    Attributes:
        path: The directory the search started from.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        """Initialize with error message and search start.

        Args:
            message: Human-readable error message.
            path: The directory the search started from.
        """
        super().__init__(message)
        self.path: Path = path


class StateReadError(GitPromptError):
    """Base exception for fatal failures reading repository state.

    Attributes:
        path: Root of the repository being read.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize with error message and repository context.

        Args:
            message: Human-readable error message.
            path: Root of the repository being read.
            cause: The underlying exception, if any.
        """
        super().__init__(message)
        self.path: Path | None = path
        self.cause: BaseException | None = cause


class RepositoryUnavailableError(StateReadError):
    """A repository marker was found but the repository cannot be opened."""


class RefReadError(StateReadError):
    """HEAD, branch, upstream or commit graph could not be read."""


class DiffComputationError(StateReadError):
    """The HEAD/index/working tree comparison failed."""


class StashReadError(StateReadError):
    """The stash reflog could not be read."""


class OperationMarkerReadError(StateReadError):
    """In-progress operation markers could not be inspected."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitPromptError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
