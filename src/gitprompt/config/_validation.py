# pyright: reportAny=false, reportExplicitAny=false, reportUnknownArgumentType=false, reportUnknownMemberType=false, reportUnknownParameterType=false, reportUnknownVariableType=false
"""Configuration validation using Pydantic schemas.

This module validates gitprompt configuration dictionaries. It uses the
frozen Pydantic models from _models/ and provides strict variants that
reject unknown keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from gitprompt.config._models._logging import LoggingConfig
from gitprompt.config._models._render import (
    OperationLabels,
    RenderConfig,
    SegmentColors,
)
from gitprompt.config._models._status import StatusConfig
from gitprompt.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


# -----------------------------------------------------------------------------
# Validation Issue
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Represents a configuration validation issue.

    Attributes:
        key: Dotted path to the configuration key (e.g., "render.color").
        message: Human-readable description of the issue.
        expected: Description of expected value or type, if available.
        actual: The actual value that caused the issue.
        source: Name of the ConfigSource where the issue was found, or None.
        severity: Whether this is an error or warning.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    source: str | None
    severity: Literal["error", "warning"]


# -----------------------------------------------------------------------------
# Pydantic Schemas (Lenient Mode - ignores unknown keys)
# -----------------------------------------------------------------------------


class ConfigSchema(BaseModel):
    """Pydantic schema for root configuration (lenient mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    render: RenderConfig = RenderConfig()
    status: StatusConfig = StatusConfig()
    logging: LoggingConfig = LoggingConfig()


# -----------------------------------------------------------------------------
# Pydantic Schemas (Strict Mode - rejects unknown keys)
# -----------------------------------------------------------------------------


class SegmentColorsStrict(SegmentColors):
    """Pydantic schema for render.colors (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class OperationLabelsStrict(OperationLabels):
    """Pydantic schema for render.operation_labels (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class RenderConfigStrict(RenderConfig):
    """Pydantic schema for render configuration section (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    colors: SegmentColorsStrict = SegmentColorsStrict()
    operation_labels: OperationLabelsStrict = OperationLabelsStrict()


class StatusConfigStrict(StatusConfig):
    """Pydantic schema for status configuration section (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class LoggingConfigStrict(LoggingConfig):
    """Pydantic schema for logging configuration section (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class ConfigSchemaStrict(BaseModel):
    """Pydantic schema for root configuration (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    render: RenderConfigStrict = RenderConfigStrict()
    status: StatusConfigStrict = StatusConfigStrict()
    logging: LoggingConfigStrict = LoggingConfigStrict()


# -----------------------------------------------------------------------------
# Validation Functions
# -----------------------------------------------------------------------------


def _pydantic_error_to_issue(
    error: ErrorDetails,
    source: str | None,
) -> ValidationIssue:
    """Convert a Pydantic error dict to a ValidationIssue.

    Args:
        error: A single error dict from ValidationError.errors().
        source: The ConfigSourceName value, or None for merged config.

    Returns:
        A ValidationIssue representing the validation error.
    """
    loc = error.get("loc", ())
    key = ".".join(str(part) for part in loc)

    message = str(error.get("msg", "Validation error"))

    ctx = error.get("ctx")
    expected: str | None = None
    if ctx is not None:
        if "expected" in ctx:
            expected = str(ctx["expected"])
        elif "ge" in ctx:
            expected = f">= {ctx['ge']}"
        elif "le" in ctx:
            expected = f"<= {ctx['le']}"

    return ValidationIssue(
        key=key,
        message=message,
        expected=expected,
        actual=error.get("input"),
        source=source,
        severity="error",
    )


def validate_config(
    config: dict[str, Any],
    *,
    strict: bool = False,
) -> list[ValidationIssue]:
    """Validate a merged configuration dictionary.

    Args:
        config: The merged configuration dictionary to validate.
        strict: If True, unknown keys are errors. If False, they are ignored.

    Returns:
        List of ValidationIssue objects. Empty list indicates valid config.
    """
    schema_class = ConfigSchemaStrict if strict else ConfigSchema

    try:
        _ = schema_class.model_validate(config)
    except ValidationError as e:
        return [_pydantic_error_to_issue(err, source=None) for err in e.errors()]
    else:
        return []


def raise_if_validation_errors(
    issues: list[ValidationIssue],
    source: str | None = None,
) -> None:
    """Raise ConfigValidationError if any validation errors exist.

    Args:
        issues: List of ValidationIssue objects to check.
        source: Optional source string to use in the exception.
            If not provided, uses the source from the first error.

    Raises:
        ConfigValidationError: If any issues have severity="error".
    """
    errors = [i for i in issues if i.severity == "error"]
    if errors:
        issue = errors[0]
        msg = f"Invalid configuration value for '{issue.key}': {issue.message}"
        raise ConfigValidationError(
            msg,
            key=issue.key,
            value=issue.actual,
            expected=issue.expected or issue.message,
            source=source or issue.source,
        )
