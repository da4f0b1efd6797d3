"""Status collection configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gitprompt.enums import DEFAULT_OPERATION_PRECEDENCE, Operation
from gitprompt.repository import DEFAULT_MAX_DEPTH


class StatusConfig(BaseModel):
    """Status collection configuration section.

    Attributes:
        operation_precedence: Operations in priority order when several
            in-progress markers are present at once.
        short_id_length: Hex digits shown for a detached HEAD.
        max_depth: Parent directories searched for a repository.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    operation_precedence: tuple[Operation, ...] = DEFAULT_OPERATION_PRECEDENCE
    short_id_length: int = Field(default=7, ge=4, le=40)
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)

    @field_validator("operation_precedence")
    @classmethod
    def _check_precedence(cls, value: tuple[Operation, ...]) -> tuple[Operation, ...]:
        expected = set(Operation) - {Operation.NONE}
        if Operation.NONE in value:
            msg = "'none' cannot appear in operation_precedence"
            raise ValueError(msg)
        if len(value) != len(expected) or set(value) != expected:
            names = ", ".join(sorted(op.value for op in expected))
            msg = f"operation_precedence must list each of {names} exactly once"
            raise ValueError(msg)
        return value
