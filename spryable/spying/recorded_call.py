from __future__ import annotations

from enum import Enum
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from spryable.formatting.description import describe_arguments, describe_selector, friendly_description


class RecordedCall(BaseModel):
    """One invocation of a faked member. Never mutated after creation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    selector: Any
    arguments: Tuple[Any, ...] = Field(default_factory=tuple)
    sequence_number: int = Field(ge=1)

    @computed_field
    @property
    def friendly_description(self) -> str:
        return friendly_description(self.selector, self.arguments)

    def __str__(self) -> str:
        return (
            f"RecordedCall(function: <{describe_selector(self.selector)}>, "
            f"arguments: <{describe_arguments(self.arguments)}>)"
        )


class CountKind(str, Enum):
    EXACTLY = "exactly"
    AT_LEAST = "at_least"
    AT_MOST = "at_most"


class CountSpecifier(BaseModel):
    """
    * exactly(n)  - succeeds only when the call count is n.
    * at_least(n) - succeeds when the call count is n or more.
    * at_most(n)  - succeeds when the call count is n or less.
    """

    model_config = ConfigDict(frozen=True)

    kind: CountKind
    count: int = Field(ge=0)

    @classmethod
    def exactly(cls, count: int) -> "CountSpecifier":
        return cls(kind=CountKind.EXACTLY, count=count)

    @classmethod
    def at_least(cls, count: int) -> "CountSpecifier":
        return cls(kind=CountKind.AT_LEAST, count=count)

    @classmethod
    def at_most(cls, count: int) -> "CountSpecifier":
        return cls(kind=CountKind.AT_MOST, count=count)

    def is_satisfied_by(self, times_called: int) -> bool:
        if self.kind is CountKind.EXACTLY:
            return times_called == self.count
        if self.kind is CountKind.AT_LEAST:
            return times_called >= self.count
        return times_called <= self.count

    @property
    def phrase(self) -> str:
        times = "time" if self.count == 1 else "times"
        label = {
            CountKind.EXACTLY: "exactly",
            CountKind.AT_LEAST: "at least",
            CountKind.AT_MOST: "at most",
        }[self.kind]
        return f"{label} {self.count} {times}"


class DidCallResult(BaseModel):
    """
    success: True if the member was called given the criteria specified.
    recorded_calls_description: every recorded call, helpful when success is False.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    recorded_calls_description: str

    def __bool__(self) -> bool:
        return self.success
