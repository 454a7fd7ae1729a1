"""
Stub declarations: which selector, which argument pattern, which outcome.

Returned by stub() / stub_again(). Use with_args() to constrain arguments and
exactly one of and_return(), and_do() or and_throw() to finish the stub:

    # arguments do NOT matter
    service.stub(Service.Function.LOAD).and_return("stubbed value")

    # arguments matter
    service.stub(Service.Function.LOAD).with_args("expected").and_return("stubbed value")

    # compute the value from the actual arguments
    service.stub(Service.Function.LOAD).and_do(lambda args: args[0].upper())

    # raise from a member faked with spryify_throws() / stubbed_value_throws()
    service.stub(Service.Function.LOAD).and_throw(TimeoutError("boom"))
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from spryable.core.exceptions.local_exceptions import StubAlreadyComplete
from spryable.core.fatal_reporter import FatalErrorReporter
from spryable.formatting.description import (
    describe_arguments,
    describe_selector,
    describe_value,
    friendly_description,
)
from spryable.matching.argument import ArgumentCaptor
from spryable.matching.matcher import patterns_equivalent


class ReturnOutcome(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = None

    def __str__(self) -> str:
        return f"and_return({describe_value(self.value)})"


class SideEffectOutcome(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    closure: Callable[[List[Any]], Any]

    def __str__(self) -> str:
        return "and_do(<closure>)"


class ThrowOutcome(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    error: BaseException

    def __str__(self) -> str:
        return f"and_throw({describe_value(self.error)})"


Outcome = Union[ReturnOutcome, SideEffectOutcome, ThrowOutcome]


class Stub:
    """
    Mutable only until an outcome is set. Setting the outcome marks the stub
    complete and hands it to the completion handler (duplicate detection).
    """

    def __init__(
        self,
        selector: Any,
        sequence_number: int,
        on_complete: Optional[Callable[["Stub"], None]] = None,
        replaces_duplicates: bool = False,
        reporter: Optional[FatalErrorReporter] = None,
    ) -> None:
        self.selector = selector
        self.sequence_number = sequence_number
        self.replaces_duplicates = replaces_duplicates
        self._pattern: List[Any] = []
        self._outcome: Optional[Outcome] = None
        self._on_complete = on_complete
        self._reporter = reporter

    @property
    def pattern(self) -> Tuple[Any, ...]:
        return tuple(self._pattern)

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    @property
    def is_complete(self) -> bool:
        return self._outcome is not None

    @property
    def has_pattern(self) -> bool:
        return bool(self._pattern)

    def with_args(self, *arguments: Any) -> "Stub":
        """
        Constrain the arguments this stub answers to. Without it the stub
        answers to any arguments.
        """
        if self.is_complete:
            self._fail(StubAlreadyComplete(self.selector, "with_args"))
        for argument in arguments:
            if isinstance(argument, ArgumentCaptor) and argument.reporter is None:
                argument.reporter = self._reporter
        self._pattern.extend(arguments)
        return self

    def and_return(self, value: Any = None) -> None:
        self._complete(ReturnOutcome(value=value), "and_return")

    def and_do(self, closure: Callable[[List[Any]], Any]) -> None:
        """``closure`` receives the actual arguments as a list; its result is returned."""
        self._complete(SideEffectOutcome(closure=closure), "and_do")

    def and_throw(self, error: BaseException) -> None:
        self._complete(ThrowOutcome(error=error), "and_throw")

    def _complete(self, outcome: Outcome, attempted: str) -> None:
        if self.is_complete:
            self._fail(StubAlreadyComplete(self.selector, attempted))
        self._outcome = outcome
        if self._on_complete is not None:
            self._on_complete(self)

    def _fail(self, violation: StubAlreadyComplete) -> None:
        if self._reporter is not None:
            self._reporter.fail(violation)
        raise violation

    def has_equal_base(self, other: "Stub") -> bool:
        return self.selector == other.selector and patterns_equivalent(self._pattern, other._pattern)

    @property
    def friendly_description(self) -> str:
        return friendly_description(self.selector, self._pattern)

    def __repr__(self) -> str:
        outcome = "None" if self._outcome is None else str(self._outcome)
        return (
            f"Stub(function: <{describe_selector(self.selector)}>, args: <{describe_arguments(self._pattern)}>, "
            f"returnValue: <{outcome}>)"
        )
