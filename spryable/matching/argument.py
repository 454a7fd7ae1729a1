"""
Argument specifiers used when stubbing and when asking whether a call happened.

* Argument.ANYTHING - every value matches, None included.
* Argument.NON_NIL  - every value except None matches.
* Argument.NIL      - only None matches.
* Argument.validator(fn) - matches when fn(actual) is truthy.
* Argument.captor() - always matches and collects the actual value once a stub
  resolves (see ArgumentCaptor).

Any other value placed in a pattern is a literal and is compared with
spryable.matching.equality.is_equal.
"""
from __future__ import annotations

import threading
from enum import Enum
from typing import Any, Callable, ClassVar, List, Optional

from spryable.core.exceptions.local_exceptions import (
    CapturedArgumentOutOfBounds,
    CapturedArgumentWrongType,
)
from spryable.core.fatal_reporter import FatalErrorReporter


def is_nil(value: Any) -> bool:
    return value is None


class ArgumentKind(str, Enum):
    ANYTHING = "anything"
    NON_NIL = "nonNil"
    NIL = "nil"
    VALIDATOR = "validator"


class Argument:
    __slots__ = ("kind", "validator_fn")

    ANYTHING: ClassVar["Argument"]
    NON_NIL: ClassVar["Argument"]
    NIL: ClassVar["Argument"]

    def __init__(self, kind: ArgumentKind, validator_fn: Optional[Callable[[Any], bool]] = None) -> None:
        self.kind = kind
        self.validator_fn = validator_fn

    @classmethod
    def validator(cls, fn: Callable[[Any], bool]) -> "Argument":
        return cls(ArgumentKind.VALIDATOR, fn)

    @staticmethod
    def captor() -> "ArgumentCaptor":
        """Convenience for ArgumentCaptor()."""
        return ArgumentCaptor()

    def matches(self, actual: Any) -> bool:
        if self.kind is ArgumentKind.ANYTHING:
            return True
        if self.kind is ArgumentKind.NON_NIL:
            return not is_nil(actual)
        if self.kind is ArgumentKind.NIL:
            return is_nil(actual)
        return bool(self.validator_fn(actual))

    # validators compare equal regardless of the wrapped function
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Argument):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        names = {
            ArgumentKind.ANYTHING: "ANYTHING",
            ArgumentKind.NON_NIL: "NON_NIL",
            ArgumentKind.NIL: "NIL",
            ArgumentKind.VALIDATOR: "validator",
        }
        return f"Argument.{names[self.kind]}"


Argument.ANYTHING = Argument(ArgumentKind.ANYTHING)
Argument.NON_NIL = Argument(ArgumentKind.NON_NIL)
Argument.NIL = Argument(ArgumentKind.NIL)


class ArgumentCaptor:
    """
    Collects the actual value passed at its position, once per call that
    resolves to the stub it was declared on.

    Example:
        captor = Argument.captor()
        fake.stub(Fake.Function.SEND).with_args(captor, "fixed").and_return(True)
        fake.send("v1", "fixed")
        assert captor.get_value() == "v1"
    """

    def __init__(self, reporter: Optional[FatalErrorReporter] = None) -> None:
        self._captured: List[Any] = []
        self._lock = threading.Lock()
        self.reporter = reporter

    def capture(self, argument: Any) -> None:
        with self._lock:
            self._captured.append(argument)

    @property
    def captured_values(self) -> List[Any]:
        with self._lock:
            return list(self._captured)

    def __len__(self) -> int:
        with self._lock:
            return len(self._captured)

    def get_value(self, at: int = 0, as_type: Any = None) -> Any:
        """
        Return the value captured during the ``at``-th matching call.

        ``as_type`` (a type or tuple of types) is checked with isinstance.
        Out-of-range indexes and type mismatches are contract violations.
        """
        captured = self.captured_values
        if at < 0 or at >= len(captured):
            self._fail(CapturedArgumentOutOfBounds(at, captured))

        value = captured[at]
        if as_type is not None and not isinstance(value, as_type):
            self._fail(CapturedArgumentWrongType(value, as_type))
        return value

    def _fail(self, violation):
        reporter = self.reporter
        if reporter is None:
            from spryable.core.container import get_fatal_reporter

            reporter = get_fatal_reporter()
        reporter.fail(violation)

    def __repr__(self) -> str:
        return f"ArgumentCaptor(captured={len(self)})"
