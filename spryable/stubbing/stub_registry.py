from __future__ import annotations

import logging
import threading
from typing import Any, List, NamedTuple, Optional, Sequence

from spryable.core.exceptions.local_exceptions import DuplicateStub, IncompleteStub, NoStubFound
from spryable.core.fatal_reporter import FatalErrorReporter
from spryable.formatting.description import describe_arguments, describe_selector
from spryable.matching.matcher import matches
from spryable.stubbing.stub import Outcome, ReturnOutcome, Stub

logger = logging.getLogger(__name__)

EMPTY_DESCRIPTION = "<>"


class _NoFallback:
    def __repr__(self) -> str:
        return "NO_FALLBACK"


NO_FALLBACK: Any = _NoFallback()


class Resolution(NamedTuple):
    """The outcome to produce and the stub it came from (None for a fallback)."""

    outcome: Outcome
    stub: Optional[Stub]

    @property
    def is_fallback(self) -> bool:
        return self.stub is None


class StubRegistry:
    """
    Stubs declared on one identity.

    Resolution order for a call:
      1. stubs with an argument pattern, most recently declared first,
         first one whose pattern matches wins;
      2. otherwise stubs without a pattern, most recently declared first;
      3. otherwise the caller's fallback, or NoStubFound.
    """

    def __init__(
        self,
        lock: Optional[threading.RLock] = None,
        owner: Any = None,
        reporter: Optional[FatalErrorReporter] = None,
        permit_fallback: bool = True,
    ) -> None:
        self._lock = lock or threading.RLock()
        self._owner = owner
        self._reporter = reporter or FatalErrorReporter()
        self.permit_fallback = permit_fallback
        self._stubs: List[Stub] = []
        self._stubs_count = 0

    @property
    def stubs_count(self) -> int:
        """Number of stubs ever declared. Not reset by reset() or stub_again()."""
        return self._stubs_count

    @property
    def stubs(self) -> List[Stub]:
        """All current stubs, in declaration order."""
        with self._lock:
            return list(self._stubs)

    def stubs_for(self, selector: Any) -> List[Stub]:
        with self._lock:
            return [stub for stub in self._stubs if stub.selector == selector]

    def declare(self, selector: Any, again: bool = False) -> Stub:
        with self._lock:
            self._stubs_count += 1
            stub = Stub(
                selector,
                sequence_number=self._stubs_count,
                on_complete=self._on_stub_complete,
                replaces_duplicates=again,
                reporter=self._reporter,
            )
            self._stubs.append(stub)
        logger.debug(f"Declared stub #{stub.sequence_number} for <{describe_selector(selector)}>")
        return stub

    def declare_again(self, selector: Any) -> Stub:
        return self.declare(selector, again=True)

    def completed_duplicates(self, stub: Stub) -> List[Stub]:
        if not stub.is_complete:
            return []
        return [
            other
            for other in self.stubs_for(stub.selector)
            if other is not stub and other.is_complete and other.has_equal_base(stub)
        ]

    def _on_stub_complete(self, stub: Stub) -> None:
        with self._lock:
            try:
                with self._reporter.guard():
                    duplicates = self.completed_duplicates(stub)
            except Exception:
                # a stub whose declaration failed is never kept
                self._remove([stub])
                raise

            if not duplicates:
                return

            if stub.replaces_duplicates:
                self._remove(duplicates)
                logger.debug(
                    f"stub_again replaced {len(duplicates)} stub(s) for <{describe_selector(stub.selector)}>"
                )
                return

            self._remove([stub])

        self._reporter.fail(DuplicateStub(stub.selector, stub.pattern))

    def _remove(self, removing: Sequence[Stub]) -> None:
        removing_ids = {id(stub) for stub in removing}
        self._stubs = [stub for stub in self._stubs if id(stub) not in removing_ids]

    def find(self, selector: Any, arguments: Sequence[Any]) -> Optional[Stub]:
        candidates = self.stubs_for(selector)
        with_pattern = [stub for stub in candidates if stub.has_pattern]
        without_pattern = [stub for stub in candidates if not stub.has_pattern]

        for stub in reversed(with_pattern):
            if matches(stub.pattern, arguments, selector=selector, owner=self._owner):
                return self._ensure_complete(stub)

        if without_pattern:
            return self._ensure_complete(without_pattern[-1])

        return None

    def _ensure_complete(self, stub: Stub) -> Stub:
        if not stub.is_complete:
            self._reporter.fail(IncompleteStub(stub.selector))
        return stub

    def resolve(self, selector: Any, arguments: Sequence[Any], fallback: Any = NO_FALLBACK) -> Resolution:
        with self._reporter.guard():
            stub = self.find(selector, arguments)

        if stub is not None:
            logger.debug(
                f"Resolved <{describe_selector(selector)}> to stub #{stub.sequence_number} ({stub.outcome})"
            )
            return Resolution(outcome=stub.outcome, stub=stub)

        if fallback is not NO_FALLBACK and self.permit_fallback:
            logger.warning(
                f"No stub for <{describe_selector(selector)}> with {describe_arguments(arguments) or '<>'}; "
                f"using fallback value"
            )
            return Resolution(outcome=ReturnOutcome(value=fallback), stub=None)

        self._reporter.fail(
            NoStubFound(self._owner, selector, arguments, self.describe_for(selector))
        )

    def describe_for(self, selector: Any) -> str:
        stubs = self.stubs_for(selector)
        if not stubs:
            return EMPTY_DESCRIPTION
        return "; ".join(repr(stub) for stub in stubs)

    @property
    def friendly_description(self) -> str:
        stubs = self.stubs
        if not stubs:
            return EMPTY_DESCRIPTION
        return "; ".join(stub.friendly_description for stub in stubs)

    def reset(self) -> None:
        with self._lock:
            self._stubs = []
