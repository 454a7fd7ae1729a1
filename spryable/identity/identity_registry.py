from __future__ import annotations

import logging
import threading
import weakref
from typing import Any, Dict, Optional, Sequence, Tuple

from spryable.core.exceptions.local_exceptions import UnreferenceableIdentity
from spryable.core.fatal_reporter import FatalErrorReporter
from spryable.spying.call_ledger import CallLedger
from spryable.spying.recorded_call import CountSpecifier, DidCallResult, RecordedCall
from spryable.stubbing.outcome_resolution import produce
from spryable.stubbing.stub import Stub
from spryable.stubbing.stub_registry import NO_FALLBACK, StubRegistry

logger = logging.getLogger(__name__)


def owner_name(identity: Any) -> str:
    owner = identity if isinstance(identity, type) else type(identity)
    return owner.__qualname__


class IdentityScope:
    """
    The call ledger and stub registry of one identity (a fake instance or a
    fake class), both guarded by the same per-identity lock. Only the owner's
    type name is kept, so the scope never keeps its identity alive.
    """

    def __init__(self, owner: str, reporter: FatalErrorReporter, permit_fallback: bool = True) -> None:
        self.owner = owner
        self.reporter = reporter
        self.lock = threading.RLock()
        self.ledger = CallLedger(lock=self.lock, owner=owner)
        self.stubs = StubRegistry(
            lock=self.lock,
            owner=owner,
            reporter=reporter,
            permit_fallback=permit_fallback,
        )

    # ---- spying ----

    def record(self, selector: Any, arguments: Sequence[Any] = ()) -> RecordedCall:
        return self.ledger.record(selector, arguments)

    def did_call(
        self,
        selector: Any,
        pattern: Sequence[Any] = (),
        count: Optional[CountSpecifier] = None,
    ) -> DidCallResult:
        with self.reporter.guard():
            return self.ledger.did_call(selector, pattern, count)

    # ---- stubbing ----

    def stub(self, selector: Any) -> Stub:
        return self.stubs.declare(selector)

    def stub_again(self, selector: Any) -> Stub:
        return self.stubs.declare_again(selector)

    def stubbed_value(
        self,
        selector: Any,
        arguments: Sequence[Any] = (),
        *,
        fallback: Any = NO_FALLBACK,
        throws: bool = False,
        as_type: Any = None,
    ) -> Any:
        resolution = self.stubs.resolve(selector, arguments, fallback=fallback)
        # outside the lock: and_do closures may call back into this fake
        return produce(
            resolution,
            arguments,
            reporter=self.reporter,
            owner=self.owner,
            selector=selector,
            throws=throws,
            as_type=as_type,
        )

    # ---- resets ----

    def reset_calls(self) -> None:
        self.ledger.reset()

    def reset_stubs(self) -> None:
        self.stubs.reset()

    def reset_calls_and_stubs(self) -> None:
        with self.lock:
            self.reset_calls()
            self.reset_stubs()


class IdentityRegistry:
    """
    Process-wide side table: identity -> IdentityScope.

    Keyed by object identity (never by __eq__/__hash__) and holding the
    identity only weakly; the entry is evicted when the identity is
    collected. The table lock only covers lookup and creation; everything
    else runs under the scope's own lock.

    Recorded arguments and stub patterns are held strongly. An identity that
    appears in its own recorded calls or stubs stays alive (and keeps its
    scope) until reset_calls() / reset_stubs() drops those references.
    """

    def __init__(self, reporter: Optional[FatalErrorReporter] = None, permit_fallback: bool = True) -> None:
        self.reporter = reporter or FatalErrorReporter()
        self.permit_fallback = permit_fallback
        self._scopes: Dict[int, Tuple[weakref.ref, IdentityScope]] = {}
        self._table_lock = threading.RLock()

    def scope_for(self, identity: Any) -> IdentityScope:
        key = id(identity)
        with self._table_lock:
            entry = self._scopes.get(key)
            if entry is not None and entry[0]() is identity:
                return entry[1]

            try:
                ref = weakref.ref(identity, self._evictor(key))
            except TypeError:
                self.reporter.fail(UnreferenceableIdentity(identity))

            scope = IdentityScope(owner_name(identity), self.reporter, self.permit_fallback)
            self._scopes[key] = (ref, scope)
            logger.debug(f"Created scope for {scope.owner} identity {key:#x}")
            return scope

    def _evictor(self, key: int):
        table = weakref.ref(self)

        def evict(ref: weakref.ref) -> None:
            registry = table()
            if registry is None:
                return
            with registry._table_lock:
                entry = registry._scopes.get(key)
                if entry is not None and entry[0] is ref:
                    del registry._scopes[key]

        return evict

    def has_scope(self, identity: Any) -> bool:
        with self._table_lock:
            entry = self._scopes.get(id(identity))
            return entry is not None and entry[0]() is identity

    def discard(self, identity: Any) -> None:
        with self._table_lock:
            entry = self._scopes.get(id(identity))
            if entry is not None and entry[0]() is identity:
                del self._scopes[id(identity)]

    def clear(self) -> None:
        with self._table_lock:
            self._scopes.clear()

    def __len__(self) -> int:
        with self._table_lock:
            return sum(1 for ref, _ in self._scopes.values() if ref() is not None)
