from __future__ import annotations

import functools
import types
from typing import Any, Callable, Optional

from spryable.core.container import get_identity_registry
from spryable.identity.identity_registry import IdentityRegistry, IdentityScope
from spryable.fakes.selectors import resolve_selector
from spryable.spying.recorded_call import CountSpecifier, DidCallResult, RecordedCall
from spryable.stubbing.stub import Stub
from spryable.stubbing.stub_registry import NO_FALLBACK


class scoped_method:
    """
    Binds to the instance when looked up on an instance and to the class when
    looked up on the class, so ``fake.stub(...)`` works on the instance's
    ledger/registry and ``Fake.stub(...)`` on the type-level one.
    """

    def __init__(self, func: Callable) -> None:
        self.func = func
        functools.update_wrapper(self, func)

    def __get__(self, obj: Any, objtype: Optional[type] = None) -> Callable:
        target = objtype if obj is None else obj
        return types.MethodType(self.func, target)


def _registry_for(target: Any) -> IdentityRegistry:
    owner = target if isinstance(target, type) else type(target)
    registry = getattr(owner, "_spry_registry", None)
    if registry is not None:
        return registry

    return get_identity_registry()


def spry_scope(target: Any) -> IdentityScope:
    """The ledger/registry pair owned by ``target`` (a fake instance or class)."""
    return _registry_for(target).scope_for(target)


def _selector(target: Any, selector: Any) -> Any:
    return resolve_selector(target, selector, _registry_for(target).reporter)


class Spyable:
    """
    Records calls for assertions.

    Declare a ``Function`` enum (and ``ClassFunction`` for classmethods) to
    have selectors validated; call ``record_call`` from each faked member.
    """

    _spry_registry: Optional[IdentityRegistry] = None

    @scoped_method
    def record_call(self, selector: Any, *arguments: Any) -> RecordedCall:
        return spry_scope(self).record(_selector(self, selector), arguments)

    @scoped_method
    def did_call(
        self,
        selector: Any,
        *arguments: Any,
        count: Optional[CountSpecifier] = None,
    ) -> DidCallResult:
        """
        Was ``selector`` called ``count`` times (default: at least once) with
        arguments matching ``arguments``? No arguments means any arguments.
        """
        return spry_scope(self).did_call(_selector(self, selector), arguments, count)

    @scoped_method
    def recorded_calls(self) -> list[RecordedCall]:
        return spry_scope(self).ledger.calls

    @scoped_method
    def has_recorded_calls(self) -> bool:
        return spry_scope(self).ledger.has_recorded_calls()

    @scoped_method
    def reset_calls(self) -> None:
        spry_scope(self).reset_calls()


class Stubbable:
    """
    Answers calls with pre-programmed outcomes.

    Return ``stubbed_value(...)`` (or ``stubbed_value_throws(...)`` for
    members that may raise) from each faked member.
    """

    _spry_registry: Optional[IdentityRegistry] = None

    @scoped_method
    def stub(self, selector: Any) -> Stub:
        return spry_scope(self).stub(_selector(self, selector))

    @scoped_method
    def stub_again(self, selector: Any) -> Stub:
        """Like stub(), but silently replaces a previous stub with the same arguments."""
        return spry_scope(self).stub_again(_selector(self, selector))

    @scoped_method
    def stubbed_value(
        self,
        selector: Any,
        *arguments: Any,
        fallback: Any = NO_FALLBACK,
        as_type: Any = None,
    ) -> Any:
        return spry_scope(self).stubbed_value(
            _selector(self, selector), arguments, fallback=fallback, as_type=as_type
        )

    @scoped_method
    def stubbed_value_throws(
        self,
        selector: Any,
        *arguments: Any,
        fallback: Any = NO_FALLBACK,
        as_type: Any = None,
    ) -> Any:
        return spry_scope(self).stubbed_value(
            _selector(self, selector), arguments, fallback=fallback, throws=True, as_type=as_type
        )

    @scoped_method
    def reset_stubs(self) -> None:
        spry_scope(self).reset_stubs()


class Spryable(Spyable, Stubbable):
    """
    Spy and stub in one: ``spryify`` records the call and returns the
    stubbed value.

    Example:
        class FakeService(Spryable):
            class Function(str, Enum):
                LOAD = "load(url)"

            def load(self, url):
                return self.spryify(self.Function.LOAD, url)
    """

    @scoped_method
    def spryify(
        self,
        selector: Any,
        *arguments: Any,
        fallback: Any = NO_FALLBACK,
        as_type: Any = None,
    ) -> Any:
        selector = _selector(self, selector)
        scope = spry_scope(self)
        scope.record(selector, arguments)
        return scope.stubbed_value(selector, arguments, fallback=fallback, as_type=as_type)

    @scoped_method
    def spryify_throws(
        self,
        selector: Any,
        *arguments: Any,
        fallback: Any = NO_FALLBACK,
        as_type: Any = None,
    ) -> Any:
        selector = _selector(self, selector)
        scope = spry_scope(self)
        scope.record(selector, arguments)
        return scope.stubbed_value(selector, arguments, fallback=fallback, throws=True, as_type=as_type)

    @scoped_method
    def reset_calls_and_stubs(self) -> None:
        spry_scope(self).reset_calls_and_stubs()
