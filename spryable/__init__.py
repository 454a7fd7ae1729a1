from .fakes.base import Spryable, Spyable, Stubbable, scoped_method, spry_scope
from .matching.argument import Argument, ArgumentCaptor
from .matching.equality import is_equal
from .matching.matcher import matches
from .spying.call_ledger import CallLedger
from .spying.recorded_call import CountSpecifier, DidCallResult, RecordedCall
from .stubbing.stub import Stub
from .stubbing.stub_registry import NO_FALLBACK, StubRegistry
from .identity.identity_registry import IdentityRegistry, IdentityScope
from .core.container import Container, get_identity_registry
from .core.fatal_reporter import FatalErrorReporter
from .core.exceptions.base import ContractViolation, SpryableBaseException
from .core.exceptions import local_exceptions
from .assertions.have_received import (
    assert_have_received,
    assert_have_recorded_calls,
    assert_no_recorded_calls,
    assert_not_received,
)
