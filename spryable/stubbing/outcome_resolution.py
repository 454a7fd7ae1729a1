from __future__ import annotations

import logging
from typing import Any, Sequence

from spryable.core.exceptions.local_exceptions import ResultTypeMismatch, ThrowOnNonThrowingMember
from spryable.core.fatal_reporter import FatalErrorReporter
from spryable.formatting.description import describe_selector
from spryable.matching.matcher import record_captures
from spryable.stubbing.stub import ReturnOutcome, SideEffectOutcome, ThrowOutcome
from spryable.stubbing.stub_registry import Resolution

logger = logging.getLogger(__name__)


def produce(
    resolution: Resolution,
    arguments: Sequence[Any],
    *,
    reporter: FatalErrorReporter,
    owner: Any = None,
    selector: Any = None,
    throws: bool = False,
    as_type: Any = None,
) -> Any:
    """
    Turn a resolution into what the faked member hands back to its caller.

    * fallback   -> the fallback value, untouched.
    * and_return -> the value.
    * and_do     -> closure(list(arguments)).
    * and_throw  -> the declared error is raised, provided the member was
                    declared as raising (``throws=True``); otherwise
                    ThrowOnNonThrowingMember.

    Captors in the pattern of the winning stub fire once, in position order,
    before the outcome is produced, unless the call is rejected because a
    non-throwing member was stubbed with and_throw. ``as_type`` checks the
    produced value with isinstance.
    """
    if resolution.is_fallback:
        return resolution.outcome.value

    stub = resolution.stub
    outcome = resolution.outcome
    if isinstance(outcome, ThrowOutcome) and not throws:
        reporter.fail(ThrowOnNonThrowingMember(owner, selector))

    if stub.has_pattern:
        record_captures(stub.pattern, arguments)

    if isinstance(outcome, ThrowOutcome):
        logger.debug(f"Raising stubbed {type(outcome.error).__name__} from <{describe_selector(selector)}>")
        raise outcome.error

    if isinstance(outcome, SideEffectOutcome):
        value = outcome.closure(list(arguments))
    elif isinstance(outcome, ReturnOutcome):
        value = outcome.value
    else:
        raise TypeError(f"Unknown outcome: {outcome!r}")

    if as_type is not None and not isinstance(value, as_type):
        reporter.fail(ResultTypeMismatch(owner, selector, value, as_type))

    return value
