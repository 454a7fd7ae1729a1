from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from spryable.core.exceptions.local_exceptions import UnknownSelector
from spryable.core.fatal_reporter import FatalErrorReporter

INSTANCE_SELECTORS = "Function"
CLASS_SELECTORS = "ClassFunction"


def selector_enum(target: Any) -> Optional[type]:
    """The enum declaring the selectors valid for ``target``, if the fake declares one."""
    if isinstance(target, type):
        declared = getattr(target, CLASS_SELECTORS, None)
    else:
        declared = getattr(type(target), INSTANCE_SELECTORS, None)
    if isinstance(declared, type) and issubclass(declared, Enum):
        return declared
    return None


def resolve_selector(target: Any, selector: Any, reporter: FatalErrorReporter) -> Any:
    """
    Coerce ``selector`` through the fake's declared enum.

    Members pass through, raw values are looked up by value, anything else
    is UnknownSelector. Fakes without a declared enum accept any hashable
    selector as-is.
    """
    enum_type = selector_enum(target)
    if enum_type is None:
        return selector

    if isinstance(selector, enum_type):
        return selector

    try:
        return enum_type(selector)
    except ValueError:
        owner = target if isinstance(target, type) else type(target)
        reporter.fail(UnknownSelector(owner, selector, enum_type))
