from __future__ import annotations

from typing import Any, Sequence

from spryable.core.exceptions.local_exceptions import WrongArgumentCount
from spryable.matching.argument import Argument, ArgumentCaptor, is_nil
from spryable.matching.equality import is_equal


def is_equal_argument(specified: Any, actual: Any, capture: bool = False) -> bool:
    if isinstance(specified, Argument):
        return specified.matches(actual)

    if isinstance(specified, ArgumentCaptor):
        if capture:
            specified.capture(actual)
        return True

    if is_nil(specified) or is_nil(actual):
        return is_nil(specified) and is_nil(actual)

    return is_equal(specified, actual)


def matches(
    pattern: Sequence[Any],
    actual: Sequence[Any],
    *,
    capture: bool = False,
    selector: Any = None,
    owner: Any = None,
) -> bool:
    """
    Compare a declared pattern with the actual arguments of a call.

    An empty pattern means "any arguments" and matches without looking at
    ``actual``. Otherwise the lengths must agree (WrongArgumentCount) and each
    position is checked in order, stopping at the first mismatch.

    With ``capture=True`` captors record the value at their position as they
    are reached, so captors before a failing position have already fired.
    Stub resolution does not rely on this; it matches with capture off and
    fires the captors of the winning stub once (see record_captures).
    """
    if not pattern:
        return True

    if len(pattern) != len(actual):
        raise WrongArgumentCount(pattern, actual, selector=selector, owner=owner)

    for specified_arg, actual_arg in zip(pattern, actual):
        if not is_equal_argument(specified_arg, actual_arg, capture=capture):
            return False

    return True


def record_captures(pattern: Sequence[Any], actual: Sequence[Any]) -> None:
    for specified_arg, actual_arg in zip(pattern, actual):
        if isinstance(specified_arg, ArgumentCaptor):
            specified_arg.capture(actual_arg)


def is_equal_pattern_element(left: Any, right: Any) -> bool:
    if isinstance(left, Argument) or isinstance(right, Argument):
        return isinstance(left, Argument) and isinstance(right, Argument) and left == right

    if isinstance(left, ArgumentCaptor) or isinstance(right, ArgumentCaptor):
        return left is right

    if is_nil(left) or is_nil(right):
        return is_nil(left) and is_nil(right)

    return is_equal(left, right)


def patterns_equivalent(left: Sequence[Any], right: Sequence[Any]) -> bool:
    if len(left) != len(right):
        return False
    return all(is_equal_pattern_element(a, b) for a, b in zip(left, right))
