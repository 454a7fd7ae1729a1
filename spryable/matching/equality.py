"""
Equality used for literal arguments and for comparing stub patterns.

* Identical objects are always equal.
* list/tuple compare elementwise (same container type, same length).
* dict/Mapping compare key sets, then values recursively.
* set/frozenset use their own __eq__ (elements are hashable).
* A type that overrides __eq__ uses it; the result must be usable as a bool.
* Anything else falls back to identity.

A value whose __eq__ raises or answers with something other than a bool
(e.g. an elementwise comparison of arrays) has no usable equality and raises
NotComparable.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from spryable.core.exceptions.local_exceptions import NotComparable


def has_declared_equality(value: Any) -> bool:
    return type(value).__eq__ is not object.__eq__


def is_equal(expected: Any, actual: Any) -> bool:
    if expected is actual:
        return True
    if expected is None or actual is None:
        return False

    if isinstance(expected, (list, tuple)):
        return _is_equal_sequence(expected, actual)

    if isinstance(expected, Mapping):
        return _is_equal_mapping(expected, actual)

    if has_declared_equality(expected):
        return _declared_equality(expected, actual)

    return False


def _is_equal_sequence(expected, actual) -> bool:
    if type(actual) is not type(expected):
        return False
    if len(expected) != len(actual):
        return False
    for expected_element, actual_element in zip(expected, actual):
        if not is_equal(expected_element, actual_element):
            return False
    return True


def _is_equal_mapping(expected: Mapping, actual: Any) -> bool:
    if not isinstance(actual, Mapping):
        return False
    if len(expected) != len(actual):
        return False
    for key, value in expected.items():
        if key not in actual:
            return False
        if not is_equal(value, actual[key]):
            return False
    return True


def _call_eq(owner: Any, other: Any) -> Any:
    try:
        return type(owner).__eq__(owner, other)
    except Exception as e:
        raise NotComparable(owner, reason=f"__eq__ raised {type(e).__name__}: {e}") from e


def _declared_equality(expected: Any, actual: Any) -> bool:
    # same order as ==: a subclass operand is asked first, then the reflected side
    first, second = expected, actual
    if type(actual) is not type(expected) and isinstance(actual, type(expected)):
        first, second = actual, expected

    owner, result = first, _call_eq(first, second)
    if result is NotImplemented:
        owner, result = second, _call_eq(second, first)
    if result is NotImplemented:
        return False

    if isinstance(result, bool):
        return result
    try:
        return bool(result)
    except Exception as e:
        raise NotComparable(owner, reason=f"__eq__ returned {type(result).__name__}, not bool") from e
