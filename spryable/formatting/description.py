from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from spryable.core.config import settings

_UNSET = object()


def _truncate(msg: str, limit: int | None) -> str:
    return (msg if not limit or len(msg) <= limit else f"{msg[:limit-1]}…")


def describe_selector(selector: Any) -> str:
    """Enum selectors render as their value, everything else via str()."""
    if isinstance(selector, Enum):
        return str(selector.value)
    return str(selector)


def describe_value(value: Any, limit: int | None | object = _UNSET) -> str:
    if limit is _UNSET:
        limit = settings.ARGUMENT_DESCRIPTION_LIMIT
    try:
        text = repr(value)
    except Exception as e:  # broken __repr__
        text = f"<unrepresentable {type(value).__name__}: {e}>"
    return _truncate(text, limit)


def describe_arguments(arguments: Iterable[Any], limit: int | None | object = _UNSET) -> str:
    """
    "<'a'>, <1>, <None>"
    """
    return ", ".join(f"<{describe_value(argument, limit)}>" for argument in arguments)


def friendly_description(selector: Any, arguments: Iterable[Any]) -> str:
    """
    "<selector>" or "<selector> with <a1>, <a2>"
    """
    head = f"<{describe_selector(selector)}>"
    args_string = describe_arguments(arguments)
    if args_string:
        return f"{head} with {args_string}"
    return head


def describe_type(tp: Any) -> str:
    if isinstance(tp, str):
        return tp
    if isinstance(tp, tuple):
        return " | ".join(describe_type(t) for t in tp)
    return getattr(tp, "__qualname__", repr(tp))
