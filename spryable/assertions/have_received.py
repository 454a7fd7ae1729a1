"""
pytest-friendly assertions over a fake's recorded calls.

    assert_have_received(service, FakeService.Function.LOAD, "https://example.com")
    assert_have_received(service, FakeService.Function.LOAD, count=CountSpecifier.exactly(1))
    assert_have_recorded_calls(service)
"""
from __future__ import annotations

from typing import Any, Optional

from spryable.fakes.base import Spyable
from spryable.formatting.description import describe_selector, describe_value
from spryable.spying.recorded_call import CountSpecifier


def _describe_owner(fake: Any) -> str:
    owner = fake if isinstance(fake, type) else type(fake)
    return owner.__qualname__


def describe_expectation(fake: Any, selector: Any, arguments: tuple, count: CountSpecifier) -> str:
    description = f"receive <{describe_selector(selector)}> on <{_describe_owner(fake)}>"
    if arguments:
        description += " with " + ", ".join(f"<{describe_value(argument)}>" for argument in arguments)
    return f"{description} {count.phrase}"


def assert_have_received(
    fake: Spyable,
    selector: Any,
    *arguments: Any,
    count: Optional[CountSpecifier] = None,
) -> None:
    count = count or CountSpecifier.at_least(1)
    result = fake.did_call(selector, *arguments, count=count)
    if not result.success:
        expectation = describe_expectation(fake, selector, arguments, count)
        raise AssertionError(f"expected to {expectation}, got {result.recorded_calls_description}")


def assert_not_received(fake: Spyable, selector: Any, *arguments: Any) -> None:
    result = fake.did_call(selector, *arguments, count=CountSpecifier.exactly(0))
    if not result.success:
        expectation = describe_expectation(fake, selector, arguments, CountSpecifier.exactly(0))
        raise AssertionError(f"expected to {expectation}, got {result.recorded_calls_description}")


def _describe_count(count: int) -> str:
    pluralism = "" if count == 1 else "s"
    return f"{count} call{pluralism}"


def assert_have_recorded_calls(fake: Spyable) -> None:
    """Respects reset_calls(): calls made before a reset do not count."""
    recorded = len(fake.recorded_calls())
    if not recorded:
        raise AssertionError(f"expected to have recorded calls, got {_describe_count(recorded)}")


def assert_no_recorded_calls(fake: Spyable) -> None:
    recorded = len(fake.recorded_calls())
    if recorded:
        raise AssertionError(f"expected to not have recorded calls, got {_describe_count(recorded)}")
