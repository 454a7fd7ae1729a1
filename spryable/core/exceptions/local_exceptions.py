"""
Contract violations raised by the Spryable core.
"""
from typing import Any, Optional, Sequence

from spryable.core.exceptions.base import ContractViolation
from spryable.formatting.description import (
    describe_arguments,
    describe_selector,
    describe_type,
    describe_value,
)


class WrongArgumentCount(ContractViolation):
    """A pattern was compared against an argument list of a different length"""

    title = "Wrong number of arguments to compare"

    def __init__(self, specified: Sequence[Any], actual: Sequence[Any], selector: Any = None, owner: Any = None):
        entries = []
        if owner is not None:
            entries.append(f"Type: {describe_type(owner)}")
        if selector is not None:
            entries.append(f"Function: {describe_selector(selector)}")
        entries += [
            f"Specified count: {len(specified)}",
            f"Received count: {len(actual)}",
            f"Specified arguments: {describe_arguments(specified)}",
            f"Actual arguments: {describe_arguments(actual)}",
        ]
        super().__init__(entries, internal_context={"selector": selector})


class NotComparable(ContractViolation):
    """Equality was requested on a value without a usable equality definition"""

    title = "SpryEquatable required"

    def __init__(self, value: Any, reason: Optional[str] = None):
        entries = [f"{describe_type(type(value))} must provide a boolean __eq__ (or rely on identity)"]
        if reason:
            entries.append(f"Reason: {reason}")
        entries.append(f"Value: {describe_value(value)}")
        super().__init__(entries, internal_context={"value_type": type(value)})


class DuplicateStub(ContractViolation):
    """Same selector stubbed twice with an equivalent pattern"""

    title = "Stubbing the same function with the same arguments"

    def __init__(self, selector: Any, pattern: Sequence[Any]):
        entries = [
            f"Function: {describe_selector(selector)}",
            f"Arguments: {describe_arguments(pattern)}",
            'In most cases, stubbing the same function with the same arguments is a "code smell"',
            "However, if this is intentional then use `.stub_again()`",
        ]
        super().__init__(entries, internal_context={"selector": selector})


class NoStubFound(ContractViolation):
    """Resolution found no matching stub and no fallback was supplied"""

    title = "No return value found"

    def __init__(self, owner: Any, selector: Any, arguments: Sequence[Any], stubs_description: str):
        entries = [
            f"Stubbable: {describe_type(owner)}",
            f"Function: {describe_selector(selector)}",
            f"Arguments: {describe_arguments(arguments)}",
            f"Current stubs: {stubs_description}",
        ]
        super().__init__(entries, internal_context={"selector": selector})


class CapturedArgumentOutOfBounds(ContractViolation):
    title = "Argument Capture: index out of bounds"

    def __init__(self, index: int, captured: Sequence[Any]):
        entries = [
            f"Index {index} is out of bounds for captured arguments",
            f"Current captured arguments: {describe_arguments(captured)}",
        ]
        super().__init__(entries, internal_context={"index": index})


class CapturedArgumentWrongType(ContractViolation):
    title = "Argument Capture: wrong argument type"

    def __init__(self, value: Any, expected_type: Any):
        entries = [
            f"Captured argument: {describe_value(value)}",
            f"Specified type: {describe_type(expected_type)}",
        ]
        super().__init__(entries)


class ThrowOnNonThrowingMember(ContractViolation):
    title = "Used '.and_throw()' on non-throwing function"

    def __init__(self, owner: Any, selector: Any):
        entries = [
            f"Stubbable: {describe_type(owner)}",
            f"Function: {describe_selector(selector)}",
            "If this function can raise, then ensure that the fake is calling "
            "'spryify_throws()' or 'stubbed_value_throws()' as the return value of this function.",
        ]
        super().__init__(entries, internal_context={"selector": selector})


class IncompleteStub(ContractViolation):
    title = "Incomplete Stub"

    def __init__(self, selector: Any):
        entries = [
            f"Function: {describe_selector(selector)}",
            "Must add '.and_return()', '.and_do()', or '.and_throw()' when stubbing a function",
        ]
        super().__init__(entries, internal_context={"selector": selector})


class StubAlreadyComplete(ContractViolation):
    title = "Stub already has an outcome"

    def __init__(self, selector: Any, attempted: str):
        entries = [
            f"Function: {describe_selector(selector)}",
            f"Attempted: '{attempted}'",
            "Only one of '.and_return()', '.and_do()', or '.and_throw()' may be used per stub, "
            "and '.with_args()' must come before it",
            "Call '.stub()' again to declare another stub",
        ]
        super().__init__(entries, internal_context={"selector": selector})


class ResultTypeMismatch(ContractViolation):
    title = "Stubbed value has the wrong type"

    def __init__(self, owner: Any, selector: Any, value: Any, expected_type: Any):
        entries = [
            f"Stubbable: {describe_type(owner)}",
            f"Function: {describe_selector(selector)}",
            f"Stubbed value: {describe_value(value)} ({describe_type(type(value))})",
            f"Return Type: {describe_type(expected_type)}",
        ]
        super().__init__(entries, internal_context={"selector": selector})


class UnknownSelector(ContractViolation):
    title = "Unable to find function"

    def __init__(self, owner: Any, selector: Any, enum_type: Any):
        raw = describe_selector(selector)
        case_name = raw.split("(", 1)[0] or "member"
        entries = [
            f"Type: {describe_type(owner)}",
            f"Function signature: {raw}",
            f"Declared in: {describe_type(enum_type)}",
            "Possible Fix: ↴",
            f'{case_name.upper()} = "{raw}"',
        ]
        super().__init__(entries, internal_context={"selector": selector})


class UnreferenceableIdentity(ContractViolation):
    title = "Identity cannot be weakly referenced"

    def __init__(self, identity: Any):
        entries = [
            f"Type: {describe_type(type(identity))}",
            "Calls and stubs are kept per identity behind a weak reference",
            "Add '__weakref__' to '__slots__' or drop '__slots__' on the fake",
        ]
        super().__init__(entries)
