"""
Test cases for custom exceptions
"""
import pytest

from spryable.core.exceptions.base import (
    DIAGNOSTIC_BULLET,
    ContractViolation,
    SpryableBaseException,
    render_diagnostic,
)
from spryable.core.exceptions.local_exceptions import (
    CapturedArgumentOutOfBounds,
    CapturedArgumentWrongType,
    DuplicateStub,
    IncompleteStub,
    NoStubFound,
    NotComparable,
    ResultTypeMismatch,
    StubAlreadyComplete,
    ThrowOnNonThrowingMember,
    UnknownSelector,
    UnreferenceableIdentity,
    WrongArgumentCount,
)
from utils import FakeStringService


class TestSpryableBaseException:
    """Test cases for SpryableBaseException base class"""

    def test_base_exception_with_message_only(self):
        exc = SpryableBaseException("Test error message")

        assert str(exc) == "Test error message"
        assert exc.message == "Test error message"
        assert exc.error_code == "SpryableBaseException"

    def test_base_exception_with_message_and_code(self):
        exc = SpryableBaseException("Test error", "CUSTOM_ERROR")

        assert exc.error_code == "CUSTOM_ERROR"
        assert isinstance(exc, Exception)


class TestContractViolation:
    """Test the diagnostic rendering"""

    def test_render_diagnostic(self):
        assert render_diagnostic("Title", ["one", "two"]) == (
            f"\n --- FATAL ERROR: Title ---\n  {DIAGNOSTIC_BULLET} one\n  {DIAGNOSTIC_BULLET} two\n"
        )

    def test_defaults(self):
        violation = ContractViolation()

        assert violation.title == "Contract violation"
        assert violation.entries == []
        assert violation.internal_context == {}
        assert violation.reported is False
        assert violation.error_code == "ContractViolation"

    def test_custom_title_and_entries(self):
        violation = ContractViolation(["entry"], title="Custom", internal_context={"key": 1})

        assert str(violation) == violation.message
        assert "--- FATAL ERROR: Custom ---" in str(violation)
        assert violation.internal_context == {"key": 1}

    def test_subclass_error_code(self):
        assert IncompleteStub("read").error_code == "IncompleteStub"


class TestLocalExceptions:
    """Every violation is a ContractViolation with a titled diagnostic"""

    @pytest.mark.parametrize(
        "violation, title",
        [
            (WrongArgumentCount(["a"], []), "Wrong number of arguments to compare"),
            (NotComparable(object()), "SpryEquatable required"),
            (DuplicateStub("get", ["a"]), "Stubbing the same function with the same arguments"),
            (NoStubFound("Fake", "get", [], "<>"), "No return value found"),
            (CapturedArgumentOutOfBounds(0, []), "Argument Capture: index out of bounds"),
            (CapturedArgumentWrongType("x", int), "Argument Capture: wrong argument type"),
            (ThrowOnNonThrowingMember("Fake", "get"), "Used '.and_throw()' on non-throwing function"),
            (IncompleteStub("get"), "Incomplete Stub"),
            (StubAlreadyComplete("get", "and_return"), "Stub already has an outcome"),
            (ResultTypeMismatch("Fake", "get", 1, str), "Stubbed value has the wrong type"),
            (UnknownSelector("Fake", "get(a)", FakeStringService.Function), "Unable to find function"),
            (UnreferenceableIdentity(1), "Identity cannot be weakly referenced"),
        ],
    )
    def test_titles(self, violation, title):
        assert isinstance(violation, ContractViolation)
        assert f"--- FATAL ERROR: {title} ---" in str(violation)

    def test_enum_selectors_render_as_value(self):
        violation = IncompleteStub(FakeStringService.Function.GET_STRING)

        assert f"{DIAGNOSTIC_BULLET} Function: get_string(string)" in str(violation)
        assert violation.internal_context["selector"] is FakeStringService.Function.GET_STRING

    def test_long_arguments_are_truncated(self):
        violation = NoStubFound("Fake", "get", ["x" * 1000], "<>")

        assert "x" * 1000 not in str(violation)
        assert "…" in str(violation)

    def test_result_type_mismatch_with_union(self):
        violation = ResultTypeMismatch("Fake", "get", 1.5, (int, str))
        assert "Return Type: int | str" in str(violation)
