"""
End-to-end behaviour of fakes built on Spryable
"""
from enum import Enum

import pytest

from spryable import Argument, CountSpecifier, Spryable
from spryable.core.exceptions.local_exceptions import DuplicateStub, NoStubFound


class FakeWorker(Spryable):
    class Function(str, Enum):
        DO_STUFF = "do_stuff()"
        DO_STUFF_WITH = "do_stuff_with(string)"
        FOO = "foo(value)"
        PAIR = "pair(a,b)"

    def do_stuff(self):
        return self.spryify(self.Function.DO_STUFF, fallback=None)

    def do_stuff_with(self, string):
        return self.spryify(self.Function.DO_STUFF_WITH, string)

    def do_stuff_with_fallback(self, string):
        return self.spryify(self.Function.DO_STUFF_WITH, string, fallback=False)

    def foo(self, value):
        return self.spryify(self.Function.FOO, value)

    def pair(self, a, b):
        return self.spryify(self.Function.PAIR, a, b)


@pytest.fixture
def worker():
    return FakeWorker()


class TestLedgerProperties:

    def test_selector_isolation(self, worker):
        worker.do_stuff()
        worker.do_stuff()

        assert not worker.did_call(FakeWorker.Function.FOO)
        assert not worker.did_call(FakeWorker.Function.DO_STUFF_WITH, count=CountSpecifier.at_least(1))

    @pytest.mark.parametrize("times", [0, 1, 4])
    def test_count_policies(self, worker, times):
        for _ in range(times):
            worker.do_stuff()

        selector = FakeWorker.Function.DO_STUFF
        assert worker.did_call(selector, count=CountSpecifier.exactly(times))
        for k in range(times + 3):
            if k != times:
                assert not worker.did_call(selector, count=CountSpecifier.exactly(k))
            if k <= times:
                assert worker.did_call(selector, count=CountSpecifier.at_least(k))
            if k >= times:
                assert worker.did_call(selector, count=CountSpecifier.at_most(k))

    def test_empty_pattern_counts_by_selector(self, worker):
        worker.stub(FakeWorker.Function.FOO).and_return(None)
        worker.foo("a")
        worker.foo(None)
        worker.foo(3)

        assert worker.did_call(FakeWorker.Function.FOO, count=CountSpecifier.exactly(3))

    def test_wildcards(self, worker):
        worker.stub(FakeWorker.Function.FOO).and_return(None)
        worker.foo("a")
        worker.foo(None)

        selector = FakeWorker.Function.FOO
        assert worker.did_call(selector, Argument.ANYTHING, count=CountSpecifier.exactly(2))
        assert worker.did_call(selector, Argument.NON_NIL, count=CountSpecifier.exactly(1))
        assert worker.did_call(selector, Argument.NIL, count=CountSpecifier.exactly(1))


class TestStubProperties:

    def test_patterned_stub_wins_regardless_of_order(self, worker):
        worker.stub(FakeWorker.Function.FOO).with_args("x").and_return("patterned")
        worker.stub(FakeWorker.Function.FOO).and_return("pattern free")
        assert worker.foo("x") == "patterned"

        worker.reset_stubs()
        worker.stub(FakeWorker.Function.FOO).and_return("pattern free")
        worker.stub(FakeWorker.Function.FOO).with_args("x").and_return("patterned")
        assert worker.foo("x") == "patterned"

    def test_duplicates(self, worker):
        worker.stub(FakeWorker.Function.FOO).with_args("x").and_return(1)

        with pytest.raises(DuplicateStub):
            worker.stub(FakeWorker.Function.FOO).with_args("x").and_return(2)
        assert worker.foo("x") == 1

        worker.stub_again(FakeWorker.Function.FOO).with_args("x").and_return(3)
        assert worker.foo("x") == 3

    def test_reset_independence(self, worker):
        worker.stub(FakeWorker.Function.FOO).and_return("stubbed")
        worker.foo("a")

        worker.reset_calls()
        assert not worker.did_call(FakeWorker.Function.FOO)
        assert worker.foo("b") == "stubbed"
        assert worker.did_call(FakeWorker.Function.FOO, "b", count=CountSpecifier.exactly(1))

        worker.reset_stubs()
        assert worker.did_call(FakeWorker.Function.FOO, "b")
        with pytest.raises(NoStubFound):
            worker.foo("c")

        worker.stub(FakeWorker.Function.FOO).and_return("fresh")
        assert worker.foo("d") == "fresh"

    def test_capture_order(self, worker):
        captor = Argument.captor()
        worker.stub(FakeWorker.Function.PAIR).with_args(captor, "fixed").and_return(True)

        for value in ["v1", "v2", "v3"]:
            worker.pair(value, "fixed")

        assert captor.captured_values == ["v1", "v2", "v3"]


class TestScenarios:

    def test_stub_with_literal_pattern(self, worker):
        worker.stub(FakeWorker.Function.DO_STUFF_WITH).with_args("hello").and_return(True)

        assert worker.do_stuff_with("hello") is True
        assert worker.do_stuff_with_fallback("world") is False
        with pytest.raises(NoStubFound):
            worker.do_stuff_with("world")

    def test_exact_call_count(self, worker):
        for _ in range(3):
            worker.do_stuff()

        assert worker.did_call(FakeWorker.Function.DO_STUFF, count=CountSpecifier.exactly(3)).success is True
        assert worker.did_call(FakeWorker.Function.DO_STUFF, count=CountSpecifier.exactly(2)).success is False

    def test_specific_stub_beats_broader_earlier_one(self, worker):
        worker.stub(FakeWorker.Function.FOO).with_args(Argument.ANYTHING).and_return("default")
        worker.stub(FakeWorker.Function.FOO).with_args("x").and_return("specific")

        assert worker.foo("x") == "specific"
        assert worker.foo("y") == "default"

    def test_capture_with_fixed_argument(self, worker):
        captor = Argument.captor()
        worker.stub(FakeWorker.Function.PAIR).with_args(captor, "fixed").and_return(None)

        worker.pair("v1", "fixed")
        worker.pair("v2", "fixed")

        assert captor.captured_values == ["v1", "v2"]
        assert captor.get_value(at=1, as_type=str) == "v2"

    def test_later_stub_wins_and_broader_captor_stays_empty(self, worker):
        broad = Argument.captor()
        worker.stub(FakeWorker.Function.PAIR).with_args(broad, Argument.ANYTHING).and_return("broad")
        worker.stub(FakeWorker.Function.PAIR).with_args(Argument.ANYTHING, "fixed").and_return("fixed")

        assert worker.pair("v1", "fixed") == "fixed"
        assert broad.captured_values == []

        assert worker.pair("v2", "other") == "broad"
        assert broad.captured_values == ["v2"]
