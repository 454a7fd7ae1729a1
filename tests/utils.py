"""
Example fakes shared by the test suite
"""
from enum import Enum

from spryable import Spryable, Spyable, Stubbable


class StringService:
    """The production protocol the fakes below stand in for."""

    def read_only_string(self) -> str: ...

    def get_string(self, string: str) -> str: ...

    def set_all(self, string: str, integer: int) -> None: ...

    def load(self, url: str) -> str: ...

    def maybe_count(self, values) -> int: ...

    @classmethod
    def class_get_string(cls) -> str: ...


class FakeStringService(Spryable):
    class Function(str, Enum):
        READ_ONLY_STRING = "read_only_string"
        GET_STRING = "get_string(string)"
        SET_ALL = "set_all(string,integer)"
        LOAD = "load(url)"
        MAYBE_COUNT = "maybe_count(values)"

    class ClassFunction(str, Enum):
        CLASS_GET_STRING = "class_get_string()"

    def read_only_string(self) -> str:
        return self.spryify(self.Function.READ_ONLY_STRING)

    def get_string(self, string: str) -> str:
        return self.spryify(self.Function.GET_STRING, string)

    def set_all(self, string: str, integer: int) -> None:
        return self.spryify(self.Function.SET_ALL, string, integer, fallback=None)

    def load(self, url: str) -> str:
        return self.spryify_throws(self.Function.LOAD, url)

    def maybe_count(self, values) -> int:
        return self.spryify(self.Function.MAYBE_COUNT, values, as_type=int)

    @classmethod
    def class_get_string(cls) -> str:
        return cls.spryify(cls.ClassFunction.CLASS_GET_STRING)


class SpyOnlyService(Spyable):
    class Function(str, Enum):
        PING = "ping(value)"

    def ping(self, value) -> None:
        self.record_call(self.Function.PING, value)


class StubOnlyService(Stubbable):
    class Function(str, Enum):
        FETCH = "fetch(key)"

    def fetch(self, key):
        return self.stubbed_value(self.Function.FETCH, key, fallback="default")


class LooseService(Spryable):
    """No selector enum: any hashable selector is accepted as-is."""

    def anything(self, *args):
        return self.spryify("anything", *args, fallback=None)


class Point:
    """Value type with declared equality."""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    def __eq__(self, other):
        return isinstance(other, Point) and (self.x, self.y) == (other.x, other.y)

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Point({self.x}, {self.y})"


class Handle:
    """Reference type without declared equality: compared by identity."""


class BrokenEquality:
    def __eq__(self, other):
        raise RuntimeError("cannot compare")

    __hash__ = object.__hash__


class ArrayLike:
    """__eq__ answers with something that refuses to be a bool."""

    class _Ambiguous:
        def __bool__(self):
            raise ValueError("truth value is ambiguous")

    def __eq__(self, other):
        return self._Ambiguous()

    __hash__ = object.__hash__
