from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional, Sequence

from spryable.formatting.description import describe_selector
from spryable.matching.matcher import matches
from spryable.spying.recorded_call import CountSpecifier, DidCallResult, RecordedCall

logger = logging.getLogger(__name__)

EMPTY_DESCRIPTION = "<>"


class CallLedger:
    """
    Append-only record of calls made on one identity.

    Sequence numbers keep advancing across reset() so calls recorded after a
    reset still sort after everything recorded before it.
    """

    def __init__(self, lock: Optional[threading.RLock] = None, owner: Any = None) -> None:
        self._lock = lock or threading.RLock()
        self._owner = owner
        self._calls: List[RecordedCall] = []
        self._recorded_count = 0

    @property
    def recorded_count(self) -> int:
        """Number of calls ever recorded. Not reset by reset()."""
        return self._recorded_count

    @property
    def calls(self) -> List[RecordedCall]:
        """All current calls, in chronological order."""
        with self._lock:
            return list(self._calls)

    def record(self, selector: Any, arguments: Sequence[Any] = ()) -> RecordedCall:
        with self._lock:
            self._recorded_count += 1
            call = RecordedCall(
                selector=selector,
                arguments=tuple(arguments),
                sequence_number=self._recorded_count,
            )
            self._calls.append(call)
        logger.debug(f"Recorded call #{call.sequence_number}: {call.friendly_description}")
        return call

    def calls_for(self, selector: Any) -> List[RecordedCall]:
        with self._lock:
            return [call for call in self._calls if call.selector == selector]

    def times_called(self, selector: Any, pattern: Sequence[Any] = ()) -> int:
        """
        Count calls for ``selector`` whose arguments match ``pattern``.

        An empty pattern skips argument matching entirely and counts by selector
        alone; a non-empty pattern must have the same arity as every call.
        """
        candidates = self.calls_for(selector)
        if not pattern:
            return len(candidates)

        return sum(
            1
            for call in candidates
            if matches(pattern, call.arguments, selector=selector, owner=self._owner)
        )

    def query(
        self,
        selector: Any,
        pattern: Sequence[Any] = (),
        count: Optional[CountSpecifier] = None,
    ) -> bool:
        count = count or CountSpecifier.at_least(1)
        return count.is_satisfied_by(self.times_called(selector, pattern))

    def did_call(
        self,
        selector: Any,
        pattern: Sequence[Any] = (),
        count: Optional[CountSpecifier] = None,
    ) -> DidCallResult:
        success = self.query(selector, pattern, count)
        if not success:
            logger.debug(f"did_call failed for <{describe_selector(selector)}>")
        return DidCallResult(success=success, recorded_calls_description=self.friendly_description)

    @property
    def friendly_description(self) -> str:
        calls = self.calls
        if not calls:
            return EMPTY_DESCRIPTION
        return "; ".join(call.friendly_description for call in calls)

    def describe_all(self) -> str:
        return self.friendly_description

    def has_recorded_calls(self) -> bool:
        with self._lock:
            return bool(self._calls)

    def reset(self) -> None:
        with self._lock:
            self._calls = []
