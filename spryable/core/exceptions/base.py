"""
Custom exception classes for the Spryable test-double framework.
"""
from typing import Any, Dict, List, Optional

DIAGNOSTIC_BULLET = "￫"


class SpryableBaseException(Exception):
    """Base exception for all Spryable exceptions"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class ContractViolation(SpryableBaseException):
    """
    The framework was misused by the test itself (wrong arity, duplicate stub,
    missing stub, ...). Never raised for an outcome the test declared on purpose.

    The message is the labeled, multi-line diagnostic:

         --- FATAL ERROR: <title> ---
          ￫ <entry>
          ￫ <entry>
    """

    title: str = "Contract violation"

    def __init__(
        self,
        entries: Optional[List[str]] = None,
        *,
        title: Optional[str] = None,
        internal_context: Optional[Dict[str, Any]] = None,
    ):
        self.title = title or self.title
        self.entries = list(entries or [])
        self.internal_context = internal_context or {}
        self.reported = False
        super().__init__(render_diagnostic(self.title, self.entries))


def render_diagnostic(title: str, entries: List[str]) -> str:
    title_string = f"\n --- FATAL ERROR: {title} ---"
    entries_string = "".join(f"\n  {DIAGNOSTIC_BULLET} {entry}" for entry in entries) + "\n"
    return title_string + entries_string
