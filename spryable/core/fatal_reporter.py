from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, NoReturn, Optional

from spryable.core.exceptions.base import ContractViolation

logger = logging.getLogger(__name__)

FatalHook = Callable[[str], None]


class FatalErrorReporter:
    """
    Every contract violation goes through here before it reaches the test.

    The hook receives the rendered diagnostic. The default hook logs it at
    ERROR (when echo is enabled); tests of the framework itself can install
    their own hook to intercept messages.
    """

    def __init__(self, echo: bool = True, hook: Optional[FatalHook] = None) -> None:
        self.echo = echo
        self.hook: FatalHook = hook or self._log_diagnostic

    def _log_diagnostic(self, diagnostic: str) -> None:
        if self.echo:
            logger.error(diagnostic)

    def set_hook(self, hook: Optional[FatalHook]) -> None:
        """Install a hook; None restores the default logging hook."""
        self.hook = hook or self._log_diagnostic

    def report(self, violation: ContractViolation) -> None:
        # each violation reaches the hook once, however many guards it crosses
        if getattr(violation, "reported", False):
            return
        violation.reported = True
        self.hook(str(violation))

    def fail(self, violation: ContractViolation) -> NoReturn:
        self.report(violation)
        raise violation

    @contextmanager
    def guard(self) -> Iterator[None]:
        """Report violations raised inside the block, then let them propagate."""
        try:
            yield
        except ContractViolation as violation:
            self.report(violation)
            raise
