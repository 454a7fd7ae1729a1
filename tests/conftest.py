import pytest

from spryable.core.container import container
from spryable.core.fatal_reporter import FatalErrorReporter
from spryable.identity.identity_registry import IdentityRegistry


@pytest.fixture
def diagnostics():
    """Rendered diagnostics that reached the fatal hook during the test."""
    return []


@pytest.fixture
def reporter(diagnostics):
    return FatalErrorReporter(echo=False, hook=diagnostics.append)


@pytest.fixture(autouse=True)
def identity_registry(reporter):
    """Fresh side table per test so calls and stubs never leak between tests."""
    registry = IdentityRegistry(reporter=reporter)
    container.fatal_reporter.override(reporter)
    container.identity_registry.override(registry)
    yield registry
    container.identity_registry.reset_override()
    container.fatal_reporter.reset_override()
