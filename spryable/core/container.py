import logging

from dependency_injector import containers, providers

from spryable.core.config import settings as global_settings
from spryable.core.fatal_reporter import FatalErrorReporter
from spryable.identity.identity_registry import IdentityRegistry


def configure_logging(level: str) -> logging.Logger:
    package_logger = logging.getLogger("spryable")
    package_logger.setLevel(level)
    return package_logger


class Container(containers.DeclarativeContainer):
    """Dependency injection container"""

    # Configuration
    settings = providers.Object(global_settings)

    package_logger = providers.Singleton(
        configure_logging,
        level=settings.provided.LOG_LEVEL.value,
    )

    fatal_reporter = providers.Singleton(
        FatalErrorReporter,
        echo=settings.provided.ECHO_CONTRACT_VIOLATIONS,
    )

    identity_registry = providers.Singleton(
        IdentityRegistry,
        reporter=fatal_reporter,
        permit_fallback=settings.provided.PERMIT_FALLBACK,
    )


container = Container()


def get_identity_registry() -> IdentityRegistry:
    # resolves on every call, so test overrides still work
    container.package_logger()
    return container.identity_registry()


def get_fatal_reporter() -> FatalErrorReporter:
    return container.fatal_reporter()
