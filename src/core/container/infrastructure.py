"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (console, human-readable or JSON)
- Payment session store (in-memory)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.session_store_protocol import SessionStoreProtocol


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    env = (
        settings.environment.value
        if hasattr(settings.environment, "value")
        else str(settings.environment)
    )
    use_json = env in {"testing", "ci", "production"}
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_session_store() -> "SessionStoreProtocol":
    """Get the payment session store singleton (app-scoped).

    Sessions live in process memory, so every request must share this one
    instance.

    Returns:
        Session store implementing SessionStoreProtocol.

    Usage:
        # Presentation Layer (FastAPI Depends)
        store: SessionStoreProtocol = Depends(get_session_store)
    """
    from src.infrastructure.session.in_memory_session_store import (
        InMemorySessionStore,
    )

    return InMemorySessionStore(logger=get_logger())
