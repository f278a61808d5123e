"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_payments_provider, ...

The container is organized into modules:
- infrastructure: Logging and session storage
- providers: Payments provider adapter factory
- handlers: Charge committer and callback command handlers
"""

from src.core.container.handlers import (
    get_charge_committer,
    get_handle_authorization_code_handler,
    get_resume_after_challenge_handler,
)
from src.core.container.infrastructure import get_logger, get_session_store
from src.core.container.providers import get_payments_provider

__all__ = [
    # Infrastructure
    "get_logger",
    "get_session_store",
    # Providers
    "get_payments_provider",
    # Handlers
    "get_charge_committer",
    "get_handle_authorization_code_handler",
    "get_resume_after_challenge_handler",
]
