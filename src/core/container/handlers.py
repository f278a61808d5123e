"""Handler dependency factories.

Request-scoped handler instances for the OAuth callback flows. Their
dependencies (provider, session store, logger) are app-scoped singletons.
"""

from typing import TYPE_CHECKING

from fastapi import Depends

from src.application.services.charge_committer import ChargeCommitter
from src.core.config import settings
from src.core.container.infrastructure import get_logger, get_session_store
from src.core.container.providers import get_payments_provider
from src.domain.protocols import PaymentsProviderProtocol, SessionStoreProtocol

if TYPE_CHECKING:
    from src.application.commands.handlers.handle_authorization_code_handler import (
        HandleAuthorizationCodeHandler,
    )
    from src.application.commands.handlers.resume_after_challenge_handler import (
        ResumeAfterChallengeHandler,
    )


# ============================================================================
# Service Factories
# ============================================================================


def get_charge_committer(
    provider: PaymentsProviderProtocol = Depends(get_payments_provider),
) -> ChargeCommitter:
    """Get ChargeCommitter configured from settings (request-scoped).

    Returns:
        ChargeCommitter with commit timeout, backoff and max attempts.
    """
    return ChargeCommitter(
        provider,
        logger=get_logger(),
        timeout=settings.commit_timeout_seconds,
        backoff=settings.commit_backoff_seconds,
        max_attempts=settings.commit_max_attempts,
    )


# ============================================================================
# Command Handler Factories
# ============================================================================


def get_handle_authorization_code_handler(
    provider: PaymentsProviderProtocol = Depends(get_payments_provider),
    session_store: SessionStoreProtocol = Depends(get_session_store),
    committer: ChargeCommitter = Depends(get_charge_committer),
) -> "HandleAuthorizationCodeHandler":
    """Get HandleAuthorizationCode command handler (request-scoped).

    Creates handler with:
    - PaymentsProvider (app-scoped singleton)
    - SessionStore (app-scoped singleton)
    - ChargeCommitter (request-scoped)
    - Charge parameters from settings

    Returns:
        HandleAuthorizationCodeHandler instance.
    """
    from src.application.commands.handlers.handle_authorization_code_handler import (
        HandleAuthorizationCodeHandler,
    )
    from src.domain.value_objects import Money

    return HandleAuthorizationCodeHandler(
        provider=provider,
        session_store=session_store,
        committer=committer,
        logger=get_logger(),
        charge_amount=Money(
            settings.payoneer_charge_amount, settings.payoneer_charge_currency
        ),
        description=settings.payoneer_charge_description,
        target_amount=settings.payoneer_target_amount,
        refresh_on_connect=settings.payoneer_refresh_on_connect,
    )


def get_resume_after_challenge_handler(
    provider: PaymentsProviderProtocol = Depends(get_payments_provider),
    session_store: SessionStoreProtocol = Depends(get_session_store),
) -> "ResumeAfterChallengeHandler":
    """Get ResumeAfterChallenge command handler (request-scoped).

    Returns:
        ResumeAfterChallengeHandler instance.
    """
    from src.application.commands.handlers.resume_after_challenge_handler import (
        ResumeAfterChallengeHandler,
    )

    return ResumeAfterChallengeHandler(
        provider=provider,
        session_store=session_store,
        logger=get_logger(),
    )
