"""Payments provider dependency factory.

Usage:
    provider = get_payments_provider()
    url = provider.build_consent_url(state=session.session_id)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings

if TYPE_CHECKING:
    from src.domain.protocols.payments_provider_protocol import (
        PaymentsProviderProtocol,
    )


# ============================================================================
# Provider Factory (Application-Scoped)
# ============================================================================


@lru_cache()
def get_payments_provider() -> "PaymentsProviderProtocol":
    """Get the Payoneer provider adapter (app-scoped).

    The adapter holds no per-request state (httpx client per request), so a
    single instance is shared.

    Returns:
        Provider adapter implementing PaymentsProviderProtocol.

    Raises:
        ValueError: If client id, client secret or redirect URI is not configured.
    """
    from src.infrastructure.providers.payoneer import PayoneerProvider

    return PayoneerProvider(settings=settings)
