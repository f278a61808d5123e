"""Domain errors package.

Usage:
    from src.domain.errors import ProviderError, ChallengeRequiredError
    from src.domain.errors import ChargeError, SessionError
"""

from src.domain.errors.charge_error import ChargeError
from src.domain.errors.provider_error import (
    ChallengeRequiredError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderRequestRejectedError,
    ProviderUnavailableError,
)
from src.domain.errors.session_error import SessionError

__all__ = [
    "ChargeError",
    "SessionError",
    # Provider API errors
    "ProviderError",
    "ProviderAuthenticationError",
    "ProviderUnavailableError",
    "ProviderRateLimitError",
    "ProviderInvalidResponseError",
    "ProviderRequestRejectedError",
    "ChallengeRequiredError",
]
