"""Centralized constants for internal implementation details.

Values here are fixed by the Payoneer API contract or are internal limits.
Environment-specific settings live in `src/core/config.py`.

Example:
    >>> from src.core.constants import BEARER_PREFIX
    >>> header = f"{BEARER_PREFIX}{access_token}"
"""

# =============================================================================
# Timeouts
# =============================================================================

PROVIDER_TIMEOUT_DEFAULT: float = 30.0
"""Default timeout for Payoneer API calls in seconds."""

COMMIT_TIMEOUT_DEFAULT: float = 30.0
"""Timeout for a single commit attempt in seconds."""

COMMIT_BACKOFF_DEFAULT: float = 3.0
"""Wait before retrying a commit whose status is still in progress."""

COMMIT_MAX_ATTEMPTS_DEFAULT: int = 2
"""Commit attempts including the first one (one extra attempt)."""


# =============================================================================
# OAuth
# =============================================================================

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""

BASIC_PREFIX: str = "Basic "
"""HTTP Authorization header prefix for client credentials."""

CONSENT_SCOPE: str = "read write openid"
"""Scope requested from the account holder on the consent page."""

APPLICATION_SCOPE: str = "read write"
"""Scope requested for client-credentials application tokens."""


# =============================================================================
# API
# =============================================================================

API_VERSION_PREFIX: str = "/v4"
"""Path prefix for all Payoneer REST calls."""

CHALLENGE_REQUIRED_ERROR: str = "challenge_required"
"""`error` value returned when a call needs MFA before it can proceed."""

DESCRIPTION_MAX_LENGTH: int = 200
"""Maximum length of a debit description accepted by Payoneer."""


# =============================================================================
# Sessions
# =============================================================================

SESSION_COOKIE_NAME: str = "payoneer_session"
"""Cookie carrying the session id between consent and challenge callbacks."""

SESSION_TTL_DEFAULT: float = 3600.0
"""Idle lifetime of an in-memory payment session in seconds."""


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum length for response body in error messages (truncation limit)."""
