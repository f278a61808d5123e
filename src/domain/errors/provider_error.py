"""Provider error types for the payments provider contract.

These errors define the failure cases Payoneer calls can return.

Architecture:
- Domain layer errors (part of PaymentsProviderProtocol contract)
- Inherit from DomainError (core layer)
- Used in Result types (railway-oriented programming)

Usage:
    from src.domain.errors import ProviderError, ProviderUnavailableError
    from src.core.result import Failure, Result, Success

    async def commit_charge(...) -> Result[ChargeStatusReport, ProviderError]:
        ...
        return Failure(error=ProviderUnavailableError(..., is_timeout=True))
"""

from dataclasses import dataclass
from typing import Any

from src.core.errors import DomainError
from src.domain.value_objects.challenge import Challenge


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderError(DomainError):
    """Base payments provider API error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        provider_name: Name of the provider ("payoneer").
        details: Additional context (API error code, sub code).
    """

    provider_name: str
    details: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderAuthenticationError(ProviderError):
    """Authentication/authorization failure.

    Returned when:
    - The authorization code is invalid or already used
    - The access token is invalid or expired (sub code 4016)
    - The refresh token is invalid or expired

    Recovery: none in this flow. The account holder consents again.

    Attributes:
        is_token_expired: Whether the error is due to token expiration.
    """

    is_token_expired: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderUnavailableError(ProviderError):
    """Provider API is unreachable or failing.

    Returned when:
    - The request times out
    - The connection fails (DNS, TLS, refused)
    - The API answers 5xx

    Recovery: only a commit timeout is recovered (status check, single retry).

    Attributes:
        is_transient: Whether the error is likely transient.
        is_timeout: Whether the request hit its timeout.
        retry_after: Suggested retry delay in seconds.
    """

    is_transient: bool = True
    is_timeout: bool = False
    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderRateLimitError(ProviderError):
    """Provider rate limit exceeded (HTTP 429).

    Attributes:
        retry_after: Seconds to wait before retrying (Retry-After header).
    """

    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderInvalidResponseError(ProviderError):
    """Provider returned an unexpected response.

    Returned when the body is not JSON, is not an object, or lacks fields
    the flow depends on (e.g. `result.commit_id`).

    Attributes:
        response_body: Raw response body (truncated) for debugging.
    """

    response_body: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderRequestRejectedError(ProviderError):
    """Provider rejected the request with an error payload.

    Payoneer errors look like:
        {"error": "...", "error_description": "...", "error_details": {"code": 1234}}

    Attributes:
        status_code: HTTP status code.
        api_error: The `error` field.
        api_error_code: `error_details.code`, when present.
        response_body: Raw response body (truncated).
    """

    status_code: int
    api_error: str | None = None
    api_error_code: int | None = None
    response_body: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ChallengeRequiredError(ProviderError):
    """The call needs MFA before Payoneer will proceed.

    Business outcome, not a transport failure: it is never retried. The
    caller redirects the account holder to `challenge.url`.

    Attributes:
        challenge: Challenge details from the response.
    """

    challenge: Challenge
