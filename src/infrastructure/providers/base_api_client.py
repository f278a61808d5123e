"""Base API client for provider HTTP communication.

This module provides a base class for provider API clients that handles:
- HTTP request execution with timeout/connection error handling
- Response status code interpretation
- JSON parsing with error handling
- Structured logging with provider context

Subclasses only need to:
1. Build authentication headers (Bearer token, Basic credentials)
2. Call the base methods for HTTP operations
3. Optionally override `_check_business_error` for payload-level errors

Architecture:
    - Infrastructure layer (adapter for external APIs)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for business errors)
"""

from typing import Any

import httpx
import structlog

from src.core.constants import (
    BEARER_PREFIX,
    PROVIDER_TIMEOUT_DEFAULT,
    RESPONSE_BODY_MAX_LENGTH,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderRequestRejectedError,
    ProviderUnavailableError,
)


class BaseProviderAPIClient:
    """Base class for provider API clients with shared HTTP handling.

    Provides common functionality for HTTP communication with external APIs:
    - Request execution with timeout/connection error handling
    - Response status code interpretation (401, 403, 429, 4xx, 5xx)
    - JSON parsing with type validation
    - Structured logging with provider context

    Attributes:
        _base_url: Provider API base URL (without trailing slash).
        _provider_name: Provider identifier for logging and error messages.
        _timeout: Default HTTP request timeout in seconds.
        _logger: Structured logger with provider context.

    Example:
        >>> class PayoneerBalancesAPI(BaseProviderAPIClient):
        ...     def __init__(self, *, base_url: str, timeout: float = 30.0):
        ...         super().__init__(
        ...             base_url=base_url,
        ...             provider_name="payoneer",
        ...             timeout=timeout,
        ...         )
        ...
        ...     async def get_balances(self, account_id: str, access_token: str):
        ...         return await self._execute_and_parse_object(
        ...             method="GET",
        ...             path=f"/accounts/{account_id}/balances",
        ...             headers=self._bearer_headers(access_token),
        ...             operation="get_balances",
        ...         )
    """

    def __init__(
        self,
        *,
        base_url: str,
        provider_name: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize base provider API client.

        Args:
            base_url: Provider API base URL (e.g., "https://api.sandbox.payoneer.com/v4").
            provider_name: Provider identifier (e.g., "payoneer").
            timeout: Default HTTP request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._provider_name = provider_name
        self._timeout = timeout
        self._logger = structlog.get_logger(f"{provider_name}_api")

    @staticmethod
    def _bearer_headers(access_token: str) -> dict[str, str]:
        """Build JSON request headers carrying a bearer token."""
        return {
            "Authorization": f"{BEARER_PREFIX}{access_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    async def _execute_request(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
        timeout: float | None = None,
    ) -> Result[httpx.Response, ProviderError]:
        """Execute HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, PUT).
            path: URL path relative to base_url.
            headers: HTTP headers including authentication.
            params: Optional query parameters.
            json_data: Optional JSON body for POST/PUT requests.
            operation: Operation name for logging.
            timeout: Per-call timeout overriding the client default.

        Returns:
            Success(httpx.Response): Raw HTTP response on success.
            Failure(ProviderUnavailableError): On timeout or connection error.
                Timeouts carry `is_timeout=True` and code PROVIDER_TIMEOUT.
        """
        url = f"{self._base_url}{path}"
        effective_timeout = self._timeout if timeout is None else timeout

        try:
            async with httpx.AsyncClient(timeout=effective_timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    params=params,
                    json=json_data,
                )
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning(
                f"{self._provider_name}_api_timeout",
                operation=operation,
                timeout=effective_timeout,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_TIMEOUT,
                    message=f"{self._provider_name.title()} API request timed out",
                    provider_name=self._provider_name,
                    is_transient=True,
                    is_timeout=True,
                )
            )

        except httpx.RequestError as e:
            self._logger.warning(
                f"{self._provider_name}_api_connection_error",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"Failed to connect to {self._provider_name.title()} API: {e}",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

    def _check_business_error(
        self,
        data: Any,
        response: httpx.Response,
        operation: str,
    ) -> Failure[ProviderError] | None:
        """Hook for payload-level errors checked before the status code.

        Args:
            data: Parsed JSON body (None if the body was not JSON).
            response: HTTP response.
            operation: Operation name for logging.

        Returns:
            Failure(ProviderError) to short-circuit, None to continue.
        """
        return None

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
        data: Any = None,
    ) -> Failure[ProviderError] | None:
        """Check HTTP response for errors and return appropriate ProviderError.

        Payoneer error bodies look like
        `{"error": "...", "error_description": "...", "error_details": {"code": ...}}`
        and are folded into the returned error when present.

        Args:
            response: HTTP response to check.
            operation: Operation name for logging.
            data: Parsed JSON body, if any.

        Returns:
            Failure(ProviderError) if error detected, None if response is OK.
        """
        status = response.status_code

        # Success - no error
        if 200 <= status < 300:
            return None

        body = data if isinstance(data, dict) else {}
        api_error = body.get("error")
        api_description = body.get("error_description")
        error_details = body.get("error_details")
        details = error_details if isinstance(error_details, dict) else None

        # Rate limiting (429)
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            retry_seconds = int(retry_after) if retry_after and retry_after.isdigit() else None
            self._logger.warning(
                f"{self._provider_name}_api_rate_limited",
                operation=operation,
                retry_after=retry_seconds,
            )
            return Failure(
                error=ProviderRateLimitError(
                    code=ErrorCode.PROVIDER_RATE_LIMITED,
                    message=f"{self._provider_name.title()} API rate limit exceeded",
                    provider_name=self._provider_name,
                    retry_after=retry_seconds,
                )
            )

        # Authentication errors (401)
        if status == 401:
            is_expired = "expired" in str(api_description or "").lower()
            self._logger.warning(
                f"{self._provider_name}_api_auth_failed",
                operation=operation,
                is_token_expired=is_expired,
            )
            return Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=api_description
                    or f"{self._provider_name.title()} access token is invalid or expired",
                    provider_name=self._provider_name,
                    details=details,
                    is_token_expired=is_expired,
                )
            )

        # Forbidden (403)
        if status == 403:
            self._logger.warning(
                f"{self._provider_name}_api_forbidden",
                operation=operation,
            )
            return Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=f"Access denied to {self._provider_name.title()} resource",
                    provider_name=self._provider_name,
                    details=details,
                    is_token_expired=False,
                )
            )

        # Server errors (5xx)
        if status >= 500:
            self._logger.warning(
                f"{self._provider_name}_api_server_error",
                operation=operation,
                status_code=status,
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._provider_name.title()} API server error: {status}",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

        # Other client errors (400, 404, 409, ...)
        api_error_code = details.get("code") if details else None
        self._logger.warning(
            f"{self._provider_name}_api_request_rejected",
            operation=operation,
            status_code=status,
            api_error=api_error,
            api_error_code=api_error_code,
        )
        return Failure(
            error=ProviderRequestRejectedError(
                code=ErrorCode.PROVIDER_REQUEST_REJECTED,
                message=api_description
                or f"{self._provider_name.title()} rejected the request: {status}",
                provider_name=self._provider_name,
                details=details,
                status_code=status,
                api_error=api_error,
                api_error_code=api_error_code if isinstance(api_error_code, int) else None,
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
            )
        )

    def _parse_json_object(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Parse response as JSON object with error handling.

        Args:
            response: HTTP response to parse.
            operation: Operation name for logging.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(ProviderError): On business error, HTTP error or invalid JSON.
        """
        # Parse JSON first so error bodies can inform the error type
        try:
            data = response.json()
            json_error: ValueError | None = None
        except ValueError as e:
            data = None
            json_error = e

        business_error = self._check_business_error(data, response, operation)
        if business_error is not None:
            return business_error

        error_result = self._check_error_response(response, operation, data)
        if error_result is not None:
            return error_result

        if json_error is not None:
            self._logger.error(
                f"{self._provider_name}_api_invalid_json",
                operation=operation,
                error=str(json_error),
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Invalid JSON response from {self._provider_name.title()}",
                    provider_name=self._provider_name,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        # Validate type
        if not isinstance(data, dict):
            self._logger.warning(
                f"{self._provider_name}_api_unexpected_format",
                operation=operation,
                data_type=type(data).__name__,
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Expected object response from {self._provider_name.title()}",
                    provider_name=self._provider_name,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        self._logger.debug(
            f"{self._provider_name}_api_succeeded",
            operation=operation,
        )
        return Success(value=data)

    async def _execute_and_parse_object(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
        timeout: float | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Execute request and parse response as JSON object.

        Combines _execute_request and _parse_json_object for convenience.

        Args:
            method: HTTP method (GET, POST, PUT).
            path: URL path relative to base_url.
            headers: HTTP headers including authentication.
            params: Optional query parameters.
            json_data: Optional JSON body for POST/PUT requests.
            operation: Operation name for logging.
            timeout: Per-call timeout overriding the client default.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(ProviderError): On any error.
        """
        result = await self._execute_request(
            method=method,
            path=path,
            headers=headers,
            params=params,
            json_data=json_data,
            operation=operation,
            timeout=timeout,
        )

        if isinstance(result, Failure):
            return result

        return self._parse_json_object(result.value, operation)
