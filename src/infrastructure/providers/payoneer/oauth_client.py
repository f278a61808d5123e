"""Payoneer OAuth2 client.

HTTP client for the Payoneer login host: consent URL templating and the token
endpoint (authorization code, refresh token, client credentials grants).

Endpoints:
    GET  {login_url}/api/v2/oauth2/authorize - Consent page (browser redirect)
    POST {login_url}/api/v2/oauth2/token     - Token endpoint (Basic auth, JSON body)

Token response:
    {
        "token_type": "Bearer",
        "access_token": "...",
        "expires_in": 2592000,
        "consented_on": 1681936514,
        "scope": "read write openid",
        "refresh_token": "...",
        "refresh_token_expires_in": 2592005,
        "id_token": "<jwt carrying account_id>",
        "error": null,
        "error_description": null
    }

Tokens are neither validated nor cached. Field values pass through verbatim.
"""

import base64
from typing import Any
from urllib.parse import quote, urlencode

import httpx
import jwt

from src.core.constants import APPLICATION_SCOPE, BASIC_PREFIX, CONSENT_SCOPE
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
)
from src.domain.value_objects import BearerToken
from src.infrastructure.providers.base_api_client import BaseProviderAPIClient


class PayoneerOAuthClient(BaseProviderAPIClient):
    """HTTP client for the Payoneer OAuth2 endpoints.

    Attributes:
        _client_id: OAuth client ID.
        _client_secret: OAuth client secret.
        _redirect_uri: Registered redirect URL.

    Example:
        >>> client = PayoneerOAuthClient(
        ...     base_url="https://login.sandbox.payoneer.com/api/v2/oauth2",
        ...     client_id="id",
        ...     client_secret="secret",
        ...     redirect_uri="http://localhost:4000/oauth/authorize",
        ... )
        >>> result = await client.exchange_code("abc123")
    """

    def __init__(
        self,
        *,
        base_url: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize Payoneer OAuth client.

        Args:
            base_url: Login host plus OAuth path.
            client_id: OAuth client ID.
            client_secret: OAuth client secret.
            redirect_uri: Registered redirect URL.
            timeout: HTTP request timeout in seconds.
        """
        super().__init__(base_url=base_url, provider_name="payoneer", timeout=timeout)
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri

    def build_consent_url(self, state: str | None = None) -> str:
        """Build the consent page URL.

        Args:
            state: Opaque value echoed back on the callback.

        Returns:
            str: Consent URL with a URL-encoded query string.
        """
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "scope": CONSENT_SCOPE,
            "response_type": "code",
        }
        if state:
            params["state"] = state
        return f"{self._base_url}/authorize?{urlencode(params, quote_via=quote)}"

    def _basic_auth_header(self) -> str:
        """Generate Basic Auth header for token requests.

        Returns:
            Basic auth header value (base64 of client_id:client_secret).
        """
        credentials = f"{self._client_id}:{self._client_secret}"
        encoded = base64.b64encode(credentials.encode()).decode()
        return f"{BASIC_PREFIX}{encoded}"

    async def exchange_code(self, code: str) -> Result[BearerToken, ProviderError]:
        """Exchange a one-time authorization code for a bearer token.

        Args:
            code: Code from the consent callback.

        Returns:
            Success(BearerToken): Token with refresh_token and id_token.
            Failure(ProviderAuthenticationError): Code invalid, used or expired.
            Failure(ProviderUnavailableError): Login host unreachable.
        """
        return await self._request_token(
            {
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": self._redirect_uri,
            },
            operation="token_exchange",
        )

    async def refresh(self, refresh_token: str) -> Result[BearerToken, ProviderError]:
        """Exchange a refresh token for a new bearer token.

        Args:
            refresh_token: Refresh token from an earlier exchange.

        Returns:
            Success(BearerToken): Replacement token.
            Failure(ProviderError): Refresh rejected or host unreachable.
        """
        return await self._request_token(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            },
            operation="token_refresh",
        )

    async def client_credentials(self) -> Result[BearerToken, ProviderError]:
        """Obtain an application token (no account holder involved).

        Returns:
            Success(BearerToken): Application token without refresh_token.
            Failure(ProviderError): Credentials rejected or host unreachable.
        """
        return await self._request_token(
            {
                "grant_type": "client_credentials",
                "scope": APPLICATION_SCOPE,
            },
            operation="application_token",
        )

    async def _request_token(
        self, body: dict[str, Any], *, operation: str
    ) -> Result[BearerToken, ProviderError]:
        self._logger.info(
            f"payoneer_{operation}_started",
            grant_type=body["grant_type"],
        )

        result = await self._execute_and_parse_object(
            method="POST",
            path="/token",
            headers={
                "Authorization": self._basic_auth_header(),
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            json_data=body,
            operation=operation,
        )

        match result:
            case Failure():
                return result
            case Success(value=data):
                return self._map_token(data, operation)

    def _check_business_error(
        self,
        data: Any,
        response: httpx.Response,
        operation: str,
    ) -> Failure[ProviderError] | None:
        """Treat 400/401, or a 2xx carrying an `error` field, as an auth failure.

        The token endpoint answers rejected grants with 400 and may also
        return 200 with `error` set. Other statuses (429, 5xx) fall through
        to the generic HTTP error mapping.
        """
        body = data if isinstance(data, dict) else {}
        api_error = body.get("error")
        rejected = response.status_code in (400, 401)
        if not rejected and not (response.is_success and api_error):
            return None

        description = body.get("error_description") or response.text
        is_expired = "expired" in str(description).lower()
        self._logger.warning(
            f"payoneer_{operation}_auth_failed",
            status_code=response.status_code,
            api_error=api_error,
            is_token_expired=is_expired,
        )
        return Failure(
            error=ProviderAuthenticationError(
                code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                message=f"Payoneer authentication failed: {description}",
                provider_name=self._provider_name,
                details={"error": api_error} if api_error else None,
                is_token_expired=is_expired,
            )
        )

    def _map_token(
        self, data: dict[str, Any], operation: str
    ) -> Result[BearerToken, ProviderError]:
        access_token = data.get("access_token")
        if not access_token:
            self._logger.error(
                f"payoneer_{operation}_missing_field",
                missing_field="access_token",
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message="Missing required field in Payoneer response: access_token",
                    provider_name=self._provider_name,
                )
            )

        token = BearerToken(
            access_token=access_token,
            expires_in=data.get("expires_in"),
            refresh_token=data.get("refresh_token"),
            scope=data.get("scope"),
            id_token=data.get("id_token"),
            token_type=data.get("token_type") or "Bearer",
            consented_on=data.get("consented_on"),
            refresh_token_expires_in=data.get("refresh_token_expires_in"),
        )

        self._logger.info(
            f"payoneer_{operation}_succeeded",
            expires_in=token.expires_in,
            has_refresh_token=token.refresh_token is not None,
            has_id_token=token.id_token is not None,
        )
        return Success(value=token)

    def decode_id_token(self, id_token: str) -> Result[dict[str, Any], ProviderError]:
        """Decode id_token claims without verifying the signature.

        Args:
            id_token: JWT from the token response.

        Returns:
            Success(dict): Claims (contains `account_id`).
            Failure(ProviderInvalidResponseError): Not a decodable JWT.
        """
        try:
            claims = jwt.decode(id_token, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            self._logger.warning(
                "payoneer_id_token_decode_failed",
                error=str(e),
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Invalid id_token from Payoneer: {e}",
                    provider_name=self._provider_name,
                )
            )
        return Success(value=claims)
