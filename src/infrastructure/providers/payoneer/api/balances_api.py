"""Payoneer Balances API client.

Endpoints:
    GET /v4/accounts/{accountId}/balances - Account holder balances

Expired tokens answer 401 with:
    {
        "error": "Unauthorized",
        "error_description": "Access token is invalid (expired)",
        "error_details": {"code": 401, "sub_code": 4016}
    }
"""

from typing import Any

from src.core.result import Result
from src.domain.errors import ProviderError
from src.infrastructure.providers.base_api_client import BaseProviderAPIClient


class PayoneerBalancesAPI(BaseProviderAPIClient):
    """HTTP client for the balances endpoint.

    Thread-safe: Uses httpx.AsyncClient per-request (no shared state).
    """

    def __init__(self, *, base_url: str, timeout: float = 30.0) -> None:
        """Initialize Payoneer Balances API client.

        Args:
            base_url: API host plus version prefix (e.g. ".../v4").
            timeout: HTTP request timeout in seconds.
        """
        super().__init__(base_url=base_url, provider_name="payoneer", timeout=timeout)

    async def get_balances(
        self, account_id: str, access_token: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch balances for an account holder.

        Args:
            account_id: Account holder id.
            access_token: Bearer token from the consent flow.

        Returns:
            Success(dict): Raw balances response.
            Failure(ProviderAuthenticationError): Token invalid or expired.
            Failure(ProviderUnavailableError): API unreachable.
        """
        return await self._execute_and_parse_object(
            method="GET",
            path=f"/accounts/{account_id}/balances",
            headers=self._bearer_headers(access_token),
            operation="get_balances",
        )
