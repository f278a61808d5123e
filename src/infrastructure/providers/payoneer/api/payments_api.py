"""Payoneer Payments API client.

HTTP client for the debit lifecycle endpoints.

Endpoints:
    POST /v4/accounts/{accountId}/balances/{balanceId}/payments/debit - Create pending debit
    PUT  /v4/accounts/{accountId}/payments/{commitId}                 - Commit debit
    GET  /v4/{response_path}                                          - Resume after MFA
    GET  /v4/accounts/{accountId}/payments/{clientReferenceId}?type=client_reference_id
                                                                      - Charge status

Any of these may answer with an MFA challenge instead of a result:
    {
        "error": "challenge_required",
        "error_description": "Challenge authentication required. ...",
        "error_details": {"code": 1803},
        "challenge": {"type": "mfa", "url": "...", "session_id": "...", "expires_at": "..."}
    }
"""

from typing import Any

import httpx

from src.core.constants import CHALLENGE_REQUIRED_ERROR
from src.core.enums import ErrorCode
from src.core.result import Failure, Result
from src.domain.errors import ChallengeRequiredError, ProviderError
from src.infrastructure.providers.base_api_client import BaseProviderAPIClient
from src.infrastructure.providers.payoneer.mappers.charge_mapper import (
    PayoneerChargeMapper,
)


class PayoneerPaymentsAPI(BaseProviderAPIClient):
    """HTTP client for debit, commit, challenge resume and status endpoints.

    Thread-safe: Uses httpx.AsyncClient per-request (no shared state).

    Example:
        >>> api = PayoneerPaymentsAPI(base_url="https://api.sandbox.payoneer.com/v4")
        >>> result = await api.commit("42", "C1", access_token="...", timeout=30.0)
    """

    def __init__(self, *, base_url: str, timeout: float = 30.0) -> None:
        """Initialize Payoneer Payments API client.

        Args:
            base_url: API host plus version prefix (e.g. ".../v4").
            timeout: Default HTTP request timeout in seconds.
        """
        super().__init__(base_url=base_url, provider_name="payoneer", timeout=timeout)
        self._charge_mapper = PayoneerChargeMapper()

    async def create_debit(
        self,
        *,
        account_id: str,
        balance_id: str,
        body: dict[str, Any],
        access_token: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Create a pending debit against a balance.

        Args:
            account_id: Account holder id.
            balance_id: Balance to debit.
            body: Debit request body.
            access_token: Bearer token.

        Returns:
            Success(dict): Raw debit response (`result.commit_id`, amounts, fees).
            Failure(ChallengeRequiredError): MFA needed before the debit.
            Failure(ProviderError): Any other failure.
        """
        return await self._execute_and_parse_object(
            method="POST",
            path=f"/accounts/{account_id}/balances/{balance_id}/payments/debit",
            headers=self._bearer_headers(access_token),
            json_data=body,
            operation="create_debit",
        )

    async def commit(
        self,
        account_id: str,
        commit_id: str,
        *,
        access_token: str,
        timeout: float | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Commit a pending debit (single attempt).

        Args:
            account_id: Account holder id.
            commit_id: `result.commit_id` from the debit response.
            access_token: Bearer token.
            timeout: Commit timeout in seconds.

        Returns:
            Success(dict): Raw commit response.
            Failure(ProviderUnavailableError): `is_timeout=True` on timeout.
            Failure(ChallengeRequiredError): MFA needed before commit.
        """
        return await self._execute_and_parse_object(
            method="PUT",
            path=f"/accounts/{account_id}/payments/{commit_id}",
            headers=self._bearer_headers(access_token),
            operation="commit_charge",
            timeout=timeout,
        )

    async def resume_after_challenge(
        self, response_path: str, access_token: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Replay the decision held behind a completed MFA challenge.

        Args:
            response_path: `response_path` from the challenge callback.
            access_token: Bearer token.

        Returns:
            Success(dict): Raw response of the resumed call.
            Failure(ProviderError): On any error.
        """
        return await self._execute_and_parse_object(
            method="GET",
            path=f"/{response_path.lstrip('/')}",
            headers=self._bearer_headers(access_token),
            operation="commit_after_challenge",
        )

    async def get_status(
        self, account_id: str, client_reference_id: str, access_token: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch the status of a charge by client reference id.

        Args:
            account_id: Account holder id.
            client_reference_id: Reference id sent with the debit.
            access_token: Bearer token.

        Returns:
            Success(dict): Raw status response.
            Failure(ProviderError): On any error.
        """
        return await self._execute_and_parse_object(
            method="GET",
            path=f"/accounts/{account_id}/payments/{client_reference_id}",
            headers=self._bearer_headers(access_token),
            params={"type": "client_reference_id"},
            operation="get_charge_status",
        )

    def _check_business_error(
        self,
        data: Any,
        response: httpx.Response,
        operation: str,
    ) -> Failure[ProviderError] | None:
        """Turn a `challenge_required` body into ChallengeRequiredError.

        Checked before the HTTP status, since Payoneer pairs the challenge
        body with a 4xx status.
        """
        if not isinstance(data, dict) or data.get("error") != CHALLENGE_REQUIRED_ERROR:
            return None

        challenge = self._charge_mapper.map_challenge(data.get("challenge"))
        if challenge is None:
            return None

        self._logger.info(
            "payoneer_challenge_required",
            operation=operation,
            challenge_type=challenge.type,
            status_code=response.status_code,
        )
        return Failure(
            error=ChallengeRequiredError(
                code=ErrorCode.CHALLENGE_REQUIRED,
                message=data.get("error_description")
                or "Challenge authentication required",
                provider_name=self._provider_name,
                details=data.get("error_details"),
                challenge=challenge,
            )
        )
