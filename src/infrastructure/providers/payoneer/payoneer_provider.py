"""Payoneer provider implementing PaymentsProviderProtocol.

Handles the OAuth authorization-code flow and the debit lifecycle calls
(balances, debit, commit, challenge resume, status).

Configuration loaded from settings (src/core/config.py):
    - payoneer_client_id / payoneer_client_secret: OAuth client credentials
    - payoneer_redirect_uri: Registered callback URL
    - payoneer_partner_id: Partner receiving debits
    - payoneer_api_url / payoneer_login_url / payoneer_oauth_path: Hosts

Architecture:
    PayoneerProvider orchestrates:
    - oauth_client.py: consent URL and token endpoint
    - api/balances_api.py: HTTP client for balances
    - api/payments_api.py: HTTP client for debit/commit/status
    - mappers/balance_mapper.py: JSON → BalanceData
    - mappers/charge_mapper.py: JSON → Charge / ChargeStatusReport / Challenge
"""

from typing import Any

import structlog

from src.core.config import Settings
from src.core.constants import API_VERSION_PREFIX
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.core.validation import mask_identifier
from src.domain.entities import Charge
from src.domain.enums import ChargeStatus
from src.domain.errors import ProviderError, ProviderInvalidResponseError
from src.domain.protocols import BalanceData
from src.domain.value_objects import BearerToken, ChargeStatusReport, Money
from src.infrastructure.providers.payoneer.api.balances_api import PayoneerBalancesAPI
from src.infrastructure.providers.payoneer.api.payments_api import PayoneerPaymentsAPI
from src.infrastructure.providers.payoneer.mappers.balance_mapper import (
    PayoneerBalanceMapper,
)
from src.infrastructure.providers.payoneer.mappers.charge_mapper import (
    PayoneerChargeMapper,
)
from src.infrastructure.providers.payoneer.oauth_client import PayoneerOAuthClient

logger = structlog.get_logger(__name__)


class PayoneerProvider:
    """Payoneer adapter implementing PaymentsProviderProtocol.

    Attributes:
        settings: Application settings containing Payoneer credentials.
        timeout: HTTP request timeout for non-commit calls.

    Example:
        >>> from src.core.config import settings
        >>> provider = PayoneerProvider(settings=settings)
        >>> result = await provider.exchange_code_for_token(code)
        >>> match result:
        ...     case Success(value=token):
        ...         print(token.expires_in)
        ...     case Failure(error=error):
        ...         print(error.message)
    """

    def __init__(
        self,
        *,
        settings: Settings,
        timeout: float | None = None,
    ) -> None:
        """Initialize Payoneer provider.

        Args:
            settings: Application settings with Payoneer configuration.
            timeout: HTTP request timeout (defaults to settings.payoneer_timeout).

        Raises:
            ValueError: If required Payoneer settings are not configured.
        """
        if not settings.payoneer_client_id:
            raise ValueError("payoneer_client_id is required in settings")
        if not settings.payoneer_client_secret:
            raise ValueError("payoneer_client_secret is required in settings")
        if not settings.payoneer_redirect_uri:
            raise ValueError("payoneer_redirect_uri is required in settings")

        self._settings = settings
        self._timeout = settings.payoneer_timeout if timeout is None else timeout

        self._oauth = PayoneerOAuthClient(
            base_url=f"{settings.payoneer_login_url}{settings.payoneer_oauth_path}",
            client_id=settings.payoneer_client_id,
            client_secret=settings.payoneer_client_secret,
            redirect_uri=settings.payoneer_redirect_uri,
            timeout=self._timeout,
        )
        self._balances_api = PayoneerBalancesAPI(
            base_url=self._api_base,
            timeout=self._timeout,
        )
        self._payments_api = PayoneerPaymentsAPI(
            base_url=self._api_base,
            timeout=self._timeout,
        )
        self._balance_mapper = PayoneerBalanceMapper()
        self._charge_mapper = PayoneerChargeMapper()

    @property
    def slug(self) -> str:
        """Return provider slug identifier."""
        return "payoneer"

    @property
    def _api_base(self) -> str:
        """Versioned REST API base URL."""
        return f"{self._settings.payoneer_api_url}{API_VERSION_PREFIX}"

    # -------------------------------------------------------------------------
    # Credential/Token Provider
    # -------------------------------------------------------------------------

    def build_consent_url(self, state: str | None = None) -> str:
        """Build the consent page URL the account holder is sent to."""
        return self._oauth.build_consent_url(state)

    async def exchange_code_for_token(
        self, code: str
    ) -> Result[BearerToken, ProviderError]:
        """Exchange the one-time consent code for a bearer token."""
        return await self._oauth.exchange_code(code)

    async def refresh_access_token(
        self, refresh_token: str
    ) -> Result[BearerToken, ProviderError]:
        """Exchange a refresh token for a new bearer token."""
        return await self._oauth.refresh(refresh_token)

    async def get_application_token(self) -> Result[BearerToken, ProviderError]:
        """Obtain an application token via client credentials."""
        return await self._oauth.client_credentials()

    def decode_id_token(self, id_token: str) -> Result[dict[str, Any], ProviderError]:
        """Decode id_token claims (no signature verification)."""
        return self._oauth.decode_id_token(id_token)

    # -------------------------------------------------------------------------
    # Account Query
    # -------------------------------------------------------------------------

    async def get_balances(
        self, account_id: str, access_token: str
    ) -> Result[list[BalanceData], ProviderError]:
        """Fetch the account holder's balances.

        Args:
            account_id: Account holder id.
            access_token: Bearer token.

        Returns:
            Success(list[BalanceData]): Balances (empty for unknown shapes).
            Failure(ProviderError): On API failure.
        """
        result = await self._balances_api.get_balances(account_id, access_token)

        match result:
            case Failure():
                return result
            case Success(value=data):
                balances = self._balance_mapper.map_balances(data)
                logger.info(
                    "payoneer_balances_fetched",
                    account_id=mask_identifier(account_id),
                    count=len(balances),
                )
                return Success(value=balances)

    # -------------------------------------------------------------------------
    # Charge Initiator / Committer primitives / Status Poller
    # -------------------------------------------------------------------------

    async def create_debit(
        self,
        *,
        account_id: str,
        balance_id: str,
        amount: Money,
        target_amount: bool,
        client_reference_id: str,
        description: str,
        access_token: str,
    ) -> Result[Charge, ProviderError]:
        """Create a pending debit against a balance.

        Args:
            account_id: Account holder id.
            balance_id: Balance to debit.
            amount: Amount and currency of the debit.
            target_amount: True if the partner receives exactly `amount`.
            client_reference_id: Unique reference for status lookups.
            description: Short description shown to the account holder.
            access_token: Bearer token.

        Returns:
            Success(Charge): Pending charge with commit_id and amounts.
            Failure(ChallengeRequiredError): MFA needed before the debit.
            Failure(ProviderInvalidResponseError): No commit_id in the response.
        """
        body = {
            "client_reference_id": client_reference_id,
            "amount": amount.to_float(),
            "currency": amount.currency,
            "target_amount": target_amount,
            "description": description,
            "to": {
                "type": "partner",
                "id": self._settings.payoneer_partner_id,
            },
        }

        result = await self._payments_api.create_debit(
            account_id=account_id,
            balance_id=balance_id,
            body=body,
            access_token=access_token,
        )

        match result:
            case Failure():
                return result
            case Success(value=data):
                charge = self._charge_mapper.map_debit(data, client_reference_id)
                if charge is None:
                    return Failure(
                        error=ProviderInvalidResponseError(
                            code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                            message="Payoneer debit response has no commit_id",
                            provider_name=self.slug,
                        )
                    )
                logger.info(
                    "payoneer_debit_created",
                    account_id=mask_identifier(account_id),
                    commit_id=charge.commit_id,
                    client_reference_id=charge.client_reference_id,
                )
                return Success(value=charge)

    async def commit_charge(
        self,
        *,
        account_id: str,
        commit_id: str,
        access_token: str,
        timeout: float | None = None,
    ) -> Result[ChargeStatusReport, ProviderError]:
        """Single commit attempt (retry policy lives in ChargeCommitter).

        Args:
            account_id: Account holder id.
            commit_id: Commit id from the debit response.
            access_token: Bearer token.
            timeout: Commit timeout in seconds.

        Returns:
            Success(ChargeStatusReport): Status reported by the commit call
                (UNKNOWN if the response carries none).
            Failure(ProviderUnavailableError): `is_timeout=True` on timeout.
            Failure(ChallengeRequiredError): MFA required.
        """
        result = await self._payments_api.commit(
            account_id,
            commit_id,
            access_token=access_token,
            timeout=timeout,
        )

        match result:
            case Failure():
                return result
            case Success(value=data):
                report = self._charge_mapper.map_status(data) or ChargeStatusReport(
                    status=ChargeStatus.UNKNOWN
                )
                return Success(value=report)

    async def commit_after_challenge(
        self, response_path: str, access_token: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Resume the pending decision after the MFA challenge."""
        return await self._payments_api.resume_after_challenge(
            response_path, access_token
        )

    async def get_charge_status(
        self, account_id: str, client_reference_id: str, access_token: str
    ) -> Result[ChargeStatusReport, ProviderError]:
        """Fetch the charge status by client reference id.

        Returns:
            Success(ChargeStatusReport): Structured status.
            Failure(ProviderInvalidResponseError): No `status` in the response.
        """
        result = await self._payments_api.get_status(
            account_id, client_reference_id, access_token
        )

        match result:
            case Failure():
                return result
            case Success(value=data):
                report = self._charge_mapper.map_status(data)
                if report is None:
                    return Failure(
                        error=ProviderInvalidResponseError(
                            code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                            message="Payoneer status response has no status",
                            provider_name=self.slug,
                        )
                    )
                logger.info(
                    "payoneer_charge_status_fetched",
                    client_reference_id=client_reference_id,
                    status=report.status.name,
                )
                return Success(value=report)
