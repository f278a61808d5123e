"""PaymentsProviderProtocol for the payments API adapter.

Port (interface) for hexagonal architecture. The Payoneer adapter in
`src/infrastructure/providers/payoneer/` implements it; the application layer
(charge committer, callback handlers) only depends on this protocol.

Methods return Result types following railway-oriented programming pattern.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from src.core.result import Result
    from src.domain.entities.charge import Charge
    from src.domain.errors import ProviderError
    from src.domain.value_objects.bearer_token import BearerToken
    from src.domain.value_objects.charge_status_report import ChargeStatusReport
    from src.domain.value_objects.money import Money


@dataclass(frozen=True, kw_only=True)
class BalanceData:
    """Balance as returned by the provider.

    Attributes:
        balance_id: Balance identifier used when creating a debit.
        currency: ISO 4217 currency code.
        available_balance: Available amount, when reported.
        balance_type: Provider type string (e.g. "BALANCE").
        status_name: Provider status name (e.g. "Active").
        raw_data: Full provider item for debugging.
    """

    balance_id: str
    currency: str
    available_balance: Decimal | None = None
    balance_type: str | None = None
    status_name: str | None = None
    raw_data: dict[str, Any] | None = None


class PaymentsProviderProtocol(Protocol):
    """Protocol for the payments provider adapter.

    Covers the OAuth authorization-code flow and the charge lifecycle calls.
    """

    @property
    def slug(self) -> str:
        """Provider identifier used in logs and errors."""
        ...

    # -------------------------------------------------------------------------
    # Credential/Token Provider
    # -------------------------------------------------------------------------

    def build_consent_url(self, state: str | None = None) -> str:
        """Build the consent page URL (no network).

        Args:
            state: Opaque value echoed back on the callback.

        Returns:
            str: URL to send the account holder to.
        """
        ...

    async def exchange_code_for_token(
        self, code: str
    ) -> "Result[BearerToken, ProviderError]":
        """Exchange a one-time authorization code for a bearer token."""
        ...

    async def refresh_access_token(
        self, refresh_token: str
    ) -> "Result[BearerToken, ProviderError]":
        """Exchange a refresh token for a new bearer token."""
        ...

    async def get_application_token(self) -> "Result[BearerToken, ProviderError]":
        """Obtain an application token via client credentials."""
        ...

    def decode_id_token(
        self, id_token: str
    ) -> "Result[dict[str, Any], ProviderError]":
        """Decode id_token claims without verifying the signature."""
        ...

    # -------------------------------------------------------------------------
    # Account Query / Charge Initiator / Status Poller
    # -------------------------------------------------------------------------

    async def get_balances(
        self, account_id: str, access_token: str
    ) -> "Result[list[BalanceData], ProviderError]":
        """Fetch the account holder's balances."""
        ...

    async def create_debit(
        self,
        *,
        account_id: str,
        balance_id: str,
        amount: "Money",
        target_amount: bool,
        client_reference_id: str,
        description: str,
        access_token: str,
    ) -> "Result[Charge, ProviderError]":
        """Create a pending debit against a balance."""
        ...

    async def commit_charge(
        self,
        *,
        account_id: str,
        commit_id: str,
        access_token: str,
        timeout: float | None = None,
    ) -> "Result[ChargeStatusReport, ProviderError]":
        """Single commit attempt for a pending debit (no retry)."""
        ...

    async def commit_after_challenge(
        self, response_path: str, access_token: str
    ) -> "Result[dict[str, Any], ProviderError]":
        """Replay a pending decision after the account holder passed MFA."""
        ...

    async def get_charge_status(
        self, account_id: str, client_reference_id: str, access_token: str
    ) -> "Result[ChargeStatusReport, ProviderError]":
        """Fetch the current status of a charge by client reference id."""
        ...
