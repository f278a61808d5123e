"""Payoneer provider package.

Implements PaymentsProviderProtocol for the Payoneer payments API.

Architecture:
    payoneer_provider.py - Facade implementing PaymentsProviderProtocol
    oauth_client.py - Consent URL and token endpoint
    api/ - HTTP clients for balances and payments endpoints
    mappers/ - Data transformers (JSON → BalanceData/Charge/ChargeStatusReport)

Usage:
    from src.infrastructure.providers.payoneer import PayoneerProvider

    provider = PayoneerProvider(settings=settings)
    result = await provider.exchange_code_for_token(code)
"""

from src.infrastructure.providers.payoneer.api.balances_api import PayoneerBalancesAPI
from src.infrastructure.providers.payoneer.api.payments_api import PayoneerPaymentsAPI
from src.infrastructure.providers.payoneer.mappers.balance_mapper import (
    PayoneerBalanceMapper,
)
from src.infrastructure.providers.payoneer.mappers.charge_mapper import (
    PayoneerChargeMapper,
)
from src.infrastructure.providers.payoneer.oauth_client import PayoneerOAuthClient
from src.infrastructure.providers.payoneer.payoneer_provider import PayoneerProvider

__all__ = [
    "PayoneerProvider",
    "PayoneerOAuthClient",
    "PayoneerBalancesAPI",
    "PayoneerPaymentsAPI",
    "PayoneerBalanceMapper",
    "PayoneerChargeMapper",
]
