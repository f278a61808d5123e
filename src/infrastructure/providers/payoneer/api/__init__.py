"""Payoneer API clients for external API communication.

HTTP clients for the Payoneer v4 REST API. They handle HTTP concerns only
and return raw JSON (dict); mapping to domain types happens in mappers/.
"""

from src.infrastructure.providers.payoneer.api.balances_api import PayoneerBalancesAPI
from src.infrastructure.providers.payoneer.api.payments_api import PayoneerPaymentsAPI

__all__ = ["PayoneerBalancesAPI", "PayoneerPaymentsAPI"]
