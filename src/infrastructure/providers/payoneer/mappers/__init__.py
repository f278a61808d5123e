"""Payoneer data mappers for transforming API responses to domain types.

Mappers contain Payoneer-specific knowledge (field names, response shapes)
and never raise: malformed items are logged and skipped.
"""

from src.infrastructure.providers.payoneer.mappers.balance_mapper import (
    PayoneerBalanceMapper,
)
from src.infrastructure.providers.payoneer.mappers.charge_mapper import (
    PayoneerChargeMapper,
)

__all__ = ["PayoneerBalanceMapper", "PayoneerChargeMapper"]
