"""Domain value objects.

Immutable values carried by charges and sessions.
"""

from src.domain.value_objects.bearer_token import BearerToken
from src.domain.value_objects.challenge import Challenge
from src.domain.value_objects.charge_amounts import ChargeAmounts, Fee, FxQuote
from src.domain.value_objects.charge_disclosure import ChargeDisclosure
from src.domain.value_objects.charge_status_report import ChargeStatusReport
from src.domain.value_objects.money import Money, validate_currency

__all__ = [
    "BearerToken",
    "Challenge",
    "ChargeAmounts",
    "ChargeDisclosure",
    "ChargeStatusReport",
    "Fee",
    "FxQuote",
    "Money",
    "validate_currency",
]
