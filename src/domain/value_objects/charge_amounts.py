"""Amounts, fees and FX quote attached to a pending charge."""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.value_objects.money import Money


@dataclass(frozen=True, kw_only=True)
class ChargeAmounts:
    """What the account holder pays and what the partner receives.

    Attributes:
        charged: Amount taken from the account holder's balance.
        target: Amount delivered to the partner.
    """

    charged: Money
    target: Money


@dataclass(frozen=True, kw_only=True)
class Fee:
    """A fee applied to a charge.

    Attributes:
        type: Fee type (e.g. "charge_fee", "partner_fee").
        amount: Fee amount.
    """

    type: str
    amount: Money


@dataclass(frozen=True, kw_only=True)
class FxQuote:
    """Currency conversion applied to a charge.

    Attributes:
        quote: Quote identifier.
        rate: Units of target currency per unit of source currency.
        source_currency: Currency of the debited balance.
        target_currency: Currency delivered to the partner.
    """

    rate: Decimal
    source_currency: str
    target_currency: str
    quote: str | None = None

    def __str__(self) -> str:
        """Format as `<SRC> 1.00 = <TGT> <rate>`."""
        return f"{self.source_currency} 1.00 = {self.target_currency} {self.rate}"
