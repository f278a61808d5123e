"""Charge disclosure shown to the account holder before commit.

Example (display form):
    {
        "OrderAmount": "EUR 7000",
        "PaymentAmount": "USD 7653.52",
        "FxRate": "EUR 1.00 = USD 1.0934"
    }
"""

from dataclasses import dataclass, field

from src.domain.value_objects.charge_amounts import Fee, FxQuote
from src.domain.value_objects.money import Money


@dataclass(frozen=True, kw_only=True)
class ChargeDisclosure:
    """Summary of a pending charge.

    Attributes:
        order_amount: Amount charged to the account holder.
        payment_amount: Amount delivered to the partner.
        fx: FX quote, when currencies differ.
        fees: Fees included in the charge.
    """

    order_amount: Money
    payment_amount: Money
    fx: FxQuote | None = None
    fees: tuple[Fee, ...] = field(default_factory=tuple)

    def to_display(self) -> dict[str, str]:
        """Render the disclosure as display strings.

        Returns:
            dict[str, str]: OrderAmount, PaymentAmount and FxRate (if any).
        """
        display = {
            "OrderAmount": str(self.order_amount),
            "PaymentAmount": str(self.payment_amount),
        }
        if self.fx is not None:
            display["FxRate"] = str(self.fx)
        return display
