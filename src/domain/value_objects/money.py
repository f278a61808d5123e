"""Immutable Money value object with Decimal precision.

Payoneer returns amounts as JSON numbers. They are converted through `str()`
so `203.8` stays `Decimal("203.8")` instead of picking up float noise.

Usage:
    from decimal import Decimal
    from src.domain.value_objects import Money

    charged = Money(Decimal("109.01"), "USD")
    str(charged)  # "USD 109.01"
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation


def validate_currency(code: str) -> str:
    """Validate and normalize currency code.

    Args:
        code: Currency code (case-insensitive).

    Returns:
        Uppercase ISO 4217 currency code.

    Raises:
        ValueError: If code is not three letters.

    Example:
        >>> validate_currency("usd")
        'USD'
    """
    if not code or not isinstance(code, str):
        raise ValueError("Currency code cannot be empty")

    normalized = code.upper().strip()

    if len(normalized) != 3 or not normalized.isalpha():
        raise ValueError(f"Currency code must be 3 letters: {code}")

    return normalized


@dataclass(frozen=True)
class Money:
    """Immutable monetary value with currency.

    Attributes:
        amount: Decimal value.
        currency: ISO 4217 currency code (e.g., "USD", "EUR").

    Example:
        >>> Money(Decimal("150"), "usd")
        Money(amount=Decimal('150'), currency='USD')
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        """Validate money after initialization.

        Raises:
            ValueError: If amount is not a valid number or currency is invalid.
        """
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except (InvalidOperation, TypeError) as e:
                raise ValueError(f"Amount must be a valid number: {e}") from e

        if self.amount.is_nan() or self.amount.is_infinite():
            raise ValueError("Amount cannot be NaN or Infinite")

        object.__setattr__(self, "currency", validate_currency(self.currency))

    def __str__(self) -> str:
        """Format as `<CURRENCY> <amount>` for disclosures."""
        return f"{self.currency} {self.amount}"

    def to_float(self) -> float:
        """Amount as float for JSON request bodies."""
        return float(self.amount)
