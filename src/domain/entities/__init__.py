"""Domain entities.

Usage:
    from src.domain.entities import Charge, PaymentSession
"""

from src.domain.entities.charge import Charge
from src.domain.entities.payment_session import PaymentSession

__all__ = ["Charge", "PaymentSession"]
