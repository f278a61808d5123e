"""Domain protocols (ports).

Infrastructure adapters implement these structurally (PEP 544).
"""

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.payments_provider_protocol import (
    BalanceData,
    PaymentsProviderProtocol,
)
from src.domain.protocols.session_store_protocol import SessionStoreProtocol

__all__ = [
    "BalanceData",
    "LoggerProtocol",
    "PaymentsProviderProtocol",
    "SessionStoreProtocol",
]
