"""SessionStoreProtocol for payment session storage.

Sessions live only in memory; the protocol keeps the application layer
independent of where they are held.
"""

from typing import Protocol

from src.domain.entities.payment_session import PaymentSession


class SessionStoreProtocol(Protocol):
    """Protocol for payment session storage."""

    async def create(self) -> PaymentSession:
        """Create and store a new empty session."""
        ...

    async def get(self, session_id: str) -> PaymentSession | None:
        """Get a session by id, None if unknown."""
        ...

    async def get_or_create(self, session_id: str | None) -> PaymentSession:
        """Get a session by id, creating a new one if missing."""
        ...

    async def save(self, session: PaymentSession) -> None:
        """Store (insert or replace) a session."""
        ...

    async def delete(self, session_id: str) -> None:
        """Remove a session. Unknown ids are ignored."""
        ...
