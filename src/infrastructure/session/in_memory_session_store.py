"""In-memory payment session store.

Implements SessionStoreProtocol with a dictionary keyed by session id.
Nothing survives a restart.

Architecture:
    - Implements SessionStoreProtocol (hexagonal adapter pattern)
    - asyncio.Lock guards every mutation
    - Sessions idle longer than the TTL are dropped on access, and swept
      from the whole store on every create and save

Usage:
    >>> @lru_cache()
    >>> def get_session_store() -> SessionStoreProtocol:
    ...     return InMemorySessionStore(logger=get_logger())
    >>>
    >>> session = await store.get_or_create(request.cookies.get("payoneer_session"))
"""

import asyncio
import secrets
from datetime import UTC, datetime, timedelta

from src.core.constants import SESSION_TTL_DEFAULT
from src.domain.entities import PaymentSession
from src.domain.protocols.logger_protocol import LoggerProtocol


class InMemorySessionStore:
    """Dictionary-backed session store.

    Thread Safety:
        - NOT thread-safe (single-process asyncio design)
        - Coroutines are serialized by an asyncio.Lock

    Attributes:
        _sessions: Session id → PaymentSession.
        _lock: Guards reads and writes of _sessions.
        _ttl: Idle lifetime of a session.
        _logger: Logger for session lifecycle events.
    """

    def __init__(
        self,
        logger: LoggerProtocol,
        ttl_seconds: float = SESSION_TTL_DEFAULT,
    ) -> None:
        """Initialize an empty store.

        Args:
            logger: Logger for session lifecycle events.
            ttl_seconds: Idle lifetime after which a session is discarded.
        """
        self._sessions: dict[str, PaymentSession] = {}
        self._lock = asyncio.Lock()
        self._ttl = timedelta(seconds=ttl_seconds)
        self._logger = logger

    async def create(self) -> PaymentSession:
        """Create and store a new empty session with a random id."""
        session = PaymentSession(session_id=secrets.token_urlsafe(16))
        async with self._lock:
            self._purge_expired()
            self._sessions[session.session_id] = session
        self._logger.info("payment_session_created", session_id=session.session_id)
        return session

    async def get(self, session_id: str) -> PaymentSession | None:
        """Get a live session by id.

        Args:
            session_id: Session identifier.

        Returns:
            The session, or None if unknown or expired.
        """
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if self._is_expired(session):
                del self._sessions[session_id]
                self._logger.info("payment_session_expired", session_id=session_id)
                return None
            return session

    async def get_or_create(self, session_id: str | None) -> PaymentSession:
        """Get a session by id, creating a fresh one when missing."""
        if session_id:
            session = await self.get(session_id)
            if session is not None:
                return session
        return await self.create()

    async def save(self, session: PaymentSession) -> None:
        """Insert or replace a session."""
        async with self._lock:
            self._purge_expired()
            self._sessions[session.session_id] = session

    async def delete(self, session_id: str) -> None:
        """Remove a session. Unknown ids are ignored."""
        async with self._lock:
            self._sessions.pop(session_id, None)

    def _is_expired(self, session: PaymentSession) -> bool:
        return datetime.now(UTC) - session.updated_at > self._ttl

    def _purge_expired(self) -> None:
        # Caller holds the lock.
        expired = [sid for sid, s in self._sessions.items() if self._is_expired(s)]
        for session_id in expired:
            del self._sessions[session_id]
            self._logger.info("payment_session_expired", session_id=session_id)
