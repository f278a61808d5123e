"""Payment session storage adapters."""

from src.infrastructure.session.in_memory_session_store import InMemorySessionStore

__all__ = ["InMemorySessionStore"]
