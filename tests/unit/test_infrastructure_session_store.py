"""Unit tests for InMemorySessionStore."""

from datetime import UTC, datetime, timedelta

import pytest

from src.infrastructure.session import InMemorySessionStore
from tests.conftest import make_token


@pytest.fixture
def store(recording_logger) -> InMemorySessionStore:
    return InMemorySessionStore(logger=recording_logger)


@pytest.mark.unit
class TestInMemorySessionStore:
    @pytest.mark.asyncio
    async def test_create_and_get(self, store, recording_logger):
        session = await store.create()

        assert await store.get(session.session_id) is session
        assert "payment_session_created" in recording_logger.events("info")

    @pytest.mark.asyncio
    async def test_unknown_id(self, store):
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_get_or_create_reuses_known_id(self, store):
        session = await store.create()

        assert await store.get_or_create(session.session_id) is session

    @pytest.mark.asyncio
    @pytest.mark.parametrize("session_id", [None, "", "missing"])
    async def test_get_or_create_creates_for_unknown_id(self, store, session_id):
        session = await store.get_or_create(session_id)

        assert session.session_id
        assert session.session_id != session_id
        assert await store.get(session.session_id) is session

    @pytest.mark.asyncio
    async def test_sessions_are_isolated(self, store):
        """Two account holders never share tokens or reference ids."""
        first = await store.create()
        second = await store.create()
        first.authenticate(make_token("T-first"), "1")
        first.client_reference_id = "ref-first"
        await store.save(first)

        loaded = await store.get(second.session_id)

        assert first.session_id != second.session_id
        assert loaded.access_token is None
        assert loaded.client_reference_id is None

    @pytest.mark.asyncio
    async def test_idle_session_expires(self, recording_logger):
        store = InMemorySessionStore(logger=recording_logger, ttl_seconds=60)
        session = await store.create()
        session.updated_at = datetime.now(UTC) - timedelta(minutes=5)

        assert await store.get(session.session_id) is None
        assert "payment_session_expired" in recording_logger.events("info")

    @pytest.mark.asyncio
    async def test_abandoned_session_is_swept_on_create(self, recording_logger):
        """An expired session nobody reads again is dropped by the next create."""
        store = InMemorySessionStore(logger=recording_logger, ttl_seconds=60)
        abandoned = await store.create()
        abandoned.updated_at = datetime.now(UTC) - timedelta(minutes=5)

        fresh = await store.create()

        assert abandoned.session_id not in store._sessions
        assert fresh.session_id in store._sessions
        assert "payment_session_expired" in recording_logger.events("info")

    @pytest.mark.asyncio
    async def test_abandoned_session_is_swept_on_save(self, recording_logger):
        store = InMemorySessionStore(logger=recording_logger, ttl_seconds=60)
        abandoned = await store.create()
        live = await store.create()
        abandoned.updated_at = datetime.now(UTC) - timedelta(minutes=5)

        await store.save(live)

        assert list(store._sessions) == [live.session_id]

    @pytest.mark.asyncio
    async def test_delete(self, store):
        session = await store.create()

        await store.delete(session.session_id)
        await store.delete("missing")

        assert await store.get(session.session_id) is None
