"""Unit tests for HandleAuthorizationCodeHandler.

Tests the charge flow run on the consent callback.
Uses StubPaymentsProvider and the in-memory session store.
"""

from decimal import Decimal

import pytest

from src.application.commands import HandleAuthorizationCode
from src.application.commands.handlers.handle_authorization_code_handler import (
    HandleAuthorizationCodeHandler,
)
from src.application.errors import ApplicationErrorCode
from src.application.services import ChargeCommitter
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import ChargeStatus, CommitState
from src.domain.errors import ProviderAuthenticationError
from src.domain.protocols import BalanceData
from src.domain.value_objects import Money
from src.infrastructure.session import InMemorySessionStore
from tests.conftest import (
    challenge_error,
    make_challenge,
    make_id_token,
    make_token,
    status_report,
    timeout_error,
)


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def session_store(recording_logger) -> InMemorySessionStore:
    return InMemorySessionStore(logger=recording_logger)


def create_handler(
    provider,
    session_store,
    logger,
    sleep,
    *,
    currency: str = "USD",
    description: str = "Sample Description",
    refresh_on_connect: bool = True,
) -> HandleAuthorizationCodeHandler:
    """Create handler with a real committer over the stub provider."""
    committer = ChargeCommitter(provider, logger=logger, sleep=sleep)
    return HandleAuthorizationCodeHandler(
        provider=provider,
        session_store=session_store,
        committer=committer,
        logger=logger,
        charge_amount=Money(Decimal("6.12"), currency),
        description=description,
        target_amount=True,
        refresh_on_connect=refresh_on_connect,
    )


# =============================================================================
# Success Tests
# =============================================================================


@pytest.mark.unit
class TestChargeFlowSuccess:
    """Full flow from code to committed charge."""

    @pytest.mark.asyncio
    async def test_code_exchange_yields_account_id_from_id_token(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        """Code abc123 → token T1 with id_token(account_id=42) → account 42."""
        stub_provider.queue(
            "exchange_code_for_token",
            Success(value=make_token("T1", id_token=make_id_token(42))),
        )
        handler = create_handler(
            stub_provider,
            session_store,
            recording_logger,
            fake_sleep,
            refresh_on_connect=False,
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        assert isinstance(result, Success)
        assert stub_provider.calls_to("exchange_code_for_token") == [{"code": "abc123"}]
        assert stub_provider.calls_to("get_balances") == [
            {"account_id": "42", "access_token": "T1"}
        ]
        session = await session_store.get(result.value.session_id)
        assert session.account_id == "42"

    @pytest.mark.asyncio
    async def test_selects_balance_by_currency(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        """USD charge against [USD:B1, EUR:B2] debits B1."""
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        await handler.handle(HandleAuthorizationCode(code="abc123"))

        debit = stub_provider.calls_to("create_debit")[0]
        assert debit["balance_id"] == "B1"
        assert debit["amount"] == Money(Decimal("6.12"), "USD")
        assert debit["target_amount"] is True
        assert debit["description"] == "Sample Description"

    @pytest.mark.asyncio
    async def test_refreshed_token_is_used_for_later_calls(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        """Refresh on connect replaces the token wholesale."""
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        assert stub_provider.calls_to("refresh_access_token") == [{"refresh_token": "R1"}]
        assert stub_provider.calls_to("get_balances")[0]["access_token"] == "T2"
        assert stub_provider.calls_to("commit_charge")[0]["access_token"] == "T2"
        session = await session_store.get(result.value.session_id)
        assert session.access_token == "T2"

    @pytest.mark.asyncio
    async def test_commits_debit_and_reports_status(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        """Commit uses the debit's commit_id and the final status is recorded."""
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        flow = result.value
        assert flow.state is CommitState.COMPLETED
        assert flow.requires_challenge is False
        assert flow.status.payment_id == "P1"
        assert flow.charge.status is ChargeStatus.COMPLETED
        assert flow.disclosure.to_display() == {
            "OrderAmount": "USD 6.12",
            "PaymentAmount": "USD 6.12",
        }
        assert stub_provider.calls_to("commit_charge")[0]["commit_id"] == "C1"
        assert len(stub_provider.calls_to("get_charge_status")) == 1

    @pytest.mark.asyncio
    async def test_accepted_commit_is_settled_by_status_query(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        """An in-progress commit answer is not recommitted; the status query decides."""
        stub_provider.queue(
            "commit_charge", Success(value=status_report(ChargeStatus.IN_PROGRESS))
        )
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        flow = result.value
        assert flow.state is CommitState.COMPLETED
        assert flow.status.status is ChargeStatus.COMPLETED
        assert flow.charge.status is ChargeStatus.COMPLETED
        assert len(stub_provider.calls_to("commit_charge")) == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_fresh_client_reference_id_per_debit(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        """Each flow sends a new UUID4 client_reference_id."""
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        await handler.handle(HandleAuthorizationCode(code="abc123"))
        await handler.handle(HandleAuthorizationCode(code="def456"))

        refs = [
            call["client_reference_id"]
            for call in stub_provider.calls_to("create_debit")
        ]
        assert len(refs) == 2
        assert refs[0] != refs[1]
        assert all(len(ref) == 36 for ref in refs)

    @pytest.mark.asyncio
    async def test_reuses_existing_session(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        """Session id from the consent redirect is reused."""
        session = await session_store.create()
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(
            HandleAuthorizationCode(code="abc123", session_id=session.session_id)
        )

        assert result.value.session_id == session.session_id


# =============================================================================
# Challenge Tests
# =============================================================================


@pytest.mark.unit
class TestChargeFlowChallenge:
    """MFA challenges stop the flow and are stored on the session."""

    @pytest.mark.asyncio
    async def test_commit_challenge_is_stored_and_returned(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        challenge = make_challenge()
        stub_provider.queue("commit_charge", Failure(error=challenge_error(challenge)))
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        flow = result.value
        assert flow.requires_challenge is True
        assert flow.challenge == challenge
        assert flow.state is CommitState.CHALLENGE_REQUIRED
        assert stub_provider.calls_to("get_charge_status") == []
        session = await session_store.get(flow.session_id)
        assert session.challenge == challenge
        assert session.charge.commit_id == "C1"

    @pytest.mark.asyncio
    async def test_debit_challenge_keeps_reference_id(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        """Challenge on the debit call: nothing is committed, reference id kept."""
        stub_provider.queue("create_debit", Failure(error=challenge_error()))
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        flow = result.value
        assert flow.requires_challenge is True
        assert stub_provider.calls_to("commit_charge") == []
        session = await session_store.get(flow.session_id)
        assert session.client_reference_id == (
            stub_provider.calls_to("create_debit")[0]["client_reference_id"]
        )


# =============================================================================
# Failure Tests
# =============================================================================


@pytest.mark.unit
class TestChargeFlowFailures:
    """Steps that abort the flow."""

    @pytest.mark.asyncio
    async def test_empty_code_fails_validation(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="  "))

        assert isinstance(result, Failure)
        assert result.error.code is ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert stub_provider.calls == []

    @pytest.mark.asyncio
    async def test_overlong_description_fails_validation(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        handler = create_handler(
            stub_provider,
            session_store,
            recording_logger,
            fake_sleep,
            description="x" * 201,
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        assert isinstance(result, Failure)
        assert result.error.code is ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert "description" in result.error.message

    @pytest.mark.asyncio
    async def test_rejected_code_maps_to_unauthorized(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        stub_provider.queue(
            "exchange_code_for_token",
            Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message="Payoneer authentication failed: invalid_grant",
                    provider_name="payoneer",
                )
            ),
        )
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="used"))

        assert isinstance(result, Failure)
        assert result.error.code is ApplicationErrorCode.UNAUTHORIZED
        assert result.error.step == "exchange_code"
        assert "charge_flow_aborted" in recording_logger.events("warning")

    @pytest.mark.asyncio
    async def test_missing_id_token_aborts(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        stub_provider.queue("exchange_code_for_token", Success(value=make_token()))
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        assert isinstance(result, Failure)
        assert result.error.step == "decode_id_token"
        assert result.error.code is ApplicationErrorCode.PROVIDER_FAILED

    @pytest.mark.asyncio
    async def test_no_balance_in_currency(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        stub_provider.queue(
            "get_balances",
            Success(value=[BalanceData(balance_id="B2", currency="EUR")]),
        )
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        assert isinstance(result, Failure)
        assert result.error.code is ApplicationErrorCode.NOT_FOUND
        assert result.error.domain_error.code is ErrorCode.BALANCE_NOT_FOUND
        assert stub_provider.calls_to("create_debit") == []

    @pytest.mark.asyncio
    async def test_unresolved_commit_still_queries_status(
        self, stub_provider, session_store, recording_logger, fake_sleep
    ):
        """A FAILED commit is reported with the latest status, not an error."""
        stub_provider.queue("commit_charge", Failure(error=timeout_error()))
        stub_provider.queue(
            "get_charge_status", Success(value=status_report(ChargeStatus.IN_PROGRESS))
        )
        handler = create_handler(
            stub_provider, session_store, recording_logger, fake_sleep
        )

        result = await handler.handle(HandleAuthorizationCode(code="abc123"))

        flow = result.value
        assert flow.state is CommitState.FAILED
        assert flow.status.status is ChargeStatus.IN_PROGRESS
        assert flow.attempts == 2
