"""Shared pytest configuration and test doubles.

Provides:
1. Marker registration (unit, integration)
2. A fully configured Settings instance (no .env needed)
3. RecordingLogger: LoggerProtocol double that keeps every event
4. StubPaymentsProvider: PaymentsProviderProtocol double with queued results
5. Factory helpers for tokens, charges and challenges
"""

import asyncio
from collections import deque
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
import pytest

from src.core.config import Settings
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities import Charge
from src.domain.enums import ChargeStatus
from src.domain.errors import (
    ChallengeRequiredError,
    ProviderInvalidResponseError,
    ProviderUnavailableError,
)
from src.domain.protocols import BalanceData
from src.domain.value_objects import (
    BearerToken,
    Challenge,
    ChargeAmounts,
    ChargeStatusReport,
    Money,
)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests against mocked HTTP"
    )


@pytest.fixture
def payoneer_settings() -> Settings:
    """Settings with sandbox credentials, independent of the environment."""
    return Settings(
        _env_file=None,
        environment="testing",
        payoneer_client_id="client-id",
        payoneer_client_secret="client-secret",
        payoneer_partner_id="partner-1",
        payoneer_redirect_uri="http://localhost:4000/oauth/authorize",
        payoneer_api_url="https://api.payoneer.test",
        payoneer_login_url="https://login.payoneer.test",
        payoneer_timeout=5.0,
    )


# =============================================================================
# Logger double
# =============================================================================


class RecordingLogger:
    """LoggerProtocol double recording (level, event, context) tuples."""

    def __init__(
        self,
        records: list[tuple[str, str, dict[str, Any]]] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.records = records if records is not None else []
        self._context = context or {}

    def _log(self, level: str, message: str, context: dict[str, Any]) -> None:
        self.records.append((level, message, {**self._context, **context}))

    def debug(self, message: str, /, **context: Any) -> None:
        self._log("debug", message, context)

    def info(self, message: str, /, **context: Any) -> None:
        self._log("info", message, context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._log("warning", message, context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._log("error", message, context)

    def bind(self, **context: Any) -> "RecordingLogger":
        return RecordingLogger(self.records, {**self._context, **context})

    def events(self, level: str | None = None) -> list[str]:
        """Event names logged (optionally at one level)."""
        return [m for lvl, m, _ in self.records if level is None or lvl == level]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


# =============================================================================
# Factories
# =============================================================================


_SIGNING_KEY = "unverified-test-signing-key-0123456789"


def make_id_token(account_id: Any = 42, **claims: Any) -> str:
    """Unsigned-verification JWT carrying an account_id claim."""
    return jwt.encode({"account_id": account_id, **claims}, _SIGNING_KEY, algorithm="HS256")


def make_token(
    access_token: str = "T1",
    *,
    refresh_token: str | None = "R1",
    id_token: str | None = None,
) -> BearerToken:
    return BearerToken(
        access_token=access_token,
        expires_in=2592000,
        refresh_token=refresh_token,
        scope="read write openid",
        id_token=id_token,
    )


def make_charge(commit_id: str = "C1", client_reference_id: str = "ref-1") -> Charge:
    return Charge(
        commit_id=commit_id,
        client_reference_id=client_reference_id,
        amounts=ChargeAmounts(
            charged=Money("6.12", "USD"),
            target=Money("6.12", "USD"),
        ),
    )


def make_challenge(
    url: str = "https://auth.payoneer.test/#?t=abc", **kwargs: Any
) -> Challenge:
    return Challenge(type="mfa", url=url, session_id="challenge-session", **kwargs)


def status_report(status: ChargeStatus, **kwargs: Any) -> ChargeStatusReport:
    return ChargeStatusReport(status=status, **kwargs)


def timeout_error() -> ProviderUnavailableError:
    return ProviderUnavailableError(
        code=ErrorCode.PROVIDER_TIMEOUT,
        message="Payoneer API request timed out",
        provider_name="payoneer",
        is_timeout=True,
    )


def challenge_error(challenge: Challenge | None = None) -> ChallengeRequiredError:
    return ChallengeRequiredError(
        code=ErrorCode.CHALLENGE_REQUIRED,
        message="Challenge authentication required",
        provider_name="payoneer",
        challenge=challenge or make_challenge(),
    )


# =============================================================================
# Provider double
# =============================================================================


class StubPaymentsProvider:
    """PaymentsProviderProtocol double.

    Each call pops the next queued result for that operation; the last
    queued result repeats when the queue runs dry. Every call is recorded
    in `calls` as (operation, kwargs).
    """

    slug = "payoneer"

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._results: dict[str, deque[Any]] = {
            "exchange_code_for_token": deque(
                [Success(value=make_token(id_token=make_id_token(42)))]
            ),
            "refresh_access_token": deque(
                [Success(value=make_token("T2", refresh_token="R2"))]
            ),
            "get_application_token": deque(
                [Success(value=make_token("APP", refresh_token=None))]
            ),
            "get_balances": deque(
                [
                    Success(
                        value=[
                            BalanceData(balance_id="B1", currency="USD"),
                            BalanceData(balance_id="B2", currency="EUR"),
                        ]
                    )
                ]
            ),
            "create_debit": deque([Success(value=make_charge())]),
            "commit_charge": deque([Success(value=status_report(ChargeStatus.COMPLETED))]),
            "commit_after_challenge": deque([Success(value={"result": {"status": 2}})]),
            "get_charge_status": deque(
                [Success(value=status_report(ChargeStatus.COMPLETED, payment_id="P1"))]
            ),
        }

    def queue(self, operation: str, *results: Any) -> "StubPaymentsProvider":
        """Replace queued results for an operation."""
        self._results[operation] = deque(results)
        return self

    def calls_to(self, operation: str) -> list[dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == operation]

    def _next(self, operation: str, **kwargs: Any) -> Any:
        self.calls.append((operation, kwargs))
        results = self._results[operation]
        return results.popleft() if len(results) > 1 else results[0]

    def build_consent_url(self, state: str | None = None) -> str:
        return f"https://login.payoneer.test/api/v2/oauth2/authorize?state={state}"

    async def exchange_code_for_token(self, code: str):
        return self._next("exchange_code_for_token", code=code)

    async def refresh_access_token(self, refresh_token: str):
        return self._next("refresh_access_token", refresh_token=refresh_token)

    async def get_application_token(self):
        return self._next("get_application_token")

    def decode_id_token(self, id_token: str):
        try:
            return Success(value=jwt.decode(id_token, options={"verify_signature": False}))
        except jwt.InvalidTokenError as e:
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=str(e),
                    provider_name="payoneer",
                )
            )

    async def get_balances(self, account_id: str, access_token: str):
        return self._next("get_balances", account_id=account_id, access_token=access_token)

    async def create_debit(self, **kwargs: Any):
        return self._next("create_debit", **kwargs)

    async def commit_charge(self, **kwargs: Any):
        return self._next("commit_charge", **kwargs)

    async def commit_after_challenge(self, response_path: str, access_token: str):
        return self._next(
            "commit_after_challenge", response_path=response_path, access_token=access_token
        )

    async def get_charge_status(
        self, account_id: str, client_reference_id: str, access_token: str
    ):
        return self._next(
            "get_charge_status",
            account_id=account_id,
            client_reference_id=client_reference_id,
            access_token=access_token,
        )


@pytest.fixture
def stub_provider() -> StubPaymentsProvider:
    return StubPaymentsProvider()


class FakeSleep:
    """Awaitable sleep double recording requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


def future(minutes: int = 10) -> datetime:
    return datetime.now(UTC) + timedelta(minutes=minutes)
