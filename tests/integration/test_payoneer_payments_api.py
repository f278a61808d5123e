"""Integration tests for PayoneerPaymentsAPI.

Tests cover:
- Debit, commit, challenge resume and status request construction
- challenge_required bodies (checked before the HTTP status)
- Commit timeout reporting
- Rejected requests with Payoneer error details

Architecture:
- Uses pytest-httpx for HTTP mocking
"""

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import (
    ChallengeRequiredError,
    ProviderRequestRejectedError,
    ProviderUnavailableError,
)
from src.infrastructure.providers.payoneer.api import PayoneerPaymentsAPI

BASE = "https://api.payoneer.test/v4"

CHALLENGE_BODY = {
    "error": "challenge_required",
    "error_description": "Challenge authentication required. Please complete the challenge",
    "error_details": {"code": 1803},
    "challenge": {
        "type": "mfa",
        "expires_at": "2023-05-03T19:20:18.637Z",
        "session_id": "79dd07b9b1a1430e94b32e42bce617cc",
        "url": "https://auth.sandbox.payoneer.com/#?t=79dd&v=a",
    },
}


@pytest.fixture
def api() -> PayoneerPaymentsAPI:
    return PayoneerPaymentsAPI(base_url=BASE, timeout=5.0)


@pytest.mark.integration
class TestCreateDebit:
    @pytest.mark.asyncio
    async def test_posts_body_to_balance(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE}/accounts/42/balances/B1/payments/debit",
            json={"result": {"commit_id": "C1"}},
        )
        body = {"client_reference_id": "ref-1", "amount": 6.12, "currency": "USD"}

        result = await api.create_debit(
            account_id="42", balance_id="B1", body=body, access_token="T1"
        )

        assert result == Success(value={"result": {"commit_id": "C1"}})
        request = httpx_mock.get_request()
        assert json.loads(request.content) == body
        assert request.headers["Authorization"] == "Bearer T1"

    @pytest.mark.asyncio
    async def test_challenge_required(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE}/accounts/42/balances/B1/payments/debit",
            status_code=403,
            json=CHALLENGE_BODY,
        )

        result = await api.create_debit(
            account_id="42", balance_id="B1", body={}, access_token="T1"
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ChallengeRequiredError)
        assert result.error.code is ErrorCode.CHALLENGE_REQUIRED
        assert result.error.challenge.url == "https://auth.sandbox.payoneer.com/#?t=79dd&v=a"
        assert result.error.details == {"code": 1803}

    @pytest.mark.asyncio
    async def test_rejected_with_error_details(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE}/accounts/42/balances/B1/payments/debit",
            status_code=400,
            json={
                "error": "Insufficient funds",
                "error_description": "Balance is too low",
                "error_details": {"code": 1100},
            },
        )

        result = await api.create_debit(
            account_id="42", balance_id="B1", body={}, access_token="T1"
        )

        assert isinstance(result.error, ProviderRequestRejectedError)
        assert result.error.status_code == 400
        assert result.error.api_error == "Insufficient funds"
        assert result.error.api_error_code == 1100
        assert result.error.message == "Balance is too low"


@pytest.mark.integration
class TestCommit:
    @pytest.mark.asyncio
    async def test_puts_commit_id(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="PUT",
            url=f"{BASE}/accounts/42/payments/C1",
            json={"result": {"status": 2, "payment_id": "P1"}},
        )

        result = await api.commit("42", "C1", access_token="T1", timeout=30.0)

        assert result.value["result"]["status"] == 2

    @pytest.mark.asyncio
    async def test_timeout_is_flagged(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ReadTimeout("Read timed out"))

        result = await api.commit("42", "C1", access_token="T1", timeout=30.0)

        assert isinstance(result.error, ProviderUnavailableError)
        assert result.error.is_timeout is True
        assert result.error.code is ErrorCode.PROVIDER_TIMEOUT

    @pytest.mark.asyncio
    async def test_challenge_on_commit(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="PUT",
            url=f"{BASE}/accounts/42/payments/C1",
            status_code=401,
            json=CHALLENGE_BODY,
        )

        result = await api.commit("42", "C1", access_token="T1")

        assert isinstance(result.error, ChallengeRequiredError)

    @pytest.mark.asyncio
    async def test_challenge_without_url_is_plain_error(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="PUT",
            url=f"{BASE}/accounts/42/payments/C1",
            status_code=400,
            json={"error": "challenge_required", "challenge": {"type": "mfa"}},
        )

        result = await api.commit("42", "C1", access_token="T1")

        assert isinstance(result.error, ProviderRequestRejectedError)


@pytest.mark.integration
class TestResumeAndStatus:
    @pytest.mark.asyncio
    async def test_resume_appends_response_path(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE}/accounts/42/payments/C1/decision",
            json={"result": {"status": 2}},
        )

        result = await api.resume_after_challenge("/accounts/42/payments/C1/decision", "T1")

        assert isinstance(result, Success)

    @pytest.mark.asyncio
    async def test_status_by_client_reference_id(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE}/accounts/42/payments/ref-1?type=client_reference_id",
            json={"result": {"status": 1, "status_description": "in progress"}},
        )

        result = await api.get_status("42", "ref-1", "T1")

        assert result.value["result"]["status"] == 1
        request = httpx_mock.get_request()
        assert request.url.params["type"] == "client_reference_id"
