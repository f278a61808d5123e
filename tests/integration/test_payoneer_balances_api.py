"""Integration tests for PayoneerBalancesAPI.

Tests cover:
- HTTP request construction (headers, URL)
- Response handling (success, error codes)
- Error translation to ProviderError types

Architecture:
- Uses pytest-httpx for HTTP mocking
- Tests API client in isolation (no mapper)
"""

import httpx
import pytest
from pytest_httpx import HTTPXMock

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import (
    ProviderAuthenticationError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)
from src.infrastructure.providers.payoneer.api import PayoneerBalancesAPI

BALANCES_URL = "https://api.payoneer.test/v4/accounts/42/balances"


@pytest.fixture
def api() -> PayoneerBalancesAPI:
    return PayoneerBalancesAPI(base_url="https://api.payoneer.test/v4", timeout=5.0)


@pytest.mark.integration
class TestGetBalancesSuccess:
    @pytest.mark.asyncio
    async def test_returns_raw_response(self, api, httpx_mock: HTTPXMock):
        payload = {"result": {"items": [{"id": "B1", "currency": "USD"}], "total": 1}}
        httpx_mock.add_response(method="GET", url=BALANCES_URL, json=payload)

        result = await api.get_balances("42", "T1")

        assert result == Success(value=payload)

    @pytest.mark.asyncio
    async def test_sends_bearer_token(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="GET", url=BALANCES_URL, json={"result": {}})

        await api.get_balances("42", "my_secret_token")

        request = httpx_mock.get_request()
        assert request.headers["Authorization"] == "Bearer my_secret_token"
        assert request.headers["Accept"] == "application/json"


@pytest.mark.integration
class TestGetBalancesErrors:
    @pytest.mark.asyncio
    async def test_expired_token(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="GET",
            url=BALANCES_URL,
            status_code=401,
            json={
                "error": "Unauthorized",
                "error_description": "Access token is invalid (expired)",
                "error_details": {"code": 401, "sub_code": 4016},
            },
        )

        result = await api.get_balances("42", "old")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderAuthenticationError)
        assert result.error.is_token_expired is True
        assert result.error.details == {"code": 401, "sub_code": 4016}

    @pytest.mark.asyncio
    async def test_forbidden(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="GET", url=BALANCES_URL, status_code=403)

        result = await api.get_balances("42", "T1")

        assert isinstance(result.error, ProviderAuthenticationError)
        assert result.error.is_token_expired is False

    @pytest.mark.asyncio
    async def test_rate_limited(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="GET",
            url=BALANCES_URL,
            status_code=429,
            headers={"Retry-After": "30"},
        )

        result = await api.get_balances("42", "T1")

        assert isinstance(result.error, ProviderRateLimitError)
        assert result.error.retry_after == 30

    @pytest.mark.asyncio
    async def test_server_error(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="GET", url=BALANCES_URL, status_code=503)

        result = await api.get_balances("42", "T1")

        assert isinstance(result.error, ProviderUnavailableError)
        assert result.error.code is ErrorCode.PROVIDER_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_timeout(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ReadTimeout("Read timed out"))

        result = await api.get_balances("42", "T1")

        assert isinstance(result.error, ProviderUnavailableError)
        assert result.error.code is ErrorCode.PROVIDER_TIMEOUT
        assert result.error.is_timeout is True

    @pytest.mark.asyncio
    async def test_invalid_json(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="GET", url=BALANCES_URL, text="<html>oops</html>")

        result = await api.get_balances("42", "T1")

        assert isinstance(result.error, ProviderInvalidResponseError)
        assert result.error.response_body == "<html>oops</html>"

    @pytest.mark.asyncio
    async def test_non_object_json(self, api, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="GET", url=BALANCES_URL, json=[1, 2])

        result = await api.get_balances("42", "T1")

        assert isinstance(result.error, ProviderInvalidResponseError)
