"""LTP service client tests."""

from __future__ import annotations

import httpx
import pytest

from app.providers.ltp import LtpClient, LtpServiceError


class StubResponse:
    def __init__(self, payload: object, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def json(self) -> object:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class StubClient:
    def __init__(self, response: StubResponse | None = None) -> None:
        self.response = response or StubResponse({"ltp": 3901.25})
        self.calls: list[dict[str, object]] = []

    async def get(self, url: str, params: dict[str, object], headers: dict[str, str], timeout: float) -> StubResponse:
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        return self.response

    async def aclose(self) -> None:  # pragma: no cover - included for interface completeness
        return None


async def test_sends_symbol_and_bearer_token():
    stub = StubClient()
    client = LtpClient("https://prices.test/ltp", "secret", timeout=2.0, client=stub)
    assert await client.latest_price("TCS") == 3901.25
    call = stub.calls[0]
    assert call["url"] == "https://prices.test/ltp"
    assert call["params"] == {"symbol": "TCS"}
    assert call["headers"] == {"Authorization": "Bearer secret"}
    assert call["timeout"] == 2.0


async def test_omits_authorization_without_token():
    stub = StubClient()
    client = LtpClient("https://prices.test/ltp", "", client=stub)
    await client.latest_price("TCS")
    assert stub.calls[0]["headers"] == {}


@pytest.mark.parametrize(
    "response",
    [
        StubResponse({"detail": "boom"}, status_code=500),
        StubResponse({"ltp": None}),
        StubResponse({"ltp": "n/a"}),
        StubResponse({"ltp": 0}),
        StubResponse(["unexpected"]),
        StubResponse(ValueError("not json")),
    ],
)
async def test_unusable_responses_raise(response):
    client = LtpClient("https://prices.test/ltp", "secret", client=StubClient(response))
    with pytest.raises(LtpServiceError):
        await client.latest_price("TCS")


async def test_transport_errors_are_wrapped():
    class FailingClient(StubClient):
        async def get(self, url, params, headers, timeout):
            raise httpx.ConnectError("connection refused")

    client = LtpClient("https://prices.test/ltp", "secret", client=FailingClient())
    with pytest.raises(LtpServiceError, match="failed"):
        await client.latest_price("TCS")
