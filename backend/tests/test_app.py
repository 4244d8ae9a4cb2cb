"""Application wiring and configuration."""

from __future__ import annotations

from datetime import date

from httpx import ASGITransport, AsyncClient

from app.config import AppSettings
from app.main import app


async def test_health_reports_timezone():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["timezone"] == "Asia/Kolkata"


def test_routes_are_registered():
    paths = {route.path for route in app.routes}
    assert {"/xirr", "/allocations", "/baskets/valuation", "/baskets/exit-plan", "/portfolio/summary"} <= paths


def test_settings_hide_ltp_token_in_logs():
    settings = AppSettings(ltp_service_token="secret", timezone="UTC")
    logged = settings.dict_for_logging()
    assert logged["ltp_service_token"] == "***"
    assert logged["timezone"] == "UTC"
    assert isinstance(settings.today(), date)
