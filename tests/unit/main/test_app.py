from __future__ import annotations

import httpx
import pytest

from beacon.main.app import create_app


@pytest.mark.asyncio
async def test_create_app_serves_health_during_lifespan(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SERVICE_NAME", "satellite")
    monkeypatch.setenv("REGISTRATION_ENABLED", "false")

    app = create_app()
    assert app.title == "satellite"

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport, base_url="http://satellite"
        ) as client:
            response = await client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "up"
    assert payload["service"] == "satellite"
    assert payload["registration"]["state"] == "disabled"
