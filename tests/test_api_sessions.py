# tests/test_api_sessions.py
from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from snapsteam.api.v1.deps import get_resolver, get_session_store
from snapsteam.core.errors import MissingCredentialError, ResolverResponseError
from snapsteam.main import app

API = "/api/v1"


def new_session(client) -> dict:
    res = client.post(f"{API}/sessions")
    assert res.status_code == 201
    return res.json()


def test_create_session_has_defaults(client):
    body = new_session(client)
    assert body["input"] == {
        "fluidState": "Subcooled/Superheated",
        "mode": "Pressure & Temperature",
        "value1": "0.101325",
        "value2": "100",
        "unit1": "MPa",
        "unit2": "°C",
    }
    assert body["canCalculate"] is True
    assert body["loading"] is False
    assert body["result"] is None
    assert body["placeholder"].startswith("Select fluid state")
    assert body["availableModes"][0] == "Pressure & Temperature"
    assert body["fluidStateHint"] == "For subcooled liquid or superheated steam regions."


def test_unknown_session_is_404(client):
    res = client.get(f"{API}/sessions/does-not-exist")
    assert res.status_code == 404
    assert res.json()["code"] == "SESSION_NOT_FOUND"


def test_fluid_state_change_resets_form(client):
    sid = new_session(client)["id"]
    res = client.put(f"{API}/sessions/{sid}/fluid-state", json={"fluidState": "Saturated"})
    assert res.status_code == 200
    body = res.json()
    assert body["input"]["mode"] == "Pressure & Quality"
    assert body["input"]["value1"] == "" and body["input"]["value2"] == ""
    assert body["input"]["unit2"] == "-"
    assert body["config"]["unit2Locked"] is True
    assert body["canCalculate"] is False


def test_mode_change_and_invalid_mode(client):
    sid = new_session(client)["id"]
    res = client.put(f"{API}/sessions/{sid}/mode", json={"mode": "Pressure & Entropy"})
    assert res.status_code == 200
    body = res.json()
    assert body["input"]["fluidState"] == "Subcooled/Superheated"
    assert body["input"]["unit2"] == "kJ/(kg·K)"

    res = client.put(f"{API}/sessions/{sid}/mode", json={"mode": "Temperature & Quality"})
    assert res.status_code == 422
    assert res.json()["code"] == "INVALID_TRANSITION"

    res = client.put(f"{API}/sessions/{sid}/mode", json={"mode": "Volume & Quality"})
    assert res.status_code == 422
    assert res.json()["code"] == "INVALID_INPUT"


def test_patch_input_is_all_or_nothing(client):
    sid = new_session(client)["id"]
    res = client.patch(f"{API}/sessions/{sid}/input", json={"value1": "5", "unit1": "bar"})
    assert res.status_code == 200
    assert res.json()["input"]["value1"] == "5"
    assert res.json()["input"]["unit1"] == "bar"

    res = client.patch(f"{API}/sessions/{sid}/input", json={"value2": "7", "unit2": "kJ/kg"})
    assert res.status_code == 422
    body = client.get(f"{API}/sessions/{sid}").json()
    assert body["input"]["value2"] == "100"
    assert body["input"]["unit2"] == "°C"


def test_calculate_disabled_with_empty_value(client, fake_resolver):
    sid = new_session(client)["id"]
    client.patch(f"{API}/sessions/{sid}/input", json={"value1": ""})
    res = client.post(f"{API}/sessions/{sid}/calculate")
    assert res.status_code == 400
    assert res.json()["code"] == "CALCULATION_NOT_READY"
    assert fake_resolver.calls == []


def test_end_to_end_pressure_temperature(client, fake_resolver):
    sid = new_session(client)["id"]
    client.patch(
        f"{API}/sessions/{sid}/input",
        json={"value1": "0.101325", "unit1": "MPa", "value2": "100", "unit2": "°C"},
    )

    res = client.post(f"{API}/sessions/{sid}/calculate")
    assert res.status_code == 200
    assert fake_resolver.calls == [
        "Fluid State: Subcooled/Superheated, Input 1: 0.101325 MPa, "
        "Input 2: 100 °C (Pressure & Temperature)"
    ]

    res = client.patch(
        f"{API}/sessions/{sid}/display-units",
        json={"pressure": "bar", "temperature": "K"},
    )
    assert res.status_code == 200
    body = res.json()
    rows = {r["label"]: r for r in body["result"]["rows"]}
    assert rows["Pressure (P)"]["value"] == pytest.approx(1.01325)
    assert rows["Pressure (P)"]["unit"] == "bar"
    assert rows["Temperature (T)"]["value"] == pytest.approx(373.15)
    assert rows["Quality (x)"]["display"] == "N/A (Superheated)"
    assert body["result"]["phase"] == "Superheated Vapor"
    assert body["displayUnits"]["energy"] == "kJ/kg"


def test_failed_calculation_keeps_result_and_reports_error(client, fake_resolver):
    sid = new_session(client)["id"]
    assert client.post(f"{API}/sessions/{sid}/calculate").status_code == 200

    fake_resolver.error = ResolverResponseError("Failed to process calculation results.")
    res = client.post(f"{API}/sessions/{sid}/calculate")
    assert res.status_code == 502
    assert res.json()["code"] == "INVALID_RESOLVER_RESPONSE"

    body = client.get(f"{API}/sessions/{sid}").json()
    assert body["error"] == "Failed to process calculation results."
    assert body["result"]["phase"] == "Superheated Vapor"
    assert body["loading"] is False


def test_missing_credential_is_labeled(client, fake_resolver):
    fake_resolver.error = MissingCredentialError("API Key is missing.")
    sid = new_session(client)["id"]
    res = client.post(f"{API}/sessions/{sid}/calculate")
    assert res.status_code == 503
    assert res.json()["code"] == "MISSING_CREDENTIAL"
    body = client.get(f"{API}/sessions/{sid}").json()
    assert "API_KEY" in body["errorHint"]


def test_unexpected_resolver_error_is_reported(client, fake_resolver):
    fake_resolver.error = AttributeError("'list' object has no attribute 'get'")
    sid = new_session(client)["id"]
    res = client.post(f"{API}/sessions/{sid}/calculate")
    assert res.status_code == 502
    assert res.json()["code"] == "RESOLVER_FAILED"

    body = client.get(f"{API}/sessions/{sid}").json()
    assert body["error"] == "An unexpected error occurred during calculation."
    assert body["loading"] is False


def test_delete_session(client):
    sid = new_session(client)["id"]
    assert client.delete(f"{API}/sessions/{sid}").status_code == 204
    assert client.get(f"{API}/sessions/{sid}").status_code == 404


@pytest.mark.asyncio
async def test_session_flow_over_asgi(store, fake_resolver):
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_resolver] = lambda: fake_resolver
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            # 1. 세션 생성 -> 포화 상태로 전환
            sid = (await ac.post(f"{API}/sessions")).json()["id"]
            await ac.put(f"{API}/sessions/{sid}/fluid-state", json={"fluidState": "Saturated"})
            await ac.put(f"{API}/sessions/{sid}/mode", json={"mode": "Temperature & Quality"})

            # 2. 값 입력 후 계산
            await ac.patch(f"{API}/sessions/{sid}/input", json={"value1": "120", "value2": "0.5"})
            resp = await ac.post(f"{API}/sessions/{sid}/calculate")
            assert resp.status_code == 200
    finally:
        app.dependency_overrides.clear()

    assert fake_resolver.calls == [
        "Fluid State: Saturated, Input 1: 120 °C, Input 2: 0.5 - (Temperature & Quality)"
    ]
