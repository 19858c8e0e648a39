# tests/test_api_reference.py
from __future__ import annotations

from urllib.parse import quote

import pytest

API = "/api/v1"


def test_fluid_states(client):
    res = client.get(f"{API}/config/fluid-states")
    assert res.status_code == 200
    body = {row["fluidState"]: row for row in res.json()}
    assert body["Saturated"]["modes"] == ["Pressure & Quality", "Temperature & Quality"]
    assert "vapor dome" in body["Saturated"]["hint"]


def test_modes_table(client):
    res = client.get(f"{API}/config/modes")
    assert res.status_code == 200
    assert len(res.json()) == 6

    res = client.get(f"{API}/config/modes/{quote('Pressure & Quality')}")
    assert res.status_code == 200
    body = res.json()
    assert body["label1"] == "Pressure (Saturation)"
    assert body["units2"] == ["-"]
    assert body["unit2Locked"] is True


def test_units_listing(client):
    res = client.get(f"{API}/units")
    assert res.status_code == 200
    body = res.json()
    assert body["pressure"] == ["MPa", "bar", "kPa", "atm", "psia"]
    assert body["temperature"][0] == "°C"


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"quantity": "pressure", "value": 0.101325, "unit": "bar"}, 1.01325),
        ({"quantity": "temperature", "value": 100, "unit": "K"}, 373.15),
        ({"quantity": "temperature", "value": 212, "unit": "°F", "direction": "to_base"}, 100.0),
        ({"quantity": "energy", "value": 1, "unit": "mystery"}, 1.0),
    ],
)
def test_convert_endpoint(client, payload, expected):
    res = client.post(f"{API}/units/convert", json=payload)
    assert res.status_code == 200
    assert res.json()["value"] == pytest.approx(expected)


def test_conversions_endpoint(client):
    res = client.get(f"{API}/units/conversions", params={"pressure": "psia"})
    assert res.status_code == 200
    body = res.json()
    assert body["pressure"]["display"] == "psia"
    assert body["temperature"]["display"] == "°C"


def test_health(client):
    assert client.get(f"{API}/health").json()["status"] == "ok"
    res = client.get(f"{API}/health/credentials")
    assert res.status_code == 200
    assert "api_key_configured" in res.json()
