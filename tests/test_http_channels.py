"""
tests/test_http_channels.py

Purpose:
    End-to-end contract of the HTTP surfaces (health check, JSON API and
    WhatsApp webhook) with upstream providers served by a mock transport.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from config import Config
from main import create_app
from tests.conftest import make_event


@pytest.fixture
def client(config, gateway) -> TestClient:
    return TestClient(create_app(config, gateway=gateway))


def test_health_check(client):
    response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "zar-bot"
    assert body["status"] == "online"
    assert "rates" in body["commands"]


def test_api_convert(client, upstream):
    upstream.rates = {"base": "USD", "date": "2024-05-10", "rates": {"ZAR": 18.5}}

    response = client.post("/api", json={"from": "USD", "to": "ZAR", "amount": 100})

    assert response.json() == {
        "success": True,
        "from": "USD",
        "to": "ZAR",
        "amount": 100,
        "rate": 18.5,
        "result": "1850.00",
        "formatted": "100 USD = 1850.00 ZAR",
        "date": "2024-05-10",
    }


def test_api_rates(client, upstream):
    upstream.rates = {"base": "ZAR", "date": "2024-05-10", "rates": {"USD": 0.054, "EUR": 0.050, "XYZ": 1.2}}

    response = client.post("/api", json={"command": "rates"})

    assert response.json()["rates"] == {"USD": 0.054, "EUR": 0.05}


def test_api_missing_parameters_returns_usage(client, upstream):
    response = client.post("/api", json={"from": "USD"})

    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Missing parameters"
    assert "convert" in body["usage"]
    assert upstream.requests == []


def test_api_non_json_body_is_not_a_server_error(client):
    response = client.post("/api", content=b"not json", headers={"content-type": "application/json"})

    assert response.status_code == 200
    assert response.json()["success"] is False


def test_api_odds_unconfigured(make_gateway, upstream):
    config = Config(odds_api_key="")
    client = TestClient(create_app(config, gateway=make_gateway(config)))

    response = client.post("/api", json={"sport": "PSL"})

    assert response.json() == {"success": False, "league": "PSL", "error": "Unconfigured"}
    assert upstream.requests == []


def test_api_upstream_error_passes_raw_message(client, upstream):
    upstream.rates_status = 404

    response = client.post("/api", json={"from": "USD", "to": "QQQ"})

    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Request failed with status code 404"
    assert body["hint"] == "Try: USD ZAR or EUR GBP"


def test_whatsapp_conversion_returns_twiml(client, upstream):
    upstream.rates = {"base": "USD", "date": "2024-05-10", "rates": {"ZAR": 18.5}}

    response = client.post("/whatsapp", data={"Body": " usd zar 100 ", "From": "whatsapp:+27000000000"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/xml")
    assert "<Message>100 USD = 1850.00 ZAR</Message>" in response.text


def test_whatsapp_psl_fallback_keeps_psl_label(make_gateway, upstream):
    config = Config(odds_api_key="k", psl_fallback_to_epl=True, odds_footer="Promo footer")
    client = TestClient(create_app(config, gateway=make_gateway(config)))
    upstream.odds = [make_event("Arsenal", "Chelsea")]

    response = client.post("/whatsapp", data={"Body": "PSL", "From": "whatsapp:+27000000000"})

    assert "⚽ PSL Odds" in response.text
    assert "showing EPL fixtures instead" in response.text
    assert "Arsenal vs Chelsea" in response.text
    assert "Promo footer" in response.text


def test_whatsapp_unknown_echoes_input(client):
    response = client.post("/whatsapp", data={"Body": "xyz"})

    assert "Unknown command: XYZ" not in response.text
    assert "Unknown command: xyz" in response.text


def test_bad_request_does_not_affect_next_one(client, upstream):
    upstream.rates_status = 500
    first = client.post("/whatsapp", data={"Body": "RATES"})
    upstream.rates_status = 200
    upstream.rates = {"base": "ZAR", "date": "2024-05-10", "rates": {"USD": 0.054}}
    second = client.post("/whatsapp", data={"Body": "RATES"})

    assert "Error: Request failed with status code 500" in first.text
    assert "USD: 0.054" in second.text


def test_api_converts_thirty_digit_amount(client, upstream):
    upstream.rates = {"base": "USD", "date": "2024-05-10", "rates": {"ZAR": 18.5}}

    response = client.post("/api", json={"from": "USD", "to": "ZAR", "amount": 10**30})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["amount"] == 10**30
    assert body["result"] == "185" + "0" * 29 + ".00"


def test_api_out_of_range_amount_is_not_a_server_error(client, upstream):
    upstream.rates = {"base": "USD", "date": "2024-05-10", "rates": {"ZAR": 18.5}}

    response = client.post("/api", json={"from": "USD", "to": "ZAR", "amount": "1E999999"})

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "error": "Amount too large to convert",
        "hint": "Try: USD ZAR or EUR GBP",
    }


def test_whatsapp_converts_thirty_digit_amount(client, upstream):
    upstream.rates = {"base": "USD", "date": "2024-05-10", "rates": {"ZAR": 2}}

    response = client.post("/whatsapp", data={"Body": "USD ZAR " + "1" * 30})

    assert response.status_code == 200
    assert f"<Message>{'1' * 30} USD = {'2' * 30}.00 ZAR</Message>" in response.text


def test_api_exponent_amount(client, upstream):
    upstream.rates = {"base": "USD", "date": "2024-05-10", "rates": {"ZAR": 18.5}}

    response = client.post("/api", json={"from": "USD", "to": "ZAR", "amount": "1E3"})

    assert response.json()["formatted"] == "1000 USD = 18500.00 ZAR"
