from __future__ import annotations

from flask.testing import FlaskClient


def projection_payload() -> dict:
    return {
        "horizonYears": 10,
        "annualRatePercent": 10,
        "startingCapital": 0,
        "contributions": {
            "mode": "manual",
            "contributionsByYear": [1000] * 10,
        },
    }


def test_projection_endpoint_returns_expected_rows(client: FlaskClient):
    resp = client.post("/api/projection", json=projection_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    assert [row["year"] for row in body["records"]] == list(range(1, 11))
    assert body["freedomYear"] == 7
    assert body["records"][6]["isFreedomYear"] is True
    assert body["analysis"]["year"] == 7
    assert body["analysis"]["reached"] is True
    assert body["currency"]["code"] == "RUB"
    assert body["title"].endswith("₽ за 10 лет | Сложный процент")
    assert body["finalTotalCapital"] - body["finalInvested"] == body["finalEarned"]


def test_short_manual_list_is_padded_with_last_value(client: FlaskClient):
    payload = projection_payload()
    payload["horizonYears"] = 3
    payload["contributions"]["contributionsByYear"] = [500, 1500]

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 200
    contributions = [row["yearlyContribution"] for row in resp.get_json()["records"]]
    assert contributions == [500, 1500, 1500]


def test_text_amounts_are_cleaned(client: FlaskClient):
    payload = {
        "horizonYears": 2,
        "annualRatePercent": 0,
        "startingCapital": "10 000",
        "contributions": {"mode": "manual", "contributionsByYear": ["1 000", ""]},
    }

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 200
    records = resp.get_json()["records"]
    assert [row["totalCapital"] for row in records] == [11000, 11000]
    assert [row["yearlyContribution"] for row in records] == [1000, 0]


def test_auto_mode(client: FlaskClient):
    payload = {
        "horizonYears": 4,
        "annualRatePercent": 8,
        "contributions": {
            "mode": "auto",
            "firstYearContribution": 1000,
            "contributionGrowthPercent": 0,
        },
        "currency": "USD",
    }

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert [row["yearlyContribution"] for row in body["records"]] == [1000] * 4
    assert body["currency"]["symbol"] == "$"


def test_horizon_out_of_range_returns_422(client: FlaskClient):
    for horizon in (0, 51):
        payload = projection_payload()
        payload["horizonYears"] = horizon

        resp = client.post("/api/projection", json=payload)

        assert resp.status_code == 422
        assert resp.get_json()["detail"][0]["loc"] == ["horizonYears"]


def test_unknown_fields_and_currency_return_422(client: FlaskClient):
    extra = projection_payload()
    extra["taxRate"] = 0.13
    assert client.post("/api/projection", json=extra).status_code == 422

    bad_currency = projection_payload()
    bad_currency["currency"] = "GBP"
    assert client.post("/api/projection", json=bad_currency).status_code == 422


def test_non_json_body_returns_400(client: FlaskClient):
    resp = client.post("/api/projection", data="not json", content_type="application/json")

    assert resp.status_code == 400
    assert "detail" in resp.get_json()


def test_share_payload_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/share",
        json={"projection": projection_payload(), "url": "https://example.org/plan"},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["title"] == "Мой инвестиционный план"
    assert body["text"].startswith("Я планирую накопить ")
    assert body["text"].endswith(" ₽ за 10 лет!")
    assert body["clipboardText"] == f"{body['title']}\n{body['text']}\nhttps://example.org/plan"


def test_share_url_defaults_to_config(client: FlaskClient):
    resp = client.post("/api/share", json={"projection": projection_payload()})

    assert resp.status_code == 200
    assert resp.get_json()["url"] == "https://calc.example/"


def test_currencies_endpoint(client: FlaskClient):
    resp = client.get("/api/currencies")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["default"] == "RUB"
    assert len(body["currencies"]) == 6


def test_cors_allows_dev_frontend(client: FlaskClient):
    resp = client.get("/api/ping", headers={"Origin": "http://localhost:5173"})

    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"


def test_negative_starting_capital_text_returns_422(client: FlaskClient):
    for value in ("-300", -300):
        payload = projection_payload()
        payload["startingCapital"] = value

        resp = client.post("/api/projection", json=payload)

        assert resp.status_code == 422
        assert resp.get_json()["detail"][0]["loc"] == ["startingCapital"]


def test_negative_first_year_contribution_text_returns_422(client: FlaskClient):
    payload = {
        "horizonYears": 3,
        "annualRatePercent": 5,
        "contributions": {"mode": "auto", "firstYearContribution": "-1 000"},
    }

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422
