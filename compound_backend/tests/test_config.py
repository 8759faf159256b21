from __future__ import annotations

import pytest

from compound_backend.app import create_app


def test_defaults():
    app = create_app()

    assert app.config["DEFAULT_CURRENCY"] == "RUB"
    assert app.config["LOG_LEVEL"] == "INFO"
    assert "http://localhost:5173" in app.config["CORS_ORIGINS"]


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("COMPOUND_DEFAULT_CURRENCY", "USD")
    monkeypatch.setenv("COMPOUND_CORS_ORIGINS", '["https://calc.example"]')

    app = create_app()

    assert app.config["DEFAULT_CURRENCY"] == "USD"
    assert app.config["CORS_ORIGINS"] == ["https://calc.example"]
    with app.test_client() as client:
        assert client.get("/api/currencies").get_json()["default"] == "USD"


def test_explicit_overrides_win(monkeypatch):
    monkeypatch.setenv("COMPOUND_DEFAULT_CURRENCY", "USD")

    app = create_app({"DEFAULT_CURRENCY": "EUR"})

    assert app.config["DEFAULT_CURRENCY"] == "EUR"


def test_unknown_default_currency_fails_at_startup(monkeypatch):
    with pytest.raises(ValueError, match="DEFAULT_CURRENCY"):
        create_app({"DEFAULT_CURRENCY": "GBP"})

    monkeypatch.setenv("COMPOUND_DEFAULT_CURRENCY", "XYZ")
    with pytest.raises(ValueError, match="DEFAULT_CURRENCY"):
        create_app()
