"""Tests for configuration parsing."""

from portion_tracker.config import Settings, parse_nutrients
from portion_tracker.domain.portions import NUTRIENTS


def test_parse_nutrients_defaults() -> None:
    assert parse_nutrients(None) == NUTRIENTS
    assert parse_nutrients("  ") == NUTRIENTS
    assert parse_nutrients(",,") == NUTRIENTS


def test_parse_nutrients_keeps_order_and_dedupes() -> None:
    assert parse_nutrients("Fats, protein,fats") == ("fats", "protein")


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("BACKEND_BASE_URL", "http://portions.local")
    monkeypatch.setenv("TIMEZONE", "Europe/Berlin")

    settings = Settings()

    assert settings.backend_base_url == "http://portions.local"
    assert settings.timezone == "Europe/Berlin"
    assert settings.request_timeout_seconds == 10
