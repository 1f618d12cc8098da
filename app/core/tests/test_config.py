"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings, get_settings


def test_settings_has_defaults(monkeypatch):
    """Settings should have sensible defaults."""
    for name in ("APP_ENV", "LOG_FORMAT", "CLOUD_NAME", "STRIPE_KEY"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    assert settings.app_name == "StorefrontAPI"
    assert settings.app_env == "development"
    assert settings.debug is False
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"
    assert settings.api_port == 4000
    assert settings.database_pool_size == 10
    assert settings.database_max_overflow == 20
    assert settings.product_per_page == 8
    assert settings.latest_products_limit == 5
    assert settings.latest_transactions_limit == 4
    assert settings.payment_currency == "inr"
    assert settings.tax_rate == 0.18
    assert settings.free_shipping_threshold == 1000
    assert settings.shipping_charge == 200


def test_settings_is_development_property():
    """is_development should return True for development env."""
    settings = Settings(app_env="development")
    assert settings.is_development is True
    assert settings.is_production is False


def test_settings_is_production_property():
    """is_production should return True for production env."""
    settings = Settings(app_env="production")
    assert settings.is_development is False
    assert settings.is_production is True


def test_get_settings_returns_singleton():
    """get_settings should return cached singleton."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2


def test_settings_from_environment(monkeypatch):
    """Settings should load from environment variables."""
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("PRODUCT_PER_PAGE", "12")

    # Create new settings instance (not cached)
    settings = Settings()

    assert settings.app_name == "TestApp"
    assert settings.debug is True
    assert settings.log_level == "DEBUG"
    assert settings.product_per_page == 12


class TestCloudinaryConfigured:
    """Tests for the object storage credential check."""

    def test_all_credentials_present(self):
        """Configured only when name, key and secret are all set."""
        settings = Settings(cloud_name="c", cloud_api_key="k", cloud_api_secret="s")
        assert settings.cloudinary_configured is True

    def test_missing_secret(self):
        """A single missing credential disables storage."""
        settings = Settings(cloud_name="c", cloud_api_key="k", cloud_api_secret="")
        assert settings.cloudinary_configured is False


class TestPaymentCurrency:
    """Tests for currency normalisation."""

    def test_currency_is_lowercased(self):
        """Currency codes are stored lower-case."""
        assert Settings(payment_currency="USD").payment_currency == "usd"

    def test_invalid_currency_rejected(self):
        """Anything but a 3-letter code is rejected."""
        with pytest.raises(ValidationError):
            Settings(payment_currency="rupees")
