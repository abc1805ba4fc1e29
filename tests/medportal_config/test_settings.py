"""Tests for portal settings."""

import pytest
from pydantic import ValidationError

from medportal_config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ACCOUNT_EMAIL_DOMAIN", raising=False)
        monkeypatch.delenv("FIXED_LOGINS_ENABLED", raising=False)
        settings = Settings(_env_file=None)

        assert settings.account_email_domain == "saniatrmel.hospital"
        assert settings.fixed_logins_enabled is True
        assert settings.sign_in_route == "/login"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("BAAS_URL", "https://project.example.co/")
        monkeypatch.setenv("BAAS_ANON_KEY", "anon")
        monkeypatch.setenv("ACCOUNT_EMAIL_DOMAIN", "@Mohammed6.Hospital")
        monkeypatch.setenv("FIXED_LOGINS_ENABLED", "false")

        settings = get_settings()

        assert settings.auth_url == "https://project.example.co/auth/v1"
        assert settings.rest_url == "https://project.example.co/rest/v1"
        assert settings.baas_anon_key.get_secret_value() == "anon"
        assert settings.account_email_domain == "mohammed6.hospital"
        assert settings.fixed_logins_enabled is False

    def test_secret_not_rendered(self, monkeypatch):
        monkeypatch.setenv("BAAS_ANON_KEY", "very-secret")
        assert "very-secret" not in repr(Settings(_env_file=None))

    def test_relay_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, storage_relay_interval=0)

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()
