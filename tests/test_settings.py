"""Tests for environment configuration."""

from limo_rates.settings import DEFAULT_ORIGINS, Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LIMO_RATES_DEBOUNCE_MS", raising=False)
        monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
        s = Settings(_env_file=None)
        assert s.debounce_seconds == 0.1
        assert s.origins == DEFAULT_ORIGINS
        assert not s.allow_all_origins

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LIMO_RATES_DEBOUNCE_MS", "250")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://dispatch.example.com, https://ops.example.com")
        s = Settings(_env_file=None)
        assert s.debounce_seconds == 0.25
        assert s.origins == ["https://dispatch.example.com", "https://ops.example.com"]

    def test_wildcard_origin(self, monkeypatch):
        monkeypatch.setenv("ALLOWED_ORIGINS", "*")
        s = Settings(_env_file=None)
        assert s.origins == ["*"]
        assert s.allow_all_origins
