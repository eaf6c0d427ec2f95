"""
Unit tests for Settings

Test Focus:
1. The shipped .env.example loads as-is
2. BACKEND_CORS_ORIGINS accepts a comma list or a JSON list from either source
"""

from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings


ENV_EXAMPLE = Path(__file__).resolve().parents[3] / '.env.example'


@pytest.fixture(autouse=True)
def _isolated_cors_env(monkeypatch):
    # conftest exports .env.example into the process environment
    monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)


@pytest.mark.unit
class TestSettings:
    def test_env_example_loads(self):
        settings = Settings(_env_file=ENV_EXAMPLE)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000']
        assert settings.TICKET_HOLD_SECONDS == 600
        assert settings.QR_TOKEN_SECRET.get_secret_value()

    def test_comma_list_from_environment(self, monkeypatch):
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', 'http://a.test, http://b.test,')

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_json_list_from_environment(self, monkeypatch):
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["http://a.test", "http://b.test"]')

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_unset_means_no_origins(self):
        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == []
