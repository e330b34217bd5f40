"""
Settings Tests - defaults and cross-field validation
"""
import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:

    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.API_V1_PREFIX == "/api/v1"
        assert s.GOOD_THRESHOLD == 75
        assert s.MODERATE_THRESHOLD == 50
        assert s.CORS_MAX_AGE == 600

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("GOOD_THRESHOLD", "80")
        monkeypatch.setenv("REDIS_KEY_PREFIX", "iso:")
        s = Settings(_env_file=None)
        assert s.GOOD_THRESHOLD == 80
        assert s.REDIS_KEY_PREFIX == "iso:"

    def test_thresholds_must_be_ordered(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, GOOD_THRESHOLD=50, MODERATE_THRESHOLD=50)

    def test_production_requires_supabase(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, APP_ENV="production", SUPABASE_URL=None, SUPABASE_SERVICE_ROLE_KEY=None)

    def test_production_rejects_debug(self):
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                APP_ENV="production",
                DEBUG=True,
                SUPABASE_URL="https://x.supabase.co",
                SUPABASE_SERVICE_ROLE_KEY="key",
            )

    def test_supabase_configured(self):
        s = Settings(_env_file=None, SUPABASE_URL="https://x.supabase.co", SUPABASE_SERVICE_ROLE_KEY="key")
        assert s.supabase_configured is True
        assert s.SUPABASE_SERVICE_ROLE_KEY.get_secret_value() == "key"
