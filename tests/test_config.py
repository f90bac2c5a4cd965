# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import DEV_SECRET_KEY, Settings

STORE = {
    "SUPABASE_URL": "https://test-project.supabase.co",
    "SUPABASE_SERVICE_KEY": "test-service-key",
}


class TestSecretKey:

    def test_production_without_secret_is_refused(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)

        with pytest.raises(ValidationError, match="SECRET_KEY must be set in production"):
            Settings(_env_file=None, ENVIRONMENT="production", **STORE)

    def test_production_with_dev_secret_is_refused(self):
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                ENVIRONMENT="production",
                SECRET_KEY=DEV_SECRET_KEY,
                **STORE,
            )

    def test_production_with_real_secret(self):
        settings = Settings(
            _env_file=None,
            ENVIRONMENT="production",
            SECRET_KEY="a-real-production-secret-value",
            **STORE,
        )

        assert settings.is_production

    def test_development_falls_back_to_dev_secret(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)

        settings = Settings(_env_file=None, ENVIRONMENT="development", **STORE)

        assert settings.SECRET_KEY == DEV_SECRET_KEY


class TestUploadSettings:

    def test_size_in_bytes(self):
        settings = Settings(_env_file=None, MAX_UPLOAD_SIZE_MB=2, **STORE)

        assert settings.max_upload_size_bytes == 2 * 1024 * 1024

    def test_port_read_from_port_alias(self, monkeypatch):
        monkeypatch.delenv("API_PORT", raising=False)
        monkeypatch.setenv("PORT", "8080")

        assert Settings(_env_file=None, **STORE).API_PORT == 8080
