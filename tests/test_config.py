import pytest
from pydantic import ValidationError

from lawdesk.config import Settings
from lawdesk.llm import require_api_key


def test_short_jwt_secret_is_rejected(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "too-short")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_missing_jwt_secret_is_rejected(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_database_url_gets_async_driver(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db:5432/lawdesk")
    assert Settings(_env_file=None).DATABASE_URL == "postgresql+asyncpg://u:p@db:5432/lawdesk"


def test_grok_key_alias(monkeypatch):
    monkeypatch.delenv("XAI_API_KEY", raising=False)
    monkeypatch.setenv("GROK_API_KEY", "grok-key")
    assert Settings(_env_file=None).XAI_API_KEY == "grok-key"


def test_cors_origins_from_comma_list(monkeypatch):
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", "https://a.example, https://b.example")
    assert Settings(_env_file=None).BACKEND_CORS_ORIGINS == ["https://a.example", "https://b.example"]


def test_llm_requires_key():
    with pytest.raises(RuntimeError):
        require_api_key(None)
    assert require_api_key("k") == "k"
