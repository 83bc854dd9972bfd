import pytest

from src.core.config import get_settings


def _set_minimum_production_env(monkeypatch) -> None:
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "prod-secret-key-0123456789abcdef")
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg2://app:password@db:5432/freelance_flow")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/0")
    monkeypatch.setenv("AUTH_COOKIE_SECURE", "true")


def test_requires_secret_key_in_production(monkeypatch) -> None:
    _set_minimum_production_env(monkeypatch)
    monkeypatch.setenv("SECRET_KEY", "")
    get_settings.cache_clear()

    with pytest.raises(ValueError, match="SECRET_KEY"):
        get_settings()

    get_settings.cache_clear()


def test_accepts_complete_production_config(monkeypatch) -> None:
    _set_minimum_production_env(monkeypatch)
    get_settings.cache_clear()

    settings = get_settings()
    assert settings.is_production is True
    assert settings.auth_cookie_secure is True

    get_settings.cache_clear()


def test_requires_secure_cookie_in_production(monkeypatch) -> None:
    _set_minimum_production_env(monkeypatch)
    monkeypatch.setenv("AUTH_COOKIE_SECURE", "false")
    get_settings.cache_clear()

    with pytest.raises(ValueError, match="AUTH_COOKIE_SECURE"):
        get_settings()

    get_settings.cache_clear()


def test_loads_environment_values(monkeypatch) -> None:
    monkeypatch.setenv("ENV", "development")
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./data/freelance_flow.sqlite")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/9")
    monkeypatch.setenv("SIDEBAR_COOKIE_NAME", "nav_state")
    get_settings.cache_clear()

    settings = get_settings()
    assert settings.env == "development"
    assert settings.secret_key == "test-secret"
    assert settings.database_url.endswith("freelance_flow.sqlite")
    assert settings.redis_url.endswith("/9")
    assert settings.sidebar_cookie_name == "nav_state"
    assert settings.is_production is False

    get_settings.cache_clear()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("SENTRY_TRACES_SAMPLE_RATE", "1.2"),
        ("ACCESS_TOKEN_EXP_MINUTES", "0"),
        ("REDIS_SOCKET_TIMEOUT_SECONDS", "0"),
        ("AUTH_COOKIE_NAME", "  "),
        ("SIDEBAR_COOKIE_NAME", ""),
    ],
)
def test_rejects_invalid_limits(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv("ENV", "development")
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv(name, value)
    get_settings.cache_clear()

    with pytest.raises(ValueError, match=name):
        get_settings()

    get_settings.cache_clear()
