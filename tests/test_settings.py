import pytest

from todo_api.settings import get_settings

ENV_VARS = ["DATABASE_URL", "HOST", "PORT", "CORS_ALLOW_ORIGINS", "LOG_LEVEL", "CREATE_TABLES", "SQL_ECHO"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = get_settings()
    assert s.database_url == "sqlite:///./db.sqlite3"
    assert s.host == "0.0.0.0"
    assert s.port == 3000
    assert s.cors_allow_origins == ["*"]
    assert s.log_level == "INFO"
    assert s.create_tables is False
    assert s.sql_echo is False


def test_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:////tmp/todos.sqlite3")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test ,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CREATE_TABLES", "yes")
    monkeypatch.setenv("SQL_ECHO", "1")

    s = get_settings()
    assert s.database_url == "sqlite:////tmp/todos.sqlite3"
    assert s.port == 8080
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.log_level == "DEBUG"
    assert s.create_tables is True
    assert s.sql_echo is True


def test_invalid_values_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    monkeypatch.setenv("CREATE_TABLES", "maybe")
    monkeypatch.setenv("DATABASE_URL", "")

    s = get_settings()
    assert s.port == 3000
    assert s.create_tables is False
    assert s.database_url == "sqlite:///./db.sqlite3"
