"""Application bootstrap: lifespan connection check, middleware, table creation."""

import logging

from fastapi.testclient import TestClient

from todo_api.db import Database


def test_startup_logs_connection(make_app, caplog) -> None:
    caplog.set_level(logging.INFO, logger="todo_api.main")
    database = Database("sqlite://")
    database.create_tables()
    with TestClient(make_app(database=database)) as client:
        assert client.get("/").status_code == 200
    assert "Connected to DB..." in caplog.messages


def test_startup_failure_does_not_abort(make_app, caplog, tmp_path) -> None:
    caplog.set_level(logging.INFO, logger="todo_api.main")
    unreachable = tmp_path / "missing-dir" / "db.sqlite3"
    database = Database(f"sqlite:///{unreachable}")
    with TestClient(make_app(database=database)) as client:
        res = client.get("/")
        assert res.status_code == 500
        assert res.json()["error"] is True
    assert "DB not connected..." in caplog.messages
    assert "Connected to DB..." not in caplog.messages


def test_create_tables_setting(make_app) -> None:
    database = Database("sqlite://")
    with TestClient(make_app(database=database, create_tables=True)) as client:
        res = client.get("/")
        assert res.status_code == 200
        assert res.json()["data"]["count"] == 0


def test_request_timestamp_is_logged(client, caplog) -> None:
    caplog.set_level(logging.INFO, logger="todo_api.main")
    client.get("/")
    stamps = [m for m in caplog.messages if m.startswith("Time: ")]
    assert len(stamps) == 1
    assert "ms since January 1, 1970 (GET /)" in stamps[0]


def test_cors_allows_any_origin(client) -> None:
    res = client.options(
        "/",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"

    res = client.get("/", headers={"Origin": "http://example.com"})
    assert res.headers["access-control-allow-origin"] == "*"


def test_cors_restricted_origins(make_app, database) -> None:
    client = TestClient(make_app(database=database, cors_allow_origins=["http://allowed.test"]))
    ok = client.get("/", headers={"Origin": "http://allowed.test"})
    assert ok.headers["access-control-allow-origin"] == "http://allowed.test"
    other = client.get("/", headers={"Origin": "http://other.test"})
    assert "access-control-allow-origin" not in other.headers


def test_database_is_on_app_state(app, database) -> None:
    assert app.state.database is database
