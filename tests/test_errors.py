"""Every failure surfaces as the JSON error envelope with the intended status."""

import json

from fastapi.testclient import TestClient

from todo_api.db import Database
from todo_api.errors import error_response, failure_response
from todo_api.outcomes import Failure, FailureKind
from todo_api.services import TodoService


def test_failure_response_uses_status_on_failure() -> None:
    response = failure_response(Failure(FailureKind.VALIDATION, "bad", cause="why"))
    assert response.status_code == 400
    assert json.loads(response.body) == {"error": True, "message": "bad", "cause": "why"}

    conflict = failure_response(Failure(FailureKind.CONFLICT, "taken"))
    assert conflict.status_code == 409
    assert json.loads(conflict.body)["cause"] is None


def test_error_response_envelope() -> None:
    response = error_response(503, "down")
    assert response.status_code == 503
    assert json.loads(response.body) == {"error": True, "message": "down", "cause": None}


def test_validation_failure_is_not_reported_as_500(client) -> None:
    res = client.post("/", json={})
    assert res.status_code == 400


def test_malformed_json_body(client) -> None:
    res = client.post("/", content="{not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json()["message"] == "Request validation failed"


def test_wrong_type_in_body(client) -> None:
    res = client.post("/", json={"title": "T", "description": "d", "priority": "high"})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] is True
    assert "priority" in body["cause"]


def test_unknown_route(client) -> None:
    res = client.get("/no/such/route")
    assert res.status_code == 404
    assert res.json() == {"error": True, "message": "Not Found", "cause": None}


def test_method_not_allowed(client) -> None:
    res = client.patch("/1", json={"title": "x"})
    assert res.status_code == 405
    assert res.json()["message"] == "Method Not Allowed"


def test_missing_table_is_database_error(make_app) -> None:
    database = Database("sqlite://")  # table never created
    client = TestClient(make_app(database=database))
    try:
        for method, path in [("GET", "/"), ("GET", "/1"), ("GET", "/title/x"), ("DELETE", "/1")]:
            res = client.request(method, path)
            assert res.status_code == 500
            assert res.json() == {"error": True, "message": "Database error", "cause": "OperationalError"}

        res = client.post("/", json={"title": "T", "description": "d"})
        assert res.status_code == 500
        assert res.json()["message"] == "Database error"
    finally:
        database.dispose()


def test_unexpected_error_is_internal_server_error(app, monkeypatch) -> None:
    def explode(self):
        raise RuntimeError("boom")

    monkeypatch.setattr(TodoService, "list_todos", explode)
    client = TestClient(app, raise_server_exceptions=False)

    res = client.get("/", headers={"Origin": "http://example.com"})
    assert res.status_code == 500
    assert res.json() == {"error": True, "message": "Internal server error", "cause": "RuntimeError"}
    # The envelope must stay readable from other origins.
    assert res.headers["access-control-allow-origin"] == "*"

    # The app keeps serving afterwards.
    monkeypatch.undo()
    assert client.get("/").status_code == 200
