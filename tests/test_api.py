"""
Basic API tests for the execution service.

These tests exercise the HTTP endpoints using FastAPI's TestClient.  They
verify that code can be executed and its result follows the response
contract, that languages and templates can be listed, that errors map to
the right status codes, and that the health check is operational.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from polyexec.api.main import app, config, engine
from polyexec.errors import RemoteExecutionError, ToolchainUnavailableError
from polyexec.executor import Availability

from toolchains import requires


@pytest.fixture(autouse=True)
def isolate_workspaces(tmp_path, monkeypatch):
    """Stage workspaces in a temporary directory and run locally."""
    monkeypatch.setattr(engine.local.workspaces, "base_dir", tmp_path)
    monkeypatch.setattr(config, "backend", "local")
    yield


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client, monkeypatch):
    monkeypatch.setattr(engine.local, "check_availability", lambda: Availability(True, "python"))
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"available": True, "detail": "python"}


def test_languages(client):
    response = client.get("/languages")
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == len(data["languages"])
    python = next(entry for entry in data["languages"] if entry["name"] == "python")
    assert python["displayName"] == "Python"
    assert python["toolchainVersion"]


def test_templates(client):
    response = client.get("/templates/Python")
    assert response.status_code == 200
    data = response.json()
    assert "hello" in data["templates"]


def test_templates_report_normalized_language(client):
    response = client.get("/templates/PYTHON")
    assert response.status_code == 200
    assert response.json()["language"] == "python"


def test_templates_unknown_language(client):
    response = client.get("/templates/cobol")
    assert response.status_code == 404


@requires("python3")
def test_execute_python_simple(client, tmp_path):
    res = client.post("/execute", json={"code": "print(1+1)", "language": "python"})
    assert res.status_code == 200
    data = res.json()
    assert data["success"] is True
    assert data["output"] == "2\n"
    assert data["error"] == ""
    assert data["exitCode"] == 0
    assert data["executionTime"].endswith("ms")
    assert int(data["executionTime"][:-2]) >= 0
    assert data["language"] == "python"
    assert data["online"] is False
    assert list(tmp_path.iterdir()) == []


@requires("python3")
def test_execute_accepts_input_alias(client):
    payload = {"code": "print(input()[::-1])", "language": "python", "input": "abc"}
    res = client.post("/execute", json=payload)
    assert res.json()["output"] == "cba\n"


@requires("python3")
def test_execute_runtime_error_is_not_an_http_error(client):
    res = client.post("/execute", json={"code": "import sys; sys.exit(3)", "language": "python"})
    assert res.status_code == 200
    data = res.json()
    assert data["success"] is False
    assert data["exitCode"] == 3
    assert data["error"]


def test_execute_unsupported_language(client):
    res = client.post("/execute", json={"code": "x", "language": "cobol"})
    assert res.status_code == 400
    assert "Supported languages" in res.json()["detail"]
    assert "python" in res.json()["detail"]


def test_execute_requires_code_and_language(client):
    assert client.post("/execute", json={"language": "python"}).status_code == 422
    assert client.post("/execute", json={"code": "print(1)"}).status_code == 422
    assert client.post("/execute", json={"code": "", "language": "python"}).status_code == 422


def test_execute_missing_toolchain_is_503(client, monkeypatch):
    def unavailable(request, backend):
        raise ToolchainUnavailableError("rust", "rustc")

    monkeypatch.setattr(engine, "execute", unavailable)
    res = client.post("/execute", json={"code": "fn main(){}", "language": "rust"})
    assert res.status_code == 503
    assert "rustc" in res.json()["detail"]


def test_execute_remote_failure_is_503(client, monkeypatch):
    def unreachable(request, backend):
        raise RemoteExecutionError("Execution failed: connection refused")

    monkeypatch.setattr(engine, "execute", unreachable)
    res = client.post("/execute", json={"code": "print(1)", "language": "python"})
    assert res.status_code == 503
