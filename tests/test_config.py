"""Tests for environment configuration."""

from __future__ import annotations

import pytest

from polyexec.config import Config


_VARS = [
    "POLYEXEC_WORKSPACE_PATH",
    "POLYEXEC_BACKEND",
    "POLYEXEC_TIMEOUT_SECONDS",
    "POLYEXEC_COMPILE_TIMEOUT_SECONDS",
    "POLYEXEC_MAX_OUTPUT_BYTES",
    "POLYEXEC_MAX_MEMORY_MB",
    "POLYEXEC_MAX_CPU_SECS",
    "POLYEXEC_REMOTE_URL",
    "POLYEXEC_REMOTE_TIMEOUT_SECONDS",
    "POLYEXEC_REMOTE_RUN_TIMEOUT_MS",
    "POLYEXEC_REMOTE_COMPILE_TIMEOUT_MS",
    "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Config.from_env()
    assert config.backend == "auto"
    assert config.timeout_seconds == 10
    assert config.compile_timeout_seconds == 30
    assert config.max_output_bytes == 65536
    assert config.remote_url == "https://emkc.org/api/v2/piston"
    assert config.remote_run_timeout_ms == 3000
    assert config.port == 8080
    assert config.workspace_path.endswith("polyexec")


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("POLYEXEC_WORKSPACE_PATH", str(tmp_path))
    monkeypatch.setenv("POLYEXEC_BACKEND", "Remote")
    monkeypatch.setenv("POLYEXEC_TIMEOUT_SECONDS", "2")
    monkeypatch.setenv("POLYEXEC_REMOTE_URL", "http://piston.internal:2000/api/v2/")
    monkeypatch.setenv("PORT", "9000")
    config = Config.load()
    assert config.workspace_path == str(tmp_path)
    assert config.backend == "remote"
    assert config.timeout_seconds == 2
    assert config.remote_url == "http://piston.internal:2000/api/v2"
    assert config.port == 9000


def test_invalid_backend(monkeypatch):
    monkeypatch.setenv("POLYEXEC_BACKEND", "docker")
    with pytest.raises(ValueError, match="POLYEXEC_BACKEND"):
        Config.load()


def test_invalid_integer(monkeypatch):
    monkeypatch.setenv("POLYEXEC_MAX_OUTPUT_BYTES", "lots")
    with pytest.raises(ValueError, match="POLYEXEC_MAX_OUTPUT_BYTES"):
        Config.load()


def test_timeout_must_be_positive(monkeypatch):
    monkeypatch.setenv("POLYEXEC_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValueError):
        Config.load()
