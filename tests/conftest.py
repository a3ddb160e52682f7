"""Shared fixtures for the engine tests."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from polyexec.executor import LocalExecutor, ProcessRunner, WorkspaceManager


@pytest.fixture
def workspace_base(tmp_path) -> Path:
    return tmp_path / "workspaces"


@pytest.fixture
def make_executor(workspace_base):
    """Build a local executor staging files under ``workspace_base``."""

    def factory(timeout: float = 10, max_output_bytes: int = 65536) -> LocalExecutor:
        runner = ProcessRunner(
            timeout=timeout,
            compile_timeout=120,
            max_output_bytes=max_output_bytes,
        )
        return LocalExecutor(WorkspaceManager(workspace_base), runner)

    return factory


@pytest.fixture
def residual_files(workspace_base):
    """Return whatever is left under the workspace base directory."""

    def collect() -> List[Path]:
        if not workspace_base.exists():
            return []
        return list(workspace_base.rglob("*"))

    return collect
