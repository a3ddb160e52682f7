"""
Execution backends for the engine.

The local backend is assembled from three pieces: the
:class:`WorkspaceManager` stages files, the :class:`ProcessRunner` compiles
and runs them, and :func:`format_result` normalizes the outcome.  The
remote backend sends the same request to a hosted API.  Additional
backends can be added by implementing the ``CodeExecutor`` interface from
``base.py``.
"""

from .base import (
    Availability,
    CodeExecutor,
    ExecutionRequest,
    ExecutionResult,
    RawExecutionOutcome,
)
from .formatter import classify, format_result
from .local_executor import LocalExecutor
from .process import ProcessReport, ProcessRunner
from .remote_executor import RemoteExecutor
from .workspace import DefaultName, ParsedName, Workspace, WorkspaceManager, derive_declared_name

__all__ = [
    "Availability",
    "CodeExecutor",
    "ExecutionRequest",
    "ExecutionResult",
    "RawExecutionOutcome",
    "classify",
    "format_result",
    "LocalExecutor",
    "ProcessReport",
    "ProcessRunner",
    "RemoteExecutor",
    "DefaultName",
    "ParsedName",
    "Workspace",
    "WorkspaceManager",
    "derive_declared_name",
]
