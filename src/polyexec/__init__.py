"""Multi‑language code execution engine.

Given source code, a language id and optional standard input, the engine
compiles or interprets the code in a separate OS process, bounds its
wall‑clock time, and returns a normalized result.  Programs run either with
toolchains installed on the host or through a hosted execution API; both
backends share one result contract.

The top‑level modules include:

* ``config`` – configuration handling for environment variables.
* ``languages`` – the registry describing how each language is built and run.
* ``errors`` – exception hierarchy and failure classification.
* ``executor`` – workspace staging, process running, result formatting and
  the local and remote backends.
* ``engine`` – backend selection behind a single ``execute`` call.
* ``models`` – Pydantic models defining request and response schemas.
* ``api`` – FastAPI application exposing HTTP endpoints.
"""

from .engine import Backend, ExecutionEngine
from .errors import (
    ExecutionEngineError,
    FailureKind,
    RemoteExecutionError,
    ToolchainUnavailableError,
    UnsupportedLanguageError,
    WorkspaceError,
)
from .executor import ExecutionRequest, ExecutionResult
from .languages import list_supported_languages, resolve

__all__ = [
    "Backend",
    "ExecutionEngine",
    "ExecutionEngineError",
    "FailureKind",
    "RemoteExecutionError",
    "ToolchainUnavailableError",
    "UnsupportedLanguageError",
    "WorkspaceError",
    "ExecutionRequest",
    "ExecutionResult",
    "list_supported_languages",
    "resolve",
]
