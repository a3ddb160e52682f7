"""Exception hierarchy and failure classification for the execution engine.

Failures caused by the submitted program (it does not compile, exits
non‑zero, or runs past its deadline) are never raised; they are reported
through :class:`FailureKind` on a populated result.  The exceptions below
are reserved for conditions the caller or the operator must act on.
"""

from __future__ import annotations

import enum
from typing import Iterable, List


class FailureKind(str, enum.Enum):
    """Why an execution did not succeed."""

    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"
    TIMEOUT = "timeout"
    UNSUPPORTED_LANGUAGE = "unsupported_language"


class ExecutionEngineError(Exception):
    """Base class for errors raised by the engine."""


class UnsupportedLanguageError(ExecutionEngineError):
    """The requested language identifier is not in the registry."""

    kind = FailureKind.UNSUPPORTED_LANGUAGE

    def __init__(self, language: str, known: Iterable[str]) -> None:
        self.language = language
        self.known: List[str] = sorted(known)
        super().__init__(
            f"Unsupported language: {language}. "
            f"Supported languages: {', '.join(self.known)}"
        )


class WorkspaceError(ExecutionEngineError):
    """Staging files for an execution failed on the filesystem."""


class ToolchainUnavailableError(ExecutionEngineError):
    """A compiler or interpreter needed by the local backend is not installed."""

    def __init__(self, language: str, binary: str) -> None:
        self.language = language
        self.binary = binary
        super().__init__(f"Toolchain for {language} is not installed: {binary} not found")


class RemoteExecutionError(ExecutionEngineError):
    """The hosted execution API could not be reached or rejected the request."""
