"""
Base interfaces and dataclasses for code execution backends.

All concrete executors should inherit from :class:`CodeExecutor` and
implement :meth:`CodeExecutor.execute` and
:meth:`CodeExecutor.check_availability`.  Every backend returns the same
:class:`ExecutionResult`, so callers never need to know whether a program
ran on this host or on the hosted API.

Resource limitations (wall clock timeouts, CPU time, address space) are
enforced by the backend itself.  The local backend relies on one OS
process group per request with POSIX resource limits; nothing stronger is
assumed, and deployments running untrusted code should add container
isolation around the service.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Dict, Optional, Union

from ..errors import FailureKind


@dataclass
class ExecutionRequest:
    """A block of source code to run."""

    code: str
    language: str
    stdin: Optional[str] = None


@dataclass
class RawExecutionOutcome:
    """Unprocessed output of one process (or of the remote API).

    Attributes
    ----------
    stdout: str
        Standard output captured before the process ended or was killed.
    stderr: str
        Standard error captured before the process ended or was killed.
    exit_code: int
        Exit status of the process.  Negative values are signal numbers.
    timed_out: bool
        True when the process was killed for exceeding its deadline.
    """

    stdout: str
    stderr: str
    exit_code: int
    timed_out: bool = False


@dataclass
class ExecutionResult:
    """Normalized result of running a code snippet.

    Attributes
    ----------
    success: bool
        True iff the program exited with status zero and did not time out.
    output: str
        Standard output; empty string when there was none.
    error: str
        Diagnostic text; always the empty string on success.
    exit_code: int
        Exit status of the last step that ran.
    execution_time_ms: int
        Wall‑clock time in milliseconds, never negative.
    language: str
        The normalized language id.
    used_remote: bool
        True when the hosted API produced the result.
    failure: FailureKind, optional
        Classification of an unsuccessful run; ``None`` on success.
    """

    success: bool
    output: str
    error: str
    exit_code: int
    execution_time_ms: int
    language: str
    used_remote: bool = False
    failure: Optional[FailureKind] = None

    def to_response(self) -> Dict[str, Union[str, int, bool]]:
        """Render the external response contract."""
        return {
            "success": self.success,
            "output": self.output,
            "error": self.error,
            "exitCode": self.exit_code,
            "executionTime": f"{self.execution_time_ms}ms",
            "language": self.language,
            "online": self.used_remote,
        }


@dataclass
class Availability:
    """Health probe answer of a backend."""

    available: bool
    detail: str

    def to_dict(self) -> Dict[str, Union[bool, str]]:
        return {"available": self.available, "detail": self.detail}


class CodeExecutor(abc.ABC):
    """
    Abstract base class defining the interface for execution backends.

    Failures of the submitted program are reported through the returned
    :class:`ExecutionResult`.  Implementations raise only for conditions
    outside the program's control, such as a missing toolchain or an
    unreachable remote service.
    """

    used_remote = False

    @abc.abstractmethod
    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        """Run ``request`` and return its normalized result.

        Parameters
        ----------
        request: ExecutionRequest
            Source code, language id and optional standard input.

        Returns
        -------
        ExecutionResult
            Captures output, diagnostics, exit status and duration.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def check_availability(self) -> Availability:
        """Report whether this backend can currently accept work."""
        raise NotImplementedError
