"""Normalize raw process output into :class:`ExecutionResult`.

Both backends funnel through :func:`format_result`, so the result contract
does not depend on where the program ran.
"""

from __future__ import annotations

from typing import Optional

from ..errors import FailureKind
from .base import ExecutionResult, RawExecutionOutcome


def classify(outcome: RawExecutionOutcome) -> Optional[FailureKind]:
    """Classify the outcome of a run step.

    A timeout wins over the exit code.  Output on stderr alone never makes
    a zero‑exit run a failure.
    """
    if outcome.timed_out:
        return FailureKind.TIMEOUT
    if outcome.exit_code != 0:
        return FailureKind.RUNTIME_ERROR
    return None


def _error_text(outcome: RawExecutionOutcome, failure: FailureKind) -> str:
    if failure is FailureKind.COMPILE_ERROR:
        # Some compilers (mcs) report diagnostics on stdout.
        return outcome.stderr or outcome.stdout or "Compilation failed"
    if failure is FailureKind.TIMEOUT:
        return outcome.stderr or "Execution timed out"
    return outcome.stderr or f"Process exited with code {outcome.exit_code}"


def format_result(
    outcome: RawExecutionOutcome,
    elapsed_ms: float,
    language: str,
    used_remote: bool = False,
    failure: Optional[FailureKind] = None,
) -> ExecutionResult:
    """Build the stable result for ``outcome``.

    ``failure`` is only passed when the caller already knows the
    classification (a failed compile step); otherwise it is derived from
    the outcome.
    """
    if failure is None:
        failure = classify(outcome)

    if failure is None:
        error = ""
    else:
        error = _error_text(outcome, failure)

    return ExecutionResult(
        success=failure is None,
        output=outcome.stdout or "",
        error=error,
        exit_code=outcome.exit_code,
        execution_time_ms=max(0, int(elapsed_ms)),
        language=language,
        used_remote=used_remote,
        failure=failure,
    )
