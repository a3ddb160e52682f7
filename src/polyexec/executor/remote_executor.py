"""
Executor delegating to a hosted Piston execution API.

Used when the toolchain for a language is not installed on this host.  The
request is described with the registry's Piston identifiers and the
response is normalized through the same formatter as local runs, so the
result contract is identical; only ``used_remote`` differs.

The remote service enforces its own limits.  A run killed with ``SIGKILL``
is reported as a timeout, as Piston kills programs that exceed their
``run_timeout``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests

from ..config import Config
from ..errors import FailureKind, RemoteExecutionError
from ..languages import LanguageDescriptor, resolve
from .base import Availability, CodeExecutor, ExecutionRequest, ExecutionResult, RawExecutionOutcome
from .formatter import format_result
from .workspace import derive_declared_name


logger = logging.getLogger(__name__)


def remote_file_name(code: str, descriptor: LanguageDescriptor) -> str:
    """File name sent to the remote API (``Main.java``, ``main.py``...)."""
    if descriptor.declared_name_pattern:
        stem = derive_declared_name(code, descriptor).value
    else:
        stem = descriptor.default_name
    return f"{stem}.{descriptor.source_extension}"


def _stage_outcome(stage: Dict[str, Any]) -> RawExecutionOutcome:
    timed_out = stage.get("signal") == "SIGKILL"
    code = stage.get("code")
    if code is None:
        code = -9 if stage.get("signal") else -1
    return RawExecutionOutcome(
        stdout=stage.get("stdout") or "",
        stderr=stage.get("stderr") or "",
        exit_code=int(code),
        timed_out=timed_out,
    )


class RemoteExecutor(CodeExecutor):
    """Execute code through the Piston HTTP API."""

    used_remote = True

    def __init__(
        self,
        base_url: str,
        timeout: float = 15,
        run_timeout_ms: int = 3000,
        compile_timeout_ms: int = 10000,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.run_timeout_ms = run_timeout_ms
        self.compile_timeout_ms = compile_timeout_ms
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Config) -> "RemoteExecutor":
        return cls(
            config.remote_url,
            timeout=config.remote_timeout_seconds,
            run_timeout_ms=config.remote_run_timeout_ms,
            compile_timeout_ms=config.remote_compile_timeout_ms,
        )

    def _payload(self, request: ExecutionRequest, descriptor: LanguageDescriptor) -> Dict[str, Any]:
        return {
            "language": descriptor.remote_language,
            "version": descriptor.remote_version,
            "files": [
                {
                    "name": remote_file_name(request.code, descriptor),
                    "content": request.code,
                }
            ],
            "stdin": request.stdin or "",
            "args": [],
            "compile_timeout": self.compile_timeout_ms,
            "run_timeout": self.run_timeout_ms,
            "compile_memory_limit": -1,
            "run_memory_limit": -1,
        }

    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        descriptor = resolve(request.language)
        logger.info("Running %s code on %s", descriptor.id, self.base_url)

        start_time = time.perf_counter()
        try:
            response = self.session.post(
                f"{self.base_url}/execute",
                json=self._payload(request, descriptor),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RemoteExecutionError(f"Execution failed: {exc}") from exc
        elapsed = int((time.perf_counter() - start_time) * 1000)

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not response.ok:
            message = data.get("message") if isinstance(data, dict) else None
            raise RemoteExecutionError(
                f"API Error: {message or f'HTTP {response.status_code}'}"
            )
        if not isinstance(data, dict) or not isinstance(data.get("run"), dict):
            raise RemoteExecutionError("API Error: response carries no run result")

        compile_stage = data.get("compile")
        if isinstance(compile_stage, dict):
            compiled = _stage_outcome(compile_stage)
            if compiled.timed_out or compiled.exit_code != 0:
                failure = FailureKind.TIMEOUT if compiled.timed_out else FailureKind.COMPILE_ERROR
                return format_result(compiled, elapsed, descriptor.id, used_remote=True, failure=failure)

        result = format_result(_stage_outcome(data["run"]), elapsed, descriptor.id, used_remote=True)
        logger.info(
            "Remote execution finished: language=%s, exit_code=%s, duration_ms=%s",
            descriptor.id,
            result.exit_code,
            result.execution_time_ms,
        )
        return result

    def check_availability(self) -> Availability:
        try:
            response = self.session.get(f"{self.base_url}/runtimes", timeout=self.timeout)
            response.raise_for_status()
            runtimes = response.json()
        except (requests.RequestException, ValueError) as exc:
            return Availability(False, f"Service unavailable: {exc}")
        return Availability(True, f"Online compiler service is available ({len(runtimes)} runtimes)")
