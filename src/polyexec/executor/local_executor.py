"""
Executor running programs with toolchains installed on this host.

The executor stages the code in a fresh workspace, hands it to the
:class:`ProcessRunner`, and disposes of the workspace whatever happens in
between.  The host is assumed to provide the compilers and interpreters
listed in the language registry; languages whose toolchain is missing can
be routed to the remote executor instead.
"""

from __future__ import annotations

import logging
import shutil

from ..config import Config
from ..languages import REGISTRY, LanguageDescriptor, resolve, toolchain_binaries
from .base import Availability, CodeExecutor, ExecutionRequest, ExecutionResult
from .formatter import format_result
from .process import ProcessRunner
from .workspace import WorkspaceManager


logger = logging.getLogger(__name__)


class LocalExecutor(CodeExecutor):
    """Execute code in per‑request processes on the local host."""

    def __init__(self, workspaces: WorkspaceManager, runner: ProcessRunner) -> None:
        self.workspaces = workspaces
        self.runner = runner

    @classmethod
    def from_config(cls, config: Config) -> "LocalExecutor":
        return cls(
            WorkspaceManager(config.workspace_path),
            ProcessRunner(
                timeout=config.timeout_seconds,
                compile_timeout=config.compile_timeout_seconds,
                max_output_bytes=config.max_output_bytes,
                max_memory_mb=config.max_memory_mb,
                max_cpu_secs=config.max_cpu_secs,
            ),
        )

    def supports(self, descriptor: LanguageDescriptor) -> bool:
        """True when every binary ``descriptor`` needs is on ``PATH``."""
        return all(shutil.which(binary) for binary in toolchain_binaries(descriptor))

    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        descriptor = resolve(request.language)
        logger.info("Running %s code locally", descriptor.id)

        with self.workspaces.staged(request.code, descriptor, request.stdin) as workspace:
            report = self.runner.run(descriptor, workspace)

        result = format_result(
            report.outcome,
            report.elapsed_ms,
            descriptor.id,
            used_remote=False,
            failure=report.failure,
        )
        logger.info(
            "Execution finished: language=%s, exit_code=%s, duration_ms=%s, failure=%s",
            descriptor.id,
            result.exit_code,
            result.execution_time_ms,
            result.failure.value if result.failure else None,
        )
        return result

    def check_availability(self) -> Availability:
        installed = [d.id for d in REGISTRY.values() if self.supports(d)]
        if not installed:
            return Availability(False, "No local toolchains installed")
        return Availability(
            True,
            f"{len(installed)} of {len(REGISTRY)} toolchains installed: {', '.join(installed)}",
        )
