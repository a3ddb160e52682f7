"""
Compile and run commands against a prepared workspace.

Every command is spawned from an argument vector (never through a shell)
in its own session, so a timeout can kill the whole process group,
including anything the program forked.  On POSIX hosts the child applies
resource limits before exec: CPU seconds, maximum file size and, for
runtimes that tolerate it, address space.

stdout and stderr are drained on reader threads while the process runs.
Each stream keeps at most ``max_output_bytes``; the rest is read and
discarded so the child never blocks on a full pipe.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..errors import FailureKind, ToolchainUnavailableError, WorkspaceError
from ..languages import LanguageDescriptor
from .base import RawExecutionOutcome
from .formatter import classify
from .workspace import Workspace

try:
    import resource
except ImportError:  # pragma: no cover - non‑POSIX hosts
    resource = None  # type: ignore


logger = logging.getLogger(__name__)

_CHUNK_SIZE = 8192
_MAX_FILE_BYTES = 64 * 1024 * 1024
# Grace period for reader threads once the process group is gone.
_DRAIN_GRACE_SECONDS = 2.0
# Return codes of a process stopped by RLIMIT_CPU (soft, then hard limit).
_CPU_LIMIT_SIGNALS = frozenset(
    -sig for sig in (getattr(signal, "SIGXCPU", None), getattr(signal, "SIGKILL", None)) if sig is not None
)


@dataclass
class ProcessReport:
    """Outcome of the compile and run steps for one workspace."""

    outcome: RawExecutionOutcome
    elapsed_ms: int
    failure: Optional[FailureKind] = None


def build_command(template: Sequence[str], workspace: Workspace) -> List[str]:
    """Substitute workspace paths into an argument vector template."""
    values = {
        "source": str(workspace.source_path),
        "artifact": str(workspace.artifact_path or ""),
        "workdir": str(workspace.directory),
        "name": workspace.name,
    }
    return [part.format(**values) for part in template]


class _StreamCollector(threading.Thread):
    """Read a pipe to EOF, keeping only the first ``limit`` bytes."""

    def __init__(self, stream, limit: int) -> None:
        super().__init__(daemon=True)
        self.stream = stream
        self.limit = limit
        self.data = bytearray()
        self.truncated = False

    def run(self) -> None:
        try:
            for chunk in iter(lambda: self.stream.read1(_CHUNK_SIZE), b""):
                room = self.limit - len(self.data)
                if room > 0:
                    self.data += chunk[:room]
                if len(chunk) > room:
                    self.truncated = True
        except (OSError, ValueError):
            # The pipe was closed underneath us; keep what was read.
            pass
        finally:
            self.stream.close()

    def text(self) -> str:
        text = self.data.decode("utf-8", errors="replace")
        if self.truncated:
            text += f"\n[output truncated after {self.limit} bytes]"
        return text


def _kill_group(process: subprocess.Popen) -> None:
    try:
        if os.name == "posix":
            os.killpg(process.pid, signal.SIGKILL)
        else:
            process.kill()
    except (ProcessLookupError, PermissionError):
        pass


def _resource_limits(cpu_secs: int, memory_mb: int, file_bytes: int) -> Optional[Callable[[], None]]:
    """Build the ``preexec_fn`` applying POSIX limits in the child."""
    if resource is None:
        return None

    def lower(kind: int, value: int, ceiling: Optional[int] = None) -> None:
        _soft, hard = resource.getrlimit(kind)
        ceiling = value if ceiling is None else ceiling
        if hard != resource.RLIM_INFINITY:
            value = min(value, hard)
            ceiling = min(ceiling, hard)
        try:
            resource.setrlimit(kind, (value, ceiling))
        except (ValueError, OSError):
            # Refused limits leave the wall clock as the only bound.
            pass

    def apply() -> None:
        if cpu_secs > 0:
            # SIGXCPU at the soft limit, SIGKILL one second later.
            lower(resource.RLIMIT_CPU, cpu_secs, cpu_secs + 1)
        if file_bytes > 0:
            lower(resource.RLIMIT_FSIZE, file_bytes)
        if memory_mb > 0:
            lower(resource.RLIMIT_AS, memory_mb * 1024 * 1024)

    return apply


class ProcessRunner:
    """Run a language's compile and run steps under wall‑clock bounds."""

    def __init__(
        self,
        timeout: float = 10,
        compile_timeout: float = 30,
        max_output_bytes: int = 65536,
        max_memory_mb: int = 512,
        max_cpu_secs: int = 10,
    ) -> None:
        """
        Parameters
        ----------
        timeout: float, optional
            Maximum wall‑clock time (in seconds) for the run step.  When
            exceeded the process group is killed and the outcome is marked
            as timed out.
        compile_timeout: float, optional
            Maximum wall‑clock time (in seconds) for the compile step.
        max_output_bytes: int, optional
            Bytes kept from each of stdout and stderr.
        max_memory_mb: int, optional
            Address space limit for run steps of languages that allow it.
            ``0`` disables the limit.
        max_cpu_secs: int, optional
            ``RLIMIT_CPU`` for run steps.  ``0`` disables the limit.
        """
        self.timeout = timeout
        self.compile_timeout = compile_timeout
        self.max_output_bytes = max_output_bytes
        self.max_memory_mb = max_memory_mb
        self.max_cpu_secs = max_cpu_secs

    def run(self, descriptor: LanguageDescriptor, workspace: Workspace) -> ProcessReport:
        """Compile (when required) and run the staged program.

        A failed or timed out compile step short‑circuits the pipeline: the
        run step is not attempted.  Elapsed time covers both steps.
        """
        start_time = time.perf_counter()

        if descriptor.compile_command:
            compiled = self._spawn(
                build_command(descriptor.compile_command, workspace),
                workspace.directory,
                timeout=self.compile_timeout,
                language=descriptor.id,
                preexec_fn=_resource_limits(int(self.compile_timeout), 0, 0),
                cpu_limit=int(self.compile_timeout),
                timeout_notice="Compilation timed out after",
            )
            if compiled.timed_out or compiled.exit_code != 0:
                elapsed = int((time.perf_counter() - start_time) * 1000)
                failure = FailureKind.TIMEOUT if compiled.timed_out else FailureKind.COMPILE_ERROR
                logger.info("Compile step failed for %s (%s)", descriptor.id, failure.value)
                return ProcessReport(compiled, elapsed, failure)

        memory_mb = self.max_memory_mb if descriptor.limit_memory else 0
        outcome = self._spawn(
            build_command(descriptor.run_command, workspace),
            workspace.directory,
            timeout=self.timeout,
            language=descriptor.id,
            stdin_path=workspace.stdin_path,
            preexec_fn=_resource_limits(self.max_cpu_secs, memory_mb, _MAX_FILE_BYTES),
            cpu_limit=self.max_cpu_secs,
            timeout_notice="Execution timed out after",
        )
        elapsed = int((time.perf_counter() - start_time) * 1000)
        return ProcessReport(outcome, elapsed, classify(outcome))

    def _spawn(
        self,
        args: List[str],
        cwd: Path,
        timeout: float,
        language: str,
        stdin_path: Optional[Path] = None,
        preexec_fn: Optional[Callable[[], None]] = None,
        cpu_limit: int = 0,
        timeout_notice: str = "Execution timed out after",
    ) -> RawExecutionOutcome:
        """
        Invoke one command and capture its output.

        The process is killed together with its process group if it
        exceeds ``timeout``.  Whatever it wrote before the kill is kept.
        A process stopped by its ``RLIMIT_CPU`` (``cpu_limit`` seconds)
        is reported as timed out as well.

        Raises
        ------
        ToolchainUnavailableError
            When the command's executable is not installed.
        WorkspaceError
            When the stdin file cannot be opened or the staged command
            cannot be launched.
        """
        stdin_handle = None
        try:
            if stdin_path is not None:
                stdin_handle = open(stdin_path, "rb")
            process = subprocess.Popen(
                args,
                cwd=str(cwd),
                stdin=stdin_handle if stdin_handle is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=True,
                preexec_fn=preexec_fn,
            )
        except FileNotFoundError as exc:
            if stdin_handle is None and stdin_path is not None:
                raise WorkspaceError(f"Cannot open stdin file {stdin_path}: {exc}") from exc
            raise ToolchainUnavailableError(language, args[0]) from exc
        except OSError as exc:
            raise WorkspaceError(f"Cannot launch {args[0]} for {language}: {exc}") from exc
        finally:
            if stdin_handle is not None:
                stdin_handle.close()

        stdout = _StreamCollector(process.stdout, self.max_output_bytes)
        stderr = _StreamCollector(process.stderr, self.max_output_bytes)
        stdout.start()
        stderr.start()

        timed_out = threading.Event()

        def kill_proc() -> None:
            if process.poll() is None:
                timed_out.set()
            # Also kills background children still holding the pipes open.
            _kill_group(process)

        # Start timer thread to enforce wall clock timeout
        deadline = time.monotonic() + timeout
        timer = threading.Timer(timeout, kill_proc)
        timer.start()
        try:
            process.wait()
            for collector in (stdout, stderr):
                collector.join(max(0.0, deadline - time.monotonic()) + _DRAIN_GRACE_SECONDS)
        finally:
            timer.cancel()
            _kill_group(process)
            stdout.join(_DRAIN_GRACE_SECONDS)
            stderr.join(_DRAIN_GRACE_SECONDS)

        exit_code = process.returncode if process.returncode is not None else -1
        err_text = stderr.text()
        # If killed by timeout, override exit code and append notice to stderr
        if timed_out.is_set():
            err_text = (err_text + "\n" if err_text else "") + f"{timeout_notice} {timeout:g} seconds."
            exit_code = -9
            logger.info("Process %s for %s killed after %ss", args[0], language, timeout)
        elif cpu_limit > 0 and exit_code in _CPU_LIMIT_SIGNALS:
            err_text = (err_text + "\n" if err_text else "") + f"CPU time limit of {cpu_limit} seconds exceeded."
            exit_code = -9
            timed_out.set()
            logger.info("Process %s for %s hit its CPU limit of %ss", args[0], language, cpu_limit)
        return RawExecutionOutcome(stdout.text(), err_text, exit_code, timed_out.is_set())
