"""Configuration loader.

The execution engine reads its configuration from environment variables so
that the same image can run under docker‑compose, a plain host, or a cloud
runtime.  Reasonable defaults are provided so that local development works
out of the box.

Environment variables:

``POLYEXEC_WORKSPACE_PATH``
    Base directory under which per‑execution workspaces are staged.  Defaults
    to ``polyexec`` inside the system temp directory.

``POLYEXEC_BACKEND``
    Default backend strategy used by the HTTP surface.  Supported values are
    ``auto``, ``local`` and ``remote``.  Defaults to ``auto``, which runs on
    the host when the language's toolchain is installed and falls back to the
    hosted API otherwise.

``POLYEXEC_TIMEOUT_SECONDS``
    Wall‑clock timeout (in seconds) for running a program.  Default is 10.

``POLYEXEC_COMPILE_TIMEOUT_SECONDS``
    Wall‑clock timeout (in seconds) for the compile step of compiled
    languages.  Default is 30.

``POLYEXEC_MAX_OUTPUT_BYTES``
    Maximum number of bytes kept from each of stdout and stderr.  Anything
    beyond is drained and discarded.  Default is 65536.

``POLYEXEC_MAX_MEMORY_MB``
    Address space limit (in megabytes) applied to the run step of languages
    that tolerate it.  ``0`` disables the limit.  Default is 512.

``POLYEXEC_MAX_CPU_SECS``
    CPU time limit (in seconds) applied to every spawned process.  ``0``
    disables the limit.  Default is 10.

``POLYEXEC_REMOTE_URL``
    Base URL of the Piston execution API.  Defaults to the public instance.

``POLYEXEC_REMOTE_TIMEOUT_SECONDS``
    HTTP timeout for calls to the remote API.  Default is 15.

``POLYEXEC_REMOTE_RUN_TIMEOUT_MS`` / ``POLYEXEC_REMOTE_COMPILE_TIMEOUT_MS``
    Run and compile timeouts forwarded to the remote API.  Defaults are 3000
    and 10000.

``PORT``
    The port on which the API server listens.  Defaults to 8080.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass


BACKENDS = {"auto", "local", "remote"}


def _int_var(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"Invalid integer for {name}: {val}")


@dataclass
class Config:
    """Centralised configuration object."""

    workspace_path: str
    backend: str
    timeout_seconds: int
    compile_timeout_seconds: int
    max_output_bytes: int
    max_memory_mb: int
    max_cpu_secs: int
    remote_url: str
    remote_timeout_seconds: int
    remote_run_timeout_ms: int
    remote_compile_timeout_ms: int
    port: int

    @classmethod
    def load(cls) -> "Config":
        workspace_path = os.getenv(
            "POLYEXEC_WORKSPACE_PATH", os.path.join(tempfile.gettempdir(), "polyexec")
        )

        backend = os.getenv("POLYEXEC_BACKEND", "auto").strip().lower()
        if backend not in BACKENDS:
            raise ValueError(
                f"Invalid POLYEXEC_BACKEND: {backend}. Use 'auto', 'local' or 'remote'."
            )

        timeout_seconds = _int_var("POLYEXEC_TIMEOUT_SECONDS", 10)
        if timeout_seconds <= 0:
            raise ValueError("POLYEXEC_TIMEOUT_SECONDS must be positive")
        compile_timeout_seconds = _int_var("POLYEXEC_COMPILE_TIMEOUT_SECONDS", 30)
        if compile_timeout_seconds <= 0:
            raise ValueError("POLYEXEC_COMPILE_TIMEOUT_SECONDS must be positive")

        return cls(
            workspace_path=workspace_path,
            backend=backend,
            timeout_seconds=timeout_seconds,
            compile_timeout_seconds=compile_timeout_seconds,
            max_output_bytes=_int_var("POLYEXEC_MAX_OUTPUT_BYTES", 65536),
            max_memory_mb=_int_var("POLYEXEC_MAX_MEMORY_MB", 512),
            max_cpu_secs=_int_var("POLYEXEC_MAX_CPU_SECS", 10),
            remote_url=os.getenv("POLYEXEC_REMOTE_URL", "https://emkc.org/api/v2/piston").rstrip("/"),
            remote_timeout_seconds=_int_var("POLYEXEC_REMOTE_TIMEOUT_SECONDS", 15),
            remote_run_timeout_ms=_int_var("POLYEXEC_REMOTE_RUN_TIMEOUT_MS", 3000),
            remote_compile_timeout_ms=_int_var("POLYEXEC_REMOTE_COMPILE_TIMEOUT_MS", 10000),
            port=_int_var("PORT", 8080),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Alternate constructor used by the API to load configuration."""
        return cls.load()
