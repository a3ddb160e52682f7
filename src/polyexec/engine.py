"""Backend‑agnostic entry point of the execution engine.

The engine owns one local and one remote executor and picks between them
per call.  The choice is an explicit :class:`Backend` argument rather than
process‑wide state, so callers (and tests) can exercise both backends side
by side.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, List, Optional

from .config import Config
from .executor import (
    Availability,
    CodeExecutor,
    ExecutionRequest,
    ExecutionResult,
    LocalExecutor,
    RemoteExecutor,
)
from .languages import list_supported_languages, resolve


logger = logging.getLogger(__name__)


class Backend(str, enum.Enum):
    """Where a request runs."""

    LOCAL = "local"
    REMOTE = "remote"
    # Local when the language's toolchain is installed, remote otherwise.
    AUTO = "auto"


class ExecutionEngine:
    """Run code on the local host or the hosted API behind one contract."""

    def __init__(self, local: LocalExecutor, remote: Optional[RemoteExecutor] = None) -> None:
        self.local = local
        self.remote = remote

    @classmethod
    def from_config(cls, config: Config) -> "ExecutionEngine":
        return cls(LocalExecutor.from_config(config), RemoteExecutor.from_config(config))

    def select(self, language: str, backend: Backend = Backend.AUTO) -> CodeExecutor:
        """Return the executor that should run ``language``.

        Raises :class:`UnsupportedLanguageError` for unknown languages, and
        :class:`ValueError` when the remote backend is requested but not
        configured.
        """
        backend = Backend(backend)
        descriptor = resolve(language)
        if backend is Backend.LOCAL:
            return self.local
        if backend is Backend.REMOTE:
            if self.remote is None:
                raise ValueError("Remote backend is not configured")
            return self.remote
        if self.local.supports(descriptor) or self.remote is None:
            return self.local
        logger.info("No local toolchain for %s; using remote backend", descriptor.id)
        return self.remote

    def execute(self, request: ExecutionRequest, backend: Backend = Backend.AUTO) -> ExecutionResult:
        return self.select(request.language, backend).execute(request)

    def list_supported_languages(self) -> List[Dict[str, str]]:
        return list_supported_languages()

    def check_availability(self, backend: Backend = Backend.AUTO) -> Availability:
        """Probe ``backend``; ``AUTO`` is available when either backend is."""
        backend = Backend(backend)
        if backend is Backend.LOCAL or (backend is Backend.AUTO and self.remote is None):
            return self.local.check_availability()
        if self.remote is None:
            return Availability(False, "Remote backend is not configured")
        if backend is Backend.REMOTE:
            return self.remote.check_availability()

        local = self.local.check_availability()
        if local.available:
            return local
        remote = self.remote.check_availability()
        return Availability(remote.available, f"{local.detail}; remote: {remote.detail}")
