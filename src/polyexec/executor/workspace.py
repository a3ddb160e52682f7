"""Per‑execution workspaces on the local filesystem.

Each execution gets its own directory under a shared base directory.  The
directory name is a random token, so concurrent executions never share a
path even when two programs need the same file name (every Java submission
declaring ``public class Main`` must live in ``Main.java``).  The base
directory is the only shared resource and creating it is idempotent.

:meth:`WorkspaceManager.prepare` and :meth:`WorkspaceManager.dispose` are
always used as a pair; :meth:`WorkspaceManager.staged` wraps them in a
context manager so disposal runs on every exit path.
"""

from __future__ import annotations

import logging
import re
import secrets
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from ..errors import WorkspaceError
from ..languages import LanguageDescriptor


logger = logging.getLogger(__name__)

_COMMENTS = re.compile(r"/\*.*?\*/|//[^\n]*", re.DOTALL)

_MAX_TOKEN_ATTEMPTS = 5


@dataclass(frozen=True)
class ParsedName:
    """Name found in the source text."""

    value: str


@dataclass(frozen=True)
class DefaultName:
    """Fallback used when the scan found no declared name."""

    value: str


DeclaredName = Union[ParsedName, DefaultName]


def derive_declared_name(code: str, descriptor: LanguageDescriptor) -> DeclaredName:
    """Best‑effort scan for the name the toolchain requires the file to carry.

    Comments are ignored so that a commented‑out declaration does not win
    over the real one.
    """
    if descriptor.declared_name_pattern:
        match = re.search(descriptor.declared_name_pattern, _COMMENTS.sub("", code))
        if match:
            return ParsedName(match.group(1))
    return DefaultName(descriptor.default_name)


@dataclass
class Workspace:
    """Files backing one execution attempt."""

    token: str
    directory: Path
    source_path: Path
    stdin_path: Path
    artifact_path: Optional[Path]
    name: str


class WorkspaceManager:
    """Stage and remove per‑execution files under ``base_dir``."""

    def __init__(self, base_dir: Union[str, Path]) -> None:
        self.base_dir = Path(base_dir)

    def _ensure_base(self) -> None:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WorkspaceError(f"Cannot create workspace base {self.base_dir}: {exc}") from exc

    def _claim_directory(self) -> Tuple[str, Path]:
        for _ in range(_MAX_TOKEN_ATTEMPTS):
            token = secrets.token_hex(8)
            directory = self.base_dir / token
            try:
                directory.mkdir()
            except FileExistsError:
                continue
            except OSError as exc:
                raise WorkspaceError(f"Cannot create workspace {directory}: {exc}") from exc
            return token, directory
        raise WorkspaceError("Could not allocate a unique workspace token")

    def prepare(
        self,
        code: str,
        descriptor: LanguageDescriptor,
        stdin: Optional[str] = None,
    ) -> Workspace:
        """Write ``code`` and ``stdin`` into a fresh workspace.

        Languages with a declared‑name rule get a source file named after
        the declared type; every other language gets ``main_<token>``.
        """
        self._ensure_base()
        token, directory = self._claim_directory()

        if descriptor.declared_name_pattern:
            stem = derive_declared_name(code, descriptor).value
        else:
            stem = f"{descriptor.default_name}_{token}"
        source_path = directory / f"{stem}.{descriptor.source_extension}"
        artifact_path = None
        if descriptor.artifact_suffix is not None:
            artifact_path = source_path.with_suffix(descriptor.artifact_suffix)

        workspace = Workspace(
            token=token,
            directory=directory,
            source_path=source_path,
            stdin_path=directory / f"stdin_{token}.txt",
            artifact_path=artifact_path,
            name=stem,
        )
        try:
            workspace.source_path.write_text(code, encoding="utf-8")
            workspace.stdin_path.write_text(stdin or "", encoding="utf-8")
        except (OSError, UnicodeError) as exc:
            self.dispose(workspace)
            raise WorkspaceError(f"Cannot stage files in {directory}: {exc}") from exc

        logger.debug("Prepared workspace %s for %s (%s)", token, descriptor.id, source_path.name)
        return workspace

    def dispose(self, workspace: Workspace) -> None:
        """Remove every file of ``workspace``.

        Failures are logged and swallowed; a failed cleanup must not hide
        the result of the execution.
        """
        for path in (workspace.source_path, workspace.stdin_path, workspace.artifact_path):
            if path is not None:
                _remove(path)
        # Toolchains leave extra files behind (inner classes, object files).
        if workspace.directory.exists():
            for path in sorted(workspace.directory.rglob("*"), reverse=True):
                _remove(path)
            _remove(workspace.directory)
        logger.debug("Disposed workspace %s", workspace.token)

    @contextmanager
    def staged(
        self,
        code: str,
        descriptor: LanguageDescriptor,
        stdin: Optional[str] = None,
    ) -> Iterator[Workspace]:
        workspace = self.prepare(code, descriptor, stdin)
        try:
            yield workspace
        finally:
            self.dispose(workspace)


def _remove(path: Path) -> None:
    try:
        if path.is_dir() and not path.is_symlink():
            path.rmdir()
        elif path.exists() or path.is_symlink():
            path.unlink()
    except OSError as exc:
        logger.warning("Failed to remove %s: %s", path, exc)
