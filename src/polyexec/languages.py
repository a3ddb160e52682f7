"""Language registry.

A single table describes how every supported language is compiled and run.
Both backends read from it: the local executor uses the command templates,
the remote executor uses the Piston identifiers.  Callers only ever hand
around the language id.

Command templates are argument vectors.  Elements may contain the
placeholders ``{source}``, ``{artifact}``, ``{workdir}`` and ``{name}``,
which are substituted element by element before spawning; nothing is ever
interpreted by a shell.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import UnsupportedLanguageError


@dataclass(frozen=True)
class LanguageDescriptor:
    """Static metadata describing how to compile and run one language.

    Attributes
    ----------
    id: str
        Lower‑case identifier used by callers.
    source_extension: str
        Extension (without the dot) of the staged source file.
    run_command: tuple of str
        Argument vector template for the run step.
    compile_command: tuple of str, optional
        Argument vector template for the build step.  Present exactly when
        ``requires_compilation`` is true.
    artifact_suffix: str, optional
        Suffix of the compiled artifact, derived from the source path by
        replacing the extension (``""`` produces an extension‑less binary).
    declared_name_pattern: str, optional
        Regular expression whose first group captures the name the
        toolchain requires the source file to carry.
    default_name: str
        File stem used when ``declared_name_pattern`` finds nothing.
    remote_language / remote_version: str
        Identifiers understood by the Piston API.
    limit_memory: bool
        Whether the address space limit may be applied to the run step.
        Runtimes that reserve large virtual regions up front (JVM, V8, .NET)
        fail under it.
    """

    id: str
    display_name: str
    source_extension: str
    run_command: Tuple[str, ...]
    toolchain_version: str
    remote_language: str
    remote_version: str
    compile_command: Optional[Tuple[str, ...]] = None
    artifact_suffix: Optional[str] = None
    declared_name_pattern: Optional[str] = None
    default_name: str = "main"
    limit_memory: bool = True

    @property
    def requires_compilation(self) -> bool:
        return self.compile_command is not None


_JAVA_PUBLIC_TYPE = (
    r"public\s+(?:(?:final|abstract|sealed|strictfp)\s+)*"
    r"(?:class|interface|enum|record)\s+([A-Za-z_$][A-Za-z0-9_$]*)"
)


_DESCRIPTORS = [
    LanguageDescriptor(
        id="python",
        display_name="Python",
        source_extension="py",
        run_command=("python3", "-u", "{source}"),
        toolchain_version="3.10.0",
        remote_language="python",
        remote_version="3.10.0",
    ),
    LanguageDescriptor(
        id="javascript",
        display_name="JavaScript",
        source_extension="js",
        run_command=("node", "{source}"),
        toolchain_version="18.15.0",
        remote_language="javascript",
        remote_version="18.15.0",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="typescript",
        display_name="TypeScript",
        source_extension="ts",
        run_command=("ts-node", "--transpile-only", "{source}"),
        toolchain_version="5.0.3",
        remote_language="typescript",
        remote_version="5.0.3",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="java",
        display_name="Java",
        source_extension="java",
        compile_command=("javac", "-encoding", "UTF-8", "-d", "{workdir}", "{source}"),
        run_command=("java", "-cp", "{workdir}", "{name}"),
        artifact_suffix=".class",
        declared_name_pattern=_JAVA_PUBLIC_TYPE,
        default_name="Main",
        toolchain_version="15.0.2",
        remote_language="java",
        remote_version="15.0.2",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="c",
        display_name="C",
        source_extension="c",
        compile_command=("gcc", "-O2", "-o", "{artifact}", "{source}", "-lm"),
        run_command=("{artifact}",),
        artifact_suffix="",
        toolchain_version="10.2.0",
        remote_language="c",
        remote_version="10.2.0",
    ),
    LanguageDescriptor(
        id="cpp",
        display_name="C++",
        source_extension="cpp",
        compile_command=("g++", "-std=c++17", "-O2", "-o", "{artifact}", "{source}"),
        run_command=("{artifact}",),
        artifact_suffix="",
        toolchain_version="10.2.0",
        remote_language="c++",
        remote_version="10.2.0",
    ),
    LanguageDescriptor(
        id="csharp",
        display_name="C#",
        source_extension="cs",
        compile_command=("mcs", "-out:{artifact}", "{source}"),
        run_command=("mono", "{artifact}"),
        artifact_suffix=".exe",
        toolchain_version="6.12.0",
        remote_language="csharp",
        remote_version="6.12.0",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="go",
        display_name="Go",
        source_extension="go",
        compile_command=("go", "build", "-o", "{artifact}", "{source}"),
        run_command=("{artifact}",),
        artifact_suffix="",
        toolchain_version="1.16.2",
        remote_language="go",
        remote_version="1.16.2",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="rust",
        display_name="Rust",
        source_extension="rs",
        compile_command=("rustc", "-O", "-o", "{artifact}", "{source}"),
        run_command=("{artifact}",),
        artifact_suffix="",
        toolchain_version="1.68.2",
        remote_language="rust",
        remote_version="1.68.2",
    ),
    LanguageDescriptor(
        id="php",
        display_name="PHP",
        source_extension="php",
        run_command=("php", "{source}"),
        toolchain_version="8.2.3",
        remote_language="php",
        remote_version="8.2.3",
    ),
    LanguageDescriptor(
        id="ruby",
        display_name="Ruby",
        source_extension="rb",
        run_command=("ruby", "{source}"),
        toolchain_version="3.0.1",
        remote_language="ruby",
        remote_version="3.0.1",
    ),
    LanguageDescriptor(
        id="swift",
        display_name="Swift",
        source_extension="swift",
        compile_command=("swiftc", "-o", "{artifact}", "{source}"),
        run_command=("{artifact}",),
        artifact_suffix="",
        toolchain_version="5.3.3",
        remote_language="swift",
        remote_version="5.3.3",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="kotlin",
        display_name="Kotlin",
        source_extension="kt",
        compile_command=("kotlinc", "{source}", "-include-runtime", "-d", "{artifact}"),
        run_command=("java", "-jar", "{artifact}"),
        artifact_suffix=".jar",
        toolchain_version="1.8.20",
        remote_language="kotlin",
        remote_version="1.8.20",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="scala",
        display_name="Scala",
        source_extension="scala",
        run_command=("scala", "run", "{source}"),
        toolchain_version="3.2.2",
        remote_language="scala",
        remote_version="3.2.2",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="perl",
        display_name="Perl",
        source_extension="pl",
        run_command=("perl", "{source}"),
        toolchain_version="5.36.0",
        remote_language="perl",
        remote_version="5.36.0",
    ),
    LanguageDescriptor(
        id="lua",
        display_name="Lua",
        source_extension="lua",
        run_command=("lua", "{source}"),
        toolchain_version="5.4.4",
        remote_language="lua",
        remote_version="5.4.4",
    ),
    LanguageDescriptor(
        id="r",
        display_name="R",
        source_extension="r",
        run_command=("Rscript", "{source}"),
        toolchain_version="4.1.1",
        remote_language="r",
        remote_version="4.1.1",
    ),
    LanguageDescriptor(
        id="dart",
        display_name="Dart",
        source_extension="dart",
        run_command=("dart", "run", "{source}"),
        toolchain_version="2.19.6",
        remote_language="dart",
        remote_version="2.19.6",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="elixir",
        display_name="Elixir",
        source_extension="exs",
        run_command=("elixir", "{source}"),
        toolchain_version="1.11.3",
        remote_language="elixir",
        remote_version="1.11.3",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="haskell",
        display_name="Haskell",
        source_extension="hs",
        compile_command=("ghc", "-O", "-o", "{artifact}", "{source}"),
        run_command=("{artifact}",),
        artifact_suffix="",
        toolchain_version="9.0.1",
        remote_language="haskell",
        remote_version="9.0.1",
        limit_memory=False,
    ),
    LanguageDescriptor(
        id="bash",
        display_name="Bash",
        source_extension="sh",
        run_command=("bash", "{source}"),
        toolchain_version="5.2.0",
        remote_language="bash",
        remote_version="5.2.0",
    ),
]

REGISTRY: Dict[str, LanguageDescriptor] = {d.id: d for d in _DESCRIPTORS}


def normalize_id(language: str) -> str:
    return (language or "").strip().lower()


def resolve(language: str) -> LanguageDescriptor:
    """Return the descriptor for ``language``.

    Raises :class:`UnsupportedLanguageError` listing every known id when
    the identifier is not registered.
    """
    descriptor = REGISTRY.get(normalize_id(language))
    if descriptor is None:
        raise UnsupportedLanguageError(language, REGISTRY.keys())
    return descriptor


def toolchain_binaries(descriptor: LanguageDescriptor) -> List[str]:
    """Host binaries the local backend needs for ``descriptor``.

    Run commands that start with a placeholder execute the compiled
    artifact itself and contribute nothing.
    """
    binaries: List[str] = []
    for template in (descriptor.compile_command, descriptor.run_command):
        if not template or template[0].startswith("{"):
            continue
        if template[0] not in binaries:
            binaries.append(template[0])
    return binaries


def list_supported_languages() -> List[Dict[str, str]]:
    """Describe every registered language for introspection endpoints."""
    return [
        {
            "name": d.id,
            "displayName": d.display_name,
            "toolchainVersion": d.toolchain_version,
        }
        for d in _DESCRIPTORS
    ]
