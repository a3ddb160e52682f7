"""Tests for the language registry."""

from __future__ import annotations

import pytest

from polyexec.errors import FailureKind, UnsupportedLanguageError
from polyexec.languages import REGISTRY, list_supported_languages, resolve, toolchain_binaries


@pytest.mark.parametrize("language", sorted(REGISTRY))
def test_every_language_resolves_with_run_command(language):
    descriptor = resolve(language)
    assert descriptor.id == language
    assert descriptor.run_command
    assert all(part for part in descriptor.run_command)
    assert descriptor.source_extension
    assert descriptor.requires_compilation == (descriptor.compile_command is not None)
    if descriptor.requires_compilation:
        assert descriptor.artifact_suffix is not None


def test_resolve_normalizes_case_and_whitespace():
    assert resolve("  PyThOn ").id == "python"
    assert resolve("JAVA").id == "java"


def test_unknown_language_enumerates_known_ids():
    with pytest.raises(UnsupportedLanguageError) as excinfo:
        resolve("cobol")
    message = str(excinfo.value)
    assert "cobol" in message
    for language in REGISTRY:
        assert language in message
    assert excinfo.value.known == sorted(REGISTRY)
    assert excinfo.value.kind is FailureKind.UNSUPPORTED_LANGUAGE


def test_empty_language_is_unsupported():
    with pytest.raises(UnsupportedLanguageError):
        resolve("")


def test_java_requires_compilation_and_declared_name():
    java = resolve("java")
    assert java.requires_compilation
    assert java.declared_name_pattern
    assert java.default_name == "Main"
    assert java.artifact_suffix == ".class"


def test_interpreted_languages_have_only_run_command():
    for language in ("python", "javascript", "ruby", "bash"):
        descriptor = resolve(language)
        assert not descriptor.requires_compilation
        assert descriptor.compile_command is None


def test_toolchain_binaries_skip_compiled_artifacts():
    assert toolchain_binaries(resolve("c")) == ["gcc"]
    assert toolchain_binaries(resolve("java")) == ["javac", "java"]
    assert toolchain_binaries(resolve("python")) == ["python3"]


def test_list_supported_languages():
    languages = list_supported_languages()
    assert len(languages) == len(REGISTRY)
    names = {entry["name"] for entry in languages}
    assert names == set(REGISTRY)
    python = next(entry for entry in languages if entry["name"] == "python")
    assert python == {"name": "python", "displayName": "Python", "toolchainVersion": "3.10.0"}
