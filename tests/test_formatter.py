"""Tests for result normalization."""

from __future__ import annotations

from polyexec.errors import FailureKind
from polyexec.executor import RawExecutionOutcome, classify, format_result


def test_success():
    result = format_result(RawExecutionOutcome("2\n", "", 0), 12.7, "python")
    assert result.success
    assert result.output == "2\n"
    assert result.error == ""
    assert result.exit_code == 0
    assert result.execution_time_ms == 12
    assert result.failure is None
    assert result.used_remote is False


def test_nonzero_exit_fails_even_with_stdout():
    result = format_result(RawExecutionOutcome("partial\n", "Traceback", 1), 5, "python")
    assert not result.success
    assert result.output == "partial\n"
    assert result.error == "Traceback"
    assert result.failure is FailureKind.RUNTIME_ERROR


def test_stderr_on_zero_exit_is_still_success():
    result = format_result(RawExecutionOutcome("ok\n", "warning: deprecated", 0), 5, "python")
    assert result.success
    assert result.error == ""


def test_runtime_error_without_stderr_gets_message():
    result = format_result(RawExecutionOutcome("", "", 3), 5, "c")
    assert result.error == "Process exited with code 3"


def test_timeout_wins_over_exit_code():
    outcome = RawExecutionOutcome("tick\n", "Execution timed out after 2 seconds.", -9, timed_out=True)
    assert classify(outcome) is FailureKind.TIMEOUT
    result = format_result(outcome, 2001, "python")
    assert not result.success
    assert result.failure is FailureKind.TIMEOUT
    assert result.output == "tick\n"
    assert "timed out" in result.error


def test_timeout_without_stderr_still_has_error_text():
    outcome = RawExecutionOutcome("", "", 0, timed_out=True)
    result = format_result(outcome, 3000, "python", used_remote=True)
    assert not result.success
    assert result.error == "Execution timed out"


def test_compile_error_falls_back_to_stdout():
    outcome = RawExecutionOutcome("Main.cs(1,1): error CS1525", "", 1)
    result = format_result(outcome, 40, "csharp", failure=FailureKind.COMPILE_ERROR)
    assert result.failure is FailureKind.COMPILE_ERROR
    assert result.error == "Main.cs(1,1): error CS1525"


def test_compile_error_without_diagnostics():
    outcome = RawExecutionOutcome("", "", 1)
    result = format_result(outcome, 40, "c", failure=FailureKind.COMPILE_ERROR)
    assert result.error == "Compilation failed"


def test_elapsed_time_is_never_negative():
    result = format_result(RawExecutionOutcome("", "", 0), -3, "python")
    assert result.execution_time_ms == 0


def test_none_output_becomes_empty_string():
    result = format_result(RawExecutionOutcome(None, None, 0), 1, "python")
    assert result.output == ""
    assert result.error == ""


def test_to_response_contract():
    result = format_result(RawExecutionOutcome("2\n", "", 0), 42, "python", used_remote=True)
    assert result.to_response() == {
        "success": True,
        "output": "2\n",
        "error": "",
        "exitCode": 0,
        "executionTime": "42ms",
        "language": "python",
        "online": True,
    }
