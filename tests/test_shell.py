"""Unit tests for the subprocess runner."""

from __future__ import annotations

import sys

import pytest

from cosmwasm_xtask.command import CommandSpec
from cosmwasm_xtask.errors import ExecutionFailedError
from cosmwasm_xtask.shell import CompletedCommand, SubprocessRunner


def python(code: str, stdin=None) -> CommandSpec:
    return CommandSpec(sys.executable, ("-c", code), stdin=stdin)


class TestSubprocessRunner:
    def test_captures_output(self) -> None:
        result = SubprocessRunner()(python("import sys; print('out'); print('err', file=sys.stderr)"))
        assert result.ok
        assert result.stdout == "out\n"
        assert result.stderr == "err\n"

    def test_nonzero_exit_is_returned(self) -> None:
        result = SubprocessRunner()(python("import sys; sys.exit(3)"))
        assert result.returncode == 3
        assert not result.ok

    def test_stdin(self) -> None:
        result = SubprocessRunner()(python("import sys; print(sys.stdin.read().upper(), end='')", stdin="abc\n"))
        assert result.stdout == "ABC\n"

    def test_extra_env(self) -> None:
        runner = SubprocessRunner(env={"XTASK_TEST_VALUE": "42"})
        result = runner(python("import os; print(os.environ['XTASK_TEST_VALUE'])"))
        assert result.stdout.strip() == "42"

    def test_missing_binary(self) -> None:
        result = SubprocessRunner()(CommandSpec("definitely-not-a-chain-binaryd", ("version",)))
        assert result.returncode == 127


class TestCompletedCommand:
    def test_check_passes(self) -> None:
        completed = CompletedCommand(("wasmd",), 0, "{}", "")
        assert completed.check() is completed

    def test_check_raises_with_stderr(self) -> None:
        completed = CompletedCommand(("wasmd", "tx"), 2, "", "Error: unknown flag\n")
        with pytest.raises(ExecutionFailedError) as excinfo:
            completed.check()
        assert excinfo.value.stderr == "Error: unknown flag\n"
        assert excinfo.value.argv == ("wasmd", "tx")
        assert "unknown flag" in str(excinfo.value)

    def test_empty_stderr_message(self) -> None:
        with pytest.raises(ExecutionFailedError, match="exit status 2"):
            CompletedCommand(("wasmd",), 2, "", "").check()
