"""Process runner stories: real child processes, streamed into the log.

The runner is exercised with the current Python interpreter as the external
program so the tests do not need the dotnet SDK.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

from nuget_upgrade.commands import CommandSpec
from nuget_upgrade.diagnostics import DiagnosticLog
from nuget_upgrade.models import CommandResult
from nuget_upgrade.process import START_FAILURE_EXIT_CODE, ProcessRunner


def _python(code: str) -> CommandSpec:
    return CommandSpec(sys.executable, ("-c", code))


def _run(command: CommandSpec, cwd: Path, **echo: bool) -> tuple[CommandResult, DiagnosticLog]:
    log = DiagnosticLog(echo=False)
    result = asyncio.run(ProcessRunner(log).run(command, cwd, **echo))
    return result, log


# ════════════════════════════════════════════════════════════════════════════
# ProcessRunner.run
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_run_captures_both_streams_and_exit_code(tmp_path: Path) -> None:
    command = _python("import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)")

    result, _ = _run(command, tmp_path)

    assert result.exit_code == 3
    assert result.ok is False
    assert result.stdout.strip() == "out"
    assert result.stderr.strip() == "err"


@pytest.mark.os_agnostic
def test_run_echoes_command_line_and_output_to_the_log(tmp_path: Path) -> None:
    command = _python("import sys; print('hello'); print('warning', file=sys.stderr)")

    result, log = _run(command, tmp_path)

    assert result.ok is True
    assert log.text.startswith(f"> {command.display}\n")
    assert "hello" in log.text
    assert "warning" in log.text


@pytest.mark.os_agnostic
def test_run_without_echo_keeps_output_out_of_the_log(tmp_path: Path) -> None:
    command = _python("import sys; print('{\"projects\": []}'); print('diag', file=sys.stderr)")

    result, log = _run(command, tmp_path, echo_stdout=False, echo_stderr=False)

    assert result.stdout.strip() == '{"projects": []}'
    assert result.stderr.strip() == "diag"
    assert log.text == f"> {command.display}\n"


@pytest.mark.os_agnostic
def test_run_uses_the_working_directory(tmp_path: Path) -> None:
    command = _python("import os; print(os.getcwd())")

    result, _ = _run(command, tmp_path)

    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


@pytest.mark.os_agnostic
def test_run_decodes_multibyte_characters_split_across_writes(tmp_path: Path) -> None:
    code = (
        "import sys\n"
        "out = sys.stdout.buffer\n"
        "out.write(b'caf\\xc3'); out.flush()\n"
        "out.write(b'\\xa9\\n'); out.flush()\n"
    )

    result, log = _run(_python(code), tmp_path)

    assert result.stdout.strip() == "café"
    assert "�" not in log.text


@pytest.mark.os_agnostic
def test_run_reports_start_failure_as_exit_code_one(tmp_path: Path) -> None:
    command = CommandSpec(str(tmp_path / "missing-program"), ("--version",))

    result, log = _run(command, tmp_path)

    assert result.exit_code == START_FAILURE_EXIT_CODE == 1
    assert result.stdout == ""
    assert "Command failed to start:" in log.text


# ════════════════════════════════════════════════════════════════════════════
# DiagnosticLog
# ════════════════════════════════════════════════════════════════════════════


@pytest.mark.os_agnostic
def test_diagnostic_log_keeps_a_transcript(capsys: pytest.CaptureFixture[str]) -> None:
    log = DiagnosticLog()

    log.append("partial ")
    log.append_line("line")

    assert log.text == "partial line\n"
    assert capsys.readouterr().err == "partial line\n"


@pytest.mark.os_agnostic
def test_diagnostic_log_without_echo_writes_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    log = DiagnosticLog(echo=False)

    log.append_line("quiet")

    assert log.text == "quiet\n"
    assert capsys.readouterr().err == ""


@pytest.mark.os_agnostic
def test_command_display_joins_program_and_arguments() -> None:
    command = CommandSpec("dotnet", ("list", "package", "--outdated"))

    assert command.display == "dotnet list package --outdated"
