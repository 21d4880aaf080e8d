"""Asynchronous execution of external commands with live output streaming.

Purpose
-------
Run one :class:`CommandSpec` at a time in the workspace directory, forwarding
its output to the :class:`DiagnosticLog` as it arrives and returning the exit
status together with the captured streams.

Contents
--------
* :class:`ProcessRunner` - the process boundary used by the orchestrator
* :data:`START_FAILURE_EXIT_CODE` - status reported when a program cannot start

System Role
-----------
The only module that spawns processes. Commands run without a shell and
inherit the current environment unchanged.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, cast

from .models import CommandResult

if TYPE_CHECKING:
    from .commands import CommandSpec
    from .diagnostics import DiagnosticLog

logger = logging.getLogger(__name__)

START_FAILURE_EXIT_CODE = 1
_READ_SIZE = 4096


class CommandRunner(Protocol):
    """Anything that can run a command the way :class:`ProcessRunner` does."""

    async def run(
        self,
        command: CommandSpec,
        cwd: Path | str,
        *,
        echo_stdout: bool = True,
        echo_stderr: bool = True,
    ) -> CommandResult: ...


@dataclass
class ProcessRunner:
    """Runs commands and streams their output into a diagnostic log.

    Attributes:
        log: Sink for the command echo line and streamed output.
        encoding: Encoding used to decode both output streams.
    """

    log: DiagnosticLog
    encoding: str = "utf-8"

    async def run(
        self,
        command: CommandSpec,
        cwd: Path | str,
        *,
        echo_stdout: bool = True,
        echo_stderr: bool = True,
    ) -> CommandResult:
        """Run ``command`` in ``cwd`` and wait for it to exit.

        Both streams are read concurrently and decoded incrementally, so
        output reaches the log chunk by chunk instead of after exit.

        Args:
            command: Program and arguments.
            cwd: Working directory.
            echo_stdout: Forward standard output to the log.
            echo_stderr: Forward standard error to the log.

        Returns:
            Exit status and captured output. A program that cannot be started
            yields exit status 1 and a ``Command failed to start`` log line.
        """
        self.log.append_line(f"> {command.display}")
        logger.info("Running %s in %s", command.display, cwd)

        try:
            process = await asyncio.create_subprocess_exec(
                command.program,
                *command.args,
                cwd=str(cwd),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            self.log.append_line(f"Command failed to start: {exc}")
            logger.debug("Failed to start %s", command.program, exc_info=True)
            return CommandResult(exit_code=START_FAILURE_EXIT_CODE)

        stdout, stderr = await asyncio.gather(
            self._pump(cast(asyncio.StreamReader, process.stdout), echo=echo_stdout),
            self._pump(cast(asyncio.StreamReader, process.stderr), echo=echo_stderr),
        )
        exit_code = await process.wait()
        logger.debug("%s exited with %d", command.display, exit_code)
        return CommandResult(exit_code=exit_code, stdout=stdout, stderr=stderr)

    async def _pump(self, stream: asyncio.StreamReader, *, echo: bool) -> str:
        """Read ``stream`` to EOF, optionally echoing each decoded chunk."""
        decoder = codecs.getincrementaldecoder(self.encoding)(errors="replace")
        parts: list[str] = []
        while True:
            data = await stream.read(_READ_SIZE)
            text = decoder.decode(data, final=not data)
            if text:
                parts.append(text)
                if echo:
                    self.log.append(text)
            if not data:
                break
        return "".join(parts)


__all__ = [
    "CommandRunner",
    "ProcessRunner",
    "START_FAILURE_EXIT_CODE",
]
