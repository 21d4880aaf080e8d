"""Append-only diagnostic log for external tool output.

The log is the user's troubleshooting view of a run: one ``> program args``
line per issued command plus whatever the commands print. It is written to
standard error through click and kept in memory; nothing ever parses it.
"""

from __future__ import annotations

from typing import TextIO

import click


class DiagnosticLog:
    """Text sink that echoes as it goes and keeps a transcript.

    Args:
        stream: Where to echo; ``None`` means click's standard error.
        echo: When False, only the transcript is kept.
    """

    def __init__(self, stream: TextIO | None = None, *, echo: bool = True) -> None:
        self._stream = stream
        self._echo = echo
        self._chunks: list[str] = []

    def append(self, text: str) -> None:
        """Append ``text`` exactly as received."""
        if not text:
            return
        self._chunks.append(text)
        if self._echo:
            click.echo(text, file=self._stream, nl=False, err=self._stream is None)

    def append_line(self, text: str) -> None:
        """Append ``text`` followed by a newline."""
        self.append(f"{text}\n")

    @property
    def text(self) -> str:
        """Everything appended so far."""
        return "".join(self._chunks)

    def __repr__(self) -> str:
        return f"DiagnosticLog(chunks={len(self._chunks)}, echo={self._echo})"


__all__ = ["DiagnosticLog"]
