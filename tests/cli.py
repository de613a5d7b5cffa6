"""Shared CLI testing utilities."""

from __future__ import annotations

import re
from typing import Any

from typer.testing import CliRunner as _TyperCliRunner

_ANSI_RE = re.compile(r"\x1B\[[0-9;?]*[ -/]*[@-~]")


class CliRunner(_TyperCliRunner):
    """Typer runner with a wide terminal so rich tables do not wrap names."""

    def __init__(self, **kwargs: Any) -> None:
        env = {"COLUMNS": "200", "NO_COLOR": "1", **kwargs.pop("env", {})}
        super().__init__(env=env, **kwargs)


def _decode(chunk: bytes | str | None) -> str:
    if not chunk:
        return ""
    if isinstance(chunk, bytes):
        return chunk.decode("utf-8", errors="replace")
    return chunk


def cli_text(result: Any, *, strip_ansi: bool = True) -> str:
    """Return combined CLI output (stdout + stderr) for assertions."""

    text = _decode(getattr(result, "stdout_bytes", b""))
    try:
        stderr_text = _decode(getattr(result, "stderr_bytes", b""))
    except ValueError:
        stderr_text = ""
    if stderr_text and stderr_text not in text:
        text += stderr_text
    if strip_ansi:
        text = _ANSI_RE.sub("", text)
    return text


__all__ = ["CliRunner", "cli_text"]
