"""Read-only queries against external programs.

``query`` runs a command to completion and hands back its trimmed
standard output. Anything else (a spawn failure, a non-zero exit, or a
command that printed nothing) comes back as a ``ProcessError`` whose
``message`` is the program's own diagnostic text.

Calls block until the program exits; there is no timeout.

Usage:
    match query(["git", "--git-dir", ".git", "describe", "--tags"], cwd=repo):
        case Ok(tag):
            print(tag)
        case Err(error):
            print(f"{error.command[0]}: {error.message}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from kemenn.core.result import Err, Ok, Result

__all__ = ["ProcessError", "query"]

NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A query that produced no usable answer.

    Attributes:
        command: Program and arguments as executed.
        returncode: Exit status, NOT_STARTED if the program never ran,
            0 if it succeeded but printed nothing.
        message: Diagnostic text: stderr, else stdout, else a description.
    """

    command: tuple[str, ...]
    returncode: int
    message: str

    @property
    def started(self) -> bool:
        return self.returncode != NOT_STARTED


def _diagnostic(proc: subprocess.CompletedProcess[str]) -> str:
    for stream in (proc.stderr, proc.stdout):
        text = stream.strip() if stream else ""
        if text:
            return text
    return f"{proc.args[0]} exited with status {proc.returncode}"


def query(cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stripped standard output."""
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command, NOT_STARTED, f"cannot run {cmd[0]}: {e}"))

    if proc.returncode != 0:
        return Err(ProcessError(command, proc.returncode, _diagnostic(proc)))

    answer = proc.stdout.strip()
    if not answer:
        return Err(ProcessError(command, 0, f"{cmd[0]} printed nothing"))
    return Ok(answer)
