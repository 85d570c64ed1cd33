"""Git repository inspection.

The announce pipeline needs exactly two facts from version control: the
URL of the ``origin`` remote and the most recent tag. They are exposed
through the narrow ``RepositoryInspector`` protocol so the pipeline can
run against a fake in tests; ``GitInspector`` is the real implementation
that shells out to ``git``.

Usage:
    inspector = GitInspector()
    match inspector.remote_url(Path("/path/to/repo/.git")):
        case Ok(url):
            print(f"Remote: {url}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from kemenn.core.result import Result
from kemenn.platform.process import query

__all__ = [
    "GitError",
    "GitInspector",
    "RepositoryInspector",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git query.

    Attributes:
        command: The git subcommand that failed
        message: Diagnostic output of git (or a fallback description)
        returncode: Process return code (-1 if git could not be started, 0 if it printed nothing)
    """

    command: str
    message: str
    returncode: int = 1


class RepositoryInspector(Protocol):
    """Read-only queries against a repository metadata directory."""

    def remote_url(self, git_dir: Path) -> Result[str, GitError]:
        """URL of the ``origin`` remote."""
        ...

    def latest_tag(self, git_dir: Path) -> Result[str, GitError]:
        """Name of the most recent tag reachable from HEAD."""
        ...


class GitInspector:
    """RepositoryInspector backed by the ``git`` executable.

    Every call spawns git again; nothing is cached.
    """

    def remote_url(self, git_dir: Path) -> Result[str, GitError]:
        """Runs `git config --get remote.origin.url`."""
        return self._query(git_dir, ["config", "--get", "remote.origin.url"])

    def latest_tag(self, git_dir: Path) -> Result[str, GitError]:
        """Runs `git describe --abbrev=0 --tags` (tag name without distance suffix)."""
        return self._query(git_dir, ["describe", "--abbrev=0", "--tags"])

    def _query(self, git_dir: Path, args: list[str]) -> Result[str, GitError]:
        cwd = git_dir.parent if git_dir.parent.is_dir() else Path.cwd()
        result = query(["git", "--git-dir", str(git_dir), *args], cwd=cwd)
        return result.map_err(
            lambda e: GitError(command=" ".join(args[:2]), message=e.message, returncode=e.returncode)
        )
