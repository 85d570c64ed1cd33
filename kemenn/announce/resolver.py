"""Release resolution: repository state -> ReleaseRecord.

Steps, in order, stopping at the first failure:

1. origin URL from the repository, project name derived from it
2. version: the explicit one, else the latest tag
3. semantic version for the changelog lookup (skipped in loose mode)
4. changelog section for that version
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from kemenn.announce.changelog import extract_section
from kemenn.announce.errors import AnnounceError
from kemenn.announce.semver import extract_semantic
from kemenn.core.result import Err, Ok, Result
from kemenn.git.repository import GitError, GitInspector, RepositoryInspector
from kemenn.output.console import ConsoleProtocol

__all__ = [
    "DEFAULT_CHANGELOG",
    "ProjectConfig",
    "ReleaseRecord",
    "project_name_from_url",
    "resolve_release",
]

DEFAULT_CHANGELOG = "NEWS.md"
RESOLVE_CONTEXT = "failed to get release info"


@dataclass(frozen=True, slots=True)
class ReleaseRecord:
    """Facts about one release, ready to be rendered."""

    project: str
    url: str
    version: str
    changelog: str


@dataclass(slots=True)
class ProjectConfig:
    """Where to look and how strict to be; adjusted by the caller before resolving."""

    repository: Path
    changelog: Path = Path(DEFAULT_CHANGELOG)
    strict: bool = True

    @property
    def git_dir(self) -> Path:
        return self.repository / ".git"

    @property
    def changelog_path(self) -> Path:
        return self.repository / self.changelog


def _url_path(url: str) -> str:
    if "://" in url:
        return urlsplit(url).path
    # scp-like syntax: [user@]host:path
    head, sep, tail = url.partition(":")
    if sep and "/" not in head:
        return tail
    return url


def project_name_from_url(url: str) -> Result[str, AnnounceError]:
    """Last path segment of a remote URL, without a trailing ".git"."""
    segments = [s for s in _url_path(url).split("/") if s]
    name = segments[-1].removesuffix(".git") if segments else ""
    if not name:
        return Err(
            AnnounceError(
                kind="missing_project_name",
                message=f"failed to extract project name from URL {url!r}",
            )
        )
    return Ok(name)


def _git_failure(error: GitError) -> AnnounceError:
    return AnnounceError(
        kind="command_failed",
        message=f"git {error.command} failed: {error.message}",
    )


def _resolve(
    config: ProjectConfig,
    explicit_version: str | None,
    inspector: RepositoryInspector,
    console: ConsoleProtocol | None,
) -> Result[ReleaseRecord, AnnounceError]:
    url_result = inspector.remote_url(config.git_dir)
    if isinstance(url_result, Err):
        return Err(_git_failure(url_result.error))
    url = url_result.value

    project_result = project_name_from_url(url)
    if isinstance(project_result, Err):
        return project_result
    project = project_result.value

    if explicit_version is not None:
        version = explicit_version
    else:
        tag_result = inspector.latest_tag(config.git_dir)
        if isinstance(tag_result, Err):
            return Err(_git_failure(tag_result.error))
        version = tag_result.value

    semantic = version
    if config.strict:
        semantic_result = extract_semantic(version)
        if isinstance(semantic_result, Err):
            return semantic_result
        semantic = semantic_result.value

    changelog_result = extract_section(config.changelog_path, semantic)
    if isinstance(changelog_result, Err):
        return changelog_result
    changelog = changelog_result.value

    if console is not None:
        console.info(f"remote: {url}")
        console.info(f"version: {version} (changelog lookup: {semantic})")
        console.info(f"changelog: {config.changelog_path}")

    return Ok(ReleaseRecord(project=project, url=url, version=version, changelog=changelog))


def resolve_release(
    config: ProjectConfig,
    explicit_version: str | None = None,
    *,
    inspector: RepositoryInspector | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[ReleaseRecord, AnnounceError]:
    """Resolve the release record for ``config``.

    Args:
        config: Repository location, changelog name and versioning policy.
        explicit_version: Version to announce instead of the latest tag.
        inspector: Version-control backend (git by default).
        console: Receives ``info`` lines about the resolved facts.

    Returns:
        Ok(ReleaseRecord), or Err(AnnounceError) prefixed with
        "failed to get release info".
    """
    result = _resolve(config, explicit_version, inspector or GitInspector(), console)
    return result.map_err(lambda e: e.with_context(RESOLVE_CONTEXT))
