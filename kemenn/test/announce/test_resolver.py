from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from kemenn.announce.resolver import (
    ProjectConfig,
    ReleaseRecord,
    project_name_from_url,
    resolve_release,
)
from kemenn.core.result import Err, Ok, Result
from kemenn.git.repository import GitError
from kemenn.output.console import MockConsole


@dataclass
class FakeInspector:
    url: Result[str, GitError] = field(default_factory=lambda: Ok("git@example.com:org/acme.git"))
    tag: Result[str, GitError] = field(default_factory=lambda: Ok("v2.0.0"))
    queried: list[tuple[str, Path]] = field(default_factory=list[tuple[str, Path]])

    def remote_url(self, git_dir: Path) -> Result[str, GitError]:
        self.queried.append(("url", git_dir))
        return self.url

    def latest_tag(self, git_dir: Path) -> Result[str, GitError]:
        self.queried.append(("tag", git_dir))
        return self.tag


def _project(tmp_path: Path, news: str | None = None, name: str = "NEWS.md") -> ProjectConfig:
    if news is not None:
        (tmp_path / name).write_text(news, encoding="utf-8")
    return ProjectConfig(repository=tmp_path)


# =============================================================================
# project_name_from_url
# =============================================================================


@pytest.mark.parametrize(
    "url",
    [
        "git@example.com:org/myproj.git",
        "https://example.com/org/myproj",
        "https://example.com/org/myproj.git/",
        "ssh://git@example.com:2222/org/myproj.git",
        "git@example.com:myproj.git",
        "/srv/git/myproj.git",
        "file:///srv/git/myproj",
    ],
)
def test_project_name_from_url(url: str) -> None:
    assert project_name_from_url(url) == Ok("myproj")


def test_project_name_only_strips_trailing_git() -> None:
    assert project_name_from_url("https://example.com/org/my.github.io") == Ok("my.github.io")


@pytest.mark.parametrize("url", ["", "https://example.com", "https://example.com/", "host:/", "x/.git"])
def test_project_name_missing(url: str) -> None:
    result = project_name_from_url(url)

    assert isinstance(result, Err)
    assert result.error.kind == "missing_project_name"


# =============================================================================
# resolve_release
# =============================================================================


class TestResolveRelease:
    def test_latest_tag(self, tmp_path: Path) -> None:
        project = _project(tmp_path, "## [2.0.0] - 2024-03-01\nFixed bug X\n")
        inspector = FakeInspector()

        result = resolve_release(project, inspector=inspector)

        assert result == Ok(
            ReleaseRecord(
                project="acme",
                url="git@example.com:org/acme.git",
                version="v2.0.0",
                changelog="Fixed bug X\n",
            )
        )
        assert inspector.queried == [("url", tmp_path / ".git"), ("tag", tmp_path / ".git")]

    def test_explicit_version_skips_tag_lookup(self, tmp_path: Path) -> None:
        project = _project(tmp_path, "## [1.5.0] - 2024-03-01\nOld news\n")
        inspector = FakeInspector(tag=Err(GitError("describe --abbrev=0", "no tags")))

        result = resolve_release(project, "v1.5.0", inspector=inspector)

        assert isinstance(result, Ok)
        assert result.value.version == "v1.5.0"
        assert result.value.changelog == "Old news\n"
        assert [q for q, _ in inspector.queried] == ["url"]

    def test_custom_changelog_name(self, tmp_path: Path) -> None:
        project = _project(tmp_path, "## [2.0.0] - 2024-03-01\nfrom CHANGELOG\n", "CHANGELOG.md")
        project.changelog = Path("CHANGELOG.md")

        result = resolve_release(project, inspector=FakeInspector())

        assert isinstance(result, Ok)
        assert result.value.changelog == "from CHANGELOG\n"

    def test_missing_section_is_not_an_error(self, tmp_path: Path) -> None:
        project = _project(tmp_path, "## [1.0.0] - 2020-01-01\nold\n")

        result = resolve_release(project, inspector=FakeInspector())

        assert isinstance(result, Ok)
        assert result.value.changelog == ""

    def test_strict_rejects_non_semantic_tag(self, tmp_path: Path) -> None:
        project = _project(tmp_path, "## [nightly] - 2024-01-01\nbuild\n")

        result = resolve_release(project, inspector=FakeInspector(tag=Ok("nightly")))

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_version"
        assert result.error.message.startswith("failed to get release info: ")

    def test_loose_uses_tag_verbatim(self, tmp_path: Path) -> None:
        project = _project(tmp_path, "## [nightly] - 2024-01-01\nbuild\n## [v2.0.0] - 2024-01-01\nv\n")
        project.strict = False

        result = resolve_release(project, inspector=FakeInspector(tag=Ok("nightly")))

        assert isinstance(result, Ok)
        assert result.value.version == "nightly"
        assert result.value.changelog == "build\n"

    def test_loose_does_not_strip_prefix(self, tmp_path: Path) -> None:
        project = _project(tmp_path, "## [2.0.0] - 2024-01-01\nstripped\n## [v2.0.0] - 2024-01-01\nraw\n")
        project.strict = False

        result = resolve_release(project, inspector=FakeInspector())

        assert isinstance(result, Ok)
        assert result.value.changelog == "raw\n"

    def test_missing_tag_is_command_error(self, tmp_path: Path) -> None:
        project = _project(tmp_path, "")
        inspector = FakeInspector(
            tag=Err(GitError("describe --abbrev=0", "fatal: No names found", returncode=128))
        )

        result = resolve_release(project, inspector=inspector)

        assert isinstance(result, Err)
        assert result.error.kind == "command_failed"
        assert result.error.message == (
            "failed to get release info: git describe --abbrev=0 failed: fatal: No names found"
        )

    def test_missing_remote_stops_before_tag_lookup(self, tmp_path: Path) -> None:
        inspector = FakeInspector(url=Err(GitError("config --get", "git config failed")))

        result = resolve_release(_project(tmp_path, ""), inspector=inspector)

        assert isinstance(result, Err)
        assert result.error.kind == "command_failed"
        assert [q for q, _ in inspector.queried] == ["url"]

    def test_unusable_url(self, tmp_path: Path) -> None:
        inspector = FakeInspector(url=Ok("https://example.com/"))

        result = resolve_release(_project(tmp_path, ""), inspector=inspector)

        assert isinstance(result, Err)
        assert result.error.kind == "missing_project_name"

    def test_missing_changelog_file(self, tmp_path: Path) -> None:
        result = resolve_release(_project(tmp_path), inspector=FakeInspector())

        assert isinstance(result, Err)
        assert result.error.kind == "io_error"
        assert result.error.message.startswith("failed to get release info: failed to read changelog")

    def test_reports_facts_to_console(self, tmp_path: Path) -> None:
        console = MockConsole()

        resolve_release(
            _project(tmp_path, "## [2.0.0] - 2024-03-01\nx\n"),
            inspector=FakeInspector(),
            console=console,
        )

        assert console.find("remote: git@example.com:org/acme.git")
        assert console.find("version: v2.0.0 (changelog lookup: 2.0.0)")
