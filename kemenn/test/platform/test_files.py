from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from kemenn.platform.files import atomic_write_text
from kemenn.platform.paths import config_file, home, user_config_dir


def test_atomic_write_creates_parents(tmp_path: Path) -> None:
    path = tmp_path / "out" / "mail.txt"
    atomic_write_text(path, "Subject: hi\n")
    assert path.read_text(encoding="utf-8") == "Subject: hi\n"
    assert [p.name for p in path.parent.iterdir()] == ["mail.txt"]


def test_atomic_write_replaces_and_keeps_mode(tmp_path: Path) -> None:
    path = tmp_path / "mail.txt"
    path.write_text("old", encoding="utf-8")
    os.chmod(path, 0o640)

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"
    if os.name == "posix":
        assert stat.S_IMODE(path.stat().st_mode) == 0o640


def test_home_prefers_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert home() == tmp_path


def test_user_config_dir_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert user_config_dir() == tmp_path / "kemenn"


def test_user_config_dir_default(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert user_config_dir() == tmp_path / ".config" / "kemenn"


def test_config_file_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("KEMENN_CONFIG", str(tmp_path / "custom.toml"))
    assert config_file() == tmp_path / "custom.toml"


def test_config_file_default(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("KEMENN_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config_file() == tmp_path / "kemenn" / "config.toml"
