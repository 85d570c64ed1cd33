from __future__ import annotations

import pytest

from kemenn.announce.semver import extract_semantic
from kemenn.core.result import Err, Ok


@pytest.mark.parametrize("version", ["1.2.3", "0.0.1", "10.20.30", "1.2.3-rc.1", "2.0.0+build.7"])
def test_unprefixed_version_is_returned_unchanged(version: str) -> None:
    assert extract_semantic(version) == Ok(version)


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("v2.0.0", "2.0.0"),
        ("v10.2.3", "10.2.3"),
        ("release-1.2.3", "1.2.3"),
        ("acme-1.4.0-beta.2", "1.4.0-beta.2"),
        ("proj-2-1.2.3", "1.2.3"),
    ],
)
def test_prefix_is_stripped(tag: str, expected: str) -> None:
    assert extract_semantic(tag) == Ok(expected)


@pytest.mark.parametrize("tag", ["", "latest", "v1.2", "1..2.3", "release-2024"])
def test_invalid_version(tag: str) -> None:
    result = extract_semantic(tag)

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_version"
    assert result.error.hint is not None
