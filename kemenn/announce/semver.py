from __future__ import annotations

import re

from kemenn.announce.errors import AnnounceError
from kemenn.core.result import Err, Ok, Result

# Optional non-numeric prefix ("v", "release-", "proj-2-") followed by
# MAJOR.MINOR.PATCH and any suffix ("-rc.1", "+build").
_SEMANTIC_RE = re.compile(r"(?P<prefix>[^.\d][^.]*?)?(?P<version>\d+\.\d+\.\d+.*)")


def extract_semantic(raw: str) -> Result[str, AnnounceError]:
    """Extract the MAJOR.MINOR.PATCH[...] part of a tag.

    A tag that already starts with the version is returned unchanged;
    a prefixed tag yields the version body only.
    """
    m = _SEMANTIC_RE.search(raw)
    if m is None:
        return Err(
            AnnounceError(
                kind="invalid_version",
                message=f"invalid version: {raw!r}",
                hint="expected MAJOR.MINOR.PATCH, use --loose for other tag schemes",
            )
        )

    prefix, version = m.group("prefix", "version")
    if prefix is None and m.start() == 0:
        return Ok(raw)
    return Ok(version)
