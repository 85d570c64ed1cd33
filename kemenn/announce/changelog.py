"""Release notes extraction from a Markdown changelog.

Sections are introduced by headings of the form::

    ## [1.2.3] - 2024-01-01

and end at the next line starting with ``## ``.
"""

from __future__ import annotations

import re
from enum import Enum, auto
from pathlib import Path

from kemenn.announce.errors import AnnounceError
from kemenn.core.result import Err, Ok, Result

__all__ = ["HEADING_MARKER", "extract_section", "heading_pattern"]

HEADING_MARKER = "## "


class _ScanState(Enum):
    SEARCHING = auto()
    COLLECTING = auto()


def heading_pattern(version: str) -> re.Pattern[str]:
    """Matcher for the heading of exactly one version.

    The version is escaped, so "1.2.3" does not match a "1x2x3" heading.
    """
    return re.compile(rf"^##\s+\[{re.escape(version)}\]\s+-\s+\d{{4}}-\d{{2}}-\d{{2}}$")


def extract_section(path: Path, version: str) -> Result[str, AnnounceError]:
    """Return the body of the section for ``version``, one "\\n" per line.

    A changelog without such a section yields an empty string; only
    an unreadable file is an error.
    """
    pattern = heading_pattern(version)
    state = _ScanState.SEARCHING
    lines: list[str] = []

    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw in handle:
                line = raw.removesuffix("\n")
                match state:
                    case _ScanState.SEARCHING:
                        if pattern.match(line):
                            state = _ScanState.COLLECTING
                    case _ScanState.COLLECTING:
                        if line.startswith(HEADING_MARKER):
                            break
                        lines.append(line + "\n")
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            AnnounceError(
                kind="io_error",
                message=f"failed to read changelog: {e}",
                hint=str(path),
            )
        )

    return Ok("".join(lines))
