"""Release announcement pipeline.

- semver: semantic version extraction from tags
- changelog: release section extraction from NEWS.md-style files
- resolver: repository state -> ReleaseRecord
- mail: template context and rendering
- identity: emitter, signature, recipients and extra parameters
"""

from __future__ import annotations

from kemenn.announce.changelog import extract_section
from kemenn.announce.errors import AnnounceError
from kemenn.announce.mail import DEFAULT_TEMPLATE, MailContext, render_mail
from kemenn.announce.resolver import (
    ProjectConfig,
    ReleaseRecord,
    project_name_from_url,
    resolve_release,
)
from kemenn.announce.semver import extract_semantic

__all__ = [
    "AnnounceError",
    "DEFAULT_TEMPLATE",
    "MailContext",
    "ProjectConfig",
    "ReleaseRecord",
    "extract_section",
    "extract_semantic",
    "project_name_from_url",
    "render_mail",
    "resolve_release",
]
