"""Announcement mail rendering.

``MailContext`` accumulates template fields (later insertions of a key
win, which is how ``-P key:value`` overrides work); ``render_mail`` feeds
them to a mustache template with escaping disabled.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pystache
from pystache.common import PystacheError
from pystache.parser import ParsingError, parse

from kemenn.announce.errors import AnnounceError
from kemenn.announce.resolver import ReleaseRecord
from kemenn.core.result import Err, Ok, Result

__all__ = [
    "ANNOUNCE_PREFIX",
    "DEFAULT_TEMPLATE",
    "MailContext",
    "format_release_text",
    "render_mail",
]

ANNOUNCE_PREFIX = "ANNOUNCE"

DEFAULT_TEMPLATE = """\
From: {{emitter}}
To: {{recipients}}
Subject: [{{prefix}}] {{project}} {{version}} is available
bcc: {{emitter}}

Hi!

Version {{version}} of {{project}} is available in its repository [1].

[1] {{url}}

{{text}}

Regards,

{{signature}}
"""


def format_release_text(changelog: str) -> str:
    """Wrap the changelog section in the "What's new?" fenced block."""
    return f"What's new?\n\n```\n{changelog}```"


class MailContext:
    """Ordered template fields, built step by step.

    Usage:
        data = (
            MailContext()
            .emitter("a@x.com")
            .recipients(["b@x.com"])
            .release(record)
            .extra({"signature": "Bob"})
            .build()
        )
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {"prefix": ANNOUNCE_PREFIX}

    def emitter(self, emitter: str) -> MailContext:
        self._data["emitter"] = emitter
        return self

    def recipients(self, recipients: Iterable[str]) -> MailContext:
        self._data["recipients"] = ", ".join(recipients)
        return self

    def release(self, record: ReleaseRecord) -> MailContext:
        self._data["project"] = record.project
        self._data["url"] = record.url
        self._data["version"] = record.version
        self._data["text"] = format_release_text(record.changelog)
        return self

    def signature(self, text: str) -> MailContext:
        self._data["signature"] = text
        return self

    def extra(self, data: Mapping[str, str]) -> MailContext:
        self._data.update(data)
        return self

    def build(self) -> dict[str, str]:
        return dict(self._data)


def render_mail(
    data: Mapping[str, str],
    template: str | None = None,
    *,
    strict: bool = False,
) -> Result[str, AnnounceError]:
    """Render ``template`` (or the default one) with ``data``.

    Values are inserted verbatim. With ``strict`` a tag that has no
    value in ``data`` is an error; otherwise it renders empty. A section
    that is opened but never closed is always an error.
    """
    source = DEFAULT_TEMPLATE if template is None else template
    renderer = pystache.Renderer(
        escape=lambda s: s,
        missing_tags="strict" if strict else "ignore",
    )
    try:
        parse(source, raise_on_mismatch=True)
        text = renderer.render(source, dict(data))
    except (ParsingError, PystacheError) as e:
        return Err(
            AnnounceError(
                kind="template_error",
                message=f"failed to render template: {e}",
            )
        )
    return Ok(text)
