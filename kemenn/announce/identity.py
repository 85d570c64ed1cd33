"""Environment-derived inputs: emitter address, signature, recipients, parameters."""

from __future__ import annotations

import os
import socket
from collections.abc import Iterable, Mapping
from pathlib import Path

from kemenn.announce.errors import AnnounceError
from kemenn.core.result import Err, Ok, Result

__all__ = [
    "SIGNATURE_FILE",
    "default_emitter",
    "parse_parameter",
    "parse_parameters",
    "read_recipients",
    "read_signature",
]

SIGNATURE_FILE = ".signature"


def _logged_user_email(environ: Mapping[str, str]) -> str | None:
    username = environ.get("USER") or environ.get("USERNAME")
    if not username:
        return None
    hostname = environ.get("HOSTNAME") or socket.gethostname()
    if not hostname:
        return None
    return f"{username}@{hostname}"


def default_emitter(environ: Mapping[str, str] | None = None) -> str | None:
    """Sender address from the environment.

    Order: "DEBFULLNAME <DEBEMAIL>" (or bare DEBEMAIL), EMAIL, then
    user@host built from USER/USERNAME and HOSTNAME.
    """
    env = os.environ if environ is None else environ

    debemail = env.get("DEBEMAIL")
    if debemail:
        fullname = env.get("DEBFULLNAME")
        return f"{fullname} <{debemail}>" if fullname else debemail

    email = env.get("EMAIL")
    if email:
        return email

    return _logged_user_email(env)


def read_signature(path: Path) -> str | None:
    """Signature text, or None if the file is absent or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def read_recipients(path: Path) -> Result[list[str], AnnounceError]:
    """One address per line; blank lines are skipped."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            AnnounceError(
                kind="io_error",
                message=f"failed to add recipients from input: {e}",
                hint=str(path),
            )
        )
    return Ok([line.strip() for line in text.splitlines() if line.strip()])


def parse_parameter(raw: str) -> tuple[str, str] | None:
    """Split "key:value" on the first colon; None if there is no colon."""
    key, sep, value = raw.partition(":")
    if not sep:
        return None
    return (key, value)


def parse_parameters(raws: Iterable[str]) -> tuple[dict[str, str], list[str]]:
    """Parse repeated -P values.

    Returns:
        (parameters, rejected) where later keys overwrite earlier ones and
        ``rejected`` lists the entries without a colon.
    """
    parameters: dict[str, str] = {}
    rejected: list[str] = []
    for raw in raws:
        parsed = parse_parameter(raw)
        if parsed is None:
            rejected.append(raw)
            continue
        key, value = parsed
        parameters[key] = value
    return parameters, rejected
