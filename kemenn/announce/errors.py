"""Error type for the announce pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from kemenn.core.errors import ErrorCode

type AnnounceErrorKind = Literal[
    "invalid_version",
    "command_failed",
    "io_error",
    "missing_project_name",
    "template_error",
    "missing_emitter",
]


@dataclass(frozen=True, slots=True)
class AnnounceError:
    """Canonical announce error payload.

    ``kind`` identifies the failure class and drives the exit code;
    ``message`` accumulates context as the error travels up the pipeline.
    """

    kind: AnnounceErrorKind
    message: str
    hint: str | None = None

    def with_context(self, context: str) -> AnnounceError:
        """Return a copy whose message is prefixed with ``context``."""
        return replace(self, message=f"{context}: {self.message}")

    @property
    def exit_code(self) -> ErrorCode:
        match self.kind:
            case "command_failed":
                return ErrorCode.ENV_ERROR
            case "io_error":
                return ErrorCode.IO_ERROR
            case _:
                return ErrorCode.USER_ERROR
