"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from kemenn.announce.errors import AnnounceError
from kemenn.core.result import Err, Result
from kemenn.output.console import Style

if TYPE_CHECKING:
    from kemenn.cli.context import CLIContext


T = TypeVar("T")


def fail(error: AnnounceError, ctx: CLIContext) -> typer.Exit:
    """Report ``error`` and build the Exit carrying its code (caller raises it)."""
    ctx.console.error(error.message)
    if error.hint:
        ctx.console.print(f"hint: {error.hint}", Style.DIM)
    return typer.Exit(code=int(error.exit_code))


def exit_on_error[T](result: Result[T, AnnounceError], ctx: CLIContext) -> T:
    """Return the value of an Ok result, or report the error and exit.

    This replaces the common pattern:
        match result:
            case Err(e):
                ctx.console.error(e.message)
                raise typer.Exit(code=int(e.exit_code))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        raise fail(result.error, ctx)
    return result.value
