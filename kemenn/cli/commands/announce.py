"""Announce command - render the release mail for a repository."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from kemenn import __version__
from kemenn.announce.errors import AnnounceError
from kemenn.announce.identity import (
    SIGNATURE_FILE,
    default_emitter,
    parse_parameters,
    read_recipients,
    read_signature,
)
from kemenn.announce.mail import MailContext, render_mail
from kemenn.announce.resolver import ProjectConfig, resolve_release
from kemenn.cli.commands._helpers import exit_on_error, fail
from kemenn.cli.context import CLIContext, build_context
from kemenn.platform.files import atomic_write_text
from kemenn.platform.paths import home


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def _signature(ctx: CLIContext) -> str:
    path = ctx.config.signature or home() / SIGNATURE_FILE
    text = read_signature(path)
    if text is None:
        if ctx.config.signature is not None:
            ctx.console.warning(f"signature file not readable: {path}")
        return ""
    return text


def _read_template(path: Path, ctx: CLIContext) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise fail(
            AnnounceError(kind="io_error", message=f"failed to read template: {e}", hint=str(path)),
            ctx,
        )


def _write_output(text: str, output: Path | None, ctx: CLIContext) -> None:
    if output is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    try:
        atomic_write_text(output, text)
    except OSError as e:
        raise fail(
            AnnounceError(kind="io_error", message=f"failed to write output: {e}", hint=str(output)),
            ctx,
        )
    ctx.console.info(f"wrote {output}")


def announce(
    repository: Path = typer.Argument(..., help="Repository"),
    recipients: list[str] | None = typer.Argument(None, help="Recipients"),
    emitter: str | None = typer.Option(
        None, "--from", "-f", help="Emitter email address", metavar="EMAIL"
    ),
    changelog: str | None = typer.Option(
        None, "--changelog", "-c", help="Name of changelog", metavar="NAME"
    ),
    template: Path | None = typer.Option(
        None, "--template", "-t", help="Path to mail template", metavar="PATH"
    ),
    input_file: Path | None = typer.Option(
        None, "--input", "-i", help="Path to recipients file", metavar="PATH"
    ),
    loose: bool = typer.Option(False, "--loose", "-l", help="Allow non-semantic version"),
    no_loose: bool = typer.Option(
        False, "--no-loose", help="Require a semantic version even if the config allows loose"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Path to output file", metavar="PATH"
    ),
    parameters: list[str] | None = typer.Option(
        None, "--parameter", "-P", help="Extra K:V key value pair", metavar="STRING"
    ),
    release: str | None = typer.Option(
        None, "--release", "-R", help="Release to announce", metavar="TAG"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on template tags without a value"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show resolved facts"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Announce a project release."""
    ctx = build_context(verbose=verbose)
    config = ctx.config

    sender = emitter or config.emitter or default_emitter()
    if not sender:
        raise fail(
            AnnounceError(
                kind="missing_emitter",
                message="missing emitter email",
                hint="use --from or set DEBEMAIL/EMAIL",
            ),
            ctx,
        )

    addresses = [*(recipients or []), *config.recipients]
    if input_file is not None:
        addresses.extend(exit_on_error(read_recipients(input_file), ctx))

    project = ProjectConfig(repository=repository)
    changelog_name = changelog or config.changelog
    if changelog_name:
        project.changelog = Path(changelog_name)
    if no_loose:
        project.strict = True
    else:
        project.strict = not (loose or config.loose)

    record = exit_on_error(
        resolve_release(project, release, inspector=ctx.inspector, console=ctx.console),
        ctx,
    )
    if not record.changelog:
        ctx.console.warning(
            f"no changelog section for {record.version} in {project.changelog_path}"
        )

    extra, rejected = parse_parameters(parameters or [])
    for raw in rejected:
        ctx.console.warning(f"ignoring parameter without ':': {raw}")

    data = (
        MailContext()
        .emitter(sender)
        .recipients(addresses)
        .release(record)
        .signature(_signature(ctx))
        .extra(config.parameters)
        .extra(extra)
        .build()
    )

    template_path = template or config.template
    template_text = _read_template(template_path, ctx) if template_path is not None else None

    text = exit_on_error(render_mail(data, template_text, strict=strict), ctx)
    _write_output(text, output, ctx)
