from __future__ import annotations

from dataclasses import dataclass

import typer

from kemenn.core.config import Config, load_config_or_default
from kemenn.core.errors import ErrorCode
from kemenn.core.result import Err
from kemenn.git.repository import GitInspector, RepositoryInspector
from kemenn.output.console import ConsoleProtocol, RichConsole
from kemenn.platform.paths import config_file


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    inspector: RepositoryInspector


def build_context(*, verbose: bool = False) -> CLIContext:
    console = RichConsole(verbose=verbose)

    path = config_file()
    config_result = load_config_or_default(path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config = config_result.value
    if path.exists():
        console.info(f"config: {path}")

    return CLIContext(
        config=config,
        console=console,
        inspector=GitInspector(),
    )
