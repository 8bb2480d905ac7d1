"""Main CLI entry point for sourcedir."""

import asyncio
import json
import logging
import sys
from datetime import datetime
from typing import Awaitable, Callable, Optional

import click
from rich.console import Console
from rich.table import Table

from .config import Config
from .errors import SourceDirError, UserCancelled
from .models import SourceFile
from .picker import PathPicker, Picker, PromptPicker, open_directory, open_file
from .session import DirectorySession


@click.group()
def cli():
    """sourcedir - Keep the source files of a directory loaded and fresh."""
    pass


def _choose(path: Optional[str], ask: Callable[[], str]) -> Picker:
    """Picker for ``path``, prompting for it first when it was not given.

    Runs before the event loop starts so Ctrl-C at the prompt cancels it.
    """
    return PathPicker(path if path else ask())


def _load_config(suffix: Optional[str]) -> Config:
    config = Config.from_env()
    if suffix:
        config = Config(**{**config.model_dump(), "source_suffix": suffix})
    return config


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _run(command: Callable[[], Awaitable[int]]) -> int:
    """Run a command coroutine and map errors to exit codes."""
    try:
        return asyncio.run(command())
    except UserCancelled:
        return 0
    except SourceDirError as e:
        click.echo(f"Error: {e}", err=True)
        return 1


@cli.command()
@click.argument("directory", required=False, type=click.Path())
@click.option("--suffix", help="File name suffix to load (default: SOURCE_SUFFIX or .rs)")
@click.option("--json", "as_json", is_flag=True, help="Print snapshots as JSON")
@click.option("--repeat", "-n", type=click.IntRange(min=1), default=1, help="Number of scans to run")
@click.option("--interval", type=float, help="Seconds to wait between scans")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def scan(
    directory: Optional[str],
    suffix: Optional[str],
    as_json: bool,
    repeat: int,
    interval: Optional[float],
    debug: bool,
):
    """Load the source files of a directory.

    Repeated scans share one session, so only files modified since the
    previous scan are read again.

    Examples:
        # Scan once
        sourcedir scan ./ai

        # Ask for the directory, then scan three times a second apart
        sourcedir scan -n 3 --interval 1
    """
    _configure_logging(debug)
    config = _load_config(suffix)
    wait = config.scan_interval if interval is None else interval

    prompt = PromptPicker(start_dir=config.start_dir)

    sys.exit(_run(lambda: _scan(_choose(directory, prompt.ask_directory), config, repeat, wait, as_json)))


async def _scan(picker: Picker, config: Config, repeat: int, interval: float, as_json: bool) -> int:
    session = await open_directory(picker, suffix=config.source_suffix)
    console = Console()

    for i in range(repeat):
        if i:
            await asyncio.sleep(interval)
        files = await session.scan()
        if as_json:
            click.echo(json.dumps([f.model_dump() for f in files]))
        else:
            console.print(_snapshot_table(session, files, i + 1))

    return 0


def _snapshot_table(session: DirectorySession, files: list[SourceFile], number: int) -> Table:
    reloaded = set(session.last_reloaded)
    table = Table(title=f"Scan {number}: {session.handle.name}")
    table.add_column("File")
    table.add_column("Modified")
    table.add_column("Chars", justify="right")
    table.add_column("State")

    for f in files:
        modified = datetime.fromtimestamp(f.last_modified / 1000).isoformat(sep=" ", timespec="seconds")
        state = "[green]reloaded[/green]" if f.name in reloaded else "[dim]cached[/dim]"
        table.add_row(f.name, modified, str(len(f.contents)), state)

    return table


@cli.command()
@click.argument("file", required=False, type=click.Path())
@click.option("--suffix", help="Expected file name suffix (default: SOURCE_SUFFIX or .rs)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def read(file: Optional[str], suffix: Optional[str], debug: bool):
    """Print the current contents of one source file.

    Examples:
        sourcedir read ai/main.rs
    """
    _configure_logging(debug)
    config = _load_config(suffix)

    prompt = PromptPicker(start_dir=config.start_dir)

    sys.exit(_run(lambda: _read(_choose(file, lambda: prompt.ask_file(config.source_suffix)), config)))


async def _read(picker: Picker, config: Config) -> int:
    handle = await open_file(picker, suffix=config.source_suffix)
    click.echo(await handle.read(), nl=False)
    return 0


if __name__ == "__main__":
    cli()
