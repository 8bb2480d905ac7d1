"""User-visible notices."""

from typing import Callable

from rich.console import Console

Notifier = Callable[[str], None]

_console = Console(stderr=True)


def console_notice(message: str) -> None:
    """Show a notice to the user on stderr."""
    _console.print(f"[bold yellow]⚠️  {message}[/bold yellow]")
