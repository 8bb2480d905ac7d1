"""User selection of directories and files.

A Picker stands between the user and the filesystem: it asks which
directory or file to use and grants a read-only capability for it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

import click

from .errors import PermissionDenied, UserCancelled, WrongEntryKind
from .handles.local import LocalDirectoryHandle, LocalFileEntry
from .handles.protocol import DirectoryHandle, FileEntry
from .notices import Notifier
from .session import DEFAULT_SUFFIX, DirectorySession
from .single_file import FileHandle

logger = logging.getLogger(__name__)

Selection = Union[DirectoryHandle, FileEntry]


@runtime_checkable
class Picker(Protocol):
    """Protocol for selection sources.

    Implementations raise UserCancelled when the user backs out and
    PermissionDenied when read access cannot be granted.
    """

    async def request_directory(self) -> Selection:
        """Ask for a directory."""
        ...

    async def request_file(self, suffix: str) -> Selection:
        """Ask for a file whose name ends with ``suffix``."""
        ...


def grant(path: str | Path) -> Union[LocalDirectoryHandle, LocalFileEntry]:
    """Grant a read-only capability for ``path``.

    Args:
        path: Directory or file chosen by the user

    Returns:
        LocalDirectoryHandle for directories, LocalFileEntry for regular files

    Raises:
        PermissionDenied: If the path is missing or not readable
        WrongEntryKind: If the path is neither a directory nor a regular file
    """
    resolved = Path(path).expanduser()

    if not resolved.exists():
        raise PermissionDenied(str(path), "does not exist")

    if resolved.is_dir():
        # Listing needs both read and search permission
        if not os.access(resolved, os.R_OK | os.X_OK):
            raise PermissionDenied(str(path))
        return LocalDirectoryHandle(resolved)

    if not resolved.is_file():
        # FIFOs, sockets and devices would block or never end on read
        raise WrongEntryKind(str(path), "file")
    if not os.access(resolved, os.R_OK):
        raise PermissionDenied(str(path))
    return LocalFileEntry(resolved)


class PathPicker:
    """Picker for a path the user already chose, e.g. on the command line.

    The suffix filter is not enforced for explicitly named files.
    """

    def __init__(self, path: str | Path):
        self._path = path

    async def request_directory(self) -> Selection:
        return grant(self._path)

    async def request_file(self, suffix: str) -> Selection:
        selection = grant(self._path)
        if selection.kind == "file" and not selection.name.endswith(suffix):
            logger.warning("%s does not end with %s", selection.name, suffix)
        return selection


class PromptPicker:
    """Interactive picker that asks for a path on the terminal.

    An empty answer, Ctrl-C or end of input cancels the selection. Must be
    driven by a user at an attached terminal.

    The prompt blocks the calling thread. Under ``asyncio.run`` Ctrl-C only
    cancels the main task, so callers that need Ctrl-C to cancel should use
    ``ask_directory``/``ask_file`` before starting the event loop.
    """

    def __init__(self, start_dir: Optional[Path] = None):
        self._start_dir = start_dir

    def _prompt(self, text: str, suffix: str | None = None) -> str:
        def check(value: str) -> str:
            value = value.strip()
            if value and suffix and Path(value).expanduser().is_file() and not value.endswith(suffix):
                raise click.BadParameter(f"only {suffix} files can be opened")
            return value

        default = str(self._start_dir) if self._start_dir else ""
        try:
            value = click.prompt(
                text,
                default=default,
                show_default=bool(default),
                value_proc=check,
                err=True,
            )
        except click.Abort as exc:
            raise UserCancelled() from exc

        if not value:
            raise UserCancelled()
        return value

    def ask_directory(self) -> str:
        """Prompt for a directory path; raises UserCancelled."""
        return self._prompt("Source directory")

    def ask_file(self, suffix: str) -> str:
        """Prompt for a file path ending with ``suffix``; raises UserCancelled."""
        return self._prompt(f"Source file ({suffix})", suffix)

    async def request_directory(self) -> Selection:
        return grant(self.ask_directory())

    async def request_file(self, suffix: str) -> Selection:
        return grant(self.ask_file(suffix))


async def open_directory(
    picker: Picker,
    suffix: str = DEFAULT_SUFFIX,
    notify: Notifier | None = None,
) -> DirectorySession:
    """Ask the user for a directory and start a session on it.

    Raises:
        UserCancelled: If the user backs out
        PermissionDenied: If the directory cannot be read
        WrongEntryKind: If a file was selected
    """
    selection = await picker.request_directory()
    if selection.kind != "directory":
        raise WrongEntryKind(selection.name, "directory")

    logger.info("Opened directory %s", selection.name)
    return DirectorySession(selection, suffix=suffix, notify=notify)


async def open_file(picker: Picker, suffix: str = DEFAULT_SUFFIX) -> FileHandle:
    """Ask the user for a single file.

    Raises:
        UserCancelled: If the user backs out
        PermissionDenied: If the file cannot be read
        WrongEntryKind: If a directory was selected
    """
    selection = await picker.request_file(suffix)
    if selection.kind != "file":
        raise WrongEntryKind(selection.name, "file")

    return FileHandle(selection)
