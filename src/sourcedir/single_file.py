"""Read-through access to one user-selected file."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from .errors import ReadFailure, WrongEntryKind
from .handles.protocol import FileObject

logger = logging.getLogger(__name__)


def _from_callback(entry) -> Callable[[], Awaitable[FileObject]]:
    async def get_file() -> FileObject:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[FileObject] = loop.create_future()

        def success(file: FileObject) -> None:
            if not future.done():
                future.set_result(file)

        def error(exc: OSError) -> None:
            if not future.done():
                future.set_exception(exc)

        entry.file(success, error)
        return await future

    return get_file


class FileHandle:
    """A single file that is re-read on every ``read()``.

    Accepts either capability shape: entries with an async ``get_file()``
    and legacy entries that hand their file to a ``file(callback)``.
    Nothing is cached.
    """

    def __init__(self, entry) -> None:
        self._entry = entry
        if hasattr(entry, "get_file"):
            self._get_file = entry.get_file
        elif hasattr(entry, "file"):
            self._get_file = _from_callback(entry)
        else:
            raise WrongEntryKind(getattr(entry, "name", repr(entry)), "file")

    @property
    def name(self) -> str:
        return self._entry.name

    async def read(self) -> str:
        """Read and decode the file's current contents."""
        try:
            file = await self._get_file()
            text = await file.text()
        except OSError as exc:
            raise ReadFailure(self.name, str(exc)) from exc

        logger.debug("Read %s (%d bytes)", self.name, file.size)
        return text
