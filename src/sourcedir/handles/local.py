"""Local filesystem capabilities."""

import asyncio
import logging
import os
from pathlib import Path
from typing import AsyncIterator, Callable, Literal, Union

logger = logging.getLogger(__name__)


def _mtime_ms(stat_result: os.stat_result) -> int:
    return stat_result.st_mtime_ns // 1_000_000


class LocalFile:
    """FileObject backed by a path on disk.

    Holds the metadata captured when it was created; contents are read
    from disk on every call to ``read_bytes``.
    """

    def __init__(self, path: Path, last_modified: int, size: int):
        self._path = path
        self._last_modified = last_modified
        self._size = size

    @classmethod
    async def stat(cls, path: Path) -> "LocalFile":
        """Capture metadata for ``path`` without reading it."""
        stat_result = await asyncio.to_thread(path.stat)
        return cls(path, _mtime_ms(stat_result), stat_result.st_size)

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def last_modified(self) -> int:
        return self._last_modified

    @property
    def size(self) -> int:
        return self._size

    async def read_bytes(self) -> bytes:
        return await asyncio.to_thread(self._path.read_bytes)

    async def text(self) -> str:
        data = await self.read_bytes()
        return data.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"LocalFile({str(self._path)!r}, last_modified={self._last_modified})"


class LocalFileEntry:
    """File capability for a path on disk."""

    kind: Literal["file"] = "file"

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def path(self) -> Path:
        return self._path

    async def get_file(self) -> LocalFile:
        return await LocalFile.stat(self._path)

    def __repr__(self) -> str:
        return f"LocalFileEntry({str(self._path)!r})"


class LegacyFileEntry:
    """File capability exposing the callback-based ``file()`` shape.

    Metadata is captured synchronously and handed to ``success``; an
    OSError goes to ``error`` when given, otherwise it is raised.
    """

    kind: Literal["file"] = "file"

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def name(self) -> str:
        return self._path.name

    def file(
        self,
        success: Callable[[LocalFile], None],
        error: Callable[[OSError], None] | None = None,
    ) -> None:
        try:
            stat_result = self._path.stat()
        except OSError as exc:
            if error is None:
                raise
            error(exc)
            return
        success(LocalFile(self._path, _mtime_ms(stat_result), stat_result.st_size))


class LocalDirectoryHandle:
    """Directory capability bound to a directory on disk.

    Lists direct children only. Symlinks are followed when deciding
    whether a child is a file or a directory.
    """

    kind: Literal["directory"] = "directory"

    def __init__(self, path: str | Path):
        self._path = Path(path).resolve()

        if not self._path.is_dir():
            raise ValueError(f"Not a directory: {path}")

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def path(self) -> Path:
        return self._path

    def _list(self) -> list[Union[LocalFileEntry, "LocalDirectoryHandle"]]:
        children: list[Union[LocalFileEntry, LocalDirectoryHandle]] = []
        with os.scandir(self._path) as it:
            for entry in it:
                try:
                    if entry.is_dir():
                        children.append(LocalDirectoryHandle(entry.path))
                    elif entry.is_file():
                        children.append(LocalFileEntry(entry.path))
                except (OSError, ValueError):
                    # Broken symlinks, sockets and entries that vanished mid-listing
                    logger.debug("Skipping unreadable entry %s", entry.path)
        return children

    async def entries(self) -> AsyncIterator[Union[LocalFileEntry, "LocalDirectoryHandle"]]:
        for child in await asyncio.to_thread(self._list):
            yield child

    def __repr__(self) -> str:
        return f"LocalDirectoryHandle({str(self._path)!r})"
