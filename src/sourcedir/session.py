"""Directory session with an incrementally refreshed file cache."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Awaitable, Iterable, TypeVar

from .enumerator import list_matching
from .errors import NoMatchingFiles, ReadFailure
from .models import CacheEntry, SourceFile
from .notices import Notifier, console_notice

if TYPE_CHECKING:
    from .handles.protocol import DirectoryHandle, FileEntry, FileObject

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".rs"

T = TypeVar("T")


async def _gather_or_cancel(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Await all of ``aws`` in order; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class DirectorySession:
    """Repeatedly loads the source files of one directory, re-reading only what changed.

    The session owns a cache mapping file name to CacheEntry. Each scan
    fetches fresh metadata for every matching file and re-reads a file only
    when it is new or its modification time differs from the cached one.

    Usage:
        session = DirectorySession(LocalDirectoryHandle("ai"), suffix=".rs")
        files = await session.scan()   # reads every file
        files = await session.scan()   # metadata only, unless something changed
    """

    def __init__(
        self,
        handle: DirectoryHandle,
        suffix: str = DEFAULT_SUFFIX,
        notify: Notifier | None = None,
    ) -> None:
        self._handle = handle
        self._suffix = suffix
        self._notify = notify or console_notice
        self.file_cache: dict[str, CacheEntry] = {}
        self.last_reloaded: list[str] = []

    @property
    def handle(self) -> DirectoryHandle:
        return self._handle

    @property
    def suffix(self) -> str:
        return self._suffix

    def cached_names(self) -> list[str]:
        return list(self.file_cache)

    async def scan(self, suffix: str | None = None) -> list[SourceFile]:
        """Load all matching files, reusing cached contents for unchanged ones.

        Args:
            suffix: Override the session's suffix filter for this call

        Returns:
            Snapshot of the matching files in listing order

        Raises:
            NoMatchingFiles: If no file matches; a notice is shown as well
            ReadFailure: If any listing, metadata or content fetch fails.
                Cache entries written before the failure are kept; fetches
                still in flight are cancelled and write nothing.
        """
        suffix = suffix or self._suffix
        entries = await list_matching(self._handle, suffix)

        if not entries:
            self._notify(f"No {suffix} source files found in this directory")
            raise NoMatchingFiles(suffix)

        files = await _gather_or_cancel(self._fetch_metadata(entry) for entry in entries)

        reloaded: list[bool] = [False] * len(files)
        snapshot = await _gather_or_cancel(
            self._refresh(file, index, reloaded) for index, file in enumerate(files)
        )

        self.last_reloaded = [file.name for file, fresh in zip(files, reloaded) if fresh]
        logger.info(
            "Scanned %s: %d files, %d reloaded",
            self._handle.name,
            len(snapshot),
            len(self.last_reloaded),
        )
        return snapshot

    async def _fetch_metadata(self, entry: FileEntry) -> FileObject:
        try:
            return await entry.get_file()
        except OSError as exc:
            raise ReadFailure(entry.name, str(exc)) from exc

    async def _refresh(self, file: FileObject, index: int, reloaded: list[bool]) -> SourceFile:
        cached = self.file_cache.get(file.name)

        if cached is not None and cached.last_modified == file.last_modified:
            logger.debug("Reusing cached %s", file.name)
            return SourceFile.from_entry(cached)

        try:
            data = await file.read_bytes()
        except OSError as exc:
            raise ReadFailure(file.name, str(exc)) from exc

        entry = CacheEntry(
            name=file.name,
            last_modified=file.last_modified,
            contents=data.decode("utf-8", errors="replace"),
        )
        self.file_cache[file.name] = entry
        reloaded[index] = True
        logger.debug("Reloaded %s (modified %d)", file.name, file.last_modified)
        return SourceFile.from_entry(entry)
