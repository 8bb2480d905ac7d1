"""In-memory directory capability for testing."""

import asyncio
from collections import Counter
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Literal, Union


@dataclass
class _StoredFile:
    data: bytes
    last_modified: int


class InMemoryFile:
    """FileObject over an in-memory store; contents are looked up at read time."""

    def __init__(self, store: "InMemoryDirectoryHandle", name: str, last_modified: int, size: int):
        self._store = store
        self._name = name
        self._last_modified = last_modified
        self._size = size

    @property
    def name(self) -> str:
        return self._name

    @property
    def last_modified(self) -> int:
        return self._last_modified

    @property
    def size(self) -> int:
        return self._size

    async def read_bytes(self) -> bytes:
        return await self._store._read(self._name)

    async def text(self) -> str:
        data = await self.read_bytes()
        return data.decode("utf-8", errors="replace")


class InMemoryFileEntry:
    """File capability within an InMemoryDirectoryHandle."""

    kind: Literal["file"] = "file"

    def __init__(self, store: "InMemoryDirectoryHandle", name: str):
        self._store = store
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def get_file(self) -> InMemoryFile:
        return await self._store._stat(self._name)


class InMemoryLegacyEntry:
    """Callback-shaped file capability within an InMemoryDirectoryHandle.

    The FileObject is delivered on a later loop iteration, so ``file()``
    must be called from a running event loop.
    """

    kind: Literal["file"] = "file"

    def __init__(self, store: "InMemoryDirectoryHandle", name: str):
        self._store = store
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def file(
        self,
        success: Callable[[InMemoryFile], None],
        error: Callable[[OSError], None] | None = None,
    ) -> None:
        async def deliver() -> None:
            try:
                result = await self._store._stat(self._name)
            except OSError as exc:
                if error is not None:
                    error(exc)
                return
            success(result)

        task = asyncio.get_running_loop().create_task(deliver())
        self._store._pending.add(task)
        task.add_done_callback(self._store._pending.discard)


class InMemoryDirectoryHandle:
    """In-memory directory capability for testing.

    Counts every metadata fetch and content read per file name, and can
    delay or fail individual operations to simulate slow or revoked access.

    Example:
        handle = InMemoryDirectoryHandle("src", {
            "main.rs": "fn main() {}",
            "lib.rs": "// empty",
        })
        handle.set_file("main.rs", "fn main() { println!() }")
        handle.read_counts["main.rs"]
    """

    kind: Literal["directory"] = "directory"

    def __init__(self, name: str = "memory", files: dict[str, str] | None = None):
        """Initialize with optional file contents.

        Args:
            name: Directory name reported by the handle
            files: Mapping of file name to text; all start at the same timestamp
        """
        self._name = name
        self._files: dict[str, _StoredFile] = {}
        self._subdirs: dict[str, InMemoryDirectoryHandle] = {}
        self._clock = 1_700_000_000_000
        self._pending: set[asyncio.Task] = set()

        self.read_counts: Counter[str] = Counter()
        self.metadata_counts: Counter[str] = Counter()
        self.delays: dict[str, float] = {}
        self.failing_reads: set[str] = set()
        self.failing_metadata: set[str] = set()
        self.listing_fails = False

        for file_name, contents in (files or {}).items():
            self.set_file(file_name, contents, last_modified=self._clock)

    @property
    def name(self) -> str:
        return self._name

    def set_file(self, name: str, contents: str | bytes, last_modified: int | None = None) -> int:
        """Create or overwrite a file.

        Args:
            name: File name
            contents: New contents; text is stored UTF-8 encoded
            last_modified: Timestamp in epoch ms; defaults to a strictly newer tick

        Returns:
            The timestamp recorded for the file
        """
        if last_modified is None:
            self._clock += 1
            last_modified = self._clock
        data = contents.encode("utf-8") if isinstance(contents, str) else contents
        self._files[name] = _StoredFile(data=data, last_modified=last_modified)
        return last_modified

    def remove_file(self, name: str) -> None:
        self._files.pop(name, None)

    def add_directory(self, name: str, files: dict[str, str] | None = None) -> "InMemoryDirectoryHandle":
        subdir = InMemoryDirectoryHandle(name, files)
        self._subdirs[name] = subdir
        return subdir

    def file_entry(self, name: str) -> InMemoryFileEntry:
        return InMemoryFileEntry(self, name)

    def legacy_entry(self, name: str) -> InMemoryLegacyEntry:
        return InMemoryLegacyEntry(self, name)

    def reset_counts(self) -> None:
        self.read_counts.clear()
        self.metadata_counts.clear()

    async def entries(self) -> AsyncIterator[Union[InMemoryFileEntry, "InMemoryDirectoryHandle"]]:
        if self.listing_fails:
            raise PermissionError(f"Listing {self._name} is not permitted")
        for subdir in list(self._subdirs.values()):
            yield subdir
        for file_name in list(self._files):
            yield InMemoryFileEntry(self, file_name)

    async def _pause(self, name: str) -> None:
        delay = self.delays.get(name)
        if delay:
            await asyncio.sleep(delay)

    async def _stat(self, name: str) -> InMemoryFile:
        self.metadata_counts[name] += 1
        await self._pause(name)
        if name in self.failing_metadata:
            raise PermissionError(f"Access to {name} was revoked")
        stored = self._files.get(name)
        if stored is None:
            raise FileNotFoundError(name)
        return InMemoryFile(self, name, stored.last_modified, len(stored.data))

    async def _read(self, name: str) -> bytes:
        self.read_counts[name] += 1
        await self._pause(name)
        if name in self.failing_reads:
            raise PermissionError(f"Access to {name} was revoked")
        stored = self._files.get(name)
        if stored is None:
            raise FileNotFoundError(name)
        return stored.data
