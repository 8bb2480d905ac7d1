"""Protocol definitions for directory and file capabilities."""

from typing import AsyncIterator, Callable, Literal, Protocol, Union, runtime_checkable


@runtime_checkable
class FileObject(Protocol):
    """Metadata of a file captured at one point in time.

    Creating a FileObject never reads the file's contents. Contents are
    fetched on demand with ``read_bytes`` or ``text``.
    """

    @property
    def name(self) -> str:
        """File name without directory components."""
        ...

    @property
    def last_modified(self) -> int:
        """Modification time in epoch milliseconds."""
        ...

    @property
    def size(self) -> int:
        """Size in bytes at the time the metadata was captured."""
        ...

    async def read_bytes(self) -> bytes:
        """Read the full contents of the file.

        Raises:
            OSError: If the file is gone or can no longer be read
        """
        ...

    async def text(self) -> str:
        """Read the full contents decoded as UTF-8.

        Undecodable bytes are replaced rather than raising.
        """
        ...


@runtime_checkable
class FileEntry(Protocol):
    """Capability for a single file (the current shape).

    Implementations must handle:
    - Capturing metadata without reading contents
    - Raising OSError when the file vanished or access was revoked
    """

    kind: Literal["file"]

    @property
    def name(self) -> str:
        ...

    async def get_file(self) -> FileObject:
        """Fetch fresh metadata for the file.

        Returns:
            FileObject describing the file as it is on disk now

        Raises:
            OSError: If the file cannot be stat'ed
        """
        ...


@runtime_checkable
class LegacyEntry(Protocol):
    """Capability for a single file that hands its FileObject to a callback."""

    kind: Literal["file"]

    @property
    def name(self) -> str:
        ...

    def file(
        self,
        success: Callable[[FileObject], None],
        error: Callable[[OSError], None] | None = None,
    ) -> None:
        """Deliver a FileObject to ``success``, or an OSError to ``error``."""
        ...


@runtime_checkable
class DirectoryHandle(Protocol):
    """Capability for a user-approved directory.

    Only direct children are visible; nested directories appear as
    DirectoryHandle entries that callers may skip.
    """

    kind: Literal["directory"]

    @property
    def name(self) -> str:
        ...

    def entries(self) -> AsyncIterator[Union[FileEntry, "DirectoryHandle"]]:
        """Iterate over the direct children of the directory.

        Order is whatever the underlying listing yields.

        Raises:
            OSError: If the directory cannot be listed
        """
        ...
