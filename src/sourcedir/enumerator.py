"""Listing of source files in a directory capability."""

import logging

from .errors import ReadFailure
from .handles.protocol import DirectoryHandle, FileEntry

logger = logging.getLogger(__name__)


async def list_matching(handle: DirectoryHandle, suffix: str) -> list[FileEntry]:
    """List direct child files of ``handle`` whose name ends with ``suffix``.

    Subdirectories and non-matching names are skipped. The result keeps the
    order of the underlying listing, which is not sorted and may differ
    between calls.

    Args:
        handle: Directory capability to list
        suffix: Name suffix to match, e.g. ".rs"

    Returns:
        Matching file entries

    Raises:
        ReadFailure: If the directory itself cannot be listed
    """
    matches: list[FileEntry] = []
    try:
        async for entry in handle.entries():
            if entry.kind == "file" and entry.name.endswith(suffix):
                matches.append(entry)
    except OSError as exc:
        raise ReadFailure(handle.name, str(exc)) from exc

    logger.debug("Found %d %s files in %s", len(matches), suffix, handle.name)
    return matches
