"""Directory and file capabilities.

This module provides pluggable capabilities for reading source files:
- Local filesystem access (default)
- In-memory capabilities for testing, with read-count instrumentation
"""

from .protocol import DirectoryHandle, FileEntry, FileObject, LegacyEntry
from .local import LocalDirectoryHandle, LocalFile, LocalFileEntry, LegacyFileEntry
from .memory import InMemoryDirectoryHandle, InMemoryFile, InMemoryFileEntry, InMemoryLegacyEntry

__all__ = [
    "DirectoryHandle",
    "FileEntry",
    "FileObject",
    "LegacyEntry",
    "LocalDirectoryHandle",
    "LocalFile",
    "LocalFileEntry",
    "LegacyFileEntry",
    "InMemoryDirectoryHandle",
    "InMemoryFile",
    "InMemoryFileEntry",
    "InMemoryLegacyEntry",
]
