"""sourcedir - Keep the source files of a user-granted directory loaded and fresh."""

__version__ = "0.1.0"

from .config import Config
from .errors import (
    SourceDirError,
    UserCancelled,
    PermissionDenied,
    WrongEntryKind,
    NoMatchingFiles,
    ReadFailure,
)
from .models import CacheEntry, SourceFile
from .enumerator import list_matching
from .session import DirectorySession
from .single_file import FileHandle
from .picker import PathPicker, PromptPicker, open_directory, open_file

__all__ = [
    "Config",
    "SourceDirError",
    "UserCancelled",
    "PermissionDenied",
    "WrongEntryKind",
    "NoMatchingFiles",
    "ReadFailure",
    "CacheEntry",
    "SourceFile",
    "list_matching",
    "DirectorySession",
    "FileHandle",
    "PathPicker",
    "PromptPicker",
    "open_directory",
    "open_file",
]
