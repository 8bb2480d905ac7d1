"""Errors raised by directory and file access."""


class SourceDirError(Exception):
    """Base class for all source directory access errors."""


class UserCancelled(SourceDirError):
    """Raised when the user dismisses a selection prompt."""

    def __init__(self, message: str = "Selection cancelled"):
        super().__init__(message)


class PermissionDenied(SourceDirError):
    """Raised when read access to a selected entry cannot be granted."""

    def __init__(self, path: str, reason: str = "read access denied"):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot access {path}: {reason}")


class WrongEntryKind(SourceDirError):
    """Raised when a directory was selected where a file was required, or vice versa."""

    def __init__(self, name: str, expected: str):
        self.name = name
        self.expected = expected
        super().__init__(f"Not a {expected}: {name}")


class NoMatchingFiles(SourceDirError):
    """Raised when a scan finds no files matching the suffix filter."""

    def __init__(self, suffix: str):
        self.suffix = suffix
        super().__init__(f"No {suffix} files found")


class ReadFailure(SourceDirError):
    """Raised when listing, metadata or content of an entry cannot be read.

    The underlying OSError is available as ``__cause__``.
    """

    def __init__(self, name: str, detail: str = ""):
        self.name = name
        message = f"Failed to read {name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
