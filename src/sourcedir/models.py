"""Core data models for cached source files."""

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """Cached contents of one file, valid for the recorded modification time."""

    model_config = ConfigDict(frozen=True)

    name: str
    last_modified: int  # epoch milliseconds
    contents: str


class SourceFile(BaseModel):
    """One file in a scan snapshot."""

    model_config = ConfigDict(frozen=True)

    name: str
    last_modified: int  # epoch milliseconds
    contents: str

    @classmethod
    def from_entry(cls, entry: CacheEntry) -> "SourceFile":
        return cls(name=entry.name, last_modified=entry.last_modified, contents=entry.contents)
