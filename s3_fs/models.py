from __future__ import annotations
"""Data models describing buckets, objects and file metadata."""
from dataclasses import dataclass, field
from datetime import datetime
import stat
from typing import Optional, Union


@dataclass(frozen=True)
class BucketAttributes:
    """Bucket-level attributes reported by the backend."""

    name: str
    created: Optional[datetime] = None
    region: Optional[str] = None


@dataclass(frozen=True)
class ReaderObjectAttributes:
    """Attributes attached to an object stream when it was opened."""

    size: int = 0
    last_modified: Optional[datetime] = None
    content_type: Optional[str] = None
    etag: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ObjectAttributes:
    """Attributes of a single object as returned by enumeration."""

    name: str
    size: int = 0
    created: Optional[datetime] = None
    deleted: Optional[datetime] = None
    etag: Optional[str] = None
    storage_class: Optional[str] = None


BackendAttributes = Union[BucketAttributes, ReaderObjectAttributes, ObjectAttributes]


@dataclass(frozen=True)
class FileInfo:
    """Describes a file or directory of the bucket filesystem.

    ``sys`` exposes the backend attributes the record was built from and is
    left out of equality and hashing.
    """

    name: str
    size: int
    mode: int
    mod_time: datetime
    is_dir: bool
    sys: BackendAttributes = field(compare=False)

    @property
    def type(self) -> int:
        """The type bits of :attr:`mode`."""

        return stat.S_IFMT(self.mode)

    def info(self) -> FileInfo:
        return self


@dataclass
class DirectoryBatch:
    """One batch of directory entries.

    ``at_end`` is set once the listing is exhausted; a batch flagged this
    way carries no entries and no later batch will either.
    """

    entries: list[FileInfo] = field(default_factory=list)
    at_end: bool = False
