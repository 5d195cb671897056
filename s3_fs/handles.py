from __future__ import annotations
"""Open handles returned by :meth:`BucketFS.open`."""
import logging

from .fileinfo import bucket_file_info, listed_file_info, reader_file_info
from .models import DirectoryBatch, FileInfo
from .services import ObjectIterator, ObjectReader, S3StorageService

LOGGER = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _closed_error() -> ValueError:
    return ValueError("I/O operation on closed file")


class ObjectFile:
    """Sequential, read-only view of a single object."""

    def __init__(self, reader: ObjectReader, name: str):
        self._reader = reader
        self._name = name
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes; ``b""`` signals end of stream."""

        self._check_open()
        return self._reader.read(size)

    def readinto(self, buffer) -> int:
        self._check_open()
        return self._reader.readinto(buffer)

    def stat(self) -> FileInfo:
        self._check_open()
        return reader_file_info(self._reader.attrs, self._name)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._reader.close()

    def __iter__(self):
        while True:
            chunk = self.read(CHUNK_SIZE)
            if not chunk:
                return
            yield chunk

    def __enter__(self) -> ObjectFile:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<ObjectFile name={self._name!r} closed={self._closed}>"

    def _check_open(self) -> None:
        if self._closed:
            raise _closed_error()


class BucketDirectory:
    """The bucket root, listed as a flat directory of objects.

    Every object of the bucket is an entry of this directory, named by the
    last element of its key.
    """

    def __init__(self, service: S3StorageService, bucket_name: str):
        self._service = service
        self._bucket_name = bucket_name
        self._cursor: ObjectIterator | None = None

    @property
    def name(self) -> str:
        return self._bucket_name

    @property
    def closed(self) -> bool:
        return False

    def stat(self) -> FileInfo:
        return bucket_file_info(self._service.bucket_attributes(self._bucket_name))

    def read_dir(self, n: int = 0) -> DirectoryBatch:
        """Return the next batch of entries.

        At most ``n`` entries are returned when ``n > 0``; otherwise the batch
        is bounded by the backend page size. An empty batch is flagged
        ``at_end`` and the listing is finished. Backend errors discard the
        entries gathered so far.
        """

        cursor = self._get_cursor()
        limit = n if n > 0 else cursor.page_size
        entries: list[FileInfo] = []
        for attrs in cursor:
            entries.append(listed_file_info(attrs))
            if len(entries) >= limit:
                break
        LOGGER.debug("Read %d entries from bucket '%s'", len(entries), self._bucket_name)
        return DirectoryBatch(entries=entries, at_end=not entries)

    def read(self, size: int = -1) -> bytes:
        # A directory has no byte content; use stat().is_dir to tell it apart.
        return b""

    def readinto(self, buffer) -> int:
        return 0

    def close(self) -> None:
        return None

    def __iter__(self):
        while True:
            batch = self.read_dir()
            if batch.at_end:
                return
            yield from batch.entries

    def __enter__(self) -> BucketDirectory:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<BucketDirectory bucket={self._bucket_name!r}>"

    def _get_cursor(self) -> ObjectIterator:
        if self._cursor is None:
            self._cursor = self._service.list_objects(self._bucket_name)
        return self._cursor
