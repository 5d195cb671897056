from __future__ import annotations
"""Read-only filesystem view over a single S3 bucket."""
import logging
from typing import Union

from .handles import BucketDirectory, ObjectFile
from .models import FileInfo
from .paths import ROOT, InvalidPathError, valid_path
from .services import S3StorageService

LOGGER = logging.getLogger(__name__)

Handle = Union[BucketDirectory, ObjectFile]


class BucketFS:
    """Exposes the objects of a bucket as files of a one-level directory.

    ``"."`` opens the bucket root; any other valid path is taken as an exact
    object key. No handle is cached: each :meth:`open` returns a new one.
    """

    def __init__(self, service: S3StorageService, bucket_name: str):
        if not bucket_name or not bucket_name.strip():
            raise ValueError("bucket_name must be provided")
        self._service = service
        self._bucket_name = bucket_name

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    def open(self, path: str) -> Handle:
        """Open ``path`` for reading.

        Raises:
            InvalidPathError: when ``path`` is not a valid path.
            NotFoundError: when no object is stored under ``path``.
            BotoCoreError | ClientError: for any other backend failure.
        """

        self._check_path("open", path)
        if path == ROOT:
            return BucketDirectory(self._service, self._bucket_name)
        reader = self._service.open_object(self._bucket_name, path)
        return ObjectFile(reader, path)

    def read_file(self, path: str) -> bytes:
        """Return the whole content of the object stored under ``path``."""

        self._check_path("read_file", path)
        if path == ROOT:
            raise IsADirectoryError(f"read_file {path!r}: is a directory")
        with self.open(path) as handle:
            data = handle.read()
        LOGGER.debug("Read %d bytes from '%s'", len(data), path)
        return data

    def stat(self, path: str) -> FileInfo:
        with self.open(path) as handle:
            return handle.stat()

    def listdir(self, path: str = ROOT) -> list[FileInfo]:
        """Return every entry of the directory ``path`` sorted by name.

        Only the root is a directory.
        """

        self._check_path("listdir", path)
        if path != ROOT:
            raise NotADirectoryError(f"listdir {path!r}: not a directory")
        with BucketDirectory(self._service, self._bucket_name) as directory:
            entries = list(directory)
        return sorted(entries, key=lambda info: info.name)

    def _check_path(self, op: str, path: str) -> None:
        if not valid_path(path):
            raise InvalidPathError(op, path)


def bucket_fs(client, bucket_name: str) -> BucketFS:
    """Build a :class:`BucketFS` over a boto3 S3 ``client``."""

    return BucketFS(S3StorageService(client), bucket_name)
