"""Read-only filesystem interface to an S3 bucket."""
from .filesystem import BucketFS, Handle, bucket_fs
from .handles import BucketDirectory, ObjectFile
from .models import (
    BucketAttributes,
    DirectoryBatch,
    FileInfo,
    ObjectAttributes,
    ReaderObjectAttributes,
)
from .paths import ROOT, InvalidPathError, valid_path
from .profiles import ConnectionProfile, create_client
from .services import NotFoundError, S3StorageService

__all__ = [
    "ROOT",
    "BucketAttributes",
    "BucketDirectory",
    "BucketFS",
    "ConnectionProfile",
    "DirectoryBatch",
    "FileInfo",
    "Handle",
    "InvalidPathError",
    "NotFoundError",
    "ObjectAttributes",
    "ObjectFile",
    "ReaderObjectAttributes",
    "S3StorageService",
    "bucket_fs",
    "create_client",
    "valid_path",
]
