from __future__ import annotations
"""Translate backend attributes into :class:`FileInfo` records."""
from datetime import datetime, timezone
import stat
from typing import Optional

from .models import BucketAttributes, FileInfo, ObjectAttributes, ReaderObjectAttributes
from .paths import leaf_name

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
FILE_MODE = 0
DIR_MODE = stat.S_IFDIR


def truncate_seconds(value: Optional[datetime]) -> datetime:
    """Drop sub-second precision; missing times become the Unix epoch."""

    if value is None:
        return EPOCH
    return value.replace(microsecond=0)


def bucket_file_info(attrs: BucketAttributes) -> FileInfo:
    # Bucket size is not aggregated; the root always reports zero bytes.
    return FileInfo(
        name=attrs.name,
        size=0,
        mode=DIR_MODE,
        mod_time=truncate_seconds(attrs.created),
        is_dir=True,
        sys=attrs,
    )


def reader_file_info(attrs: ReaderObjectAttributes, name: str) -> FileInfo:
    """Describe an opened object.

    The name is the path the object was opened with, and the modification
    time comes from the stream's last-modified value only.
    """

    return FileInfo(
        name=name,
        size=attrs.size,
        mode=FILE_MODE,
        mod_time=truncate_seconds(attrs.last_modified),
        is_dir=False,
        sys=attrs,
    )


def listed_file_info(attrs: ObjectAttributes) -> FileInfo:
    """Describe an object produced by enumeration.

    The name is the leaf of the object key and the modification time is the
    later of the creation and deletion times.
    """

    mod_time = attrs.created
    if attrs.deleted is not None and (mod_time is None or attrs.deleted > mod_time):
        mod_time = attrs.deleted
    return FileInfo(
        name=leaf_name(attrs.name),
        size=attrs.size,
        mode=FILE_MODE,
        mod_time=truncate_seconds(mod_time),
        is_dir=False,
        sys=attrs,
    )
