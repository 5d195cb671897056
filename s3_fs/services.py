from __future__ import annotations
"""Thin wrappers around the boto3 S3 client used by the filesystem."""
from collections import deque
import logging
from typing import Any

from botocore.exceptions import ClientError

from .models import BucketAttributes, ObjectAttributes, ReaderObjectAttributes

LOGGER = logging.getLogger(__name__)

# S3 returns at most this many keys per ListObjectsV2 call.
DEFAULT_PAGE_SIZE = 1000
NOT_FOUND_CODES = {"NoSuchKey", "NoSuchBucket", "NotFound", "404"}


class NotFoundError(FileNotFoundError):
    """Raised when the backend reports a missing bucket or object.

    The originating :class:`ClientError` is kept as ``__cause__`` and its
    response on :attr:`response`.
    """

    def __init__(self, message: str, response: dict[str, Any] | None = None):
        super().__init__(message)
        self.response = response or {}


def is_not_found(exc: ClientError) -> bool:
    error = exc.response.get("Error") or {}
    status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return error.get("Code") in NOT_FOUND_CODES or status == 404


def _reraise_not_found(exc: ClientError, target: str) -> None:
    if is_not_found(exc):
        raise NotFoundError(f"{target}: not found", exc.response) from exc


class ObjectReader:
    """Byte stream of a single object together with its attributes."""

    def __init__(self, body, attrs: ReaderObjectAttributes):
        self._body = body
        self.attrs = attrs
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            return self._body.read()
        return self._body.read(size)

    def readinto(self, buffer) -> int:
        view = memoryview(buffer).cast("B")
        if not len(view):
            return 0
        data = self._body.read(len(view))
        view[: len(data)] = data
        return len(data)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._body.close()


class ObjectIterator:
    """Pull iterator over the objects of a bucket.

    Pages are fetched lazily with ``list_objects_v2``. A failed page leaves
    the continuation token untouched, so the next call retries that page.
    """

    def __init__(self, client, bucket_name: str, page_size: int | None = None):
        self._client = client
        self._bucket_name = bucket_name
        self._page_size = page_size
        self._buffer: deque[ObjectAttributes] = deque()
        self._continuation_token: str | None = None
        self._exhausted = False

    @property
    def page_size(self) -> int:
        if self._page_size and self._page_size > 0:
            return self._page_size
        return DEFAULT_PAGE_SIZE

    def __iter__(self) -> ObjectIterator:
        return self

    def __next__(self) -> ObjectAttributes:
        while not self._buffer:
            if self._exhausted:
                raise StopIteration
            self._fetch_page()
        return self._buffer.popleft()

    def _fetch_page(self) -> None:
        params: dict[str, Any] = {"Bucket": self._bucket_name, "MaxKeys": self.page_size}
        if self._continuation_token:
            params["ContinuationToken"] = self._continuation_token
        LOGGER.debug(
            "Listing objects in bucket '%s' (token=%s)",
            self._bucket_name,
            self._continuation_token,
        )
        try:
            response = self._client.list_objects_v2(**params)
        except ClientError as exc:
            _reraise_not_found(exc, self._bucket_name)
            raise
        self._buffer.extend(_object_attributes(entry) for entry in response.get("Contents", []))
        next_token = response.get("NextContinuationToken")
        if response.get("IsTruncated") and next_token:
            self._continuation_token = next_token
        else:
            self._exhausted = True


class S3StorageService:
    """Backend operations needed by :class:`~s3_fs.filesystem.BucketFS`.

    The wrapped client is shared by every handle opened through the service.
    """

    def __init__(self, client):
        self._client = client

    def bucket_attributes(self, bucket_name: str) -> BucketAttributes:
        """Fetch attributes for ``bucket_name``.

        The creation date comes from ``list_buckets`` narrowed to the bucket
        name, which still requires the ``s3:ListAllMyBuckets`` permission.

        Raises:
            NotFoundError: when the bucket does not exist.
            BotoCoreError | ClientError: for any other backend failure.
        """

        LOGGER.debug("Fetching attributes for bucket '%s'", bucket_name)
        try:
            head = self._client.head_bucket(Bucket=bucket_name)
        except ClientError as exc:
            _reraise_not_found(exc, bucket_name)
            raise
        region = head.get("BucketRegion")
        if not region:
            headers = head.get("ResponseMetadata", {}).get("HTTPHeaders", {})
            region = headers.get("x-amz-bucket-region")

        created = None
        buckets_response = self._client.list_buckets(Prefix=bucket_name)
        for bucket in buckets_response.get("Buckets", []):
            if bucket.get("Name") == bucket_name:
                created = bucket.get("CreationDate")
                break
        return BucketAttributes(name=bucket_name, created=created, region=region)

    def open_object(self, bucket_name: str, key: str) -> ObjectReader:
        """Open a stream over ``key`` in ``bucket_name``.

        Raises:
            NotFoundError: when the bucket or object does not exist.
            BotoCoreError | ClientError: for any other backend failure.
        """

        LOGGER.debug("Opening object '%s' in bucket '%s'", key, bucket_name)
        try:
            response = self._client.get_object(Bucket=bucket_name, Key=key)
        except ClientError as exc:
            _reraise_not_found(exc, key)
            raise
        attrs = ReaderObjectAttributes(
            size=response.get("ContentLength") or 0,
            last_modified=response.get("LastModified"),
            content_type=response.get("ContentType"),
            etag=response.get("ETag"),
            metadata=dict(response.get("Metadata") or {}),
        )
        return ObjectReader(response["Body"], attrs)

    def list_objects(self, bucket_name: str, page_size: int | None = None) -> ObjectIterator:
        """Return a lazy iterator over every object in ``bucket_name``."""

        return ObjectIterator(self._client, bucket_name, page_size=page_size)


def _object_attributes(entry: dict[str, Any]) -> ObjectAttributes:
    return ObjectAttributes(
        name=entry["Key"],
        size=entry.get("Size") or 0,
        created=entry.get("LastModified"),
        etag=entry.get("ETag"),
        storage_class=entry.get("StorageClass"),
    )
