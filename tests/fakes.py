"""Hand-written stand-ins for the boto3 S3 client."""
from datetime import datetime, timezone

from botocore.exceptions import ClientError

T0 = datetime(2024, 1, 1, 12, 0, 0, 250000, tzinfo=timezone.utc)


def make_client_error(code: str, status: int, operation: str = "X") -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": "boom"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


class FakeBody:
    def __init__(self, data: bytes):
        self._data = data
        self._position = 0
        self.close_calls = 0

    def read(self, amt=None):
        if amt is None:
            amt = len(self._data) - self._position
        chunk = self._data[self._position:self._position + amt]
        self._position += len(chunk)
        return chunk

    def close(self):
        self.close_calls += 1


class FakeS3Client:
    """Serves a single bucket from memory.

    ``objects`` maps keys to content bytes. ``list_errors`` maps a
    ``list_objects_v2`` call index to the exception raised by that call.
    """

    def __init__(
        self,
        bucket_name="gcsfs",
        objects=None,
        created=T0,
        last_modified=T0,
        list_errors=None,
        error=None,
    ):
        self.bucket_name = bucket_name
        self.objects = dict(objects or {})
        self.created = created
        self.last_modified = last_modified
        self.list_errors = dict(list_errors or {})
        self.error = error
        self.calls = []
        self.bodies = []

    def head_bucket(self, **kwargs):
        self.calls.append(("head_bucket", kwargs))
        self._raise_configured_error()
        if kwargs["Bucket"] != self.bucket_name:
            raise make_client_error("404", 404, "HeadBucket")
        return {"BucketRegion": "us-east-1"}

    def list_buckets(self, **kwargs):
        self.calls.append(("list_buckets", kwargs))
        return {"Buckets": [{"Name": self.bucket_name, "CreationDate": self.created}]}

    def get_object(self, **kwargs):
        self.calls.append(("get_object", kwargs))
        self._raise_configured_error()
        if kwargs["Bucket"] != self.bucket_name:
            raise make_client_error("NoSuchBucket", 404, "GetObject")
        key = kwargs["Key"]
        if key not in self.objects:
            raise make_client_error("NoSuchKey", 404, "GetObject")
        data = self.objects[key]
        body = FakeBody(data)
        self.bodies.append(body)
        return {
            "Body": body,
            "ContentLength": len(data),
            "LastModified": self.last_modified,
            "ContentType": "application/octet-stream",
            "ETag": '"etag"',
            "Metadata": {},
        }

    def list_objects_v2(self, **kwargs):
        call_index = len([call for call in self.calls if call[0] == "list_objects_v2"])
        self.calls.append(("list_objects_v2", kwargs))
        if call_index in self.list_errors:
            raise self.list_errors[call_index]
        if kwargs["Bucket"] != self.bucket_name:
            raise make_client_error("NoSuchBucket", 404, "ListObjectsV2")
        keys = sorted(self.objects)
        start = int(kwargs.get("ContinuationToken") or 0)
        end = start + kwargs["MaxKeys"]
        response = {
            "Contents": [
                {
                    "Key": key,
                    "Size": len(self.objects[key]),
                    "LastModified": self.last_modified,
                    "ETag": '"etag"',
                    "StorageClass": "STANDARD",
                }
                for key in keys[start:end]
            ],
            "IsTruncated": end < len(keys),
            "KeyCount": len(keys[start:end]),
        }
        if end < len(keys):
            response["NextContinuationToken"] = str(end)
        return response

    def operations(self):
        return [name for name, _ in self.calls]

    def _raise_configured_error(self):
        if self.error is not None:
            raise self.error


class UnreachableClient:
    """Fails the test on any attribute access."""

    def __getattr__(self, name):
        raise AssertionError(f"backend contacted: {name}")
