from __future__ import annotations
"""Path grammar shared by the bucket filesystem."""

ROOT = "."


class InvalidPathError(ValueError):
    """Raised when a caller-supplied path is not a valid filesystem path."""

    def __init__(self, op: str, path: str):
        super().__init__(f"{op} {path!r}: invalid path")
        self.op = op
        self.path = path


def valid_path(name: str) -> bool:
    """Return True when ``name`` is an acceptable path.

    Accepted paths are slash separated, unrooted and contain no empty,
    ``.`` or ``..`` elements. The lone ``.`` names the root.
    """

    if not isinstance(name, str):
        return False
    if name == ROOT:
        return True
    if not name:
        return False
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    for element in name.split("/"):
        if element in ("", ".", ".."):
            return False
    return True


def leaf_name(key: str) -> str:
    """Return the last path element of an object key."""

    trimmed = key.rstrip("/")
    if not trimmed:
        return key
    return trimmed.rsplit("/", 1)[-1]
