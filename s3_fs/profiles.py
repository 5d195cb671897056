from __future__ import annotations
"""Connection profiles and S3 client construction."""
from dataclasses import dataclass
import logging
from typing import Callable, Optional

import boto3
from botocore.client import Config
import keyring
from keyring.errors import KeyringError

LOGGER = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 60.0
DEFAULT_READ_TIMEOUT = 60.0


@dataclass
class ConnectionProfile:
    """Describes how to reach an S3-compatible endpoint.

    The timeouts apply to every request made with the resulting client,
    listing included.
    """

    name: str
    endpoint_url: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: str = ""
    region_name: Optional[str] = None
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT


class KeychainStore:
    """Encapsulates OS keychain access for secrets."""

    def __init__(self, service_name: str = "pys3fs"):
        self._service_name = service_name

    def get_secret(self, profile_name: str) -> str:
        if not profile_name:
            return ""
        try:
            return keyring.get_password(self._service_name, profile_name) or ""
        except KeyringError:
            return ""


def resolve_secret(profile: ConnectionProfile, keychain: KeychainStore | None = None) -> str:
    """Return the profile's secret, falling back to the keychain."""

    if profile.secret_key:
        return profile.secret_key
    keychain = keychain or KeychainStore()
    return keychain.get_secret(profile.name)


def create_client(
    profile: ConnectionProfile,
    *,
    client_factory: Callable[..., object] | None = None,
    keychain: KeychainStore | None = None,
):
    """Create the boto3 S3 client described by ``profile``.

    Credentials left empty are resolved by boto3's default chain.
    """

    factory = client_factory or boto3.client
    config = Config(
        signature_version="s3v4",
        connect_timeout=_positive(profile.connect_timeout, DEFAULT_CONNECT_TIMEOUT),
        read_timeout=_positive(profile.read_timeout, DEFAULT_READ_TIMEOUT),
    )
    kwargs: dict[str, object] = {"config": config}
    if profile.endpoint_url:
        kwargs["endpoint_url"] = profile.endpoint_url
    if profile.region_name:
        kwargs["region_name"] = profile.region_name
    if profile.access_key:
        kwargs["aws_access_key_id"] = profile.access_key
        kwargs["aws_secret_access_key"] = resolve_secret(profile, keychain)
    LOGGER.debug("Creating S3 client for profile '%s'", profile.name)
    return factory("s3", **kwargs)


def _positive(value, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number <= 0:
        return default
    return number
