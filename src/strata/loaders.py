"""
=======
Loaders
=======

Loaders retrieve the raw bytes of a configuration document. They know
nothing about the document's format; parsing happens in
:meth:`~strata.store.ConfigStore.load_bytes`.

Two loaders are provided, chosen by :func:`loader_for_uri`:

- :class:`FileLoader` for local paths.
- :class:`S3Loader` for ``s3://<region>/<bucket>/<key>`` URIs.

"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from strata.exceptions import ConfigurationError, SourceUnavailableError

S3_URI_PREFIX = "s3://"


class Loader(Protocol):
    def load(self) -> bytes:
        ...


class FileLoader:
    """Reads a configuration document from the local file system."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> bytes:
        """Return the contents of the file.

        Raises
        ------
        SourceUnavailableError
            If the file does not exist or cannot be read.
        """
        if not self.path.exists():
            raise SourceUnavailableError(f"Configuration file {self.path} does not exist.", str(self.path))
        try:
            data = self.path.read_bytes()
        except OSError as e:
            raise SourceUnavailableError(
                f"Could not read configuration file {self.path}: {e}", str(self.path)
            ) from e
        logger.debug(f"Read {len(data)} bytes from {self.path}.")
        return data

    def __repr__(self) -> str:
        return f"FileLoader({str(self.path)!r})"


class S3Loader:
    """Reads a configuration document from an S3 object.

    Credentials are taken from the environment in the usual ``boto3``
    manner.

    Parameters
    ----------
    region
        The AWS region of the bucket.
    bucket
        The bucket name.
    key
        The object key.
    client
        An S3 client to use instead of creating one for ``region``.
    """

    def __init__(self, region: str, bucket: str, key: str, client: Any = None):
        self.region = region
        self.bucket = bucket
        self.key = key
        self._client = client if client is not None else boto3.client("s3", region_name=region)

    @classmethod
    def from_uri(cls, uri: str, client: Any = None) -> S3Loader:
        """Build a loader from an ``s3://<region>/<bucket>/<key>`` URI.

        Raises
        ------
        ConfigurationError
            If the URI does not have that shape.
        """
        if not uri.startswith(S3_URI_PREFIX):
            raise ConfigurationError(f"URI {uri} is not of the form s3://<region>/<bucket>/<key>.", uri)
        parts = uri[len(S3_URI_PREFIX) :].split("/", 2)
        if len(parts) < 3 or not all(parts):
            raise ConfigurationError(f"URI {uri} is not of the form s3://<region>/<bucket>/<key>.", uri)
        region, bucket, key = parts
        return cls(region, bucket, key, client=client)

    @property
    def uri(self) -> str:
        return f"{S3_URI_PREFIX}{self.region}/{self.bucket}/{self.key}"

    def load(self) -> bytes:
        """Return the contents of the object.

        Raises
        ------
        SourceUnavailableError
            If the bucket or object does not exist or the request fails.
        """
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=self.key)
            data = response["Body"].read()
        except ClientError as e:
            error = e.response.get("Error", {})
            if error.get("Code") in ("NoSuchKey", "NoSuchBucket", "404"):
                raise SourceUnavailableError(f"S3 configuration {self.uri} not found.", self.uri) from e
            raise SourceUnavailableError(f"Could not fetch S3 configuration {self.uri}: {e}", self.uri) from e
        except BotoCoreError as e:
            raise SourceUnavailableError(f"Could not fetch S3 configuration {self.uri}: {e}", self.uri) from e
        logger.debug(f"Read {len(data)} bytes from {self.uri}.")
        return data

    def __repr__(self) -> str:
        return f"S3Loader({self.uri!r})"


def loader_type(uri: str) -> str:
    return "s3" if uri.startswith(S3_URI_PREFIX) else "file"


def loader_for_uri(uri: str) -> Loader:
    """Return the loader appropriate for ``uri``."""
    if loader_type(uri) == "s3":
        return S3Loader.from_uri(uri)
    return FileLoader(uri)
