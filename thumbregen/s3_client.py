"""
S3Client - S3/MinIO storage operations used by the regeneration pipeline.
"""

import logging
import posixpath
from typing import Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from .exceptions import DeleteError, StorageError
from .s3_config import S3Config


class S3Client:
    """
    Storage backend over an S3 bucket.

    Paths are object keys ('uploads/2024/01/photo.jpg'); stream-wrapped
    paths ('s3://bucket/uploads/...') are accepted as well. Existence
    lookups are cached per key, so callers that need a fresh answer after
    a write or delete must call invalidate() first. The pipeline
    calls clear_cache() before each asset so the cache never outlives one
    asset.
    """

    supports_stream_paths = True

    def __init__(self, config: S3Config, logger: Optional[logging.Logger] = None):
        """
        Initialize S3 client.

        Args:
            config: S3 configuration
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._exists_cache: Dict[str, bool] = {}

        self._client = boto3.client(
            's3',
            endpoint_url=config.endpoint,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region,
            config=Config(
                signature_version='s3v4',
                s3={'addressing_style': 'path'}
            ),
            verify=config.verify_ssl
        )

    @property
    def client(self):
        """Return the underlying boto3 client."""
        return self._client

    @property
    def upload_root(self) -> str:
        return self.config.prefix

    @property
    def content_root(self) -> Optional[str]:
        return None

    def to_key(self, path: str) -> str:
        """Convert a path or s3:// URL into a bucket key."""
        if path.startswith('s3://'):
            path = path[len('s3://'):]
            bucket, _, key = path.partition('/')
            if bucket != self.config.bucket:
                self.logger.debug(f"Path refers to bucket {bucket}, using {self.config.bucket}")
            return key
        return path.lstrip('/')

    def is_file(self, path: str) -> bool:
        """Check if an object exists (cached until invalidated)."""
        if not path:
            return False
        key = self.to_key(path)
        if key in self._exists_cache:
            return self._exists_cache[key]

        try:
            self._client.head_object(Bucket=self.config.bucket, Key=key)
            exists = True
        except ClientError as e:
            if e.response['Error']['Code'] not in ('404', 'NoSuchKey', 'NotFound'):
                raise StorageError(f"Cannot check {key}: {e}") from e
            exists = False

        self._exists_cache[key] = exists
        return exists

    def invalidate(self, path: str) -> None:
        """Drop cached existence state for a path."""
        self._exists_cache.pop(self.to_key(path), None)

    def clear_cache(self) -> None:
        """Forget every cached existence answer."""
        self._exists_cache.clear()

    def list_directory(self, directory: str) -> List[str]:
        """
        List object names directly under a key prefix.

        Args:
            directory: Key prefix acting as a directory

        Returns:
            Basenames of the objects in that 'directory'
        """
        prefix = self.to_key(directory).rstrip('/') + '/'
        names = []

        paginator = self._client.get_paginator('list_objects_v2')
        page_iterator = paginator.paginate(
            Bucket=self.config.bucket,
            Prefix=prefix,
            Delimiter='/',
        )

        try:
            for page in page_iterator:
                for obj in page.get('Contents', []):
                    key = obj['Key']
                    names.append(posixpath.basename(key))
                    self._exists_cache[key] = True
        except ClientError as e:
            self.logger.warning(f"Cannot list {prefix}: {e}")
            return []

        return names

    def delete_file(self, path: str) -> None:
        """Delete an object. Success is not verified here."""
        key = self.to_key(path)
        try:
            self._client.delete_object(Bucket=self.config.bucket, Key=key)
        except ClientError as e:
            raise DeleteError(f"Cannot delete {key}: {e}") from e

    def read_file(self, path: str) -> bytes:
        """Download an object."""
        key = self.to_key(path)
        try:
            response = self._client.get_object(Bucket=self.config.bucket, Key=key)
        except ClientError as e:
            raise StorageError(f"Cannot read {key}: {e}") from e
        return response['Body'].read()

    def write_file(
        self,
        path: str,
        data: bytes,
        content_type: str = 'application/octet-stream'
    ) -> None:
        """Upload an object."""
        key = self.to_key(path)
        try:
            self._client.put_object(
                Bucket=self.config.bucket,
                Key=key,
                Body=data,
                ContentType=content_type
            )
        except ClientError as e:
            raise StorageError(f"Cannot write {key}: {e}") from e
        self._exists_cache[key] = True
