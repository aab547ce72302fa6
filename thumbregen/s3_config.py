"""
S3Config - Configuration for S3/MinIO storage.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


def _env_bool(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'y', 't')


@dataclass
class S3Config:
    """
    S3 connection settings.
    
    Attributes:
        endpoint: S3 endpoint URL
        bucket: Bucket name
        prefix: Upload prefix within the bucket (acts as the upload root)
        access_key: Access key ID
        secret_key: Secret access key
        region: Region name
        verify_ssl: Verify TLS certificates
    """
    endpoint: Optional[str] = None
    bucket: Optional[str] = None
    prefix: str = 'uploads'
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    region: str = 'us-east-1'
    verify_ssl: bool = True
    
    @classmethod
    def from_env(cls) -> 'S3Config':
        """Build configuration from S3_* environment variables."""
        return cls(
            endpoint=os.environ.get('S3_ENDPOINT'),
            bucket=os.environ.get('S3_BUCKET'),
            prefix=os.environ.get('S3_PREFIX', 'uploads'),
            access_key=os.environ.get('S3_ACCESS_KEY'),
            secret_key=os.environ.get('S3_SECRET_KEY'),
            region=os.environ.get('S3_REGION', 'us-east-1'),
            verify_ssl=_env_bool(os.environ.get('S3_VERIFY_SSL')),
        )
    
    def validate(self) -> List[str]:
        """Return a list of configuration errors (empty if valid)."""
        errors = []
        if not self.endpoint:
            errors.append("S3_ENDPOINT is required")
        if not self.bucket:
            errors.append("S3_BUCKET is required")
        if not self.access_key:
            errors.append("S3_ACCESS_KEY is required")
        if not self.secret_key:
            errors.append("S3_SECRET_KEY is required")
        return errors
