"""
RegenContext - Collaborators shared by one regeneration run.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from .catalog import Catalog
from .hooks import RegenHooks
from .local_client import LocalClient
from .s3_client import S3Client
from .thumbnail_generator import ThumbnailGenerator

# Type alias for storage clients
StorageClient = Union[S3Client, LocalClient]


@dataclass
class RegenContext:
    """
    Built once per run and handed to the pipeline components.
    
    Attributes:
        storage: Storage client for originals and derivatives
        catalog: Asset and metadata persistence
        generator: Derivative generation capability
        hooks: Extension points
        upload_root: Root for relative attachment paths (defaults to the storage's)
        content_root: Fallback content directory (defaults to the storage's)
        logger: Logger shared by the components
    """
    storage: StorageClient
    catalog: Catalog
    generator: ThumbnailGenerator
    hooks: RegenHooks = field(default_factory=RegenHooks)
    upload_root: Optional[str] = None
    content_root: Optional[str] = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger('thumbregen'))
    
    def __post_init__(self):
        if self.upload_root is None:
            self.upload_root = getattr(self.storage, 'upload_root', '') or ''
        if self.content_root is None:
            self.content_root = getattr(self.storage, 'content_root', None)
