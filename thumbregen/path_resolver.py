"""
PathResolver - Maps an asset to the path of its working file.
"""

import logging
import os
import re
from typing import Optional

from .asset import Asset
from .hooks import RegenHooks

STREAM_SCHEMES = ('s3', 'gs')
WINDOWS_DRIVE = re.compile(r'^[A-Za-z]:\\')


def is_stream_wrapped(path: str) -> bool:
    """True for s3:// and gs:// style paths."""
    if '://' not in path:
        return False
    return path.split('://', 1)[0].startswith(STREAM_SCHEMES)


def is_absolute(path: str) -> bool:
    return path.startswith('/') or WINDOWS_DRIVE.match(path) is not None


class PathResolver:
    """
    Resolves the working file of an asset.

    Fallback order:
        1. attached file, passed through the filter_attached_file hook
        2. attached file as recorded
        3. metadata 'file' as given
        4. metadata 'file' under the upload root
        5. metadata 'file' under <content root>/uploads

    Stream-wrapped paths are only accepted when the storage client
    handles them.
    """

    def __init__(
        self,
        storage_client,
        upload_root: str,
        content_root: Optional[str] = None,
        hooks: Optional[RegenHooks] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize resolver.

        Args:
            storage_client: Storage client (LocalClient or S3Client)
            upload_root: Root that relative paths are joined to
            content_root: Optional content directory with an 'uploads' folder
            hooks: Extension points
            logger: Optional logger instance
        """
        self.storage = storage_client
        self.upload_root = upload_root
        self.content_root = content_root
        self.hooks = hooks or RegenHooks()
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, asset: Asset) -> str:
        """
        Resolve an asset's working file.

        Returns:
            The path, or an empty string if nothing exists
        """
        if asset.file:
            file_path = self.absolute_path(asset.file)
            filtered_path = self.hooks.filter_attached_file(file_path, asset)
            for candidate in (filtered_path, file_path):
                if candidate and self._usable(candidate) and self.storage.is_file(candidate):
                    return candidate

        meta_file = asset.metadata.get('file') if isinstance(asset.metadata, dict) else None
        if meta_file:
            if is_stream_wrapped(meta_file) and not self._stream_supported:
                self.logger.debug(f"No handler for stream path: {meta_file}")
                return ''

            candidates = [meta_file, os.path.join(self.upload_root, meta_file)]
            if self.content_root:
                candidates.append(os.path.join(self.content_root, 'uploads', meta_file))
            for candidate in candidates:
                if self.storage.is_file(candidate):
                    return candidate

        self.logger.debug(f"No file found for asset {asset.id}")
        return ''

    def absolute_path(self, file: str) -> str:
        """Join a relative attachment path to the upload root."""
        if is_absolute(file) or is_stream_wrapped(file):
            return file
        return os.path.join(self.upload_root, file)

    def relative_path(self, path: str) -> str:
        """Express a path relative to the upload root when it lives beneath it."""
        root = self.upload_root.rstrip('/') + '/'
        if path.startswith(root):
            return path[len(root):]
        return path

    @property
    def _stream_supported(self) -> bool:
        return bool(getattr(self.storage, 'supports_stream_paths', False))

    def _usable(self, path: str) -> bool:
        return not is_stream_wrapped(path) or self._stream_supported
