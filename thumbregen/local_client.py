"""
LocalClient - Filesystem storage operations used by the regeneration pipeline.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from .exceptions import DeleteError


@dataclass
class LocalConfig:
    """
    Local filesystem storage configuration.
    
    Attributes:
        root_path: Upload root that relative attachment paths are joined to
        content_root: Content directory holding a fallback 'uploads' folder
    """
    root_path: str
    content_root: Optional[str] = None
    
    def validate(self) -> List[str]:
        """Return a list of configuration errors (empty if valid)."""
        errors = []
        if not self.root_path:
            errors.append("Local root path is required (--local-root)")
        elif not os.path.isdir(self.root_path):
            errors.append(f"Local root path does not exist: {self.root_path}")
        if self.content_root and not os.path.isdir(self.content_root):
            errors.append(f"Content root does not exist: {self.content_root}")
        return errors


class LocalClient:
    """
    Storage backend over the local filesystem.
    
    Paths are plain filesystem paths. Stat results are not cached, so
    invalidate() has nothing to clear.
    """
    
    supports_stream_paths = False
    
    def __init__(self, config: LocalConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
    
    @property
    def upload_root(self) -> str:
        return self.config.root_path
    
    @property
    def content_root(self) -> Optional[str]:
        return self.config.content_root
    
    def is_file(self, path: str) -> bool:
        return bool(path) and os.path.isfile(path)
    
    def list_directory(self, directory: str) -> List[str]:
        """List entry names in a directory (empty if it cannot be read)."""
        try:
            return os.listdir(directory)
        except OSError as e:
            self.logger.warning(f"Cannot list directory {directory}: {e}")
            return []
    
    def delete_file(self, path: str) -> None:
        """Delete a file. A file that is already gone is not an error."""
        try:
            os.remove(path)
        except FileNotFoundError:
            self.logger.debug(f"Already removed: {path}")
        except OSError as e:
            raise DeleteError(f"Cannot delete {path}: {e}") from e
    
    def read_file(self, path: str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()
    
    def write_file(
        self, 
        path: str, 
        data: bytes, 
        content_type: str = 'application/octet-stream'
    ) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'wb') as f:
            f.write(data)
    
    def invalidate(self, path: str) -> None:
        """No cached state to drop for the local filesystem."""
    
    def clear_cache(self) -> None:
        """No cached state to drop for the local filesystem."""
