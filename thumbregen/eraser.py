"""
DerivedFileEraser - Deletes a derivative and verifies that it is gone.
"""

import logging
from typing import Optional

from .derived_file import DerivedFile
from .exceptions import DeleteError, StorageError
from .hooks import RegenHooks
from .processing_result import SizeOutcome


class DerivedFileEraser:
    """
    Removes derivatives together with their .webp siblings.
    
    The outcome is decided by a fresh existence check after the delete,
    never by the delete call itself: object-store backed filesystems can
    acknowledge a delete that did not happen.
    """
    
    def __init__(
        self,
        storage_client,
        hooks: Optional[RegenHooks] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.storage = storage_client
        self.hooks = hooks or RegenHooks()
        self.logger = logger or logging.getLogger(__name__)
    
    def erase(self, derived: DerivedFile) -> SizeOutcome:
        """
        Delete a derivative.
        
        Args:
            derived: The derivative to remove
            
        Returns:
            SizeOutcome.DELETED if the file is gone afterwards,
            SizeOutcome.DELETE_ERROR otherwise
        """
        self.hooks.before_delete(derived.path)
        
        try:
            self.storage.delete_file(derived.path)
        except (OSError, DeleteError) as e:
            self.logger.warning(f"Delete failed for {derived.path}: {e}")
        
        self._erase_sibling(derived.webp_path)
        
        self.storage.invalidate(derived.path)
        deleted = not self.storage.is_file(derived.path)
        
        self.hooks.after_delete(derived.path, deleted)
        
        if deleted:
            self.logger.debug(f"Deleted {derived.key}: {derived.path}")
            return SizeOutcome.DELETED
        
        self.logger.warning(f"Still present after delete ({derived.key}): {derived.path}")
        return SizeOutcome.DELETE_ERROR
    
    def _erase_sibling(self, path: str) -> None:
        """Best-effort removal of a compressed sibling."""
        try:
            if self.storage.is_file(path):
                self.storage.delete_file(path)
                self.storage.invalidate(path)
        except (OSError, StorageError) as e:
            self.logger.warning(f"Could not delete sibling {path}: {e}")
