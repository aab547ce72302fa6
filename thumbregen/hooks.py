"""
RegenHooks - Named extension points called by the regeneration pipeline.

Subclass and override the methods you need; every default is a no-op or
returns its input unchanged. All hooks are called synchronously.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .asset import Asset


class RegenHooks:
    """Default extension points."""
    
    def skip_asset(self, asset: 'Asset') -> bool:
        """Return True to leave an asset untouched. Default: False."""
        return False
    
    def is_protected(self, path: str) -> bool:
        """Return True to exempt a derivative from deletion. Default: False."""
        return False
    
    def before_delete(self, path: str) -> None:
        """Called before a derivative is deleted."""
    
    def after_delete(self, path: str, deleted: bool) -> None:
        """Called after a delete attempt with the verified outcome."""
    
    def filter_attached_file(self, path: str, asset: 'Asset') -> str:
        """Rewrite the attached file path before resolution. Default: unchanged."""
        return path
    
    def original_image_path(self, asset: 'Asset', path: str) -> str:
        """Override the unedited original used as a source. Default: unchanged."""
        return path
    
    def after_update(self, asset_id: int, source_path: str) -> None:
        """Called after new metadata has been persisted."""
