"""
DerivedFile - A generated size variant found next to an original.
"""

from dataclasses import dataclass

from .naming import size_key


@dataclass(frozen=True)
class DerivedFile:
    """
    A concrete derivative on disk, keyed by its dimensions.
    
    Attributes:
        width: Width in pixels
        height: Height in pixels
        path: Full path (or object key) of the derivative
    """
    width: int
    height: int
    path: str
    
    WEBP_SUFFIX = '.webp'
    
    @property
    def key(self) -> str:
        """Dimension key, e.g. '150x150'."""
        return size_key(self.width, self.height)
    
    @property
    def webp_path(self) -> str:
        """Path of the optional compressed sibling."""
        return self.path + self.WEBP_SUFFIX
