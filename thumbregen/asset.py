"""
Asset - A media object in the catalog and its derivative metadata.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple


MIME_IMAGE = 'image'
MIME_PDF = 'pdf'
MIME_SVG = 'svg'
MIME_OTHER = 'other'


@dataclass
class Asset:
    """
    A media asset known to the catalog.

    Attributes:
        id: Catalog identifier
        mime_type: Full mime type (e.g., 'image/jpeg')
        file: Attached file, relative to the upload root or absolute
        title: Human-readable title
        metadata: Derivative metadata record (width, height, file, sizes, ...)
    """
    id: int
    mime_type: str
    file: str = ''
    title: str = ''
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def category(self) -> str:
        """Mime category: 'image', 'pdf', 'svg' or 'other'."""
        if self.mime_type == 'image/svg+xml':
            return MIME_SVG
        if self.mime_type.startswith('image/'):
            return MIME_IMAGE
        if self.mime_type == 'application/pdf':
            return MIME_PDF
        return MIME_OTHER

    @property
    def is_eligible(self) -> bool:
        """True for categories that are selected for batch runs."""
        return self.category in (MIME_IMAGE, MIME_PDF, MIME_SVG)

    @property
    def original_image(self) -> Optional[str]:
        """Unedited original filename recorded in metadata, if any."""
        return self.metadata.get('original_image') or None

    def iter_sizes(self) -> Iterator[Tuple[str, dict]]:
        """Yield (size name, size data) for recorded sizes with a file."""
        yield from iter_recorded_sizes(self.metadata)

    @property
    def display_name(self) -> str:
        return self.title or f"Asset {self.id}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'mime_type': self.mime_type,
            'file': self.file,
            'title': self.title,
            'metadata': self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Asset':
        """Create from dictionary."""
        return cls(
            id=int(data['id']),
            mime_type=data.get('mime_type', ''),
            file=data.get('file', ''),
            title=data.get('title', ''),
            metadata=dict(data.get('metadata') or {}),
        )


def iter_recorded_sizes(metadata: Optional[dict]) -> Iterator[Tuple[str, dict]]:
    """
    Yield (size name, size data) for every size entry with a file name.

    Tolerates missing or malformed 'sizes' values.
    """
    if not metadata:
        return
    sizes = metadata.get('sizes')
    if not isinstance(sizes, dict):
        return
    for name, size_data in sizes.items():
        if not isinstance(size_data, dict) or not size_data.get('file'):
            continue
        yield name, size_data
