"""
DerivedFileLocator - Finds every derivative sitting next to an original.
"""

import logging
import os
from typing import Dict, List, Optional

from .asset import iter_recorded_sizes
from .derived_file import DerivedFile
from .naming import file_stem, parse_dimensions


class DerivedFileLocator:
    """
    Enumerates derivative candidates for an original file.

    Two sources are merged: sizes recorded in metadata, and a directory
    scan for names matching stem + WxH + extension. The scan catches sizes
    the metadata lost track of and orphans left by earlier runs.
    """

    def __init__(self, storage_client, logger: Optional[logging.Logger] = None):
        """
        Initialize locator.

        Args:
            storage_client: Storage client (LocalClient or S3Client)
            logger: Optional logger instance
        """
        self.storage = storage_client
        self.logger = logger or logging.getLogger(__name__)

    def locate(self, original_path: str, metadata: Optional[dict]) -> List[DerivedFile]:
        """
        Find derivatives of an original file.

        Args:
            original_path: Path of the asset's working file
            metadata: Asset metadata with an optional 'sizes' mapping

        Returns:
            Recorded derivatives (metadata order) followed by discovered
            ones (sorted by name). No path appears twice and the original
            itself is never included.
        """
        directory = os.path.dirname(original_path)
        original = os.path.normpath(original_path)
        found: Dict[str, DerivedFile] = {}

        for name, size_data in iter_recorded_sizes(metadata):
            path = os.path.join(directory, os.path.basename(size_data['file']))
            if os.path.normpath(path) == original:
                self.logger.warning(f"Size '{name}' points at the original file, skipping: {path}")
                continue
            if path in found or not self.storage.is_file(path):
                continue
            found[path] = DerivedFile(
                width=int(size_data.get('width') or 0),
                height=int(size_data.get('height') or 0),
                path=path,
            )

        stem = file_stem(original_path)
        for name in self.scan(original_path):
            path = os.path.join(directory, name)
            if path in found or os.path.normpath(path) == original:
                continue
            dimensions = parse_dimensions(name, stem)
            if dimensions is None:
                continue
            found[path] = DerivedFile(width=dimensions[0], height=dimensions[1], path=path)

        self.logger.debug(f"Located {len(found)} derivatives of {original_path}")
        return list(found.values())

    def scan(self, original_path: str) -> List[str]:
        """
        List sibling names that start with the stem and share the extension.

        Names are returned sorted so repeated scans of an unchanged
        directory enumerate in the same order.
        """
        directory = os.path.dirname(original_path)
        stem = file_stem(original_path)
        extension = os.path.splitext(original_path)[1]

        names = [
            name for name in self.storage.list_directory(directory)
            if name.startswith(stem) and name.endswith(extension)
        ]
        return sorted(names)
