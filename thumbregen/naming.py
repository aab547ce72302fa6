"""
Filename helpers shared by the locator, reconciler and generator.
"""

import os
import re
from typing import Optional, Tuple

SCALED_SUFFIX = '-scaled'

# Working files produced by the image editor carry an embedded timestamp,
# e.g. photo-e1700000000123.jpg
EDITED_PATTERN = re.compile(r'e\d{10,}\.')

# ASCII digits only: int() rejects other Unicode digits such as superscripts
DIMENSIONS_PATTERN = re.compile(r'(\d+)x(\d+)', re.ASCII)


def remove_from_end(value: str, suffix: str) -> str:
    """Strip suffix from the end of value if present."""
    if suffix and value.endswith(suffix):
        return value[:-len(suffix)]
    return value


def file_stem(path: str) -> str:
    """
    Get the derivative prefix for a file.
    
    Converts: /uploads/photo-scaled.jpg -> photo-
    """
    filename = os.path.splitext(os.path.basename(path))[0]
    return remove_from_end(filename, SCALED_SUFFIX) + '-'


def parse_dimensions(name: str, stem: str) -> Optional[Tuple[int, int]]:
    """
    Parse the dimension suffix of a derivative filename.
    
    Args:
        name: Filename (with or without directory and extension)
        stem: Prefix as returned by file_stem()
        
    Returns:
        (width, height) or None if the name is not a derivative of stem
    """
    filename = os.path.splitext(os.path.basename(name))[0]
    if not filename.startswith(stem):
        return None
    
    match = DIMENSIONS_PATTERN.fullmatch(filename[len(stem):])
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def size_key(width: int, height: int) -> str:
    """Format a dimension pair as a size key (e.g. '150x150')."""
    return f"{int(width)}x{int(height)}"


def derivative_name(stem: str, width: int, height: int, extension: str) -> str:
    """Build a derivative filename: photo- + 150x150 + .jpg"""
    return f"{stem}{size_key(width, height)}{extension}"


def is_edited_copy(path: str) -> bool:
    """True if the filename looks like an editor-generated working copy."""
    return EDITED_PATTERN.search(os.path.basename(path)) is not None
