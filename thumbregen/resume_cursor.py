"""
ResumeCursor - Persisted watermark of the last asset a batch processed.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional


class ResumeCursor:
    """
    Stores the identifier of the last processed asset in a small JSON file.
    
    Batches walk identifiers in descending order, so a resumed run picks
    up everything strictly below the stored value. The cursor is written
    after every item, failures included: an asset that always fails is
    skipped on resume rather than blocking progress.
    """
    
    KEY = 'last_regenerated'
    
    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        self.path = path
        self.logger = logger or logging.getLogger(__name__)
    
    def load(self) -> Optional[int]:
        """Return the stored identifier, or None if unset."""
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable resume cursor {self.path}: {e}")
            return None
        
        value = data.get(self.KEY) if isinstance(data, dict) else None
        try:
            value = int(value)
        except (TypeError, ValueError):
            return None
        return value or None
    
    def save(self, asset_id: int) -> None:
        """Persist the identifier (atomic replace)."""
        path = Path(self.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + '.tmp')
        with open(tmp_path, 'w') as f:
            json.dump({self.KEY: int(asset_id)}, f)
        os.replace(tmp_path, path)
    
    def clear(self) -> None:
        """Forget the stored identifier."""
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
    
    @classmethod
    def for_catalog(cls, catalog_path: str, logger: Optional[logging.Logger] = None) -> 'ResumeCursor':
        """Default cursor file stored beside a catalog file."""
        return cls(f"{catalog_path}.cursor.json", logger=logger)
