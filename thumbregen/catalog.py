"""
Catalog - JSON-file persistence for assets and their derivative metadata.
"""

import copy
import json
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from .asset import Asset
from .exceptions import NotFoundError


@dataclass
class Catalog:
    """
    Asset catalog backed by a JSON file.

    Metadata writes are saved immediately so an interrupted batch never
    loses the record of an asset that was already regenerated.

    Attributes:
        path: JSON file the catalog was loaded from (None for in-memory)
        assets: Assets keyed by identifier
        updated_at: ISO timestamp of the last save
    """
    path: Optional[str] = None
    assets: Dict[int, Asset] = field(default_factory=dict)
    updated_at: Optional[str] = None

    def add_asset(self, asset: Asset) -> None:
        """Add or replace an asset."""
        self.assets[asset.id] = asset

    def get_asset(self, asset_id: int) -> Asset:
        """
        Get an asset by identifier.

        Raises:
            NotFoundError: If the identifier is unknown
        """
        try:
            return self.assets[int(asset_id)]
        except (KeyError, TypeError, ValueError):
            raise NotFoundError(f"{asset_id} is an invalid image ID.")

    def read_metadata(self, asset_id: int) -> dict:
        """Return a copy of an asset's metadata record."""
        return copy.deepcopy(self.get_asset(asset_id).metadata)

    def write_metadata(self, asset_id: int, metadata: dict) -> None:
        """Replace an asset's metadata record and persist the catalog."""
        asset = self.get_asset(asset_id)
        asset.metadata = copy.deepcopy(metadata)
        self.save()

    def set_attached_file(self, asset_id: int, file: str) -> None:
        """Point an asset at a different working file and persist the catalog."""
        asset = self.get_asset(asset_id)
        asset.file = file
        self.save()

    def candidate_ids(self, below: Optional[int] = None) -> List[int]:
        """
        Identifiers eligible for a batch run, newest first.

        Args:
            below: Only include identifiers strictly less than this

        Returns:
            Identifiers of image, PDF and SVG assets in descending order
        """
        ids = [
            asset_id for asset_id, asset in self.assets.items()
            if asset.is_eligible and (below is None or asset_id < below)
        ]
        return sorted(ids, reverse=True)

    @property
    def total_assets(self) -> int:
        return len(self.assets)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'updated_at': self.updated_at,
            'assets': [asset.to_dict() for asset in sorted(self.assets.values(), key=lambda a: a.id)],
        }

    @classmethod
    def from_dict(cls, data: dict, path: Optional[str] = None) -> 'Catalog':
        """Create from dictionary."""
        catalog = cls(path=path, updated_at=data.get('updated_at'))
        for asset_data in data.get('assets', []):
            catalog.add_asset(Asset.from_dict(asset_data))
        return catalog

    def save(self, filepath: Optional[str] = None) -> None:
        """Save catalog to its JSON file (written atomically)."""
        target = filepath or self.path
        if not target:
            return

        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.updated_at = datetime.now().isoformat()

        tmp_path = path.with_name(path.name + '.tmp')
        with open(tmp_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        os.replace(tmp_path, path)

        if filepath:
            self.path = filepath

    @classmethod
    def load(cls, filepath: str) -> 'Catalog':
        """Load catalog from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data, path=filepath)
