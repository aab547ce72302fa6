"""
RegenerationDriver - Chooses a source file, regenerates and persists metadata.
"""

import logging
import os
from typing import Optional, Tuple

from .asset import Asset
from .catalog import Catalog
from .exceptions import GenerationError
from .hooks import RegenHooks
from .naming import is_edited_copy
from .path_resolver import PathResolver


class RegenerationDriver:
    """
    Runs the generation capability for one asset.

    The unedited original is preferred as a source unless the working file
    is an editor copy (its edits would be lost). Metadata is written back
    through the catalog.
    """

    def __init__(
        self,
        storage_client,
        generator,
        catalog: Catalog,
        resolver: PathResolver,
        hooks: Optional[RegenHooks] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize driver.

        Args:
            storage_client: Storage client (LocalClient or S3Client)
            generator: Object with generate(asset_id, source_path) -> dict
            catalog: Metadata persistence
            resolver: Path resolver (for relative paths in metadata)
            hooks: Extension points
            logger: Optional logger instance
        """
        self.storage = storage_client
        self.generator = generator
        self.catalog = catalog
        self.resolver = resolver
        self.hooks = hooks or RegenHooks()
        self.logger = logger or logging.getLogger(__name__)

    def original_image_path(self, asset: Asset, original_path: str) -> str:
        """Path of the unedited original recorded in metadata, or ''."""
        path = ''
        if asset.original_image:
            path = os.path.join(os.path.dirname(original_path), os.path.basename(asset.original_image))
        return self.hooks.original_image_path(asset, path) or ''

    def select_source(self, original_path: str, unedited_path: str) -> str:
        """
        Pick the file to regenerate from.

        Args:
            original_path: The asset's working file
            unedited_path: The unedited original ('' if none)
        """
        if not unedited_path or not self.storage.is_file(unedited_path):
            return original_path
        if is_edited_copy(original_path):
            self.logger.debug(f"Working file is an edited copy, keeping it as source: {original_path}")
            return original_path
        return unedited_path

    def regenerate(self, asset: Asset, original_path: str) -> Tuple[dict, str]:
        """
        Regenerate all sizes for an asset and persist the new metadata.

        Args:
            asset: The asset
            original_path: Resolved working file

        Returns:
            (new metadata, source path used)

        Raises:
            GenerationError: If generation fails or yields nothing
        """
        unedited_path = self.original_image_path(asset, original_path)
        source_path = self.select_source(original_path, unedited_path)

        self.logger.debug(f"Regenerating asset {asset.id} from {source_path}")
        try:
            metadata = self.generator.generate(asset.id, source_path)
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(str(e) or e.__class__.__name__) from e

        if not metadata:
            raise GenerationError("Unknown failure.")

        if (
            asset.original_image
            and unedited_path
            and self.storage.is_file(unedited_path)
            and not metadata.get('original_image')
        ):
            metadata['original_image'] = asset.original_image

        working_file = metadata.get('file')
        if working_file:
            metadata['file'] = self.resolver.relative_path(working_file)
            if os.path.normpath(working_file) != os.path.normpath(original_path):
                self.catalog.set_attached_file(asset.id, metadata['file'])

        self.catalog.write_metadata(asset.id, metadata)
        asset.metadata = metadata
        self.hooks.after_update(asset.id, source_path)

        return metadata, source_path
