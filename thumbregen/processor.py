"""
ImageProcessor - The per-asset delete, regenerate and reconcile pipeline.
"""

import time
from typing import List, Tuple

from .asset import MIME_OTHER, MIME_SVG, Asset
from .context import RegenContext
from .eraser import DerivedFileEraser
from .exceptions import RegenError, SourceMissingError, UnsupportedTypeError
from .locator import DerivedFileLocator
from .naming import file_stem
from .path_resolver import PathResolver
from .processing_result import ProcessingResult, ResultStatus, SizeOutcome
from .reconciler import OutcomeReconciler
from .regeneration import RegenerationDriver


class ImageProcessor:
    """
    Regenerates the thumbnails of a single asset.

    Used as-is by the interactive single-asset command and by every batch
    run, so both behave identically.
    """

    def __init__(self, context: RegenContext):
        """
        Initialize processor.

        Args:
            context: Collaborators for this run
        """
        self.context = context
        self.storage = context.storage
        self.catalog = context.catalog
        self.hooks = context.hooks
        self.logger = context.logger

        self.resolver = PathResolver(
            context.storage,
            upload_root=context.upload_root,
            content_root=context.content_root,
            hooks=context.hooks,
            logger=context.logger,
        )
        self.locator = DerivedFileLocator(context.storage, logger=context.logger)
        self.eraser = DerivedFileEraser(context.storage, hooks=context.hooks, logger=context.logger)
        self.driver = RegenerationDriver(
            context.storage,
            context.generator,
            context.catalog,
            self.resolver,
            hooks=context.hooks,
            logger=context.logger,
        )
        self.reconciler = OutcomeReconciler()

    def process_one(self, asset_id: int) -> ProcessingResult:
        """
        Delete and regenerate every derivative of an asset.

        Failures that concern only this asset (unknown id, unsupported
        type, missing source, generation failure) are returned as a failed
        result rather than raised.

        Args:
            asset_id: Catalog identifier

        Returns:
            ProcessingResult for the asset
        """
        start_time = time.time()
        result = ProcessingResult(asset_id=asset_id)
        self.storage.clear_cache()

        try:
            self._process(asset_id, result)
        except RegenError as e:
            result.fail(str(e))
            self.logger.warning(f"Asset {asset_id} failed: {e}")
        finally:
            result.elapsed_seconds = time.time() - start_time

        if result.success:
            self.logger.info(
                f"Asset {asset_id}: regenerated {', '.join(result.regenerated)} "
                f"({result.elapsed_seconds:.2f}s)"
            )
        elif result.status == ResultStatus.PARTIAL:
            self.logger.warning(f"Asset {asset_id}: {result.error}")

        return result

    def _process(self, asset_id: int, result: ProcessingResult) -> None:
        asset = self.catalog.get_asset(asset_id)
        result.title = asset.title

        if self.hooks.skip_asset(asset):
            result.skip("Skipped by extension hook.")
            return
        if asset.category == MIME_SVG:
            result.skip("SVG files have no thumbnails to regenerate.")
            return
        self._check_type(asset)

        original_path = self.resolver.resolve(asset)
        if not original_path:
            raise SourceMissingError("The originally uploaded image file cannot be found.")
        result.original_path = original_path

        deleted, errors = self._erase_derivatives(asset, original_path, result)

        metadata, source_path = self.driver.regenerate(asset, original_path)
        result.source_path = source_path

        result.sizes = self.reconciler.reconcile(
            deleted,
            errors,
            metadata,
            self.locator.scan(original_path),
            file_stem(original_path),
        )

        if result.delete_error:
            result.status = ResultStatus.PARTIAL
            result.error = f"Could not delete {', '.join(result.delete_error)}"
        elif not result.regenerated:
            result.fail("No thumbnail sizes were generated.")
        else:
            result.status = ResultStatus.SUCCESS

    def _check_type(self, asset: Asset) -> None:
        if asset.category == MIME_OTHER:
            raise UnsupportedTypeError(f"{asset.id} is not an image or PDF ({asset.mime_type}).")
        if not self.context.generator.supports(asset.mime_type):
            raise UnsupportedTypeError(
                f"No decoder is available for {asset.mime_type} (asset {asset.id})."
            )

    def _erase_derivatives(
        self,
        asset: Asset,
        original_path: str,
        result: ProcessingResult
    ) -> Tuple[List[str], List[str]]:
        """Erase every located derivative; returns (deleted keys, error keys)."""
        deleted: List[str] = []
        errors: List[str] = []

        for derived in self.locator.locate(original_path, asset.metadata):
            if self.hooks.is_protected(derived.path):
                self.logger.debug(f"Protected, not deleting: {derived.path}")
                result.protected.append(derived.path)
                continue

            if self.eraser.erase(derived) == SizeOutcome.DELETED:
                deleted.append(derived.key)
            else:
                errors.append(derived.key)

        return deleted, errors
