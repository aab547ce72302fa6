"""
BatchController - Regenerates thumbnails for many assets with resume support.
"""

import logging
import time
from typing import List, Optional, Sequence

from .batch_progress import BatchProgress
from .batch_stats import BatchStats
from .catalog import Catalog
from .processing_result import ResultStatus
from .processor import ImageProcessor
from .resume_cursor import ResumeCursor


class BatchController:
    """
    Runs the per-asset pipeline over a list of assets.

    Assets are processed one at a time in descending identifier order.
    The resume cursor is written after every asset, so a killed run can
    continue below the last identifier it reached.
    """

    def __init__(
        self,
        processor: ImageProcessor,
        catalog: Catalog,
        cursor: ResumeCursor,
        cadence: float = 0.0,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize controller.

        Args:
            processor: Per-asset pipeline
            catalog: Source of candidate identifiers
            cursor: Resume cursor store
            cadence: Seconds to wait between assets
            dry_run: If True, list candidates without touching any file
            logger: Optional logger instance
        """
        self.processor = processor
        self.catalog = catalog
        self.cursor = cursor
        self.cadence = cadence
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)
        self.stats = BatchStats()
        self._stop_requested = False

    def stop(self) -> None:
        """Request the controller to stop after the current asset."""
        self._stop_requested = True

    def select_candidates(
        self,
        ids: Optional[Sequence[int]] = None,
        resume: bool = False
    ) -> List[int]:
        """
        Determine which assets to process.

        Args:
            ids: Explicit identifiers (processed in the given order)
            resume: Continue below the stored cursor

        Returns:
            Identifiers to process
        """
        if ids:
            return [int(i) for i in ids]

        below = None
        if resume:
            below = self.cursor.load()
            if below:
                self.logger.info(f"Resuming below asset {below}")
            else:
                self.logger.info("No resume point stored, processing all assets")

        return self.catalog.candidate_ids(below=below)

    def run_batch(
        self,
        ids: Optional[Sequence[int]] = None,
        resume: bool = False,
        start_over: bool = False,
        progress: Optional[BatchProgress] = None,
        limit: Optional[int] = None
    ) -> BatchStats:
        """
        Regenerate thumbnails for a set of assets.

        Args:
            ids: Optional explicit identifiers; default is every eligible asset
            resume: Continue below the stored cursor
            start_over: Clear the stored cursor first
            progress: Optional progress tracker
            limit: Optional limit on number of assets (for testing)

        Returns:
            BatchStats with results
        """
        if self._stop_requested:
            self.logger.info("Stop was requested before the batch started")
            self.stats = BatchStats(total_to_process=0)
            return self.stats

        if start_over:
            self.cursor.clear()
            self.logger.info("Resume point cleared. Starting over.")

        candidates = self.select_candidates(ids, resume)
        full_run = not ids
        limited = bool(limit and len(candidates) > limit)
        if limited:
            candidates = candidates[:limit]

        self.stats = BatchStats(total_to_process=len(candidates))

        if not candidates:
            self.logger.warning("No images found to process.")
            self.stats.completed = True
            if full_run and not self.dry_run:
                self.cursor.clear()
            return self.stats

        mode_str = " [DRY RUN]" if self.dry_run else ""
        limit_str = f" (limited to {limit})" if limited else ""
        self.logger.info(f"Starting batch: {len(candidates)} assets to process{mode_str}{limit_str}")

        for asset_id in candidates:
            if self._stop_requested:
                self.logger.info("Stop requested, halting batch")
                break

            if self.dry_run:
                if progress:
                    progress.on_dry_run(asset_id)
                else:
                    self.logger.info(f"[DRY RUN] Would regenerate: {asset_id}")
                self.stats.succeeded += 1
            else:
                self._process_asset(asset_id, progress)
                self.cursor.save(asset_id)

            self.stats.last_id = asset_id

            if progress:
                progress.on_progress_update(self.stats)

            if self.cadence > 0 and not self.dry_run:
                time.sleep(self.cadence)
        else:
            self.stats.completed = True

        if self.stats.completed and full_run and not limited and not self.dry_run:
            self.cursor.clear()

        self.logger.info(
            f"Batch complete: {self.stats.succeeded} regenerated, "
            f"{self.stats.failed} failed, {self.stats.skipped} skipped "
            f"({self.stats.elapsed_seconds:.1f}s)"
        )

        return self.stats

    def _process_asset(self, asset_id: int, progress: Optional[BatchProgress]) -> bool:
        """Process a single asset; never raises."""
        try:
            result = self.processor.process_one(asset_id)
        except Exception as e:
            message = f"Error processing {asset_id}: {e}"
            self.logger.error(message)
            self.stats.record(ResultStatus.FAILED, message)
            if progress:
                progress.on_asset_error(asset_id, str(e))
            return False

        message = None
        if result.status == ResultStatus.SKIPPED:
            self.logger.info(f"Skipped {asset_id}: {result.error}")
        elif result.status in (ResultStatus.PARTIAL, ResultStatus.FAILED):
            message = f"Asset {asset_id}: {result.error}"
        if message:
            self.logger.warning(message)
        self.stats.record(result.status, message)

        if progress:
            progress.on_asset_processed(result)

        return result.success
