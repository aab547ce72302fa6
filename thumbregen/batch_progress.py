"""
BatchProgress - Per-asset and periodic progress output for batch runs.
"""

import logging
import sys
from typing import Optional, TextIO

from .batch_stats import BatchStats
from .processing_result import ProcessingResult, ResultStatus

STATUS_LABELS = {
    ResultStatus.SUCCESS: 'OK',
    ResultStatus.SKIPPED: 'SKIP',
    ResultStatus.PARTIAL: 'PARTIAL',
    ResultStatus.FAILED: 'ERROR',
}


class BatchProgress:
    """
    Prints one line per asset with show_files, otherwise logs a summary
    every log_interval assets.
    """

    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 100,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.show_files = show_files
        self.log_interval = log_interval
        self.output = output
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = 0

    def _line(self, label: str, asset_id: int, text: str) -> None:
        if self.show_files:
            print(f"  [{label}] {asset_id} {text}", file=self.output or sys.stdout)

    def on_asset_processed(self, result: ProcessingResult) -> None:
        """Print the outcome of one asset."""
        if result.status == ResultStatus.SUCCESS:
            title = f"{result.title} " if result.title else ''
            text = f"{title}-> {', '.join(result.regenerated)}"
        elif result.status == ResultStatus.PARTIAL:
            text = f"-> could not delete {', '.join(result.delete_error)}"
        else:
            text = f"-> {result.error or 'failed'}"
        self._line(STATUS_LABELS[result.status], result.asset_id, text)

    def on_asset_error(self, asset_id: int, error: str) -> None:
        """Processing raised instead of returning a result."""
        self._line('ERROR', asset_id, f"-> {error}")

    def on_dry_run(self, asset_id: int) -> None:
        self._line('DRY RUN', asset_id, "-> would regenerate thumbnails")

    def on_progress_update(self, stats: BatchStats) -> None:
        """
        Log overall progress once log_interval more assets are done.

        Args:
            stats: Current batch statistics
        """
        if self.show_files:
            return

        done = stats.completed_count
        if done - self.last_logged < self.log_interval:
            return
        self.last_logged = done

        self.logger.info(
            f"Progress: {stats.succeeded} regenerated, {stats.failed} failed, "
            f"{stats.skipped} skipped ({stats.rate_per_minute:.1f}/min, "
            f"~{stats.estimated_remaining_seconds / 60:.0f}m remaining, "
            f"{stats.remaining_count} left)"
        )

    def __call__(self, stats: BatchStats) -> None:
        self.on_progress_update(stats)
