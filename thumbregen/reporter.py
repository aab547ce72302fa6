"""
Reporter - Human-readable and JSON output for regeneration results.
"""

import json
import logging
import sys
from typing import Optional, TextIO

from .batch_stats import BatchStats
from .catalog import Catalog
from .processing_result import ProcessingResult, ResultStatus
from .resume_cursor import ResumeCursor


class Reporter:
    """
    Formats processing results, batch summaries and cursor status.
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.

        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)

    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)

    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        if seconds < 60:
            return f"{seconds:.1f} seconds"
        elif seconds < 3600:
            return f"{seconds / 60:.1f} minutes"
        else:
            return f"{seconds / 3600:.1f} hours"

    def to_response(self, result: ProcessingResult) -> dict:
        """
        Build the response for an interactive caller.

        Returns:
            {'success': message} for full success or skips,
            {'error': message} otherwise, plus the structured result
        """
        message = '\n'.join(result.details)
        key = 'success' if result.status in (ResultStatus.SUCCESS, ResultStatus.SKIPPED) else 'error'
        return {key: message, 'result': result.to_dict()}

    def report_result(self, result: ProcessingResult, as_json: bool = False) -> None:
        """Print the outcome of a single asset."""
        if as_json:
            self._print(json.dumps(self.to_response(result), indent=2))
            return

        label = {
            ResultStatus.SUCCESS: 'OK',
            ResultStatus.PARTIAL: 'PARTIAL',
            ResultStatus.FAILED: 'FAILED',
            ResultStatus.SKIPPED: 'SKIPPED',
        }[result.status]

        lines = result.details
        self._print(f"[{label}] {lines[0]}")
        for line in lines[1:]:
            self._print(f"  {line}")

    def report_batch(self, stats: BatchStats) -> None:
        """Print the summary of a batch run."""
        self._print("=" * 60)
        self._print("REGENERATION SUMMARY")
        self._print("=" * 60)
        self._print(f"  Total:        {stats.total_to_process:>10,}")
        self._print(f"  Success:      {stats.succeeded:>10,}")
        self._print(f"  Failure:      {stats.failed:>10,}")
        self._print(f"  Skipped:      {stats.skipped:>10,}")
        self._print(f"  Time:         {self._format_duration(stats.elapsed_seconds)}")
        if stats.total_to_process:
            self._print(f"  Rate:         {stats.rate_per_minute:.1f}/min")
        if not stats.completed:
            self._print(f"  Stopped after asset {stats.last_id}; run again with --resume to continue.")

        if stats.error_details:
            self._print()
            self._print("Failures:")
            for message in stats.error_details:
                self._print(f"  - {message}")

    def report_status(self, catalog: Catalog, cursor: ResumeCursor) -> None:
        """Print the resume point and how much work remains below it."""
        position = cursor.load()
        total = len(catalog.candidate_ids())

        self._print(f"Catalog:      {catalog.path or '(in memory)'}")
        self._print(f"Eligible:     {total:,} assets")
        if position:
            remaining = len(catalog.candidate_ids(below=position))
            self._print(f"Resume point: asset {position} ({remaining:,} remaining)")
        else:
            self._print("Resume point: none")
