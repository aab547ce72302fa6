"""
BatchStats - Running totals for a batch regeneration run.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from .processing_result import ResultStatus


@dataclass
class BatchStats:
    """
    Counters for one batch run.

    Partial results (some stale files could not be removed) are counted as
    failures, matching the exit code of the CLI.

    Attributes:
        total_to_process: Number of candidate assets
        succeeded: Assets fully regenerated
        failed: Assets that failed or left stale files behind
        skipped: Assets skipped (SVG, extension hook)
        start_time: Start timestamp
        error_details: One message per failed asset
        last_id: Identifier of the most recent asset handled
        completed: True once the candidate list was exhausted
    """
    total_to_process: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    start_time: float = field(default_factory=time.time)
    error_details: List[str] = field(default_factory=list)
    last_id: int = 0
    completed: bool = False

    def record(self, status: ResultStatus, message: Optional[str] = None) -> None:
        """Count one asset outcome; failures keep their message."""
        if status == ResultStatus.SUCCESS:
            self.succeeded += 1
        elif status == ResultStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
            if message:
                self.error_details.append(message)

    @property
    def completed_count(self) -> int:
        return self.succeeded + self.failed + self.skipped

    @property
    def remaining_count(self) -> int:
        return max(0, self.total_to_process - self.completed_count)

    @property
    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time

    @property
    def rate_per_second(self) -> float:
        """Assets handled per second, whatever their outcome."""
        elapsed = self.elapsed_seconds
        return self.completed_count / elapsed if elapsed > 0 else 0.0

    @property
    def rate_per_minute(self) -> float:
        return self.rate_per_second * 60

    @property
    def estimated_remaining_seconds(self) -> float:
        rate = self.rate_per_second
        return self.remaining_count / rate if rate > 0 else 0.0
