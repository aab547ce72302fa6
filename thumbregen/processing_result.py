"""
ProcessingResult - Outcome of regenerating one asset.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class SizeOutcome(str, Enum):
    """Final classification of one size key."""
    DELETED = 'deleted'
    DELETE_ERROR = 'delete_error'
    REGENERATED = 'regenerated'


class ResultStatus(str, Enum):
    SUCCESS = 'success'
    PARTIAL = 'partial'
    FAILED = 'failed'
    SKIPPED = 'skipped'


@dataclass
class SizeOutcomes:
    """
    Disjoint size key sets after reconciliation.

    Attributes:
        deleted: Stale sizes removed and not produced again
        delete_error: Sizes whose stale file could not be removed
        regenerated: Sizes present after regeneration
    """
    deleted: List[str] = field(default_factory=list)
    delete_error: List[str] = field(default_factory=list)
    regenerated: List[str] = field(default_factory=list)

    @property
    def counts(self) -> dict:
        return {
            SizeOutcome.DELETED.value: len(self.deleted),
            SizeOutcome.DELETE_ERROR.value: len(self.delete_error),
            SizeOutcome.REGENERATED.value: len(self.regenerated),
        }


@dataclass
class ProcessingResult:
    """
    Per-asset outcome, consumed by the CLI and the batch controller.

    Attributes:
        asset_id: Catalog identifier
        status: success, partial (some deletes failed), failed or skipped
        title: Asset title, when the asset was found
        original_path: Resolved working file
        source_path: File the derivatives were generated from
        sizes: Reconciled size keys
        protected: Derivative paths exempted from deletion
        error: Failure or skip reason
        elapsed_seconds: Wall time spent on the asset
    """
    asset_id: int
    status: ResultStatus = ResultStatus.FAILED
    title: str = ''
    original_path: Optional[str] = None
    source_path: Optional[str] = None
    sizes: SizeOutcomes = field(default_factory=SizeOutcomes)
    protected: List[str] = field(default_factory=list)
    error: Optional[str] = None
    elapsed_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def skipped(self) -> bool:
        return self.status == ResultStatus.SKIPPED

    @property
    def deleted(self) -> List[str]:
        return self.sizes.deleted

    @property
    def delete_error(self) -> List[str]:
        return self.sizes.delete_error

    @property
    def regenerated(self) -> List[str]:
        return self.sizes.regenerated

    def fail(self, message: str) -> 'ProcessingResult':
        self.status = ResultStatus.FAILED
        self.error = message
        return self

    def skip(self, reason: str) -> 'ProcessingResult':
        self.status = ResultStatus.SKIPPED
        self.error = reason
        return self

    @property
    def details(self) -> List[str]:
        """Human-readable detail lines."""
        lines = [f"{self.title or 'Asset'} (ID {self.asset_id})"]

        if self.original_path:
            lines.append(f"Image: {self.original_path}")
        if self.source_path and self.source_path != self.original_path:
            lines.append(f"Source: {self.source_path}")

        if self.status == ResultStatus.SKIPPED:
            lines.append(f"Skipped: {self.error}")
            return lines
        if self.status == ResultStatus.FAILED and self.error:
            lines.append(f"Failed: {self.error}")

        if self.sizes.deleted:
            lines.append(f"Deleted: {', '.join(self.sizes.deleted)}")
        if self.sizes.delete_error:
            lines.append(f"Deleted error: {', '.join(self.sizes.delete_error)}")
            directory = os.path.dirname(self.original_path or '')
            lines.append(f"Please ensure the folder has write permissions (chmod 755): {directory}")
        if self.protected:
            lines.append(f"Protected: {', '.join(self.protected)}")
        if self.sizes.regenerated:
            lines.append(f"Regenerate: {', '.join(self.sizes.regenerated)}")
            if not self.sizes.delete_error:
                lines.append(f"Successfully regenerated in {self.elapsed_seconds:.2f} seconds")

        return lines

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            'id': self.asset_id,
            'status': self.status.value,
            'success': self.success,
            'title': self.title,
            'original_path': self.original_path,
            'source_path': self.source_path,
            'deleted': list(self.sizes.deleted),
            'delete_error': list(self.sizes.delete_error),
            'regenerated': list(self.sizes.regenerated),
            'protected': list(self.protected),
            'error': self.error,
            'elapsed_seconds': round(self.elapsed_seconds, 3),
        }
