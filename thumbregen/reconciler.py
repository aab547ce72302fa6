"""
OutcomeReconciler - Merges deletion and regeneration observations.
"""

from typing import Iterable, List, Optional

from .asset import iter_recorded_sizes
from .naming import parse_dimensions, size_key
from .processing_result import SizeOutcomes


def _unique(keys: Iterable[str]) -> List[str]:
    """De-duplicate keys, keeping first-seen order."""
    return list(dict.fromkeys(keys))


class OutcomeReconciler:
    """
    Classifies every size key as deleted, delete_error or regenerated.
    
    Deletion and regeneration are observed by two separate directory scans,
    so a key can show up in more than one list. Precedence is
    delete_error > regenerated > deleted.
    """
    
    def reconcile(
        self,
        deleted: Iterable[str],
        delete_error: Iterable[str],
        new_metadata: Optional[dict],
        present_names: Iterable[str],
        stem: str
    ) -> SizeOutcomes:
        """
        Reconcile one asset's size outcomes.
        
        Args:
            deleted: Keys whose stale file was removed
            delete_error: Keys whose stale file survived deletion
            new_metadata: Metadata returned by the generator
            present_names: Derivative-looking names found after regeneration
            stem: Derivative prefix of the original (see naming.file_stem)
            
        Returns:
            SizeOutcomes with pairwise disjoint key lists
        """
        present_names = list(present_names)
        present = set(present_names)
        errors = _unique(delete_error)
        regenerated = []
        
        # Sizes the generator reported under a name the scan cannot see
        for _, size_data in iter_recorded_sizes(new_metadata):
            if size_data['file'] in present:
                continue
            regenerated.append(size_key(size_data.get('width') or 0, size_data.get('height') or 0))
        
        for name in present_names:
            dimensions = parse_dimensions(name, stem)
            if dimensions is not None:
                regenerated.append(size_key(*dimensions))
        
        error_set = set(errors)
        regenerated = [key for key in _unique(regenerated) if key not in error_set]
        
        suppressed = error_set | set(regenerated)
        deleted = [key for key in _unique(deleted) if key not in suppressed]
        
        return SizeOutcomes(deleted=deleted, delete_error=errors, regenerated=regenerated)
