"""Tests for OutcomeReconciler class."""

from thumbregen.reconciler import OutcomeReconciler


def _metadata(*sizes):
    return {'sizes': {
        f"size{i}": {'file': f"photo-{w}x{h}.jpg", 'width': w, 'height': h}
        for i, (w, h) in enumerate(sizes)
    }}


class TestOutcomeReconciler:
    """Tests for OutcomeReconciler class."""
    
    def test_regenerated_suppresses_deleted(self):
        outcomes = OutcomeReconciler().reconcile(
            deleted=['150x150', '300x200'],
            delete_error=[],
            new_metadata=_metadata((150, 150), (300, 200)),
            present_names=['photo-150x150.jpg', 'photo-300x200.jpg'],
            stem='photo-',
        )
        
        assert outcomes.deleted == []
        assert outcomes.regenerated == ['150x150', '300x200']
        assert outcomes.delete_error == []
    
    def test_error_dominates_regenerated(self):
        outcomes = OutcomeReconciler().reconcile(
            deleted=['300x200'],
            delete_error=['150x150'],
            new_metadata=_metadata((150, 150), (300, 200)),
            present_names=['photo-150x150.jpg', 'photo-300x200.jpg'],
            stem='photo-',
        )
        
        assert outcomes.delete_error == ['150x150']
        assert outcomes.regenerated == ['300x200']
        assert outcomes.deleted == []
    
    def test_sizes_no_longer_generated_stay_deleted(self):
        outcomes = OutcomeReconciler().reconcile(
            deleted=['150x150', '640x480'],
            delete_error=[],
            new_metadata=_metadata((150, 150)),
            present_names=['photo-150x150.jpg'],
            stem='photo-',
        )
        
        assert outcomes.deleted == ['640x480']
        assert outcomes.regenerated == ['150x150']
    
    def test_recorded_size_not_visible_to_scan_counts(self):
        """Test a size stored under a non-pattern name is still reported."""
        metadata = {'sizes': {'custom': {'file': 'photo_custom.jpg', 'width': 90, 'height': 60}}}
        
        outcomes = OutcomeReconciler().reconcile([], [], metadata, [], 'photo-')
        
        assert outcomes.regenerated == ['90x60']
    
    def test_keys_are_unique_and_disjoint(self):
        outcomes = OutcomeReconciler().reconcile(
            deleted=['150x150', '150x150', '300x200'],
            delete_error=['300x200', '300x200'],
            new_metadata=_metadata((150, 150), (150, 150)),
            present_names=['photo-150x150.jpg', 'photo-notasize.jpg'],
            stem='photo-',
        )
        
        assert outcomes.regenerated == ['150x150']
        assert outcomes.delete_error == ['300x200']
        assert outcomes.deleted == []
        assert not set(outcomes.deleted) & set(outcomes.regenerated)
        assert not set(outcomes.delete_error) & set(outcomes.regenerated)
        assert outcomes.counts == {'deleted': 0, 'delete_error': 1, 'regenerated': 1}
