"""Tests for Catalog and Asset classes."""

import json

import pytest

from thumbregen.asset import Asset, iter_recorded_sizes
from thumbregen.catalog import Catalog
from thumbregen.exceptions import NotFoundError


class TestAsset:
    """Tests for Asset class."""
    
    @pytest.mark.parametrize('mime_type, category, eligible', [
        ('image/jpeg', 'image', True),
        ('image/svg+xml', 'svg', True),
        ('application/pdf', 'pdf', True),
        ('video/mp4', 'other', False),
    ])
    def test_category(self, mime_type, category, eligible):
        asset = Asset(id=1, mime_type=mime_type)
        
        assert asset.category == category
        assert asset.is_eligible is eligible
    
    def test_original_image(self):
        assert Asset(id=1, mime_type='image/png').original_image is None
        asset = Asset(id=1, mime_type='image/png', metadata={'original_image': 'a.png'})
        assert asset.original_image == 'a.png'
    
    def test_iter_recorded_sizes_tolerates_bad_entries(self):
        metadata = {'sizes': {
            'ok': {'file': 'a-1x1.jpg', 'width': 1, 'height': 1},
            'empty': {'file': ''},
            'broken': 'nonsense',
        }}
        
        assert [name for name, _ in iter_recorded_sizes(metadata)] == ['ok']
        assert list(iter_recorded_sizes({'sizes': []})) == []
        assert list(iter_recorded_sizes(None)) == []
    
    def test_display_name(self):
        assert Asset(id=3, mime_type='image/png').display_name == 'Asset 3'
        assert Asset(id=3, mime_type='image/png', title='Logo').display_name == 'Logo'


class TestCatalog:
    """Tests for Catalog class."""
    
    def test_get_unknown_asset(self):
        with pytest.raises(NotFoundError, match='5 is an invalid image ID.'):
            Catalog().get_asset(5)
    
    def test_candidate_ids(self):
        catalog = Catalog()
        for asset_id, mime in ((3, 'image/png'), (12, 'application/pdf'), (7, 'text/plain'),
                               (5, 'image/svg+xml')):
            catalog.add_asset(Asset(id=asset_id, mime_type=mime))
        
        assert catalog.candidate_ids() == [12, 5, 3]
        assert catalog.candidate_ids(below=12) == [5, 3]
        assert catalog.candidate_ids(below=3) == []
    
    def test_write_metadata_persists(self, sample_catalog):
        sample_catalog.write_metadata(42, {'width': 10, 'height': 10, 'sizes': {}})
        
        with open(sample_catalog.path) as f:
            data = json.load(f)
        assert data['assets'][0]['metadata'] == {'width': 10, 'height': 10, 'sizes': {}}
        assert data['updated_at']
    
    def test_read_metadata_is_a_copy(self, sample_catalog):
        metadata = sample_catalog.read_metadata(42)
        metadata['sizes'].clear()
        
        assert sample_catalog.read_metadata(42)['sizes']
    
    def test_set_attached_file(self, sample_catalog):
        sample_catalog.set_attached_file(42, '2024/01/photo-scaled.jpg')
        
        assert Catalog.load(sample_catalog.path).get_asset(42).file == '2024/01/photo-scaled.jpg'
    
    def test_load_roundtrip(self, sample_catalog):
        loaded = Catalog.load(sample_catalog.path)
        
        assert loaded.total_assets == 1
        asset = loaded.get_asset(42)
        assert asset.title == 'Photo'
        assert asset.metadata['sizes']['medium']['file'] == 'photo-300x200.jpg'
    
    def test_save_to_new_path(self, sample_catalog, tmp_path):
        target = tmp_path / 'nested' / 'copy.json'
        
        sample_catalog.save(str(target))
        
        assert target.exists()
        assert sample_catalog.path == str(target)
    
    def test_in_memory_catalog_does_not_save(self):
        catalog = Catalog()
        catalog.add_asset(Asset(id=1, mime_type='image/png'))
        
        catalog.write_metadata(1, {'sizes': {}})
        
        assert catalog.updated_at is None
