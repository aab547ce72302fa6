"""
Pytest fixtures for thumbregen tests.
"""

import io
import os

import pytest


class StubGenerator:
    """Generation capability double that writes empty files for fixed sizes."""
    
    def __init__(self, storage, sizes=(('thumbnail', 150, 150), ('medium', 300, 200))):
        self.storage = storage
        self.sizes = list(sizes)
        self.calls = []
    
    def supports(self, mime_type):
        return mime_type in ('image/jpeg', 'image/png', 'image/gif')
    
    def generate(self, asset_id, source_path):
        from thumbregen.naming import derivative_name, file_stem
        
        self.calls.append((asset_id, source_path))
        directory = os.path.dirname(source_path)
        stem = file_stem(source_path)
        ext = os.path.splitext(source_path)[1]
        
        metadata = {'width': 1200, 'height': 800, 'file': source_path, 'sizes': {}}
        for name, width, height in self.sizes:
            filename = derivative_name(stem, width, height, ext)
            self.storage.write_file(os.path.join(directory, filename), b'derived', 'image/jpeg')
            metadata['sizes'][name] = {
                'file': filename,
                'width': width,
                'height': height,
                'mime-type': 'image/jpeg',
            }
        return metadata


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')


@pytest.fixture
def upload_dir(tmp_path):
    """Fixture providing an upload root with a dated subdirectory."""
    path = tmp_path / 'uploads'
    (path / '2024' / '01').mkdir(parents=True)
    return path


@pytest.fixture
def local_storage(upload_dir, logger):
    """Fixture providing a LocalClient rooted at the upload directory."""
    from thumbregen.local_client import LocalConfig, LocalClient
    
    return LocalClient(LocalConfig(root_path=str(upload_dir)), logger)


@pytest.fixture
def make_image():
    """Fixture returning a helper that writes a real image file."""
    from PIL import Image
    
    def _make(path, size=(1200, 800), color='red', fmt='JPEG'):
        img = Image.new('RGB', size, color=color)
        buffer = io.BytesIO()
        img.save(buffer, format=fmt)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(buffer.getvalue())
        return path
    
    return _make


@pytest.fixture
def stub_generator(local_storage):
    """Fixture providing a stub generator writing 150x150 and 300x200."""
    return StubGenerator(local_storage)


@pytest.fixture
def sample_catalog(tmp_path):
    """Fixture providing a catalog with asset 42 (photo.jpg)."""
    from thumbregen.asset import Asset
    from thumbregen.catalog import Catalog
    
    catalog = Catalog(path=str(tmp_path / 'catalog.json'))
    catalog.add_asset(Asset(
        id=42,
        mime_type='image/jpeg',
        file='2024/01/photo.jpg',
        title='Photo',
        metadata={
            'width': 1200,
            'height': 800,
            'file': '2024/01/photo.jpg',
            'sizes': {
                'thumbnail': {'file': 'photo-150x150.jpg', 'width': 150, 'height': 150},
                'medium': {'file': 'photo-300x200.jpg', 'width': 300, 'height': 200},
            },
        },
    ))
    catalog.save()
    return catalog


@pytest.fixture
def photo_files(upload_dir):
    """Fixture writing photo.jpg with its two recorded derivatives."""
    directory = upload_dir / '2024' / '01'
    for name in ('photo.jpg', 'photo-150x150.jpg', 'photo-300x200.jpg'):
        (directory / name).write_bytes(b'data')
    return directory


@pytest.fixture
def context(local_storage, sample_catalog, stub_generator, logger):
    """Fixture providing a RegenContext with the stub generator."""
    from thumbregen.context import RegenContext
    
    return RegenContext(
        storage=local_storage,
        catalog=sample_catalog,
        generator=stub_generator,
        logger=logger,
    )


@pytest.fixture
def mock_storage():
    """Fixture providing a mock storage client."""
    from unittest.mock import MagicMock
    
    mock = MagicMock()
    mock.is_file.return_value = False
    mock.list_directory.return_value = []
    mock.supports_stream_paths = False
    return mock
