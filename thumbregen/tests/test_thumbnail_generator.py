"""Tests for ThumbnailGenerator class."""

import io

import pytest
from PIL import Image

from thumbregen.exceptions import GenerationError
from thumbregen.thumbnail_generator import DEFAULT_SIZES, SizeSpec, ThumbnailGenerator


class TestSizeSpec:
    """Tests for SizeSpec parsing."""
    
    def test_parse(self):
        assert SizeSpec.parse('thumbnail:150x150:crop') == SizeSpec('thumbnail', 150, 150, True)
        assert SizeSpec.parse('medium_large:768x0') == SizeSpec('medium_large', 768, 0, False)
    
    @pytest.mark.parametrize('value', ['thumbnail', ':150x150', 'a:150', 'a:wxh', 'a:1x2:crop:x'])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            SizeSpec.parse(value)
    
    def test_defaults(self):
        assert [s.name for s in DEFAULT_SIZES] == ['thumbnail', 'medium', 'medium_large', 'large']


class TestThumbnailGenerator:
    """Tests for ThumbnailGenerator class."""
    
    @pytest.fixture
    def directory(self, upload_dir):
        return upload_dir / '2024' / '01'
    
    @pytest.fixture
    def generator(self, local_storage, logger):
        return ThumbnailGenerator(local_storage, logger=logger)
    
    def test_supports(self, generator):
        assert generator.supports('image/jpeg')
        assert generator.supports('image/png')
        assert not generator.supports('application/zip')
    
    def test_generate_default_sizes(self, generator, make_image, directory):
        source = make_image(directory / 'photo.jpg', size=(1200, 800))
        
        metadata = generator.generate(42, str(source))
        
        assert metadata['width'] == 1200
        assert metadata['height'] == 800
        assert metadata['file'] == str(source)
        assert metadata['sizes']['thumbnail']['file'] == 'photo-150x150.jpg'
        assert metadata['sizes']['medium']['file'] == 'photo-300x200.jpg'
        assert metadata['sizes']['medium_large']['file'] == 'photo-768x512.jpg'
        assert metadata['sizes']['large']['file'] == 'photo-1024x683.jpg'
        assert metadata['sizes']['medium']['mime-type'] == 'image/jpeg'
        
        with Image.open(directory / 'photo-150x150.jpg') as img:
            assert img.size == (150, 150)
        with Image.open(directory / 'photo-1024x683.jpg') as img:
            assert img.size == (1024, 683)
    
    def test_small_source_gets_no_upscaled_sizes(self, generator, make_image, directory):
        source = make_image(directory / 'small.png', size=(200, 100), fmt='PNG')
        
        metadata = generator.generate(1, str(source))
        
        assert list(metadata['sizes']) == ['thumbnail']
        assert metadata['sizes']['thumbnail']['file'] == 'small-150x100.png'
        assert metadata['sizes']['thumbnail']['mime-type'] == 'image/png'
    
    def test_big_image_gets_scaled_copy(self, local_storage, logger, make_image, directory):
        generator = ThumbnailGenerator(
            local_storage,
            sizes=[SizeSpec('thumbnail', 150, 150, True)],
            big_image_threshold=1000,
            logger=logger,
        )
        source = make_image(directory / 'huge.jpg', size=(2000, 1000))
        
        metadata = generator.generate(1, str(source))
        
        assert metadata['file'] == str(directory / 'huge-scaled.jpg')
        assert metadata['original_image'] == 'huge.jpg'
        assert (metadata['width'], metadata['height']) == (1000, 500)
        assert metadata['sizes']['thumbnail']['file'] == 'huge-150x150.jpg'
        assert (directory / 'huge-scaled.jpg').exists()
    
    def test_scaled_source_is_not_scaled_again(self, local_storage, logger, make_image, directory):
        generator = ThumbnailGenerator(local_storage, sizes=[SizeSpec('medium', 300, 300)],
                                       big_image_threshold=100, logger=logger)
        source = make_image(directory / 'photo-scaled.jpg', size=(600, 400))
        
        metadata = generator.generate(1, str(source))
        
        assert metadata['file'] == str(source)
        assert metadata['sizes']['medium']['file'] == 'photo-300x200.jpg'
    
    def test_webp_siblings(self, local_storage, logger, make_image, directory):
        generator = ThumbnailGenerator(local_storage, sizes=[SizeSpec('thumbnail', 150, 150, True)],
                                       webp=True, logger=logger)
        source = make_image(directory / 'photo.jpg')
        
        generator.generate(1, str(source))
        
        assert (directory / 'photo-150x150.jpg.webp').exists()
    
    def test_shared_dimensions_written_once(self, local_storage, logger, make_image, directory, mocker):
        generator = ThumbnailGenerator(
            local_storage,
            sizes=[SizeSpec('a', 300, 300), SizeSpec('b', 300, 200)],
            logger=logger,
        )
        write = mocker.spy(local_storage, 'write_file')
        source = make_image(directory / 'photo.jpg', size=(1200, 800))
        
        metadata = generator.generate(1, str(source))
        
        assert metadata['sizes']['a']['file'] == metadata['sizes']['b']['file'] == 'photo-300x200.jpg'
        assert write.call_count == 1
    
    def test_undecodable_source(self, generator, directory):
        (directory / 'broken.jpg').write_bytes(b'not an image')
        
        with pytest.raises(GenerationError, match='Cannot open image broken.jpg'):
            generator.generate(1, str(directory / 'broken.jpg'))
    
    def test_rgba_to_jpeg(self, generator):
        img = Image.new('RGBA', (10, 10), (255, 0, 0, 128))
        
        data = generator._encode(img, 'JPEG')
        
        assert Image.open(io.BytesIO(data)).mode == 'RGB'
    
    def test_fit_dimensions(self):
        assert ThumbnailGenerator.fit_dimensions(1200, 800, 300, 300) == (300, 200)
        assert ThumbnailGenerator.fit_dimensions(1200, 800, 768, 0) == (768, 512)
        assert ThumbnailGenerator.fit_dimensions(100, 50, 300, 300) == (100, 50)
    
    def test_resize_dimensions_crop(self, generator):
        width, height, box = generator.resize_dimensions(1200, 800, SizeSpec('t', 150, 150, True))
        
        assert (width, height) == (150, 150)
        assert box == (200, 0, 1000, 800)
    
    def test_resize_dimensions_not_smaller(self, generator):
        assert generator.resize_dimensions(100, 100, SizeSpec('t', 150, 150, True)) is None
        assert generator.resize_dimensions(100, 100, SizeSpec('m', 0, 0)) is None
    
    def test_output_format_follows_extension(self, generator):
        assert generator._get_output_format('.PNG') == ('PNG', 'image/png')
        assert generator._get_output_format('.tiff') == ('JPEG', 'image/jpeg')
        assert generator._get_output_format('.xyz') == ('JPEG', 'image/jpeg')
