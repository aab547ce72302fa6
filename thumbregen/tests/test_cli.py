"""Tests for CLI module."""

import argparse
import json

import pytest

from thumbregen.cli import create_parser, main, parse_ids
from thumbregen.resume_cursor import ResumeCursor
from thumbregen.thumbnail_generator import SizeSpec


class TestCreateParser:
    """Tests for argument parser creation."""
    
    def test_run_command(self):
        parser = create_parser()
        args = parser.parse_args([
            'run', '--catalog', 'catalog.json', '--local-root', '/srv/uploads',
            '--ids', '10,9', '--resume', '--cadence', '0.5',
        ])
        
        assert args.command == 'run'
        assert args.ids == [10, 9]
        assert args.resume is True
        assert args.start_over is False
        assert args.cadence == 0.5
        assert args.local_root == '/srv/uploads'
    
    def test_run_size_options(self):
        parser = create_parser()
        args = parser.parse_args([
            'run', '--catalog', 'c.json', '--size', 'thumbnail:100x100:crop', '--size', 'large:800x800',
            '--webp', '--quality', '70',
        ])
        
        assert args.size == [SizeSpec('thumbnail', 100, 100, True), SizeSpec('large', 800, 800)]
        assert args.webp is True
        assert args.quality == 70
    
    def test_invalid_size(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(['run', '--catalog', 'c.json', '--size', 'huge'])
    
    def test_one_command(self):
        args = create_parser().parse_args(['one', '42', '--catalog', 'c.json', '--json'])
        
        assert args.command == 'one'
        assert args.id == 42
        assert args.json is True
    
    def test_status_command(self):
        args = create_parser().parse_args(['status', '--catalog', 'c.json'])
        
        assert args.command == 'status'
        assert args.cursor_file is None


class TestParseIds:
    """Tests for the ID list argument type."""
    
    def test_valid(self):
        assert parse_ids('1,2,3') == [1, 2, 3]
        assert parse_ids(' 7 ') == [7]
        assert parse_ids('5,') == [5]
    
    @pytest.mark.parametrize('value', ['', 'a,b', '1,,2', '-1'])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_ids(value)


class TestMain:
    """Tests for main entry point."""
    
    @pytest.fixture
    def photo(self, upload_dir, make_image):
        return make_image(upload_dir / '2024' / '01' / 'photo.jpg', size=(1200, 800))
    
    def test_no_command(self):
        assert main([]) == 1
    
    def test_status_without_cursor(self, sample_catalog, capsys):
        assert main(['status', '--catalog', sample_catalog.path]) == 0
        
        out = capsys.readouterr().out
        assert 'Eligible:     1 assets' in out
        assert 'Resume point: none' in out
    
    def test_status_with_cursor(self, sample_catalog, capsys):
        ResumeCursor.for_catalog(sample_catalog.path).save(50)
        
        assert main(['status', '--catalog', sample_catalog.path]) == 0
        
        assert 'Resume point: asset 50 (1 remaining)' in capsys.readouterr().out
    
    def test_missing_catalog(self, tmp_path, upload_dir):
        assert main(['run', '--catalog', str(tmp_path / 'none.json'), '--local-root', str(upload_dir)]) == 1
    
    def test_invalid_s3_config(self, sample_catalog, monkeypatch):
        for name in ('S3_ENDPOINT', 'S3_BUCKET', 'S3_ACCESS_KEY', 'S3_SECRET_KEY'):
            monkeypatch.delenv(name, raising=False)
        
        assert main(['run', '--catalog', sample_catalog.path]) == 1
    
    def test_one_json(self, sample_catalog, upload_dir, photo, capsys):
        code = main([
            'one', '42', '--catalog', sample_catalog.path, '--local-root', str(upload_dir),
            '--size', 'thumbnail:150x150:crop', '--json',
        ])
        
        assert code == 0
        response = json.loads(capsys.readouterr().out)
        assert 'success' in response
        assert response['result']['regenerated'] == ['150x150']
        assert (upload_dir / '2024' / '01' / 'photo-150x150.jpg').exists()
    
    def test_one_unknown_asset(self, sample_catalog, upload_dir, capsys):
        code = main(['one', '7', '--catalog', sample_catalog.path, '--local-root', str(upload_dir)])
        
        assert code == 1
        assert '7 is an invalid image ID.' in capsys.readouterr().out
    
    def test_run_clears_cursor_on_completion(self, sample_catalog, upload_dir, photo, capsys):
        cursor = ResumeCursor.for_catalog(sample_catalog.path)
        
        code = main(['run', '--catalog', sample_catalog.path, '--local-root', str(upload_dir)])
        
        assert code == 0
        assert cursor.load() is None
        assert 'REGENERATION SUMMARY' in capsys.readouterr().out
    
    def test_run_reports_failures(self, sample_catalog, upload_dir):
        code = main(['run', '--catalog', sample_catalog.path, '--local-root', str(upload_dir), '-q'])
        
        assert code == 1
