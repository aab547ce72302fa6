"""
ThumbnailGenerator - Produces the configured derivative sizes for a source image.
"""

import io
import logging
import math
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image

from .exceptions import GenerationError
from .naming import SCALED_SUFFIX, derivative_name, file_stem


@dataclass(frozen=True)
class SizeSpec:
    """
    A named derivative size.

    Attributes:
        name: Size name (e.g., 'thumbnail')
        width: Maximum width, 0 for unbounded
        height: Maximum height, 0 for unbounded
        crop: Crop to the exact dimensions instead of fitting
    """
    name: str
    width: int
    height: int
    crop: bool = False

    @classmethod
    def parse(cls, value: str) -> 'SizeSpec':
        """
        Parse 'NAME:WxH' or 'NAME:WxH:crop'.

        Raises:
            ValueError: If the value is malformed
        """
        parts = value.split(':')
        if len(parts) not in (2, 3) or not parts[0]:
            raise ValueError(f"Invalid size '{value}', expected NAME:WxH[:crop]")
        dims = parts[1].lower().split('x')
        if len(dims) != 2 or not all(d.isdigit() for d in dims):
            raise ValueError(f"Invalid dimensions in '{value}'")
        crop = len(parts) == 3 and parts[2].lower() in ('crop', '1', 'true')
        return cls(parts[0], int(dims[0]), int(dims[1]), crop)


DEFAULT_SIZES = (
    SizeSpec('thumbnail', 150, 150, crop=True),
    SizeSpec('medium', 300, 300),
    SizeSpec('medium_large', 768, 0),
    SizeSpec('large', 1024, 1024),
)

DEFAULT_BIG_IMAGE_THRESHOLD = 2560


class ThumbnailGenerator:
    """
    Generates derivative files from a source image using Pillow.

    Files are written next to the source through the storage client and
    described in a metadata record:

        {'width', 'height', 'file', 'sizes': {name: {'file', 'width',
         'height', 'mime-type', 'filesize'}}, 'original_image'?}
    """

    def __init__(
        self,
        storage_client,
        sizes: Optional[Sequence[SizeSpec]] = None,
        quality: int = 85,
        big_image_threshold: Optional[int] = DEFAULT_BIG_IMAGE_THRESHOLD,
        webp: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize thumbnail generator.

        Args:
            storage_client: Storage client used to read sources and write derivatives
            sizes: Size definitions (default: DEFAULT_SIZES)
            quality: JPEG/WebP quality for output (default: 85)
            big_image_threshold: Larger sources get a '-scaled' working copy; 0/None disables
            webp: Also write a .webp sibling for every derivative
            logger: Optional logger instance
        """
        self.storage = storage_client
        self.sizes: List[SizeSpec] = list(sizes) if sizes else list(DEFAULT_SIZES)
        self.quality = quality
        self.big_image_threshold = big_image_threshold
        self.webp = webp
        self.logger = logger or logging.getLogger(__name__)

    def supports(self, mime_type: str) -> bool:
        """True if Pillow can decode the given mime type."""
        Image.init()
        for format_id, mime in Image.MIME.items():
            if mime == mime_type and format_id in Image.OPEN:
                return True
        return False

    def generate(self, asset_id: int, source_path: str) -> dict:
        """
        Generate all configured sizes from a source image.

        Args:
            asset_id: Asset identifier (for logging)
            source_path: Image to generate from

        Returns:
            Metadata record describing the working file and its sizes

        Raises:
            GenerationError: If the source cannot be decoded or a file cannot be written
        """
        try:
            img = Image.open(io.BytesIO(self.storage.read_file(source_path)))
            img.load()
        except Exception as e:
            self.logger.error(f"Error opening {source_path} for asset {asset_id}: {e}")
            raise GenerationError(f"Cannot open image {os.path.basename(source_path)}: {e}") from e

        try:
            return self._generate_sizes(img, source_path)
        except GenerationError:
            raise
        except Exception as e:
            self.logger.error(f"Error generating thumbnails for asset {asset_id}: {e}")
            raise GenerationError(str(e)) from e

    def _generate_sizes(self, img: Image.Image, source_path: str) -> dict:
        directory = os.path.dirname(source_path)
        filename, extension = os.path.splitext(os.path.basename(source_path))
        stem = file_stem(source_path)

        metadata = {
            'width': img.width,
            'height': img.height,
            'file': source_path,
            'sizes': {},
        }

        threshold = self.big_image_threshold
        if threshold and max(img.size) > threshold and not filename.endswith(SCALED_SUFFIX):
            scaled = self.fit_dimensions(img.width, img.height, threshold, threshold)
            img = self._render(img, scaled[0], scaled[1], None)
            scaled_path = os.path.join(directory, f"{stem[:-1]}{SCALED_SUFFIX}{extension}")
            self._write(img, scaled_path, extension)
            self.logger.debug(f"Scaled working copy {img.width}x{img.height}: {scaled_path}")
            metadata.update({
                'width': img.width,
                'height': img.height,
                'file': scaled_path,
                'original_image': os.path.basename(source_path),
            })

        written: Dict[Tuple[int, int], dict] = {}
        for spec in self.sizes:
            dims = self.resize_dimensions(img.width, img.height, spec)
            if dims is None:
                continue
            width, height, crop_box = dims

            if (width, height) not in written:
                name = derivative_name(stem, width, height, extension)
                content_type, filesize = self._write(
                    self._render(img, width, height, crop_box),
                    os.path.join(directory, name),
                    extension,
                )
                written[(width, height)] = {
                    'file': name,
                    'width': width,
                    'height': height,
                    'mime-type': content_type,
                    'filesize': filesize,
                }

            metadata['sizes'][spec.name] = dict(written[(width, height)])

        return metadata

    @staticmethod
    def fit_dimensions(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
        """Scale (width, height) down to fit a box; 0 means unbounded. Never upscales."""
        ratios = []
        if max_width and width > max_width:
            ratios.append(max_width / width)
        if max_height and height > max_height:
            ratios.append(max_height / height)
        if not ratios:
            return width, height
        ratio = min(ratios)
        return max(1, round(width * ratio)), max(1, round(height * ratio))

    def resize_dimensions(
        self,
        width: int,
        height: int,
        spec: SizeSpec
    ) -> Optional[Tuple[int, int, Optional[Tuple[int, int, int, int]]]]:
        """
        Compute output dimensions for a size.

        Returns:
            (width, height, crop_box) or None when the size would not be
            smaller than the source
        """
        if not spec.width and not spec.height:
            return None

        if not spec.crop:
            new_width, new_height = self.fit_dimensions(width, height, spec.width, spec.height)
            if (new_width, new_height) == (width, height):
                return None
            return new_width, new_height, None

        new_width = min(spec.width or width, width)
        new_height = min(spec.height or height, height)
        if new_width >= width and new_height >= height:
            return None

        ratio = max(new_width / width, new_height / height)
        crop_width = round(new_width / ratio)
        crop_height = round(new_height / ratio)
        left = math.floor((width - crop_width) / 2)
        top = math.floor((height - crop_height) / 2)
        return new_width, new_height, (left, top, left + crop_width, top + crop_height)

    def _render(
        self,
        img: Image.Image,
        width: int,
        height: int,
        crop_box: Optional[Tuple[int, int, int, int]]
    ) -> Image.Image:
        if crop_box:
            img = img.crop(crop_box)
        return img.resize((width, height), Image.Resampling.LANCZOS)

    def _write(self, img: Image.Image, path: str, extension: str) -> Tuple[str, int]:
        """Encode and store an image (plus .webp sibling when enabled)."""
        output_format, content_type = self._get_output_format(extension)
        data = self._encode(img, output_format)
        self.storage.write_file(path, data, content_type)

        if self.webp:
            self.storage.write_file(path + '.webp', self._encode(img, 'WEBP'), 'image/webp')

        return content_type, len(data)

    def _encode(self, img: Image.Image, output_format: str) -> bytes:
        output = io.BytesIO()

        if output_format == 'JPEG':
            self._convert_color_mode(img).save(output, format='JPEG', quality=self.quality, optimize=True)
        elif output_format == 'PNG':
            img.save(output, format='PNG', optimize=True)
        elif output_format == 'GIF':
            img.save(output, format='GIF')
        elif output_format == 'WEBP':
            if img.mode not in ('RGB', 'RGBA'):
                img = img.convert('RGBA')
            img.save(output, format='WEBP', quality=self.quality)
        else:
            self._convert_color_mode(img).save(output, format='JPEG', quality=self.quality, optimize=True)

        return output.getvalue()

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Convert image to appropriate color mode for JPEG output."""
        if img.mode in ('RGBA', 'LA'):
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode == 'LA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode == 'P':
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img

    def _get_output_format(self, extension: str) -> Tuple[str, str]:
        """Determine output format based on original extension."""
        ext_lower = extension.lower()

        if ext_lower in ('.jpg', '.jpeg', '.tif', '.tiff', '.bmp'):
            return 'JPEG', 'image/jpeg'
        elif ext_lower == '.png':
            return 'PNG', 'image/png'
        elif ext_lower == '.gif':
            return 'GIF', 'image/gif'
        elif ext_lower == '.webp':
            return 'WEBP', 'image/webp'
        else:
            return 'JPEG', 'image/jpeg'
