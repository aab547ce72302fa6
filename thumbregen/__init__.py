"""
Force Thumbnail Regeneration for media catalogs

Per asset:
    1. Locate every derivative (recorded in metadata or found on disk) and delete it
    2. Regenerate all configured sizes from the best available source
    3. Reconcile what was deleted, what failed and what now exists

Batch runs walk assets newest-first and can be resumed after an interruption.
Supports both S3 and local filesystem storage.
"""

__version__ = "1.0.0"

from .s3_config import S3Config
from .s3_client import S3Client
from .local_client import LocalConfig, LocalClient
from .asset import Asset
from .derived_file import DerivedFile
from .catalog import Catalog
from .hooks import RegenHooks
from .context import RegenContext
from .thumbnail_generator import SizeSpec, ThumbnailGenerator
from .path_resolver import PathResolver
from .locator import DerivedFileLocator
from .eraser import DerivedFileEraser
from .regeneration import RegenerationDriver
from .reconciler import OutcomeReconciler
from .processing_result import ProcessingResult, ResultStatus, SizeOutcome, SizeOutcomes
from .processor import ImageProcessor
from .resume_cursor import ResumeCursor
from .batch_stats import BatchStats
from .batch_progress import BatchProgress
from .batch import BatchController
from .reporter import Reporter

__all__ = [
    "S3Config",
    "S3Client",
    "LocalConfig",
    "LocalClient",
    "Asset",
    "DerivedFile",
    "Catalog",
    "RegenHooks",
    "RegenContext",
    "SizeSpec",
    "ThumbnailGenerator",
    "PathResolver",
    "DerivedFileLocator",
    "DerivedFileEraser",
    "RegenerationDriver",
    "OutcomeReconciler",
    "ProcessingResult",
    "ResultStatus",
    "SizeOutcome",
    "SizeOutcomes",
    "ImageProcessor",
    "ResumeCursor",
    "BatchStats",
    "BatchProgress",
    "BatchController",
    "Reporter",
]
