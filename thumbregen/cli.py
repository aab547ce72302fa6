"""
Command Line Interface for thumbnail regeneration.
"""

import argparse
import logging
import re
import sys
import urllib3
from typing import List, Optional

from .batch import BatchController
from .batch_progress import BatchProgress
from .catalog import Catalog
from .context import RegenContext
from .exceptions import InvalidConfigurationError
from .local_client import LocalConfig, LocalClient
from .processor import ImageProcessor
from .reporter import Reporter
from .resume_cursor import ResumeCursor
from .s3_client import S3Client
from .s3_config import S3Config
from .thumbnail_generator import DEFAULT_BIG_IMAGE_THRESHOLD, SizeSpec, ThumbnailGenerator

IDS_PATTERN = re.compile(r'^\d+(,\d+)*,?$')


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('boto3').setLevel(logging.WARNING)
    logging.getLogger('botocore').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)

    return logging.getLogger('thumbregen')


def parse_ids(value: str) -> List[int]:
    """Parse a comma-separated list of asset IDs."""
    value = value.strip()
    if not IDS_PATTERN.match(value):
        raise argparse.ArgumentTypeError(f"invalid ID list: {value!r}")
    return [int(part) for part in value.split(',') if part]


def parse_size(value: str) -> SizeSpec:
    try:
        return SizeSpec.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def get_s3_config(args: argparse.Namespace) -> S3Config:
    """Get S3 configuration from environment and CLI overrides."""
    config = S3Config.from_env()

    if getattr(args, 's3_endpoint', None):
        config.endpoint = args.s3_endpoint
    if getattr(args, 's3_bucket', None):
        config.bucket = args.s3_bucket
    if getattr(args, 's3_prefix', None):
        config.prefix = args.s3_prefix
    if getattr(args, 's3_access_key', None):
        config.access_key = args.s3_access_key
    if getattr(args, 's3_secret_key', None):
        config.secret_key = args.s3_secret_key

    return config


def get_storage_client(args: argparse.Namespace, logger: logging.Logger):
    """
    Get appropriate storage client based on arguments.

    Raises:
        InvalidConfigurationError: If the selected storage is misconfigured
    """
    if getattr(args, 'local_root', None):
        config = LocalConfig(
            root_path=args.local_root,
            content_root=getattr(args, 'content_root', None),
        )
        errors = config.validate()
        if errors:
            for error in errors:
                logger.error(error)
            raise InvalidConfigurationError("Local configuration invalid")
        logger.info(f"Storage: Local filesystem ({config.root_path})")
        return LocalClient(config, logger)

    config = get_s3_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        raise InvalidConfigurationError("S3 configuration invalid (or pass --local-root)")
    logger.info(f"Storage: S3 {config.endpoint} {config.bucket}/{config.prefix}")
    return S3Client(config, logger)


def build_context(args: argparse.Namespace, logger: logging.Logger) -> RegenContext:
    """Load the catalog and wire the collaborators for one run."""
    storage = get_storage_client(args, logger)
    catalog = Catalog.load(args.catalog)
    logger.info(f"Loaded catalog: {args.catalog} ({catalog.total_assets:,} assets)")

    generator = ThumbnailGenerator(
        storage,
        sizes=args.size or None,
        quality=args.quality,
        big_image_threshold=args.big_image_threshold or None,
        webp=args.webp,
        logger=logger,
    )
    return RegenContext(storage=storage, catalog=catalog, generator=generator, logger=logger)


def get_cursor(args: argparse.Namespace, logger: logging.Logger) -> ResumeCursor:
    if getattr(args, 'cursor_file', None):
        return ResumeCursor(args.cursor_file, logger=logger)
    return ResumeCursor.for_catalog(args.catalog, logger=logger)


def add_storage_arguments(parser: argparse.ArgumentParser) -> None:
    """Add storage configuration arguments to a parser."""
    local_group = parser.add_argument_group('Local Storage')
    local_group.add_argument('--local-root', metavar='PATH',
                            help='Upload root on the local filesystem (instead of S3)')
    local_group.add_argument('--content-root', metavar='PATH',
                            help='Content directory with a fallback uploads/ folder')

    s3_group = parser.add_argument_group('S3 Storage')
    s3_group.add_argument('--s3-endpoint', help='Override S3_ENDPOINT')
    s3_group.add_argument('--s3-bucket', help='Override S3_BUCKET')
    s3_group.add_argument('--s3-prefix', help='Override S3_PREFIX')
    s3_group.add_argument('--s3-access-key', help='Override S3_ACCESS_KEY')
    s3_group.add_argument('--s3-secret-key', help='Override S3_SECRET_KEY')


def add_generator_arguments(parser: argparse.ArgumentParser) -> None:
    """Add thumbnail generation arguments to a parser."""
    group = parser.add_argument_group('Thumbnails')
    group.add_argument('--size', action='append', type=parse_size, metavar='NAME:WxH[:crop]',
                       help='Size to generate (repeatable; default: WordPress core sizes)')
    group.add_argument('--quality', type=int, default=85, help='JPEG/WebP quality (default: 85)')
    group.add_argument('--big-image-threshold', type=int, default=DEFAULT_BIG_IMAGE_THRESHOLD,
                       help=f'Create a -scaled copy above this size, 0 disables '
                            f'(default: {DEFAULT_BIG_IMAGE_THRESHOLD})')
    group.add_argument('--webp', action='store_true', help='Also write .webp siblings')


def cmd_run(args: argparse.Namespace) -> int:
    """Execute run command (batch regeneration)."""
    logger = setup_logging(args.verbose)
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    try:
        context = build_context(args, logger)
    except InvalidConfigurationError:
        return 1
    except FileNotFoundError:
        logger.error(f"Catalog not found: {args.catalog}")
        return 1
    except Exception as e:
        logger.error(f"Failed to load catalog: {e}")
        return 1

    cursor = get_cursor(args, logger)

    if args.cadence:
        logger.info(f"Cadence: {args.cadence}s")
    if args.limit:
        logger.info(f"Test mode: limiting to {args.limit} assets")

    controller = BatchController(
        processor=ImageProcessor(context),
        catalog=context.catalog,
        cursor=cursor,
        cadence=args.cadence,
        dry_run=args.dry_run,
        logger=logger,
    )

    progress = None
    if not args.quiet:
        progress = BatchProgress(show_files=args.show_files, logger=logger)

    try:
        stats = controller.run_batch(
            ids=args.ids,
            resume=args.resume,
            start_over=args.start_over,
            progress=progress,
            limit=args.limit,
        )
    except KeyboardInterrupt:
        logger.info("Interrupted by user; run again with --resume to continue")
        return 130
    except Exception as e:
        logger.exception(f"Regeneration failed: {e}")
        return 1

    if not args.quiet:
        print()
        Reporter().report_batch(stats)

    return 0 if stats.failed == 0 else 1


def cmd_one(args: argparse.Namespace) -> int:
    """Execute one command (single asset)."""
    logger = setup_logging(args.verbose)
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    try:
        context = build_context(args, logger)
    except InvalidConfigurationError:
        return 1
    except FileNotFoundError:
        logger.error(f"Catalog not found: {args.catalog}")
        return 1
    except Exception as e:
        logger.error(f"Failed to load catalog: {e}")
        return 1

    try:
        result = ImageProcessor(context).process_one(args.id)
    except Exception as e:
        logger.exception(f"Regeneration failed: {e}")
        return 1

    Reporter().report_result(result, as_json=args.json)
    return 0 if result.success or result.skipped else 1


def cmd_status(args: argparse.Namespace) -> int:
    """Execute status command."""
    logger = setup_logging(args.verbose)

    try:
        catalog = Catalog.load(args.catalog)
    except FileNotFoundError:
        logger.error(f"Catalog not found: {args.catalog}")
        return 1
    except Exception as e:
        logger.error(f"Failed to load catalog: {e}")
        return 1

    Reporter().report_status(catalog, get_cursor(args, logger))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='thumbregen',
        description='Delete and force the regeneration of thumbnails',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  thumbregen run --catalog catalog.json --local-root /srv/uploads
  thumbregen run --catalog catalog.json --local-root /srv/uploads --ids 123,456
  thumbregen run --catalog catalog.json --local-root /srv/uploads --resume
  thumbregen run --catalog catalog.json --local-root /srv/uploads --start-over
  thumbregen one 42 --catalog catalog.json --local-root /srv/uploads --json
  thumbregen status --catalog catalog.json

Storage options:
  Use --local-root for local filesystem, or S3 environment variables for S3.
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Run command
    run_parser = subparsers.add_parser('run', help='Regenerate thumbnails for many assets')
    run_parser.add_argument('--catalog', required=True, help='Catalog JSON file')
    run_parser.add_argument('--ids', type=parse_ids, help='Comma-separated asset IDs (default: all)')
    run_parser.add_argument('--resume', action='store_true', help='Resume below the last processed asset')
    run_parser.add_argument('--start-over', action='store_true', help='Clear any previous resume point')
    run_parser.add_argument('--cursor-file', help='Resume cursor file (default: <catalog>.cursor.json)')
    run_parser.add_argument('-c', '--cadence', type=float, default=0.0, help='Seconds between assets')
    run_parser.add_argument('-n', '--dry-run', action='store_true', help='Show what would be done')
    run_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    run_parser.add_argument('--show-files', action='store_true',
                           help='Print each asset as processed with result')
    run_parser.add_argument('--limit', type=int, metavar='N',
                           help='Limit to N assets (for testing)')
    run_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_storage_arguments(run_parser)
    add_generator_arguments(run_parser)

    # One command
    one_parser = subparsers.add_parser('one', help='Regenerate thumbnails for a single asset')
    one_parser.add_argument('id', type=int, help='Asset ID')
    one_parser.add_argument('--catalog', required=True, help='Catalog JSON file')
    one_parser.add_argument('--json', action='store_true', help='Print the result as JSON')
    one_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_storage_arguments(one_parser)
    add_generator_arguments(one_parser)

    # Status command
    status_parser = subparsers.add_parser('status', help='Show the stored resume point')
    status_parser.add_argument('--catalog', required=True, help='Catalog JSON file')
    status_parser.add_argument('--cursor-file', help='Resume cursor file (default: <catalog>.cursor.json)')
    status_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'run':
        return cmd_run(parsed_args)
    elif parsed_args.command == 'one':
        return cmd_one(parsed_args)
    elif parsed_args.command == 'status':
        return cmd_status(parsed_args)

    return 1


if __name__ == '__main__':
    sys.exit(main())
