"""
Command Line Interface for derivative generation.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import PipelineConfig
from .derivative_generator import DerivativeGenerator
from .errors import PipelineError
from .generation_progress import GenerationProgress
from .generator import Generator
from .packager import Packager
from .scanner import Scanner
from .scanner_progress import ScannerProgress


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('PIL').setLevel(logging.WARNING)

    return logging.getLogger('photoderiv')


def get_config(args: argparse.Namespace) -> PipelineConfig:
    """Get pipeline configuration from environment and CLI overrides."""
    config = PipelineConfig.from_env(
        Path(args.input_dir),
        output_root=args.output,
        widths=tuple(args.width) if args.width else None,
        workers=args.workers,
    )
    if not args.no_archive:
        if args.archive:
            config.archive_path = Path(args.archive)
        else:
            config.archive_path = config.output_root.parent / f"{config.output_root.name}.zip"
    return config


def cmd_run(args: argparse.Namespace) -> int:
    """Scan the input tree, generate derivatives, then package the output."""
    logger = setup_logging(args.verbose)

    try:
        config = get_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    errors = config.validate()
    if args.limit is not None and args.limit < 1:
        errors.append(f"Limit must be at least 1, got {args.limit}")
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    logger.info(f"Input: {config.input_dir}")
    logger.info(f"Output: {config.output_root}")
    logger.info(f"Widths: {', '.join(str(w) for w in config.widths)}")
    if config.archive_path:
        logger.info(f"Archive: {config.archive_path}")

    if args.limit is not None:
        logger.info(f"Test mode: limiting to {args.limit} images")

    if args.show_files:
        logger.info("Show-files mode: will print each file")

    generator = None
    try:
        scanner = Scanner(config.build_classifier(), logger)
        scan_progress = None
        if not args.quiet:
            scan_progress = ScannerProgress(show_files=args.show_files, logger=logger)
        assets = scanner.scan(config.input_dir, progress=scan_progress)

        derivative_gen = DerivativeGenerator(quality=config.quality, logger=logger)
        generator = Generator(
            derivative_generator=derivative_gen,
            widths=config.widths,
            output_root=config.output_root,
            workers=config.workers,
            dry_run=args.dry_run,
            logger=logger
        )

        progress = None
        if not args.quiet:
            progress = GenerationProgress(show_files=args.show_files, logger=logger)

        stats = generator.generate_all(assets, progress=progress, limit=args.limit)

        if config.archive_path and not args.dry_run:
            Packager(logger).archive(config.output_root, config.archive_path)

        if not args.quiet:
            print()
            print(f"Source images: {stats.total_to_process}")
            print(f"Files written: {stats.files_generated}")
            print(f"Already present: {stats.files_skipped}")
            print(f"Errors: {stats.errors}")
            print(f"Time: {stats.elapsed_seconds:.1f}s")
            for detail in stats.error_details:
                print(f"  {detail}")

        # Per-asset failures are reported above but do not fail the run
        return 0

    except KeyboardInterrupt:
        if generator:
            generator.stop()
        logger.info("Interrupted by user")
        return 130
    except PipelineError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Run failed: {e}")
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='photoderiv',
        description='Orientation-corrected, width-scaled image derivatives',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output layout:
  <output>/<dir>/<name>.<ext>           orientation-corrected original
  <output>/<width>/<dir>/<name>.<ext>   one scaled copy per width

Re-running over the same input only writes files that are missing.

Environment:
  PHOTODERIV_WIDTHS   comma-separated widths (default: 20,200,400,600,800,1000,1200)
  PHOTODERIV_WORKERS  worker threads (default: CPU count)
  PHOTODERIV_QUALITY  JPEG/WEBP quality (default: 85)
"""
    )

    parser.add_argument('input_dir', nargs='?', metavar='INPUT_DIR', help='Directory of source images')
    parser.add_argument('-o', '--output', type=Path, metavar='DIR',
                        help='Output root (default: INPUT_DIR/default)')
    archive_group = parser.add_mutually_exclusive_group()
    archive_group.add_argument('-a', '--archive', metavar='PATH',
                               help='ZIP archive to write (default: OUTPUT.zip)')
    archive_group.add_argument('--no-archive', action='store_true', help='Skip packaging')
    parser.add_argument('-w', '--width', type=int, action='append', metavar='PX',
                        help='Derivative width; repeat for several (overrides the preset list)')
    parser.add_argument('-j', '--workers', type=int, metavar='N', help='Worker threads')
    parser.add_argument('-n', '--dry-run', action='store_true', help='Show what would be done')
    parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    parser.add_argument('--show-files', action='store_true',
                        help='Print each file as scanned and processed')
    parser.add_argument('--limit', type=int, metavar='N',
                        help='Limit to N source images (for testing)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.input_dir:
        parser.print_usage(sys.stderr)
        return 1

    return cmd_run(parsed_args)
