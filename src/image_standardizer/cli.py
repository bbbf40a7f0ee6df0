#!/usr/bin/env python3
"""
Main CLI entry point for the image standardizer.

Standardizes every image under the input path onto a white canvas and
optionally writes a zip archive and a CSV report.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.errors import SettingsError
from .core.export import OUTPUT_FORMATS, write_archive, write_report
from .core.models import Lifecycle, PaddingSpec
from .core.queue import BatchQueue
from .core.workers import BatchOrchestrator
from .settings import Settings, load_settings
from .ui.rich_ui import BatchProgressDisplay
from .utils.log_utils import configure_logging, get_logger
from .utils.utils import iter_image_files

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Center product photos on uniform white canvases and export them in bulk.'
    )
    parser.add_argument('input', help='Image file or directory of images')
    parser.add_argument('-o', '--output',
                        help='Zip archive to write the standardized images to')
    parser.add_argument('--report',
                        help='CSV file to write the per-image report to')
    parser.add_argument('--settings',
                        help='JSON settings file (canvas, padding, concurrency, output_format)')
    parser.add_argument('--width', type=int,
                        help='Canvas width in pixels (default: 2000)')
    parser.add_argument('--height', type=int,
                        help='Canvas height in pixels (default: 2000)')
    parser.add_argument('--padding', type=int, nargs=4, metavar=('TOP', 'BOTTOM', 'LEFT', 'RIGHT'),
                        help='Safe zone padding in pixels (default: 150 on every side)')
    parser.add_argument('--concurrency', type=int,
                        help='Images processed at once per window (default: 4)')
    parser.add_argument('--format', choices=sorted(OUTPUT_FORMATS),
                        help='Format of the images in the archive (default: jpeg)')
    parser.add_argument('--no-progress', action='store_true',
                        help='Disable the progress bar')
    parser.add_argument('--log-level',
                        choices=['debug', 'info', 'warning', 'error', 'critical', 'none'],
                        default='warning',
                        help="Set logging level (default: warning; 'none' disables logging)")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Combine the optional settings file with command-line overrides."""
    settings = load_settings(Path(args.settings)) if args.settings else Settings()
    try:
        padding = PaddingSpec(*args.padding) if args.padding else None
    except ValueError as e:
        raise SettingsError(str(e)) from e
    return settings.with_overrides(
        width=args.width,
        height=args.height,
        padding=padding,
        concurrency=args.concurrency,
        output_format=args.format,
    )


async def run_batch(queue: BatchQueue, settings: Settings, show_progress: bool = True) -> BatchQueue:
    """Standardize every unfinished item of `queue` with a progress display."""
    display = BatchProgressDisplay(total=len(queue), enabled=show_progress)
    orchestrator = BatchOrchestrator(
        concurrency=settings.concurrency,
        on_item_update=display.on_item_update,
        on_progress=display.on_progress,
    )
    with display:
        await orchestrator.run(queue.items, settings.canvas)
    display.print_summary(queue.items)
    return queue


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.log_level.lower() != 'none':
        configure_logging(getattr(logging, args.log_level.upper()))

    root = Path(args.input)
    if not root.exists():
        print(f"Error: Path '{root}' does not exist.", file=sys.stderr)
        return 1

    try:
        settings = build_settings(args)
    except SettingsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    paths = list(iter_image_files(root))
    if not paths:
        print(f"No images found under {root}", file=sys.stderr)
        return 1

    canvas = settings.canvas
    logger.info(f"Standardizing {len(paths)} images onto {canvas.width}x{canvas.height} "
                f"(safe zone {canvas.safe_zone_width}x{canvas.safe_zone_height})")

    queue = BatchQueue()
    queue.add_files(paths)
    asyncio.run(run_batch(queue, settings, show_progress=not args.no_progress))

    if args.output:
        write_archive(queue.items, Path(args.output), settings.output_format)
    if args.report:
        write_report(queue.items, Path(args.report))

    return 0 if queue.counts().get(Lifecycle.FAILED, 0) == 0 else 3


if __name__ == "__main__":
    sys.exit(main())
