"""Command-line entry points.

Two commands are installed:

    pathtracer-render   Render the built-in smallpt scene to a PNG or partial file
    pathtracer-merge    Merge partial renders into one PNG (or partial) file

Usage:
    pathtracer-render -w 320 -H 240 -s 64 -o smallpt.png
    pathtracer-render -w 320 -H 240 -s 32 --partial -o a.part
    pathtracer-render -w 320 -H 240 -s 32 --partial --first-sample 8 -o b.part
    pathtracer-merge -o smallpt.png a.part b.part
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from pathtracer import __version__
from pathtracer.config import DEFAULT_SEED, RenderConfig, default_thread_count
from pathtracer.errors import PathTracerError

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(threadName)s] %(message)s"


def configure_logging(quiet: bool = False) -> None:
    """Send log records to stderr, tagged with time and thread name."""
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _seed(value: str) -> int:
    # Accept decimal, hex (0x...) and octal/binary prefixes
    seed = int(value, 0)
    if seed < 0:
        raise argparse.ArgumentTypeError(f"seed must be non-negative, got {value}")
    return seed


def build_render_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the render command."""
    parser = argparse.ArgumentParser(
        prog="pathtracer-render",
        description="Render the smallpt scene with a Monte Carlo path tracer.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="",
        help="Output file path (image.part with --partial, image.png otherwise)",
    )
    parser.add_argument("-w", "--width", type=int, default=1024, help="Image width in pixels")
    parser.add_argument("-H", "--height", type=int, default=768, help="Image height in pixels")
    parser.add_argument(
        "-s",
        "--samples",
        type=int,
        default=4,
        help="Samples per pixel (split over the 2x2 sub-pixel grid)",
    )
    parser.add_argument(
        "--num-threads",
        type=int,
        default=default_thread_count(),
        help="Number of render workers",
    )
    parser.add_argument("--seed", type=_seed, default=DEFAULT_SEED, help="Global random seed")
    parser.add_argument(
        "--partial",
        action="store_true",
        help="Write the mergeable partial format instead of a PNG",
    )
    parser.add_argument(
        "--first-sample",
        type=int,
        default=0,
        help="Index of the first sample pass, for splitting a render into partials",
    )
    parser.add_argument(
        "--executor",
        choices=("thread", "process"),
        default="thread",
        help="Worker pool kind",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_merge_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the merge command."""
    parser = argparse.ArgumentParser(
        prog="pathtracer-merge",
        description="Merge partial renders of the same image.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="image.png",
        help="Output file path; a .part suffix writes a merged partial",
    )
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("inputs", nargs="+", help="Partial render files")
    return parser


def _progress_printer(quiet: bool):
    """Return a row progress callback printing a carriage-return status line."""
    start_time = time.perf_counter()

    def progress_callback(rows_done: int, rows_total: int) -> None:
        if quiet:
            return
        elapsed = time.perf_counter() - start_time
        progress_pct = (rows_done / rows_total) * 100 if rows_total > 0 else 0
        rows_per_sec = rows_done / elapsed if elapsed > 0 else 0
        print(
            f"\r  Progress: {rows_done}/{rows_total} rows "
            f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
            end="",
            flush=True,
        )
        if rows_done == rows_total:
            print()

    return progress_callback


def run_render(config: RenderConfig, quiet: bool = False) -> Path:
    """Render the smallpt scene with ``config`` and write the result.

    Returns:
        Path to the written file.
    """
    # Deferred so that argument errors are reported without loading numpy
    from pathtracer.core.scheduler import render_image
    from pathtracer.output.image import save_png
    from pathtracer.output.partial import write_partial
    from pathtracer.scene.smallpt import create_smallpt_scene

    scene, camera = create_smallpt_scene()
    logger.info("Scene: %r", scene)

    buffer = render_image(scene, camera, config, progress=_progress_printer(quiet))

    output_file = Path(config.output_path)
    if config.partial:
        write_partial(buffer, output_file)
    else:
        save_png(buffer, output_file)
    return output_file


def run_merge(inputs: Sequence[str], output: str) -> Path:
    """Merge partial files and write a PNG, or a partial for a .part output.

    Returns:
        Path to the written file.
    """
    from pathtracer.output.image import save_png
    from pathtracer.output.partial import merge_partials, write_partial

    merged = merge_partials(inputs)
    output_file = Path(output)
    if output_file.suffix == ".part":
        write_partial(merged, output_file)
    else:
        save_png(merged, output_file)
    return output_file


def render_main(argv: Sequence[str] | None = None) -> int:
    """Entry point of ``pathtracer-render``."""
    parser = build_render_parser()
    args = parser.parse_args(argv)
    configure_logging(args.quiet)

    try:
        config = RenderConfig(
            width=args.width,
            height=args.height,
            samples=args.samples,
            threads=args.num_threads,
            seed=args.seed,
            first_sample=args.first_sample,
            partial=args.partial,
            output=args.output,
            executor=args.executor,
        )
    except ValueError as e:
        parser.error(str(e))

    start_time = time.perf_counter()
    try:
        output_file = run_render(config, quiet=args.quiet)
    except (PathTracerError, OSError) as e:
        logger.error("Render failed: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    logger.info("Saved to: %s (%.2fs)", output_file.absolute(), time.perf_counter() - start_time)
    return 0


def merge_main(argv: Sequence[str] | None = None) -> int:
    """Entry point of ``pathtracer-merge``."""
    args = build_merge_parser().parse_args(argv)
    configure_logging(args.quiet)

    try:
        output_file = run_merge(args.inputs, args.output)
    except (PathTracerError, OSError) as e:
        logger.error("Merge failed: %s", e)
        return 1

    logger.info("Saved to: %s", output_file.absolute())
    return 0


if __name__ == "__main__":
    sys.exit(render_main())
