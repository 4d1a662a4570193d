#!/usr/bin/env python3
"""Render the smallpt room progressively.

This script demonstrates end-to-end rendering of the classic smallpt room:
it builds the scene, then accumulates samples batch by batch with the
progressive renderer and reports progress after every batch. Intermediate
snapshots can be written so the image can be watched as it converges.

Usage:
    python examples/render_smallpt.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 256)
    --height HEIGHT     Image height in pixels (default: 192)
    --samples SAMPLES   Number of samples per pixel (default: 64)
    --output OUTPUT     Output file path (default: smallpt.png)
    --batch-size SIZE   Samples per progress update (default: 8)
    --snapshots         Save the image after every batch
    --quiet             Suppress progress output

Example:
    python examples/render_smallpt.py --width 160 --height 120 --samples 32
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from pathtracer.core.progressive import ProgressiveRenderer
from pathtracer.errors import PathTracerError
from pathtracer.output.image import save_png
from pathtracer.scene.smallpt import create_smallpt_scene


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the smallpt room progressively.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=256, help="Image width in pixels (default: 256)")
    parser.add_argument("--height", type=int, default=192, help="Image height in pixels (default: 192)")
    parser.add_argument("--samples", type=int, default=64, help="Samples per pixel (default: 64)")
    parser.add_argument(
        "--output",
        type=str,
        default="smallpt.png",
        help="Output file path (default: smallpt.png)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=8,
        help="Samples per progress update (default: 8)",
    )
    parser.add_argument("--snapshots", action="store_true", help="Save the image after every batch")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args()


def render_smallpt(
    width: int = 256,
    height: int = 192,
    num_samples: int = 64,
    output_path: str = "smallpt.png",
    batch_size: int = 8,
    snapshots: bool = False,
    quiet: bool = False,
) -> Path:
    """Render the smallpt room and save it to a PNG file.

    Returns:
        Path to the saved image file.
    """
    if not quiet:
        print(f"Creating smallpt scene ({width}x{height})...")
    scene, camera = create_smallpt_scene()
    renderer = ProgressiveRenderer(scene, camera, width, height)
    output_file = Path(output_path)

    if not quiet:
        print(f"Rendering {num_samples} samples per pixel...")
    start_time = time.time()

    for current, target in renderer.render_progressive(num_samples, batch_size):
        if snapshots:
            save_png(renderer.buffer, output_file)
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            samples_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{target} samples "
                f"({progress_pct:.1f}%) - {samples_per_sec:.1f} spp/s",
                end="",
                flush=True,
            )

    if not quiet:
        print()

    save_png(renderer.buffer, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    try:
        render_smallpt(
            width=args.width,
            height=args.height,
            num_samples=args.samples,
            output_path=args.output,
            batch_size=args.batch_size,
            snapshots=args.snapshots,
            quiet=args.quiet,
        )
        return 0
    except (PathTracerError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
