"""Parallel row scheduler that turns a scene into an accumulation buffer.

Each image row is one unit of work. Rows run on a fixed-size worker pool
and fan in to a single collector, which stores every finished row at its own
index, so the order in which rows complete does not matter. Rows never share
random state: every (row, sample pass) pair gets its own seeded generator,
which makes the output identical for any pool size.

Within a row, every pixel is split into a 2x2 sub-pixel grid. Each sub-pixel
averages its samples, the average is clamped to [0, 1] and weighted by 0.25
into the pixel. Clamping before the weighting trims rare very bright paths
(caustics through the glass ball) at the price of a slight bias.

Example:
    >>> from pathtracer.config import RenderConfig
    >>> from pathtracer.core.scheduler import render_image
    >>> from pathtracer.scene.smallpt import create_smallpt_scene
    >>>
    >>> scene, camera = create_smallpt_scene()
    >>> config = RenderConfig(width=32, height=24, samples=4, threads=4)
    >>> buffer = render_image(scene, camera, config)
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import (
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)

from pathtracer.camera.pinhole import PinholeCamera
from pathtracer.config import RenderConfig
from pathtracer.core.buffer import AccumulationBuffer
from pathtracer.core.integrator import radiance
from pathtracer.core.sampler import SampleGenerator
from pathtracer.core.vector import ZERO, Vec3
from pathtracer.errors import RenderCancelled, RenderError
from pathtracer.scene.scene import Scene

logger = logging.getLogger(__name__)

# Callback receives (rows_done, rows_total)
ProgressCallback = Callable[[int, int], None]

# Order of the 2x2 sub-pixel grid: sx outer, sy inner
SUBPIXELS = ((0, 0), (0, 1), (1, 0), (1, 1))


def render_row(
    scene: Scene,
    camera: PinholeCamera,
    y: int,
    width: int,
    height: int,
    samples_per_subpixel: int,
    seed: int,
    first_sample: int = 0,
) -> list[Vec3]:
    """Render one scanline.

    Every sample pass of the row draws from its own generator, seeded from
    (row, seed, sample_index) rather than from the row alone. A pass
    therefore produces the same numbers whether it runs in a full render or
    in a partial render starting at ``first_sample``.

    Args:
        scene: The frozen scene.
        camera: The camera generating primary rays.
        y: Row index (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_subpixel: Samples taken in each of the 4 sub-pixels.
        seed: Global render seed.
        first_sample: Index of the first sample pass.

    Returns:
        One averaged radiance value per pixel, left to right.
    """
    axes = camera.image_axes(width, height)
    sums = [[ZERO, ZERO, ZERO, ZERO] for _ in range(width)]

    for sample_index in range(first_sample, first_sample + samples_per_subpixel):
        rng = SampleGenerator.for_row(seed, y, sample_index)
        for x in range(width):
            pixel_sums = sums[x]
            for i, (sx, sy) in enumerate(SUBPIXELS):
                dx = rng.tent_sample()
                dy = rng.tent_sample()
                ray = camera.primary_ray(x, y, sx, sy, dx, dy, width, height, axes)
                pixel_sums[i] = pixel_sums[i] + radiance(scene, ray, 0, rng)

    line = []
    for pixel_sums in sums:
        pixel = ZERO
        for sub_sum in pixel_sums:
            pixel = pixel + (sub_sum / samples_per_subpixel).clamp() * 0.25
        line.append(pixel)
    return line


def _make_executor(config: RenderConfig) -> Executor:
    if config.executor == "process":
        return ProcessPoolExecutor(max_workers=config.threads)
    return ThreadPoolExecutor(max_workers=config.threads, thread_name_prefix="render")


def _cancel_pending(futures: dict[Future[list[Vec3]], int]) -> int:
    """Cancel every row that has not started; return how many were cancelled."""
    return sum(1 for future in futures if future.cancel())


def render_image(
    scene: Scene,
    camera: PinholeCamera,
    config: RenderConfig,
    progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
) -> AccumulationBuffer:
    """Render a full image across the worker pool.

    Blocks until every row has been collected. If a row fails, rows that have
    not started are cancelled, rows in flight are drained, and the failure is
    raised. Setting ``cancel`` stops the render at the next row boundary.

    Args:
        scene: The scene to render; it is frozen if it was not already.
        camera: The camera generating primary rays.
        config: Image size, sample count, pool size and seed.
        progress: Optional callback called after each collected row with
            (rows_done, rows_total).
        cancel: Optional event requesting cancellation.

    Returns:
        A complete buffer whose sample count is config.raw_sample_count.

    Raises:
        RenderError: If any row failed; chains the worker's exception.
        RenderCancelled: If ``cancel`` was set before all rows completed.
    """
    scene.freeze()
    width, height = config.width, config.height
    buffer = AccumulationBuffer(width, height, config.raw_sample_count)

    logger.info(
        "Rendering %dx%d at %d spp with %d %s workers",
        width,
        height,
        config.raw_sample_count,
        config.threads,
        config.executor,
    )
    start_time = time.perf_counter()

    error: BaseException | None = None
    failed_row = -1
    cancelled = False
    rows_done = 0

    with _make_executor(config) as pool:
        futures = {
            pool.submit(
                render_row,
                scene,
                camera,
                y,
                width,
                height,
                config.samples_per_subpixel,
                config.seed,
                config.first_sample,
            ): y
            for y in range(height)
        }

        for future in as_completed(futures):
            y = futures[future]
            if future.cancelled():
                continue
            exc = future.exception()
            if exc is not None:
                if error is None:
                    error, failed_row = exc, y
                    skipped = _cancel_pending(futures)
                    logger.error("Row %d failed, cancelled %d pending rows", y, skipped)
                continue

            buffer.store_row(y, future.result())
            rows_done += 1
            if progress is not None:
                progress(rows_done, height)

            if cancel is not None and cancel.is_set() and not cancelled and error is None:
                cancelled = True
                skipped = _cancel_pending(futures)
                logger.warning("Render cancelled after %d rows, %d skipped", rows_done, skipped)

    if error is not None:
        raise RenderError(f"Rendering row {failed_row} failed: {error}", failed_row) from error
    if cancelled and not buffer.complete:
        raise RenderCancelled(f"Render cancelled after {rows_done} of {height} rows", rows_done)

    logger.info("Rendered %d rows in %.2fs", height, time.perf_counter() - start_time)
    return buffer
