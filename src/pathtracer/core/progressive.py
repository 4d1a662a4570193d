"""Progressive renderer for iterative sample accumulation.

This module provides a convenient wrapper around the row scheduler that
supports:
- Progressive rendering that refines over time
- Batch rendering (several sample passes per call)
- Progress callbacks and a generator interface for UI updates
- Easy reset and re-render functionality

Every batch renders the next range of sample passes and merges the result
into the running buffer. Because generators are seeded per sample pass,
rendering 8 samples in two batches of 4 produces the same image as one
render of 8 (up to the per-sub-pixel clamp).

Example:
    >>> from pathtracer.core.progressive import ProgressiveRenderer
    >>> from pathtracer.scene.smallpt import create_smallpt_scene
    >>>
    >>> scene, camera = create_smallpt_scene()
    >>> renderer = ProgressiveRenderer(scene, camera, 64, 48, threads=4)
    >>> renderer.render(16, batch_size=4)  # 16 samples per pixel
    >>> image = renderer.get_image_numpy()
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from pathtracer.camera.pinhole import PinholeCamera
from pathtracer.config import DEFAULT_SEED, ExecutorKind, RenderConfig, default_thread_count
from pathtracer.core.buffer import AccumulationBuffer
from pathtracer.core.scheduler import render_image
from pathtracer.scene.scene import Scene

# Callback receives (current_samples, target_samples), counted per pixel
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """A renderer that accumulates samples over successive calls.

    Attributes:
        scene: The frozen scene being rendered.
        camera: The camera generating primary rays.
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(
        self,
        scene: Scene,
        camera: PinholeCamera,
        width: int,
        height: int,
        *,
        threads: int | None = None,
        seed: int = DEFAULT_SEED,
        executor: ExecutorKind = "thread",
    ) -> None:
        """Initialize the progressive renderer.

        Args:
            scene: The scene to render.
            camera: The camera generating primary rays.
            width: Image width in pixels.
            height: Image height in pixels.
            threads: Worker pool size; defaults to the CPU count.
            seed: Global random seed.
            executor: "thread" or "process" worker pool.
        """
        self.scene = scene.freeze()
        self.camera = camera
        self._config = RenderConfig(
            width=width,
            height=height,
            threads=threads or default_thread_count(),
            seed=seed,
            executor=executor,
        )
        self._buffer: AccumulationBuffer | None = None
        self._next_pass = 0

    @property
    def width(self) -> int:
        return self._config.width

    @property
    def height(self) -> int:
        return self._config.height

    @property
    def sample_count(self) -> int:
        """Number of camera rays accumulated per pixel so far."""
        return 0 if self._buffer is None else self._buffer.sample_count

    @property
    def buffer(self) -> AccumulationBuffer:
        """The running accumulation buffer (empty before the first batch)."""
        if self._buffer is None:
            return AccumulationBuffer(self.width, self.height)
        return self._buffer

    def reset(self) -> None:
        """Discard accumulated samples and start again from sample pass 0."""
        self._buffer = None
        self._next_pass = 0

    def _render_passes(self, passes: int) -> None:
        config = dataclasses.replace(
            self._config,
            samples=4 * passes,
            first_sample=self._next_pass,
        )
        batch = render_image(self.scene, self.camera, config)
        self._buffer = batch if self._buffer is None else self._buffer.merge(batch)
        self._next_pass += passes

    def render(
        self,
        num_samples: int = 4,
        batch_size: int = 4,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render samples progressively with optional progress callback.

        Sample counts are per pixel and rounded down to whole passes of the
        2x2 sub-pixel grid (at least one pass).

        Args:
            num_samples: Samples per pixel to add.
            batch_size: Samples per pixel rendered between callbacks.
            callback: Optional function receiving (current_samples,
                target_samples) after each batch.
        """
        for current, target in self.render_progressive(num_samples, batch_size):
            if callback is not None:
                callback(current, target)

    def render_progressive(
        self,
        num_samples: int = 4,
        batch_size: int = 4,
    ) -> Generator[tuple[int, int], None, None]:
        """Render samples progressively, yielding progress after each batch.

        Yields:
            Tuple of (current_samples, target_samples).
        """
        if num_samples <= 0:
            return

        remaining = max(1, num_samples // 4)
        passes_per_batch = max(1, batch_size // 4)
        target = self.sample_count + 4 * remaining

        while remaining > 0:
            passes = min(passes_per_batch, remaining)
            self._render_passes(passes)
            remaining -= passes
            yield (self.sample_count, target)

    def get_image_numpy(self) -> npt.NDArray[np.float64]:
        """Average radiance per pixel, shape (height, width, 3), linear."""
        return self.buffer.normalized()

    def __repr__(self) -> str:
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"samples={self.sample_count})"
        )
