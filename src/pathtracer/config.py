"""Render configuration.

RenderConfig gathers every option of a render invocation. It is validated
on construction so bad parameters fail before any work is scheduled.

Example:
    >>> from pathtracer.config import RenderConfig
    >>> config = RenderConfig(width=64, height=48, samples=16, threads=4)
    >>> config.samples_per_subpixel
    4
    >>> config.raw_sample_count
    16
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal

# Seed used when none is given
DEFAULT_SEED = 0x193A6754

# Pool implementation used to run row work units
ExecutorKind = Literal["thread", "process"]


def default_thread_count() -> int:
    """Number of workers to use when none is configured."""
    return os.cpu_count() or 1


@dataclass
class RenderConfig:
    """Options for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Requested samples per pixel. Each pixel is split into a 2x2
            sub-pixel grid, so this is divided by 4 (at least 1 per
            sub-pixel).
        threads: Worker pool size.
        seed: Global random seed (non-negative).
        first_sample: Index of the first sample pass; lets several partial
            renders cover disjoint sample ranges of the same image.
        partial: Write the partial text format instead of a PNG.
        output: Output path; empty selects image.part or image.png.
        executor: "thread" or "process" worker pool.
    """

    width: int = 1024
    height: int = 768
    samples: int = 4
    threads: int = field(default_factory=default_thread_count)
    seed: int = DEFAULT_SEED
    first_sample: int = 0
    partial: bool = False
    output: str = ""
    executor: ExecutorKind = "thread"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.samples <= 0:
            raise ValueError(f"Samples per pixel must be positive, got {self.samples}")
        if self.threads <= 0:
            raise ValueError(f"Thread count must be positive, got {self.threads}")
        if self.seed < 0:
            raise ValueError(f"Seed must be non-negative, got {self.seed}")
        if self.first_sample < 0:
            raise ValueError(f"First sample index must be non-negative, got {self.first_sample}")
        if self.executor not in ("thread", "process"):
            raise ValueError(f"Unknown executor: {self.executor}")

    @property
    def samples_per_subpixel(self) -> int:
        """Samples drawn in each of the 4 sub-pixels."""
        return max(1, self.samples // 4)

    @property
    def raw_sample_count(self) -> int:
        """Camera rays per pixel actually traced (4 x samples per sub-pixel)."""
        return 4 * self.samples_per_subpixel

    @property
    def output_path(self) -> str:
        """The configured output path, or the default for the output kind."""
        if self.output:
            return self.output
        return "image.part" if self.partial else "image.png"
