"""Accumulation buffer for rendered radiance.

The buffer stores, per pixel, the radiance sum over every sample taken,
together with one sample count shared by the whole grid. Storing sums rather
than averages is what makes buffers from independent renders combine by
plain addition.

Example:
    >>> from pathtracer.core.buffer import AccumulationBuffer
    >>> from pathtracer.core.vector import Vec3
    >>> buffer = AccumulationBuffer(2, 1, sample_count=4)
    >>> buffer.store_row(0, [Vec3(0.5, 0.5, 0.5), Vec3(1.0, 0.0, 0.0)])
    >>> buffer.pixel(1, 0)
    Vec3(x=4.0, y=0.0, z=0.0)
    >>> buffer.normalized()[0, 1].tolist()
    [1.0, 0.0, 0.0]
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
import numpy.typing as npt

from pathtracer.core.vector import Vec3
from pathtracer.errors import DimensionMismatchError


class AccumulationBuffer:
    """A height x width grid of radiance sums plus a shared sample count.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        sample_count: Samples accumulated into every pixel.
        radiance: float64 array of shape (height, width, 3) with the sums.
    """

    def __init__(
        self,
        width: int,
        height: int,
        sample_count: int = 0,
        radiance: npt.NDArray[np.float64] | None = None,
    ) -> None:
        """Create a buffer.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            sample_count: Samples each pixel holds (or will hold once every
                row has been stored).
            radiance: Optional existing sums of shape (height, width, 3); the
                buffer is then considered complete.

        Raises:
            ValueError: If the dimensions are not positive, the sample count is
                negative or the radiance array has the wrong shape.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {width}x{height}")
        if sample_count < 0:
            raise ValueError(f"Sample count must be non-negative, got {sample_count}")

        self.width = width
        self.height = height
        self.sample_count = sample_count

        if radiance is None:
            self.radiance = np.zeros((height, width, 3), dtype=np.float64)
            self._stored = np.zeros(height, dtype=bool)
        else:
            radiance = np.asarray(radiance, dtype=np.float64)
            if radiance.shape != (height, width, 3):
                raise ValueError(
                    f"Radiance array shape {radiance.shape} does not match "
                    f"{(height, width, 3)}"
                )
            self.radiance = radiance
            self._stored = np.ones(height, dtype=bool)

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width) of the grid."""
        return self.height, self.width

    @property
    def complete(self) -> bool:
        """True once every row has been stored."""
        return bool(self._stored.all())

    def store_row(self, y: int, pixels: Sequence[Vec3]) -> None:
        """Store one row of per-pixel sample averages.

        The averages are multiplied by sample_count so the buffer keeps sums.

        Args:
            y: Row index (0 = top).
            pixels: One averaged radiance value per pixel.

        Raises:
            IndexError: If the row index is out of range.
            ValueError: If the row has the wrong length.
            RuntimeError: If the row was already stored.
        """
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} out of range for height {self.height}")
        if len(pixels) != self.width:
            raise ValueError(f"Row {y} has {len(pixels)} pixels, expected {self.width}")
        if self._stored[y]:
            raise RuntimeError(f"Row {y} was already stored")
        self.radiance[y] = np.asarray(pixels, dtype=np.float64) * self.sample_count
        self._stored[y] = True

    def pixel(self, x: int, y: int) -> Vec3:
        """Return the radiance sum of one pixel."""
        return Vec3(*self.radiance[y, x].tolist())

    def merge(self, other: AccumulationBuffer) -> AccumulationBuffer:
        """Combine two buffers into a new one.

        Raises:
            DimensionMismatchError: If the buffers differ in width or height.
        """
        if other.shape != self.shape:
            raise DimensionMismatchError(
                f"Cannot merge a {other.width}x{other.height} buffer into "
                f"a {self.width}x{self.height} buffer",
                expected=(self.width, self.height),
                actual=(other.width, other.height),
            )
        return AccumulationBuffer(
            self.width,
            self.height,
            self.sample_count + other.sample_count,
            self.radiance + other.radiance,
        )

    @classmethod
    def merge_all(cls, buffers: Iterable[AccumulationBuffer]) -> AccumulationBuffer:
        """Sum any number of buffers.

        All dimensions are checked before anything is summed.

        Raises:
            ValueError: If no buffers are given.
            DimensionMismatchError: If any buffer differs from the first.
        """
        buffers = list(buffers)
        if not buffers:
            raise ValueError("No buffers to merge")
        first = buffers[0]
        for other in buffers[1:]:
            if other.shape != first.shape:
                raise DimensionMismatchError(
                    f"Cannot merge a {other.width}x{other.height} buffer with "
                    f"a {first.width}x{first.height} buffer",
                    expected=(first.width, first.height),
                    actual=(other.width, other.height),
                )
        total = np.sum([buffer.radiance for buffer in buffers], axis=0)
        count = sum(buffer.sample_count for buffer in buffers)
        return cls(first.width, first.height, count, total)

    def normalized(self) -> npt.NDArray[np.float64]:
        """Average radiance per pixel, shape (height, width, 3).

        A buffer without samples normalizes to black.
        """
        if self.sample_count == 0:
            return np.zeros_like(self.radiance)
        return self.radiance / self.sample_count

    def __repr__(self) -> str:
        return (
            f"AccumulationBuffer(width={self.width}, height={self.height}, "
            f"samples={self.sample_count})"
        )
