"""Tests for the accumulation buffer.

This module tests:
- Storing rows as radiance sums
- Row bookkeeping and validation
- Merging buffers and rejecting mismatched dimensions
- Normalization, including the zero-sample case
"""

import numpy as np
import pytest

from pathtracer.core.buffer import AccumulationBuffer
from pathtracer.core.vector import Vec3
from pathtracer.errors import DimensionMismatchError


def _filled(width, height, sample_count, value):
    radiance = np.full((height, width, 3), value, dtype=np.float64)
    return AccumulationBuffer(width, height, sample_count, radiance)


class TestStoreRow:
    """Test row storage."""

    def test_row_is_multiplied_by_sample_count(self):
        buffer = AccumulationBuffer(2, 1, sample_count=4)
        buffer.store_row(0, [Vec3(0.5, 0.25, 0.0), Vec3(1.0, 0.0, 0.0)])
        assert buffer.pixel(0, 0) == Vec3(2.0, 1.0, 0.0)
        assert buffer.pixel(1, 0) == Vec3(4.0, 0.0, 0.0)

    def test_complete_after_all_rows(self):
        buffer = AccumulationBuffer(1, 2, sample_count=1)
        assert not buffer.complete
        buffer.store_row(1, [Vec3(0.0, 0.0, 0.0)])
        assert not buffer.complete
        buffer.store_row(0, [Vec3(0.0, 0.0, 0.0)])
        assert buffer.complete

    def test_row_stored_twice_fails(self):
        buffer = AccumulationBuffer(1, 1, sample_count=1)
        buffer.store_row(0, [Vec3(0.0, 0.0, 0.0)])
        with pytest.raises(RuntimeError, match="already stored"):
            buffer.store_row(0, [Vec3(0.0, 0.0, 0.0)])

    def test_row_out_of_range(self):
        buffer = AccumulationBuffer(1, 1, sample_count=1)
        with pytest.raises(IndexError):
            buffer.store_row(1, [Vec3(0.0, 0.0, 0.0)])

    def test_row_wrong_length(self):
        buffer = AccumulationBuffer(2, 1, sample_count=1)
        with pytest.raises(ValueError, match="expected 2"):
            buffer.store_row(0, [Vec3(0.0, 0.0, 0.0)])


class TestBufferConstruction:
    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            AccumulationBuffer(0, 5)

    def test_wrong_radiance_shape(self):
        with pytest.raises(ValueError, match="does not match"):
            AccumulationBuffer(2, 2, 1, np.zeros((2, 3, 3)))

    def test_existing_radiance_is_complete(self):
        assert _filled(2, 2, 1, 0.5).complete


class TestMerge:
    """Test combining buffers."""

    def test_merge_sums_grids_and_counts(self):
        merged = _filled(3, 2, 4, 1.0).merge(_filled(3, 2, 12, 2.0))
        assert merged.sample_count == 16
        np.testing.assert_array_equal(merged.radiance, np.full((2, 3, 3), 3.0))

    def test_merge_rejects_mismatched_dimensions(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            _filled(10, 10, 4, 0.0).merge(_filled(20, 10, 4, 0.0))
        assert exc_info.value.expected == (10, 10)
        assert exc_info.value.actual == (20, 10)

    def test_merge_all(self):
        merged = AccumulationBuffer.merge_all(_filled(2, 2, n, 1.0) for n in (1, 2, 3))
        assert merged.sample_count == 6
        np.testing.assert_array_equal(merged.normalized(), np.full((2, 2, 3), 0.5))

    def test_merge_all_checks_every_buffer(self):
        buffers = [_filled(2, 2, 1, 1.0), _filled(2, 2, 1, 1.0), _filled(2, 3, 1, 1.0)]
        with pytest.raises(DimensionMismatchError):
            AccumulationBuffer.merge_all(buffers)

    def test_merge_all_empty(self):
        with pytest.raises(ValueError, match="No buffers"):
            AccumulationBuffer.merge_all([])


class TestNormalize:
    def test_normalized_divides_by_count(self):
        np.testing.assert_allclose(_filled(2, 2, 4, 2.0).normalized(), 0.5)

    def test_zero_samples_normalize_to_black(self):
        buffer = _filled(2, 2, 0, 5.0)
        np.testing.assert_array_equal(buffer.normalized(), np.zeros((2, 2, 3)))
