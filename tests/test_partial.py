"""Tests for the partial render format.

This module tests:
- Writing and reading partial files without loss
- Distinct errors for malformed headers, rows and row counts
- Merging partial files and rejecting mismatched dimensions
"""

import numpy as np
import pytest

from pathtracer.core.buffer import AccumulationBuffer
from pathtracer.errors import (
    DimensionMismatchError,
    HeaderFormatError,
    PartialFormatError,
    RowCountError,
    RowWidthError,
)
from pathtracer.output.partial import (
    format_partial,
    merge_partials,
    parse_partial,
    read_partial,
    write_partial,
)


def _buffer(width, height, sample_count, seed=0):
    radiance = np.random.default_rng(seed).random((height, width, 3)) * sample_count
    return AccumulationBuffer(width, height, sample_count, radiance)


def _write(path, text):
    path.write_text(text)
    return path


class TestPartialWriteRead:
    """Test the text representation."""

    def test_header_and_rows(self):
        lines = list(format_partial(_buffer(3, 2, 8)))
        assert lines[0] == "3 2 8\n"
        assert len(lines) == 3
        assert len(lines[1].split()) == 9

    def test_round_trip_is_exact(self, tmp_path):
        buffer = _buffer(5, 4, 16, seed=1)
        path = tmp_path / "image.part"
        write_partial(buffer, path)
        loaded = read_partial(path)
        assert loaded.shape == buffer.shape
        assert loaded.sample_count == 16
        np.testing.assert_array_equal(loaded.radiance, buffer.radiance)

    def test_trailing_blank_lines_ignored(self):
        loaded = parse_partial(["1 1 4\n", "1.0 2.0 3.0\n", "\n", "   \n"])
        assert loaded.pixel(0, 0) == (1.0, 2.0, 3.0)


class TestPartialErrors:
    """Test that malformed files fail with specific errors."""

    @pytest.mark.parametrize("header", ["", "10 10\n", "10 10 4 1\n", "a b c\n", "10 -1 4\n"])
    def test_bad_header(self, header):
        with pytest.raises(HeaderFormatError):
            parse_partial([header])

    def test_row_with_wrong_width(self):
        with pytest.raises(RowWidthError) as exc_info:
            parse_partial(["2 1 4\n", "1 2 3\n"])
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 1

    def test_blank_line_between_rows(self):
        """Test that a blank line followed by more data is an empty row."""
        with pytest.raises(RowWidthError, match="line 3") as exc_info:
            parse_partial(["2 2 4\n", "1 2 3 4 5 6\n", "\n", "1 2 3 4 5 6\n"])
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 0

    def test_too_few_rows(self):
        with pytest.raises(RowCountError) as exc_info:
            parse_partial(["1 3 4\n", "1 2 3\n", "1 2 3\n"])
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2

    def test_too_many_rows(self):
        with pytest.raises(RowCountError):
            parse_partial(["1 1 4\n", "1 2 3\n", "1 2 3\n"])

    def test_error_names_the_file(self, tmp_path):
        path = _write(tmp_path / "broken.part", "1 1\n1 2 3\n")
        with pytest.raises(PartialFormatError, match="broken.part") as exc_info:
            read_partial(path)
        assert exc_info.value.filename == str(path)

    def test_errors_are_value_errors(self):
        assert issubclass(RowCountError, ValueError)
        assert not issubclass(RowWidthError, RowCountError)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_partial(tmp_path / "missing.part")


class TestMergePartials:
    """Test merging partial files."""

    def test_merge_sums(self, tmp_path):
        a, b = _buffer(4, 3, 8, seed=1), _buffer(4, 3, 4, seed=2)
        write_partial(a, tmp_path / "a.part")
        write_partial(b, tmp_path / "b.part")

        merged = merge_partials([tmp_path / "a.part", tmp_path / "b.part"])

        assert merged.sample_count == 12
        np.testing.assert_allclose(merged.radiance, a.radiance + b.radiance)

    def test_merge_rejects_mismatched_dimensions(self, tmp_path):
        """Test that a 10x10 and a 20x10 partial cannot be merged."""
        write_partial(_buffer(10, 10, 4), tmp_path / "small.part")
        write_partial(_buffer(20, 10, 4), tmp_path / "wide.part")

        with pytest.raises(DimensionMismatchError, match="wide.part") as exc_info:
            merge_partials([tmp_path / "small.part", tmp_path / "wide.part"])
        assert exc_info.value.filename == str(tmp_path / "wide.part")
        assert exc_info.value.expected == (10, 10)
        assert exc_info.value.actual == (20, 10)

    def test_merge_aborts_on_bad_file(self, tmp_path):
        write_partial(_buffer(2, 2, 4), tmp_path / "good.part")
        _write(tmp_path / "bad.part", "2 2 4\n1 2 3\n")
        with pytest.raises(RowWidthError):
            merge_partials([tmp_path / "good.part", tmp_path / "bad.part"])

    def test_merge_nothing(self):
        with pytest.raises(ValueError):
            merge_partials([])
