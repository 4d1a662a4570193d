"""Partial render text format and merging.

A partial render lets one image be rendered in pieces (different machines,
different sample ranges) and combined later. The format is plain text:

    <width> <height> <raw_sample_count>
    x y z x y z ...          (height lines of width triples)

Each triple is a pixel's radiance sum, i.e. its average pre-multiplied by
raw_sample_count, so merging partials is per-channel addition of the grids
and of the counts. Floats are written with repr() and read back exactly.

Example:
    >>> from pathtracer.output.partial import merge_partials, write_partial
    >>> write_partial(buffer, "a.part")  # doctest: +SKIP
    >>> merged = merge_partials(["a.part", "b.part"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

import numpy as np

from pathtracer.core.buffer import AccumulationBuffer
from pathtracer.errors import (
    DimensionMismatchError,
    HeaderFormatError,
    RowCountError,
    RowWidthError,
)

logger = logging.getLogger(__name__)


def format_partial(buffer: AccumulationBuffer) -> Iterator[str]:
    """Yield the lines (with newlines) of a buffer in the partial format."""
    yield f"{buffer.width} {buffer.height} {buffer.sample_count}\n"
    for row in buffer.radiance:
        yield " ".join(repr(value) for value in row.reshape(-1).tolist()) + "\n"


def write_partial(buffer: AccumulationBuffer, filepath: str | Path) -> None:
    """Write a buffer to a partial render file.

    Raises:
        OSError: If the file cannot be created.
    """
    with open(filepath, "w", encoding="ascii") as f:
        f.writelines(format_partial(buffer))
    logger.info(
        "Wrote partial %dx%d image with %d samples to %s",
        buffer.width,
        buffer.height,
        buffer.sample_count,
        filepath,
    )


def _parse_header(line: str, filename: str | None) -> tuple[int, int, int]:
    words = line.split()
    if len(words) != 3:
        raise HeaderFormatError(
            f"header must hold 3 integers, found {len(words)} fields",
            filename=filename,
            expected=3,
            actual=len(words),
        )
    try:
        width, height, samples = (int(word) for word in words)
    except ValueError as e:
        raise HeaderFormatError(
            f"header must hold 3 integers, got {line.strip()!r}",
            filename=filename,
            expected="3 integers",
            actual=line.strip(),
        ) from e
    if width <= 0 or height <= 0 or samples < 0:
        raise HeaderFormatError(
            f"invalid header values {width} {height} {samples}",
            filename=filename,
            expected="positive width and height, non-negative samples",
            actual=(width, height, samples),
        )
    return width, height, samples


def parse_partial(lines: Iterable[str], filename: str | None = None) -> AccumulationBuffer:
    """Parse the lines of a partial render.

    Blank lines after the last data row are ignored; a blank line before it
    is a row holding no pixels.

    Args:
        lines: The file's lines.
        filename: Name used in error messages.

    Returns:
        A complete accumulation buffer.

    Raises:
        HeaderFormatError: If the header is not exactly three integers.
        RowWidthError: If a data row does not hold width triples.
        RowCountError: If the number of data rows differs from height.
    """
    line_iter = iter(lines)
    header = next(line_iter, "")
    width, height, samples = _parse_header(header, filename)

    rows: list[list[float]] = []
    first_blank: int | None = None
    for line_number, line in enumerate(line_iter, start=2):
        words = line.split()
        if not words:
            if first_blank is None:
                first_blank = line_number
            continue
        if first_blank is not None:
            raise RowWidthError(
                f"line {first_blank} holds 0 pixels, expected {width}",
                filename=filename,
                expected=width,
                actual=0,
            )
        if len(words) != 3 * width:
            raise RowWidthError(
                f"line {line_number} holds {len(words) / 3:g} pixels, expected {width}",
                filename=filename,
                expected=width,
                actual=len(words) / 3,
            )
        if len(rows) >= height:
            raise RowCountError(
                f"more than {height} data rows",
                filename=filename,
                expected=height,
                actual=len(rows) + 1,
            )
        try:
            rows.append([float(word) for word in words])
        except ValueError as e:
            raise RowWidthError(
                f"line {line_number} holds a value that is not a number",
                filename=filename,
                expected="floating-point values",
                actual=line.strip()[:80],
            ) from e

    if len(rows) != height:
        raise RowCountError(
            f"found {len(rows)} data rows, expected {height}",
            filename=filename,
            expected=height,
            actual=len(rows),
        )

    radiance = np.asarray(rows, dtype=np.float64).reshape(height, width, 3)
    return AccumulationBuffer(width, height, samples, radiance)


def read_partial(filepath: str | Path) -> AccumulationBuffer:
    """Load a partial render file.

    Raises:
        OSError: If the file cannot be opened.
        PartialFormatError: If the file is malformed.
    """
    with open(filepath, encoding="ascii") as f:
        buffer = parse_partial(f, filename=str(filepath))
    logger.info(
        "Loaded %s: %d samples in %dx%d image",
        filepath,
        buffer.sample_count,
        buffer.width,
        buffer.height,
    )
    return buffer


def merge_partials(filepaths: Iterable[str | Path]) -> AccumulationBuffer:
    """Load and sum partial render files.

    Every file is loaded and its dimensions checked against the first file
    before anything is summed; a bad file aborts the merge.

    Raises:
        ValueError: If no files are given.
        PartialFormatError: If any file is malformed.
        DimensionMismatchError: If the files differ in width or height.
    """
    paths = [str(path) for path in filepaths]
    if not paths:
        raise ValueError("No partial files to merge")

    buffers = [read_partial(path) for path in paths]
    first = buffers[0]
    for path, buffer in zip(paths[1:], buffers[1:]):
        if buffer.shape != first.shape:
            raise DimensionMismatchError(
                f"{path}: image is {buffer.width}x{buffer.height}, "
                f"expected {first.width}x{first.height} (from {paths[0]})",
                expected=(first.width, first.height),
                actual=(buffer.width, buffer.height),
                filename=path,
            )

    merged = AccumulationBuffer.merge_all(buffers)
    logger.info("Merged %d samples from %d files", merged.sample_count, len(paths))
    return merged
