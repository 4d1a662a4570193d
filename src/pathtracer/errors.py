"""Exceptions raised by the renderer and its file formats.

Every error carries enough context (file name, expected and actual values,
row index) to tell the operator which input or parameter to fix. Nothing is
retried: all of these are terminal for the command that raised them.
"""

from __future__ import annotations

from typing import Any


class PathTracerError(Exception):
    """Base class for all renderer errors."""


class PartialFormatError(PathTracerError, ValueError):
    """A partial render file is malformed.

    Attributes:
        filename: The file being parsed, if known.
        expected: What the parser expected.
        actual: What it found.
    """

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        self.filename = filename
        self.expected = expected
        self.actual = actual
        if filename is not None:
            message = f"{filename}: {message}"
        super().__init__(message)


class HeaderFormatError(PartialFormatError):
    """The header line is not exactly three integers."""


class RowWidthError(PartialFormatError):
    """A data row does not hold width pixel triples."""


class RowCountError(PartialFormatError):
    """The number of data rows differs from the header height."""


class DimensionMismatchError(PathTracerError, ValueError):
    """Buffers or partial files with different dimensions were combined.

    Attributes:
        expected: (width, height) of the reference input.
        actual: (width, height) of the offending input.
        filename: The offending file, if the input came from disk.
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, int] | None = None,
        actual: tuple[int, int] | None = None,
        filename: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        self.filename = filename
        super().__init__(message)


class RenderError(PathTracerError, RuntimeError):
    """A render worker failed; the original exception is the __cause__.

    Attributes:
        row: The image row whose work unit failed.
    """

    def __init__(self, message: str, row: int) -> None:
        self.row = row
        super().__init__(message)


class RenderCancelled(PathTracerError):
    """The render was cancelled before every row completed.

    Attributes:
        rows_done: Number of rows collected before cancellation.
    """

    def __init__(self, message: str, rows_done: int) -> None:
        self.rows_done = rows_done
        super().__init__(message)
