"""Output module for rendered images.

Components:
    image: Gamma encoding and PNG export (Pillow)
    partial: Partial render text format, reader/writer and merge

Example:
    >>> from pathtracer.output import save_png, write_partial
    >>> save_png(buffer, "output.png")  # doctest: +SKIP
"""

from .image import (
    GAMMA,
    compute_rmse,
    encode_image,
    save_png,
    save_png_from_array,
    to_byte,
)
from .partial import (
    format_partial,
    merge_partials,
    parse_partial,
    read_partial,
    write_partial,
)

__all__ = [
    # Image export
    "GAMMA",
    "to_byte",
    "encode_image",
    "save_png",
    "save_png_from_array",
    "compute_rmse",
    # Partial renders
    "format_partial",
    "parse_partial",
    "read_partial",
    "write_partial",
    "merge_partials",
]
