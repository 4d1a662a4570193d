"""Gamma encoding and PNG export of rendered images.

Linear radiance is encoded per channel as

    floor(clamp(x)^(1/2.2) * 255 + 0.5)

where negative and NaN values count as 0 and the result is clamped to the
byte range. Pixel (0, 0) is the top-left of the image.

Example:
    >>> from pathtracer.output.image import save_png, to_byte
    >>> to_byte(1.0)
    255
    >>> save_png(buffer, "output.png")  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from pathtracer.core.buffer import AccumulationBuffer

logger = logging.getLogger(__name__)

# Display gamma applied on output
GAMMA = 2.2


def to_byte(value: float, gamma: float = GAMMA) -> int:
    """Gamma-encode one linear channel value to an 8-bit integer."""
    if not value > 0.0:
        return 0
    return min(255, int(math.floor(value ** (1.0 / gamma) * 255.0 + 0.5)))


def encode_image(
    image: npt.NDArray[np.floating],
    gamma: float = GAMMA,
) -> npt.NDArray[np.uint8]:
    """Gamma-encode a linear (H, W, 3) image to uint8.

    Args:
        image: Linear radiance image.
        gamma: Gamma value (default 2.2).

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    linear = np.nan_to_num(np.asarray(image, dtype=np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    linear = np.maximum(linear, 0.0)
    encoded = np.floor(np.power(linear, 1.0 / gamma) * 255.0 + 0.5)
    return np.clip(encoded, 0, 255).astype(np.uint8)


def save_png_from_array(
    image: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    gamma: float = GAMMA,
) -> None:
    """Save a linear (H, W, 3) image as an 8-bit sRGB-ish PNG."""
    image_uint8 = encode_image(image, gamma=gamma)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath, format="PNG")
    logger.info("Wrote %dx%d image to %s", image_uint8.shape[1], image_uint8.shape[0], filepath)


def save_png(
    buffer: AccumulationBuffer,
    filepath: str | Path,
    *,
    gamma: float = GAMMA,
) -> None:
    """Normalize an accumulation buffer and save it as a PNG.

    Args:
        buffer: The buffer to export; a buffer without samples exports black.
        filepath: Output file path.
        gamma: Gamma value (default 2.2).
    """
    save_png_from_array(buffer.normalized(), filepath, gamma=gamma)


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
