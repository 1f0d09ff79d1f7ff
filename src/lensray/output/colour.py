"""Pixel colour averaging, gamma correction and quantization.

The camera hands every sink the *sum* of a pixel's sample colours together
with the sample count. Turning that into an 8-bit pixel is done here:

1. average: multiply by 1 / samples_per_pixel
2. gamma 2: take the square root of each linear component (negatives map to 0)
3. clamp each component to [0, 0.999] and scale to [0, 255]

The ``PixelSink`` protocol is the contract between the camera's render loop
and any output destination.
"""

from __future__ import annotations

import math
from typing import Protocol, TextIO, runtime_checkable

import numpy as np

from lensray.core.interval import Interval
from lensray.core.ray import Vec3

# Clamp range keeping 256 * x below 256
INTENSITY = Interval(0.000, 0.999)


def linear_to_gamma(linear_component: float) -> float:
    """Apply gamma 2 encoding to one linear component."""
    if linear_component > 0.0:
        return math.sqrt(linear_component)
    return 0.0


def average_colour(pixel_colour: Vec3, samples_per_pixel: int) -> Vec3:
    """Average a summed sample colour.

    Raises:
        ValueError: If samples_per_pixel is not positive.
    """
    if samples_per_pixel <= 0:
        raise ValueError(f"samples_per_pixel = {samples_per_pixel} must be positive")
    return np.asarray(pixel_colour, dtype=np.float64) * (1.0 / samples_per_pixel)


def quantize_colour(pixel_colour: Vec3, samples_per_pixel: int) -> tuple[int, int, int]:
    """Convert a summed sample colour into an 8-bit RGB triplet.

    Args:
        pixel_colour: Sum of the linear sample colours for one pixel.
        samples_per_pixel: Number of samples that were summed.

    Returns:
        (r, g, b) each in [0, 255].
    """
    r, g, b = average_colour(pixel_colour, samples_per_pixel)
    return (
        int(256 * INTENSITY.clamp(linear_to_gamma(r))),
        int(256 * INTENSITY.clamp(linear_to_gamma(g))),
        int(256 * INTENSITY.clamp(linear_to_gamma(b))),
    )


def write_colour(out: TextIO, pixel_colour: Vec3, samples_per_pixel: int) -> None:
    """Write one pixel as a plain-text "r g b" line."""
    r, g, b = quantize_colour(pixel_colour, samples_per_pixel)
    out.write(f"{r} {g} {b}\n")


@runtime_checkable
class PixelSink(Protocol):
    """Destination for a row-major stream of pixels."""

    def begin(self, width: int, height: int) -> None:
        """Start an image of the given size."""
        ...

    def write_colour(self, pixel_colour: Vec3, samples_per_pixel: int) -> None:
        """Accept the next pixel as a sample sum and its sample count."""
        ...

    def end(self) -> None:
        """Finish the image."""
        ...
