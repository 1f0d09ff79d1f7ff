"""Output module for pixel sinks.

Components:
    colour: Sample averaging, gamma correction, quantization, PixelSink interface
    ppm: Streaming P3/P6 pixmap writer
    buffer: In-memory NumPy image buffer

Example:
    >>> from lensray.output import ImageBuffer, PPMSink
    >>> camera.render(world, PPMSink(sys.stdout))
    >>> image = camera.render(world, ImageBuffer()).image
"""

from .buffer import ImageBuffer
from .colour import (
    INTENSITY,
    PixelSink,
    average_colour,
    linear_to_gamma,
    quantize_colour,
    write_colour,
)
from .ppm import PPMSink

__all__ = [
    "PixelSink",
    "PPMSink",
    "ImageBuffer",
    "INTENSITY",
    "average_colour",
    "linear_to_gamma",
    "quantize_colour",
    "write_colour",
]
