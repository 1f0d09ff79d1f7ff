"""PPM pixel stream output.

Writes the rendered image as a Netpbm pixmap, one pixel at a time in
row-major order, so the image can be streamed while it renders:

    - P3 (plain text): ``P3\\n<width> <height>\\n255\\n`` then one ``r g b``
      line per pixel. Write to a text stream.
    - P6 (binary): ``P6\\n<width> <height>\\n255\\n`` then three bytes per
      pixel. Write to a binary stream.

Example:
    >>> import sys
    >>> from lensray.output.ppm import PPMSink
    >>> camera.render(world, PPMSink(sys.stdout))
    >>> with open("image.ppm", "wb") as f:
    ...     camera.render(world, PPMSink(f, binary=True))
"""

from __future__ import annotations

import sys
from typing import BinaryIO, TextIO

from lensray.core.ray import Vec3
from lensray.output.colour import quantize_colour, write_colour

MAX_CHANNEL_VALUE = 255


class PPMSink:
    """Pixel sink emitting a P3 or P6 pixmap.

    Attributes:
        width: Image width, set by begin().
        height: Image height, set by begin().
        pixels_written: Number of pixels emitted so far.
    """

    def __init__(self, stream: TextIO | BinaryIO | None = None, *, binary: bool = False) -> None:
        """Create a PPM sink.

        Args:
            stream: Destination stream. Text for P3, binary for P6.
                Defaults to standard output (its byte buffer for P6).
            binary: Emit P6 instead of P3.
        """
        if stream is None:
            stream = sys.stdout.buffer if binary else sys.stdout
        self.stream = stream
        self.binary = binary
        self.width = 0
        self.height = 0
        self.pixels_written = 0
        self._started = False

    @property
    def magic(self) -> str:
        return "P6" if self.binary else "P3"

    def begin(self, width: int, height: int) -> None:
        """Write the header for a width x height image."""
        self.width = width
        self.height = height
        self.pixels_written = 0
        self._started = True

        header = f"{self.magic}\n{width} {height}\n{MAX_CHANNEL_VALUE}\n"
        if self.binary:
            self.stream.write(header.encode("ascii"))
        else:
            self.stream.write(header)

    def write_colour(self, pixel_colour: Vec3, samples_per_pixel: int) -> None:
        """Average, gamma-correct and emit the next pixel.

        Raises:
            RuntimeError: If called before begin().
        """
        if not self._started:
            raise RuntimeError("PPMSink.begin() must be called before writing pixels")

        if self.binary:
            self.stream.write(bytes(quantize_colour(pixel_colour, samples_per_pixel)))
        else:
            write_colour(self.stream, pixel_colour, samples_per_pixel)
        self.pixels_written += 1

    def end(self) -> None:
        """Flush the stream and check that the image is complete.

        Raises:
            RuntimeError: If the number of pixels written differs from
                width * height.
        """
        self._started = False
        self.stream.flush()

        expected = self.width * self.height
        if self.pixels_written != expected:
            raise RuntimeError(
                f"Incomplete image: wrote {self.pixels_written} pixels, "
                f"expected {expected} ({self.width}x{self.height})"
            )

    def __repr__(self) -> str:
        return (
            f"PPMSink(format={self.magic}, width={self.width}, height={self.height}, "
            f"pixels_written={self.pixels_written})"
        )
