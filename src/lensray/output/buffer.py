"""In-memory image buffer sink.

Collects the rendered pixels into NumPy arrays instead of a stream, useful for
inspecting renders programmatically.

Example:
    >>> from lensray.output.buffer import ImageBuffer
    >>> buffer = camera.render(world, ImageBuffer())
    >>> buffer.image.shape
    (height, width, 3)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from lensray.core.ray import Vec3
from lensray.output.colour import average_colour, quantize_colour


class ImageBuffer:
    """Pixel sink storing the image as arrays of shape (height, width, 3).

    Attributes:
        image: The 8-bit gamma-encoded image (dtype uint8).
        linear: The sample-averaged linear colours before gamma and clamping
            (dtype float64).
    """

    def __init__(self) -> None:
        self.image: npt.NDArray[np.uint8] = np.zeros((0, 0, 3), dtype=np.uint8)
        self.linear: npt.NDArray[np.float64] = np.zeros((0, 0, 3), dtype=np.float64)
        self._cursor = 0
        self._started = False

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    @property
    def pixels_written(self) -> int:
        return self._cursor

    def begin(self, width: int, height: int) -> None:
        """Allocate zeroed buffers for a width x height image."""
        self.image = np.zeros((height, width, 3), dtype=np.uint8)
        self.linear = np.zeros((height, width, 3), dtype=np.float64)
        self._cursor = 0
        self._started = True

    def write_colour(self, pixel_colour: Vec3, samples_per_pixel: int) -> None:
        """Store the next pixel in row-major order.

        Raises:
            RuntimeError: If called before begin() or past the last pixel.
        """
        if not self._started:
            raise RuntimeError("ImageBuffer.begin() must be called before writing pixels")
        if self._cursor >= self.width * self.height:
            raise RuntimeError(
                f"Image buffer is full ({self.width}x{self.height} pixels)"
            )

        row, col = divmod(self._cursor, self.width)
        self.linear[row, col] = average_colour(pixel_colour, samples_per_pixel)
        self.image[row, col] = quantize_colour(pixel_colour, samples_per_pixel)
        self._cursor += 1

    def end(self) -> None:
        """Finish the image.

        Raises:
            RuntimeError: If fewer than width * height pixels were written.
        """
        self._started = False
        if self._cursor != self.width * self.height:
            raise RuntimeError(
                f"Incomplete image: wrote {self._cursor} pixels, "
                f"expected {self.width * self.height}"
            )
