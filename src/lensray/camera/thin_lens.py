"""Thin-lens camera model with defocus blur and anti-aliased ray generation.

This module implements a positionable camera that generates primary rays and
drives the render loop. The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view in degrees
- Arbitrary aspect ratios
- Jittered box-filter sampling for anti-aliasing
- Depth of field through a thin-lens defocus disk

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Configuration and derived state are kept apart: ``Camera`` holds the
caller-editable settings, ``build_frame`` turns them into an immutable
``CameraFrame`` once per render, and the render loop only ever reads the
frame.

Example:
    >>> import numpy as np
    >>> from lensray.camera.thin_lens import Camera
    >>> from lensray.output.ppm import PPMSink
    >>>
    >>> camera = Camera(
    ...     aspect_ratio=16.0 / 9.0,
    ...     image_width=400,
    ...     samples_per_pixel=100,
    ...     max_depth=50,
    ...     vfov=20.0,
    ...     lookfrom=(-2.0, 2.0, 1.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     defocus_angle=10.0,
    ...     focus_dist=3.4,
    ... )
    >>> with open("image.ppm", "w") as f:
    ...     camera.render(world, PPMSink(f), rng=np.random.default_rng(42))
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from lensray.core.integrator import ray_colour
from lensray.core.ray import (
    Ray,
    Vec3,
    as_vec3,
    colour,
    cross,
    normalize,
    random_in_unit_disk,
    read_only,
)
from lensray.output.buffer import ImageBuffer
from lensray.output.ppm import PPMSink

if TYPE_CHECKING:
    from lensray.output.colour import PixelSink
    from lensray.scene.intersection import Hittable

logger = logging.getLogger(__name__)

# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]

# Below this |unit(vup) x w| the up vector is treated as parallel to the view
_PARALLEL_EPSILON = 1e-8


def compute_image_height(image_width: int, aspect_ratio: float) -> int:
    """Image height for a width and aspect ratio, never less than 1.

    Exact .5 quotients round up, so width 5 at aspect 2.0 gives height 3.
    """
    return max(1, int(image_width / aspect_ratio + 0.5))


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class Camera:
    """Configuration for a thin-lens camera.

    Fields may be edited freely between renders; a render takes a snapshot
    of them when it starts.

    Attributes:
        aspect_ratio: Ratio of image width over height.
        image_width: Rendered image width in pixel count.
        samples_per_pixel: Count of random samples for each pixel.
        max_depth: Maximum number of ray bounces into the scene.
        vfov: Vertical field of view in degrees.
        lookfrom: Point the camera is looking from.
        lookat: Point the camera is looking at.
        vup: Camera-relative "up" direction.
        defocus_angle: Variation angle of rays through each pixel, in degrees.
            0 disables depth of field (pinhole camera).
        focus_dist: Distance from lookfrom to the plane of perfect focus.
    """

    aspect_ratio: float = 1.0
    image_width: int = 100
    samples_per_pixel: int = 10
    max_depth: int = 10

    vfov: float = 90.0
    lookfrom: tuple[float, float, float] = (0.0, 0.0, -1.0)
    lookat: tuple[float, float, float] = (0.0, 0.0, 0.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)

    defocus_angle: float = 0.0
    focus_dist: float = 10.0

    @property
    def image_height(self) -> int:
        """Rendered image height derived from width and aspect ratio."""
        return compute_image_height(self.image_width, self.aspect_ratio)

    def validate(self) -> None:
        """Check the configuration and fail fast on anything degenerate.

        Raises:
            ValueError: Describing the first invalid field found.
        """
        if not (math.isfinite(self.aspect_ratio) and self.aspect_ratio > 0.0):
            raise ValueError(f"aspect_ratio = {self.aspect_ratio} must be a positive number")
        _check_int("image_width", self.image_width, minimum=1)
        _check_int("samples_per_pixel", self.samples_per_pixel, minimum=1)
        _check_int("max_depth", self.max_depth, minimum=0)

        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov = {self.vfov} must be in (0, 180) degrees")
        if not 0.0 <= self.defocus_angle < 180.0:
            raise ValueError(f"defocus_angle = {self.defocus_angle} must be in [0, 180) degrees")
        if not (math.isfinite(self.focus_dist) and self.focus_dist > 0.0):
            raise ValueError(f"focus_dist = {self.focus_dist} must be a positive number")

        lookfrom = as_vec3(self.lookfrom)
        lookat = as_vec3(self.lookat)
        vup = as_vec3(self.vup)
        for name, vec in (("lookfrom", lookfrom), ("lookat", lookat), ("vup", vup)):
            if not np.all(np.isfinite(vec)):
                raise ValueError(f"{name} = {tuple(vec.tolist())} must have finite components")

        with np.errstate(over="ignore"):
            view = lookfrom - lookat
        if not np.all(np.isfinite(view)):
            raise ValueError("lookfrom - lookat overflows; move the camera closer to its target")
        if not np.any(view):
            raise ValueError(f"lookfrom and lookat must differ, both are {tuple(self.lookfrom)}")

        if not np.any(vup):
            raise ValueError("vup must be a non-zero vector")
        if np.linalg.norm(np.cross(normalize(vup), normalize(view))) < _PARALLEL_EPSILON:
            raise ValueError(
                f"vup = {tuple(self.vup)} is parallel to the view direction; "
                "the camera orientation is undefined"
            )

    def initialize(self) -> CameraFrame:
        """Validate the configuration and derive the render frame."""
        return build_frame(self)

    def get_ray(
        self,
        i: int,
        j: int,
        rng: np.random.Generator | None = None,
        frame: CameraFrame | None = None,
    ) -> Ray:
        """Generate a sampled camera ray for pixel (i, j).

        Convenience wrapper around get_ray(); builds a frame when none is
        given, which is wasteful inside loops.
        """
        if frame is None:
            frame = self.initialize()
        if rng is None:
            rng = np.random.default_rng()
        return get_ray(frame, i, j, rng)

    def ray_colour(
        self,
        ray: Ray,
        depth: int,
        world: Hittable,
        rng: np.random.Generator | None = None,
    ) -> Vec3:
        """Colour carried back along a ray; see lensray.core.integrator.ray_colour."""
        return ray_colour(ray, depth, world, rng)

    def render(
        self,
        world: Hittable,
        sink: PixelSink | None = None,
        *,
        rng: np.random.Generator | None = None,
        callback: ProgressCallback | None = None,
    ) -> PixelSink:
        """Render the world into a pixel sink.

        The configuration is validated before anything is written, so an
        invalid camera produces no output at all.

        Args:
            world: The scene to render.
            sink: Pixel destination. Defaults to a plain-text PPM on stdout.
            rng: Random generator for pixel jitter, lens and material
                sampling. A fresh default generator is used when omitted.
            callback: Optional progress callback invoked after each scanline
                with (rows_completed, total_rows).

        Returns:
            The sink, after its end() has been called.

        Raises:
            ValueError: If the configuration is invalid.
        """
        frame = self.initialize()
        if sink is None:
            sink = PPMSink()
        if rng is None:
            rng = np.random.default_rng()
        render_frame(frame, world, sink, rng, callback)
        return sink

    def render_image(
        self,
        world: Hittable,
        rng: np.random.Generator | None = None,
    ) -> npt.NDArray[np.uint8]:
        """Render into memory and return the (height, width, 3) uint8 image."""
        buffer = ImageBuffer()
        self.render(world, buffer, rng=rng)
        return buffer.image


@dataclass(frozen=True, eq=False)
class CameraFrame:
    """Derived camera state for one render.

    Attributes:
        image_width: Rendered image width.
        image_height: Rendered image height (at least 1).
        samples_per_pixel: Samples drawn per pixel.
        max_depth: Bounce budget per sample.
        defocus_angle: Lens variation angle in degrees (0 = pinhole).
        center: Camera center (= lookfrom).
        u: Right unit vector.
        v: Up unit vector.
        w: Backward unit vector (opposite view direction).
        pixel00_loc: Center of the top-left pixel on the focus plane.
        pixel_delta_u: Offset to the pixel to the right.
        pixel_delta_v: Offset to the pixel below.
        defocus_disk_u: Defocus disk horizontal radius vector.
        defocus_disk_v: Defocus disk vertical radius vector.
    """

    image_width: int
    image_height: int
    samples_per_pixel: int
    max_depth: int
    defocus_angle: float
    center: Vec3
    u: Vec3
    v: Vec3
    w: Vec3
    pixel00_loc: Vec3
    pixel_delta_u: Vec3
    pixel_delta_v: Vec3
    defocus_disk_u: Vec3
    defocus_disk_v: Vec3

    def pixel_center(self, i: int, j: int) -> Vec3:
        """Exact center of pixel (i, j) on the focus plane."""
        return self.pixel00_loc + i * self.pixel_delta_u + j * self.pixel_delta_v


# =============================================================================
# Frame Derivation
# =============================================================================


def build_frame(camera: Camera) -> CameraFrame:
    """Derive the render frame from a camera configuration.

    Computes the camera's orthonormal basis (u, v, w), the pixel grid on the
    viewport at focus_dist in front of the camera, and the defocus disk
    basis.

    Args:
        camera: Camera configuration.

    Returns:
        The immutable CameraFrame.

    Raises:
        ValueError: If the configuration is invalid.
    """
    camera.validate()

    image_width = int(camera.image_width)
    image_height = compute_image_height(image_width, camera.aspect_ratio)

    center = as_vec3(camera.lookfrom)
    lookat = as_vec3(camera.lookat)
    vup = as_vec3(camera.vup)
    focus_dist = float(camera.focus_dist)

    # Determine viewport dimensions
    theta = math.radians(camera.vfov)
    h = math.tan(theta / 2.0)
    viewport_height = 2.0 * h * focus_dist
    viewport_width = viewport_height * (image_width / image_height)

    # w points from lookat toward lookfrom (backward)
    w = normalize(center - lookat)
    # u points right (perpendicular to w and vup)
    u = normalize(cross(vup, w))
    # v points up in the camera's frame
    v = cross(w, u)

    # Vectors across the horizontal and down the vertical viewport edges
    viewport_u = viewport_width * u
    viewport_v = viewport_height * -v

    pixel_delta_u = viewport_u / image_width
    pixel_delta_v = viewport_v / image_height

    viewport_upper_left = center - focus_dist * w - viewport_u / 2.0 - viewport_v / 2.0
    pixel00_loc = viewport_upper_left + 0.5 * (pixel_delta_u + pixel_delta_v)

    defocus_radius = focus_dist * math.tan(math.radians(camera.defocus_angle / 2.0))

    return CameraFrame(
        image_width=image_width,
        image_height=image_height,
        samples_per_pixel=int(camera.samples_per_pixel),
        max_depth=int(camera.max_depth),
        defocus_angle=float(camera.defocus_angle),
        center=read_only(center),
        u=read_only(u),
        v=read_only(v),
        w=read_only(w),
        pixel00_loc=read_only(pixel00_loc),
        pixel_delta_u=read_only(pixel_delta_u),
        pixel_delta_v=read_only(pixel_delta_v),
        defocus_disk_u=read_only(defocus_radius * u),
        defocus_disk_v=read_only(defocus_radius * v),
    )


# =============================================================================
# Ray Generation
# =============================================================================


def pixel_sample_square(frame: CameraFrame, rng: np.random.Generator) -> Vec3:
    """Random offset within the square footprint of a pixel at the origin.

    Returns:
        px * pixel_delta_u + py * pixel_delta_v with px, py in [-0.5, 0.5).
    """
    px, py = rng.random(2) - 0.5
    return px * frame.pixel_delta_u + py * frame.pixel_delta_v


def defocus_disk_sample(frame: CameraFrame, rng: np.random.Generator) -> Vec3:
    """Random point on the camera defocus disk."""
    p = random_in_unit_disk(rng)
    return frame.center + p[0] * frame.defocus_disk_u + p[1] * frame.defocus_disk_v


def get_ray(frame: CameraFrame, i: int, j: int, rng: np.random.Generator) -> Ray:
    """Generate a randomly sampled camera ray for pixel (i, j).

    The ray originates from the camera center, or from a random point on the
    defocus disk when the lens is enabled, and points at a random location
    inside the pixel's footprint on the focus plane.

    Args:
        frame: Derived camera frame.
        i: Pixel column (0 = left).
        j: Pixel row (0 = top).
        rng: Random generator.

    Returns:
        The camera ray. Its direction is not normalized.
    """
    pixel_sample = frame.pixel_center(i, j) + pixel_sample_square(frame, rng)

    ray_origin = frame.center if frame.defocus_angle <= 0.0 else defocus_disk_sample(frame, rng)
    ray_direction = pixel_sample - ray_origin

    return Ray(ray_origin, ray_direction)


# =============================================================================
# Render Loop
# =============================================================================


def render_frame(
    frame: CameraFrame,
    world: Hittable,
    sink: PixelSink,
    rng: np.random.Generator,
    callback: ProgressCallback | None = None,
) -> None:
    """Render every pixel of a frame into a sink in row-major order.

    Args:
        frame: Derived camera frame.
        world: The scene to render.
        sink: Pixel destination.
        rng: Random generator.
        callback: Optional progress callback, (rows_completed, total_rows).
    """
    width = frame.image_width
    height = frame.image_height

    logger.info(
        "Rendering %dx%d, %d samples per pixel, max depth %d",
        width,
        height,
        frame.samples_per_pixel,
        frame.max_depth,
    )

    sink.begin(width, height)
    for j in range(height):
        logger.debug("Scanlines remaining: %d", height - j)
        for i in range(width):
            pixel_colour = colour(0.0, 0.0, 0.0)
            for _ in range(frame.samples_per_pixel):
                ray = get_ray(frame, i, j, rng)
                pixel_colour += ray_colour(ray, frame.max_depth, world, rng)
            sink.write_colour(pixel_colour, frame.samples_per_pixel)

        if callback is not None:
            callback(j + 1, height)
    sink.end()

    logger.info("Done.")


def _check_int(name: str, value, *, minimum: int) -> None:
    """Require an integral value (bools excluded) of at least minimum."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} = {value!r} must be an integer")
    if value < minimum:
        raise ValueError(f"{name} = {value} must be >= {minimum}")
