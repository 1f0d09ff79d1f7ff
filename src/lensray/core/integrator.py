"""Ray colour integrator.

This module evaluates the colour carried back along a camera ray. A ray is
followed through the scene, bouncing off surfaces according to their material,
and the per-bounce attenuations are multiplied together until the path
terminates in one of three ways:

    - depth exhausted: the bounce budget ran out, no light is gathered (black)
    - absorbed: a material declined to scatter (black)
    - escaped: the ray missed everything and picks up the sky gradient, the
      only light source in the scene

The path is walked with an explicit loop bounded by the bounce budget instead
of recursion, so stack usage does not grow with depth.

No clamping happens here; gamma correction and clamping belong to the output
sink.

Example:
    >>> import numpy as np
    >>> from lensray.core.integrator import ray_colour
    >>> c = ray_colour(ray, depth=10, world=world, rng=np.random.default_rng(0))
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from lensray.core.interval import Interval
from lensray.core.ray import Ray, Vec3, colour, normalize

if TYPE_CHECKING:
    from lensray.scene.intersection import Hittable

# =============================================================================
# Rendering Constants
# =============================================================================

# Lower bound on hit t, excludes self-intersection at a scattered ray's origin
T_MIN = 0.001

# Valid hit range for every query
HIT_INTERVAL = Interval(T_MIN, math.inf)

# Sky gradient endpoints
HORIZON_COLOUR = colour(1.0, 1.0, 1.0)
ZENITH_COLOUR = colour(0.5, 0.7, 1.0)

BLACK = colour(0.0, 0.0, 0.0)


def background_colour(direction: Vec3) -> Vec3:
    """Sky colour seen along a direction that escapes the scene.

    Linear blend between white and sky blue by a = 0.5 * (unit_y + 1), so a
    straight-up ray sees pure blue and a straight-down ray pure white.

    Args:
        direction: Ray direction (need not be normalized).

    Returns:
        The background colour.
    """
    unit_direction = normalize(direction)
    a = 0.5 * (unit_direction[1] + 1.0)
    return (1.0 - a) * HORIZON_COLOUR + a * ZENITH_COLOUR


def ray_colour(
    ray: Ray,
    depth: int,
    world: Hittable,
    rng: np.random.Generator | None = None,
) -> Vec3:
    """Compute the colour carried back along a ray.

    Args:
        ray: The ray to trace.
        depth: Remaining bounce budget. depth <= 0 returns black.
        world: The scene to intersect.
        rng: Random generator consumed by material scattering. A fresh
            default generator is used when omitted.

    Returns:
        The accumulated linear RGB colour (unclamped).
    """
    if rng is None:
        rng = np.random.default_rng()

    # Product of all attenuations along the path so far
    throughput = colour(1.0, 1.0, 1.0)

    for _ in range(depth):
        rec = world.hit(ray, HIT_INTERVAL)

        if rec is None:
            return throughput * background_colour(ray.direction)

        result = rec.material.scatter(ray, rec, rng)
        if result is None:
            return BLACK.copy()

        throughput = throughput * result.attenuation
        ray = result.scattered

    # Bounce limit exceeded, no more light is gathered
    return BLACK.copy()
