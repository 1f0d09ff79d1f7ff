"""Sphere primitive with robust ray-sphere intersection.

This module provides a Sphere hittable using the robust quadratic formula from
Ray Tracing Gems to avoid floating-point artifacts.

The robust quadratic formula avoids catastrophic cancellation when b^2 is
nearly equal to 4ac by using a reformulated calculation that maintains
numerical stability.

Example:
    >>> from lensray.geometry.sphere import Sphere
    >>> from lensray.materials.lambertian import Lambertian
    >>> sphere = Sphere(center=(0, 0, -1), radius=0.5, material=Lambertian((0.5, 0.5, 0.5)))
    >>> rec = sphere.hit(ray, Interval(0.001, math.inf))
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from lensray.core.interval import Interval
from lensray.core.ray import Ray, as_vec3, read_only
from lensray.scene.intersection import HitRecord

if TYPE_CHECKING:
    from lensray.materials.material import Material


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve quadratic equation using robust formula from Ray Tracing Gems.

    Solves a*t^2 - 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Negated half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of discriminant (h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = h + sign(h) * sqrt(discriminant)
    q = h + math.copysign(sqrt_d, h)

    if abs(q) < 1e-12:
        # Tangent ray through the centre plane: fall back to the textbook formula
        t0 = (h - sqrt_d) / a
        t1 = (h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (non-negative).
        material: The material assigned to the sphere surface.
    """

    def __init__(self, center, radius: float, material: Material | None = None) -> None:
        """Create a sphere.

        Raises:
            ValueError: If radius is negative.
        """
        if radius < 0.0:
            raise ValueError(f"Sphere radius = {radius} must be non-negative")
        self.center = read_only(as_vec3(center))
        self.radius = float(radius)
        self.material = material

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Test for ray-sphere intersection.

        The ray-sphere intersection is found by solving:
            |origin + t * direction - center|^2 = radius^2

        Expanding with oc = center - origin gives:
            a*t^2 - 2*h*t + c = 0

        where:
            a = dot(direction, direction)
            h = dot(direction, oc)
            c = dot(oc, oc) - radius^2

        Args:
            ray: The ray to test (direction need not be normalized).
            ray_t: Valid parameter range; the root must lie strictly inside.

        Returns:
            A HitRecord for the nearest valid root, or None.
        """
        oc = self.center - ray.origin
        a = float(np.dot(ray.direction, ray.direction))
        h = float(np.dot(ray.direction, oc))
        c = float(np.dot(oc, oc)) - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0 or a == 0.0 or self.radius == 0.0:
            return None

        t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))

        # Find the nearest root that lies in the acceptable range
        t = t0
        if not ray_t.surrounds(t):
            t = t1
            if not ray_t.surrounds(t):
                return None

        outward_normal = (ray.at(t) - self.center) / self.radius
        return HitRecord.from_outward_normal(ray, t, outward_normal, self.material)

    def __repr__(self) -> str:
        return (
            f"Sphere(center={tuple(self.center.tolist())}, radius={self.radius}, "
            f"material={self.material!r})"
        )
