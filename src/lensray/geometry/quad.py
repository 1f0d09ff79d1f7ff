"""Quad primitive with ray-quad intersection.

A quad is defined by:
- Q: A corner point of the quad
- u: Edge vector from Q to adjacent corner
- v: Edge vector from Q to other adjacent corner

The quad spans the parallelogram from Q to Q+u+v. The normal is computed as
normalize(cross(u, v)), pointing in the direction determined by the right-hand
rule.

Ray-quad intersection uses the parametric plane test:
1. Find where ray intersects the plane containing the quad
2. Check if the intersection point lies within the quad bounds

Example:
    >>> # Floor quad at y=0, spanning x=[0,1] and z=[0,1]
    >>> quad = Quad(Q=(0, 0, 0), u=(1, 0, 0), v=(0, 0, 1), material=grey)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from lensray.core.interval import Interval
from lensray.core.ray import Ray, as_vec3, read_only
from lensray.scene.intersection import HitRecord

if TYPE_CHECKING:
    from lensray.materials.material import Material

_UNIT = Interval(0.0, 1.0)


class Quad:
    """A quad (parallelogram) defined by a corner point and two edge vectors.

    The plane frame is computed once at construction:
    - normal: The plane normal (u x v), normalized
    - d: Plane constant, dot(normal, Q)
    - w: n / dot(n, n) for the unnormalized n = u x v, used to recover the
      planar coordinates of a hit point

    Attributes:
        Q: The corner point of the quad.
        u: Edge vector from Q to adjacent corner.
        v: Edge vector from Q to other adjacent corner.
        material: The material assigned to the quad surface.
    """

    def __init__(self, Q, u, v, material: Material | None = None) -> None:
        """Create a quad.

        Raises:
            ValueError: If u and v are parallel (zero-area quad).
        """
        self.Q = read_only(as_vec3(Q))
        self.u = read_only(as_vec3(u))
        self.v = read_only(as_vec3(v))
        self.material = material

        n = np.cross(self.u, self.v)
        n_dot_n = float(np.dot(n, n))
        if n_dot_n < 1e-20:
            raise ValueError("Quad edges u and v must not be parallel")

        self.normal = read_only(n / np.sqrt(n_dot_n))
        self.d = float(np.dot(self.normal, self.Q))
        self.w = read_only(n / n_dot_n)

    @property
    def area(self) -> float:
        """The area of the quad: |u x v|."""
        return float(np.linalg.norm(np.cross(self.u, self.v)))

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Test for ray-quad intersection.

        Args:
            ray: The ray to test (direction need not be normalized).
            ray_t: Valid parameter range; t must lie strictly inside.

        Returns:
            A HitRecord, or None if the ray misses the quad.
        """
        denom = float(np.dot(self.normal, ray.direction))

        # Ray parallel to the plane
        if abs(denom) < 1e-8:
            return None

        t = (self.d - float(np.dot(self.normal, ray.origin))) / denom
        if not ray_t.surrounds(t):
            return None

        # Express the hit point in planar coordinates:
        # P = Q + alpha * u + beta * v
        planar_hit = ray.at(t) - self.Q
        alpha = float(np.dot(self.w, np.cross(planar_hit, self.v)))
        beta = float(np.dot(self.w, np.cross(self.u, planar_hit)))

        if not (_UNIT.contains(alpha) and _UNIT.contains(beta)):
            return None

        return HitRecord.from_outward_normal(ray, t, self.normal, self.material)

    def __repr__(self) -> str:
        return (
            f"Quad(Q={tuple(self.Q.tolist())}, u={tuple(self.u.tolist())}, "
            f"v={tuple(self.v.tolist())}, material={self.material!r})"
        )
