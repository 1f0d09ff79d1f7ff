"""Scene-level primitive intersection testing.

This module provides the hit record produced by ray/primitive intersection,
the ``Hittable`` capability interface every primitive implements, and the
``HittableList`` aggregate that returns the closest hit across all of its
objects along with the material of the hit primitive.

Example:
    >>> from lensray.core.interval import Interval
    >>> from lensray.geometry.sphere import Sphere
    >>> from lensray.materials.lambertian import Lambertian
    >>> world = HittableList()
    >>> world.add(Sphere((0, 0, -1), 0.5, Lambertian((0.8, 0.3, 0.3))))
    >>> rec = world.hit(ray, Interval(0.001, math.inf))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from lensray.core.interval import Interval
from lensray.core.ray import Ray, Vec3

if TYPE_CHECKING:
    from lensray.materials.material import Material


@dataclass(eq=False)
class HitRecord:
    """Record of a ray-primitive intersection with material information.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: The surface normal at the intersection point (unit length).
            Always points against the incoming ray, so it is the outward
            normal for front face hits and the inward normal otherwise.
        t: The parameter value along the ray where intersection occurred.
        front_face: Whether the ray hit the front face (from outside).
        material: The material of the hit primitive. Owned by the scene.
    """

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool
    material: Material | None = None

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        outward_normal: Vec3,
        material: Material | None,
    ) -> HitRecord:
        """Build a hit record, orienting the normal against the ray.

        Args:
            ray: The incoming ray.
            t: Ray parameter of the intersection.
            outward_normal: Unit geometric normal pointing out of the surface.
            material: Material of the hit primitive.

        Returns:
            A HitRecord whose normal faces the ray origin side.
        """
        front_face = bool(np.dot(ray.direction, outward_normal) < 0.0)
        normal = outward_normal if front_face else -outward_normal
        return cls(
            point=ray.at(t),
            normal=normal,
            t=t,
            front_face=front_face,
            material=material,
        )


@runtime_checkable
class Hittable(Protocol):
    """Anything a ray can hit."""

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Return the closest intersection with t strictly inside ray_t, or None."""
        ...


class HittableList:
    """A list of hittable objects, itself hittable.

    Iterates through all objects, testing each for intersection and tracking
    the closest hit (smallest t inside the interval).

    Attributes:
        objects: The contained hittables in insertion order.
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> int:
        """Add an object and return its index."""
        self.objects.append(obj)
        return len(self.objects) - 1

    def clear(self) -> None:
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Test ray against all objects.

        Args:
            ray: The ray to test.
            ray_t: Valid parameter range (open on both ends).

        Returns:
            The closest HitRecord, or None if nothing was hit.
        """
        closest = None
        search = ray_t
        for obj in self.objects:
            rec = obj.hit(ray, search)
            if rec is not None:
                closest = rec
                # Shrink the interval so later objects must be nearer
                search = search.with_max(rec.t)
        return closest

    def __repr__(self) -> str:
        return f"HittableList(objects={len(self.objects)})"
