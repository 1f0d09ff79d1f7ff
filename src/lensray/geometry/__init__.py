"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with robust ray-sphere intersection
    quad: Parallelogram primitive with planar ray-quad intersection

Every primitive implements the Hittable interface:
    rec = shape.hit(ray, ray_t)  # HitRecord or None
"""

from .quad import Quad
from .sphere import Sphere

__all__ = [
    "Sphere",
    "Quad",
]
