"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, vector utilities and random sampling helpers
    interval: Real intervals for hit ranges and colour clamping
    integrator: Ray colour evaluation against a scene
"""

from .integrator import HIT_INTERVAL, T_MIN, background_colour, ray_colour
from .interval import Interval
from .ray import (
    Ray,
    Vec3,
    as_vec3,
    build_onb_from_normal,
    colour,
    cross,
    dot,
    length,
    local_to_world,
    near_zero,
    normalize,
    point3,
    random_cosine_direction,
    random_in_unit_disk,
    random_unit_vector,
    read_only,
    reflect,
    refract,
    sample_cosine_hemisphere,
    schlick_fresnel,
    vec3,
)

__all__ = [
    "ray_colour",
    "background_colour",
    "T_MIN",
    "HIT_INTERVAL",
    "Interval",
    "Ray",
    "Vec3",
    "vec3",
    "point3",
    "colour",
    "as_vec3",
    "read_only",
    "length",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_fresnel",
    "near_zero",
    "random_unit_vector",
    "random_in_unit_disk",
    "random_cosine_direction",
    "build_onb_from_normal",
    "local_to_world",
    "sample_cosine_hemisphere",
]
