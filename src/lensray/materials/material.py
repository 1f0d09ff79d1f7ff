"""Base material interface.

A material decides what happens to a ray arriving at a surface: it either
scatters it, returning the outgoing ray and the colour attenuation applied to
light travelling back along it, or absorbs it by returning ``None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Protocol, runtime_checkable

import numpy as np

from lensray.core.ray import Ray, Vec3, as_vec3

if TYPE_CHECKING:
    from lensray.scene.intersection import HitRecord


class ScatterResult(NamedTuple):
    """Outcome of a successful scatter.

    Attributes:
        attenuation: Component-wise colour factor for this bounce.
        scattered: The outgoing ray.
    """

    attenuation: Vec3
    scattered: Ray


@runtime_checkable
class Material(Protocol):
    """Anything that can scatter an incoming ray at a hit point."""

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult | None:
        """Scatter ray_in at rec, or return None if the ray is absorbed."""
        ...


def validate_albedo(albedo) -> Vec3:
    """Convert and validate an albedo colour.

    Args:
        albedo: The reflectance colour as an (R, G, B) sequence.

    Returns:
        The albedo as a float64 vector.

    Raises:
        ValueError: If any component is outside [0, 1].
    """
    arr = as_vec3(albedo)
    for i, component in enumerate(arr):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return arr
