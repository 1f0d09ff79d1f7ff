"""Metal (specular reflective) material implementation.

This module implements the metal BSDF, which models specular reflection with
optional fuzziness. Perfect metals (fuzz=0) produce mirror-like reflections,
while fuzzier metals scatter reflected rays within a cone.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal.

For fuzzy metals, the normalized reflected direction is perturbed by a random
unit vector scaled by the fuzz parameter. Rays perturbed below the surface are
absorbed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from lensray.core.ray import Ray, normalize, random_unit_vector, reflect
from lensray.materials.material import ScatterResult, validate_albedo

if TYPE_CHECKING:
    from lensray.scene.intersection import HitRecord


class Metal:
    """Metal (specular reflective) material.

    Attributes:
        albedo: The reflective colour (RGB, each component in [0, 1]).
        fuzz: The surface fuzziness in [0, 1]. 0 = perfect mirror.
    """

    def __init__(self, albedo, fuzz: float = 0.0) -> None:
        """Create a metal material.

        Args:
            albedo: The reflective colour as an (R, G, B) sequence.
            fuzz: The surface fuzziness in [0, 1]. Default is 0 (perfect mirror).

        Raises:
            ValueError: If any albedo component is outside [0, 1].
            ValueError: If fuzz is outside [0, 1].
        """
        self.albedo = validate_albedo(albedo)
        if fuzz < 0.0 or fuzz > 1.0:
            raise ValueError(
                f"Fuzz = {fuzz} is outside [0, 1]. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )
        self.fuzz = float(fuzz)

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult | None:
        """Reflect the incoming ray about the surface normal.

        Args:
            ray_in: The incoming ray.
            rec: The hit record at the surface.
            rng: Random generator, only consumed when fuzz > 0.

        Returns:
            The ScatterResult, or None if the fuzzed reflection points into
            the surface (ray absorbed).
        """
        reflected = normalize(reflect(ray_in.direction, rec.normal))
        if self.fuzz > 0.0:
            reflected = reflected + self.fuzz * random_unit_vector(rng)

        if np.dot(reflected, rec.normal) <= 0.0:
            return None

        return ScatterResult(self.albedo, Ray(rec.point, reflected))

    def __repr__(self) -> str:
        return f"Metal(albedo={tuple(self.albedo.tolist())}, fuzz={self.fuzz})"
