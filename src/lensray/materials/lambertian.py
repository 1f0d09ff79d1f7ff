"""Lambertian (ideal diffuse) material implementation.

This module implements the Lambertian BRDF, which models ideal diffuse reflection
where incident light is scattered uniformly in all directions weighted by the
cosine of the angle from the surface normal.

The Lambertian BRDF is:
    f_r(wi, wo) = albedo / pi

The probability density function for cosine-weighted hemisphere sampling is:
    pdf(wi) = cos(theta) / pi

Because the sampling density matches the BRDF times the cosine term, the
per-bounce attenuation reduces to the albedo.

Example:
    >>> import numpy as np
    >>> from lensray.materials.lambertian import Lambertian
    >>> red = Lambertian(albedo=(0.8, 0.3, 0.3))
    >>> result = red.scatter(ray, rec, np.random.default_rng(0))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from lensray.core.ray import Ray, near_zero, sample_cosine_hemisphere
from lensray.materials.material import ScatterResult, validate_albedo

if TYPE_CHECKING:
    from lensray.scene.intersection import HitRecord


class Lambertian:
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance colour (RGB, each component in [0, 1]).
            Represents the fraction of light reflected for each colour channel.
    """

    def __init__(self, albedo) -> None:
        """Create a Lambertian material.

        Args:
            albedo: The diffuse reflectance colour as an (R, G, B) sequence.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
        """
        self.albedo = validate_albedo(albedo)

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult:
        """Sample a scattered ray for a diffuse surface.

        A Lambertian surface always scatters; the attenuation is the albedo.

        Args:
            ray_in: The incoming ray (unused, diffuse scattering is isotropic).
            rec: The hit record at the surface.
            rng: Random generator.

        Returns:
            The ScatterResult with a direction in the normal's hemisphere.
        """
        scattered_direction = sample_cosine_hemisphere(rec.normal, rng)

        # Degenerate sample from floating point round-off
        if near_zero(scattered_direction):
            scattered_direction = rec.normal

        return ScatterResult(self.albedo, Ray(rec.point, scattered_direction))

    def __repr__(self) -> str:
        return f"Lambertian(albedo={tuple(self.albedo.tolist())})"
