"""Dielectric (glass/water) material implementation.

This module implements the dielectric BSDF, which models transparent materials
like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.

Example:
    >>> from lensray.materials.dielectric import Dielectric
    >>> glass = Dielectric(1.5)
    >>> bubble = Dielectric(1.0 / 1.5)  # air pocket inside glass
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from lensray.core.ray import Ray, colour, normalize, reflect, refract, schlick_fresnel
from lensray.materials.material import ScatterResult

if TYPE_CHECKING:
    from lensray.scene.intersection import HitRecord


def refraction_ratio(ior: float, front_face: bool) -> float:
    """Return n_incident / n_transmitted for a hit on either side.

    Hitting from outside goes air to material (1/ior); from inside, the
    reverse (ior).
    """
    return 1.0 / ior if front_face else ior


def fresnel_reflectance(ior: float, incident_direction, normal, front_face: bool) -> float:
    """Compute the Fresnel reflectance for a given incident configuration.

    Args:
        ior: Index of refraction of the material.
        incident_direction: The incoming ray direction (should be normalized).
        normal: The surface normal facing the incident ray.
        front_face: True if the ray hits the outside of the surface.

    Returns:
        The Fresnel reflectance coefficient in [0, 1].
    """
    cos_theta = min(-float(np.dot(incident_direction, normal)), 1.0)
    return schlick_fresnel(cos_theta, refraction_ratio(ior, front_face))


class Dielectric:
    """Dielectric (glass/water) material.

    Attributes:
        ior: Index of refraction. Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
            Values below 1 model a less dense pocket inside a denser medium.
    """

    def __init__(self, ior: float = 1.5) -> None:
        """Create a dielectric material.

        Args:
            ior: Index of refraction. Default is 1.5 (typical glass).

        Raises:
            ValueError: If ior is not positive.
        """
        if not ior > 0.0:
            raise ValueError(
                f"Index of refraction = {ior} must be positive."
            )
        self.ior = float(ior)

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult:
        """Reflect or refract the incoming ray.

        Dielectrics always scatter and do not absorb: attenuation is white.

        Args:
            ray_in: The incoming ray.
            rec: The hit record at the surface.
            rng: Random generator for the reflect/refract choice.

        Returns:
            The ScatterResult with the reflected or refracted ray.
        """
        attenuation = colour(1.0, 1.0, 1.0)
        ratio = refraction_ratio(self.ior, rec.front_face)

        unit_direction = normalize(ray_in.direction)
        cos_theta = min(-float(np.dot(unit_direction, rec.normal)), 1.0)
        sin_theta = np.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        # Total internal reflection: sin(theta_t) = ratio * sin(theta_i) > 1
        cannot_refract = ratio * sin_theta > 1.0

        reflectance = fresnel_reflectance(self.ior, unit_direction, rec.normal, rec.front_face)
        if cannot_refract or reflectance > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ratio)

        return ScatterResult(attenuation, Ray(rec.point, direction))

    def __repr__(self) -> str:
        return f"Dielectric(ior={self.ior})"
