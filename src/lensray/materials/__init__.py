"""Materials module for light scattering models.

Components:
    material: Material interface and ScatterResult
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Each material provides:
    scatter(ray_in, rec, rng) -> ScatterResult | None
where None means the ray was absorbed.
"""

from .dielectric import Dielectric, fresnel_reflectance, refraction_ratio
from .lambertian import Lambertian
from .material import Material, ScatterResult, validate_albedo
from .metal import Metal

__all__ = [
    "Material",
    "ScatterResult",
    "validate_albedo",
    # Lambertian
    "Lambertian",
    # Metal
    "Metal",
    # Dielectric
    "Dielectric",
    "fresnel_reflectance",
    "refraction_ratio",
]
