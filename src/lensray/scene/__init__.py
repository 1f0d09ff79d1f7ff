"""Scene module for hit records and scene assembly.

Components:
    intersection: HitRecord, the Hittable interface and HittableList
    presets: Ready-made demo scenes returning (world, camera)

Note: presets is NOT imported here to avoid circular imports (the geometry
primitives import this package for HitRecord). Import it directly:
    from lensray.scene.presets import create_three_spheres_scene
"""

from .intersection import HitRecord, Hittable, HittableList

__all__ = [
    "HitRecord",
    "Hittable",
    "HittableList",
]
