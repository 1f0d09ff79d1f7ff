"""Stand-in materials and hittables shared by the tests."""

from lensray.core.ray import Ray, vec3
from lensray.materials.material import ScatterResult
from lensray.scene.intersection import HitRecord


def make_hit(point=(0.0, 0.0, 0.0), normal=(0.0, 1.0, 0.0), t=1.0, front_face=True):
    """Build a hit record on a surface facing the given normal."""
    return HitRecord(
        point=vec3(*point),
        normal=vec3(*normal),
        t=t,
        front_face=front_face,
    )


class Absorber:
    """Material that absorbs every ray."""

    def scatter(self, ray_in, rec, rng):
        return None


class Mirror:
    """Material reflecting straight back with a fixed attenuation."""

    def __init__(self, attenuation):
        self.attenuation = vec3(*attenuation)

    def scatter(self, ray_in, rec, rng):
        return ScatterResult(self.attenuation, Ray(rec.point, -ray_in.direction))


class Wall:
    """An infinite plane z = z0 hit from either side."""

    def __init__(self, z0, material):
        self.z0 = z0
        self.material = material

    def hit(self, ray, ray_t):
        dz = ray.direction[2]
        if dz == 0.0:
            return None
        t = (self.z0 - ray.origin[2]) / dz
        if not ray_t.surrounds(t):
            return None
        return HitRecord.from_outward_normal(ray, t, vec3(0.0, 0.0, 1.0), self.material)
