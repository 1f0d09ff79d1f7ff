"""Ready-made demo scenes.

Each factory returns a ``(world, camera)`` pair: the hittable world and a
camera already positioned to frame it. Image size and sample counts on the
returned camera are modest defaults; callers adjust them before rendering.

Scenes:
    three_spheres: A diffuse sphere flanked by a hollow glass sphere and a
        metal sphere on a large ground sphere, shot with a shallow depth of
        field.
    random_spheres: A field of small random diffuse, metal and glass spheres
        around three large feature spheres.
    quads: Five coloured quads forming an open box.

Example:
    >>> from lensray.scene.presets import create_three_spheres_scene
    >>> world, camera = create_three_spheres_scene()
    >>> camera.image_width = 200
    >>> camera.render(world)
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from lensray.camera.thin_lens import Camera
from lensray.core.ray import length, point3
from lensray.geometry.quad import Quad
from lensray.geometry.sphere import Sphere
from lensray.materials.dielectric import Dielectric
from lensray.materials.lambertian import Lambertian
from lensray.materials.metal import Metal
from lensray.scene.intersection import HittableList

SceneFactory = Callable[[np.random.Generator], tuple[HittableList, Camera]]


def create_three_spheres_scene(
    rng: np.random.Generator | None = None,
) -> tuple[HittableList, Camera]:
    """Create the three spheres scene.

    Args:
        rng: Unused, accepted so all factories share a signature.

    Returns:
        Tuple of (world, camera).
    """
    material_ground = Lambertian((0.8, 0.8, 0.0))
    material_center = Lambertian((0.1, 0.2, 0.5))
    material_left = Dielectric(1.50)
    material_bubble = Dielectric(1.00 / 1.50)
    material_right = Metal((0.8, 0.6, 0.2), fuzz=1.0)

    world = HittableList()
    world.add(Sphere((0.0, -100.5, -1.0), 100.0, material_ground))
    world.add(Sphere((0.0, 0.0, -1.2), 0.5, material_center))
    world.add(Sphere((-1.0, 0.0, -1.0), 0.5, material_left))
    world.add(Sphere((-1.0, 0.0, -1.0), 0.4, material_bubble))
    world.add(Sphere((1.0, 0.0, -1.0), 0.5, material_right))

    camera = Camera(
        aspect_ratio=16.0 / 9.0,
        image_width=400,
        samples_per_pixel=100,
        max_depth=50,
        vfov=20.0,
        lookfrom=(-2.0, 2.0, 1.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=10.0,
        focus_dist=3.4,
    )
    return world, camera


def create_random_spheres_scene(
    rng: np.random.Generator | None = None,
    grid: int = 11,
) -> tuple[HittableList, Camera]:
    """Create the random spheres scene.

    Small spheres are placed on a (2 * grid) x (2 * grid) lattice with random
    jitter; 80% are diffuse, 15% metal and 5% glass. Spheres too close to the
    large metal sphere are skipped.

    Args:
        rng: Random generator for placement and materials. A fresh default
            generator is used when omitted.
        grid: Half-width of the placement lattice.

    Returns:
        Tuple of (world, camera).
    """
    if rng is None:
        rng = np.random.default_rng()

    world = HittableList()
    world.add(Sphere((0.0, -1000.0, 0.0), 1000.0, Lambertian((0.5, 0.5, 0.5))))

    clearance_point = point3(4.0, 0.2, 0.0)
    for a in range(-grid, grid):
        for b in range(-grid, grid):
            choose_mat = rng.random()
            center = point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if length(center - clearance_point) <= 0.9:
                continue

            if choose_mat < 0.8:
                # diffuse
                albedo = rng.random(3) * rng.random(3)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                # metal
                albedo = rng.uniform(0.5, 1.0, size=3)
                material = Metal(albedo, fuzz=rng.uniform(0.0, 0.5))
            else:
                # glass
                material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere((0.0, 1.0, 0.0), 1.0, Dielectric(1.5)))
    world.add(Sphere((-4.0, 1.0, 0.0), 1.0, Lambertian((0.4, 0.2, 0.1))))
    world.add(Sphere((4.0, 1.0, 0.0), 1.0, Metal((0.7, 0.6, 0.5), fuzz=0.0)))

    camera = Camera(
        aspect_ratio=16.0 / 9.0,
        image_width=400,
        samples_per_pixel=10,
        max_depth=50,
        vfov=20.0,
        lookfrom=(13.0, 2.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )
    return world, camera


def create_quads_scene(
    rng: np.random.Generator | None = None,
) -> tuple[HittableList, Camera]:
    """Create the quads scene.

    Args:
        rng: Unused, accepted so all factories share a signature.

    Returns:
        Tuple of (world, camera).
    """
    left_red = Lambertian((1.0, 0.2, 0.2))
    back_green = Lambertian((0.2, 1.0, 0.2))
    right_blue = Lambertian((0.2, 0.2, 1.0))
    upper_orange = Lambertian((1.0, 0.5, 0.0))
    lower_teal = Lambertian((0.2, 0.8, 0.8))

    world = HittableList()
    world.add(Quad((-3.0, -2.0, 5.0), (0.0, 0.0, -4.0), (0.0, 4.0, 0.0), left_red))
    world.add(Quad((-2.0, -2.0, 0.0), (4.0, 0.0, 0.0), (0.0, 4.0, 0.0), back_green))
    world.add(Quad((3.0, -2.0, 1.0), (0.0, 0.0, 4.0), (0.0, 4.0, 0.0), right_blue))
    world.add(Quad((-2.0, 3.0, 1.0), (4.0, 0.0, 0.0), (0.0, 0.0, 4.0), upper_orange))
    world.add(Quad((-2.0, -3.0, 5.0), (4.0, 0.0, 0.0), (0.0, 0.0, -4.0), lower_teal))

    camera = Camera(
        aspect_ratio=1.0,
        image_width=400,
        samples_per_pixel=100,
        max_depth=50,
        vfov=80.0,
        lookfrom=(0.0, 0.0, 9.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=0.0,
    )
    return world, camera


SCENES: dict[str, SceneFactory] = {
    "three_spheres": create_three_spheres_scene,
    "random_spheres": create_random_spheres_scene,
    "quads": create_quads_scene,
}
