"""Pytest configuration for lensray tests.

Provides shared fixtures for all test modules.
"""

import math

import numpy as np
import pytest

from lensray.camera.thin_lens import Camera
from lensray.core.interval import Interval


@pytest.fixture
def rng():
    """Seeded random generator so every test is reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def hit_interval():
    """The usual (0.001, inf) hit range."""
    return Interval(0.001, math.inf)


@pytest.fixture
def small_camera():
    """A tiny pinhole camera looking down -z from the origin."""
    return Camera(
        aspect_ratio=2.0,
        image_width=8,
        samples_per_pixel=2,
        max_depth=5,
        vfov=90.0,
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=0.0,
        focus_dist=1.0,
    )
