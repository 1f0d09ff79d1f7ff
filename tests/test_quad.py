"""Unit tests for quad intersection.

Tests cover:
- Quad construction and plane frame
- Hits inside the parallelogram
- Misses outside the bounds
- Parallel rays
- Front and back face hits
"""

import math

import numpy as np
import pytest

from lensray.core.interval import Interval
from lensray.core.ray import Ray, vec3
from lensray.geometry.quad import Quad


@pytest.fixture
def unit_quad():
    """Unit square in the z=0 plane spanning x, y in [0, 1]."""
    return Quad((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))


class TestQuadBasics:
    """Tests for quad construction."""

    def test_normal_and_area(self):
        """Test the normal follows the right-hand rule and area is |u x v|."""
        quad = Quad((0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (0.0, 3.0, 0.0))
        assert np.allclose(quad.normal, [0.0, 0.0, 1.0])
        assert abs(quad.area - 6.0) < 1e-12

    def test_parallel_edges_rejected(self):
        """Test that degenerate quads raise ValueError."""
        with pytest.raises(ValueError, match="parallel"):
            Quad((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0))


class TestQuadIntersection:
    """Tests for ray-quad intersection."""

    def test_hit_center(self, unit_quad, hit_interval):
        """Test a ray through the middle of the quad."""
        ray = Ray(vec3(0.5, 0.5, 2.0), vec3(0.0, 0.0, -1.0))
        rec = unit_quad.hit(ray, hit_interval)
        assert rec is not None
        assert abs(rec.t - 2.0) < 1e-9
        assert np.allclose(rec.point, [0.5, 0.5, 0.0])
        assert rec.front_face
        assert np.allclose(rec.normal, [0.0, 0.0, 1.0])

    def test_front_face_normal_cannot_alter_quad(self, unit_quad, hit_interval):
        """Test the normal handed to a hit record rejects in-place updates."""
        ray = Ray(vec3(0.5, 0.5, 2.0), vec3(0.0, 0.0, -1.0))
        rec = unit_quad.hit(ray, hit_interval)
        with pytest.raises(ValueError):
            rec.normal[2] = -1.0
        assert np.array_equal(unit_quad.normal, [0.0, 0.0, 1.0])
        assert np.array_equal(unit_quad.hit(ray, hit_interval).normal, [0.0, 0.0, 1.0])

    def test_hit_from_behind(self, unit_quad, hit_interval):
        """Test a hit from the back side flips the normal."""
        ray = Ray(vec3(0.25, 0.75, -1.0), vec3(0.0, 0.0, 1.0))
        rec = unit_quad.hit(ray, hit_interval)
        assert rec is not None
        assert not rec.front_face
        assert np.allclose(rec.normal, [0.0, 0.0, -1.0])

    @pytest.mark.parametrize(
        "x, y",
        [(-0.1, 0.5), (1.1, 0.5), (0.5, -0.1), (0.5, 1.1)],
    )
    def test_miss_outside_bounds(self, unit_quad, hit_interval, x, y):
        """Test rays hitting the plane outside the parallelogram miss."""
        ray = Ray(vec3(x, y, 1.0), vec3(0.0, 0.0, -1.0))
        assert unit_quad.hit(ray, hit_interval) is None

    def test_parallel_ray_misses(self, unit_quad, hit_interval):
        """Test a ray parallel to the plane misses."""
        ray = Ray(vec3(0.5, 0.5, 1.0), vec3(1.0, 0.0, 0.0))
        assert unit_quad.hit(ray, hit_interval) is None

    def test_behind_origin_misses(self, unit_quad, hit_interval):
        """Test a quad behind the ray origin is not hit."""
        ray = Ray(vec3(0.5, 0.5, 1.0), vec3(0.0, 0.0, 1.0))
        assert unit_quad.hit(ray, hit_interval) is None

    def test_outside_interval_misses(self, unit_quad):
        """Test a hit beyond the interval max is rejected."""
        ray = Ray(vec3(0.5, 0.5, 2.0), vec3(0.0, 0.0, -1.0))
        assert unit_quad.hit(ray, Interval(0.001, 1.0)) is None
        assert unit_quad.hit(ray, Interval(0.001, math.inf)) is not None

    def test_skewed_parallelogram(self, hit_interval):
        """Test bounds follow the edge vectors, not the axes."""
        quad = Quad((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0))
        # (1.5, 0.5) = 1.0 * u + 0.5 * v lies inside
        inside = Ray(vec3(1.5, 0.5, 1.0), vec3(0.0, 0.0, -1.0))
        # (0.1, 0.9) would need alpha = -0.8
        outside = Ray(vec3(0.1, 0.9, 1.0), vec3(0.0, 0.0, -1.0))
        assert quad.hit(inside, hit_interval) is not None
        assert quad.hit(outside, hit_interval) is None
