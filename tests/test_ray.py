"""Unit tests for the ray module and vector utilities.

Tests cover:
- Vector construction and conversion
- Ray evaluation at parameter t
- Normalization, reflection and refraction
- Schlick Fresnel approximation
- Random sampling helpers (unit vectors, unit disk, cosine-weighted hemisphere)
"""

import math

import numpy as np
import pytest

from lensray.core.ray import (
    Ray,
    as_vec3,
    build_onb_from_normal,
    cross,
    dot,
    length,
    near_zero,
    normalize,
    random_in_unit_disk,
    random_unit_vector,
    reflect,
    refract,
    sample_cosine_hemisphere,
    schlick_fresnel,
    vec3,
)


class TestVectors:
    """Tests for vector construction and basic operations."""

    def test_vec3_dtype_and_shape(self):
        """Test vec3 creates a float64 array of shape (3,)."""
        v = vec3(1, 2, 3)
        assert v.shape == (3,)
        assert v.dtype == np.float64
        assert v.tolist() == [1.0, 2.0, 3.0]

    def test_as_vec3_from_tuple(self):
        """Test conversion from a tuple."""
        v = as_vec3((1, 2, 3))
        assert v.dtype == np.float64
        assert v.tolist() == [1.0, 2.0, 3.0]

    def test_as_vec3_wrong_size(self):
        """Test that a 2-component value is rejected."""
        with pytest.raises(ValueError, match="3 components"):
            as_vec3((1.0, 2.0))

    def test_length(self):
        """Test length of a 3-4-0 vector."""
        assert abs(length(vec3(3.0, 4.0, 0.0)) - 5.0) < 1e-12

    def test_normalize(self):
        """Test normalization produces a unit vector in the same direction."""
        n = normalize(vec3(0.0, 0.0, -7.0))
        assert np.allclose(n, [0.0, 0.0, -1.0])

    def test_normalize_zero_vector(self):
        """Test normalizing the zero vector returns zeros instead of NaN."""
        n = normalize(vec3(0.0, 0.0, 0.0))
        assert np.all(n == 0.0)

    def test_dot_and_cross(self):
        """Test dot and cross products of the x and y axes."""
        x = vec3(1.0, 0.0, 0.0)
        y = vec3(0.0, 1.0, 0.0)
        assert dot(x, y) == 0.0
        assert np.allclose(cross(x, y), [0.0, 0.0, 1.0])

    def test_near_zero(self):
        """Test near_zero threshold."""
        assert near_zero(vec3(1e-9, -1e-9, 0.0))
        assert not near_zero(vec3(1e-3, 0.0, 0.0))


class TestRay:
    """Tests for the Ray dataclass."""

    def test_ray_at(self):
        """Test evaluating a ray at several parameters."""
        ray = Ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, -2.0))
        assert np.allclose(ray.at(0.0), [1.0, 2.0, 3.0])
        assert np.allclose(ray.at(1.5), [1.0, 2.0, 0.0])
        assert np.allclose(ray.at(-1.0), [1.0, 2.0, 5.0])

    def test_ray_is_immutable(self):
        """Test that ray fields cannot be reassigned."""
        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
        with pytest.raises(AttributeError):
            ray.origin = vec3(1.0, 1.0, 1.0)


class TestReflectRefract:
    """Tests for reflection and refraction."""

    def test_reflect_45_degrees(self):
        """Test a 45 degree reflection off a floor."""
        incident = normalize(vec3(1.0, -1.0, 0.0))
        r = reflect(incident, vec3(0.0, 1.0, 0.0))
        assert np.allclose(r, normalize(vec3(1.0, 1.0, 0.0)))

    def test_refract_normal_incidence(self):
        """Test that a ray at normal incidence is not bent."""
        r = refract(vec3(0.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0), 1.0 / 1.5)
        assert np.allclose(r, [0.0, -1.0, 0.0])

    def test_refract_snells_law(self):
        """Test that the refracted angle satisfies Snell's law."""
        eta = 1.0 / 1.5
        theta_i = math.radians(30.0)
        incident = vec3(math.sin(theta_i), -math.cos(theta_i), 0.0)
        r = refract(incident, vec3(0.0, 1.0, 0.0), eta)
        sin_t = r[0] / length(r)
        assert abs(sin_t - eta * math.sin(theta_i)) < 1e-9

    def test_refract_total_internal_reflection(self):
        """Test that total internal reflection returns a zero vector."""
        theta_i = math.radians(60.0)
        incident = vec3(math.sin(theta_i), -math.cos(theta_i), 0.0)
        r = refract(incident, vec3(0.0, 1.0, 0.0), 1.5)
        assert np.all(r == 0.0)

    def test_schlick_normal_incidence(self):
        """Test Schlick reflectance at normal incidence equals r0."""
        assert abs(schlick_fresnel(1.0, 1.5) - 0.04) < 1e-12

    def test_schlick_grazing(self):
        """Test Schlick reflectance approaches 1 at grazing incidence."""
        assert abs(schlick_fresnel(0.0, 1.5) - 1.0) < 1e-12


class TestRandomSampling:
    """Tests for the random sampling helpers."""

    def test_random_unit_vector(self, rng):
        """Test samples have unit length."""
        for _ in range(200):
            assert abs(length(random_unit_vector(rng)) - 1.0) < 1e-9

    def test_random_in_unit_disk(self, rng):
        """Test samples lie inside the unit disk in the xy-plane."""
        for _ in range(200):
            p = random_in_unit_disk(rng)
            assert p[2] == 0.0
            assert p[0] * p[0] + p[1] * p[1] < 1.0

    def test_random_in_unit_disk_reproducible(self):
        """Test equal seeds give equal samples."""
        a = random_in_unit_disk(np.random.default_rng(3))
        b = random_in_unit_disk(np.random.default_rng(3))
        assert np.array_equal(a, b)

    def test_onb_is_orthonormal(self):
        """Test the basis built from a normal is orthonormal."""
        for normal in (vec3(0.0, 0.0, 1.0), vec3(1.0, 0.0, 0.0), normalize(vec3(1.0, 2.0, 3.0))):
            t, b, n = build_onb_from_normal(normal)
            assert abs(dot(t, b)) < 1e-9
            assert abs(dot(t, n)) < 1e-9
            assert abs(dot(b, n)) < 1e-9
            assert abs(length(t) - 1.0) < 1e-9
            assert abs(length(b) - 1.0) < 1e-9

    def test_cosine_hemisphere_direction(self, rng):
        """Test cosine-weighted samples are unit length and above the surface."""
        normal = normalize(vec3(0.0, 1.0, 1.0))
        for _ in range(100):
            direction = sample_cosine_hemisphere(normal, rng)
            assert abs(length(direction) - 1.0) < 1e-9
            assert dot(direction, normal) >= 0.0

    def test_cosine_hemisphere_mean_cosine(self, rng):
        """Test the mean cosine to the normal matches the cos/pi density (2/3)."""
        normal = vec3(1.0, 0.0, 0.0)
        cosines = [dot(sample_cosine_hemisphere(normal, rng), normal) for _ in range(2000)]
        assert abs(np.mean(cosines) - 2.0 / 3.0) < 0.03
