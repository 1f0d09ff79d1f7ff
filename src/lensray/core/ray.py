"""Ray data structure and vector utilities for CPU ray tracing.

Rays, vector helpers and the random samplers used by the camera and the
materials. Vectors, points and colours all share the same
representation: a NumPy ``float64`` array of shape ``(3,)``.

Random sampling helpers take an explicit ``numpy.random.Generator`` so that a
render is reproducible from its seed and no hidden global generator exists.

Example:
    >>> import numpy as np
    >>> origin = point3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray.at(5.0)  # Point 5 units along the ray
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors (points and colours use the same layout)
Vec3 = npt.NDArray[np.float64]


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vec3:
    """Create a 3D vector.

    Args:
        x: First component.
        y: Second component.
        z: Third component.

    Returns:
        A float64 array of shape (3,).
    """
    return np.array((x, y, z), dtype=np.float64)


# Points and colours are plain vectors with a different reading
point3 = vec3
colour = vec3


def as_vec3(value) -> Vec3:
    """Convert a 3-sequence (tuple, list or array) into a float64 vector.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got {arr.shape[0]}")
    return arr


def read_only(v: Vec3) -> Vec3:
    """Mark a vector as read-only and return it.

    Applied to vectors that an object hands out to every ray or hit it makes.
    """
    v.flags.writeable = False
    return v


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized; camera rays span the distance to the focus plane.
    """

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t."""
        return self.origin + t * self.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return float(np.linalg.norm(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
        If v is zero-length, returns a zero vector.
    """
    n = np.linalg.norm(v)
    if n == 0.0:
        return np.zeros(3, dtype=np.float64)
    return v / n


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product a . b."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return np.cross(a, b)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Mirror incident about a unit normal: I - 2(I . N)N."""
    return incident - 2.0 * np.dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, eta: float) -> Vec3:
    """Bend a unit incident direction through a surface by Snell's law.

    Args:
        incident: Unit incoming direction.
        normal: Unit normal on the incident side.
        eta: n_incident / n_transmitted.

    Returns:
        The transmitted direction, or zeros under total internal reflection.
    """
    cos_i = min(-float(np.dot(incident, normal)), 1.0)
    sin2_t = eta * eta * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        return np.zeros(3, dtype=np.float64)
    cos_t = np.sqrt(1.0 - sin2_t)
    return eta * incident + (eta * cos_i - cos_t) * normal


def schlick_fresnel(cosine: float, ref_idx: float) -> float:
    """Schlick approximation of the Fresnel reflectance for a cosine and index ratio."""
    r0 = ((1.0 - ref_idx) / (1.0 + ref_idx)) ** 2
    return r0 + (1.0 - r0) * ((1.0 - cosine) ** 5)


def near_zero(v: Vec3) -> bool:
    """True when every component is below 1e-8 in magnitude."""
    return bool(np.all(np.abs(v) < 1e-8))


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere."""
    while True:
        p = rng.uniform(-1.0, 1.0, size=3)
        lensq = np.dot(p, p)
        # Tiny samples would blow up to non-finite values when normalized
        if 1e-160 < lensq <= 1.0:
            return p / np.sqrt(lensq)


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Rejection sampling over the enclosing square keeps the distribution
    uniform over the disk area. Used for depth-of-field lens sampling.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    while True:
        x, y = rng.uniform(-1.0, 1.0, size=2)
        if x * x + y * y < 1.0:
            return vec3(x, y, 0.0)


def random_cosine_direction(rng: np.random.Generator) -> Vec3:
    """Generate a random direction with cosine-weighted distribution.

    The distribution has PDF = cos(theta) / pi.

    Returns:
        A random direction in the local coordinate frame (z-up).
    """
    r1, r2 = rng.random(2)
    phi = 2.0 * np.pi * r1
    sqrt_r2 = np.sqrt(r2)
    return vec3(np.cos(phi) * sqrt_r2, np.sin(phi) * sqrt_r2, np.sqrt(1.0 - r2))


def build_onb_from_normal(normal: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Tangent frame (tangent, bitangent, normal) with the unit normal as local z."""
    # Helper axis must not be parallel to the normal
    a = vec3(0.0, 1.0, 0.0) if abs(normal[0]) > 0.9 else vec3(1.0, 0.0, 0.0)
    tangent = normalize(np.cross(a, normal))
    bitangent = np.cross(normal, tangent)
    return tangent, bitangent, normal


def local_to_world(local_dir: Vec3, tangent: Vec3, bitangent: Vec3, normal: Vec3) -> Vec3:
    """Transform a direction from local (z-up) to world coordinates."""
    return local_dir[0] * tangent + local_dir[1] * bitangent + local_dir[2] * normal


def sample_cosine_hemisphere(normal: Vec3, rng: np.random.Generator) -> Vec3:
    """Cosine-weighted hemisphere sampling for diffuse surfaces.

    Args:
        normal: The surface normal defining the hemisphere orientation.
        rng: Random generator.

    Returns:
        A unit direction in the hemisphere around normal, with density cos(theta) / pi.
    """
    local_dir = random_cosine_direction(rng)
    tangent, bitangent, n = build_onb_from_normal(normal)
    return local_to_world(local_dir, tangent, bitangent, n)
