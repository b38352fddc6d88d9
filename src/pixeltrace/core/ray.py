"""Ray data structure and vector utilities for the rendering kernel.

This module provides the Ray dataclass and the handful of vector operations
the renderer needs. Everything here is a Taichi function, so it can be
called from any kernel; all math is single precision.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.pixeltrace.core.ray import Ray, ray_at, vec3
    >>>
    >>> @ti.kernel
    ... def point() -> vec3:
    ...     ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    ...     return ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not required to be
            normalized; intersection math accounts for its length.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Negative values lie behind the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction without validation."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Args:
        v: The input vector.

    Returns:
        The sum of the squared components.
    """
    return v.x * v.x + v.y * v.y + v.z * v.z


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The input must be non-zero. Ray directions and sphere normals are
    non-degenerate by construction, so the check is an assertion that only
    fires when Taichi runs with debug=True.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    len_sq = length_squared(v)
    assert len_sq > 0.0, "unit_vector() called with a zero-length vector"
    return v / ti.sqrt(len_sq)
