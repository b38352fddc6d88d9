"""Sphere primitive with ray-sphere intersection.

The scene contains a single sphere whose center and radius are module
constants. Intersection solves

    |origin + t * direction - center|^2 = radius^2

with the half-b form of the quadratic and reports only the near root. The
result is an explicit Hit record instead of a sentinel value: callers check
``hit`` first and then decide what to do with ``t``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.pixeltrace.geometry.sphere import SPHERE_CENTER, SPHERE_RADIUS, hit_sphere
    >>> # Use hit_sphere(SPHERE_CENTER, SPHERE_RADIUS, ray) within a Taichi kernel
"""

import taichi as ti

from src.pixeltrace.core.ray import Ray, dot, length_squared, vec3

# Scene sphere
SPHERE_CENTER = vec3(0.0, 0.0, -1.0)
SPHERE_RADIUS = 0.5


@ti.dataclass
class Hit:
    """Result of a ray-sphere intersection test.

    Attributes:
        hit: 1 if the ray's line meets the sphere, 0 otherwise.
        t: Ray parameter of the near root. Only valid if hit == 1; may be
            zero or negative when the sphere is behind the ray origin or
            the origin is inside the sphere.
    """

    hit: ti.i32
    t: ti.f32


@ti.func
def hit_sphere(center: vec3, radius: ti.f32, ray: Ray) -> Hit:
    """Test a ray against a sphere and return the near root.

    Quadratic coefficients (half-b form):
        a = dot(direction, direction)
        half_b = dot(oc, direction)
        c = dot(oc, oc) - radius^2
        oc = origin - center

    A zero discriminant counts as a tangential hit. No epsilon is applied and
    the root is not required to be positive.

    Args:
        center: Sphere center.
        radius: Sphere radius.
        ray: The ray to test; its direction need not be normalized.

    Returns:
        Hit(hit=1, t=near_root) or Hit(hit=0) when the discriminant is negative.
    """
    oc = ray.origin - center
    a = length_squared(ray.direction)
    half_b = dot(oc, ray.direction)
    c = length_squared(oc) - radius * radius
    discriminant = half_b * half_b - a * c

    # Taichi requires outer-scope declaration
    did_hit = 0
    hit_t = 0.0
    if discriminant >= 0.0:
        did_hit = 1
        hit_t = (-half_b - ti.sqrt(discriminant)) / a

    return Hit(hit=did_hit, t=hit_t)
