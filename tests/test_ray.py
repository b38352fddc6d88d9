"""Unit tests for the ray module.

Tests cover:
- Ray dataclass and ray_at function
- Vector utility functions (dot, length_squared, unit_vector)
"""

import pytest
import taichi as ti


class TestRayBasics:
    """Tests for Ray dataclass and basic operations."""

    def test_ray_at_origin(self):
        """Test ray_at returns origin when t=0."""
        from src.pixeltrace.core.ray import Ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 0.0)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 2.0) < 1e-6
        assert abs(r[2] - 3.0) < 1e-6

    def test_ray_at_positive_t(self):
        """Test ray_at computes correct point along ray."""
        from src.pixeltrace.core.ray import Ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(1.0, 0.0, 0.0))
            result[None] = ray_at(ray, 5.0)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 5.0) < 1e-6
        assert abs(r[1]) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_ray_at_negative_t(self):
        """Test ray_at handles negative t (behind origin)."""
        from src.pixeltrace.core.ray import Ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 1.0, 0.0))
            result[None] = ray_at(ray, -3.0)

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1] - (-3.0)) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_ray_at_unnormalized_direction(self):
        """Test ray_at scales by the direction's full length."""
        from src.pixeltrace.core.ray import make_ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 1.0, 1.0), vec3(0.0, 0.0, -2.0))
            result[None] = ray_at(ray, 1.5)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 1.0) < 1e-6
        assert abs(r[2] - (-2.0)) < 1e-6


class TestVectorUtilities:
    """Tests for vector utility functions."""

    def test_length_squared(self):
        """Test squared length is the sum of squared components."""
        from src.pixeltrace.core.ray import length_squared, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = length_squared(vec3(1.0, -2.0, 3.0))

        test_kernel()
        assert abs(result[None] - 14.0) < 1e-6

    def test_dot_product(self):
        """Test dot product computation."""
        from src.pixeltrace.core.ray import dot, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = dot(vec3(1.0, 2.0, 3.0), vec3(4.0, 5.0, 6.0))

        test_kernel()
        # 1*4 + 2*5 + 3*6 = 32
        assert abs(result[None] - 32.0) < 1e-6

    def test_dot_product_perpendicular(self):
        """Test dot product of perpendicular vectors is zero."""
        from src.pixeltrace.core.ray import dot, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = dot(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        assert abs(result[None]) < 1e-6

    def test_unit_vector(self):
        """Test unit_vector keeps direction and scales to length 1."""
        from src.pixeltrace.core.ray import unit_vector, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = unit_vector(vec3(3.0, 4.0, 0.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 0.6) < 1e-6
        assert abs(r[1] - 0.8) < 1e-6
        assert abs(r[2]) < 1e-6

    @pytest.mark.parametrize(
        "v",
        [
            (1.0, 0.0, 0.0),
            (0.0, -5.0, 0.0),
            (1.0, 1.0, 1.0),
            (-1.7777778, 1.0, -1.0),
            (1e-3, 2e-3, -3e-3),
            (250.0, -120.0, 75.5),
        ],
    )
    def test_unit_vector_has_unit_length(self, v):
        """Test length_squared(unit_vector(v)) is 1 for non-zero v."""
        from src.pixeltrace.core.ray import length_squared, unit_vector, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(x: ti.f32, y: ti.f32, z: ti.f32):
            result[None] = length_squared(unit_vector(vec3(x, y, z)))

        test_kernel(*v)
        assert abs(result[None] - 1.0) < 1e-5
