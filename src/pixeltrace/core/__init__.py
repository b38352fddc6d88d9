"""Core rendering module.

This module contains the fundamental building blocks of the renderer:

Components:
    ray: Ray data structure and vector utilities
    integrator: Shading, color encoding and the per-frame render kernels
    frame: FrameRenderer, which owns an RGBA buffer and redraws it

All per-pixel work runs in Taichi kernels and is single precision, so the
same camera always produces the same bytes.
"""

from .ray import (
    Ray,
    dot,
    length_squared,
    make_ray,
    ray_at,
    unit_vector,
    vec3,
)

# Note: integrator and frame are NOT imported here to avoid circular imports
# with the camera package. Import them directly when needed:
#   from src.pixeltrace.core.integrator import render_frame
#   from src.pixeltrace.core.frame import FrameRenderer

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "length_squared",
    "unit_vector",
]
