"""Geometry module for the scene's shape primitive.

Components:
    sphere: The fixed scene sphere and its ray intersection test

Intersection routines are Taichi functions (@ti.func) and return an explicit
Hit record rather than a sentinel distance.
"""

from .sphere import SPHERE_CENTER, SPHERE_RADIUS, Hit, hit_sphere

__all__ = [
    "SPHERE_CENTER",
    "SPHERE_RADIUS",
    "Hit",
    "hit_sphere",
]
