"""Real-time ray-traced preview of a single sphere, built on Taichi.

Every frame, each pixel of a fixed-size RGBA8 buffer gets a ray from a
pinhole camera; the ray is shaded analytically (sphere normal or sky
gradient) and encoded into four bytes. Frames are bit-reproducible.

Subpackages:
    core: Vector/ray utilities, shading, color encoding and frame rendering
    geometry: The scene sphere and its intersection test
    camera: Camera configuration, state, input and ray generation
    preview: Interactive GGUI window and static Matplotlib preview
"""

__version__ = "0.1.0"
