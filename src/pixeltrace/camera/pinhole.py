"""Pinhole camera model for primary ray generation.

The camera looks down -z from its origin onto a viewport one focal length
away. The viewport geometry is derived once from the configuration:

- horizontal: full viewport width along +x
- vertical: full viewport height along +y
- lower_left_corner: the viewport's lower-left corner in world space

Only the origin changes afterwards (keyboard input moves it). The viewport
vectors, including the lower-left corner, keep the values computed from the
initial origin unless recenter_viewport() is called.

Camera state lives in a plain Python object that is passed explicitly to the
input path (apply_input) and the render path (render_frame). The render path
reads an immutable CameraSnapshot taken at the start of each pass.

Example:
    >>> from src.pixeltrace.camera.pinhole import CameraConfig, apply_input, setup_camera
    >>>
    >>> camera = setup_camera(CameraConfig(image_width=400))
    >>> camera.image_height
    225
    >>> apply_input(camera, {"w"})  # Nudge the origin up by 0.01
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np
import taichi as ti

from src.pixeltrace.core.ray import Ray, make_ray, vec3

logger = logging.getLogger(__name__)

Vec3Tuple = tuple[float, float, float]

# Row value the frame driver historically counted down from, regardless of
# the real image height. Selectable through CameraConfig.row_anchor.
LEGACY_ROW_ANCHOR = 256

# Origin offset applied per held movement key per input update
MOVE_STEP = 0.01

# Held key -> direction along the vertical (y) axis
KEY_BINDINGS: dict[str, float] = {
    "w": 1.0,
    "r": -1.0,
}


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class CameraConfig:
    """Configuration for the pinhole camera.

    Attributes:
        aspect_ratio: Width divided by height of the output image.
        image_width: Output image width in pixels. The height is derived as
            int(image_width / aspect_ratio).
        viewport_height: Viewport height in world units.
        focal_length: Distance from the origin to the viewport plane.
        origin: Initial camera position in world space (x, y, z).
        row_anchor: Row value the frame driver counts down from. None means
            image_height - 1, so the top row maps to v = 1. Use
            LEGACY_ROW_ANCHOR to reproduce the constant-anchored layout.
    """

    aspect_ratio: float = 16.0 / 9.0
    image_width: int = 400
    viewport_height: float = 2.0
    focal_length: float = 1.0
    origin: Vec3Tuple = (0.0, 0.0, 0.0)
    row_anchor: int | None = None


@dataclass(frozen=True)
class CameraSnapshot:
    """Consistent, read-only view of the camera for one render pass."""

    image_width: int
    image_height: int
    row_anchor: int
    origin: Vec3Tuple
    horizontal: Vec3Tuple
    vertical: Vec3Tuple
    lower_left_corner: Vec3Tuple


@dataclass
class Camera:
    """Mutable camera state shared by the input and render paths.

    All fields except origin are derived once by setup_camera(). Use
    move_origin() or apply_input() to change the origin and snapshot() to
    read a consistent copy; both hold the camera lock.
    """

    aspect_ratio: float
    image_width: int
    image_height: int
    viewport_height: float
    viewport_width: float
    focal_length: float
    origin: Vec3Tuple
    horizontal: Vec3Tuple
    vertical: Vec3Tuple
    lower_left_corner: Vec3Tuple
    row_anchor: int | None = None
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def move_origin(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> None:
        """Offset the camera origin, in single precision like the kernel."""
        with self._lock:
            moved = np.array(self.origin, dtype=np.float32) + np.array(
                [dx, dy, dz], dtype=np.float32
            )
            self.origin = _to_tuple(moved)

    def recenter_viewport(self) -> None:
        """Recompute the lower-left corner from the current origin.

        Not called automatically: moving the origin keeps the corner that was
        computed at setup, which tilts the view instead of translating it.
        """
        with self._lock:
            self.lower_left_corner = _to_tuple(
                _lower_left_corner(
                    np.array(self.origin, dtype=np.float32),
                    np.array(self.horizontal, dtype=np.float32),
                    np.array(self.vertical, dtype=np.float32),
                    np.float32(self.focal_length),
                )
            )

    def snapshot(self) -> CameraSnapshot:
        """Take a consistent copy of everything a render pass reads."""
        with self._lock:
            row_anchor = self.row_anchor
            if row_anchor is None:
                row_anchor = self.image_height - 1
            return CameraSnapshot(
                image_width=self.image_width,
                image_height=self.image_height,
                row_anchor=row_anchor,
                origin=self.origin,
                horizontal=self.horizontal,
                vertical=self.vertical,
                lower_left_corner=self.lower_left_corner,
            )


# =============================================================================
# Camera Setup (Python-side, called once per camera configuration)
# =============================================================================


def _to_tuple(v: np.ndarray) -> Vec3Tuple:
    return (float(v[0]), float(v[1]), float(v[2]))


def _lower_left_corner(
    origin: np.ndarray,
    horizontal: np.ndarray,
    vertical: np.ndarray,
    focal_length: np.float32,
) -> np.ndarray:
    forward = np.array([0.0, 0.0, focal_length], dtype=np.float32)
    return origin - horizontal / 2.0 - vertical / 2.0 - forward


def setup_camera(config: CameraConfig | None = None) -> Camera:
    """Create camera state from configuration.

    Computes the image height and the viewport vectors. The arithmetic is
    done in float32 with NumPy so the derived vectors match what the render
    kernels see.

    Args:
        config: Camera configuration. Defaults to CameraConfig().

    Returns:
        A new Camera.

    Raises:
        ValueError: If a dimension or length is not positive, or the image is
            smaller than 2x2 pixels (u and v divide by width-1 and height-1).
    """
    if config is None:
        config = CameraConfig()

    if config.aspect_ratio <= 0.0:
        raise ValueError(f"aspect_ratio must be positive, got {config.aspect_ratio}")
    if config.viewport_height <= 0.0:
        raise ValueError(f"viewport_height must be positive, got {config.viewport_height}")
    if config.focal_length <= 0.0:
        raise ValueError(f"focal_length must be positive, got {config.focal_length}")

    image_width = int(config.image_width)
    image_height = int(image_width / config.aspect_ratio)
    if image_width < 2 or image_height < 2:
        raise ValueError(
            f"Image dimensions ({image_width}x{image_height}) must be at least 2x2"
        )

    viewport_height = np.float32(config.viewport_height)
    viewport_width = np.float32(config.aspect_ratio) * viewport_height
    focal_length = np.float32(config.focal_length)

    origin = np.array(config.origin, dtype=np.float32)
    horizontal = np.array([viewport_width, 0.0, 0.0], dtype=np.float32)
    vertical = np.array([0.0, viewport_height, 0.0], dtype=np.float32)
    lower_left = _lower_left_corner(origin, horizontal, vertical, focal_length)

    logger.debug(
        "Camera set up: %dx%d, viewport %.4fx%.4f",
        image_width,
        image_height,
        viewport_width,
        viewport_height,
    )

    return Camera(
        aspect_ratio=config.aspect_ratio,
        image_width=image_width,
        image_height=image_height,
        viewport_height=float(viewport_height),
        viewport_width=float(viewport_width),
        focal_length=float(focal_length),
        origin=_to_tuple(origin),
        horizontal=_to_tuple(horizontal),
        vertical=_to_tuple(vertical),
        lower_left_corner=_to_tuple(lower_left),
        row_anchor=config.row_anchor,
    )


# =============================================================================
# Input
# =============================================================================


def apply_input(camera: Camera, held_keys: Iterable[str]) -> Camera:
    """Move the camera origin for each held movement key.

    Each recognized key moves origin.y by MOVE_STEP in its bound direction.
    Keys are applied in KEY_BINDINGS order; unrecognized keys are ignored.

    Args:
        camera: The camera to update in place.
        held_keys: Names of the keys currently held (case-insensitive).

    Returns:
        The same camera, for chaining.
    """
    held = {key.lower() for key in held_keys}
    for key, direction in KEY_BINDINGS.items():
        if key in held:
            camera.move_origin(dy=direction * MOVE_STEP)
            logger.debug("Key %r moved camera origin to %s", key, camera.origin)
    return camera


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_ray(
    u: ti.f32,
    v: ti.f32,
    origin: vec3,
    lower_left: vec3,
    horizontal: vec3,
    vertical: vec3,
) -> Ray:
    """Generate a ray through viewport coordinates (u, v).

    - u = 0: left edge, u = 1: right edge
    - v = 0: bottom edge, v = 1: top edge

    The direction is left unnormalized.

    Returns:
        A Ray from the camera origin toward the point on the viewport.
    """
    return make_ray(origin, lower_left + u * horizontal + v * vertical - origin)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info(camera: Camera) -> dict[str, Vec3Tuple | tuple[int, int]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with image_size, origin, horizontal, vertical, lower_left.
    """
    snapshot = camera.snapshot()
    return {
        "image_size": (snapshot.image_width, snapshot.image_height),
        "origin": snapshot.origin,
        "horizontal": snapshot.horizontal,
        "vertical": snapshot.vertical,
        "lower_left": snapshot.lower_left_corner,
    }
