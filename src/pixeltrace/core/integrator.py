"""Shading, color encoding and the per-frame render kernels.

Each pixel is independent: a ray is built from the camera snapshot, shaded
analytically against the scene sphere and encoded into four bytes at the
pixel's own offset in the frame buffer. The outermost pixel loop is
parallelized by Taichi; a serialized variant of the same kernel exists so
the two schedules can be compared byte for byte.

Shading:
    - Hit in front of the camera: surface normal mapped from [-1, 1] to [0, 1]
    - Miss: vertical white-to-sky-blue gradient

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.pixeltrace.camera.pinhole import setup_camera
    >>> from src.pixeltrace.core.integrator import render_frame
    >>>
    >>> camera = setup_camera()
    >>> buffer = np.zeros(camera.image_width * camera.image_height * 4, dtype=np.uint8)
    >>> render_frame(camera, buffer)
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.pixeltrace.camera.pinhole import Camera, get_ray
from src.pixeltrace.core.ray import Ray, make_ray, ray_at, unit_vector, vec3
from src.pixeltrace.geometry.sphere import SPHERE_CENTER, SPHERE_RADIUS, hit_sphere

logger = logging.getLogger(__name__)

# Encoded pixel: R, G, B, A
rgba8 = ti.types.vector(4, ti.u8)

# Bytes per encoded pixel
CHANNELS = 4

# =============================================================================
# Shading Constants
# =============================================================================

WHITE = vec3(1.0, 1.0, 1.0)
SKY_BLUE = vec3(0.5, 0.7, 1.0)

# Color encoding: floor(c * 256) saturated to [0, 255]
COLOR_SCALE = 256.0
MAX_CHANNEL_VALUE = 255.0
ALPHA_OPAQUE = 255


# =============================================================================
# Shading
# =============================================================================


@ti.func
def ray_color(ray: Ray) -> vec3:
    """Compute the color seen along a ray.

    If the ray hits the scene sphere in front of its origin (t > 0), the
    unit outward normal n at the hit point is visualized as 0.5 * (n + 1).
    Otherwise the ray sees the background: with t = 0.5 * (unit_dir.y + 1),
    the color is (1 - t) * white + t * sky blue.

    Args:
        ray: The ray to shade; its direction must be non-zero.

    Returns:
        The color (RGB), nominally in [0, 1].
    """
    record = hit_sphere(SPHERE_CENTER, SPHERE_RADIUS, ray)

    color = vec3(0.0, 0.0, 0.0)
    if record.hit == 1 and record.t > 0.0:
        normal = unit_vector(ray_at(ray, record.t) - SPHERE_CENTER)
        color = 0.5 * (normal + WHITE)
    else:
        unit_direction = unit_vector(ray.direction)
        t = 0.5 * (unit_direction.y + 1.0)
        color = (1.0 - t) * WHITE + t * SKY_BLUE

    return color


@ti.func
def write_color(color: vec3) -> rgba8:
    """Encode a color as four bytes.

    Each RGB channel is floor(component * 256) saturated to [0, 255], so 1.0
    encodes as 255 and negative components as 0. Alpha is always 255.

    Args:
        color: The color to encode, nominally in [0, 1).

    Returns:
        The encoded pixel (R, G, B, A) as u8.
    """
    scaled = tm.clamp(ti.floor(color * COLOR_SCALE), 0.0, MAX_CHANNEL_VALUE)
    return rgba8(
        ti.cast(scaled.x, ti.u8),
        ti.cast(scaled.y, ti.u8),
        ti.cast(scaled.z, ti.u8),
        ALPHA_OPAQUE,
    )


@ti.func
def shade_pixel(
    index: ti.i32,
    width: ti.i32,
    height: ti.i32,
    row_anchor: ti.i32,
    origin: vec3,
    lower_left: vec3,
    horizontal: vec3,
    vertical: vec3,
) -> rgba8:
    """Shade and encode the pixel at a row-major buffer index.

    The column is index % width. The row value counts down from row_anchor,
    so with row_anchor = height - 1 the first buffer row is the top of the
    viewport (v = 1).
    """
    x = index % width
    y = row_anchor - index // width

    u = ti.cast(x, ti.f32) / ti.cast(width - 1, ti.f32)
    v = ti.cast(y, ti.f32) / ti.cast(height - 1, ti.f32)

    ray = get_ray(u, v, origin, lower_left, horizontal, vertical)
    return write_color(ray_color(ray))


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame_parallel(
    buffer: ti.types.ndarray(dtype=ti.u8, ndim=1),
    width: ti.i32,
    height: ti.i32,
    row_anchor: ti.i32,
    origin: vec3,
    lower_left: vec3,
    horizontal: vec3,
    vertical: vec3,
):
    """Fill the frame buffer, one parallel iteration per pixel."""
    for i in range(width * height):
        pixel = shade_pixel(
            i, width, height, row_anchor, origin, lower_left, horizontal, vertical
        )
        for c in ti.static(range(CHANNELS)):
            buffer[i * CHANNELS + c] = pixel[c]


@ti.kernel
def _render_frame_serial(
    buffer: ti.types.ndarray(dtype=ti.u8, ndim=1),
    width: ti.i32,
    height: ti.i32,
    row_anchor: ti.i32,
    origin: vec3,
    lower_left: vec3,
    horizontal: vec3,
    vertical: vec3,
):
    """Fill the frame buffer in pixel order on a single thread."""
    ti.loop_config(serialize=True)
    for i in range(width * height):
        pixel = shade_pixel(
            i, width, height, row_anchor, origin, lower_left, horizontal, vertical
        )
        for c in ti.static(range(CHANNELS)):
            buffer[i * CHANNELS + c] = pixel[c]


@ti.kernel
def _trace_single_ray(origin: vec3, direction: vec3) -> vec3:
    """Shade a single ray. Used for testing and debugging."""
    return ray_color(make_ray(origin, direction))


@ti.kernel
def _encode_single_color(color: vec3) -> ti.types.vector(4, ti.i32):
    """Encode a single color. Used for testing and debugging."""
    return ti.cast(write_color(color), ti.i32)


# =============================================================================
# Public Rendering API
# =============================================================================


def frame_buffer_size(camera: Camera) -> int:
    """Number of bytes a frame buffer for this camera must hold."""
    return camera.image_width * camera.image_height * CHANNELS


def _as_byte_array(buffer: npt.NDArray[np.uint8] | bytearray | memoryview) -> npt.NDArray[np.uint8]:
    """View a writable byte buffer as a flat uint8 array without copying."""
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise ValueError(f"Frame buffer dtype must be uint8, got {buffer.dtype}")
        if not buffer.flags.c_contiguous or not buffer.flags.writeable:
            raise ValueError("Frame buffer must be C-contiguous and writable")
        return buffer.reshape(-1)

    view = memoryview(buffer)
    if view.readonly:
        raise ValueError("Frame buffer must be writable")
    return np.frombuffer(view, dtype=np.uint8)


def render_frame(
    camera: Camera,
    buffer: npt.NDArray[np.uint8] | bytearray | memoryview,
    *,
    parallel: bool = True,
) -> None:
    """Render one frame into an RGBA byte buffer.

    The camera is snapshotted once at the start of the pass, so input
    applied concurrently takes effect on the next frame. Rendering the same
    camera state twice produces identical bytes, and the parallel and
    serialized schedules produce identical bytes.

    Args:
        camera: Camera state to render from.
        buffer: Writable buffer of image_width * image_height * 4 bytes,
            filled in row-major order (first row = top of the image).
        parallel: Run the pixel loop in parallel (default) or serialized.

    Raises:
        ValueError: If the buffer has the wrong length or element type, or
            is not writable.
    """
    snapshot = camera.snapshot()
    pixels = _as_byte_array(buffer)

    expected = snapshot.image_width * snapshot.image_height * CHANNELS
    if pixels.shape[0] != expected:
        raise ValueError(
            f"Frame buffer has {pixels.shape[0]} bytes, expected {expected} "
            f"({snapshot.image_width}x{snapshot.image_height}x{CHANNELS})"
        )

    kernel = _render_frame_parallel if parallel else _render_frame_serial
    kernel(
        pixels,
        snapshot.image_width,
        snapshot.image_height,
        snapshot.row_anchor,
        vec3(*snapshot.origin),
        vec3(*snapshot.lower_left_corner),
        vec3(*snapshot.horizontal),
        vec3(*snapshot.vertical),
    )
    logger.debug(
        "Rendered %dx%d frame from origin %s (parallel=%s)",
        snapshot.image_width,
        snapshot.image_height,
        snapshot.origin,
        parallel,
    )


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
) -> tuple[float, float, float]:
    """Shade a single ray from Python.

    This is a Python-callable function for testing. For whole frames use
    render_frame(), which processes all pixels in one kernel launch.

    Args:
        origin: Ray origin.
        direction: Ray direction (non-zero).

    Returns:
        Tuple of (R, G, B) color values.
    """
    color = _trace_single_ray(vec3(*origin), vec3(*direction))
    return (float(color[0]), float(color[1]), float(color[2]))


def encode_color(color: tuple[float, float, float]) -> tuple[int, int, int, int]:
    """Encode a single color from Python, exactly as the frame kernels do.

    Args:
        color: The (R, G, B) color to encode.

    Returns:
        Tuple of (R, G, B, A) byte values.
    """
    pixel = _encode_single_color(vec3(*color))
    return (int(pixel[0]), int(pixel[1]), int(pixel[2]), int(pixel[3]))
