"""Frame renderer that owns an RGBA buffer and redraws it on demand.

This module provides a convenient wrapper around render_frame():
- A preallocated RGBA8 buffer sized to the camera image
- Redraw on request, with a running frame counter
- Conversion of the last frame to NumPy images for display

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.pixeltrace.camera.pinhole import apply_input, setup_camera
    >>> from src.pixeltrace.core.frame import FrameRenderer
    >>>
    >>> renderer = FrameRenderer(setup_camera())
    >>> renderer.render()
    >>> apply_input(renderer.camera, {"w"})
    >>> renderer.render()  # Redraw from the moved origin
    >>> image = renderer.get_image_numpy()
"""

import numpy as np
import numpy.typing as npt

from src.pixeltrace.camera.pinhole import Camera
from src.pixeltrace.core.integrator import CHANNELS, frame_buffer_size, render_frame


class FrameRenderer:
    """Redraws a camera's view into an owned RGBA8 frame buffer.

    Attributes:
        camera: The camera this renderer draws from. Input handlers mutate
            its origin between frames.
    """

    def __init__(self, camera: Camera, *, parallel: bool = True) -> None:
        """Initialize the frame renderer.

        Args:
            camera: Camera state to render from.
            parallel: Run the per-pixel loop in parallel (default) or serialized.
        """
        self.camera = camera
        self._parallel = parallel
        self._buffer: npt.NDArray[np.uint8] = np.zeros(frame_buffer_size(camera), dtype=np.uint8)
        self._frame_count = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.camera.image_width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.camera.image_height

    @property
    def frame_count(self) -> int:
        """Get the number of frames rendered so far."""
        return self._frame_count

    @property
    def buffer(self) -> npt.NDArray[np.uint8]:
        """Get the flat RGBA8 frame buffer (row-major, top row first)."""
        return self._buffer

    def render(self) -> npt.NDArray[np.uint8]:
        """Render a full frame into the buffer.

        Returns:
            The frame buffer.
        """
        render_frame(self.camera, self._buffer, parallel=self._parallel)
        self._frame_count += 1
        return self._buffer

    def get_image_rgba(self) -> npt.NDArray[np.uint8]:
        """Get the last frame as an (height, width, 4) uint8 view of the buffer."""
        return self._buffer.reshape(self.height, self.width, CHANNELS)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the last frame as an RGB float image.

        Returns:
            NumPy array of shape (height, width, 3) with values in [0, 1].
        """
        from src.pixeltrace.preview.display import rgba_to_image

        return rgba_to_image(self._buffer, self.width, self.height)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"FrameRenderer(width={self.width}, height={self.height}, "
            f"frames={self.frame_count})"
        )
