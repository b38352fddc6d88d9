"""Interactive preview window using Taichi GGUI.

This module shows frames from a FrameRenderer in a ti.ui.Window and lets the
keyboard move the camera.

Features:
    - Window sized to the camera image
    - Escape or closing the window exits the loop
    - Holding W / R moves the camera origin up / down
    - Redraw on demand: a frame is rendered only when the camera changed
      (and once at startup); otherwise the last frame is shown again

Resizing the window does not change the render resolution. The frame keeps
the camera's image_width x image_height and the canvas stretches it to fill
the window.

Example:
    >>> from src.pixeltrace.camera.pinhole import setup_camera
    >>> from src.pixeltrace.core.frame import FrameRenderer
    >>> from src.pixeltrace.preview.interactive import InteractivePreview
    >>>
    >>> preview = InteractivePreview(FrameRenderer(setup_camera()))
    >>> preview.run()  # Blocks until the window is closed
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from src.pixeltrace.camera.pinhole import KEY_BINDINGS, apply_input

if TYPE_CHECKING:
    import numpy.typing as npt

    from src.pixeltrace.core.frame import FrameRenderer

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Hello Pixels"


class InteractivePreview:
    """Interactive preview window using Taichi GGUI.

    This class wraps ti.ui.Window around a FrameRenderer. It manages the
    window, canvas and display buffer, polls the keyboard and redraws the
    frame when the camera moves.

    Attributes:
        renderer: The FrameRenderer producing frames.
        width: Window width in pixels.
        height: Window height in pixels.
        display_image: Taichi field storing the display image (RGB float).
    """

    def __init__(
        self,
        renderer: FrameRenderer,
        *,
        title: str = DEFAULT_TITLE,
    ) -> None:
        """Initialize the interactive preview.

        Args:
            renderer: The FrameRenderer to display.
            title: Window title (default: "Hello Pixels").

        Note:
            Taichi must already be initialized. The window is created lazily
            on first use so headless checks can run first.
        """
        self.renderer = renderer
        self.width = renderer.width
        self.height = renderer.height
        self._title = title
        self._is_initialized = False
        self._needs_redraw = True

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        # Shape is (width, height) for Taichi field, RGB values stored as vec3
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(self.width, self.height)
        )

    def _initialize_window(self) -> None:
        """Initialize the Taichi GGUI window and canvas."""
        if self._is_initialized:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()
        self._is_initialized = True
        logger.info("Opened %dx%d preview window", self.width, self.height)

    @property
    def window(self) -> ti.ui.Window:
        """Get the Taichi GGUI window, initializing if needed."""
        if self._window is None:
            self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Get the canvas for rendering."""
        if self._canvas is None:
            self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    @property
    def needs_redraw(self) -> bool:
        """Whether the next step() will render a new frame."""
        return self._needs_redraw

    def request_redraw(self) -> None:
        """Render a new frame on the next step()."""
        self._needs_redraw = True

    def update_image(self, image: npt.NDArray[np.float32]) -> None:
        """Update the display image from a numpy array.

        Args:
            image: NumPy array of shape (height, width, 3) with values in [0, 1],
                top row first.

        Raises:
            ValueError: If image shape doesn't match (height, width, 3).
        """
        expected_shape = (self.height, self.width, 3)
        if image.shape != expected_shape:
            raise ValueError(
                f"Image shape {image.shape} doesn't match expected {expected_shape}"
            )

        # Taichi fields use (x, y) indexing which corresponds to (width, height)
        # NumPy images are (height, width, channels), so we need to transpose
        # Also flip Y axis as Taichi has origin at bottom-left
        image_transposed = np.ascontiguousarray(
            np.transpose(np.flipud(image), (1, 0, 2))
        )
        self.display_image.from_numpy(image_transposed)

    def step(self, held_keys: Iterable[str] = ()) -> bool:
        """Apply held movement keys and redraw if anything changed.

        Input is applied before the render pass starts, never during it.

        Args:
            held_keys: Names of the keys currently held.

        Returns:
            True if a new frame was rendered.
        """
        moving = {key.lower() for key in held_keys} & KEY_BINDINGS.keys()
        if moving:
            apply_input(self.renderer.camera, moving)
            self._needs_redraw = True

        if not self._needs_redraw:
            return False

        self.renderer.render()
        self.update_image(self.renderer.get_image_numpy())
        self._needs_redraw = False
        return True

    def held_keys(self) -> set[str]:
        """Get the movement keys currently held in the window."""
        return {key for key in KEY_BINDINGS if self.window.is_pressed(key)}

    def _process_events(self) -> None:
        """Handle key press events (Escape closes the window)."""
        while self.window.get_event(ti.ui.PRESS):
            if self.window.event.key == ti.ui.ESCAPE:
                logger.info("Escape pressed, closing preview window")
                self.window.running = False

    def is_running(self) -> bool:
        """Check if the window is still open.

        Returns:
            True if the window is running, False if it should close.
        """
        return self.window.running

    def show_frame(self) -> None:
        """Present the current display image."""
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run(self) -> None:
        """Run the main window event loop.

        This blocks until the window is closed or Escape is pressed. Each
        iteration polls events and held keys, redraws if the camera moved,
        and presents the display image.
        """
        self._initialize_window()

        while self.is_running():
            self._process_events()
            if not self.is_running():
                break
            self.step(self.held_keys())
            self.show_frame()

    def close(self) -> None:
        """Close the preview window.

        After calling this, the window cannot be reopened.
        """
        if self._window is not None:
            # Taichi windows close automatically when the reference is dropped
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Check whether a GGUI window can be opened.

        An X11 or Wayland display is enough anywhere. Without one, only a
        local macOS session or Windows can show a window.
        """
        if os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"):
            return True
        if sys.platform == "darwin":
            return "SSH_CONNECTION" not in os.environ
        return sys.platform == "win32"
