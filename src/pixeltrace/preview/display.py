"""Matplotlib-based preview display for rendered frames.

This module converts RGBA8 frame buffers to float images and shows a static
preview of the last frame, which is useful where no GGUI window can be
opened.

Example:
    >>> from src.pixeltrace.camera.pinhole import setup_camera
    >>> from src.pixeltrace.core.frame import FrameRenderer
    >>> from src.pixeltrace.preview.display import show_preview
    >>>
    >>> renderer = FrameRenderer(setup_camera())
    >>> renderer.render()
    >>> show_preview(renderer)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from src.pixeltrace.core.frame import FrameRenderer


def rgba_to_image(
    buffer: npt.NDArray[np.uint8],
    width: int,
    height: int,
) -> npt.NDArray[np.float32]:
    """Convert a flat RGBA8 frame buffer to an RGB float image.

    The alpha channel is dropped (frames are always opaque).

    Args:
        buffer: Flat uint8 buffer of width * height * 4 bytes, top row first.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        NumPy array of shape (height, width, 3) with values in [0, 1].

    Raises:
        ValueError: If the buffer size doesn't match width * height * 4.
    """
    expected = width * height * 4
    if buffer.size != expected:
        raise ValueError(f"Buffer has {buffer.size} bytes, expected {expected}")

    rgba = buffer.reshape(height, width, 4)
    return (rgba[:, :, :3].astype(np.float32) / 255.0).astype(np.float32)


def show_preview(
    renderer: FrameRenderer,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 4.5),
    block: bool = True,
) -> None:
    """Display the last rendered frame as a Matplotlib figure.

    Args:
        renderer: The FrameRenderer whose buffer to display.
        title: Custom title (default shows camera origin and frame count).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    # Nearest keeps the encoded bytes visible as-is
    ax.imshow(renderer.get_image_rgba(), interpolation="nearest")
    ax.axis("off")

    if title is None:
        x, y, z = renderer.camera.origin
        title = f"Frame {renderer.frame_count} - origin ({x:.2f}, {y:.2f}, {z:.2f})"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
