"""Preview module for presenting rendered frames.

Components:
    display: Frame buffer conversion and Matplotlib static preview
    interactive: Taichi GGUI window with keyboard camera control

Example:
    >>> from src.pixeltrace.camera.pinhole import setup_camera
    >>> from src.pixeltrace.core.frame import FrameRenderer
    >>> from src.pixeltrace.preview import InteractivePreview
    >>>
    >>> preview = InteractivePreview(FrameRenderer(setup_camera()))
    >>> preview.run()
"""

from src.pixeltrace.preview.display import rgba_to_image, show_preview
from src.pixeltrace.preview.interactive import InteractivePreview

__all__ = [
    "InteractivePreview",
    "rgba_to_image",
    "show_preview",
]
